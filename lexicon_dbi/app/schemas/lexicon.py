from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel


class LanguagesOut(BaseModel):
    languages: list[str]
    default_lang: str
    lexicons: list[str]


class LocalizedOut(BaseModel):
    language: str | None
    key: str
    text: str


class LexiconEntryOut(BaseModel):
    id: UUID
    lex: str
    lex_key: str
    lang: str
    lex_value: str

    class Config:
        from_attributes = True
