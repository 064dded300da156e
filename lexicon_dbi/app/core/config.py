from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str
    # Override the credentials embedded in DATABASE_URL when set
    DATABASE_USER: str | None = None
    DATABASE_PASSWORD: str | None = None
    # Passed straight to the DBAPI connect() call
    DATABASE_CONNECT_ARGS: dict[str, Any] = {}

    # Lexicon loading
    LEXICON_LANGUAGES: list[str] = ["en"]
    # "*" loads every lexicon of a language; the first entry receives repairs
    LEXICON_NAMES: list[str] = ["*"]
    LEXICON_DEFAULT_LANG: str = "en"

    # Miss repair: write "? <key>" rows for keys that are not translated yet
    LEXICON_FAIL_WITH: bool = True
    LEXICON_REPAIR_ASYNC: bool = False

    # Redis / Celery
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/1"

    LOG_LEVEL: str = "INFO"


settings = Settings()  # type: ignore[call-arg]
