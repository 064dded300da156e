"""Create lexicon table.

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2026-10-18 09:00:00.000000+00:00
"""

from __future__ import annotations

from typing import Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "a1c2e3f4b5d6"
down_revision: Union[str, None] = None
branch_labels: Union[str, None] = None
depends_on: Union[str, None] = None


def upgrade() -> None:
    # No unique constraint on (lex, lex_key, lang): concurrent miss repairs
    # may insert the same placeholder twice and that is accepted.
    op.create_table(
        "lexicon",
        sa.Column("id", sa.Uuid(), nullable=False, primary_key=True),
        sa.Column("lex", sa.String(255), nullable=False),
        sa.Column("lex_key", sa.Text(), nullable=False),
        sa.Column("lang", sa.String(15), nullable=False),
        sa.Column("lex_value", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    # Matches the normalized comparison the loader and repair path use
    op.create_index(
        "ix_lexicon_norm_lang_lex",
        "lexicon",
        [sa.text("replace(lower(lang), '_', '-')"), "lex"],
    )
    op.create_index("ix_lexicon_lex_key_lang", "lexicon", ["lex", "lex_key", "lang"])


def downgrade() -> None:
    op.drop_index("ix_lexicon_lex_key_lang", table_name="lexicon")
    op.drop_index("ix_lexicon_norm_lang_lex", table_name="lexicon")
    op.drop_table("lexicon")
