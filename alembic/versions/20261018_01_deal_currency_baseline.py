"""Deal and currency schema baseline

Revision ID: 20261018_01
Revises:
Create Date: 2026-10-18
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261018_01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_IDENTITY_TYPE = sa.BigInteger().with_variant(sa.Integer(), "sqlite")
# SQLite stores NUMERIC as a float, so amounts are kept as exact decimal text there.
_DEAL_AMOUNT_TYPE = sa.Numeric(24, 8).with_variant(sa.String(40), "sqlite")


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "currency",
        sa.Column("currency_id", _IDENTITY_TYPE, primary_key=True, autoincrement=True),
        sa.Column("currency_code", sa.String(3), nullable=False),
        sa.Column("currency_name", sa.Text(), nullable=True),
        sa.Column("currency_symbol", sa.Text(), nullable=True),
        sa.Column(
            "created_at_utc",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.UniqueConstraint("currency_code", name="uq_currency_currency_code"),
    )

    op.create_table(
        "deal",
        sa.Column("deal_id", _IDENTITY_TYPE, primary_key=True, autoincrement=True),
        sa.Column("deal_unique_id", sa.Text(), nullable=False),
        sa.Column("from_currency_id", _IDENTITY_TYPE, nullable=False),
        sa.Column("to_currency_id", _IDENTITY_TYPE, nullable=False),
        sa.Column("deal_timestamp", sa.DateTime(timezone=False), nullable=False),
        sa.Column("deal_amount", _DEAL_AMOUNT_TYPE, nullable=False),
        sa.Column(
            "created_at_utc",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.ForeignKeyConstraint(["from_currency_id"], ["currency.currency_id"], name="fk_deal_from_currency"),
        sa.ForeignKeyConstraint(["to_currency_id"], ["currency.currency_id"], name="fk_deal_to_currency"),
        sa.UniqueConstraint("deal_unique_id", name="uq_deal_deal_unique_id"),
        sa.CheckConstraint("deal_amount > 0", name="ck_deal_amount_positive"),
        sa.CheckConstraint("from_currency_id <> to_currency_id", name="ck_deal_distinct_currencies"),
    )
    op.create_index("ix_deal_from_currency_id", "deal", ["from_currency_id"])
    op.create_index("ix_deal_to_currency_id", "deal", ["to_currency_id"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_deal_to_currency_id", table_name="deal")
    op.drop_index("ix_deal_from_currency_id", table_name="deal")
    op.drop_table("deal")
    op.drop_table("currency")
