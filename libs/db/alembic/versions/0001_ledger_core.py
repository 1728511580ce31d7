# ruff: noqa: I001
"""Ledger core tables and seed accounts.

Revision ID: 0001_ledger_core
Revises: None
Create Date: 2026-02-24
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "0001_ledger_core"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # accounts
    op.create_table(
        "accounts",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("currency", sa.CHAR(3), nullable=False, server_default="PLN"),
    )

    # Seed one account per supported export dialect; the importer resolves
    # parsed rows against these names and never creates accounts itself.
    op.bulk_insert(
        sa.table(
            "accounts",
            sa.column("name", sa.String()),
            sa.column("currency", sa.CHAR(3)),
        ),
        [
            {"name": "alior", "currency": "PLN"},
            {"name": "pekao", "currency": "PLN"},
            {"name": "revolut", "currency": "PLN"},
        ],
    )

    # transactions
    op.create_table(
        "transactions",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("hash", sa.CHAR(64), nullable=False),
        sa.Column(
            "account_id",
            sa.BigInteger(),
            sa.ForeignKey("accounts.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("transaction_date", sa.Date(), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=True),
        sa.Column("counterparty", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("currency", sa.CHAR(3), nullable=False),
        sa.Column("category_source", sa.String(), nullable=True),
        sa.Column("bank_category", sa.Text(), nullable=True),
        sa.Column("bank_reference", sa.Text(), nullable=True),
        sa.Column("bank_type", sa.Text(), nullable=True),
        sa.Column("state", sa.String(), nullable=False, server_default="completed"),
        sa.Column("raw_data", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column(
            "imported_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.UniqueConstraint("hash", name="uq_transactions_hash"),
        sa.CheckConstraint(
            "state in ('completed','pending','reversed')",
            name="ck_transactions_state",
        ),
        sa.CheckConstraint(
            "category_source IS NULL OR category_source in ('bank','ai','manual')",
            name="ck_transactions_category_source",
        ),
    )
    op.create_index("ix_transactions_account_id", "transactions", ["account_id"])
    op.create_index("ix_transactions_transaction_date", "transactions", ["transaction_date"])

    # import_logs
    op.create_table(
        "import_logs",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("filename", sa.Text(), nullable=False),
        sa.Column(
            "account_id",
            sa.BigInteger(),
            sa.ForeignKey("accounts.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("total_rows", sa.Integer(), nullable=False),
        sa.Column("imported", sa.Integer(), nullable=False),
        sa.Column("skipped", sa.Integer(), nullable=False),
        sa.Column(
            "imported_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )


def downgrade() -> None:
    op.drop_table("import_logs")
    op.drop_index("ix_transactions_transaction_date", table_name="transactions")
    op.drop_index("ix_transactions_account_id", table_name="transactions")
    op.drop_table("transactions")
    op.drop_table("accounts")
