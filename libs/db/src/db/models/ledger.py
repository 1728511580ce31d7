from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    CHAR,
    JSON,
    BigInteger,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# SQLite only auto-increments an ``INTEGER PRIMARY KEY`` (rowid alias).
_PK = BigInteger().with_variant(Integer(), "sqlite")


class Base(DeclarativeBase):
    pass


# ---------------------------
# Reference: accounts
# ---------------------------


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(_PK, primary_key=True, autoincrement=True)
    # Matches ``CanonicalTransaction.account_label`` emitted by the parsers
    # (e.g. "alior", "pekao", "revolut"). Accounts are provisioned out of band;
    # the importer never creates them.
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    currency: Mapped[str] = mapped_column(CHAR(3), nullable=False, server_default="PLN")


# ---------------------------
# Core: transactions
# ---------------------------


class LedgerTransaction(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(_PK, primary_key=True, autoincrement=True)
    # Content hash used as the sole dedup key. The unique constraint is what
    # makes concurrent imports of overlapping files safe: inserts go through
    # ``ON CONFLICT (hash) DO NOTHING``.
    hash: Mapped[str] = mapped_column(CHAR(64), nullable=False, unique=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    booking_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    counterparty: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(CHAR(3), nullable=False)
    # "bank" when the export carried its own category; left NULL otherwise so
    # the categorizer can pick up rows that still need one.
    category_source: Mapped[str | None] = mapped_column(String, nullable=True)
    bank_category: Mapped[str | None] = mapped_column(Text, nullable=True)
    bank_reference: Mapped[str | None] = mapped_column(Text, nullable=True)
    bank_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    state: Mapped[str] = mapped_column(String, nullable=False, server_default="completed")
    # Original row keyed by the bank's own header names, kept for audit.
    raw_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    imported_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint(
            "state in ('completed','pending','reversed')",
            name="ck_transactions_state",
        ),
        CheckConstraint(
            "category_source IS NULL OR category_source in ('bank','ai','manual')",
            name="ck_transactions_category_source",
        ),
    )


# ---------------------------
# Audit: import_logs
# ---------------------------


class ImportLog(Base):
    __tablename__ = "import_logs"

    id: Mapped[int] = mapped_column(_PK, primary_key=True, autoincrement=True)
    filename: Mapped[str] = mapped_column(Text, nullable=False)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False
    )
    total_rows: Mapped[int] = mapped_column(Integer, nullable=False)
    imported: Mapped[int] = mapped_column(Integer, nullable=False)
    skipped: Mapped[int] = mapped_column(Integer, nullable=False)
    imported_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )


__all__ = [
    "Base",
    "Account",
    "LedgerTransaction",
    "ImportLog",
]
