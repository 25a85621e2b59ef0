"""Database models for finmood."""
from datetime import datetime
from typing import List, Optional
from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from finmood.analytics.models import MoodRecord, TransactionRecord


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Account(Base):
    """A user's account; transactions are owned through it."""
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, index=True)
    name: Mapped[str] = mapped_column(String(100), default="Checking")

    transactions: Mapped[List["Transaction"]] = relationship(back_populates="account")


class Transaction(Base):
    """Transaction table. Read-only to the analytics core."""
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id", ondelete="CASCADE"), index=True)
    amount: Mapped[float] = mapped_column(Float)  # positive = income, negative = expense
    category: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

    account: Mapped[Account] = relationship(back_populates="transactions")

    def to_record(self) -> TransactionRecord:
        return TransactionRecord(
            id=self.id,
            amount=self.amount,
            date=self.date,
            category=self.category,
            account_id=self.account_id,
            user_id=self.account.user_id if self.account is not None else None,
            description=self.description,
        )


class TransactionMood(Base):
    """Emotional annotation of one transaction by its owner."""
    __tablename__ = "transaction_moods"
    __table_args__ = (
        UniqueConstraint("transaction_id", "user_id", name="uq_transaction_moods_transaction_user"),
        Index("ix_transaction_moods_user_mood", "user_id", "mood"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    transaction_id: Mapped[int] = mapped_column(ForeignKey("transactions.id", ondelete="CASCADE"))
    user_id: Mapped[int] = mapped_column(Integer)
    mood: Mapped[str] = mapped_column(String(20))
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    intensity: Mapped[int] = mapped_column(Integer, default=5)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    transaction: Mapped[Transaction] = relationship()

    def to_record(self, include_transaction: bool = True) -> MoodRecord:
        tx = self.transaction if include_transaction else None
        return MoodRecord(
            id=self.id,
            transaction_id=self.transaction_id,
            user_id=self.user_id,
            mood=self.mood,
            intensity=self.intensity,
            notes=self.notes,
            created_at=self.created_at,
            updated_at=self.updated_at,
            transaction=tx.to_record() if tx is not None else None,
        )
