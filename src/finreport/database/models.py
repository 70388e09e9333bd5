"""SQLAlchemy models for finreport database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Chart of accounts model."""

    __tablename__ = "chart_of_accounts"

    id = Column(Integer, primary_key=True)
    account_code = Column(String, unique=True, nullable=False)
    account_name = Column(String, nullable=False)
    account_type = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    journal_entries = relationship("JournalEntry", back_populates="account")


class JournalEntry(Base):
    """Journal entry model. Rows are appended, never updated."""

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("chart_of_accounts.id"), nullable=False)
    transaction_date = Column(Date, nullable=False)
    debit = Column(Numeric(18, 2), nullable=True)
    credit = Column(Numeric(18, 2), nullable=True)
    description = Column(String, nullable=True)
    reference_id = Column(String, nullable=True)
    reference_type = Column(String, nullable=True)
    created_by = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        Index("ix_journal_entries_account_date", "account_id", "transaction_date"),
    )

    # Relationships
    account = relationship("Account", back_populates="journal_entries")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
