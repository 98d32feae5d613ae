"""SQLAlchemy models for cashwallet database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    Boolean,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Wallet account model."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    display_name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)


class Balance(Base):
    """Current balance per account.

    Not tied to the accounts table by foreign key: balances are created
    lazily for any account id the ledger credits.
    """

    __tablename__ = "balances"

    account_id = Column(String, primary_key=True)
    amount = Column(Numeric(14, 2), nullable=False)
    currency = Column(String(3), nullable=False)


class Transaction(Base):
    """Transaction log entry.

    ``seq`` is the insertion order; ``id`` is the public transaction identity.
    """

    __tablename__ = "transactions"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, nullable=False)
    account_id = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    kind = Column(String, nullable=False)
    description = Column(String, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    counterparty_account_id = Column(String, nullable=True)
    counterparty_name = Column(String, nullable=True)
    flagged = Column(Boolean, default=False, nullable=False)
    flag_reason = Column(String, nullable=True)

    __table_args__ = (Index("ix_transactions_account_seq", "account_id", "seq"),)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
