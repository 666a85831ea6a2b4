"""SQLAlchemy models for quickledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Category(Base):
    """Per-user category (subject) model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    major_code = Column(String, nullable=False)
    major_name = Column(String, nullable=False)
    sub_code = Column(String, nullable=False)
    sub_name = Column(String, nullable=False)
    # Comma-separated synonym list
    synonyms = Column(String, nullable=False, default="")
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "major_code", "sub_code", name="uq_user_category_code"),
    )


class SequenceCounter(Base):
    """Per-day bookkeeping sequence counter."""

    __tablename__ = "sequence_counters"

    date_part = Column(String(8), primary_key=True)
    value = Column(Integer, nullable=False, default=0)


class Entry(Base):
    """Recorded quick entry. Rows are only ever inserted."""

    __tablename__ = "entries"

    id = Column(Integer, primary_key=True)
    entry_id = Column(String, nullable=False, unique=True)
    user_id = Column(String, nullable=False, index=True)
    date_part = Column(String(8), nullable=True, index=True)
    amount = Column(Integer, nullable=False)
    direction = Column(String, nullable=False)
    major_code = Column(String, nullable=False)
    sub_code = Column(String, nullable=False)
    sub_name = Column(String, nullable=False)
    payment_method = Column(String, nullable=False)
    remark = Column(String, nullable=False, default="")
    raw_text = Column(String, nullable=False)
    is_fallback_id = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Sessions are opened per call from worker threads
        connect_args = {"check_same_thread": False, "timeout": 30}
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
