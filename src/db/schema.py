"""Database tables / schema"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    """A game is stored as the ordered list of moves (UCI) played from the starting position + the last evaluated state."""

    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    moves_uci: Mapped[list[str]] = mapped_column(JSON, default=list)
    status: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
