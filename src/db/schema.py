"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGameRecord(Base):
    __tablename__ = "game_records"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    first_side: Mapped[str]
    ai_side: Mapped[Optional[str]]
    winner: Mapped[Optional[str]]
    rounds: Mapped[int]
    moves: Mapped[list[str]] = mapped_column(JSON, default=list)
    final_board: Mapped[list[str]] = mapped_column(JSON, default=list)
    commentary: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
