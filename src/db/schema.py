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


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    current_position: Mapped[str]
    history: Mapped[list[str]] = mapped_column(JSON, default=list)
    turns: Mapped[list[str]] = mapped_column(JSON, default=list)
    phase: Mapped[str]
    selected_source: Mapped[Optional[str]]
    selected_destination: Mapped[Optional[str]]
    status: Mapped[str]
    winner: Mapped[Optional[str]]
    white_squares: Mapped[Optional[int]]
    black_squares: Mapped[Optional[int]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
