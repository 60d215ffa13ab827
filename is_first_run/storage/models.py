from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.orm import Mapped, declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class FlagRecord(Base):
    """A single persisted tracker value, stored as JSON to keep its type"""

    __tablename__ = "first_run_flags"

    key: Mapped[str] = Column(String(64), primary_key=True)
    value: Mapped[Any] = Column(JSON, nullable=True)
    updated_at: Mapped[datetime] = Column(
        DateTime, default=func.now(), onupdate=func.now(), nullable=False,
    )

    def __repr__(self: FlagRecord) -> str:
        return f"<FlagRecord(key='{self.key}', value={self.value!r})>"
