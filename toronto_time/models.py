# toronto_time/models.py
from __future__ import annotations
from datetime import datetime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import DateTime, Integer


class Base(DeclarativeBase):
    pass


class TimeLog(Base):
    __tablename__ = "time_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # naive UTC, whole seconds
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<TimeLog id={self.id} timestamp={self.timestamp}>"
