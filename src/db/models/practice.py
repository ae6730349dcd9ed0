"""
Practice Session Models.

One row per completed exercise set; progress summaries are computed
from these rows.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Index, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class PracticeSession(Base):
    """
    A finished set of questions on one topic.

    topic is 'binary' or 'subnet'; subtype is the conversion type or the
    subnet type that was drilled.
    """

    __tablename__ = "practice_sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(Integer, index=True)
    topic: Mapped[str] = mapped_column(Text, nullable=False)
    subtype: Mapped[str] = mapped_column(Text, nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    total_questions: Mapped[int] = mapped_column(Integer, nullable=False)
    difficulty: Mapped[str] = mapped_column(Text, nullable=False)
    time_spent_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    timestamp: Mapped[datetime] = mapped_column(default=func.now(), nullable=False)

    __table_args__ = (Index("idx_practice_sessions_topic", "topic", "subtype"),)

    def __repr__(self) -> str:
        return f"<PracticeSession {self.topic}/{self.subtype} {self.score}/{self.total_questions}>"
