"""
Practice-session history and mastery summaries.

Mastery for an area is the rounded percentage of correct answers over
all questions answered in that area:
- binary: every session with topic 'binary'
- subnetting: topic 'subnet' except VLSM drills
- vlsm: topic 'subnet' with subtype 'vlsm'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from config import get_settings
from src.db.models import PracticeSession

TOPICS = ("binary", "subnet")
VLSM_SUBTYPE = "vlsm"


def mastery_percentage(correct: int, total: int) -> int:
    """Percentage of correct answers, rounded half up; 0 when nothing was answered."""
    if total <= 0:
        return 0
    return (200 * correct + total) // (2 * total)


@dataclass
class AreaProgress:
    """Aggregated results for one practice area."""

    correct: int = 0
    total: int = 0

    @property
    def mastery(self) -> int:
        return mastery_percentage(self.correct, self.total)

    def add(self, practice: PracticeSession) -> None:
        self.correct += practice.score
        self.total += practice.total_questions

    def to_dict(self) -> dict[str, int]:
        return {"mastery": self.mastery, "correct": self.correct, "total": self.total}


@dataclass
class ProgressSummary:
    binary: AreaProgress = field(default_factory=AreaProgress)
    subnetting: AreaProgress = field(default_factory=AreaProgress)
    vlsm: AreaProgress = field(default_factory=AreaProgress)
    recent_activity: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "binary_progress": self.binary.to_dict(),
            "subnetting_progress": self.subnetting.to_dict(),
            "vlsm_progress": self.vlsm.to_dict(),
            "recent_activity": self.recent_activity,
        }


def session_to_dict(practice: PracticeSession) -> dict[str, Any]:
    return {
        "id": practice.id,
        "user_id": practice.user_id,
        "topic": practice.topic,
        "subtype": practice.subtype,
        "score": practice.score,
        "total_questions": practice.total_questions,
        "difficulty": practice.difficulty,
        "time_spent_seconds": practice.time_spent_seconds,
        "timestamp": practice.timestamp,
    }


class PracticeSessionStore:
    """
    Repository for PracticeSession rows.

    Works on a caller-owned SQLAlchemy session; the caller commits
    (session_scope() in the CLI, the request handler in the API).
    """

    def __init__(self, session: Session):
        self.session = session

    def record(
        self,
        topic: str,
        subtype: str,
        score: int,
        total_questions: int,
        difficulty: str,
        time_spent_seconds: int = 0,
        user_id: int | None = None,
        timestamp: datetime | None = None,
    ) -> PracticeSession:
        """
        Add one completed exercise set.

        Raises:
            ValueError: If the topic is unknown or the score is out of range.
        """
        if topic not in TOPICS:
            raise ValueError(f"Unknown topic {topic!r}, expected one of {', '.join(TOPICS)}")
        if total_questions < 1 or not 0 <= score <= total_questions:
            raise ValueError(f"Score {score} out of range for {total_questions} questions")

        practice = PracticeSession(
            user_id=user_id,
            topic=topic,
            subtype=subtype,
            score=score,
            total_questions=total_questions,
            difficulty=difficulty,
            time_spent_seconds=max(0, time_spent_seconds),
        )
        if timestamp is not None:
            practice.timestamp = timestamp
        self.session.add(practice)
        self.session.flush()
        logger.info(f"Recorded {topic}/{subtype} session: {score}/{total_questions}")
        return practice

    def list_sessions(self, user_id: int | None = None, limit: int | None = None) -> list[PracticeSession]:
        """Sessions newest first, optionally for one user."""
        query = select(PracticeSession).order_by(PracticeSession.timestamp.desc(), PracticeSession.id.desc())
        if user_id is not None:
            query = query.where(PracticeSession.user_id == user_id)
        if limit is not None:
            query = query.limit(limit)
        return list(self.session.scalars(query))

    def progress(self, user_id: int | None = None, recent_limit: int | None = None) -> ProgressSummary:
        """Mastery per area plus the most recent sessions."""
        limit = recent_limit or get_settings().recent_activity_limit
        sessions = self.list_sessions(user_id=user_id)

        summary = ProgressSummary()
        for practice in sessions:
            if practice.topic == "binary":
                summary.binary.add(practice)
            elif practice.subtype == VLSM_SUBTYPE:
                summary.vlsm.add(practice)
            else:
                summary.subnetting.add(practice)

        summary.recent_activity = [session_to_dict(practice) for practice in sessions[:limit]]
        return summary
