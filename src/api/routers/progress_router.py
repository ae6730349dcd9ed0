"""
Progress router for practice history.

Endpoints for:
- Recording a completed practice session
- Mastery per area and recent activity
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from pydantic import BaseModel, Field, model_validator
from sqlalchemy.orm import Session

from src.db.database import get_session
from src.study.session_store import PracticeSessionStore, session_to_dict

router = APIRouter()


# ========================================
# Request/Response Models
# ========================================


class PracticeSessionCreateRequest(BaseModel):
    """Request model for recording a practice session."""

    user_id: Optional[int] = None
    topic: Literal["binary", "subnet"]
    subtype: str = Field(..., min_length=1, description="Conversion type or subnet type drilled")
    score: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=1)
    difficulty: Literal["easy", "medium", "hard"]
    time_spent_seconds: int = Field(0, ge=0)

    @model_validator(mode="after")
    def score_within_total(self) -> PracticeSessionCreateRequest:
        if self.score > self.total_questions:
            raise ValueError("score cannot exceed total_questions")
        return self


class PracticeSessionResponse(BaseModel):
    """Response model for a stored practice session."""

    id: int
    user_id: Optional[int]
    topic: str
    subtype: str
    score: int
    total_questions: int
    difficulty: str
    time_spent_seconds: int
    timestamp: datetime


class AreaProgressResponse(BaseModel):
    mastery: int
    correct: int
    total: int


class ProgressSummaryResponse(BaseModel):
    """Mastery per area plus the most recent sessions."""

    binary_progress: AreaProgressResponse
    subnetting_progress: AreaProgressResponse
    vlsm_progress: AreaProgressResponse
    recent_activity: List[PracticeSessionResponse]


# ========================================
# Endpoints
# ========================================


@router.post(
    "/practice-sessions",
    response_model=PracticeSessionResponse,
    status_code=201,
    summary="Record practice session",
)
def create_practice_session(
    request: PracticeSessionCreateRequest,
    db: Session = Depends(get_session),
) -> PracticeSessionResponse:
    """Store one completed exercise set."""
    store = PracticeSessionStore(db)
    try:
        practice = store.record(**request.model_dump())
        db.commit()
    except ValueError as exc:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        db.rollback()
        logger.exception("Failed to record practice session")
        raise HTTPException(status_code=500, detail=str(exc))

    return PracticeSessionResponse(**session_to_dict(practice))


@router.get(
    "/progress",
    response_model=ProgressSummaryResponse,
    summary="Progress summary",
)
def get_progress(
    user_id: Optional[int] = Query(None, description="Limit to one user"),
    db: Session = Depends(get_session),
) -> ProgressSummaryResponse:
    """Mastery percentages for binary, subnetting (without VLSM) and VLSM, plus recent sessions."""
    summary = PracticeSessionStore(db).progress(user_id=user_id)
    return ProgressSummaryResponse(**summary.to_dict())
