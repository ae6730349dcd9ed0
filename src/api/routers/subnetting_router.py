"""
Subnetting router for IP addressing exercises.

Endpoints for:
- Generating basic, VLSM, wildcard, network calculation,
  summarization and IPv6 questions
- Checking a full submission field by field
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, HTTPException
from loguru import logger
from pydantic import BaseModel, Field

from src.delivery.phrases import get_phrase_table
from src.delivery.renderer import render
from src.generation.errors import GenerationError, IncompleteAnswerError, InvalidParameterError
from src.generation.models import AnswerField
from src.generation.subnet_generator import generate_subnetting_question
from src.grading.answer_checker import check_submission

router = APIRouter()


# ========================================
# Request/Response Models
# ========================================


class AnswerFieldModel(BaseModel):
    """One answer slot of a question."""

    id: str
    label: str
    answer: str
    alternate_answers: List[str] = Field(default_factory=list)

    def to_answer_field(self) -> AnswerField:
        return AnswerField(self.id, self.label, self.answer, tuple(self.alternate_answers))


class SubnettingGenerateRequest(BaseModel):
    """Request model for generating a subnetting question."""

    type: str = Field(
        ...,
        description="Subnet type: basic, vlsm, wildcard, network, subnets-count, hosts-per-subnet, summarization, ipv6",
    )
    difficulty: str = Field(..., description="Difficulty: easy, medium, hard")
    locale: Optional[str] = Field(None, description="Locale for prompt and explanation text (en, nl)")
    format: Literal["text", "html"] = Field("html", description="Explanation rendering")


class SubnettingGenerateResponse(BaseModel):
    """Response model for a subnetting question."""

    question_text: str
    answer_fields: List[AnswerFieldModel]
    explanation: str
    steps: List[Dict[str, Any]]


class SubnettingCheckRequest(BaseModel):
    """Request model for checking a submission."""

    question_text: str = Field(..., description="Prompt text the answers belong to")
    answer_fields: List[AnswerFieldModel] = Field(..., min_length=1)
    answers: Dict[str, str] = Field(..., description="User answers keyed by field id")


class SubnettingCheckResponse(BaseModel):
    correct: bool
    fields: Dict[str, bool]


# ========================================
# Endpoints
# ========================================


@router.post(
    "/generate",
    response_model=SubnettingGenerateResponse,
    summary="Generate subnetting question",
)
def generate(request: SubnettingGenerateRequest) -> SubnettingGenerateResponse:
    """Generate one subnetting exercise with its answer fields and explanation."""
    try:
        phrases = get_phrase_table(request.locale)
        question = generate_subnetting_question(request.type, request.difficulty, phrases=phrases)
    except InvalidParameterError as exc:
        logger.warning(f"Rejected subnetting question request: {exc}")
        raise HTTPException(status_code=400, detail=str(exc))
    except GenerationError as exc:
        logger.exception("Failed to generate subnetting question")
        raise HTTPException(status_code=500, detail=str(exc))

    return SubnettingGenerateResponse(
        question_text=question.question_text,
        answer_fields=[AnswerFieldModel(**answer_field.to_dict()) for answer_field in question.answer_fields],
        explanation=render(question.explanation, phrases, request.format),
        steps=[step.to_dict() for step in question.explanation],
    )


@router.post(
    "/check",
    response_model=SubnettingCheckResponse,
    summary="Check subnetting answers",
)
def check(request: SubnettingCheckRequest) -> SubnettingCheckResponse:
    """
    Check every field of a submission.

    The submission is correct only when all fields are; a missing or
    blank answer is rejected with 400 before any field is judged.
    """
    fields = [model.to_answer_field() for model in request.answer_fields]
    try:
        result = check_submission(request.question_text, fields, request.answers)
    except IncompleteAnswerError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return SubnettingCheckResponse(correct=result.correct, fields=result.fields)
