"""
Binary router for number-base conversion exercises.

Endpoints for:
- Generating a conversion question (binary / hex / decimal)
- Checking an answer against the canonical value
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, HTTPException
from loguru import logger
from pydantic import BaseModel, Field

from src.delivery.phrases import get_phrase_table
from src.delivery.renderer import render
from src.generation.binary_generator import generate_binary_question
from src.generation.errors import GenerationError, InvalidParameterError
from src.grading.answer_checker import check_binary_answer

router = APIRouter()


# ========================================
# Request/Response Models
# ========================================


class BinaryGenerateRequest(BaseModel):
    """Request model for generating a conversion question."""

    type: str = Field(..., description="Conversion type: bin2dec, bin2hex, hex2bin, dec2bin, dec2hex, hex2dec")
    difficulty: str = Field(..., description="Difficulty: easy, medium, hard")
    locale: Optional[str] = Field(None, description="Locale for prompt and explanation text (en, nl)")
    format: Literal["text", "html"] = Field("html", description="Explanation rendering")


class BinaryGenerateResponse(BaseModel):
    """Response model for a conversion question."""

    question: str
    value: str
    answer: str
    explanation: str
    steps: List[Dict[str, Any]]


class BinaryCheckRequest(BaseModel):
    """Request model for checking a conversion answer."""

    answer: str = Field(..., description="Canonical answer returned by /generate")
    user_answer: str = Field(..., description="Answer entered by the user")


class BinaryCheckResponse(BaseModel):
    correct: bool


# ========================================
# Endpoints
# ========================================


@router.post(
    "/generate",
    response_model=BinaryGenerateResponse,
    summary="Generate conversion question",
)
def generate(request: BinaryGenerateRequest) -> BinaryGenerateResponse:
    """Generate a binary, hexadecimal or decimal conversion exercise."""
    try:
        phrases = get_phrase_table(request.locale)
        question = generate_binary_question(request.type, request.difficulty, phrases=phrases)
    except InvalidParameterError as exc:
        logger.warning(f"Rejected binary question request: {exc}")
        raise HTTPException(status_code=400, detail=str(exc))
    except GenerationError as exc:
        logger.exception("Failed to generate binary question")
        raise HTTPException(status_code=500, detail=str(exc))

    return BinaryGenerateResponse(
        question=question.question,
        value=question.value,
        answer=question.answer,
        explanation=render(question.explanation, phrases, request.format),
        steps=[step.to_dict() for step in question.explanation],
    )


@router.post(
    "/check",
    response_model=BinaryCheckResponse,
    summary="Check conversion answer",
)
def check(request: BinaryCheckRequest) -> BinaryCheckResponse:
    """Compare the user's answer with the canonical one (whitespace and case ignored)."""
    return BinaryCheckResponse(correct=check_binary_answer(request.user_answer, request.answer))
