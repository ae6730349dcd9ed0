"""Answer equivalence checking for generated questions."""

from src.grading.answer_checker import (
    SubmissionResult,
    check_answer,
    check_binary_answer,
    check_submission,
    require_all_answers,
)

__all__ = [
    "SubmissionResult",
    "check_answer",
    "check_binary_answer",
    "check_submission",
    "require_all_answers",
]
