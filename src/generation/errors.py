"""
Errors raised by question generation and answer checking.

InvalidParameterError and IncompleteAnswerError are caller mistakes and
subclass ValueError; GenerationError is an internal failure.
"""

from __future__ import annotations


class InvalidParameterError(ValueError):
    """Unknown conversion type, subnet type, difficulty or locale."""

    def __init__(self, kind: str, value: object, allowed: list[str] | None = None):
        self.kind = kind
        self.value = value
        self.allowed = allowed or []
        message = f"Unknown {kind}: {value!r}"
        if self.allowed:
            message += f" (expected one of: {', '.join(self.allowed)})"
        super().__init__(message)


class IncompleteAnswerError(ValueError):
    """A submission is missing answers for one or more fields."""

    def __init__(self, missing_ids: list[str]):
        self.missing_ids = missing_ids
        super().__init__(f"Missing answers for: {', '.join(missing_ids)}")


class GenerationError(RuntimeError):
    """A generator could not produce a question within its sampling budget."""
