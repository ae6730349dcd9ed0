"""
Question models shared by the generators, the checker and the delivery layer.

Everything here is locale-neutral data: prompt and label text are filled
in by the generators from a phrase table, and explanations are kept as
structured steps until the renderer turns them into text or HTML.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from src.generation.errors import InvalidParameterError

E = TypeVar("E", bound=Enum)


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ConversionType(str, Enum):
    BIN2DEC = "bin2dec"
    BIN2HEX = "bin2hex"
    HEX2BIN = "hex2bin"
    DEC2BIN = "dec2bin"
    DEC2HEX = "dec2hex"
    HEX2DEC = "hex2dec"


class SubnetType(str, Enum):
    BASIC = "basic"
    VLSM = "vlsm"
    WILDCARD = "wildcard"
    NETWORK = "network"
    SUBNETS_COUNT = "subnets-count"
    HOSTS_PER_SUBNET = "hosts-per-subnet"
    SUMMARIZATION = "summarization"
    IPV6 = "ipv6"


class NetworkMode(str, Enum):
    """Sub-modes of the network calculation generator."""

    REQUIRED_PREFIX = "required-prefix"
    REQUIRED_MASK = "required-mask"
    SUMMARIZATION = "summarization"
    HOST_COUNT = "host-count"
    SUBNET_COUNT = "subnet-count"
    FIXED_HOSTS = "fixed-hosts"


def parse_choice(enum_cls: type[E], value: str | E, kind: str) -> E:
    """
    Coerce a raw string into an enum member.

    Raises:
        InvalidParameterError: If the value is not one of the enum's values.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        raise InvalidParameterError(kind, value, [member.value for member in enum_cls]) from None


@dataclass(frozen=True)
class ExplanationStep:
    """One step of a derivation: an operation applied to named operands."""

    operation: str
    operands: dict[str, Any] = field(default_factory=dict)
    result: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"operation": self.operation, "operands": dict(self.operands), "result": self.result}


@dataclass(frozen=True)
class AnswerField:
    """An answer slot; its id decides how user input is compared."""

    id: str
    label: str
    answer: str
    alternate_answers: tuple[str, ...] = ()

    @property
    def accepted_answers(self) -> tuple[str, ...]:
        return (self.answer, *self.alternate_answers)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "answer": self.answer,
            "alternate_answers": list(self.alternate_answers),
        }


@dataclass
class Question:
    """A generated subnetting exercise."""

    question_text: str
    answer_fields: tuple[AnswerField, ...]
    explanation: tuple[ExplanationStep, ...]
    subnet_type: SubnetType
    difficulty: Difficulty

    def __post_init__(self) -> None:
        if not self.answer_fields:
            raise ValueError("A question needs at least one answer field")

    def to_dict(self) -> dict[str, Any]:
        return {
            "question_text": self.question_text,
            "answer_fields": [answer_field.to_dict() for answer_field in self.answer_fields],
            "explanation": [step.to_dict() for step in self.explanation],
            "subnet_type": self.subnet_type.value,
            "difficulty": self.difficulty.value,
        }


@dataclass
class BinaryQuestion:
    """A generated number-base conversion exercise."""

    conversion_type: ConversionType
    difficulty: Difficulty
    value: str
    question: str
    answer: str
    explanation: tuple[ExplanationStep, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "conversion_type": self.conversion_type.value,
            "difficulty": self.difficulty.value,
            "value": self.value,
            "question": self.question,
            "answer": self.answer,
            "explanation": [step.to_dict() for step in self.explanation],
        }
