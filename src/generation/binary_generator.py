"""
Number-base conversion questions (binary, hexadecimal, decimal).

Each question carries a canonical answer string plus the derivation as
ExplanationStep records:
- positional expansion for binary/hex -> decimal
- nibble grouping for binary <-> hex
- repeated division for decimal -> binary/hex
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from loguru import logger

from src.delivery.phrases import PhraseTable, get_phrase_table
from src.generation.models import (
    BinaryQuestion,
    ConversionType,
    Difficulty,
    ExplanationStep,
    parse_choice,
)

HEX_ALPHABET = "0123456789ABCDEF"


@dataclass(frozen=True)
class OperandSize:
    """Operand size for one difficulty level."""

    bits: int
    hex_digits: int
    min_decimal: int
    max_decimal: int


OPERAND_SIZES: dict[Difficulty, OperandSize] = {
    Difficulty.EASY: OperandSize(bits=4, hex_digits=1, min_decimal=1, max_decimal=15),
    Difficulty.MEDIUM: OperandSize(bits=8, hex_digits=2, min_decimal=16, max_decimal=255),
    Difficulty.HARD: OperandSize(bits=12, hex_digits=3, min_decimal=256, max_decimal=4095),
}

SOURCE_BASE = {
    ConversionType.BIN2DEC: 2,
    ConversionType.BIN2HEX: 2,
    ConversionType.HEX2BIN: 16,
    ConversionType.HEX2DEC: 16,
    ConversionType.DEC2BIN: 10,
    ConversionType.DEC2HEX: 10,
}


# ========================================
# Operand sampling
# ========================================


def random_binary(rng: random.Random, bits: int) -> str:
    """A binary string of exactly `bits` digits with a leading 1."""
    return "1" + "".join(rng.choice("01") for _ in range(bits - 1))


def random_hex(rng: random.Random, digits: int) -> str:
    """An upper-case hex string of exactly `digits` digits, leading digit non-zero."""
    return rng.choice(HEX_ALPHABET[1:]) + "".join(rng.choice(HEX_ALPHABET) for _ in range(digits - 1))


def random_decimal(rng: random.Random, low: int, high: int) -> int:
    """A value in [low, high] that is neither 0 nor a power of two."""
    candidates = [value for value in range(max(low, 1), high + 1) if value & (value - 1)]
    return rng.choice(candidates)


# ========================================
# Derivations
# ========================================


def positional_expansion(digits: str, base: int) -> tuple[int, list[ExplanationStep]]:
    """Sum digit * base^position, most significant digit first."""
    steps = []
    terms = []
    total = 0
    for index, digit in enumerate(digits.upper()):
        power = len(digits) - 1 - index
        digit_value = int(digit, 16)
        weight = base**power
        term = digit_value * weight
        total += term
        terms.append(str(term))
        steps.append(
            ExplanationStep(
                "positional_term",
                {"digit": digit, "base": base, "power": power, "weight": weight},
                str(term),
            )
        )
    steps.append(ExplanationStep("sum", {"terms": " + ".join(terms)}, str(total)))
    return total, steps


def binary_to_hex_groups(bits: str) -> tuple[str, list[ExplanationStep]]:
    """Left-pad to whole nibbles and map every 4-bit group to one hex digit."""
    steps = []
    width = -(-len(bits) // 4) * 4
    padded = bits.zfill(width)
    if padded != bits:
        steps.append(ExplanationStep("pad_nibbles", {"value": bits, "width": width}, padded))

    digits = []
    for start in range(0, width, 4):
        group = padded[start : start + 4]
        digit = HEX_ALPHABET[int(group, 2)]
        digits.append(digit)
        steps.append(ExplanationStep("nibble_group", {"bits": group, "hex": digit}, digit))

    answer = "".join(digits).lstrip("0") or "0"
    steps.append(ExplanationStep("concatenate", {"parts": " ".join(digits)}, answer))
    return answer, steps


def hex_to_binary_groups(hex_value: str) -> tuple[str, list[ExplanationStep]]:
    """Expand every hex digit to its 4-bit group, padding kept."""
    steps = []
    groups = []
    for digit in hex_value.upper():
        group = format(int(digit, 16), "04b")
        groups.append(group)
        steps.append(ExplanationStep("nibble_group", {"bits": group, "hex": digit}, group))

    answer = "".join(groups)
    steps.append(ExplanationStep("concatenate", {"parts": " ".join(groups)}, answer))
    return answer, steps


def repeated_division(value: int, base: int) -> tuple[str, list[ExplanationStep]]:
    """Divide by the base until zero; the remainders read bottom-up are the answer."""
    steps = []
    remainders = []
    current = value
    while current > 0:
        quotient, remainder = divmod(current, base)
        digit = HEX_ALPHABET[remainder]
        remainders.append(digit)
        steps.append(
            ExplanationStep(
                "divide",
                {"dividend": current, "divisor": base, "quotient": quotient, "remainder": digit},
                digit,
            )
        )
        current = quotient

    answer = "".join(reversed(remainders)) or "0"
    steps.append(ExplanationStep("read_remainders", {"remainders": " ".join(remainders)}, answer))
    return answer, steps


# ========================================
# Generator
# ========================================


def _operand(rng: random.Random, conversion: ConversionType, size: OperandSize) -> str:
    base = SOURCE_BASE[conversion]
    if base == 2:
        return random_binary(rng, size.bits)
    if base == 16:
        return random_hex(rng, size.hex_digits)
    return str(random_decimal(rng, size.min_decimal, size.max_decimal))


def convert(value: str, conversion: ConversionType) -> tuple[str, list[ExplanationStep]]:
    """Canonical answer and derivation for converting `value`."""
    if conversion == ConversionType.BIN2DEC:
        total, steps = positional_expansion(value, 2)
        return str(total), steps
    if conversion == ConversionType.HEX2DEC:
        total, steps = positional_expansion(value, 16)
        return str(total), steps
    if conversion == ConversionType.BIN2HEX:
        return binary_to_hex_groups(value)
    if conversion == ConversionType.HEX2BIN:
        return hex_to_binary_groups(value)
    if conversion == ConversionType.DEC2BIN:
        return repeated_division(int(value), 2)
    return repeated_division(int(value), 16)


def generate_binary_question(
    conversion_type: str | ConversionType,
    difficulty: str | Difficulty,
    locale: str | None = None,
    rng: random.Random | None = None,
    phrases: PhraseTable | None = None,
) -> BinaryQuestion:
    """
    Generate one conversion exercise.

    Raises:
        InvalidParameterError: If the conversion type, difficulty or locale is unknown.
    """
    conversion = parse_choice(ConversionType, conversion_type, "conversion type")
    level = parse_choice(Difficulty, difficulty, "difficulty")
    phrases = phrases or get_phrase_table(locale)
    rng = rng or random.Random()

    value = _operand(rng, conversion, OPERAND_SIZES[level])
    answer, steps = convert(value, conversion)

    logger.debug(f"Generated {conversion.value} question ({level.value}) from {value}")
    return BinaryQuestion(
        conversion_type=conversion,
        difficulty=level,
        value=value,
        question=phrases.text(f"binary.prompt.{conversion.value}", value=value),
        answer=answer,
        explanation=tuple(steps),
    )
