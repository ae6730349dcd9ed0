"""
Answer equivalence checking.

Every comparison first strips all whitespace and case-folds both sides.
The rule applied then depends on the field id:

- subnet-mask: CIDR or dotted-decimal form, resolved from label and prompt
- ids containing address/host/subnet: verbatim match, else octet compare
  with any /prefix suffix ignored
- expanded-ipv6: 8 groups, numerically equal
- abbreviated-ipv6: equal after expansion
- anything else: exact match against the answer or an alternate

A submission is correct only if every field passes.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

from src.generation.errors import IncompleteAnswerError
from src.generation.models import AnswerField
from src.netmath.ipv4 import mask_to_prefix, parse_ipv4, prefix_to_mask
from src.netmath.ipv6 import GROUP_COUNT, GROUP_WIDTH, HEX_DIGITS, parse_ipv6_groups

CIDR_KEYWORDS = ("cidr", "prefix")
DECIMAL_LABEL_KEYWORDS = ("decimal", "decimaal")
DECIMAL_PROMPT_KEYWORDS = ("dotted decimal", "decimal notation", "decimale notatie", "decimalen")
IP_LIKE_MARKERS = ("address", "host", "subnet")


class MaskForm(str, Enum):
    CIDR = "cidr"
    DECIMAL = "decimal"


@dataclass
class SubmissionResult:
    """Per-field outcome of a full submission."""

    correct: bool
    fields: dict[str, bool] = field(default_factory=dict)

    @property
    def incorrect_ids(self) -> list[str]:
        return [field_id for field_id, ok in self.fields.items() if not ok]


def normalize(text: str) -> str:
    """Remove all whitespace and case-fold."""
    return "".join(text.split()).casefold()


def check_binary_answer(user_answer: str, canonical_answer: str) -> bool:
    """Exact comparison after normalization; no alternate bases are accepted."""
    return normalize(user_answer) == normalize(canonical_answer)


# ========================================
# Subnet mask form
# ========================================


def requested_mask_form(label: str, question_text: str, canonical: str = "") -> MaskForm | None:
    """
    Work out whether a subnet-mask field wants CIDR or dotted decimal.

    The label decides when it names a form. Otherwise the prompt decides
    when it names exactly one form; when it names both, the form of the
    canonical answer breaks the tie. None means no form was requested.
    """
    label_text = label.casefold()
    if any(keyword in label_text for keyword in DECIMAL_LABEL_KEYWORDS):
        return MaskForm.DECIMAL
    if any(keyword in label_text for keyword in CIDR_KEYWORDS):
        return MaskForm.CIDR

    prompt = " ".join(question_text.casefold().split())
    wants_decimal = any(keyword in prompt for keyword in DECIMAL_PROMPT_KEYWORDS)
    wants_cidr = any(keyword in prompt for keyword in CIDR_KEYWORDS)
    if wants_decimal and wants_cidr:
        return MaskForm.CIDR if canonical.strip().startswith("/") else MaskForm.DECIMAL
    if wants_decimal:
        return MaskForm.DECIMAL
    if wants_cidr:
        return MaskForm.CIDR
    return None


def _canonical_prefix(canonical: str) -> int:
    if canonical.startswith("/"):
        return int(canonical[1:])
    return mask_to_prefix(canonical)


def _canonical_octets(canonical: str) -> list[int]:
    if canonical.startswith("/"):
        return parse_ipv4(prefix_to_mask(int(canonical[1:])))
    return parse_ipv4(canonical)


def _check_subnet_mask(answer_field: AnswerField, user: str, question_text: str) -> bool:
    canonical = normalize(answer_field.answer)
    form = requested_mask_form(answer_field.label, question_text, canonical)

    try:
        if form == MaskForm.CIDR:
            if not user.startswith("/") or not user[1:].isdigit():
                return False
            return int(user[1:]) == _canonical_prefix(canonical)
        if form == MaskForm.DECIMAL:
            if user.startswith("/"):
                return False
            return parse_ipv4(user) == _canonical_octets(canonical)
    except ValueError:
        return False

    return user in {normalize(answer) for answer in answer_field.accepted_answers}


# ========================================
# Addresses
# ========================================


def _strip_prefix(value: str) -> str:
    return value.split("/", 1)[0]


def _check_ip_like(answer_field: AnswerField, user: str) -> bool:
    accepted = [normalize(answer) for answer in answer_field.accepted_answers]
    if user in accepted:
        return True

    try:
        user_octets = parse_ipv4(_strip_prefix(user))
    except ValueError:
        return False

    for answer in accepted:
        try:
            if parse_ipv4(_strip_prefix(answer)) == user_octets:
                return True
        except ValueError:
            continue
    return False


def _full_ipv6_groups(value: str) -> list[int] | None:
    groups = value.split(":")
    if len(groups) != GROUP_COUNT:
        return None
    if any(not group or len(group) > GROUP_WIDTH or not set(group) <= HEX_DIGITS for group in groups):
        return None
    return [int(group, 16) for group in groups]


def _check_expanded_ipv6(answer_field: AnswerField, user: str) -> bool:
    user_groups = _full_ipv6_groups(user)
    if user_groups is None:
        return False
    return any(_full_ipv6_groups(normalize(answer)) == user_groups for answer in answer_field.accepted_answers)


def _check_abbreviated_ipv6(answer_field: AnswerField, user: str) -> bool:
    for answer in answer_field.accepted_answers:
        canonical = normalize(answer)
        try:
            if parse_ipv6_groups(user) == parse_ipv6_groups(canonical):
                return True
        except ValueError as e:
            logger.debug(f"IPv6 comparison fell back to literal match: {e}")
            if user == canonical:
                return True
    return False


# ========================================
# Public API
# ========================================


def check_answer(answer_field: AnswerField, user_input: str, question_text: str = "") -> bool:
    """
    Judge one field.

    question_text is only consulted for subnet-mask fields, to decide
    which notation the prompt asked for.
    """
    user = normalize(user_input)
    field_id = answer_field.id

    if field_id == "subnet-mask":
        return _check_subnet_mask(answer_field, user, question_text)
    if any(marker in field_id for marker in IP_LIKE_MARKERS):
        return _check_ip_like(answer_field, user)
    if field_id == "expanded-ipv6":
        return _check_expanded_ipv6(answer_field, user)
    if field_id == "abbreviated-ipv6":
        return _check_abbreviated_ipv6(answer_field, user)
    return user in {normalize(answer) for answer in answer_field.accepted_answers}


def require_all_answers(answer_fields: Sequence[AnswerField], answers: Mapping[str, str]) -> None:
    """
    Enforce that every field has a non-blank answer.

    Raises:
        IncompleteAnswerError: Listing the ids without an answer.
    """
    missing = [f.id for f in answer_fields if not (answers.get(f.id) or "").strip()]
    if missing:
        raise IncompleteAnswerError(missing)


def check_submission(
    question_text: str,
    answer_fields: Sequence[AnswerField],
    answers: Mapping[str, str],
) -> SubmissionResult:
    """
    Check every field of a question; correct only if all fields pass.

    Raises:
        IncompleteAnswerError: If any field is missing or blank.
    """
    require_all_answers(answer_fields, answers)
    results = {f.id: check_answer(f, answers[f.id], question_text) for f in answer_fields}
    return SubmissionResult(correct=all(results.values()), fields=results)
