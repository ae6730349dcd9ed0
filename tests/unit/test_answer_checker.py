"""
Unit tests for the answer equivalence checker.

Tests format tolerance per field kind: subnet masks in CIDR or
dotted-decimal form, IP-like fields with or without a prefix suffix,
and IPv6 in expanded or abbreviated form.
"""

import pytest

from src.generation.errors import IncompleteAnswerError
from src.generation.models import AnswerField
from src.grading.answer_checker import (
    MaskForm,
    check_answer,
    check_binary_answer,
    check_submission,
    normalize,
    require_all_answers,
    requested_mask_form,
)

DECIMAL_PROMPT = "Given the IP address 8.8.8.8 with CIDR prefix /24:\nWhat is the subnet mask in dotted decimal format?"
CIDR_PROMPT = "Given the IP address 8.8.8.8 with subnet mask 255.255.255.0:\nWhat is the equivalent CIDR prefix notation?"


class TestNormalization:
    def test_whitespace_and_case(self):
        assert normalize("  1 0 1\tB ") == "101b"

    @pytest.mark.parametrize("user,canonical,expected", [("b6", "B6", True), (" 1011 ", "1011", True), ("0xB6", "B6", False)])
    def test_binary_answers(self, user, canonical, expected):
        assert check_binary_answer(user, canonical) is expected


# ========================================
# Subnet masks
# ========================================


class TestSubnetMask:
    """Mask notation follows what the question asked for."""

    def test_decimal_prompt_accepts_decimal_only(self):
        answer_field = AnswerField("subnet-mask", "Subnet Mask", "255.255.255.0")
        assert check_answer(answer_field, "255.255.255.0", DECIMAL_PROMPT)
        assert not check_answer(answer_field, "/24", DECIMAL_PROMPT)

    def test_cidr_prompt_accepts_cidr_only(self):
        answer_field = AnswerField("subnet-mask", "Subnet Mask", "255.255.255.0")
        assert check_answer(answer_field, "/24", CIDR_PROMPT)
        assert not check_answer(answer_field, "255.255.255.0", CIDR_PROMPT)

    def test_cidr_canonical_compared_numerically(self):
        answer_field = AnswerField("subnet-mask", "CIDR Prefix", "/26")
        assert check_answer(answer_field, " / 26 ", "")
        assert not check_answer(answer_field, "/27", "")
        assert not check_answer(answer_field, "26", "")

    def test_decimal_label_wins_over_prompt(self):
        answer_field = AnswerField("subnet-mask", "Subnet Mask (dotted decimal)", "255.255.240.0")
        assert check_answer(answer_field, "255.255.240.000", CIDR_PROMPT)
        assert not check_answer(answer_field, "/20", CIDR_PROMPT)

    def test_dutch_label(self):
        answer_field = AnswerField("subnet-mask", "Subnetmasker (decimaal)", "255.255.255.192")
        assert check_answer(answer_field, "255.255.255.192", "")
        assert not check_answer(answer_field, "/26", "")

    def test_no_form_requested_falls_back_to_literal(self):
        answer_field = AnswerField("subnet-mask", "Subnet Mask", "255.255.255.192")
        assert check_answer(answer_field, "255.255.255.192", "What subnet address and mask would you assign?")
        assert not check_answer(answer_field, "/26", "What subnet address and mask would you assign?")

    def test_malformed_decimal_rejected(self):
        answer_field = AnswerField("subnet-mask", "Subnet Mask (dotted decimal)", "255.255.255.0")
        assert not check_answer(answer_field, "255.255.255", "")

    def test_mixed_prompt_uses_canonical_form(self):
        prompt = "What are the CIDR prefix and the subnet mask in dotted decimal notation?"
        assert requested_mask_form("Subnet Mask", prompt, "255.255.0.0") == MaskForm.DECIMAL
        assert requested_mask_form("Subnet Mask", prompt, "/16") == MaskForm.CIDR
        assert requested_mask_form("Subnet Mask", "Which mask?", "/16") is None


# ========================================
# Addresses
# ========================================


class TestIpLikeFields:
    """Addresses, hosts and subnets."""

    def test_prefix_suffix_ignored(self):
        answer_field = AnswerField("network-address", "Network Address", "192.168.1.128")
        assert check_answer(answer_field, "192.168.1.128/26")
        assert check_answer(answer_field, "192.168.001.128")

    def test_alternate_answers(self):
        answer_field = AnswerField("subnet-address", "Subnet Network Address", "10.0.0.64", ("10.0.0.64/26",))
        assert check_answer(answer_field, "10.0.0.64/26")
        assert check_answer(answer_field, "10.0.0.64")
        assert not check_answer(answer_field, "10.0.0.0")

    def test_subnet_with_prefix_canonical(self):
        answer_field = AnswerField("subnet-3", "Subnet 3", "172.16.0.128/26", ("172.16.0.128",))
        assert check_answer(answer_field, "172.16.0.128")

    def test_garbage_rejected(self):
        answer_field = AnswerField("first-host", "First Usable Host", "10.0.0.1")
        assert not check_answer(answer_field, "ten.zero.zero.one")

    def test_numeric_host_count_matches_exactly(self):
        answer_field = AnswerField("usable-hosts", "Usable Hosts", "62")
        assert check_answer(answer_field, " 62 ")
        assert not check_answer(answer_field, "64")


class TestIpv6Fields:
    def test_expanded_requires_eight_groups(self):
        answer_field = AnswerField("expanded-ipv6", "Expanded IPv6 Address", "2001:0db8:0000:0000:0000:0000:0000:0001")
        assert check_answer(answer_field, "2001:0DB8:0000:0000:0000:0000:0000:0001")
        assert check_answer(answer_field, "2001:db8:0:0:0:0:0:1")
        assert not check_answer(answer_field, "2001:db8::1")

    def test_abbreviated_compares_expansions(self):
        answer_field = AnswerField("abbreviated-ipv6", "Abbreviated IPv6 Address", "2001:db8::1")
        assert check_answer(answer_field, "2001:DB8::1")
        assert check_answer(answer_field, "2001:db8:0:0:0:0:0:1")
        assert not check_answer(answer_field, "2001:db8::2")

    def test_abbreviated_malformed_input_is_false(self):
        answer_field = AnswerField("abbreviated-ipv6", "Abbreviated IPv6 Address", "2001:db8::1")
        assert not check_answer(answer_field, "2001::db8::1")


class TestDefaultFields:
    def test_exact_match_with_alternates(self):
        answer_field = AnswerField("summary-prefix", "Summary Prefix", "/22", ("22",))
        assert check_answer(answer_field, "/22")
        assert check_answer(answer_field, "22")
        assert not check_answer(answer_field, "/23")


# ========================================
# Submissions
# ========================================


class TestSubmission:
    """Whole-question grading."""

    @pytest.fixture
    def fields(self):
        return [
            AnswerField("network-address", "Network Address", "192.168.1.128"),
            AnswerField("broadcast-address", "Broadcast Address", "192.168.1.191"),
        ]

    def test_all_correct(self, fields):
        result = check_submission("", fields, {"network-address": "192.168.1.128", "broadcast-address": "192.168.1.191"})
        assert result.correct
        assert result.incorrect_ids == []

    def test_one_wrong_field_fails_question(self, fields):
        result = check_submission("", fields, {"network-address": "192.168.1.128", "broadcast-address": "192.168.1.255"})
        assert not result.correct
        assert result.fields == {"network-address": True, "broadcast-address": False}
        assert result.incorrect_ids == ["broadcast-address"]

    def test_blank_answer_rejected(self, fields):
        with pytest.raises(IncompleteAnswerError) as excinfo:
            require_all_answers(fields, {"network-address": "192.168.1.128", "broadcast-address": "  "})
        assert excinfo.value.missing_ids == ["broadcast-address"]

    def test_missing_answer_rejected(self, fields):
        with pytest.raises(IncompleteAnswerError):
            check_submission("", fields, {"network-address": "192.168.1.128"})
