"""
Unit tests for phrase tables and explanation rendering.
"""

import pytest

from src.delivery.phrases import PhraseTable, get_phrase_table
from src.delivery.renderer import render, render_html, render_step, render_text
from src.generation.errors import InvalidParameterError
from src.generation.models import ExplanationStep

STEPS = (
    ExplanationStep("nibble_group", {"bits": "1011", "hex": "B"}, "B"),
    ExplanationStep("nibble_group", {"bits": "0110", "hex": "6"}, "6"),
    ExplanationStep("concatenate", {"parts": "B 6"}, "B6"),
)


class TestPhraseTable:
    """Locale lookup with English fallback."""

    def test_default_locale_is_english(self):
        assert get_phrase_table().locale == "en"

    def test_locale_is_case_insensitive(self):
        assert get_phrase_table("NL").locale == "nl"

    def test_unknown_locale(self):
        with pytest.raises(InvalidParameterError) as excinfo:
            get_phrase_table("fr")
        assert excinfo.value.kind == "locale"

    def test_dutch_falls_back_to_english(self):
        dutch = get_phrase_table("nl")
        assert dutch.text("label.cidr_prefix") == "CIDR Prefix"
        assert dutch.text("label.network_address") == "Netwerkadres"

    def test_missing_key_returns_key(self):
        table = PhraseTable("xx", {})
        assert table.template("nothing.here") == "nothing.here"
        assert not table.has("nothing.here")


class TestRenderer:
    """Structured steps to text or HTML."""

    def test_text_lines_are_numbered(self, english):
        text = render_text(STEPS, english)
        assert text.splitlines() == ["1. 1011 = B", "2. 0110 = 6", "3. Combine the groups B 6: B6"]

    def test_html_list(self, english):
        html = render_html(STEPS, english)
        assert html.startswith("<ol><li>1011 = B</li>")
        assert html.endswith("</ol>")
        assert html.count("<li>") == 3

    def test_html_escapes_content(self, english):
        step = ExplanationStep("unknown_operation", {}, "<b>")
        assert render_html([step], english) == "<ol><li>unknown_operation: &lt;b&gt;</li></ol>"

    def test_unknown_operation_degrades(self, english):
        assert render_step(ExplanationStep("mystery", {}, "42"), english) == "mystery: 42"

    def test_dutch_rendering(self):
        step = ExplanationStep("divide", {"dividend": 13, "divisor": 2, "quotient": 6, "remainder": "1"}, "1")
        assert render_step(step, get_phrase_table("nl")) == "13 ÷ 2 = 6 rest 1"

    def test_dispatch(self, english):
        assert render(STEPS, english, "html").startswith("<ol>")
        assert render(STEPS, english).startswith("1. ")
