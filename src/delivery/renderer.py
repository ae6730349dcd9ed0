"""
Render structured explanations for display.

Steps stay structured data until they reach a boundary (API response,
terminal). Each step is formatted through the `step.<operation>` template
of a phrase table, then emitted as plain lines or as an HTML list.
"""

from __future__ import annotations

import html
from collections.abc import Iterable

from src.delivery.phrases import PhraseTable, get_phrase_table
from src.generation.models import ExplanationStep


def render_step(step: ExplanationStep, phrases: PhraseTable) -> str:
    """Format one step; unknown operations degrade to 'operation: result'."""
    key = f"step.{step.operation}"
    if not phrases.has(key):
        return f"{step.operation}: {step.result}"
    return phrases.text(key, result=step.result, **step.operands)


def render_text(steps: Iterable[ExplanationStep], phrases: PhraseTable | None = None) -> str:
    """Numbered plain-text lines."""
    phrases = phrases or get_phrase_table()
    return "\n".join(f"{index}. {render_step(step, phrases)}" for index, step in enumerate(steps, start=1))


def render_html(steps: Iterable[ExplanationStep], phrases: PhraseTable | None = None) -> str:
    """An ordered HTML list, one escaped item per step."""
    phrases = phrases or get_phrase_table()
    items = "".join(f"<li>{html.escape(render_step(step, phrases))}</li>" for step in steps)
    return f"<ol>{items}</ol>"


def render(steps: Iterable[ExplanationStep], phrases: PhraseTable | None = None, fmt: str = "text") -> str:
    """Dispatch on fmt ('text' or 'html')."""
    if fmt == "html":
        return render_html(steps, phrases)
    return render_text(steps, phrases)
