"""
Practice history and progress for the subnet trainer.

Provides:
- PracticeSessionStore: record completed drills, list history
- Mastery summaries per area (binary, subnetting, VLSM)
"""

from src.study.session_store import (
    AreaProgress,
    PracticeSessionStore,
    ProgressSummary,
    mastery_percentage,
)

__all__ = [
    "AreaProgress",
    "PracticeSessionStore",
    "ProgressSummary",
    "mastery_percentage",
]
