"""
Unit tests for practice-session storage and mastery summaries.

Uses the in-memory SQLite database configured in conftest.
"""

from datetime import datetime, timedelta

import pytest

from src.study.session_store import PracticeSessionStore, mastery_percentage


class TestMasteryPercentage:
    @pytest.mark.parametrize(
        "correct,total,expected",
        [(0, 0, 0), (0, 10, 0), (10, 10, 100), (1, 3, 33), (2, 3, 67), (1, 8, 13), (1, 200, 1)],
    )
    def test_rounded_percentage(self, correct, total, expected):
        assert mastery_percentage(correct, total) == expected


class TestPracticeSessionStore:
    """Recording and summarizing sessions."""

    @pytest.fixture
    def store(self, db_session):
        return PracticeSessionStore(db_session)

    def test_record_returns_persisted_row(self, store):
        practice = store.record("binary", "bin2dec", 7, 10, "easy", time_spent_seconds=95)
        assert practice.id is not None
        assert practice.timestamp is not None
        assert practice.time_spent_seconds == 95

    @pytest.mark.parametrize(
        "topic,score,total",
        [("chemistry", 1, 2), ("binary", 5, 4), ("binary", -1, 4), ("subnet", 0, 0)],
    )
    def test_invalid_sessions_rejected(self, store, topic, score, total):
        with pytest.raises(ValueError):
            store.record(topic, "basic", score, total, "easy")

    def test_progress_separates_vlsm(self, store):
        store.record("binary", "bin2dec", 8, 10, "easy")
        store.record("binary", "hex2bin", 2, 10, "medium")
        store.record("subnet", "basic", 3, 4, "easy")
        store.record("subnet", "vlsm", 1, 4, "hard")

        summary = store.progress()

        assert (summary.binary.correct, summary.binary.total, summary.binary.mastery) == (10, 20, 50)
        assert (summary.subnetting.correct, summary.subnetting.total, summary.subnetting.mastery) == (3, 4, 75)
        assert (summary.vlsm.correct, summary.vlsm.total, summary.vlsm.mastery) == (1, 4, 25)

    def test_empty_progress(self, store):
        data = store.progress().to_dict()
        assert data["binary_progress"] == {"mastery": 0, "correct": 0, "total": 0}
        assert data["recent_activity"] == []

    def test_recent_activity_newest_first_and_limited(self, store):
        start = datetime(2024, 1, 1, 12, 0, 0)
        for minute in range(12):
            store.record("binary", "bin2dec", minute % 5, 5, "easy", timestamp=start + timedelta(minutes=minute))

        recent = store.progress(recent_limit=10).recent_activity

        assert len(recent) == 10
        assert recent[0]["timestamp"] == start + timedelta(minutes=11)
        assert recent[-1]["timestamp"] == start + timedelta(minutes=2)

    def test_filter_by_user(self, store):
        store.record("binary", "bin2dec", 5, 5, "easy", user_id=1)
        store.record("binary", "bin2dec", 0, 5, "easy", user_id=2)

        assert store.progress(user_id=1).binary.mastery == 100
        assert len(store.list_sessions(user_id=2)) == 1
        assert len(store.list_sessions()) == 2
