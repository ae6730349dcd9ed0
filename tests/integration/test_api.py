"""
Integration tests for the HTTP API.

Runs the FastAPI application in-process with TestClient against the
in-memory SQLite database configured in conftest.
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.db.database import engine
from src.db.models import Base


@pytest.fixture
def client():
    Base.metadata.drop_all(bind=engine)
    with TestClient(app) as test_client:
        yield test_client


# ========================================
# Health
# ========================================


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["service"] == "subnet-trainer"

    def test_health_checks_database(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["components"]["database"] == "ok"
        assert data["config"]["locales"] == ["en", "nl"]


# ========================================
# Binary
# ========================================


class TestBinaryEndpoints:
    """Conversion question generation and checking."""

    def test_generate(self, client):
        response = client.post("/api/binary/generate", json={"type": "bin2hex", "difficulty": "medium"})
        assert response.status_code == 200
        data = response.json()
        assert len(data["value"]) == 8
        assert int(data["answer"], 16) == int(data["value"], 2)
        assert data["explanation"].startswith("<ol>")
        assert data["steps"][-1]["operation"] == "concatenate"

    def test_generate_text_explanation_in_dutch(self, client):
        response = client.post(
            "/api/binary/generate",
            json={"type": "dec2bin", "difficulty": "easy", "locale": "nl", "format": "text"},
        )
        data = response.json()
        assert data["question"].startswith("Zet het decimale getal")
        assert data["explanation"].startswith("1. ")

    @pytest.mark.parametrize(
        "payload",
        [
            {"type": "bin2oct", "difficulty": "easy"},
            {"type": "bin2dec", "difficulty": "expert"},
            {"type": "bin2dec", "difficulty": "easy", "locale": "de"},
        ],
    )
    def test_invalid_parameters_return_400(self, client, payload):
        response = client.post("/api/binary/generate", json=payload)
        assert response.status_code == 400
        assert "Unknown" in response.json()["detail"]

    def test_check(self, client):
        assert client.post("/api/binary/check", json={"answer": "B6", "user_answer": " b6 "}).json() == {"correct": True}
        assert client.post("/api/binary/check", json={"answer": "B6", "user_answer": "B7"}).json() == {"correct": False}


# ========================================
# Subnetting
# ========================================


class TestSubnettingEndpoints:
    """Subnetting question generation and checking."""

    @pytest.mark.parametrize("subnet_type", ["basic", "vlsm", "wildcard", "network", "summarization", "ipv6"])
    def test_generated_answers_check_as_correct(self, client, subnet_type):
        question = client.post("/api/subnetting/generate", json={"type": subnet_type, "difficulty": "hard"}).json()
        assert question["answer_fields"]

        answers = {f["id"]: f["answer"] for f in question["answer_fields"]}
        response = client.post(
            "/api/subnetting/check",
            json={
                "question_text": question["question_text"],
                "answer_fields": question["answer_fields"],
                "answers": answers,
            },
        )
        assert response.status_code == 200
        result = response.json()
        assert result["correct"] is True
        assert set(result["fields"]) == set(answers)

    def test_wrong_field_reported(self, client):
        fields = [
            {"id": "network-address", "label": "Network Address", "answer": "192.168.1.128"},
            {"id": "broadcast-address", "label": "Broadcast Address", "answer": "192.168.1.191"},
        ]
        response = client.post(
            "/api/subnetting/check",
            json={
                "question_text": "",
                "answer_fields": fields,
                "answers": {"network-address": "192.168.1.128/26", "broadcast-address": "192.168.1.190"},
            },
        )
        assert response.json() == {
            "correct": False,
            "fields": {"network-address": True, "broadcast-address": False},
        }

    def test_incomplete_submission_returns_400(self, client):
        response = client.post(
            "/api/subnetting/check",
            json={
                "question_text": "",
                "answer_fields": [{"id": "network-address", "label": "Network Address", "answer": "10.0.0.0"}],
                "answers": {"network-address": "   "},
            },
        )
        assert response.status_code == 400
        assert "network-address" in response.json()["detail"]

    def test_unknown_subnet_type_returns_400(self, client):
        response = client.post("/api/subnetting/generate", json={"type": "supernet", "difficulty": "easy"})
        assert response.status_code == 400


# ========================================
# Practice sessions & progress
# ========================================


class TestProgressEndpoints:
    """Recording sessions and reading mastery."""

    def _record(self, client, **overrides):
        payload = {
            "topic": "subnet",
            "subtype": "basic",
            "score": 3,
            "total_questions": 4,
            "difficulty": "easy",
            "time_spent_seconds": 120,
        }
        payload.update(overrides)
        return client.post("/api/practice-sessions", json=payload)

    def test_record_session(self, client):
        response = self._record(client)
        assert response.status_code == 201
        data = response.json()
        assert data["id"] >= 1
        assert data["score"] == 3
        assert data["timestamp"]

    def test_score_above_total_rejected(self, client):
        assert self._record(client, score=5).status_code == 422

    def test_unknown_topic_rejected(self, client):
        assert self._record(client, topic="chemistry").status_code == 422

    def test_progress_summary(self, client):
        self._record(client)
        self._record(client, subtype="vlsm", score=1, total_questions=2)
        self._record(client, topic="binary", subtype="bin2dec", score=9, total_questions=10)

        data = client.get("/api/progress").json()

        assert data["subnetting_progress"] == {"mastery": 75, "correct": 3, "total": 4}
        assert data["vlsm_progress"] == {"mastery": 50, "correct": 1, "total": 2}
        assert data["binary_progress"]["mastery"] == 90
        assert len(data["recent_activity"]) == 3
