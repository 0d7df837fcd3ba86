"""Tests for the FastAPI endpoints.

Coverage:
- /api/leaderboard: real data, unconfigured source (200 + warning),
  upstream failure (500, no fallback), limit validation, unexpected errors
- /api/score: summary payload, recommendations capped at two,
  incomplete measurement -> 422, partial opt-in
- Health and root endpoints
"""

import json

import pytest
from fastapi.testclient import TestClient

from ecoboard.config import create_config
from ecoboard.server import create_app


# ── helpers ───────────────────────────────────────────────────────────────────


BOUNDARIES = {"climate": 20, "biosphere": 35, "biogeochemical": 40, "freshwater": 15, "aerosols": 30}


def _client(config):
    return TestClient(create_app(config))


def _store(tmp_path, records):
    path = tmp_path / "entries.json"
    path.write_text(json.dumps(records))
    return str(path)


@pytest.fixture
def records():
    return [
        {"user_id": f"user_{i}", "composite_score": s, "created_at": f"2025-03-0{i + 1}T10:00:00Z"}
        for i, s in enumerate([30, 10, 20, 50, 40])
    ]


# ── TestLeaderboardEndpoint ───────────────────────────────────────────────────


class TestLeaderboardEndpoint:
    def test_real_data(self, tmp_path, records):
        client = _client(create_config("json_file", path=_store(tmp_path, records)))
        response = client.get("/api/leaderboard")
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert "warning" not in data
        assert [e["composite_score"] for e in data["leaderboard"]] == [10, 20, 30, 40, 50]

    def test_limit(self, tmp_path, records):
        client = _client(create_config("json_file", path=_store(tmp_path, records)))
        data = client.get("/api/leaderboard", params={"limit": 2}).json()
        assert len(data["leaderboard"]) == 2
        assert data["total_users"] == 5

    @pytest.mark.parametrize("limit", [0, -3, "abc"])
    def test_invalid_limit(self, tmp_path, records, limit):
        client = _client(create_config("json_file", path=_store(tmp_path, records)))
        assert client.get("/api/leaderboard", params={"limit": limit}).status_code == 422

    def test_unconfigured_returns_demo_with_warning(self):
        client = _client(create_config("json_file"))
        response = client.get("/api/leaderboard")
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["warning"]
        assert len(data["leaderboard"]) >= 1

    def test_upstream_failure_is_500(self, tmp_path):
        path = tmp_path / "entries.json"
        path.write_text("{broken")
        client = _client(create_config("json_file", path=str(path)))
        response = client.get("/api/leaderboard")
        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["leaderboard"] == []
        assert "warning" not in data

    def test_unexpected_error_is_500(self, monkeypatch):
        def boom(config):
            raise RuntimeError("registry exploded")

        monkeypatch.setattr("ecoboard.server.create_source", boom)
        response = _client(create_config("memory", records=[])).get("/api/leaderboard")
        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to fetch leaderboard"
        assert data["details"] == "registry exploded"


# ── TestScoreEndpoint ─────────────────────────────────────────────────────────


class TestScoreEndpoint:
    def test_score(self):
        recs = [
            {"action": a, "impact": "lower emissions", "boundary": "climate", "current_score": 20}
            for a in ("Bike", "Eat local", "Recycle")
        ]
        client = _client(create_config("memory", records=[]))
        response = client.post("/api/score", json={"boundary_scores": BOUNDARIES, "recommendations": recs})
        assert response.status_code == 200
        data = response.json()
        assert data["composite"] == pytest.approx(28.0)
        assert data["display_score"] == 72
        assert data["grade"] == "B"
        assert [r["action"] for r in data["recommendations"]] == ["Bike", "Eat local"]

    def test_incomplete_is_422(self):
        client = _client(create_config("memory", records=[]))
        response = client.post("/api/score", json={"boundary_scores": {"climate": 20}})
        assert response.status_code == 422
        assert "Missing boundary scores" in response.json()["detail"]

    def test_partial_opt_in(self):
        client = _client(create_config("memory", records=[]))
        response = client.post(
            "/api/score",
            json={"boundary_scores": {"climate": 20, "biosphere": 40}, "allow_partial": True},
        )
        assert response.status_code == 200
        assert response.json()["partial"] is True
        assert response.json()["composite"] == pytest.approx(30.0)


# ── TestMeta ──────────────────────────────────────────────────────────────────


class TestMeta:
    def test_health(self):
        assert _client(create_config("memory")).get("/api/health").json() == {"status": "healthy"}

    def test_root(self):
        assert _client(create_config("memory")).get("/").json()["message"] == "EcoBoard API"
