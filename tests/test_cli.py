"""Tests for the Rich renderer and the command-line interface.

Coverage:
- render_leaderboard: rankings, demo-data warning banner, error panel,
  empty board, diagnostics line
- `ecoboard score`: JSON summary, incomplete input exits 1
- `ecoboard show`: JSON output from a file store, invalid limit exits 1
"""

import io
import json
import sys

import pytest
from rich.console import Console

from ecoboard.cli import main
from ecoboard.leaderboard.data import LeaderboardEntry, LeaderboardResult
from ecoboard.leaderboard.display import render_leaderboard


# ── helpers ───────────────────────────────────────────────────────────────────


def _render(result, direction="lower_is_better"):
    buffer = io.StringIO()
    render_leaderboard(result, direction=direction, console=Console(file=buffer, width=120))
    return buffer.getvalue()


def _entry(rank, score, pseudonym):
    return LeaderboardEntry(
        rank=rank,
        user_id=f"user_{rank}",
        composite_score=score,
        grade="A+",
        pseudonym=pseudonym,
        timestamp="2025-03-01T12:00:00+00:00",
        campus_affiliation="North Campus",
    )


def _run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["ecoboard", *argv])
    main()


# ── TestDisplay ───────────────────────────────────────────────────────────────


class TestDisplay:
    def test_rankings(self):
        result = LeaderboardResult(
            success=True,
            leaderboard=[_entry(1, 5.0, "EcoChampion"), _entry(2, 8.0, "GreenGuru")],
            total_users=2,
            message="Leaderboard retrieved successfully",
        )
        out = _render(result)
        assert "EcoChampion" in out
        assert "GreenGuru" in out
        assert "95.0" in out
        assert "North Campus" in out
        assert "Demo data" not in out

    def test_warning_banner(self):
        result = LeaderboardResult(
            success=True,
            leaderboard=[_entry(1, 5.0, "EcoChampion")],
            total_users=1,
            message="Mock leaderboard data - database not configured",
            warning="Leaderboard store not configured",
        )
        assert "Leaderboard store not configured" in _render(result)

    def test_error_panel(self):
        out = _render(LeaderboardResult(success=False, error="db timeout"))
        assert "db timeout" in out
        assert "Leaderboard unavailable" in out

    def test_empty_board(self):
        out = _render(LeaderboardResult(success=True, total_users=0, message="ok"))
        assert "No leaderboard data" in out

    def test_diagnostics_line(self):
        result = LeaderboardResult(
            success=True,
            leaderboard=[_entry(1, 5.0, "EcoChampion")],
            total_users=1,
            message="ok",
            rejected_ids=["bad_1", "bad_2"],
        )
        assert "2 entries rejected" in _render(result)


# ── TestCli ───────────────────────────────────────────────────────────────────


class TestCli:
    def test_score_json(self, monkeypatch, capsys):
        _run_cli(
            monkeypatch, "score",
            "--climate", "20", "--biosphere", "35", "--biogeochemical", "40",
            "--freshwater", "15", "--aerosols", "30", "--json",
        )
        data = json.loads(capsys.readouterr().out)
        assert data["composite"] == pytest.approx(28.0)
        assert data["grade"] == "B"

    def test_score_incomplete_exits(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            _run_cli(monkeypatch, "score", "--climate", "20")
        assert exc.value.code == 1
        assert "Missing boundary scores" in capsys.readouterr().out

    def test_score_partial(self, monkeypatch, capsys):
        _run_cli(monkeypatch, "score", "--climate", "20", "--aerosols", "40", "--allow-partial", "--json")
        data = json.loads(capsys.readouterr().out)
        assert data["partial"] is True
        assert data["composite"] == pytest.approx(30.0)

    def test_show_json(self, monkeypatch, capsys, tmp_path):
        path = tmp_path / "entries.json"
        path.write_text(json.dumps([
            {"user_id": "user_a", "composite_score": 30},
            {"user_id": "user_b", "composite_score": 10},
        ]))
        _run_cli(monkeypatch, "show", "--path", str(path), "--json")
        data = json.loads(capsys.readouterr().out)
        assert data["success"] is True
        assert [e["composite_score"] for e in data["leaderboard"]] == [10, 30]

    def test_show_bad_limit_exits(self, monkeypatch):
        with pytest.raises(SystemExit) as exc:
            _run_cli(monkeypatch, "show", "--limit", "0")
        assert exc.value.code == 1
