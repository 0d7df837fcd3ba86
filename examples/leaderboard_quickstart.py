#!/usr/bin/env python3
"""
EcoBoard Quickstart Example

Walks through scoring one assessment, building a leaderboard from a JSON
store and what happens when the store is missing.

Prerequisites:
    pip install -e .
"""

import asyncio
import json
import tempfile
from pathlib import Path


def example_1_score_assessment():
    """
    Example 1: Score one set of boundary measurements.
    """
    print("\n" + "="*60)
    print("Example 1: Score an Assessment")
    print("="*60)

    from ecoboard.scoring import build_score_summary

    summary = build_score_summary(
        {
            "climate": 20,
            "biosphere": 35,
            "biogeochemical": 40,
            "freshwater": 15,
            "aerosols": 30,
        },
        recommendations=[
            {"action": "Cycle to campus", "impact": "Cuts commute emissions",
             "boundary": "climate", "current_score": 20},
            {"action": "Eat seasonal produce", "impact": "Less fertilizer runoff",
             "boundary": "biogeochemical", "current_score": 40},
            {"action": "Shorter showers", "impact": "Saves water",
             "boundary": "freshwater", "current_score": 15},
        ],
    )

    print(f"\nComposite: {summary.composite}  EcoScore: {summary.display_score}  Grade: {summary.grade}")
    for row in summary.breakdown:
        print(f"  {row.name:<28} {row.display_value:>3}")
    print("Top actions:", [r.action for r in summary.recommendations])


def example_2_leaderboard_from_file(store: Path):
    """
    Example 2: Rank stored entries, including one with only boundary data.
    """
    print("\n" + "="*60)
    print("Example 2: Leaderboard from a JSON Store")
    print("="*60)

    from ecoboard.leaderboard import LeaderboardPipeline, render_leaderboard
    from ecoboard.sources import JsonFileEntrySource

    source = JsonFileEntrySource(store)
    source.save([
        {"user_id": "SolarSailor42", "composite_score": 14.2,
         "campus_affiliation": "North Campus", "created_at": "2025-03-01T09:00:00Z"},
        {"user_id": "user_8f3a91", "composite_score": 22.0, "created_at": "2025-03-02T10:30:00Z"},
        {"user_id": "demo_user_77", "created_at": "2025-03-03T15:45:00Z",
         "boundary_scores": {"climate": 10, "biosphere": 12, "biogeochemical": 9,
                             "freshwater": 11, "aerosols": 8}},
    ])

    result = asyncio.run(LeaderboardPipeline(source).run(limit=10))
    render_leaderboard(result)


def example_3_missing_store(store: Path):
    """
    Example 3: A missing store yields labeled demo data, not an error.
    """
    print("\n" + "="*60)
    print("Example 3: Unconfigured Store")
    print("="*60)

    from ecoboard.leaderboard import build_leaderboard
    from ecoboard.sources import JsonFileEntrySource

    body = asyncio.run(build_leaderboard(JsonFileEntrySource(store), limit=3))
    print(json.dumps({k: body[k] for k in ("success", "message", "warning", "total_users")}, indent=2))


def main():
    print("="*60)
    print("ECOBOARD QUICKSTART EXAMPLES")
    print("="*60)

    example_1_score_assessment()

    with tempfile.TemporaryDirectory() as tmp:
        example_2_leaderboard_from_file(Path(tmp) / "entries.json")
        example_3_missing_store(Path(tmp) / "missing.json")


if __name__ == "__main__":
    main()
