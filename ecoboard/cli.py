#!/usr/bin/env python3
"""
Command-line interface for EcoBoard.

Usage:
    ecoboard show --path data/leaderboard.json --limit 10
    ecoboard show --url http://localhost:8000/api/leaderboard --json
    ecoboard score --climate 20 --biosphere 35 --biogeochemical 40 --freshwater 15 --aerosols 30
    ecoboard serve --port 8000
"""

import argparse
import asyncio
import json
import logging
import sys

from ecoboard.scoring.boundaries import BOUNDARIES


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_config(args):
    from ecoboard.config import config_from_env, create_config, load_config

    if args.config:
        config = load_config(args.config)
    elif args.url:
        config = create_config("http", url=args.url)
    elif args.path:
        config = create_config("json_file", path=args.path)
    else:
        config = config_from_env()

    if args.allow_partial:
        config = config.model_copy(update={"allow_partial_boundaries": True})
    return config


def cmd_show(args):
    """Render the leaderboard."""
    from ecoboard.leaderboard.display import render_leaderboard
    from ecoboard.leaderboard.pipeline import LeaderboardPipeline
    from ecoboard.registry import create_source

    if args.limit is not None and args.limit < 1:
        print("--limit must be at least 1")
        sys.exit(1)

    config = _load_config(args)
    pipeline = LeaderboardPipeline(create_source(config.source), config=config)
    result = asyncio.run(pipeline.run(args.limit))

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        render_leaderboard(result, direction=config.score_direction)

    if not result.success:
        sys.exit(1)


def cmd_score(args):
    """Score one set of boundary values."""
    from ecoboard.scoring.boundaries import IncompleteMeasurement
    from ecoboard.scoring.summary import build_score_summary

    scores = {b: getattr(args, b) for b in BOUNDARIES if getattr(args, b) is not None}

    try:
        summary = build_score_summary(scores, allow_partial=args.allow_partial)
    except IncompleteMeasurement as e:
        print(f"Cannot score: {e}")
        sys.exit(1)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
        return

    print(f"\n{'='*50}")
    print(f"Composite: {summary.composite} (lower is better)")
    print(f"EcoScore:  {summary.display_score}/100")
    print(f"Grade:     {summary.grade}")
    if summary.partial:
        print("Note:      partial measurement")
    print(f"\nBreakdown:")
    for row in summary.breakdown:
        print(f"  {row.name:<28} {row.display_value:>3}")


def cmd_serve(args):
    """Run the HTTP server."""
    from ecoboard.server import run_server

    run_server(host=args.host, port=args.port, reload=args.reload)


def main():
    parser = argparse.ArgumentParser(
        description="EcoBoard: planetary-boundary scores and leaderboard"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Show command
    show_parser = subparsers.add_parser("show", help="Render the leaderboard")
    show_parser.add_argument("--config", "-c", help="Config file (YAML or JSON)")
    show_parser.add_argument("--path", help="JSON entry store")
    show_parser.add_argument("--url", help="Remote leaderboard URL")
    show_parser.add_argument("--limit", "-n", type=int, help="Maximum entries")
    show_parser.add_argument("--allow-partial", action="store_true",
                             help="Rank entries with incomplete boundary data")
    show_parser.add_argument("--json", action="store_true", help="Output JSON")

    # Score command
    score_parser = subparsers.add_parser("score", help="Score boundary values")
    for boundary in BOUNDARIES:
        score_parser.add_argument(f"--{boundary}", type=float, help=f"{boundary} score (0-100)")
    score_parser.add_argument("--allow-partial", action="store_true",
                              help="Average over the given boundaries only")
    score_parser.add_argument("--json", action="store_true", help="Output JSON")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true")

    args = parser.parse_args()
    _setup_logging(args.verbose)

    if args.command == "show":
        cmd_show(args)
    elif args.command == "score":
        cmd_score(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
