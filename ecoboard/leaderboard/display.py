"""
Rich terminal display for the EcoBoard leaderboard.

Renders four sections:
  1. Header panel (participants, average score, A-grade heroes)
  2. Warning banner when demo/fallback data is shown
  3. Champions podium (top three)
  4. Rankings table

Scores are stored lower-is-better; everything shown here goes through
display_score() so the table reads higher-is-better.
"""

from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich import box

from ecoboard.leaderboard.data import LeaderboardEntry, LeaderboardResult, leaderboard_stats
from ecoboard.scoring.grades import ScoreDirection, display_score, grade_band


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

_GRADE_COLORS = {
    "A": "bold bright_green",
    "B": "bright_blue",
    "C": "yellow",
    "D": "orange1",
    "F": "red",
}


def _grade_markup(grade: str) -> str:
    color = _GRADE_COLORS.get(grade_band(grade), "dim")
    return f"[{color}]{grade}[/]"


def _score_color(shown: float) -> str:
    if shown >= 80:
        return "bold bright_green"
    if shown >= 60:
        return "green"
    if shown >= 50:
        return "yellow"
    if shown >= 30:
        return "orange1"
    return "red"


def _rank_badge(rank: int) -> str:
    if rank == 1:
        return "[bold gold1]#1[/]"
    if rank == 2:
        return "[bold bright_white]#2[/]"
    if rank == 3:
        return "[bold orange1]#3[/]"
    return f"[dim]#{rank}[/]"


_MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


# ---------------------------------------------------------------------------
# Main renderer
# ---------------------------------------------------------------------------


def render_leaderboard(
    result: LeaderboardResult,
    direction: ScoreDirection = "lower_is_better",
    console: Optional[Console] = None,
) -> None:
    """Render a pipeline result to the terminal."""
    if console is None:
        console = Console()

    if not result.success:
        console.print(Panel(
            f"[bold red]{result.error}[/]",
            title="[bold red]Leaderboard unavailable[/]",
            border_style="red",
            expand=False,
        ))
        return

    entries: List[LeaderboardEntry] = result.leaderboard
    stats = leaderboard_stats(entries)
    avg_shown = display_score(stats["average_score"], direction) if entries else 0.0

    # === Header panel =====================================================
    console.print()
    console.print(Panel(
        Text.assemble(
            ("ECOLEADERBOARD", "bold bright_white"),
            "\n\n",
            (f"{result.total_users} participants", "cyan"),
            ("  •  ", "dim"),
            (f"avg EcoScore {avg_shown:.1f}", "cyan"),
            ("  •  ", "dim"),
            (f"{stats['a_grades']} A-grade eco heroes", "cyan"),
            "\n",
            (result.message or "", "dim"),
        ),
        title="[bold bright_green]  ECOBOARD  [/]",
        border_style="green",
        expand=False,
        padding=(0, 2),
    ))

    if result.warning:
        console.print(Panel(
            f"[yellow]{result.warning}[/]",
            title="[bold yellow]⚠ Demo data[/]",
            border_style="yellow",
            expand=False,
        ))
    console.print()

    if not entries:
        console.print("[dim]No leaderboard data available yet.[/]")
        console.print()
        return

    # === Podium ===========================================================
    podium = Table(
        box=box.ROUNDED,
        show_header=False,
        title="[bold]Champions Podium[/]",
        pad_edge=True,
    )
    for _ in entries[:3]:
        podium.add_column(justify="center", width=24)
    podium.add_row(*[
        Text.assemble(
            (f"{_MEDALS[e.rank]}\n", ""),
            (f"{e.pseudonym}\n", "bold"),
            (f"{display_score(e.composite_score, direction):.1f}\n", _score_color(display_score(e.composite_score, direction))),
            (f"Grade {e.grade}", "dim"),
        )
        for e in entries[:3]
    ])
    console.print(podium)
    console.print()

    # === Rankings =========================================================
    main = Table(
        box=box.ROUNDED,
        show_header=True,
        header_style="bold dim",
        title="[bold]Rankings[/]",
        min_width=80,
        pad_edge=True,
    )
    main.add_column("#", width=4, justify="right")
    main.add_column("Name", width=20)
    main.add_column("EcoScore", width=9, justify="right")
    main.add_column("Grade", width=6, justify="center")
    main.add_column("Campus", width=22, style="dim")
    main.add_column("Date", width=11, style="dim")

    for e in entries:
        shown = display_score(e.composite_score, direction)
        main.add_row(
            _rank_badge(e.rank),
            e.pseudonym,
            f"[{_score_color(shown)}]{shown:.1f}[/]",
            _grade_markup(e.grade),
            e.campus_affiliation,
            e.timestamp[:10],
        )

    console.print(main)

    diagnostics = result.diagnostics
    if diagnostics:
        console.print(
            f"[dim]{diagnostics['rejected']} entries rejected  •  "
            f"{diagnostics['partial']} partially measured[/]"
        )
    console.print()
