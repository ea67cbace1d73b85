#!/usr/bin/env python3
"""
run.py – CLI entry-point for the Story Spoiler end-to-end checks.

Usage:
    python run.py
    python run.py --only 5,6,7 -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence

import requests
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from config import Settings
from errors import AuthenticationError
from models import Outcome, RunReport, ScenarioResult
from scenarios import Scenario
from sequencer import run_scenarios, select_scenarios, validate_plan
from story_client import StoryClient, open_session

console = Console()

_OUTCOME_STYLE = {
    Outcome.PASSED: "[green]PASS[/]",
    Outcome.FAILED: "[red]FAIL[/]",
    Outcome.ERROR: "[red bold]ERROR[/]",
    Outcome.PRECONDITION: "[yellow]PRECONDITION[/]",
}

# ── Logging ─────────────────────────────────────────────────────────────

def _configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, markup=False)],
    )


# ── Pretty output helpers ──────────────────────────────────────────────

def _show_plan(plan: Sequence[Scenario]) -> None:
    table = Table(title="Scenario Plan", show_lines=False)
    table.add_column("#", style="dim", width=4)
    table.add_column("Scenario", style="bold")
    table.add_column("Needs story", width=12, justify="center")

    for scenario in plan:
        table.add_row(
            str(scenario.order),
            scenario.name,
            "yes" if scenario.requires_story_id else "—",
        )
    console.print(table)


def _show_result_line(result: ScenarioResult) -> None:
    console.print(
        f"  {_OUTCOME_STYLE[result.outcome]}  {result.order}. {result.name} "
        f"[dim]({result.duration:.2f}s)[/]"
    )


def _show_results(report: RunReport) -> None:
    table = Table(title="Scenario Results", show_lines=True)
    table.add_column("#", style="dim", width=4)
    table.add_column("Scenario", style="bold")
    table.add_column("Result", width=14)
    table.add_column("Detail")

    for r in report.results:
        table.add_row(str(r.order), r.name, _OUTCOME_STYLE[r.outcome], escape(r.detail) or "—")
    console.print()
    console.print(table)

    style = "green" if report.ok else "red"
    console.print(
        Panel(
            f"[green bold]Passed:[/]  {report.passed_count}\n"
            f"[red bold]Failed:[/]  {report.failed_count}",
            title="Run Summary",
            border_style=style,
        )
    )


# ── Core orchestration ─────────────────────────────────────────────────

def run(
    plan: Sequence[Scenario],
    session_factory: Callable[[], requests.Session] = requests.Session,
) -> RunReport:
    """Authenticate once, then run every scenario of *plan* in order."""
    # ── Phase 1: Authenticate ───────────────────────────────────────
    console.rule("[bold blue]Phase 1 · Authenticate")
    credentials = Settings.credentials()
    with open_session(Settings.BASE_URL, credentials, session_factory) as session:
        console.print(
            f"  Logged in to [cyan]{Settings.BASE_URL}[/] as "
            f"[bold]{credentials.username}[/].\n"
        )

        # ── Phase 2: Scenarios ──────────────────────────────────────
        console.rule("[bold blue]Phase 2 · Scenarios")
        report = run_scenarios(StoryClient(session), plan, on_result=_show_result_line)

    _show_results(report)
    return report


# ── CLI ─────────────────────────────────────────────────────────────────

def _parse_orders(raw: str) -> list[int]:
    try:
        orders = [int(part) for part in raw.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected comma-separated scenario numbers, got '{raw}'"
        )
    if not orders:
        raise argparse.ArgumentTypeError("no scenario numbers given")
    return orders


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="story-spoiler-e2e",
        description="End-to-end CRUD checks for the Story Spoiler API.",
    )
    parser.add_argument(
        "--only",
        type=_parse_orders,
        default=None,
        help="Comma-separated scenario numbers to run (default: all, in order).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    console.print(
        Panel(
            "[bold white]Story Spoiler E2E[/]  –  ordered CRUD checks",
            border_style="bright_magenta",
        )
    )

    Settings.validate()

    try:
        plan = select_scenarios(args.only)
        validate_plan(plan)
    except ValueError as exc:
        console.print(f"[red bold]Invalid scenario selection:[/] {escape(str(exc))}")
        sys.exit(2)
    _show_plan(plan)

    try:
        report = run(plan)
    except AuthenticationError as exc:
        console.print(f"\n[red bold]Authentication failed:[/] {escape(str(exc))}")
        sys.exit(2)
    except KeyboardInterrupt:
        console.print("\n[red]Aborted by user.[/]")
        sys.exit(130)
    except Exception as exc:
        console.print(f"\n[red bold]Error:[/] {escape(str(exc))}")
        logging.getLogger("story-spoiler").debug("Traceback:", exc_info=True)
        sys.exit(1)

    sys.exit(0 if report.ok else 1)


if __name__ == "__main__":
    main()
