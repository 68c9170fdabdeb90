"""CLI entrypoint: score a compliance snapshot and show the effective configuration."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timezone
from typing import NoReturn

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from charity_compliance.config import ScoringConfig, load_scoring_config
from charity_compliance.loader import SnapshotError, load_snapshot
from charity_compliance.log import setup_logging
from charity_compliance.models import ComplianceLevel, ComplianceStatistics, Priority
from charity_compliance.scoring.engine import ComplianceEngine

console = Console()

LEVEL_COLORS = {
    ComplianceLevel.EXCELLENT: "bold green",
    ComplianceLevel.GOOD: "green",
    ComplianceLevel.NEEDS_ATTENTION: "yellow",
    ComplianceLevel.AT_RISK: "bold red",
}

PRIORITY_COLORS = {
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "cyan",
}


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]")
    sys.exit(1)


def _load_config(path: str | None) -> ScoringConfig:
    try:
        return load_scoring_config(path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        _fail(f"Cannot load scoring config: {e}")
    except ValidationError as e:
        _fail(f"Invalid scoring config:\n{e}")


def _parse_now(value: str) -> datetime:
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO timestamp: {value!r}") from None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def print_statistics(stats: ComplianceStatistics) -> None:
    scores = stats.scores
    b = scores.breakdown
    style = LEVEL_COLORS.get(scores.level, "white")

    console.print(Panel(
        f"[bold]{scores.message}[/bold]\nas of {stats.as_of.strftime('%Y-%m-%d %H:%M %Z')}",
        title=f"[{style}]{scores.level.value}[/{style}] - Overall: {scores.overall}%",
        border_style=style.split()[-1],
    ))

    table = Table(title="Domain Scores", show_lines=True)
    table.add_column("Domain", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Level", justify="center")
    table.add_column("Key Counts")

    rows = [
        ("Safeguarding", scores.safeguarding,
         f"total={b.safeguarding.total_records}, valid={b.safeguarding.valid_records}, "
         f"expiring={b.safeguarding.expiring_records}, expired={b.safeguarding.expired_records}"),
        ("Overseas", scores.overseas,
         f"total={b.overseas.total_activities}, high_risk={b.overseas.high_risk_activities}, "
         f"unreported={b.overseas.unreported_activities}, "
         f"sanctions={b.overseas.sanctions_check_required}"),
        ("Income", scores.income,
         f"total={b.income.total_records}, documented={b.income.documented_records}, "
         f"related_party={b.income.related_party_records}, "
         f"gift_aid_unclaimed={b.income.gift_aid_eligible}"),
    ]
    for name, score, counts in rows:
        level = stats.domain_levels[name.lower()]
        ls = LEVEL_COLORS.get(level, "white")
        table.add_row(name, str(score), f"[{ls}]{level.value}[/{ls}]", counts)

    console.print(table)

    if stats.trend is not None:
        t = stats.trend
        console.print(
            f"  Trend: {t.direction.value} ({t.change:+.1f} since {t.previous}%)"
        )

    if stats.action_items:
        actions = Table(title="Action Items", show_header=True)
        actions.add_column("Priority", justify="center")
        actions.add_column("Domain", style="cyan")
        actions.add_column("Action")
        actions.add_column("Details")
        for item in stats.action_items:
            ps = PRIORITY_COLORS.get(item.priority, "white")
            actions.add_row(
                f"[{ps}]{item.priority.value}[/{ps}]",
                item.category,
                item.title,
                item.description,
            )
        console.print(actions)
    else:
        console.print("[green]No action items.[/green]")
    console.print()


def cmd_score(args: argparse.Namespace) -> None:
    """Score a snapshot file and print the results."""
    config = _load_config(args.config)

    try:
        snapshot = load_snapshot(args.snapshot)
    except SnapshotError as e:
        _fail(str(e))

    # The CLI owns the clock; the engine only ever receives it
    now = args.now or snapshot.as_of or datetime.now(timezone.utc)
    previous = args.previous_score if args.previous_score is not None else snapshot.previous_score

    engine = ComplianceEngine(config)
    stats = engine.statistics(snapshot.inputs, snapshot.countries, now, previous)

    if args.json:
        print(stats.model_dump_json(indent=2))
    else:
        print_statistics(stats)


def cmd_config(args: argparse.Namespace) -> None:
    """Print the effective scoring configuration."""
    config = _load_config(args.config)

    table = Table(title="Scoring Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in config.model_dump().items():
        table.add_row(name, str(value))
    console.print(table)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="compliance-score",
        description="Charity compliance scoring engine",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override COMPLIANCE_LOG_LEVEL",
    )
    sub = parser.add_subparsers(dest="command")

    # score subcommand
    sc = sub.add_parser("score", help="Score a JSON compliance snapshot")
    sc.add_argument("snapshot", help="Path to the snapshot JSON file")
    sc.add_argument("--now", type=_parse_now, help="ISO timestamp to score at (default: snapshot as_of, then now)")
    sc.add_argument("--previous-score", type=int, help="Previous overall score for the trend")
    sc.add_argument("--config", help="JSON file overriding scoring configuration")
    sc.add_argument("--json", action="store_true", help="Print statistics as JSON")

    # config subcommand
    cf = sub.add_parser("config", help="Show the effective scoring configuration")
    cf.add_argument("--config", help="JSON file overriding scoring configuration")

    args = parser.parse_args(argv)

    if args.log_level:
        setup_logging(args.log_level)
    else:
        setup_logging()

    if args.command == "score":
        cmd_score(args)
    elif args.command == "config":
        cmd_config(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
