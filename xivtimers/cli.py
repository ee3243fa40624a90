"""
xivtimers.cli
=============

Console entry points.  Each report is a zero-argument command:

    $ crop-timers
    $ map-allowances
    $ sub-returns
    $ inventory-tracker
    $ xivtimers            # all of the above

``python -m xivtimers.cli [crops|maps|subs|ventures]`` does the same.

"now" is sampled once per run and handed to classification, aggregation
and formatting alike, so a line can never be classified against one
instant and rendered against another.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Optional

from rich.console import Console
from rich.text import Text

from .formatting import format_absolute, format_deadline, format_status, severity_tag
from .lifecycle import classify_all
from .models import Classified, Skipped, Status
from .portfolio import GroupPortfolio
from .settings import Settings, get_settings
from .sources import (
    CropSource,
    MapAllowanceSource,
    RecordSource,
    VentureSource,
    submarine_source,
)

logger = logging.getLogger("xivtimers")

HEADING_STYLE = "rgb(255,255,255)"
TAG_STYLES: Dict[str, str] = {
    "idle":     "magenta",
    "caution":  "yellow",
    "on_track": "cyan",
    "at_risk":  "magenta",
    "ready":    "green",
    "lost":     "red",
}


# ---------------------------------------------------------------------------
# Plumbing
# ---------------------------------------------------------------------------
def configure_logging(level: str = "WARNING") -> None:
    """Send diagnostics to stderr, leaving stdout to the report."""
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def make_console(settings: Settings) -> Console:
    if settings.color:
        return Console(force_terminal=True, highlight=False)
    return Console(no_color=True, highlight=False)


def report_skipped(item: Skipped) -> None:
    logger.warning("Skipped %s", item)


def collect(source: RecordSource, now: datetime) -> GroupPortfolio:
    """Load, classify and group everything *source* yields."""
    portfolio = GroupPortfolio(source.profile_for)
    for outcome in classify_all(source.load(), now, source.profile_for):
        if isinstance(outcome, Skipped):
            report_skipped(outcome)
        else:
            portfolio.add(outcome)
    return portfolio


def styled(text: str, tag: str) -> Text:
    return Text(text, style=TAG_STYLES[tag])


def heading(text: str) -> Text:
    return Text(text, style=HEADING_STYLE)


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------
def render_crops(console: Console, portfolio: GroupPortfolio, now: datetime) -> None:
    console.print(heading("Crops:"))
    for group in portfolio.groups(now):
        text, tag = format_status(group.overall_status, group.next_deadline, now)
        count = f"{group.member_count}{'?' if group.approximate else ''}"
        console.print(styled(f"   {group.label} ({count}) {text}", tag))


def _due(members: Iterable[Classified]) -> Optional[datetime]:
    dues = [m.milestones.completion for m in members if m.milestones.completion is not None]
    return min(dues) if dues else None


def render_map_allowances(console: Console, portfolio: GroupPortfolio, now: datetime) -> None:
    groups = portfolio.groups(now)
    if not groups:
        return
    width = max(len(g.label) for g in groups)

    console.print(heading("Map Allowances"))
    for group in groups:
        tag = severity_tag(group.overall_status)
        due = _due(portfolio.get(group.group_key))
        if due is None:
            display = "Unassigned"
        else:
            display = f"{format_deadline(due, now)} ({format_absolute(due)})"
        console.print(styled(f"    {group.label:<{width}} - {display}", tag))


def render_submarines(console: Console, portfolio: GroupPortfolio, now: datetime) -> None:
    for group in portfolio.groups(now):
        members = portfolio.get(group.group_key)
        title = f"Submarines | {group.label} | {group.member_count}"
        if group.next_deadline is not None:
            title += f" | next {format_deadline(group.next_deadline, now)}"
        console.print(heading(title))

        width = max(len(m.record.label) for m in members)
        for member in members:
            name = member.record.label
            tag = severity_tag(member.status)
            due = member.milestones.completion
            if member.status is Status.UNASSIGNED:
                line = f"    {name:^{width}} - Unassigned"
            elif member.status is Status.COMPLETED:
                line = f"    {name:^{width}} - Voyage complete"
            else:
                line = f"    {name:<{width}} - {format_deadline(due, now)} ({format_absolute(due)})"
            console.print(styled(line, tag))


def render_ventures(console: Console, source: VentureSource) -> None:
    for item in source.load():
        if isinstance(item, Skipped):
            report_skipped(item)
            continue
        console.print(heading(f"{item.name} ({item.world}) has {item.quantity} ventures"))


# ---------------------------------------------------------------------------
# Runners
# ---------------------------------------------------------------------------
def run_crops(settings: Settings, console: Console, now: datetime) -> None:
    render_crops(console, collect(CropSource(settings.crops_dir), now), now)


def run_map_allowances(settings: Settings, console: Console, now: datetime) -> None:
    source = MapAllowanceSource(settings.tasks_dir, since=now - settings.map_retention)
    render_map_allowances(console, collect(source, now), now)


def run_submarines(settings: Settings, console: Console, now: datetime) -> None:
    source = submarine_source(settings.submarine_dir, settings.submarine_db)
    render_submarines(console, collect(source, now), now)


def run_ventures(settings: Settings, console: Console, now: datetime) -> None:
    source = VentureSource(settings.inventory_csv, settings.inventory_meta, settings.venture_item_id)
    render_ventures(console, source)


REPORTS: Dict[str, Callable[[Settings, Console, datetime], None]] = {
    "crops": run_crops,
    "maps": run_map_allowances,
    "subs": run_submarines,
    "ventures": run_ventures,
}


def run(
    names: Iterable[str],
    settings: Optional[Settings] = None,
    console: Optional[Console] = None,
    now: Optional[datetime] = None,
) -> int:
    """Run the named reports against one shared instant; return an exit code."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    console = console or make_console(settings)
    now = now or datetime.now(timezone.utc)
    for name in names:
        REPORTS[name](settings, console, now)
    return 0


# ---------------------------------------------------------------------------
# Console scripts
# ---------------------------------------------------------------------------
def crop_timers() -> None:
    sys.exit(run(["crops"]))


def map_allowances() -> None:
    sys.exit(run(["maps"]))


def sub_returns() -> None:
    sys.exit(run(["subs"]))


def inventory_tracker() -> None:
    sys.exit(run(["ventures"]))


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="xivtimers",
        description="Print crop, map allowance, submarine and venture reports.",
    )
    parser.add_argument(
        "reports",
        nargs="*",
        metavar="report",
        help=f"one of {', '.join(REPORTS)} (default: all)",
    )
    args = parser.parse_args(argv)
    unknown = [name for name in args.reports if name not in REPORTS]
    if unknown:
        parser.error(f"unknown report(s): {', '.join(unknown)}")
    sys.exit(run(args.reports or list(REPORTS)))


if __name__ == "__main__":
    main()
