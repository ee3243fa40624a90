"""
xivtimers.formatting
====================

Pure helpers that turn a status + deadline into display text and a
severity tag.  Nothing here writes to a stream: the caller owns the
console and maps tags to colours.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from types import MappingProxyType
from typing import Optional, Tuple

from .models import Status

ELAPSED = "ready"
PLACEHOLDER = ""
ABSOLUTE_FORMAT = "%Y-%m-%d %H:%M:%S"

SEVERITY_TAGS = MappingProxyType({
    Status.UNASSIGNED: "idle",
    Status.OKAY:       "caution",
    Status.GOOD:       "on_track",
    Status.WILTING:    "at_risk",
    Status.COMPLETED:  "ready",
    Status.DEAD:       "lost",
})


def severity_tag(status: Status) -> str:
    """Fixed tag for *status*; every status is mapped."""
    return SEVERITY_TAGS[status]


def format_countdown(remaining: timedelta) -> str:
    """
    ``HH:MM:SS`` for a positive *remaining* time, truncated to whole seconds.

    Hours are not wrapped at 24:

    >>> format_countdown(timedelta(hours=25, minutes=3, seconds=9))
    '25:03:09'
    """
    total = int(remaining.total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02}:{minutes:02}:{seconds:02}"


def format_deadline(deadline: Optional[datetime], now: datetime) -> str:
    """Countdown to *deadline*, the elapsed indicator, or the placeholder."""
    if deadline is None:
        return PLACEHOLDER
    if deadline <= now:
        return ELAPSED
    return format_countdown(deadline - now)


def format_status(
    status: Status,
    deadline: Optional[datetime],
    now: datetime,
) -> Tuple[str, str]:
    """Return ``(display_text, severity_tag)`` for one group line."""
    return format_deadline(deadline, now), severity_tag(status)


def format_absolute(when: datetime) -> str:
    """*when* in the local time zone, rounded to the second."""
    local = when.astimezone()
    if local.microsecond >= 500_000:
        local += timedelta(seconds=1)
    return local.replace(microsecond=0).strftime(ABSOLUTE_FORMAT)
