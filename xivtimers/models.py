"""
xivtimers.models
================

Dataclasses and enums representing one persisted timer record, the
outcome of classifying it, and the summary line built from a group of
them.  These objects are intentionally lightweight; they carry **no**
external-library dependencies so that importing `xivtimers` stays fast.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Hashable, Optional, Union


class Family(Enum):
    """Kinds of timed entity, each with its own classification rule."""
    CROP = "crop"            # three competing countdowns (grow / wilt / wither)
    COUNTDOWN = "countdown"  # a single due time (map allowance, voyage)

    def __str__(self) -> str:
        return self.value


class Status(Enum):
    """
    Life-cycle states of a timed record.

    Severity order, low to high::

        OKAY < GOOD < WILTING < COMPLETED < DEAD

    ``UNASSIGNED`` marks a record without a usable reference timestamp.
    It has no rank: ordering comparisons against it raise ``TypeError``.
    """
    UNASSIGNED = "unassigned"
    OKAY = "okay"
    GOOD = "good"
    WILTING = "wilting"
    COMPLETED = "completed"
    DEAD = "dead"

    def __str__(self) -> str:
        return self.name

    @property
    def severity(self) -> Optional[int]:
        """Integer rank used for "worst status" selection, ``None`` if unranked."""
        return SEVERITY.get(self)

    @property
    def is_terminal(self) -> bool:
        """End-of-life states; no further deadline is meaningful."""
        return self in (Status.COMPLETED, Status.DEAD)

    def _rank_pair(self, other: object) -> Optional[tuple[int, int]]:
        if not isinstance(other, Status):
            return None
        if self.severity is None or other.severity is None:
            return None
        return self.severity, other.severity

    def __lt__(self, other: object) -> bool:
        pair = self._rank_pair(other)
        if pair is None:
            return NotImplemented
        return pair[0] < pair[1]

    def __le__(self, other: object) -> bool:
        pair = self._rank_pair(other)
        if pair is None:
            return NotImplemented
        return pair[0] <= pair[1]

    def __gt__(self, other: object) -> bool:
        pair = self._rank_pair(other)
        if pair is None:
            return NotImplemented
        return pair[0] > pair[1]

    def __ge__(self, other: object) -> bool:
        pair = self._rank_pair(other)
        if pair is None:
            return NotImplemented
        return pair[0] >= pair[1]


SEVERITY = {
    Status.OKAY:      0,
    Status.GOOD:      1,
    Status.WILTING:   2,
    Status.COMPLETED: 3,
    Status.DEAD:      4,
}


@dataclass(frozen=True)
class TimingProfile:
    """
    Fixed timing parameters of one entity type.

    Parameters
    ----------
    entity_type : hashable
        Catalog key (e.g. a crop's item id).
    label : str
        Human-readable name, ``"(Unknown ...)"`` for catalog misses.
    family : Family
        Which classification rule applies.
    completion_duration : timedelta
        Time from ``reference_a`` until the entity is done.
    decay_delay : timedelta
        Time from ``reference_b`` until decay begins.
    grace_period : timedelta
        Time from the start of decay until the entity is lost.
    """
    entity_type: Hashable
    label: str
    family: Family
    completion_duration: timedelta = timedelta(0)
    decay_delay: timedelta = timedelta(0)
    grace_period: timedelta = timedelta(0)


@dataclass(frozen=True)
class TimedRecord:
    """
    One persisted instance of an entity.

    Parameters
    ----------
    entity_type : hashable
        Selects the :class:`TimingProfile`.
    group_key : hashable
        Identity used to aggregate records into one display line.
    reference_a : datetime | None
        Planted-at / due-at instant.  ``None`` means "not yet assigned".
    reference_b : datetime | None
        Last-serviced instant (crops only).
    label : str
        Display name of this member (submarine name, house plot...).
    group_label : str
        Display name of the whole group; empty to use the profile label.
    source : str
        Where the record came from, for diagnostics.
    approximate : bool
        The plugin flagged ``reference_a`` as inaccurate.
    """
    entity_type: Hashable
    group_key: Hashable
    reference_a: Optional[datetime] = None
    reference_b: Optional[datetime] = None
    label: str = ""
    group_label: str = ""
    source: str = ""
    approximate: bool = False


@dataclass(frozen=True)
class Milestones:
    """Absolute deadlines derived from a record and its profile."""
    decay_start: Optional[datetime] = None
    decay_end: Optional[datetime] = None
    completion: Optional[datetime] = None


@dataclass(frozen=True)
class Classified:
    """A record together with its status at a given instant."""
    record: TimedRecord
    status: Status
    milestones: Milestones


@dataclass(frozen=True)
class Skipped:
    """A source, file or row that could not be turned into a record."""
    source: str
    reason: str

    def __str__(self) -> str:
        return f"{self.source}: {self.reason}"


Outcome = Union[Classified, Skipped]
LoadResult = Union[TimedRecord, Skipped]


@dataclass(frozen=True)
class AggregatedGroup:
    """
    Summary of every record sharing one ``group_key``.

    ``overall_status`` is the worst ranked member status (``UNASSIGNED``
    only if no member is ranked); ``next_deadline`` is the soonest
    deadline of the kind implied by that status, or ``None``.
    """
    group_key: Hashable
    label: str
    family: Family
    member_count: int
    overall_status: Status
    next_deadline: Optional[datetime] = None
    approximate: bool = False
