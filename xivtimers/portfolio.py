"""
xivtimers.portfolio
===================

Group aggregation: many classified records sharing a ``group_key`` are
reduced to one :class:`xivtimers.models.AggregatedGroup`.

The group does not track "the next event overall" but the next event
*of the kind implied by its worst status*: once any plot is wilting the
line counts down to when that wilt becomes fatal, not to when some other
plot finishes growing.  The soonest member governs the group.

This module only uses the standard library so that
it can be unit-tested without any plugin files on disk.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Sequence, Union

from .catalog import next_milestone, profile_for
from .lifecycle import ProfileLookup, classify_record
from .models import AggregatedGroup, Classified, Status, TimedRecord


def worst_status(statuses: Iterable[Status]) -> Status:
    """
    Highest-severity ranked status; ``UNASSIGNED`` if none is ranked.

    Ties are irrelevant: only the status value is kept.
    """
    ranked = [s for s in statuses if s.severity is not None]
    if not ranked:
        return Status.UNASSIGNED
    return max(ranked)


def aggregate(
    members: Sequence[Union[Classified, TimedRecord]],
    now: datetime,
    lookup: ProfileLookup = profile_for,
) -> AggregatedGroup:
    """
    Reduce *members* (all sharing one ``group_key``) to an AggregatedGroup.

    Plain :class:`TimedRecord` members are classified at *now* first;
    already :class:`Classified` members are taken as they are, so pass
    the same *now* they were classified with.  Unassigned members never
    contribute a deadline.

    Raises
    ------
    ValueError
        If *members* is empty or mixes group keys.
    """
    if not members:
        raise ValueError("cannot aggregate an empty group")
    members = [
        m if isinstance(m, Classified) else classify_record(m, now, lookup)
        for m in members
    ]
    key = members[0].record.group_key
    if any(m.record.group_key != key for m in members):
        raise ValueError(f"mixed group keys in group {key!r}")

    profile = lookup(members[0].record.entity_type)
    overall = worst_status(m.status for m in members)

    deadline: Optional[datetime] = None
    field_name = None if overall.is_terminal else next_milestone(profile.family, overall)
    if field_name is not None:
        # only Good members count toward a Good group's completion
        candidates = [
            getattr(m.milestones, field_name)
            for m in members
            if m.status is not Status.UNASSIGNED
            and (overall is not Status.GOOD or m.status is Status.GOOD)
        ]
        candidates = [c for c in candidates if c is not None]
        deadline = min(candidates) if candidates else None

    return AggregatedGroup(
        group_key=key,
        label=members[0].record.group_label or profile.label,
        family=profile.family,
        member_count=len(members),
        overall_status=overall,
        next_deadline=deadline,
        approximate=any(m.record.approximate for m in members),
    )


class GroupPortfolio:
    """
    Dictionary-backed registry of classified records, keyed by group.

    Example
    -------
    >>> from datetime import datetime, timezone
    >>> from xivtimers.lifecycle import classify_record
    >>> from xivtimers.models import TimedRecord
    >>> now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    >>> gp = GroupPortfolio()
    >>> gp.add(classify_record(TimedRecord(4842, 4842), now))
    >>> [g.overall_status for g in gp.groups(now)]
    [<Status.UNASSIGNED: 'unassigned'>]
    """

    def __init__(self, lookup: ProfileLookup = profile_for) -> None:
        self._lookup = lookup
        self._members: Dict[Hashable, List[Classified]] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def add(self, item: Classified) -> None:
        """File *item* under its record's group key."""
        self._members.setdefault(item.record.group_key, []).append(item)

    def get(self, group_key: Hashable) -> List[Classified]:
        """Members of one group (raise KeyError if not present)."""
        return list(self._members[group_key])

    def groups(self, now: datetime) -> List[AggregatedGroup]:
        """Aggregate every group, ordered by group key ascending."""
        return [
            aggregate(self._members[key], now, self._lookup)
            for key in sorted(self._members, key=_sort_key)
        ]

    def find_by_status(self, status: Status, now: datetime) -> List[AggregatedGroup]:
        """Return all groups whose overall status is *status*."""
        return [g for g in self.groups(now) if g.overall_status is status]

    # ------------------------------------------------------------------
    # Dunder helpers for convenience
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[Hashable]:
        return iter(sorted(self._members, key=_sort_key))

    def __len__(self) -> int:
        return len(self._members)


def _sort_key(key: Hashable):
    # group keys are ints (crop ids) or tuples of strings; keep them apart
    return (type(key).__name__, key)
