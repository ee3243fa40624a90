"""
xivtimers.lifecycle
===================

Status classifier for a :class:`xivtimers.models.TimedRecord`.

Crops race three countdowns against each other::

    decay_start = last_tended + decay_delay      (starts wilting)
    decay_end   = decay_start + grace_period     (withers, lost for good)
    completion  = planted     + completion       (ready to harvest)

The order in which the deadlines fall matters as much as whether *now*
has passed them: a crop whose completion comes before its decay_end can
no longer die, while one that withers first is lost once decay_end is in
the past even though its completion time has also gone by.

Single-deadline entities (map allowances, submarine voyages) reduce to a
two-state check against ``completion``.

Every function here is pure: the caller samples *now* once and passes the
same instant to classification, aggregation and formatting.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Hashable, Iterable, Iterator

from .catalog import profile_for
from .models import (
    Classified,
    Family,
    LoadResult,
    Milestones,
    Outcome,
    Skipped,
    Status,
    TimedRecord,
    TimingProfile,
)

ProfileLookup = Callable[[Hashable], TimingProfile]


def is_unassigned(record: TimedRecord, profile: TimingProfile) -> bool:
    """True if a reference timestamp the profile's family needs is absent."""
    if record.reference_a is None:
        return True
    return profile.family is Family.CROP and record.reference_b is None


def milestones(record: TimedRecord, profile: TimingProfile) -> Milestones:
    """
    Absolute deadlines of *record*.

    Unassigned records get an empty :class:`Milestones` so they can never
    take part in deadline arithmetic.
    """
    if is_unassigned(record, profile):
        return Milestones()
    completion = record.reference_a + profile.completion_duration
    if profile.family is Family.COUNTDOWN:
        return Milestones(completion=completion)
    decay_start = record.reference_b + profile.decay_delay
    return Milestones(
        decay_start=decay_start,
        decay_end=decay_start + profile.grace_period,
        completion=completion,
    )


def classify(record: TimedRecord, profile: TimingProfile, now: datetime) -> Status:
    """
    Return the :class:`Status` of *record* at *now*.

    Examples
    --------
    >>> from datetime import timedelta, timezone
    >>> now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    >>> rec = TimedRecord(8165, 8165, now - timedelta(days=4), now - timedelta(hours=1))
    >>> classify(rec, profile_for(8165), now)
    <Status.COMPLETED: 'completed'>
    """
    ms = milestones(record, profile)
    if ms.completion is None:
        return Status.UNASSIGNED

    if profile.family is Family.COUNTDOWN:
        return Status.COMPLETED if ms.completion <= now else Status.OKAY

    if ms.decay_end < ms.completion and ms.decay_end < now:
        return Status.DEAD
    if ms.completion < now:
        return Status.COMPLETED
    if ms.completion < ms.decay_end:
        return Status.GOOD
    if ms.decay_start < now:
        return Status.WILTING
    return Status.OKAY


def classify_record(
    record: TimedRecord,
    now: datetime,
    lookup: ProfileLookup = profile_for,
) -> Classified:
    """Classify *record* with the profile *lookup* resolves for its entity type."""
    profile = lookup(record.entity_type)
    return Classified(
        record=record,
        status=classify(record, profile, now),
        milestones=milestones(record, profile),
    )


def classify_all(
    items: Iterable[LoadResult],
    now: datetime,
    lookup: ProfileLookup = profile_for,
) -> Iterator[Outcome]:
    """
    Turn a stream of loaded records into classified outcomes.

    :class:`Skipped` entries pass through untouched so the caller decides
    how to report them.
    """
    for item in items:
        if isinstance(item, Skipped):
            yield item
        else:
            yield classify_record(item, now, lookup)
