"""
xivtimers.catalog
=================

Static lookup tables: per-crop timing parameters, world names, and the
per-family label / deadline-selection tables.

All tables are read-only mappings built once at import time.  Every
lookup is total: an id the tables do not know about resolves to a
documented fallback (zero durations, ``"(Unknown ...)"`` label) so that
new content added by the game never crashes a report.
"""

from __future__ import annotations

from datetime import timedelta
from types import MappingProxyType
from typing import Hashable, Mapping, Optional

from .models import Family, Status, TimingProfile

UNKNOWN_CROP = "(Unknown Crop)"
UNKNOWN_SERVER = "(Unknown Server)"

# Every crop withers one day after it starts wilting.
WITHER_GRACE = timedelta(days=1)

# ---------------------------------------------------------------------
# Crops: item id → (name, grow time, wilt delay after last tending)
# ---------------------------------------------------------------------
_CROPS = {
    4842:  ("Almond",        timedelta(days=5), timedelta(hours=48)),
    6146:  ("Mirror Apple",  timedelta(days=5), timedelta(hours=48)),
    7604:  ("Royal Kukuru",  timedelta(days=6), timedelta(hours=36)),
    7895:  ("Sylkis Bud",    timedelta(days=5), timedelta(hours=48)),
    8165:  ("Krakka Root",   timedelta(days=3), timedelta(hours=24)),
    12896: ("Old World Fig", timedelta(days=5), timedelta(hours=48)),
}

CROP_PROFILES: Mapping[Hashable, TimingProfile] = MappingProxyType({
    crop_id: TimingProfile(
        entity_type=crop_id,
        label=name,
        family=Family.CROP,
        completion_duration=grow,
        decay_delay=wilt,
        grace_period=WITHER_GRACE,
    )
    for crop_id, (name, grow, wilt) in _CROPS.items()
})

WORLDS: Mapping[int, str] = MappingProxyType({
    72: "Tonberry",
    91: "Balmung",
})

# ---------------------------------------------------------------------
# Which milestone a group tracks next, given its overall status.
# Statuses absent from a table have no next deadline.
# ---------------------------------------------------------------------
NEXT_MILESTONE: Mapping[Family, Mapping[Status, str]] = MappingProxyType({
    Family.CROP: MappingProxyType({
        Status.OKAY:    "decay_start",
        Status.WILTING: "decay_end",
        Status.GOOD:    "completion",
    }),
    Family.COUNTDOWN: MappingProxyType({
        Status.OKAY: "completion",
    }),
})


def profile_for(entity_type: Hashable) -> TimingProfile:
    """
    Return the crop :class:`TimingProfile` for *entity_type*.

    Unknown ids get an all-zero profile labelled ``"(Unknown Crop)"``
    instead of raising.
    """
    profile = CROP_PROFILES.get(entity_type)
    if profile is None:
        return TimingProfile(entity_type=entity_type, label=UNKNOWN_CROP, family=Family.CROP)
    return profile


def countdown_profile(entity_type: Hashable, label: str = "") -> TimingProfile:
    """Zero-duration single-deadline profile (the record carries its due time)."""
    return TimingProfile(entity_type=entity_type, label=label, family=Family.COUNTDOWN)


def world_name(world_id: Optional[int]) -> str:
    """Return the server name for *world_id*, ``"(Unknown Server)"`` if unknown."""
    if world_id is None:
        return UNKNOWN_SERVER
    return WORLDS.get(world_id, UNKNOWN_SERVER)


def next_milestone(family: Family, status: Status) -> Optional[str]:
    """Name of the :class:`~xivtimers.models.Milestones` field a group at *status* tracks."""
    return NEXT_MILESTONE[family].get(status)
