"""
xivtimers.sources.submarines
============================

Readers for the *SubmarineTracker* plugin.

Older plugin versions write one JSON file per character; newer ones keep
everything in ``submarine-sqlite.db``.  :func:`submarine_source` picks the
database when it exists and falls back to the JSON folder otherwise.
Either way every submarine becomes one record, grouped by its owner.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List

from pydantic import BaseModel, Field

from xivtimers.catalog import countdown_profile
from xivtimers.db import SessionLocal, SourceError, all_fleets
from xivtimers.models import LoadResult, Skipped, TimedRecord
from .base import LenientTimestamp, RecordSource, iter_json_files, read_model

logger = logging.getLogger(__name__)

SUBMARINE_ENTITY = "submarine"


def fleet_label(character: str, tag: str, world: str) -> str:
    return f"{character} «{tag}» ({world})"


# ---------------------------------------------------------------------------
# Schema: JSON export
# ---------------------------------------------------------------------------
class Submarine(BaseModel):
    name: str = Field(alias="Name")
    return_time: LenientTimestamp = Field(None, alias="ReturnTime")


class Character(BaseModel):
    character_name: str = Field(alias="CharacterName")
    world: str = Field(alias="World")
    tag: str = Field("", alias="Tag")
    submarines: List[Submarine] = Field(default_factory=list, alias="Submarines")


# ---------------------------------------------------------------------------
# Readers
# ---------------------------------------------------------------------------
class SubmarineJsonSource(RecordSource):
    """One record per submarine found in the per-character JSON files."""

    name = "submarines"
    profile_for = staticmethod(countdown_profile)

    def __init__(self, folder: Path) -> None:
        self.folder = Path(folder)

    def load(self) -> Iterator[LoadResult]:
        for path in iter_json_files(self.folder):
            if isinstance(path, Skipped):
                yield path
                continue
            data = read_model(path, Character)
            if isinstance(data, Skipped):
                yield data
                continue
            if not data.submarines:
                continue

            key = (data.character_name, data.world)
            label = fleet_label(data.character_name, data.tag, data.world)
            for sub in data.submarines:
                yield TimedRecord(
                    entity_type=SUBMARINE_ENTITY,
                    group_key=key,
                    reference_a=sub.return_time,
                    label=sub.name,
                    group_label=label,
                    source=str(path),
                )


class SubmarineDbSource(RecordSource):
    """One record per submarine row in the plugin's SQLite database (read-only)."""

    name = "submarines"
    profile_for = staticmethod(countdown_profile)

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)

    def load(self) -> Iterator[LoadResult]:
        try:
            with SessionLocal(self.db_path) as s:
                fleets = all_fleets(s)
        except SourceError as exc:
            yield Skipped(str(self.db_path), f"failed to read database ({exc})")
            return

        for fc, subs in fleets:
            if not subs:
                continue
            key = (fc.character_name, fc.world)
            label = fleet_label(fc.character_name, fc.tag, fc.world)
            for sub in subs:
                yield TimedRecord(
                    entity_type=SUBMARINE_ENTITY,
                    group_key=key,
                    reference_a=sub.return_time(),
                    label=sub.name,
                    group_label=label,
                    source=f"{self.db_path}#{fc.free_company_id}",
                )


def submarine_source(folder: Path, db_path: Path) -> RecordSource:
    """Database reader if *db_path* exists, JSON folder reader otherwise."""
    if Path(db_path).is_file():
        logger.debug("Reading submarines from %s", db_path)
        return SubmarineDbSource(db_path)
    return SubmarineJsonSource(folder)
