"""
xivtimers.sources.accountant
============================

Readers for the *Accountant* plugin's per-character JSON snapshots.

Both snapshot kinds are .NET tuples serialised as ``{"Item1": ..., "Item2": ...}``:

* ``crops_plot/*.json`` – house location + list of planted crops
* ``tasks/*.json``      – character + next map-allowance time
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional

from pydantic import BaseModel, Field

from xivtimers.catalog import countdown_profile, world_name
from xivtimers.models import LoadResult, Skipped, TimedRecord
from .base import LenientTimestamp, RecordSource, iter_json_files, read_model

logger = logging.getLogger(__name__)

MAP_ENTITY = "map_allowance"


# ---------------------------------------------------------------------------
# Schema: crops
# ---------------------------------------------------------------------------
class HouseInfo(BaseModel):
    zone: int = Field(alias="Zone")
    server_id: int = Field(alias="ServerId")
    ward: int = Field(alias="Ward")
    plot: int = Field(alias="Plot")


class CropInfo(BaseModel):
    plant_time: LenientTimestamp = Field(None, alias="PlantTime")
    last_tending: LenientTimestamp = Field(None, alias="LastTending")
    plant_id: int = Field(alias="PlantId")
    accurate_plant_time: bool = Field(True, alias="AccuratePlantTime")


class AccountantCropData(BaseModel):
    house_info: HouseInfo = Field(alias="Item1")
    crops: List[CropInfo] = Field(alias="Item2")


# ---------------------------------------------------------------------------
# Schema: tasks
# ---------------------------------------------------------------------------
class CharacterInfo(BaseModel):
    name: str = Field(alias="Name")
    server_id: int = Field(alias="ServerId")


class TaskInfo(BaseModel):
    map: LenientTimestamp = Field(None, alias="Map")


class AccountantTaskData(BaseModel):
    char_info: CharacterInfo = Field(alias="Item1")
    task_info: TaskInfo = Field(alias="Item2")


# ---------------------------------------------------------------------------
# Readers
# ---------------------------------------------------------------------------
class CropSource(RecordSource):
    """Every planted crop in every ``crops_plot`` snapshot, keyed by crop id."""

    name = "crops"

    def __init__(self, folder: Path) -> None:
        self.folder = Path(folder)

    def load(self) -> Iterator[LoadResult]:
        for path in iter_json_files(self.folder):
            if isinstance(path, Skipped):
                yield path
                continue
            data = read_model(path, AccountantCropData)
            if isinstance(data, Skipped):
                yield data
                continue

            house = data.house_info
            where = f"{world_name(house.server_id)} w{house.ward} p{house.plot}"
            for crop in data.crops:
                if crop.plant_id == 0:  # empty bed
                    continue
                yield TimedRecord(
                    entity_type=crop.plant_id,
                    group_key=crop.plant_id,
                    reference_a=crop.plant_time,
                    reference_b=crop.last_tending,
                    label=where,
                    source=str(path),
                    approximate=not crop.accurate_plant_time,
                )


class MapAllowanceSource(RecordSource):
    """
    One record per character with its next map-allowance time.

    Records whose allowance came up before *since* are stale (the character
    has not been logged in for a while) and are dropped.
    """

    name = "map allowances"
    profile_for = staticmethod(countdown_profile)

    def __init__(self, folder: Path, since: Optional[datetime] = None) -> None:
        self.folder = Path(folder)
        self.since = since

    def load(self) -> Iterator[LoadResult]:
        for path in iter_json_files(self.folder):
            if isinstance(path, Skipped):
                yield path
                continue
            data = read_model(path, AccountantTaskData)
            if isinstance(data, Skipped):
                yield data
                continue

            due = data.task_info.map
            if due is not None and self.since is not None and due <= self.since:
                logger.debug("Dropping stale map allowance in %s", path)
                continue

            char = data.char_info
            server = world_name(char.server_id)
            yield TimedRecord(
                entity_type=MAP_ENTITY,
                group_key=(char.name, char.server_id),
                reference_a=due,
                group_label=f"{char.name} ({server})",
                source=str(path),
            )
