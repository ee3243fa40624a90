"""
xivtimers.sources.inventory
===========================

Venture counter over the *InventoryTools* CSV export.

``inventories.csv`` has no header row; the column layout below is the
plugin's.  Character names and home worlds come from the plugin's own
``InventoryTools.json`` configuration.  Nothing here is timed, so the
result is a plain count per character rather than a TimedRecord.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Union

from pydantic import BaseModel, Field, ValidationError

from xivtimers.catalog import world_name
from xivtimers.models import Skipped
from .base import read_model

logger = logging.getLogger(__name__)

VENTURE_ITEM_ID = 21072
UNKNOWN_CHARACTER = "(Unknown Character)"

COLUMNS = (
    "container", "slot", "item_id", "quantity", "spiritbond", "condition", "flags",
    "materia1", "materia2", "materia3", "materia4", "materia5",
    "materia_grade1", "materia_grade2", "materia_grade3", "materia_grade4", "materia_grade5",
    "stain", "glamour_id", "unk1", "unk2", "unk3", "character_id", "unk4",
    "gearset_ids", "gearset_names",
)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------
class InventoryItem(BaseModel):
    item_id: int
    quantity: int
    character_id: int


class SavedCharacter(BaseModel):
    name: str = Field(alias="Name")
    world_id: int = Field(alias="WorldId")


class MetaConfig(BaseModel):
    saved_characters: Dict[str, SavedCharacter] = Field(default_factory=dict, alias="SavedCharacters")


@dataclass(frozen=True)
class VentureCount:
    """How many of the tracked item one character holds."""
    character_id: int
    name: str
    world: str
    quantity: int


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------
class VentureSource:
    """
    Sum the quantity of *item_id* per character across all inventory rows.

    ``load()`` yields :class:`Skipped` for unreadable files and malformed
    rows, then one :class:`VentureCount` per character ordered by name.
    """

    name = "ventures"

    def __init__(self, csv_path: Path, meta_path: Path, item_id: int = VENTURE_ITEM_ID) -> None:
        self.csv_path = Path(csv_path)
        self.meta_path = Path(meta_path)
        self.item_id = item_id

    def _characters(self) -> Union[MetaConfig, Skipped]:
        return read_model(self.meta_path, MetaConfig)

    def _rows(self) -> Iterator[Union[InventoryItem, Skipped]]:
        try:
            handle = self.csv_path.open(newline="", encoding="utf-8-sig")
        except OSError as exc:
            yield Skipped(str(self.csv_path), f"failed to open ({exc})")
            return
        with handle:
            reader = csv.DictReader(handle, fieldnames=COLUMNS)
            for line, row in enumerate(reader, start=1):
                try:
                    yield InventoryItem.model_validate(row)
                except ValidationError as exc:
                    yield Skipped(f"{self.csv_path}:{line}", f"malformed row: {exc.error_count()} error(s)")

    def load(self) -> Iterator[Union[VentureCount, Skipped]]:
        meta = self._characters()
        if isinstance(meta, Skipped):
            yield meta
            logger.debug("Character names unavailable from %s", self.meta_path)
            meta = MetaConfig()

        totals: Dict[int, int] = {}
        for item in self._rows():
            if isinstance(item, Skipped):
                yield item
                continue
            if item.item_id == self.item_id:
                totals[item.character_id] = totals.get(item.character_id, 0) + item.quantity

        counts: List[VentureCount] = []
        for char_id, quantity in totals.items():
            saved = meta.saved_characters.get(str(char_id))
            if saved is None:
                counts.append(VentureCount(char_id, UNKNOWN_CHARACTER, "", quantity))
            else:
                counts.append(VentureCount(char_id, saved.name, world_name(saved.world_id), quantity))
        yield from sorted(counts, key=lambda c: (c.name, c.character_id))
