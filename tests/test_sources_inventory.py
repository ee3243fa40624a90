"""
tests/test_sources_inventory.py
===============================

Tests for the venture counter over the InventoryTools CSV export.
"""

import json

from xivtimers.models import Skipped
from xivtimers.sources.inventory import (
    COLUMNS,
    UNKNOWN_CHARACTER,
    VENTURE_ITEM_ID,
    VentureCount,
    VentureSource,
)

META = {
    "SavedCharacters": {
        "1001": {"Name": "Foo Bar", "WorldId": 72},
        "1002": {"Name": "Alice Liddell", "WorldId": 91},
    }
}


def _row(item_id, quantity, character_id):
    values = ["0"] * len(COLUMNS)
    values[COLUMNS.index("item_id")] = str(item_id)
    values[COLUMNS.index("quantity")] = str(quantity)
    values[COLUMNS.index("character_id")] = str(character_id)
    return ",".join(values)


def _write(tmp_path, rows, meta=META):
    csv_path = tmp_path / "inventories.csv"
    csv_path.write_text("\n".join(rows) + "\n", encoding="utf-8")
    meta_path = tmp_path / "InventoryTools.json"
    if meta is not None:
        meta_path.write_text(json.dumps(meta), encoding="utf-8")
    return csv_path, meta_path


def test_ventures_are_summed_per_character(tmp_path):
    csv_path, meta_path = _write(tmp_path, [
        _row(VENTURE_ITEM_ID, 100, 1001),
        _row(VENTURE_ITEM_ID, 23, 1001),
        _row(VENTURE_ITEM_ID, 7, 1002),
        _row(5, 999, 1001),  # some other item
    ])
    out = list(VentureSource(csv_path, meta_path).load())

    assert out == [
        VentureCount(1002, "Alice Liddell", "Balmung", 7),
        VentureCount(1001, "Foo Bar", "Tonberry", 123),
    ]


def test_unknown_character_is_still_counted(tmp_path):
    csv_path, meta_path = _write(tmp_path, [_row(VENTURE_ITEM_ID, 4, 4242)])
    out = list(VentureSource(csv_path, meta_path).load())

    assert out == [VentureCount(4242, UNKNOWN_CHARACTER, "", 4)]


def test_malformed_rows_are_skipped(tmp_path):
    csv_path, meta_path = _write(tmp_path, [
        _row(VENTURE_ITEM_ID, 10, 1001),
        _row(VENTURE_ITEM_ID, "lots", 1001),
    ])
    out = list(VentureSource(csv_path, meta_path).load())

    skipped = [o for o in out if isinstance(o, Skipped)]
    counts = [o for o in out if isinstance(o, VentureCount)]
    assert len(skipped) == 1
    assert skipped[0].source.endswith("inventories.csv:2")
    assert counts == [VentureCount(1001, "Foo Bar", "Tonberry", 10)]


def test_missing_meta_falls_back_to_unknown_names(tmp_path):
    csv_path, meta_path = _write(tmp_path, [_row(VENTURE_ITEM_ID, 3, 1001)], meta=None)
    out = list(VentureSource(csv_path, meta_path).load())

    assert isinstance(out[0], Skipped)
    assert out[1:] == [VentureCount(1001, UNKNOWN_CHARACTER, "", 3)]


def test_missing_csv_is_one_skip(tmp_path):
    out = list(VentureSource(tmp_path / "nope.csv", tmp_path / "nope.json").load())
    assert len(out) == 2
    assert all(isinstance(o, Skipped) for o in out)


def test_custom_item_id(tmp_path):
    csv_path, meta_path = _write(tmp_path, [
        _row(VENTURE_ITEM_ID, 10, 1001),
        _row(5, 2, 1001),
    ])
    out = list(VentureSource(csv_path, meta_path, item_id=5).load())
    assert [c.quantity for c in out] == [2]
