"""
tests/test_sources_accountant.py
================================

Tests for the Accountant plugin readers and the lenient timestamp parser.

Snapshots are written into pytest's *tmp_path* so no real plugin folder
is needed.
"""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from xivtimers.models import Skipped, TimedRecord
from xivtimers.sources.accountant import MAP_ENTITY, CropSource, MapAllowanceSource
from xivtimers.sources.base import parse_timestamp

CROP_SNAPSHOT = {
    "Item1": {"Zone": 339, "ServerId": 72, "Ward": 5, "Plot": 12},
    "Item2": [
        {
            "PlantTime": "2024-04-29T12:00:00Z",
            "LastTending": "2024-05-01T10:00:00.1234567Z",
            "PlantId": 8165,
            "AccuratePlantTime": True,
        },
        {
            "PlantTime": "0001-01-01T00:00:00",
            "LastTending": "0001-01-01T00:00:00",
            "PlantId": 0,
            "AccuratePlantTime": False,
        },
        {
            "PlantTime": "not a date",
            "LastTending": "2024-05-01T10:00:00Z",
            "PlantId": 4842,
            "AccuratePlantTime": False,
        },
    ],
}


def _task(name, server_id, when):
    return {"Item1": {"Name": name, "ServerId": server_id}, "Item2": {"Map": when}}


def _write(folder, name, payload):
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / name
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------
@pytest.mark.parametrize(
    "value",
    [None, "", "garbage", "0001-01-01T00:00:00", "1970-01-01T00:00:00Z", 12345],
)
def test_sentinel_timestamps_are_unassigned(value):
    assert parse_timestamp(value) is None


def test_naive_timestamp_is_utc():
    assert parse_timestamp("2024-05-01T10:00:00") == datetime(2024, 5, 1, 10, tzinfo=timezone.utc)


def test_offset_and_long_fraction_are_kept():
    parsed = parse_timestamp("2024-05-01T12:00:00.1234567+02:00")
    assert parsed == datetime(2024, 5, 1, 10, 0, 0, 123456, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Crops
# ---------------------------------------------------------------------------
def test_crop_source_reads_planted_beds(tmp_path):
    _write(tmp_path, "house.json", CROP_SNAPSHOT)
    out = list(CropSource(tmp_path).load())

    assert all(isinstance(r, TimedRecord) for r in out)
    assert [r.group_key for r in out] == [8165, 4842]  # empty bed dropped

    krakka, almond = out
    assert krakka.reference_a == datetime(2024, 4, 29, 12, tzinfo=timezone.utc)
    assert krakka.reference_b == datetime(2024, 5, 1, 10, 0, 0, 123456, tzinfo=timezone.utc)
    assert krakka.label == "Tonberry w5 p12"
    assert not krakka.approximate

    assert almond.reference_a is None
    assert almond.approximate


def test_crop_source_skips_broken_files(tmp_path):
    _write(tmp_path, "a.json", CROP_SNAPSHOT)
    _write(tmp_path, "b.json", "{not json")
    _write(tmp_path, "c.json", {"Item1": {}, "Item2": []})
    _write(tmp_path, "notes.txt", "ignored")
    (tmp_path / "sub.json").mkdir()

    out = list(CropSource(tmp_path).load())
    skipped = [o for o in out if isinstance(o, Skipped)]
    records = [o for o in out if isinstance(o, TimedRecord)]

    assert len(records) == 2
    assert sorted(Path(s.source).name for s in skipped) == ["b.json", "c.json"]
    assert all("deserialize" in s.reason for s in skipped)


def test_missing_folder_is_one_skip(tmp_path):
    out = list(CropSource(tmp_path / "nope").load())
    assert len(out) == 1
    assert isinstance(out[0], Skipped)


# ---------------------------------------------------------------------------
# Map allowances
# ---------------------------------------------------------------------------
def test_map_source_groups_by_character(tmp_path, now):
    _write(tmp_path, "1.json", _task("Foo Bar", 72, (now + timedelta(hours=3)).isoformat()))
    out = list(MapAllowanceSource(tmp_path).load())

    assert len(out) == 1
    rec = out[0]
    assert rec.entity_type == MAP_ENTITY
    assert rec.group_key == ("Foo Bar", 72)
    assert rec.group_label == "Foo Bar (Tonberry)"
    assert rec.reference_a == now + timedelta(hours=3)


def test_map_source_drops_stale_but_keeps_unassigned(tmp_path, now):
    since = now - timedelta(weeks=1)
    _write(tmp_path, "old.json", _task("Old Timer", 91, (since - timedelta(hours=1)).isoformat()))
    _write(tmp_path, "new.json", _task("New Face", 91, (now - timedelta(hours=1)).isoformat()))
    _write(tmp_path, "unset.json", _task("Never Set", 999, "0001-01-01T00:00:00"))

    out = list(MapAllowanceSource(tmp_path, since=since).load())
    names = sorted(r.group_key[0] for r in out)

    assert names == ["Never Set", "New Face"]
    unset = next(r for r in out if r.group_key[0] == "Never Set")
    assert unset.reference_a is None
    assert unset.group_label == "Never Set (Unknown Server)"


def test_same_name_on_unknown_worlds_stays_apart(tmp_path, now):
    """Both worlds render as "(Unknown Server)" but are different characters."""
    _write(tmp_path, "a.json", _task("Twin", 998, (now + timedelta(hours=1)).isoformat()))
    _write(tmp_path, "b.json", _task("Twin", 999, (now + timedelta(hours=5)).isoformat()))
    out = list(MapAllowanceSource(tmp_path).load())

    assert [r.group_key for r in out] == [("Twin", 998), ("Twin", 999)]
    assert {r.group_label for r in out} == {"Twin (Unknown Server)"}
