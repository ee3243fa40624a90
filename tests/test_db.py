"""
tests/test_db.py
================

Integration-style tests for the read-only SubmarineTracker database layer.
"""

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, SQLModel, create_engine

from xivtimers.db import (
    FreeCompanyRow,
    SessionLocal,
    SourceError,
    SubmarineRow,
    all_fleets,
    open_readonly,
)


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "submarine-sqlite.db"
    engine = create_engine(f"sqlite:///{path}")
    SQLModel.metadata.create_all(engine, tables=[FreeCompanyRow.__table__, SubmarineRow.__table__])
    with Session(engine) as s:
        s.add(FreeCompanyRow(free_company_id=2, character_name="Zed", world="Balmung", tag="Z"))
        s.add(FreeCompanyRow(free_company_id=1, character_name="Amy", world="Tonberry", tag="A"))
        s.add(SubmarineRow(free_company_id=1, name="Two", return_seconds=0))
        s.add(SubmarineRow(free_company_id=1, name="One", return_seconds=1_714_567_890))
        s.commit()
    engine.dispose()
    return path


def test_all_fleets_orders_companies_and_subs(db_path):
    with SessionLocal(db_path) as s:
        fleets = all_fleets(s)

    assert [fc.character_name for fc, _ in fleets] == ["Amy", "Zed"]
    amy_subs = fleets[0][1]
    assert [sub.name for sub in amy_subs] == ["One", "Two"]
    assert fleets[1][1] == []


def test_engine_is_read_only(db_path):
    engine = open_readonly(db_path)
    with pytest.raises(OperationalError):
        with engine.connect() as conn:
            conn.exec_driver_sql("CREATE TABLE scratch (x INTEGER)")
    engine.dispose()


def test_missing_tables_raise_source_error(tmp_path):
    path = tmp_path / "empty.db"
    create_engine(f"sqlite:///{path}").connect().close()
    with SessionLocal(path) as s:
        with pytest.raises(SourceError):
            all_fleets(s)


def _track_dispose(monkeypatch):
    """Record the URL of every engine disposed while the test runs."""
    disposed = []
    real_dispose = Engine.dispose

    def dispose(self, *args, **kwargs):
        disposed.append(str(self.url))
        return real_dispose(self, *args, **kwargs)

    monkeypatch.setattr(Engine, "dispose", dispose)
    return disposed


def test_session_disposes_engine_on_exit(db_path, monkeypatch):
    disposed = _track_dispose(monkeypatch)
    with SessionLocal(db_path) as s:
        all_fleets(s)
        assert disposed == []
    assert len(disposed) == 1
    assert db_path.name in disposed[0]


def test_session_disposes_engine_on_error(tmp_path, monkeypatch):
    disposed = _track_dispose(monkeypatch)
    path = tmp_path / "garbage.db"
    path.write_bytes(b"not a database" * 100)
    with pytest.raises(SourceError):
        with SessionLocal(path) as s:
            all_fleets(s)
    assert len(disposed) == 1
    assert "garbage.db" in disposed[0]
