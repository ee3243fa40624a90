"""
xivtimers.db
============

Read-only SQLite access to the *SubmarineTracker* plugin database.

This module exposes:

* ``open_readonly(path)`` – a SQLModel engine that cannot write to the file
* ``SessionLocal(path)`` – a session context manager used via ``with SessionLocal(p) as s:``
* ``all_fleets(s)`` – every free company with its submarines

The plugin owns the file; nothing here creates, migrates or writes tables.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from sqlalchemy import Column, Integer, String
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Field, Session, SQLModel, create_engine, select

logger = logging.getLogger(__name__)


class SourceError(RuntimeError):
    """The plugin database exists but cannot be read."""


# ---------------------------------------------------------------------------
# ORM models mirroring the plugin's tables
# ---------------------------------------------------------------------------
class FreeCompanyRow(SQLModel, table=True):
    """One row of the plugin's ``freecompany`` table."""

    __tablename__ = "freecompany"

    free_company_id: int = Field(sa_column=Column("FreeCompanyId", Integer, primary_key=True))
    character_name: str = Field(sa_column=Column("CharacterName", String))
    world: str = Field(sa_column=Column("World", String))
    tag: str = Field(sa_column=Column("FreeCompanyTag", String))


class SubmarineRow(SQLModel, table=True):
    """
    One row of the plugin's ``submarine`` table.

    ``Return`` holds Unix seconds; ``0`` means no voyage is planned.
    """

    __tablename__ = "submarine"

    free_company_id: int = Field(sa_column=Column("FreeCompanyId", Integer, primary_key=True))
    name: str = Field(sa_column=Column("Name", String, primary_key=True))
    return_seconds: int = Field(sa_column=Column("Return", Integer))

    def return_time(self) -> Optional[datetime]:
        """Voyage end as an aware UTC datetime, ``None`` if unassigned."""
        if not self.return_seconds or self.return_seconds <= 0:
            return None
        return datetime.fromtimestamp(self.return_seconds, tz=timezone.utc)


# ---------------------------------------------------------------------------
# Engine / session factory
# ---------------------------------------------------------------------------
def open_readonly(path: Path) -> Engine:
    """Engine bound to *path* in SQLite's read-only URI mode."""
    target = Path(path).resolve().as_posix()
    return create_engine(f"sqlite:///file:{target}?mode=ro&uri=true", echo=False)


@contextmanager
def SessionLocal(path: Path) -> Iterator[Session]:  # noqa: N802 (factory camel-case kept from the session-maker idiom)
    """
    Read-only Session on the database at *path*.

    The engine is disposed on exit so the plugin's file is not left open.
    """
    engine = open_readonly(path)
    try:
        with Session(engine) as s:
            yield s
    finally:
        engine.dispose()


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
def all_fleets(s: Session) -> List[Tuple[FreeCompanyRow, List[SubmarineRow]]]:
    """
    Every free company (ordered by character name) with its submarines
    (ordered by name).

    Raises
    ------
    SourceError
        If the file is not a readable SubmarineTracker database.
    """
    try:
        companies = s.exec(select(FreeCompanyRow).order_by(FreeCompanyRow.character_name)).all()
        subs = s.exec(select(SubmarineRow).order_by(SubmarineRow.name)).all()
    except SQLAlchemyError as exc:
        logger.debug("Submarine database query failed", exc_info=True)
        raise SourceError(str(exc).splitlines()[0]) from exc

    by_company: Dict[int, List[SubmarineRow]] = {}
    for sub in subs:
        by_company.setdefault(sub.free_company_id, []).append(sub)
    return [(fc, by_company.get(fc.free_company_id, [])) for fc in companies]
