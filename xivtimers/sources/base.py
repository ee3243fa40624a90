"""
xivtimers.sources.base
======================

Shared abstract base class for all plugin-file readers.

Concrete subclasses implement ``.load() -> Iterator[TimedRecord | Skipped]``.
A reader never raises for bad data: unreadable files, malformed JSON and
schema mismatches come back as :class:`~xivtimers.models.Skipped` so one
broken file never aborts a report.
"""

__all__ = [
    "RecordSource",
    "LenientTimestamp",
    "parse_timestamp",
    "iter_json_files",
    "read_model",
]

import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Any, Iterator, Optional, Type, TypeVar, Union

from pydantic import BaseModel, BeforeValidator, ValidationError

from xivtimers.catalog import profile_for
from xivtimers.lifecycle import ProfileLookup
from xivtimers.models import LoadResult, Skipped

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# .NET writes up to seven fractional digits; datetime keeps six.
_FRACTION = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Lenient timestamp parser for plugin data.

    Returns ``None`` ("unassigned") for ``null``, unparseable text, the
    .NET ``DateTime.MinValue`` and the Unix epoch.  Naive values are UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = _FRACTION.sub(r"\1", value.strip())
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    if parsed.year <= 1 or parsed == UNIX_EPOCH:
        return None
    return parsed


LenientTimestamp = Annotated[Optional[datetime], BeforeValidator(parse_timestamp)]


def iter_json_files(folder: Path) -> Iterator[Union[Path, Skipped]]:
    """Regular ``*.json`` files directly inside *folder*, sorted by name."""
    try:
        entries = sorted(folder.iterdir())
    except OSError as exc:
        yield Skipped(str(folder), f"cannot list folder ({exc.strerror or exc})")
        return
    for path in entries:
        if path.suffix == ".json" and path.is_file():
            yield path


def read_model(path: Path, model: Type[M]) -> Union[M, Skipped]:
    """Read *path* and validate it as *model*, or explain why not."""
    try:
        contents = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Failed to open %s", path, exc_info=True)
        return Skipped(str(path), f"failed to open ({exc})")
    try:
        return model.model_validate_json(contents)
    except ValidationError as exc:
        logger.debug("Failed to deserialize %s", path, exc_info=True)
        return Skipped(str(path), f"failed to deserialize: {exc.error_count()} error(s)\n{exc}")


class RecordSource(ABC):
    """
    Abstract base for all record readers.

    ``profile_for`` tells the classifier which timing profile applies to
    the records this source yields.
    """

    name: str = "records"
    profile_for: ProfileLookup = staticmethod(profile_for)

    @abstractmethod
    def load(self) -> Iterator[LoadResult]:
        """Yield a record or a :class:`Skipped` for everything found."""
