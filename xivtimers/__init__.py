"""
xivtimers
=========

A small toolkit for reporting the timers of game-world entities
(crops, map allowances, submarine voyages) that third-party client
plugins persist on disk.

Import structure
----------------
`import xivtimers` is intentionally cheap: the core sub-modules are pure
Python with no I/O.  The source adapters (file discovery, JSON/CSV/SQLite
mapping) and the *rich* terminal renderer are only imported when you
explicitly access :pymod:`xivtimers.sources` or :pymod:`xivtimers.cli`.

Sub-modules
~~~~~~~~~~~
- :pymod:`xivtimers.models`      – ``TimedRecord`` / ``AggregatedGroup`` dataclasses + :class:`~xivtimers.models.Status` enum
- :pymod:`xivtimers.catalog`     – static timing tables (``profile_for``)
- :pymod:`xivtimers.lifecycle`   – status classifier (``classify``)
- :pymod:`xivtimers.portfolio`   – group aggregator (``aggregate``, ``GroupPortfolio``)
- :pymod:`xivtimers.formatting`  – countdown / severity-tag rendering
- :pymod:`xivtimers.sources`     – plugin file readers
- :pymod:`xivtimers.cli`         – console entry points

Quick start
-----------
>>> from datetime import datetime, timedelta, timezone
>>> from xivtimers.models import TimedRecord
>>> from xivtimers.lifecycle import classify
>>> from xivtimers.catalog import profile_for
>>> now = datetime(2024, 5, 1, tzinfo=timezone.utc)
>>> rec = TimedRecord(entity_type=8165, group_key=8165,
...                   reference_a=now - timedelta(days=1),
...                   reference_b=now - timedelta(hours=2))
>>> classify(rec, profile_for(8165), now)
<Status.OKAY: 'okay'>

"""

__all__ = [
    "models",
    "catalog",
    "lifecycle",
    "portfolio",
    "formatting",
    "sources",
    "cli",
]

__version__ = "0.1.0"
