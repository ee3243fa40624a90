"""
Pytest configuration: make sure `import xivtimers` works regardless of
where pytest is invoked, and share a fixed "now" between test modules.

It prepends the project root (one directory above *tests/*) to
``sys.path`` **before** any tests are collected.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# /path/to/project/tests -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """One fixed instant for classification, aggregation and rendering."""
    return NOW
