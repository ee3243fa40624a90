"""
xivtimers.sources
=================

Readers that turn plugin files into :class:`~xivtimers.models.TimedRecord`
objects (or :class:`~xivtimers.models.Skipped` diagnostics).
"""

from .accountant import CropSource, MapAllowanceSource
from .base import RecordSource
from .inventory import VentureCount, VentureSource
from .submarines import SubmarineDbSource, SubmarineJsonSource, submarine_source

__all__ = [
    "RecordSource",
    "CropSource",
    "MapAllowanceSource",
    "SubmarineJsonSource",
    "SubmarineDbSource",
    "submarine_source",
    "VentureSource",
    "VentureCount",
]
