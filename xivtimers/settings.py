"""
xivtimers.settings
==================

Configuration settings for the xivtimers reports.

This module provides centralized configuration options used by the
source readers and the CLI.  Every value has a default that matches a
stock XIVLauncher install and can be overridden via environment variables
(``XIVTIMERS_*``) or a ``.env`` file.
"""

from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

# ---------------------------------------------------------------------------
# Plugin layout below the launcher's pluginConfigs folder
# ---------------------------------------------------------------------------
WINDOWS_PLUGIN_DIR = Path("AppData") / "Roaming" / "XIVLauncher" / "pluginConfigs"
POSIX_PLUGIN_DIR = Path(".xlcore") / "pluginConfigs"

CROPS_SUBDIR = Path("Accountant") / "crops_plot"
TASKS_SUBDIR = Path("Accountant") / "tasks"
SUBMARINE_SUBDIR = Path("SubmarineTracker")
SUBMARINE_DB_NAME = "submarine-sqlite.db"
INVENTORY_CSV = Path("InventoryTools") / "inventories.csv"
INVENTORY_META = Path("InventoryTools.json")


def default_plugin_dir(home: Path, platform: str = sys.platform) -> Path:
    """Launcher plugin-config folder for *platform* below *home*."""
    if platform.startswith("win"):
        return home / WINDOWS_PLUGIN_DIR
    return home / POSIX_PLUGIN_DIR


# ---------------------------------------------------------------------------
# Pydantic settings model
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Pydantic model for report settings, loaded from environment variables."""

    home_dir: Path = Field(default_factory=Path.home, description="User home folder")
    plugin_dir: Optional[Path] = Field(
        default=None,
        description="pluginConfigs folder; derived from home_dir and the platform when unset",
    )

    map_retention_days: int = Field(7, description="Hide map allowances older than this")
    venture_item_id: int = Field(21072, description="Item id counted by inventory-tracker")

    color: bool = Field(True, description="Force coloured output")
    log_level: str = Field("WARNING", description="Level for diagnostics on stderr")

    class Config:
        """Configuration for the settings model."""
        env_prefix = "XIVTIMERS_"
        env_file = ".env"
        case_sensitive = False

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------
    @property
    def plugin_root(self) -> Path:
        return self.plugin_dir or default_plugin_dir(self.home_dir)

    @property
    def crops_dir(self) -> Path:
        return self.plugin_root / CROPS_SUBDIR

    @property
    def tasks_dir(self) -> Path:
        return self.plugin_root / TASKS_SUBDIR

    @property
    def submarine_dir(self) -> Path:
        return self.plugin_root / SUBMARINE_SUBDIR

    @property
    def submarine_db(self) -> Path:
        return self.submarine_dir / SUBMARINE_DB_NAME

    @property
    def inventory_csv(self) -> Path:
        return self.plugin_root / INVENTORY_CSV

    @property
    def inventory_meta(self) -> Path:
        return self.plugin_root / INVENTORY_META

    @property
    def map_retention(self) -> timedelta:
        return timedelta(days=self.map_retention_days)


# Initialize settings
settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return settings
