"""
jdk_manager.py
==============
Entry point into JDK discovery and selection for the CLI, TUI and web UI.

Capabilities:
  - List JDKs from macOS java_home and jenv (in that order)
  - Read the active JDK from ~/.jdk_current
  - Set the active JDK by record id or by home path
  - Load settings from config.json, falling back to defaults
  - Menu labels and status text shared by every front end
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from active_store import DEFAULT_STATE_FILE, ActiveSelectionStore
from errors import JdkPulseError
from jdk_registry import aggregate
from jdk_sources import (
    JAVA_HOME_TOOL,
    JENV_VENDOR,
    JavaHomeSource,
    JdkRecord,
    JenvSource,
    make_id,
)

logger = logging.getLogger(__name__)

APP_NAME = "JDK Pulse"


# ──────────────────────────────────────────────
#  Configuration
# ──────────────────────────────────────────────

DEFAULT_CONFIG: Dict[str, Any] = {
    "paths": {
        "state_file": DEFAULT_STATE_FILE,
        "jenv_root": "~/.jenv",
        "java_home_tool": JAVA_HOME_TOOL,
    },
    "logging": {
        "level": "INFO",
        "dir": "logs",
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str | Path = "config.json") -> Dict[str, Any]:
    """Load config.json on top of DEFAULT_CONFIG."""
    config_path = Path(config_path)
    if not config_path.exists():
        logger.debug("Config file %s not found, using defaults", config_path)
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to load config: %s", exc)
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(data, dict):
        logger.error("Config root must be an object, got %s", type(data).__name__)
        return copy.deepcopy(DEFAULT_CONFIG)

    logger.debug("Config loaded from %s", config_path)
    return _merge(DEFAULT_CONFIG, data)


# ──────────────────────────────────────────────
#  Result Object
# ──────────────────────────────────────────────

@dataclass
class Result:
    """Outcome of a selection made from a front end."""

    success: bool
    message: str
    error: Optional[str] = None
    home: Optional[str] = None

    @classmethod
    def ok(cls, message: str, home: Optional[str] = None) -> "Result":
        return cls(success=True, message=message, home=home)

    @classmethod
    def fail(cls, message: str, error: Optional[str] = None) -> "Result":
        return cls(success=False, message=message, error=error)


# ──────────────────────────────────────────────
#  JdkManager
# ──────────────────────────────────────────────

class JdkManager:
    """
    Discover JDKs and manage the active selection.

    Args:
        config_path: Path to config.json
        config:      Already-loaded configuration (skips reading config_path)
        system:      Platform name override for the java_home source
    """

    def __init__(
        self,
        config_path: str | Path = "config.json",
        config: Optional[Dict[str, Any]] = None,
        system: Optional[str] = None,
    ) -> None:
        self.config_path = Path(config_path)
        self.config = config if config is not None else load_config(self.config_path)
        paths = self.config.get("paths", {})

        self.java_home = JavaHomeSource(
            tool=paths.get("java_home_tool", JAVA_HOME_TOOL),
            system=system,
        )
        self.jenv = JenvSource(paths.get("jenv_root", "~/.jenv"))
        self.store = ActiveSelectionStore(
            paths.get("state_file", DEFAULT_STATE_FILE),
            registry=self.list,
        )

        logger.debug(
            "JdkManager init: state=%s jenv=%s java_home=%s",
            self.store.state_file, self.jenv.jenv_root, self.java_home.tool,
        )

    # ================================================================
    #  CORE OPERATIONS
    # ================================================================

    def list(self) -> List[JdkRecord]:
        """Return every discovered JDK, java_home first, then jenv."""
        return aggregate(self.java_home, self.jenv)

    def get_active(self) -> Optional[JdkRecord]:
        """Return the active JDK, or None when nothing has been selected."""
        return self.store.read()

    def set_active(self, identifier_or_path: str) -> str:
        """Select a JDK by id or home path and return its resolved home."""
        return self.store.write(identifier_or_path)

    def activate(self, identifier_or_path: str) -> Result:
        """Like set_active, but reports failures as a Result."""
        try:
            home = self.set_active(identifier_or_path)
        except JdkPulseError as exc:
            logger.error("Error setting JDK: %s", exc)
            return Result.fail(f"Could not select {identifier_or_path}", error=str(exc))
        return Result.ok(f"Active JDK set to: {home}", home=home)

    def uses_jenv_default(self) -> bool:
        """Return True if jenv has a global default version configured."""
        return self.jenv.has_default_version()

    def activate_jenv_default(self) -> Result:
        """Select the JDK that jenv uses as its global default."""
        try:
            name = self.jenv.default_version()
        except JdkPulseError as exc:
            return Result.fail("Could not read jenv default", error=str(exc))
        if name is None:
            return Result.fail("No jenv default version configured")
        return self.activate(make_id("jenv", name))

    # ================================================================
    #  PRESENTATION HELPERS
    # ================================================================

    @staticmethod
    def label_for(record: JdkRecord) -> str:
        """Return the menu label for a record."""
        if record.vendor == JENV_VENDOR:
            return f"{record.version_full} (jenv)"
        if record.vendor:
            return f"Java {record.version_major} ({record.vendor})"
        return f"Java {record.version_major}"

    @staticmethod
    def is_active(record: JdkRecord, active: Optional[JdkRecord]) -> bool:
        if active is None:
            return False
        return active.id == record.id or active.home == record.home

    @staticmethod
    def status_text(active: Optional[JdkRecord]) -> str:
        if active is None:
            return f"{APP_NAME} – No JDK selected"
        return f"{APP_NAME} – Java {active.version_major}"
