"""
active_store.py
===============
Persistence and resolution of the single active-JDK pointer.

The pointer is a one-line text file (``~/.jdk_current`` by default)
holding the absolute home path of the selected JDK. It is always stored as
a path, never as a record id, and is resolved against a freshly scanned
registry on every read.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, List, Optional

from errors import JdkIdNotFoundError, JdkPathNotFoundError, StateFileError
from jdk_sources import JdkRecord, java_binary_name

logger = logging.getLogger(__name__)

DEFAULT_STATE_FILE = "~/.jdk_current"

Registry = Callable[[], List[JdkRecord]]


def looks_like_path(value: str) -> bool:
    """Return True for absolute (``/...``) or home-relative (``~/...``) input."""
    return value.startswith("/") or value.startswith("~/")


def expand_home(value: str) -> str:
    """Expand a leading ``~/`` against the user's home directory."""
    if value.startswith("~/"):
        return str(Path.home() / value[2:])
    return value


class ActiveSelectionStore:
    """
    Load, save and resolve the active JDK.

    Args:
        state_file: Where the active home path is persisted
        registry:   Callable returning a freshly enumerated JDK list
    """

    def __init__(self, state_file: str | Path, registry: Registry) -> None:
        self.state_file = Path(state_file).expanduser()
        self._registry = registry

    # ── Raw persistence ────────────────────────

    def load(self) -> Optional[str]:
        """Return the persisted home path, or None when nothing is stored."""
        try:
            content = self.state_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StateFileError(f"Error reading state file {self.state_file}: {exc}") from exc

        home = content.strip()
        return home or None

    def save(self, home: str) -> None:
        """Overwrite the state file with ``home``."""
        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StateFileError(f"Error creating state directory: {exc}") from exc

        try:
            self.state_file.write_text(home + "\n", encoding="utf-8")
        except OSError as exc:
            raise StateFileError(f"Error writing state file: {exc}") from exc
        logger.debug("State saved to %s", self.state_file)

    # ── Resolution ─────────────────────────────

    def read(self) -> Optional[JdkRecord]:
        """
        Return the active JDK.

        Falls back to a minimal ``unknown`` record when the stored home is
        no longer reported by any source.
        """
        home = self.load()
        if home is None:
            return None

        for rec in self._registry():
            if rec.home == home:
                return rec

        logger.info("Active JDK %s is not in the current registry", home)
        return JdkRecord.unknown(home)

    def write(self, identifier_or_path: str) -> str:
        """
        Make ``identifier_or_path`` the active JDK.

        Args:
            identifier_or_path: A record id (``java-21_0_1``) or a JDK home
                                (``/Library/...``, ``~/.jdks/...``)

        Returns:
            The resolved home path that was persisted
        """
        if looks_like_path(identifier_or_path):
            home = expand_home(identifier_or_path)
            if not os.path.exists(home):
                raise JdkPathNotFoundError(home)
        else:
            home = self._resolve_id(identifier_or_path)

        if not os.path.exists(home):
            raise JdkPathNotFoundError(home)

        java_bin = os.path.join(home, "bin", java_binary_name())
        if not os.path.exists(java_bin):
            logger.warning("%s does not contain bin/java", home)

        self.save(home)
        logger.info("Active JDK set to %s", home)
        return home

    def _resolve_id(self, identifier: str) -> str:
        # First match wins when two sources produce the same id
        for rec in self._registry():
            if rec.id == identifier:
                return rec.home
        raise JdkIdNotFoundError(identifier)
