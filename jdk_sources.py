"""
jdk_sources.py
==============
JDK record type and the two enumerators that discover installations.

Sources:
  - JavaHomeSource – macOS ``/usr/libexec/java_home -V`` registry
  - JenvSource     – jenv-managed JDKs under ``~/.jenv/versions``

The two sources apply different validity rules on purpose: java_home
entries without ``bin/java`` are kept with a warning, jenv entries without
it are dropped.
"""

from __future__ import annotations

import logging
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from errors import JdkScanError, RegistryQueryError
from version_parser import (
    extract_quoted_segment,
    parse_major_version,
    strip_distribution_prefix,
)

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
#  Constants
# ──────────────────────────────────────────────

JAVA_HOME_TOOL = "/usr/libexec/java_home"
JAVA_HOME_BANNER = "Matching Java Virtual Machines"

JENV_VENDOR = "jenv"
UNKNOWN_ID = "unknown"


def java_binary_name(system: Optional[str] = None) -> str:
    """Return the runtime executable name for the given platform."""
    system = system or platform.system()
    return "java.exe" if system == "Windows" else "java"


# ──────────────────────────────────────────────
#  JdkRecord Dataclass
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class JdkRecord:
    """Point-in-time snapshot of one discovered JDK installation."""

    id: str                        # e.g. "java-21_0_1", "jenv-openjdk64-21_0_10"
    version_major: int             # 0 when the version could not be parsed
    version_full: str              # As reported by the source
    home: str                      # Absolute JDK root
    vendor: Optional[str] = None   # "Eclipse Adoptium", "jenv", ...

    @property
    def java_binary(self) -> str:
        """Return the full path to the ``java`` executable."""
        return os.path.join(self.home, "bin", java_binary_name())

    def has_runtime(self) -> bool:
        """Return True if ``bin/java`` exists under the home."""
        return os.path.exists(self.java_binary)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "version_major": self.version_major,
            "version_full": self.version_full,
            "home": self.home,
            "vendor": self.vendor,
        }

    @classmethod
    def unknown(cls, home: str) -> "JdkRecord":
        """Minimal record for a selected home the registry no longer lists."""
        return cls(
            id=UNKNOWN_ID,
            version_major=0,
            version_full=UNKNOWN_ID,
            home=home,
        )


def make_id(provenance: str, version_text: str) -> str:
    """Build a record identifier, e.g. ``make_id("java", "21.0.1")`` → ``java-21_0_1``."""
    return f"{provenance}-{version_text.replace('.', '_')}"


# ──────────────────────────────────────────────
#  OS Registry: /usr/libexec/java_home
# ──────────────────────────────────────────────

def parse_java_home_output(output: str) -> List[JdkRecord]:
    """
    Parse the verbose listing printed by ``java_home -V``.

    Example line:
        21.0.1 (x86_64) "Eclipse Adoptium" - "OpenJDK 64-Bit Server VM" /Library/.../Contents/Home
    """
    records: List[JdkRecord] = []
    for raw in output.splitlines():
        line = raw.strip()
        if not line or line.startswith(JAVA_HOME_BANNER):
            continue

        parts = line.split()
        if len(parts) < 2:
            continue

        version_full = parts[0]
        records.append(JdkRecord(
            id=make_id("java", version_full),
            version_major=parse_major_version(version_full),
            version_full=version_full,
            home=parts[-1],
            vendor=extract_quoted_segment(line),
        ))
    return records


class JavaHomeSource:
    """
    Enumerate JDKs registered with macOS.

    Args:
        tool:   Path to the ``java_home`` executable
        system: Platform name override (defaults to ``platform.system()``)
    """

    def __init__(self, tool: str = JAVA_HOME_TOOL, system: Optional[str] = None) -> None:
        self.tool = tool
        self._system = system or platform.system()

    @property
    def supported(self) -> bool:
        return self._system == "Darwin"

    def list(self) -> List[JdkRecord]:
        if not self.supported:
            logger.debug("java_home registry not available on %s", self._system)
            return []

        output = self._query()
        records = parse_java_home_output(output)
        for rec in records:
            if not rec.has_runtime():
                logger.warning("%s does not contain bin/java", rec.home)
        logger.info("java_home reported %d JDK(s)", len(records))
        return records

    def _query(self) -> str:
        """Run ``java_home -V`` and return what it printed on stderr."""
        try:
            result = subprocess.run(
                [self.tool, "-V"],
                capture_output=True, text=True,
            )
        except OSError as exc:
            raise RegistryQueryError(f"failed to execute java_home: {exc}") from exc

        if result.returncode != 0:
            raise RegistryQueryError(
                f"java_home -V exited with status {result.returncode}"
            )
        # java_home writes the listing to stderr, not stdout
        return result.stderr


# ──────────────────────────────────────────────
#  Version Manager: ~/.jenv/versions
# ──────────────────────────────────────────────

class JenvSource:
    """
    Enumerate JDKs managed by jenv.

    Args:
        jenv_root: jenv root directory (usually ``~/.jenv``)
    """

    def __init__(self, jenv_root: str | Path) -> None:
        self.jenv_root = Path(jenv_root).expanduser().absolute()

    @property
    def versions_dir(self) -> Path:
        return self.jenv_root / "versions"

    def has_default_version(self) -> bool:
        """Return True if jenv has a global default (``~/.jenv/version``)."""
        return (self.jenv_root / "version").is_file()

    def default_version(self) -> Optional[str]:
        """Return the jenv global version name, or None when unset."""
        try:
            name = (self.jenv_root / "version").read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise JdkScanError(f"Failed to read jenv default version: {exc}") from exc
        return name or None

    def list(self) -> List[JdkRecord]:
        versions_dir = self.versions_dir
        if not versions_dir.is_dir():
            return []

        try:
            entries = sorted(os.scandir(versions_dir), key=lambda e: e.name)
        except OSError as exc:
            raise JdkScanError(
                f"Failed to read jenv versions dir {versions_dir}: {exc}"
            ) from exc

        records: List[JdkRecord] = []
        for entry in entries:
            try:
                rec = self._record_for(entry)
            except OSError as exc:
                logger.debug("Skipping jenv entry %s: %s", entry.path, exc)
                continue
            if rec is not None:
                records.append(rec)

        logger.info("jenv provides %d JDK(s)", len(records))
        return records

    @staticmethod
    def _record_for(entry: os.DirEntry) -> Optional[JdkRecord]:
        if not entry.is_dir():
            return None

        name = entry.name
        path = Path(entry.path)

        # mac-style bundles keep the real home under Contents/Home
        contents_home = path / "Contents" / "Home"
        home = contents_home if contents_home.is_dir() else path

        if not (home / "bin" / java_binary_name()).exists():
            return None

        return JdkRecord(
            id=make_id("jenv", name),
            version_major=parse_major_version(strip_distribution_prefix(name)),
            version_full=name,
            home=str(home),
            vendor=JENV_VENDOR,
        )
