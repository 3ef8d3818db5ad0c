"""
version_parser.py
=================
Pure text helpers that turn JDK version strings and tool output lines
into the pieces of a ``JdkRecord``. No I/O happens here.
"""

from __future__ import annotations

import re
from typing import Optional

# Legacy Java versions are reported as "1.<major>..." (e.g. 1.8.0_382)
LEGACY_PREFIX = "1."

# Majors assumed when a version string cannot be parsed
LEGACY_FALLBACK_MAJOR = 8
MODERN_FALLBACK_MAJOR = 0

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")

# "openjdk64-21.0.10" → "21.0.10"
_DISTRIBUTION_PREFIX_RE = re.compile(r"^[A-Za-z][^-]*(?:-[^-0-9][^-]*)*-(?=[0-9])")


def _parse_unsigned(text: str) -> Optional[int]:
    if not _UNSIGNED_RE.fullmatch(text):
        return None
    return int(text)


def parse_major_version(version_full: str) -> int:
    """
    Extract the major Java version from a version string.

    ``"1.8.0_382"`` → 8, ``"21.0.1"`` → 21.  Malformed legacy strings are
    assumed to be Java 8; anything else that cannot be parsed yields 0.
    """
    if version_full.startswith(LEGACY_PREFIX):
        head = version_full[len(LEGACY_PREFIX):].split(".", 1)[0]
        major = _parse_unsigned(head)
        return LEGACY_FALLBACK_MAJOR if major is None else major

    head = version_full.split(".", 1)[0]
    major = _parse_unsigned(head)
    return MODERN_FALLBACK_MAJOR if major is None else major


def extract_quoted_segment(line: str) -> Optional[str]:
    """Return the text inside the first pair of double quotes, or None."""
    start = line.find('"')
    if start < 0:
        return None
    end = line.find('"', start + 1)
    if end < 0:
        return None
    return line[start + 1:end]


def strip_distribution_prefix(name: str) -> str:
    """
    Drop a leading ``<distribution>-`` label from a jenv version name.

    jenv names its directories either by the bare version (``21.0.10``) or
    prefixed with the distribution (``openjdk64-21.0.10``).  Names without
    such a prefix are returned unchanged.
    """
    match = _DISTRIBUTION_PREFIX_RE.match(name)
    if not match:
        return name
    return name[match.end():]
