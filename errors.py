"""
errors.py
=========
Exception types raised by the JDK discovery and selection engine.
"""

from __future__ import annotations


class JdkPulseError(Exception):
    """Base error for JDK Pulse."""


class RegistryQueryError(JdkPulseError):
    """Raised when the OS JDK registry tool is unreachable or exits non-zero."""


class FilesystemAccessError(JdkPulseError):
    """Raised when a directory or file that exists cannot be read or written."""


class JdkScanError(FilesystemAccessError):
    """Raised when the version-manager directory cannot be listed."""


class StateFileError(FilesystemAccessError):
    """Raised when the active-selection file cannot be read or written."""


class JdkNotFoundError(JdkPulseError):
    """Raised when an identifier or path does not resolve to a JDK."""

    def __init__(self, query: str, message: str) -> None:
        super().__init__(message)
        self.query = query


class JdkPathNotFoundError(JdkNotFoundError):
    """Raised when a selected JDK path does not exist on disk."""

    def __init__(self, path: str) -> None:
        super().__init__(path, f"JDK path does not exist: {path}")


class JdkIdNotFoundError(JdkNotFoundError):
    """Raised when no discovered JDK carries the requested identifier."""

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier, f"JDK with ID '{identifier}' not found")
