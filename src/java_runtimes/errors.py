"""Exceptions raised by java-runtimes.

Detection itself is best-effort and almost never raises. These exceptions are
reserved for misuse of the API and for configuration that was explicitly
requested but cannot be honored.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional


class JavaRuntimesError(Exception):
    """Base class for all java-runtimes errors."""


class InvalidDepthError(JavaRuntimesError, ValueError):
    """Raised when a traversal depth is negative or not an integer."""

    def __init__(self, max_depth: Any):
        self.max_depth = max_depth
        super().__init__(
            f"max_depth must be a non-negative integer, got {max_depth!r}"
        )


class VersionNotFoundError(JavaRuntimesError, ValueError):
    """Raised when no version string can be found in a piece of text."""

    def __init__(self, text: str):
        self.text = text
        preview = text if len(text) <= 60 else text[:57] + "..."
        super().__init__(f"No Java version string found in {preview!r}")


class ConfigError(JavaRuntimesError):
    """Raised when an explicitly requested config file cannot be used."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)
