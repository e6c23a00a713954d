"""Data types for Java runtime detection."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from .specs import BIN_DIR_NAME, get_platform_spec

_VERSION_COMPONENT = re.compile(r"\d+")


class CandidateSource(str, Enum):
    """Where a candidate installation directory came from."""

    ENVIRONMENT = "environment"
    FILESYSTEM_WALK = "filesystem_walk"


@dataclass(frozen=True)
class Candidate:
    """A directory suspected, but not yet confirmed, to be a Java home.

    Attributes:
        path: Directory as discovered (not canonicalized)
        source: Which probe produced it
        origin: Environment variable name or walk root that led here
    """

    path: Path
    source: CandidateSource
    origin: Optional[str] = None


@dataclass(frozen=True)
class RuntimeMetadata:
    """Partial metadata produced by one extraction strategy."""

    version: Optional[str] = None
    vendor: Optional[str] = None
    architecture: Optional[str] = None

    def merged(self, fallback: "RuntimeMetadata") -> "RuntimeMetadata":
        """Fill fields missing here from ``fallback``."""
        return RuntimeMetadata(
            version=self.version or fallback.version,
            vendor=self.vendor or fallback.vendor,
            architecture=self.architecture or fallback.architecture,
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.version and self.vendor and self.architecture)


@dataclass(frozen=True)
class JavaRuntime:
    """A Java installation discovered on this machine.

    Two runtimes are equal when their canonical ``path`` is equal; the other
    fields do not take part in comparison or hashing.

    Attributes:
        path: Canonical absolute installation directory (the Java home)
        version: Version string, possibly partial ("17") or empty if unknown
        vendor: Implementor name (e.g. "Eclipse Adoptium"), if known
        architecture: Normalized CPU architecture tag (e.g. "x86_64"), if known
    """

    path: Path
    version: str = field(default="", compare=False)
    vendor: Optional[str] = field(default=None, compare=False)
    architecture: Optional[str] = field(default=None, compare=False)

    @property
    def executable(self) -> Path:
        """Path of the ``java`` launcher inside this installation."""
        name = get_platform_spec().executable_names[0]
        return self.path / BIN_DIR_NAME / name

    @property
    def major_version(self) -> Optional[int]:
        """Feature release number, with the legacy ``1.x`` scheme unwrapped.

        ``"1.8.0_291"`` gives 8, ``"17.0.2"`` gives 17, an empty version gives None.
        """
        components = [int(part) for part in _VERSION_COMPONENT.findall(self.version)]
        if not components:
            return None
        if components[0] == 1 and len(components) > 1:
            return components[1]
        return components[0]

    @property
    def version_specificity(self) -> int:
        """Number of numeric components in the version (0 when unknown)."""
        return len(_VERSION_COMPONENT.findall(self.version))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": str(self.path),
            "version": self.version,
            "major_version": self.major_version,
            "vendor": self.vendor,
            "architecture": self.architecture,
        }

    def __repr__(self) -> str:
        version_str = f" {self.version}" if self.version else " (unknown version)"
        details = ", ".join(part for part in (self.vendor, self.architecture) if part)
        details_str = f" [{details}]" if details else ""
        return f"<JavaRuntime{version_str}{details_str} @ {self.path}>"
