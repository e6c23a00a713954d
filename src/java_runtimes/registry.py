"""Deduplicating collection of detected runtimes."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Set

from .types import JavaRuntime


def _merge(existing: JavaRuntime, incoming: JavaRuntime) -> JavaRuntime:
    """Merge two descriptions of the same installation.

    The more specific version wins (more numeric components; any version
    beats an empty one). On a tie the existing entry wins. Vendor and
    architecture missing from the winner are taken from the other entry.
    """
    if incoming.version_specificity > existing.version_specificity:
        winner, other = incoming, existing
    else:
        winner, other = existing, incoming

    return replace(
        winner,
        vendor=winner.vendor or other.vendor,
        architecture=winner.architecture or other.architecture,
    )


class RuntimeRegistry:
    """Runtimes keyed by canonical path, in insertion order.

    Callers may keep one registry across several detection calls; the same
    installation never appears twice.
    """

    def __init__(self, runtimes: Iterable[JavaRuntime] = ()):
        self._runtimes: Dict[Path, JavaRuntime] = {}
        self.extend(runtimes)

    def add(self, runtime: JavaRuntime) -> bool:
        """Insert or merge a runtime.

        Returns:
            True if the installation path was not present before
        """
        existing = self._runtimes.get(runtime.path)
        if existing is None:
            self._runtimes[runtime.path] = runtime
            return True

        self._runtimes[runtime.path] = _merge(existing, runtime)
        return False

    def extend(self, runtimes: Iterable[JavaRuntime]) -> int:
        """Add many runtimes, returning how many new installations appeared."""
        return sum(1 for runtime in runtimes if self.add(runtime))

    def get(self, path: Path) -> Optional[JavaRuntime]:
        return self._runtimes.get(Path(path))

    def as_set(self) -> Set[JavaRuntime]:
        return set(self._runtimes.values())

    def sorted(self) -> List[JavaRuntime]:
        """Newest major version first, unknown versions last, then by path."""
        return sorted(
            self._runtimes.values(),
            key=lambda r: (
                r.major_version is None,
                -(r.major_version or 0),
                [-int(p) for p in r.version.replace("_", ".").split(".") if p.isdigit()],
                str(r.path),
            ),
        )

    def __contains__(self, runtime: object) -> bool:
        if isinstance(runtime, JavaRuntime):
            return runtime.path in self._runtimes
        return False

    def __iter__(self) -> Iterator[JavaRuntime]:
        return iter(list(self._runtimes.values()))

    def __len__(self) -> int:
        return len(self._runtimes)

    def __repr__(self) -> str:
        return f"<RuntimeRegistry {len(self)} runtime(s)>"
