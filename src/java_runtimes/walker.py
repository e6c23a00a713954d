"""Bounded-depth filesystem search for Java homes."""

from __future__ import annotations

import logging
import os
from collections import deque
from pathlib import Path
from typing import Any, Deque, Hashable, Iterable, Iterator, List, Optional, Set, Tuple, Union

from .classifier import RuntimeClassifier
from .errors import InvalidDepthError
from .types import Candidate, CandidateSource, JavaRuntime
from .utils.path import directory_identity

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def check_max_depth(max_depth: Any) -> int:
    """Fail fast on a depth that is negative or not an integer."""
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
        raise InvalidDepthError(max_depth)
    return max_depth


def normalize_roots(roots: Union[PathLike, Iterable[PathLike]]) -> List[Path]:
    """Accept a single path or a sequence of paths."""
    if isinstance(roots, (str, os.PathLike)):
        return [Path(roots)]
    return [Path(root) for root in roots]


class PathWalker:
    """Walks directory trees looking for Java homes.

    The root is depth 0 and every directory level entered adds one. A
    directory that is itself a Java home is reported and not descended into.
    Symlinked directories are followed, but each concrete directory is
    visited at most once per root, so link loops terminate.
    """

    def __init__(
        self,
        classifier: Optional[RuntimeClassifier] = None,
        follow_symlinks: bool = True,
    ):
        """Initialize walker.

        Args:
            classifier: Classifier used to recognize and describe Java homes
            follow_symlinks: Whether to descend into symlinked directories
        """
        self.classifier = classifier or RuntimeClassifier()
        self.follow_symlinks = follow_symlinks

    def walk(
        self,
        roots: Union[PathLike, Iterable[PathLike]],
        max_depth: int,
    ) -> List[JavaRuntime]:
        """Find and classify Java homes below each root.

        Args:
            roots: Directories to search; missing ones are skipped
            max_depth: Deepest level to visit below each root

        Returns:
            Classified runtimes in discovery order (may contain duplicates
            when roots overlap; merge through a RuntimeRegistry)

        Raises:
            InvalidDepthError: If max_depth is negative or not an integer
        """
        check_max_depth(max_depth)

        runtimes = []
        for root in normalize_roots(roots):
            for candidate in self.iter_candidates(root, max_depth):
                runtime = self.classifier.classify(candidate)
                if runtime:
                    runtimes.append(runtime)
        return runtimes

    def iter_candidates(self, root: Path, max_depth: int) -> Iterator[Candidate]:
        """Yield candidate Java homes below ``root``, level by level.

        The work list is FIFO, so every directory is first reached at its
        smallest depth even when a symlink elsewhere also leads to it.
        """
        check_max_depth(max_depth)

        if not root.is_dir():
            logger.debug("Skipping missing search root: %s", root)
            return

        visited: Set[Hashable] = set()
        queue: Deque[Tuple[Path, int]] = deque([(root, 0)])

        while queue:
            directory, depth = queue.popleft()

            identity = directory_identity(directory)
            if identity is None:
                logger.debug("Skipping unreadable directory: %s", directory)
                continue
            if identity in visited:
                logger.debug("Skipping already visited directory: %s", directory)
                continue
            visited.add(identity)

            if self.classifier.is_java_home(directory):
                yield Candidate(
                    path=directory,
                    source=CandidateSource.FILESYSTEM_WALK,
                    origin=str(root),
                )
                continue

            if depth >= max_depth:
                continue

            for child in self._list_subdirectories(directory):
                queue.append((child, depth + 1))

    def _list_subdirectories(self, directory: Path) -> List[Path]:
        children = []
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    try:
                        if not entry.is_dir():
                            continue
                        if not self.follow_symlinks and entry.is_symlink():
                            continue
                    except OSError:
                        continue
                    children.append(Path(entry.path))
        except OSError as e:
            logger.debug("Cannot list %s: %s", directory, e)
            return []

        return sorted(children, key=lambda p: p.name)
