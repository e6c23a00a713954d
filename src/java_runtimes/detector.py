"""Public detection API.

Detect Java runtimes from environment variables::

    from java_runtimes import detector

    runtimes = detector.detect_java_in_environments()

Detect Java runtimes recursively within multiple paths::

    runtimes = detector.detect_java_in_paths(["/usr", "/opt"], 2)

Accumulate several searches without duplicates::

    registry = RuntimeRegistry()
    detector.gather_java_in_paths(registry, ["/usr/lib/jvm"], 1)
    detector.gather_java_in_paths(registry, ["/opt"], 2)
"""

from __future__ import annotations

import logging
import os
from collections.abc import MutableSequence, MutableSet
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Set, Union

from .classifier import RuntimeClassifier
from .config import JavaRuntimesConfig, load_config
from .environment import EnvironmentProbe
from .registry import RuntimeRegistry
from .specs import BIN_DIR_NAME
from .types import JavaRuntime
from .walker import PathLike, PathWalker, check_max_depth, normalize_roots

logger = logging.getLogger(__name__)

MAX_PARALLEL_ROOTS = 8

Accumulator = Union[RuntimeRegistry, MutableSet[JavaRuntime], MutableSequence[JavaRuntime]]


def detect_java_in_environments(
    environ: Optional[Mapping[str, str]] = None,
) -> Set[JavaRuntime]:
    """Detect Java runtimes named by environment variables.

    It searches ``JAVA_HOME``, ``JAVA_ROOT``, ``JDK_HOME``, ``JRE_HOME`` and
    the entries of ``PATH``.

    Args:
        environ: Environment snapshot; defaults to the live process environment

    Returns:
        Set of detected runtimes (empty when nothing valid is set)
    """
    return RuntimeRegistry(EnvironmentProbe(environ).probe()).as_set()


def detect_java_in_paths(
    roots: Union[PathLike, Iterable[PathLike]],
    max_depth: int,
    *,
    follow_symlinks: bool = True,
    parallel: bool = False,
) -> Set[JavaRuntime]:
    """Detect Java runtimes within several directory trees.

    Args:
        roots: Directories to search; missing ones are skipped
        max_depth: Deepest level to visit below each root (root is 0)
        follow_symlinks: Whether to descend into symlinked directories
        parallel: Walk each root on its own worker thread

    Returns:
        Set of detected runtimes

    Raises:
        InvalidDepthError: If max_depth is negative or not an integer
    """
    registry = RuntimeRegistry()
    gather_java_in_paths(
        registry,
        roots,
        max_depth,
        follow_symlinks=follow_symlinks,
        parallel=parallel,
    )
    return registry.as_set()


def gather_java_in_paths(
    accumulator: Accumulator,
    roots: Union[PathLike, Iterable[PathLike]],
    max_depth: int,
    *,
    follow_symlinks: bool = True,
    parallel: bool = False,
) -> int:
    """Detect Java runtimes within several directory trees into ``accumulator``.

    Args:
        accumulator: A RuntimeRegistry, or a set or list of runtimes (such as
            a previous ``detect_java_in_paths`` result)

    Returns:
        The number of installations not already in the accumulator

    Raises:
        InvalidDepthError: If max_depth is negative or not an integer
        TypeError: If accumulator is not a registry, set or list
    """
    check_max_depth(max_depth)
    if not isinstance(accumulator, (RuntimeRegistry, MutableSet, MutableSequence)):
        raise TypeError(
            "accumulator must be a RuntimeRegistry, set or list, "
            f"got {type(accumulator).__name__}"
        )

    walker = PathWalker(follow_symlinks=follow_symlinks)
    batches = _walk_batches(walker, normalize_roots(roots), max_depth, parallel)

    if isinstance(accumulator, RuntimeRegistry):
        return sum(accumulator.extend(batch) for batch in batches)

    # Merge through a registry seeded with what the caller already holds
    known = set(accumulator)
    registry = RuntimeRegistry(accumulator)
    for batch in batches:
        registry.extend(batch)

    added = 0
    for runtime in registry:
        if runtime in known:
            continue
        if isinstance(accumulator, MutableSet):
            accumulator.add(runtime)
        else:
            accumulator.append(runtime)
        added += 1
    return added


def _walk_batches(
    walker: PathWalker,
    roots: List[Path],
    max_depth: int,
    parallel: bool,
) -> List[List[JavaRuntime]]:
    """Walk roots, one worker thread per root when ``parallel`` is set.

    Workers share no state; callers merge the batches on their own thread.
    """
    if parallel and len(roots) > 1:
        workers = min(len(roots), MAX_PARALLEL_ROOTS)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(lambda root: walker.walk([root], max_depth), roots))
    return [walker.walk(roots, max_depth)]


def detect_java(path: PathLike, max_depth: int) -> Set[JavaRuntime]:
    """Detect Java runtimes within a single directory tree."""
    return detect_java_in_paths([path], max_depth)


def detect_java_exe(path: PathLike) -> Optional[JavaRuntime]:
    """Detect the runtime owning a ``java`` launcher.

    Returns:
        The runtime if ``path`` is an executable ``**/bin/java(.exe)``
        (symlinks resolved), None otherwise
    """
    classifier = RuntimeClassifier()
    real_path = Path(os.path.realpath(path))
    if real_path.name not in classifier.platform_spec.executable_names:
        return None
    if real_path.parent.name != BIN_DIR_NAME:
        return None
    return classifier.classify(real_path.parent.parent)


def detect_java_bin_dir(bin_dir: PathLike) -> Optional[JavaRuntime]:
    """Detect the runtime whose ``bin`` directory is ``bin_dir``."""
    launcher = RuntimeClassifier().find_launcher(Path(bin_dir))
    if launcher is None:
        return None
    return detect_java_exe(launcher)


def detect_java_home_dir(java_home: PathLike) -> Optional[JavaRuntime]:
    """Detect the runtime installed at ``java_home``."""
    return RuntimeClassifier().classify(Path(java_home))


def detect_java_runtimes(config: Optional[JavaRuntimesConfig] = None) -> List[JavaRuntime]:
    """Run every configured probe and return the merged runtimes.

    Args:
        config: Detection settings; loaded from ``.java-runtimes.toml`` (or
            defaults) when omitted

    Returns:
        Runtimes sorted newest first
    """
    if config is None:
        config = load_config()

    classifier = RuntimeClassifier(platform=config.platform)
    registry = RuntimeRegistry()

    if config.detection.include_environment:
        probe = EnvironmentProbe(
            java_home_variables=config.environment.java_home_variables,
            path_variable=config.environment.path_variable,
            classifier=classifier,
        )
        registry.extend(probe.probe())

    roots = config.search_roots()
    max_depth = config.max_depth()
    walker = PathWalker(classifier=classifier, follow_symlinks=config.detection.follow_symlinks)

    for batch in _walk_batches(walker, roots, max_depth, config.detection.parallel):
        registry.extend(batch)

    logger.debug("Detected %d Java runtime(s) under %d root(s)", len(registry), len(roots))
    return registry.sorted()
