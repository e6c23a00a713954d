"""Filesystem helpers shared by the probes and the classifier."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Hashable, Optional, Union

_VARIABLE_PATTERN = re.compile(r"\$(\w+|\{[^}]*\})")
_BUILTIN_VARIABLES = ("PROJECT_ROOT", "HOME")


def canonicalize(path: Union[str, Path]) -> Optional[Path]:
    """Resolve symlinks and relative segments.

    Args:
        path: Path to canonicalize (absolute or relative)

    Returns:
        Canonical absolute Path, or None if the path does not exist or
        cannot be resolved (e.g. a symlink loop)

    Examples:
        >>> canonicalize("/usr/lib/jvm/default-java")
        Path("/usr/lib/jvm/java-17-openjdk-amd64")
    """
    try:
        return Path(path).resolve(strict=True)
    except (OSError, RuntimeError):
        return None


def is_executable_file(path: Union[str, Path]) -> bool:
    """Check that ``path`` is a regular file (after symlinks) we may execute."""
    try:
        return Path(path).is_file() and os.access(path, os.X_OK)
    except OSError:
        return False


def directory_identity(path: Union[str, Path]) -> Optional[Hashable]:
    """Identity of the directory ``path`` points at, following symlinks.

    Two paths reaching the same directory through different links share an
    identity. Returns None if the directory cannot be stat'ed.
    """
    try:
        st = os.stat(path)
    except OSError:
        return None
    if st.st_ino:
        return (st.st_dev, st.st_ino)
    # Some filesystems report no inode numbers
    resolved = canonicalize(path)
    return str(resolved) if resolved else None


def expand_path(path_template: str, project_root: Union[str, Path]) -> Optional[Path]:
    """Expand a configured path into an absolute Path.

    Supports:
        ${PROJECT_ROOT} - absolute path to the project root
        ${HOME} and ~   - the user's home directory
        $VAR / ${VAR}   - any other environment variable

    Relative results are taken relative to ``project_root``.

    Returns:
        The expanded path, or None if it names an unset variable
    """
    for match in _VARIABLE_PATTERN.finditer(path_template):
        name = match.group(1).strip("{}")
        if name not in _BUILTIN_VARIABLES and name not in os.environ:
            return None

    result = path_template.replace("${PROJECT_ROOT}", str(project_root))
    result = result.replace("${HOME}", str(Path.home()))
    result = os.path.expanduser(os.path.expandvars(result))

    path_obj = Path(result)
    if not path_obj.is_absolute():
        path_obj = Path(project_root) / path_obj
    return path_obj
