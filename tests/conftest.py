"""Pytest configuration and shared fixtures."""

import sys
import tempfile
from pathlib import Path
from typing import Callable, Generator, Optional

import pytest

JAVA_EXE = "java.exe" if sys.platform == "win32" else "java"


def create_java_home(
    home: Path,
    release: Optional[str] = None,
    executable: bool = True,
) -> Path:
    """Create a minimal Java home layout.

    Creates:
        home/
            bin/
                java        (mode 0755, or 0644 when executable=False)
            release         (only when release is given)
    """
    bin_dir = home / "bin"
    bin_dir.mkdir(parents=True, exist_ok=True)

    launcher = bin_dir / JAVA_EXE
    launcher.write_text("#!/bin/sh\necho fake java\n")
    launcher.chmod(0o755 if executable else 0o644)

    if release is not None:
        (home / "release").write_text(release)

    return home


@pytest.fixture
def search_root() -> Generator[Path, None, None]:
    """Create an empty temporary search root.

    The path is resolved so comparisons against canonical runtime paths
    work where the temp dir sits behind a symlink (macOS /var).
    """
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir).resolve()


@pytest.fixture
def make_java_home(search_root: Path) -> Callable[..., Path]:
    """Factory creating Java homes relative to ``search_root``.

    Usage:
        home = make_java_home("opt/jdk-17.0.2", release='JAVA_VERSION="17.0.2"')
    """

    def _make(
        relative: str,
        release: Optional[str] = None,
        executable: bool = True,
    ) -> Path:
        return create_java_home(search_root / relative, release=release, executable=executable)

    return _make


@pytest.fixture
def isolated_environ(search_root: Path) -> dict:
    """An environment snapshot with no Java variables and an empty PATH."""
    return {"PATH": "", "HOME": str(search_root)}
