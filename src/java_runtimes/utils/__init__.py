"""Utility modules (path handling)."""

from .path import (
    canonicalize,
    directory_identity,
    expand_path,
    is_executable_file,
)

__all__ = [
    "canonicalize",
    "directory_identity",
    "expand_path",
    "is_executable_file",
]
