"""Detect installed Java runtimes from environment variables and the filesystem.

Detect Java runtimes from environment variables::

    import java_runtimes

    runtimes = java_runtimes.detect_java_in_environments()
    print("Detected Java runtimes:", runtimes)

Detect Java runtimes recursively within multiple paths::

    runtimes = java_runtimes.detect_java_in_paths(["/usr", "/opt"], 2)
"""

from .classifier import RuntimeClassifier, extract_version, parse_release_descriptor
from .config import JavaRuntimesConfig, load_config
from .detector import (
    detect_java,
    detect_java_bin_dir,
    detect_java_exe,
    detect_java_home_dir,
    detect_java_in_environments,
    detect_java_in_paths,
    detect_java_runtimes,
    gather_java_in_paths,
)
from .environment import EnvironmentProbe
from .errors import ConfigError, InvalidDepthError, JavaRuntimesError, VersionNotFoundError
from .registry import RuntimeRegistry
from .types import JavaRuntime
from .walker import PathWalker

__version__ = "0.1.0"

__all__ = [
    # Detection
    "detect_java",
    "detect_java_bin_dir",
    "detect_java_exe",
    "detect_java_home_dir",
    "detect_java_in_environments",
    "detect_java_in_paths",
    "detect_java_runtimes",
    "gather_java_in_paths",
    "extract_version",
    "parse_release_descriptor",
    # Components
    "EnvironmentProbe",
    "PathWalker",
    "RuntimeClassifier",
    "RuntimeRegistry",
    "JavaRuntime",
    # Configuration
    "JavaRuntimesConfig",
    "load_config",
    # Errors
    "JavaRuntimesError",
    "InvalidDepthError",
    "VersionNotFoundError",
    "ConfigError",
]
