"""Configuration management for java-runtimes."""

from .parser import (
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAME,
    DetectionConfig,
    EnvironmentConfig,
    JavaRuntimesConfig,
    SearchConfig,
    find_config_file,
    load_config,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILE_NAME",
    "DetectionConfig",
    "EnvironmentConfig",
    "JavaRuntimesConfig",
    "SearchConfig",
    "find_config_file",
    "load_config",
]
