"""Configuration file parser for java-runtimes."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python 3.10

from ..errors import ConfigError, InvalidDepthError
from ..specs import JAVA_HOME_VARIABLES, PATH_VARIABLE, get_platform_spec
from ..utils.path import expand_path

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".java-runtimes.toml"
CONFIG_ENV_VAR = "JAVA_RUNTIMES_CONFIG"


@dataclass
class DetectionConfig:
    """How the search runs."""

    max_depth: Optional[int] = None  # None = platform default
    include_environment: bool = True
    follow_symlinks: bool = True
    parallel: bool = False


@dataclass
class SearchConfig:
    """Where the filesystem walk starts."""

    roots: Optional[List[str]] = None  # Replaces the platform defaults
    extra_roots: List[str] = field(default_factory=list)
    use_default_roots: bool = True


@dataclass
class EnvironmentConfig:
    """Which environment variables the probe reads."""

    java_home_variables: List[str] = field(
        default_factory=lambda: list(JAVA_HOME_VARIABLES)
    )
    path_variable: str = PATH_VARIABLE


@dataclass
class JavaRuntimesConfig:
    """Complete java-runtimes configuration."""

    detection: DetectionConfig = field(default_factory=DetectionConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    environment: EnvironmentConfig = field(default_factory=EnvironmentConfig)

    # Platform key for launcher names and default roots (None = running platform)
    platform: Optional[str] = None

    # Project root for resolving relative paths and ${PROJECT_ROOT}
    project_root: Path = field(default_factory=Path.cwd)

    def resolve_path(self, path_template: str) -> Optional[Path]:
        """Resolve template variables in a configured path.

        Supports:
            ${PROJECT_ROOT} - absolute path to project root
            ${HOME}, ~      - user home directory
            $VAR, ${VAR}    - environment variables

        Returns None when the template names an unset variable.
        """
        return expand_path(path_template, self.project_root)

    def search_roots(self) -> List[Path]:
        """Effective search roots, in order, without duplicates."""
        if self.search.roots is not None:
            templates = list(self.search.roots)
        elif self.search.use_default_roots:
            templates = list(get_platform_spec(self.platform).default_search_roots)
        else:
            templates = []
        templates.extend(self.search.extra_roots)

        roots: List[Path] = []
        for template in templates:
            root = self.resolve_path(template)
            if root is None:
                logger.debug("Skipping search root with unset variable: %s", template)
                continue
            if root not in roots:
                roots.append(root)
        return roots

    def max_depth(self) -> int:
        if self.detection.max_depth is not None:
            return self.detection.max_depth
        return get_platform_spec(self.platform).default_max_depth


def find_config_file(project_path: Path) -> Optional[Path]:
    """Find .java-runtimes.toml in project root.

    Args:
        project_path: Root path of the project

    Returns:
        Path to .java-runtimes.toml if found, None otherwise
    """
    config_file = project_path / CONFIG_FILE_NAME
    if config_file.exists():
        return config_file
    return None


def load_config(
    project_path: Optional[Path] = None,
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> JavaRuntimesConfig:
    """Load configuration from a TOML file or use defaults.

    An explicit ``config_file`` (or one named by ``JAVA_RUNTIMES_CONFIG``)
    must exist and parse. A ``.java-runtimes.toml`` found in the project
    root is best-effort: if it cannot be parsed, defaults are used.

    Args:
        project_path: Root path of the project (defaults to cwd)
        config_file: Explicit config file path
        environ: Environment to read JAVA_RUNTIMES_CONFIG from

    Returns:
        JavaRuntimesConfig with loaded or default configuration

    Raises:
        ConfigError: If an explicit config file is missing or invalid
    """
    project_path = Path(project_path) if project_path else Path.cwd()
    config = JavaRuntimesConfig(project_root=project_path)

    environ = os.environ if environ is None else environ
    if config_file is None and environ.get(CONFIG_ENV_VAR):
        config_file = Path(environ[CONFIG_ENV_VAR])

    explicit = config_file is not None
    if config_file is None:
        config_file = find_config_file(project_path)
        if not config_file:
            # No config file, use defaults
            return config
    elif not config_file.is_file():
        raise ConfigError("Config file not found", config_file)

    # Parse TOML file
    try:
        with open(config_file, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if explicit:
            raise ConfigError(f"Cannot parse config file ({e})", config_file) from e
        logger.warning("Ignoring unparsable config file %s: %s", config_file, e)
        return config

    _apply_config_data(config, data, config_file)
    return config


def _apply_config_data(config: JavaRuntimesConfig, data: Dict[str, Any], source: Path) -> None:
    # Parse detection config
    if "detection" in data:
        detection_data = _section(data, "detection", source)
        max_depth = detection_data.get("max_depth")
        if max_depth is not None:
            if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
                raise ConfigError(str(InvalidDepthError(max_depth)), source)
            config.detection.max_depth = max_depth
        config.detection.include_environment = _bool(
            detection_data, "include_environment", True, source
        )
        config.detection.follow_symlinks = _bool(detection_data, "follow_symlinks", True, source)
        config.detection.parallel = _bool(detection_data, "parallel", False, source)
        config.platform = _string(detection_data, "platform", None, source)

    # Parse search config
    if "search" in data:
        search_data = _section(data, "search", source)
        config.search.roots = _string_list(search_data, "roots", source)
        config.search.extra_roots = _string_list(search_data, "extra_roots", source) or []
        config.search.use_default_roots = _bool(search_data, "use_default_roots", True, source)

    # Parse environment config
    if "environment" in data:
        env_data = _section(data, "environment", source)
        variables = _string_list(env_data, "java_home_variables", source)
        if variables is not None:
            config.environment.java_home_variables = variables
        config.environment.path_variable = _string(
            env_data, "path_variable", PATH_VARIABLE, source
        )

    if config.platform is not None:
        try:
            get_platform_spec(config.platform)
        except ValueError as e:
            raise ConfigError(str(e), source) from e


def _section(data: Dict[str, Any], name: str, source: Path) -> Dict[str, Any]:
    section = data[name]
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table", source)
    return section


def _string_list(section: Dict[str, Any], key: str, source: Path) -> Optional[List[str]]:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{key}' must be a list of strings", source)
    return value


def _bool(section: Dict[str, Any], key: str, default: bool, source: Path) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false", source)
    return value


def _string(
    section: Dict[str, Any], key: str, default: Optional[str], source: Path
) -> Optional[str]:
    value = section.get(key, default)
    if value is not None and (not isinstance(value, str) or not value):
        raise ConfigError(f"'{key}' must be a non-empty string", source)
    return value
