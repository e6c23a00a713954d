"""Validation and metadata extraction for candidate Java homes."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .errors import VersionNotFoundError
from .specs import (
    ARCHITECTURE_PATTERN,
    BIN_DIR_NAME,
    EXTRACTION_STRATEGIES,
    DirectoryNameExtraction,
    ExtractionStrategy,
    ReleaseFileExtraction,
    get_platform_spec,
    normalize_architecture,
)
from .types import Candidate, JavaRuntime, RuntimeMetadata
from .utils.path import canonicalize, is_executable_file

logger = logging.getLogger(__name__)

# A quoted version, as in `java version "1.8.0_333"` or JAVA_VERSION="17.0.2"
_QUOTED_VERSION = re.compile(r'"(\d+(?:[._]\d+)*)"')
_BARE_VERSION = re.compile(r"(?<![\w.])(\d+(?:[._]\d+)*)")


def extract_version(text: str) -> str:
    """Pull a Java version string out of free text.

    Examples:
        >>> extract_version("17.0.4.1")
        '17.0.4.1'
        >>> extract_version('java version "1.8.0_333"')
        '1.8.0_333'
        >>> extract_version('"17.0.2+8"')
        '17.0.2'

    Raises:
        VersionNotFoundError: If the text holds no version
    """
    match = _QUOTED_VERSION.search(text) or _QUOTED_VERSION.search(f'"{text.strip()}"')
    if match is None:
        match = _BARE_VERSION.search(text)
    if match is None:
        raise VersionNotFoundError(text)
    return match.group(1)


def parse_release_descriptor(content: str) -> Dict[str, str]:
    """Parse ``KEY="value"`` lines from a Java ``release`` file.

    Blank lines, comments and lines without ``=`` are skipped. Surrounding
    quotes are stripped from values.
    """
    values: Dict[str, str] = {}
    for line_number, raw_line in enumerate(content.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            logger.debug("Skipping malformed release line %d: %r", line_number, raw_line)
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key] = value.strip()
    return values


class RuntimeClassifier:
    """Decides whether a directory is a Java home and describes it.

    Uses the declarative EXTRACTION_STRATEGIES from specs. Strategies are
    tried by priority (higher first) and each metadata field takes the first
    strategy that provides it.
    """

    def __init__(
        self,
        platform: Optional[str] = None,
        strategies: Optional[Sequence[ExtractionStrategy]] = None,
    ):
        """Initialize classifier.

        Args:
            platform: Platform key for launcher names (defaults to running platform)
            strategies: Extraction strategies (defaults to EXTRACTION_STRATEGIES)
        """
        self.platform_spec = get_platform_spec(platform)
        self.strategies: List[ExtractionStrategy] = sorted(
            strategies if strategies is not None else EXTRACTION_STRATEGIES,
            key=lambda s: s.priority,
            reverse=True,
        )

    def find_launcher(self, bin_dir: Path) -> Optional[Path]:
        """Return the executable ``java`` launcher inside ``bin_dir``, if any."""
        for name in self.platform_spec.executable_names:
            launcher = bin_dir / name
            if is_executable_file(launcher):
                return launcher
        return None

    def is_java_home(self, directory: Path) -> bool:
        return self.find_launcher(Path(directory) / BIN_DIR_NAME) is not None

    def classify(
        self,
        candidate: Union[Candidate, str, Path],
    ) -> Optional[JavaRuntime]:
        """Validate a candidate directory and extract its metadata.

        Args:
            candidate: Candidate or plain directory path

        Returns:
            JavaRuntime with a canonical path, or None when the directory
            has no executable launcher under ``bin``
        """
        home = candidate.path if isinstance(candidate, Candidate) else Path(candidate)

        if not self.is_java_home(home):
            logger.debug("Rejected candidate without java launcher: %s", home)
            return None

        canonical = canonicalize(home)
        if canonical is None:
            logger.debug("Could not canonicalize candidate: %s", home)
            return None

        metadata = self._extract_metadata(canonical)
        return JavaRuntime(
            path=canonical,
            version=metadata.version or "",
            vendor=metadata.vendor,
            architecture=metadata.architecture,
        )

    def _extract_metadata(self, home: Path) -> RuntimeMetadata:
        metadata = RuntimeMetadata()
        for rule in self.strategies:
            extracted = self._apply_extraction_rule(home, rule)
            if extracted:
                metadata = metadata.merged(extracted)
            if metadata.is_complete:
                break
        return metadata

    def _apply_extraction_rule(
        self,
        home: Path,
        rule: ExtractionStrategy,
    ) -> Optional[RuntimeMetadata]:
        """Apply a single extraction rule."""
        rule_type = rule.type

        if rule_type == "release_file":
            return self._extract_release_file(home, rule)
        elif rule_type == "directory_name":
            return self._extract_directory_name(home, rule)

        return None

    def _extract_release_file(
        self,
        home: Path,
        rule: ReleaseFileExtraction,
    ) -> Optional[RuntimeMetadata]:
        """Read version, vendor and architecture from the release descriptor."""
        release_file = home / rule.file_name
        if not release_file.is_file():
            return None

        try:
            with open(release_file, "rb") as f:
                raw = f.read(rule.max_bytes)
        except OSError as e:
            logger.debug("Could not read %s: %s", release_file, e)
            return None

        values = parse_release_descriptor(raw.decode("utf-8", errors="replace"))

        version = None
        for key in rule.version_keys:
            if values.get(key):
                try:
                    version = extract_version(values[key])
                    break
                except VersionNotFoundError:
                    logger.debug("Unparsable %s in %s: %r", key, release_file, values[key])

        vendor = next((values[k] for k in rule.vendor_keys if values.get(k)), None)
        architecture = next(
            (normalize_architecture(values[k]) for k in rule.architecture_keys if values.get(k)),
            None,
        )

        return RuntimeMetadata(version=version, vendor=vendor, architecture=architecture)

    def _extract_directory_name(
        self,
        home: Path,
        rule: DirectoryNameExtraction,
    ) -> Optional[RuntimeMetadata]:
        """Infer version and architecture from the folder name."""
        name = self._installation_name(home, rule)
        if not name:
            return None

        architecture = None
        arch_match = ARCHITECTURE_PATTERN.search(name)
        if arch_match:
            architecture = normalize_architecture(arch_match.group(1))
            # "amd64" must not be read as version 64
            name = ARCHITECTURE_PATTERN.sub("-", name)

        version = None
        for pattern in rule.patterns:
            match = re.search(pattern, name, re.IGNORECASE)
            if match:
                version = match.group(1)
                break

        if version is None and architecture is None:
            return None
        return RuntimeMetadata(version=version, architecture=architecture)

    @staticmethod
    def _installation_name(home: Path, rule: DirectoryNameExtraction) -> str:
        suffix = rule.bundle_suffix
        parts = home.parts
        if suffix and len(parts) > len(suffix) and list(parts[-len(suffix):]) == suffix:
            return parts[-len(suffix) - 1]
        return home.name
