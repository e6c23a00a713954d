"""Declarative detection specifications for Java runtimes.

This is DATA, not code. To recognize a new metadata source or a new platform
layout, add its spec here.
"""

import re
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Union

BIN_DIR_NAME = "bin"

# Consulted in this order; each non-empty value is one candidate Java home
JAVA_HOME_VARIABLES: List[str] = ["JAVA_HOME", "JAVA_ROOT", "JDK_HOME", "JRE_HOME"]
PATH_VARIABLE = "PATH"


@dataclass(frozen=True)
class ReleaseFileExtraction:
    """Read metadata from the ``release`` descriptor at the Java home."""
    type: Literal["release_file"] = "release_file"
    file_name: str = "release"
    version_keys: List[str] = field(default_factory=list)
    vendor_keys: List[str] = field(default_factory=list)
    architecture_keys: List[str] = field(default_factory=list)
    max_bytes: int = 64 * 1024
    priority: int = 10


@dataclass(frozen=True)
class DirectoryNameExtraction:
    """Infer metadata from the installation folder name (``jdk-17.0.2``)."""
    type: Literal["directory_name"] = "directory_name"
    # Tried in order; group 1 is the version
    patterns: List[str] = field(default_factory=list)
    # macOS bundles keep the Java home at <name>.jdk/Contents/Home
    bundle_suffix: List[str] = field(default_factory=lambda: ["Contents", "Home"])
    priority: int = 5


# Union of all extraction strategies
ExtractionStrategy = Union[
    ReleaseFileExtraction,
    DirectoryNameExtraction,
]


@dataclass(frozen=True)
class PlatformSpec:
    """Launcher names and default search locations for one platform family."""
    display_name: str
    executable_names: List[str]
    default_search_roots: List[str]
    default_max_depth: int = 2


EXTRACTION_STRATEGIES: List[ExtractionStrategy] = [
    ReleaseFileExtraction(
        file_name="release",
        version_keys=["JAVA_VERSION", "JAVA_RUNTIME_VERSION"],
        vendor_keys=["IMPLEMENTOR", "JAVA_VENDOR"],
        architecture_keys=["OS_ARCH"],
        priority=10,
    ),
    DirectoryNameExtraction(
        patterns=[
            r"(?:jdk|jre|java)[-_]?(\d+(?:\.\d+)*(?:_\d+)?)",
            r"(?<![\d.])(\d+(?:\.\d+)*(?:_\d+)?)",
        ],
        priority=5,
    ),
]

# Raw tags seen in release files and folder names -> normalized tag
ARCHITECTURE_ALIASES: Dict[str, str] = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
    "i386": "x86",
    "i586": "x86",
    "i686": "x86",
    "x86": "x86",
    "x32": "x86",
    "ppc64le": "ppc64le",
    "ppc64": "ppc64",
    "s390x": "s390x",
    "riscv64": "riscv64",
    "armhf": "arm",
    "arm32": "arm",
    "arm": "arm",
}

# Longest alias first so "x86_64" is not read as "x86"
ARCHITECTURE_PATTERN = re.compile(
    r"(?<![a-z0-9])("
    + "|".join(sorted(map(re.escape, ARCHITECTURE_ALIASES), key=len, reverse=True))
    + r")(?![a-z0-9])",
    re.IGNORECASE,
)


PLATFORM_SPECS: Dict[str, PlatformSpec] = {
    "linux": PlatformSpec(
        display_name="Linux",
        executable_names=["java"],
        default_search_roots=[
            "/usr/lib/jvm",
            "/usr/lib64/jvm",
            "/usr/java",
            "/opt",
            "~/.sdkman/candidates/java",
            "~/.jdks",
            "~/.gradle/jdks",
        ],
        default_max_depth=2,
    ),
    "darwin": PlatformSpec(
        display_name="macOS",
        executable_names=["java"],
        default_search_roots=[
            "/Library/Java/JavaVirtualMachines",
            "~/Library/Java/JavaVirtualMachines",
            "~/.sdkman/candidates/java",
            "~/.jdks",
        ],
        # <name>.jdk/Contents/Home sits three levels below the root
        default_max_depth=3,
    ),
    "windows": PlatformSpec(
        display_name="Windows",
        executable_names=["java.exe"],
        default_search_roots=[
            "${ProgramFiles}/Java",
            "${ProgramFiles}/Eclipse Adoptium",
            "${ProgramFiles}/Eclipse Foundation",
            "${ProgramFiles}/Amazon Corretto",
            "${ProgramFiles}/BellSoft",
            "${ProgramFiles}/Microsoft",
            "${ProgramFiles}/Zulu",
            "${ProgramFiles(x86)}/Java",
            "~/.jdks",
        ],
        default_max_depth=2,
    ),
}


def current_platform() -> str:
    """Map ``sys.platform`` onto a PLATFORM_SPECS key."""
    if sys.platform.startswith("win") or sys.platform == "cygwin":
        return "windows"
    if sys.platform == "darwin":
        return "darwin"
    return "linux"


def get_platform_spec(platform: Optional[str] = None) -> PlatformSpec:
    """Get the platform spec, defaulting to the running platform.

    Args:
        platform: Platform key ("linux", "darwin", "windows")

    Returns:
        Platform specification (typed dataclass)

    Raises:
        ValueError: If platform not supported
    """
    key = platform or current_platform()
    if key not in PLATFORM_SPECS:
        supported = ", ".join(PLATFORM_SPECS.keys())
        raise ValueError(
            f"Platform '{key}' not supported. "
            f"Supported platforms: {supported}"
        )

    return PLATFORM_SPECS[key]


def normalize_architecture(raw: Optional[str]) -> Optional[str]:
    """Normalize an architecture tag, keeping unknown tags lowercased."""
    if not raw:
        return None
    value = raw.strip().strip("\"'").lower()
    if not value:
        return None
    return ARCHITECTURE_ALIASES.get(value, value)
