"""MCP Server for java-runtimes.

Exposes Java runtime detection as MCP tools using FastMCP.
"""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from mcp.server import FastMCP

from .classifier import RuntimeClassifier
from .config import load_config
from .detector import detect_java_in_environments, detect_java_runtimes

PROJECT_PATH_ENV_VAR = "JAVA_RUNTIMES_PROJECT_PATH"

# Project path used to locate .java-runtimes.toml
_project_path: Optional[str] = None

mcp = FastMCP("Java Runtimes")


def set_project_path(path: str) -> None:
    """Set the project path used to locate .java-runtimes.toml."""
    global _project_path
    _project_path = str(Path(path).resolve())


def get_project_path() -> str:
    """Get the current project path."""
    return _project_path or os.getenv(PROJECT_PATH_ENV_VAR) or os.getcwd()


# ============================================================================
# Detection Tools
# ============================================================================


@mcp.tool()
async def list_java_runtimes(
    roots: List[str] | None = None,
    max_depth: int | None = None,
    include_environment: bool = True,
) -> Dict[str, Any]:
    """List Java runtimes installed on this machine.

    Checks JAVA_HOME-style variables and PATH, then searches directories
    (platform defaults such as /usr/lib/jvm, or the given roots) for folders
    containing bin/java.

    Args:
        roots: Directories to search instead of the configured roots
        max_depth: How many levels below each root to search
        include_environment: Also check environment variables

    Returns:
        Detected runtimes (newest first) with the roots and depth used
    """
    config = load_config(Path(get_project_path()))
    if roots is not None:
        config.search.roots = roots
        config.search.extra_roots = []
    if max_depth is not None:
        config.detection.max_depth = max_depth
    config.detection.include_environment = include_environment

    runtimes = await asyncio.to_thread(detect_java_runtimes, config)

    return {
        "count": len(runtimes),
        "runtimes": [runtime.to_dict() for runtime in runtimes],
        "search_roots": [str(root) for root in config.search_roots()],
        "max_depth": config.max_depth(),
    }


@mcp.tool()
async def find_java_in_environment() -> Dict[str, Any]:
    """List Java runtimes named by JAVA_HOME, JDK_HOME, JRE_HOME, JAVA_ROOT or PATH.

    Returns:
        Detected runtimes and the raw JAVA_HOME value
    """
    runtimes = await asyncio.to_thread(detect_java_in_environments)
    return {
        "java_home": os.getenv("JAVA_HOME"),
        "runtimes": [runtime.to_dict() for runtime in sorted(runtimes, key=lambda r: str(r.path))],
    }


@mcp.tool()
async def inspect_java_home(path: str) -> Dict[str, Any]:
    """Check whether a directory is a Java installation and describe it.

    Args:
        path: Directory expected to contain bin/java

    Returns:
        is_java_home flag and the runtime details when it is one
    """
    runtime = await asyncio.to_thread(RuntimeClassifier().classify, Path(path))
    return {
        "path": path,
        "is_java_home": runtime is not None,
        "runtime": runtime.to_dict() if runtime else None,
    }


@mcp.tool()
async def get_detection_config() -> Dict[str, Any]:
    """Show the detection settings in effect for the current project.

    Returns:
        Search roots, depth and environment variables that will be used
    """
    config = load_config(Path(get_project_path()))
    return {
        "project_path": str(config.project_root),
        "search_roots": [str(root) for root in config.search_roots()],
        "max_depth": config.max_depth(),
        "include_environment": config.detection.include_environment,
        "follow_symlinks": config.detection.follow_symlinks,
        "parallel": config.detection.parallel,
        "java_home_variables": config.environment.java_home_variables,
        "path_variable": config.environment.path_variable,
    }


# ============================================================================
# Entry Point
# ============================================================================


def main():
    """Run the MCP server.

    The project path can be set via:
    1. First command line argument
    2. JAVA_RUNTIMES_PROJECT_PATH environment variable
    3. Current working directory (default)

    Example:
        JAVA_RUNTIMES_PROJECT_PATH=/path/to/project java-runtimes-mcp
    """
    # Variables from a .env file (e.g. JAVA_HOME) count as environment
    load_dotenv()

    # Allow setting project path from command line argument
    if len(sys.argv) > 1 and not sys.argv[1].startswith("-"):
        set_project_path(sys.argv[1])
        # Remove the argument so FastMCP doesn't see it
        sys.argv = [sys.argv[0]] + sys.argv[2:]

    project_path = get_project_path()

    # Print server info to stderr (stdout is used for MCP protocol)
    print("Starting java-runtimes MCP Server", file=sys.stderr)
    print(f"Project: {project_path}", file=sys.stderr)
    print("", file=sys.stderr)

    mcp.run()


if __name__ == "__main__":
    main()
