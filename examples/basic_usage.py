#!/usr/bin/env python3
"""
Example: Basic java-runtimes Usage

This demonstrates the detection API:
- Runtimes named by environment variables
- Runtimes found under search roots
- Accumulating several searches without duplicates

Usage:
    python examples/basic_usage.py [ROOT ...]
"""

import sys

from java_runtimes import (
    RuntimeRegistry,
    detect_java_in_environments,
    detect_java_in_paths,
    detect_java_runtimes,
    gather_java_in_paths,
)


def main():
    roots = sys.argv[1:] or ["/usr", "/opt"]

    print("=" * 70)
    print("1. ENVIRONMENT (JAVA_HOME, JDK_HOME, JRE_HOME, JAVA_ROOT, PATH)")
    print("=" * 70)
    for runtime in detect_java_in_environments():
        print(f"   {runtime!r}")

    print("\n" + "=" * 70)
    print(f"2. SEARCH ROOTS {roots} (max_depth=2)")
    print("=" * 70)
    for runtime in detect_java_in_paths(roots, 2):
        print(f"   {runtime!r}")

    print("\n" + "=" * 70)
    print("3. ACCUMULATED")
    print("=" * 70)
    registry = RuntimeRegistry(detect_java_in_environments())
    added = gather_java_in_paths(registry, roots, 2)
    print(f"   {added} new runtime(s) from the walk, {len(registry)} in total")

    print("\n" + "=" * 70)
    print("4. EVERYTHING CONFIGURED (newest first)")
    print("=" * 70)
    for runtime in detect_java_runtimes():
        print(f"   {runtime.version or '?':<12} {runtime.path}")


if __name__ == "__main__":
    main()
