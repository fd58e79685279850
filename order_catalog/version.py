"""
Version information for the Order Catalog API.

Single source of truth: pyproject.toml
Runtime access via importlib.metadata with fallback.
"""

from __future__ import annotations

import os
import sys
from functools import lru_cache
from typing import Any

# Fallback version if package metadata unavailable (dev mode)
_FALLBACK_VERSION = "0.1.0"

DISTRIBUTION_NAME = "order-catalog-api"


def get_version() -> str:
    """Get the package version from metadata or fallback."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return _FALLBACK_VERSION


VERSION = get_version()


@lru_cache(maxsize=1)
def get_build_info() -> dict[str, str | None]:
    """
    Get build metadata from environment.

    Returns:
        dict with commit, build_date and build_number
    """
    commit = os.environ.get("GIT_COMMIT")
    return {
        "commit": commit[:8] if commit and len(commit) > 8 else commit,
        "build_date": os.environ.get("BUILD_DATE"),
        "build_number": os.environ.get("BUILD_NUMBER"),
    }


def version_info() -> dict[str, Any]:
    """
    Get comprehensive version information.

    Returns:
        dict with version, python_version and build info
    """
    build = get_build_info()

    return {
        "version": VERSION,
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        "git_commit": build.get("commit"),
        "build_date": build.get("build_date"),
        "build_number": build.get("build_number"),
    }


def version_string() -> str:
    """
    Get formatted version string for display.

    Returns:
        Formatted version string like "v0.1.0 (abc1234)"
    """
    info = version_info()
    parts = [f"v{info['version']}"]
    if info.get("git_commit"):
        parts.append(f"({info['git_commit']})")
    return " ".join(parts)
