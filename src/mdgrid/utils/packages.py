"""Utility functions for checking installed packages."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdgrid/utils/packages.py
from __future__ import annotations

from importlib import metadata
from typing import Optional, Tuple

from packaging import version
from packaging.specifiers import InvalidSpecifier, SpecifierSet


def get_package_version(package_name: str) -> Optional[str]:
    """Return the installed version of a distribution, or None if it is absent."""
    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(package_name: str, version_spec: str) -> Tuple[bool, Optional[str]]:
    """Check if an installed package meets a version requirement.

    Parameters
    ----------
    package_name : str
        Distribution name as used by pip (e.g. ``beautifulsoup4``)
    version_spec : str
        Version specification (e.g., ">=3.0.0")

    Returns
    -------
    tuple
        (meets_requirement, installed_version)

    """
    installed_version = get_package_version(package_name)
    if not installed_version:
        return False, None

    try:
        spec = SpecifierSet(version_spec)
    except InvalidSpecifier:
        return True, installed_version

    return version.parse(installed_version) in spec, installed_version
