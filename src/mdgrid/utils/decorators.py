#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdgrid/utils/decorators.py
"""Decorators shared by the mdgrid renderers.

Markdown rendering needs mistune and document post-processing needs
beautifulsoup4. ``requires_dependencies`` checks them when the decorated
method is called and raises a DependencyError with an install hint instead of
a bare ImportError deep inside a render.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import lru_cache, wraps
from typing import Any, Callable, Generator, List, Optional, Tuple

from mdgrid.exceptions import DependencyError
from mdgrid.utils.packages import check_version_requirement

PackageRequirement = Tuple[str, str, str]


@lru_cache(maxsize=None)
def _collect_problems(
    packages: Tuple[PackageRequirement, ...],
) -> tuple[tuple[tuple[str, str], ...], tuple[tuple[str, str, str], ...], Optional[ImportError]]:
    # Imports and installed versions do not change within a process
    missing: list[tuple[str, str]] = []
    outdated: list[tuple[str, str, str]] = []
    first_error: Optional[ImportError] = None

    for install_name, import_name, version_spec in packages:
        try:
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            first_error = first_error or e
            continue
        if not version_spec:
            continue
        satisfied, installed = check_version_requirement(install_name, version_spec)
        if not satisfied:
            outdated.append((install_name, version_spec, installed or "unknown"))

    return tuple(missing), tuple(outdated), first_error


def requires_dependencies(component_name: str, packages: List[PackageRequirement]) -> Callable:
    """Refuse to run the decorated callable unless ``packages`` are importable.

    Parameters
    ----------
    component_name : str
        Label used in the error message, e.g. ``"markdown"``
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` for each requirement

    Raises
    ------
    DependencyError
        When a package is missing or fails its version specifier

    Examples
    --------
        >>> @requires_dependencies("document", [("beautifulsoup4", "bs4", ">=4.12.0")])
        ... def replace_blocks(self, html):
        ...     from bs4 import BeautifulSoup

    """
    requirements = tuple(tuple(package) for package in packages)

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing, outdated, first_error = _collect_problems(requirements)
            if missing or outdated:
                raise DependencyError(
                    component_name=component_name,
                    missing_packages=list(missing),
                    version_mismatches=list(outdated),
                    original_import_error=first_error,
                ) from first_error
            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long the block took, when ``logger`` is enabled for DEBUG."""
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return
    started = time.perf_counter()
    yield
    logger.debug("%s completed in %.3fs", operation, time.perf_counter() - started)
