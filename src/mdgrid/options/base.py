"""Shared plumbing for the mdgrid option dataclasses.

Every options class is a frozen dataclass. Field ``metadata`` carries a
``help`` string that the CLI reuses, and ``importance`` marks options that
are rarely changed.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """``create_updated`` and ``from_mapping`` for frozen options."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with ``kwargs`` applied; validation runs again."""
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Self:
        """Build an instance from a config table.

        ``search-radius`` and ``search_radius`` name the same field. Keys that
        are not fields are dropped and lists become tuples, since TOML, YAML
        and JSON all load arrays as lists.

        Raises
        ------
        ValueError
            If a value fails the class's validation

        """
        names = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        kwargs = {
            key.replace("-", "_"): tuple(value) if isinstance(value, list) else value
            for key, value in values.items()
            if key.replace("-", "_") in names
        }
        return cls(**kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Options common to every renderer.

    Parameters
    ----------
    fail_on_resource_errors : bool, default=False
        Raise RenderingError when a grid block cannot be rendered. Otherwise
        the error is logged and the block keeps whatever was already filled.

    """

    fail_on_resource_errors: bool = field(
        default=False,
        metadata={
            "help": "Raise RenderingError when a grid block fails to render instead of logging it",
            "importance": "advanced",
        },
    )


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Options common to every parser; subclasses add fields and checks."""

    def __post_init__(self) -> None:
        """Hook for subclass validation."""
