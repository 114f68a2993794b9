#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for grid block parsing and rendering.

The parser options only shape the defaults that a block's own
``grid-settings`` section overrides. The renderer options control how the
resulting layout is written out as HTML.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mdgrid.constants import (
    DEFAULT_DYNAMIC_HEIGHT,
    DEFAULT_GRID_COLUMNS,
    DEFAULT_GRID_ROWS,
    DEFAULT_IMAGE_ERROR_TEXT,
    DEFAULT_SHOW_BORDERS,
    MAX_GRID_COLUMNS,
)
from mdgrid.options.base import BaseParserOptions, BaseRendererOptions


# src/mdgrid/options/grid.py
@dataclass(frozen=True)
class GridParserOptions(BaseParserOptions):
    """Configuration options for parsing grid blocks.

    Parameters
    ----------
    default_columns : int, default 2
        Column count used when a block does not set ``columns`` or sets it
        to a value that is not a positive integer.
    default_rows : int, default 2
        Row count used when a block does not set ``rows`` or sets it to a
        value that is not a positive integer.
    default_show_borders : bool, default True
        Border visibility when ``show-borders`` is absent.
    default_dynamic_height : bool, default True
        Whether rows size to their content when ``dynamic-height`` is absent.
    max_columns : int, default 26
        Upper bound on the column count. Column addresses are single letters,
        so anything beyond ``Z`` cannot be addressed.

    """

    default_columns: int = field(
        default=DEFAULT_GRID_COLUMNS,
        metadata={"help": "Column count when a block does not specify one", "type": int, "importance": "core"},
    )
    default_rows: int = field(
        default=DEFAULT_GRID_ROWS,
        metadata={"help": "Row count when a block does not specify one", "type": int, "importance": "core"},
    )
    default_show_borders: bool = field(
        default=DEFAULT_SHOW_BORDERS,
        metadata={"help": "Show cell borders when a block does not specify show-borders", "importance": "core"},
    )
    default_dynamic_height: bool = field(
        default=DEFAULT_DYNAMIC_HEIGHT,
        metadata={"help": "Size rows to content when a block does not specify dynamic-height", "importance": "core"},
    )
    max_columns: int = field(
        default=MAX_GRID_COLUMNS,
        metadata={"help": "Maximum number of addressable columns", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any count is not positive or exceeds the addressable range.

        """
        super().__post_init__()
        if self.default_columns <= 0:
            raise ValueError(f"default_columns must be positive, got {self.default_columns}")
        if self.default_rows <= 0:
            raise ValueError(f"default_rows must be positive, got {self.default_rows}")
        if not 0 < self.max_columns <= MAX_GRID_COLUMNS:
            raise ValueError(f"max_columns must be between 1 and {MAX_GRID_COLUMNS}, got {self.max_columns}")
        if self.default_columns > self.max_columns:
            raise ValueError(
                f"default_columns ({self.default_columns}) cannot exceed max_columns ({self.max_columns})"
            )


@dataclass(frozen=True)
class GridRendererOptions(BaseRendererOptions):
    """Configuration options for rendering grid layouts and documents to HTML.

    Parameters
    ----------
    standalone : bool, default False
        Wrap rendered documents in a complete HTML page. Fragments are
        returned otherwise.
    include_css : bool, default True
        Embed the grid stylesheet in a ``<style>`` block (standalone only).
    title : str, default ""
        ``<title>`` of standalone pages.
    image_error_handler : bool, default True
        Attach an ``onerror`` handler to images inside cells that hides a
        broken image and shows a visible marker in its place.
    image_error_text : str
        Text of the marker shown for images that fail to load.
    attachment_base : str or None, default None
        Base URL or path that embedded-image filenames (``![[file]]``) are
        resolved against. When unset, filenames resolve relative to the
        directory of the source document.

    """

    standalone: bool = field(
        default=False,
        metadata={"help": "Generate a complete HTML page instead of a fragment", "importance": "core"},
    )
    include_css: bool = field(
        default=True,
        metadata={"help": "Embed the grid stylesheet in standalone output", "importance": "core"},
    )
    title: str = field(
        default="",
        metadata={"help": "Title of standalone HTML pages", "importance": "advanced"},
    )
    image_error_handler: bool = field(
        default=True,
        metadata={"help": "Replace images that fail to load with a visible marker", "importance": "advanced"},
    )
    image_error_text: str = field(
        default=DEFAULT_IMAGE_ERROR_TEXT,
        metadata={"help": "Marker text for images that fail to load", "importance": "advanced"},
    )
    attachment_base: str | None = field(
        default=None,
        metadata={"help": "Base URL or path for embedded-image filenames", "importance": "core"},
    )
