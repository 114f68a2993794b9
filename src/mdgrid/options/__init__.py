#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for mdgrid parsing, rendering and image editing.

Options are frozen dataclasses. Derive variants with ``create_updated`` and
build them from configuration files with ``from_mapping``.
"""

from __future__ import annotations

from mdgrid.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdgrid.options.grid import GridParserOptions, GridRendererOptions
from mdgrid.options.images import ImageModifierOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "GridParserOptions",
    "GridRendererOptions",
    "ImageModifierOptions",
]
