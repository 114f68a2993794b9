"""mdgrid - multi-column grid layouts for Markdown documents.

mdgrid renders a small fenced-block markup into CSS grid layouts and edits
the position and size modifiers of embedded images (``![[pic.png|left]]``).

Grid blocks live inside fenced code blocks::

    ```
    === start-grid: ID_1700000000000

    grid-settings
    columns: 2
    rows: 1

    === cell A1 ===
    Left

    === cell B1 ===
    Right

    === end-grid
    ```

Key Features
------------
- Line-oriented parser for grid settings and cells
- Immutable layout model with one slot per (row, column) address
- Markdown rendering of every cell via mistune, with embedded-image support
- Image post-processing with a visible marker for images that fail to load
- Context-menu style actions that rewrite image modifiers in place
- Template generator for new grids

Requirements
------------
- Python 3.10+
- mistune and beautifulsoup4 for rendering

Examples
--------
Render a document:

    >>> from mdgrid import render_document
    >>> html = render_document(markdown_text, source_path="notes/today.md")

Work with the pieces directly:

    >>> from mdgrid import parse_grid, build_layout
    >>> block = parse_grid(block_text)
    >>> layout = build_layout(block.settings, block.cells)
    >>> [slot.id for slot in layout.slots]
    ['A1', 'B1', 'A2', 'B2']

Move an image:

    >>> from mdgrid import modify_image
    >>> modify_image("![[pic.png|left|small]]", cursor_line=0, position="right")
    '![[pic.png|right|small]]'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mdgrid requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.3.0"

from mdgrid.api import build_layout, modify_image, parse_grid, render_document, render_grid
from mdgrid.ast import GridBlock, GridCell, GridLayout, GridSettings, GridSlot, ImageReference, LayoutBuilder
from mdgrid.context import RenderContext
from mdgrid.exceptions import (
    DependencyError,
    ImageReferenceNotFoundError,
    MdGridError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from mdgrid.images import ImageLocator, ImageModifier, LinesEditor, ModifierRewriter, TextEditor
from mdgrid.options import GridParserOptions, GridRendererOptions, ImageModifierOptions
from mdgrid.parsers import GridParser
from mdgrid.renderers import ContentInjector, DocumentRenderer, GridHtmlRenderer, MistuneMarkdownRenderer
from mdgrid.templates import TEMPLATE_PRESETS, make_preset_template, make_template

__all__ = [
    "__version__",
    # High-level API
    "parse_grid",
    "build_layout",
    "render_grid",
    "render_document",
    "modify_image",
    "make_template",
    "make_preset_template",
    "TEMPLATE_PRESETS",
    # Model
    "GridBlock",
    "GridCell",
    "GridLayout",
    "GridSettings",
    "GridSlot",
    "ImageReference",
    "RenderContext",
    # Components
    "GridParser",
    "LayoutBuilder",
    "ContentInjector",
    "GridHtmlRenderer",
    "DocumentRenderer",
    "MistuneMarkdownRenderer",
    "ImageLocator",
    "ModifierRewriter",
    "ImageModifier",
    "TextEditor",
    "LinesEditor",
    # Options
    "GridParserOptions",
    "GridRendererOptions",
    "ImageModifierOptions",
    # Exceptions
    "MdGridError",
    "ValidationError",
    "ParsingError",
    "RenderingError",
    "ImageReferenceNotFoundError",
    "DependencyError",
]
