#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdgrid/api.py
"""High-level API for parsing, laying out and rendering grid blocks.

These functions wire the parser, the layout builder and the renderers
together with sensible defaults. Use the classes directly for finer control
(custom Markdown renderers, reusing a configured pipeline, etc.).

Examples
--------
    >>> from mdgrid import parse_grid, render_document
    >>> block = parse_grid("=== start-grid: g\\n=== cell A1 ===\\nx\\n=== end-grid")
    >>> html = render_document(open("notes.md").read(), source_path="notes.md")

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from mdgrid.ast.builder import LayoutBuilder
from mdgrid.ast.nodes import GridBlock, GridCell, GridLayout, GridSettings
from mdgrid.context import RenderContext
from mdgrid.exceptions import ImageReferenceNotFoundError
from mdgrid.images.editor import LinesEditor
from mdgrid.images.locator import ImageLocator
from mdgrid.images.rewriter import ModifierRewriter
from mdgrid.options.grid import GridParserOptions, GridRendererOptions
from mdgrid.options.images import ImageModifierOptions
from mdgrid.parsers.grid import GridParser
from mdgrid.renderers.document import DocumentRenderer
from mdgrid.renderers.markdown import MarkdownRenderer

logger = logging.getLogger(__name__)


def parse_grid(block_text: Union[str, Path, bytes], options: Optional[GridParserOptions] = None) -> GridBlock:
    """Parse the text of one grid block into settings and cells."""
    return GridParser(options).parse(block_text)


def build_layout(
    settings: GridSettings,
    cells: Iterable[GridCell] = (),
    context: Optional[RenderContext] = None,
    grid_id: Optional[str] = None,
) -> GridLayout:
    """Build the immutable layout of a grid: one slot per (row, column) address."""
    return LayoutBuilder(context).build(settings, cells, grid_id)


def render_grid(
    block_text: str,
    source_path: Optional[str] = None,
    options: Optional[GridRendererOptions] = None,
    context: Optional[RenderContext] = None,
    markdown_renderer: Optional[MarkdownRenderer] = None,
    parser_options: Optional[GridParserOptions] = None,
) -> str:
    """Render one grid block to an HTML fragment."""
    renderer = DocumentRenderer(options, context, markdown_renderer, parser_options)
    return renderer.render_grid(block_text, source_path)


def render_document(
    markdown_text: str,
    source_path: Optional[str] = None,
    options: Optional[GridRendererOptions] = None,
    context: Optional[RenderContext] = None,
    markdown_renderer: Optional[MarkdownRenderer] = None,
    parser_options: Optional[GridParserOptions] = None,
    image_options: Optional[ImageModifierOptions] = None,
) -> str:
    """Render a Markdown document, expanding every grid block it contains.

    Parameters
    ----------
    markdown_text : str
        Document text
    source_path : str or None
        Path of the document, used to resolve relative links and embeds
    options : GridRendererOptions or None
        HTML rendering options (standalone pages, stylesheet, image handling)
    context : RenderContext or None
        Application context (invisible mode)
    markdown_renderer : MarkdownRenderer or None
        Alternative Markdown capability
    parser_options : GridParserOptions or None
        Defaults for grid settings
    image_options : ImageModifierOptions or None
        Keyword sets for embedded-image classes

    Returns
    -------
    str
        Rendered HTML

    """
    renderer = DocumentRenderer(options, context, markdown_renderer, parser_options, image_options)
    return renderer.render_to_string(markdown_text, source_path=source_path)


def modify_image(
    text: str,
    cursor_line: int,
    position: Optional[str] = None,
    size: Optional[str] = None,
    options: Optional[ImageModifierOptions] = None,
) -> str:
    """Rewrite the embedded image nearest ``cursor_line`` in ``text``.

    Unlike :class:`~mdgrid.images.modifier.ImageModifier`, which reports a
    missing image through a notice, this function raises.

    Returns
    -------
    str
        The updated document text

    Raises
    ------
    ImageReferenceNotFoundError
        If no reference lies within the search window

    """
    options = options or ImageModifierOptions()
    editor = LinesEditor(text)
    match = ImageLocator(options.search_radius).locate(editor, cursor_line)
    if match is None:
        raise ImageReferenceNotFoundError(cursor_line)

    editor.set_line(match.line_index, ModifierRewriter(options).rewrite(match, position, size))
    return editor.text
