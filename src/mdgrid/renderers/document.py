#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdgrid/renderers/document.py
"""Render Markdown documents with embedded grid blocks to HTML.

The document is rendered with the Markdown capability first. Every code
block whose text contains a ``=== start-grid:`` sentinel is then replaced by
the rendered grid; all other code blocks are left alone.

A failure while filling one grid is logged and the partially filled grid is
kept, so one broken block never takes the rest of the document down. Set
``fail_on_resource_errors`` to raise a RenderingError instead.

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from mdgrid.ast.builder import LayoutBuilder
from mdgrid.constants import CLASS_GLOBAL_INVISIBLE, DEFAULT_GRID_CSS, DEPS_HTML, GRID_START_PREFIX
from mdgrid.context import RenderContext
from mdgrid.exceptions import DependencyError, RenderingError
from mdgrid.options.grid import GridParserOptions, GridRendererOptions
from mdgrid.options.images import ImageModifierOptions
from mdgrid.parsers.grid import GridParser
from mdgrid.renderers.base import BaseRenderer
from mdgrid.renderers.html import ContentInjector, GridHtmlRenderer
from mdgrid.renderers.markdown import MarkdownRenderer, MistuneMarkdownRenderer
from mdgrid.utils.decorators import debug_timer, requires_dependencies
from mdgrid.utils.html_utils import escape_html

logger = logging.getLogger(__name__)


class DocumentRenderer(BaseRenderer):
    """Render Markdown documents, expanding grid blocks into grid layouts.

    Parameters
    ----------
    options : GridRendererOptions or None, default None
        HTML rendering options
    context : RenderContext or None, default None
        Application context (invisible mode)
    markdown_renderer : MarkdownRenderer or None, default None
        Markdown capability used for the document and for every cell
    parser_options : GridParserOptions or None, default None
        Defaults for grid settings
    image_options : ImageModifierOptions or None, default None
        Keyword sets for embedded-image classes (default renderer only)

    Examples
    --------
        >>> renderer = DocumentRenderer()
        >>> html = renderer.render_to_string(open("notes.md").read(), source_path="notes.md")

    """

    def __init__(
        self,
        options: Optional[GridRendererOptions] = None,
        context: Optional[RenderContext] = None,
        markdown_renderer: Optional[MarkdownRenderer] = None,
        parser_options: Optional[GridParserOptions] = None,
        image_options: Optional[ImageModifierOptions] = None,
    ):
        """Initialize the document renderer and its grid pipeline."""
        BaseRenderer._validate_options_type(options, GridRendererOptions, "document")
        options = options or GridRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: GridRendererOptions = options
        self.context = context or RenderContext()
        self.markdown_renderer: MarkdownRenderer = markdown_renderer or MistuneMarkdownRenderer(
            options, image_options
        )

        self.parser = GridParser(parser_options)
        self.builder = LayoutBuilder(self.context)
        self.injector = ContentInjector(self.markdown_renderer, options)
        self.grid_renderer = GridHtmlRenderer(options)

    def render_to_string(self, source: str, source_path: Optional[str] = None, **kwargs: Any) -> str:
        """Render a Markdown document to HTML.

        Parameters
        ----------
        source : str
            Markdown text
        source_path : str or None
            Path of the document, used to resolve relative links

        Returns
        -------
        str
            HTML fragment, or a complete page when ``standalone`` is set

        """
        with debug_timer(logger, f"Rendering {source_path or 'document'}"):
            html = self.markdown_renderer.render(source, source_path)
            html = self.expand_grid_blocks(html, source_path)

        if self.options.standalone:
            return self._wrap_standalone(html)
        return html

    @requires_dependencies("html", DEPS_HTML)
    def expand_grid_blocks(self, html: str, source_path: Optional[str] = None) -> str:
        """Replace every ``<pre><code>`` grid block in rendered HTML with its grid."""
        from bs4 import BeautifulSoup

        soup = BeautifulSoup(html, "html.parser")
        grids = 0
        for code in soup.select("pre > code"):
            text = code.get_text()
            if GRID_START_PREFIX not in text:
                continue
            grid_html = self.render_grid(text, source_path)
            code.parent.replace_with(BeautifulSoup(grid_html, "html.parser"))
            grids += 1

        if not grids:
            return html
        logger.debug("Expanded %d grid block(s)", grids)
        return str(soup)

    def render_grid(self, block_text: str, source_path: Optional[str] = None) -> str:
        """Parse, lay out and fill one grid block, returning its HTML.

        Raises
        ------
        RenderingError
            If a cell fails to render and ``fail_on_resource_errors`` is set
        DependencyError
            If a required package is missing

        """
        block = self.parser.parse(block_text)
        layout = self.builder.build(block.settings, block.cells, block.grid_id)

        try:
            for cell in block.cells:
                layout = self.injector.inject_cell(layout, cell, source_path)
        except DependencyError:
            raise
        except Exception as e:
            grid_name = block.grid_id or "<anonymous>"
            if self.options.fail_on_resource_errors:
                raise RenderingError(
                    f"Failed to render grid {grid_name}: {e}", rendering_stage="content_injection", original_error=e
                ) from e
            logger.error("Failed to render grid %s: %s", grid_name, e)

        return self.grid_renderer.render_to_string(layout)

    def _wrap_standalone(self, body: str) -> str:
        body_attrs = f' class="{CLASS_GLOBAL_INVISIBLE}"' if self.context.invisible else ""
        style = f"<style>\n{DEFAULT_GRID_CSS}</style>\n" if self.options.include_css else ""
        return (
            "<!DOCTYPE html>\n"
            "<html>\n"
            "<head>\n"
            '<meta charset="utf-8">\n'
            f"<title>{escape_html(self.options.title)}</title>\n"
            f"{style}"
            "</head>\n"
            f"<body{body_attrs}>\n"
            f"{body}"
            "</body>\n"
            "</html>\n"
        )
