#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdgrid/renderers/html.py
"""HTML rendering of grid layouts.

This module provides two pieces:

- :class:`ContentInjector` renders each parsed cell's Markdown into its slot
  and post-processes the images it contains.
- :class:`GridHtmlRenderer` serializes a :class:`~mdgrid.ast.nodes.GridLayout`
  to an HTML fragment.

Layouts are immutable, so injection returns a new layout for every cell.
Cells are processed sequentially in parse order, which keeps the output
deterministic and lets a caller keep the partially filled layout when a
later cell fails.

"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional

from mdgrid.ast.nodes import GridCell, GridLayout, GridSlot
from mdgrid.constants import (
    CLASS_CELL_IMAGE,
    CLASS_CELL_PLACEHOLDER,
    CLASS_GRID_CELL,
    CLASS_IMAGE_ERROR,
    COLUMN_IMAGE_CLASSES,
    DEPS_HTML,
)
from mdgrid.options.grid import GridRendererOptions
from mdgrid.renderers.base import BaseRenderer
from mdgrid.renderers.markdown import MarkdownRenderer, MistuneMarkdownRenderer
from mdgrid.utils.decorators import requires_dependencies
from mdgrid.utils.html_utils import escape_html, format_class_list, format_style

logger = logging.getLogger(__name__)


def image_error_handler(marker_text: str) -> str:
    """Build the ``onerror`` script that hides a broken image and shows a marker.

    The handler detaches itself first so a failing marker cannot loop.
    """
    return (
        "this.onerror=null;this.style.display='none';"
        "var m=document.createElement('div');"
        f"m.className='{CLASS_IMAGE_ERROR}';"
        f"m.textContent={json.dumps(marker_text)};"
        "if(this.parentElement){this.parentElement.appendChild(m);}"
    )


class ContentInjector:
    """Render cell Markdown into layout slots.

    Parameters
    ----------
    markdown_renderer : MarkdownRenderer or None, default None
        Markdown capability; defaults to :class:`MistuneMarkdownRenderer`
    options : GridRendererOptions or None, default None
        Controls the image load-failure handler

    """

    def __init__(
        self,
        markdown_renderer: Optional[MarkdownRenderer] = None,
        options: Optional[GridRendererOptions] = None,
    ):
        """Initialize the injector."""
        self.options = options or GridRendererOptions()
        self.markdown_renderer: MarkdownRenderer = markdown_renderer or MistuneMarkdownRenderer(self.options)

    def inject(self, layout: GridLayout, cells: Iterable[GridCell], source_path: Optional[str] = None) -> GridLayout:
        """Render every cell into its slot, in order.

        Cells without a slot (outside the grid rectangle) are skipped.
        When two cells share an address the later one wins.

        Parameters
        ----------
        layout : GridLayout
            Layout produced by the builder
        cells : iterable of GridCell
            Parsed cells
        source_path : str or None
            Path of the originating document, for link resolution

        Returns
        -------
        GridLayout
            Layout with rendered HTML in every matched slot

        """
        for cell in cells:
            layout = self.inject_cell(layout, cell, source_path)
        return layout

    def inject_cell(self, layout: GridLayout, cell: GridCell, source_path: Optional[str] = None) -> GridLayout:
        """Render one cell into its slot and return the updated layout."""
        if layout.slot(cell.id) is None:
            logger.debug("No slot for cell %s in %dx%d grid, skipping", cell.id, layout.rows, layout.columns)
            return layout

        html = self.markdown_renderer.render(cell.content, source_path)
        html = self.post_process_images(html, layout.columns)
        return layout.with_slot_content(cell.id, html)

    @requires_dependencies("html", DEPS_HTML)
    def post_process_images(self, html: str, columns: int) -> str:
        """Tag images with sizing classes and attach the load-failure handler.

        Parameters
        ----------
        html : str
            Rendered cell HTML
        columns : int
            Column count of the grid; 2 and 3 columns get dedicated classes

        Returns
        -------
        str
            HTML with every ``<img>`` post-processed

        """
        from bs4 import BeautifulSoup

        soup = BeautifulSoup(html, "html.parser")
        images = soup.find_all("img")
        if not images:
            return html

        column_class = COLUMN_IMAGE_CLASSES.get(columns)
        for img in images:
            classes = list(img.get("class") or [])
            for name in (CLASS_CELL_IMAGE, column_class):
                if name and name not in classes:
                    classes.append(name)
            img["class"] = classes
            if self.options.image_error_handler:
                img["onerror"] = image_error_handler(self.options.image_error_text)

        logger.debug("Post-processed %d image(s) for a %d-column grid", len(images), columns)
        return str(soup)


class GridHtmlRenderer(BaseRenderer):
    """Serialize grid layouts to HTML fragments.

    Parameters
    ----------
    options : GridRendererOptions or None, default = None
        HTML rendering options

    Examples
    --------
        >>> from mdgrid.ast import GridSettings, LayoutBuilder
        >>> layout = LayoutBuilder().build(GridSettings(columns=1, rows=1), [])
        >>> print(GridHtmlRenderer().render_to_string(layout))  # doctest: +ELLIPSIS
        <div class="grid-container dynamic-height grid-cols-1" style="...">
        <div class="grid-cell" data-cell="A1" ...><div class="grid-cell-placeholder"></div></div>
        </div>
        <BLANKLINE>

    """

    def __init__(self, options: GridRendererOptions | None = None):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, GridRendererOptions, "grid-html")
        options = options or GridRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: GridRendererOptions = options

    def render_to_string(self, source: GridLayout, **kwargs: Any) -> str:
        """Render a layout to an HTML fragment."""
        return source.accept(self)

    def visit_grid_layout(self, layout: GridLayout) -> str:
        """Render the container and all of its slots."""
        attrs = [f'class="{format_class_list(layout.classes)}"']
        if layout.grid_id:
            attrs.append(f'data-grid-id="{escape_html(layout.grid_id)}"')
        attrs.append(f'style="{escape_html(format_style(layout.style))}"')

        parts = [f"<div {' '.join(attrs)}>\n"]
        parts.extend(slot.accept(self) for slot in layout.slots)
        parts.append("</div>\n")
        return "".join(parts)

    def visit_grid_slot(self, slot: GridSlot) -> str:
        """Render one slot with its content or placeholder."""
        if slot.content is not None:
            body = slot.content
        elif slot.placeholder:
            body = f'<div class="{CLASS_CELL_PLACEHOLDER}"></div>'
        else:
            body = ""

        style = format_style((("grid-row", str(slot.grid_row)), ("grid-column", str(slot.grid_column))))
        return f'<div class="{CLASS_GRID_CELL}" data-cell="{slot.id}" style="{style}">{body}</div>\n'
