#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for document rendering and grid expansion."""

import io
import logging

import pytest
from bs4 import BeautifulSoup
from utils import TWO_BY_ONE_BLOCK, FakeMarkdownRenderer, fenced

from mdgrid.context import RenderContext
from mdgrid.exceptions import DependencyError, RenderingError
from mdgrid.options.grid import GridParserOptions, GridRendererOptions
from mdgrid.renderers.document import DocumentRenderer


class _MissingDependencyRenderer:
    def render(self, text, source_path=None):
        raise DependencyError("markdown", [("mistune", ">=3.0.0")])


@pytest.mark.unit
class TestRenderGrid:
    """Tests for rendering a single grid block."""

    def test_render_grid_with_fake_renderer(self):
        """Test that every cell is injected into the grid HTML."""
        renderer = DocumentRenderer(markdown_renderer=FakeMarkdownRenderer())
        soup = BeautifulSoup(renderer.render_grid(TWO_BY_ONE_BLOCK), "html.parser")

        container = soup.find("div", class_="grid-container")
        assert container["data-grid-id"] == "ID_1700000000000"
        cells = {div["data-cell"]: div for div in soup.select("div.grid-cell")}
        assert set(cells) == {"A1", "B1"}
        assert cells["A1"].p.get_text() == "Left **bold**"
        assert cells["B1"].p.get_text() == "Right"

    def test_source_path_reaches_cells(self):
        """Test that the document path is passed to the cell renderer."""
        fake = FakeMarkdownRenderer()
        DocumentRenderer(markdown_renderer=fake).render_grid(TWO_BY_ONE_BLOCK, "notes/today.md")

        assert {call[1] for call in fake.calls} == {"notes/today.md"}

    def test_failing_cell_keeps_partial_grid(self, caplog):
        """Test that a failure is logged and earlier cells are kept."""
        renderer = DocumentRenderer(markdown_renderer=FakeMarkdownRenderer(fail_on="boom"))
        block = "=== start-grid: g1\n=== cell A1 ===\nok\n=== cell B1 ===\nboom\n=== end-grid"

        with caplog.at_level(logging.ERROR, logger="mdgrid.renderers.document"):
            html = renderer.render_grid(block)

        soup = BeautifulSoup(html, "html.parser")
        cells = {div["data-cell"]: div for div in soup.select("div.grid-cell")}
        assert cells["A1"].get_text() == "ok"
        assert cells["B1"].get_text() == ""
        assert "Failed to render grid g1" in caplog.text

    def test_failing_cell_raises_when_configured(self):
        """Test fail_on_resource_errors."""
        renderer = DocumentRenderer(
            GridRendererOptions(fail_on_resource_errors=True),
            markdown_renderer=FakeMarkdownRenderer(fail_on="boom"),
        )

        with pytest.raises(RenderingError) as exc_info:
            renderer.render_grid("=== cell A1 ===\nboom")

        assert exc_info.value.rendering_stage == "content_injection"
        assert isinstance(exc_info.value.original_error, RuntimeError)

    def test_dependency_errors_propagate(self):
        """Test that missing packages are never swallowed."""
        renderer = DocumentRenderer(markdown_renderer=_MissingDependencyRenderer())

        with pytest.raises(DependencyError):
            renderer.render_grid("=== cell A1 ===\nx")

    def test_parser_options_apply(self):
        """Test that parser defaults are used for blocks without settings."""
        renderer = DocumentRenderer(
            markdown_renderer=FakeMarkdownRenderer(), parser_options=GridParserOptions(default_columns=3)
        )
        soup = BeautifulSoup(renderer.render_grid("=== cell A1 ===\nx"), "html.parser")

        assert len(soup.select("div.grid-cell")) == 3 * 2

    def test_global_invisible_context(self):
        """Test that the context marks every container."""
        renderer = DocumentRenderer(context=RenderContext(invisible=True), markdown_renderer=FakeMarkdownRenderer())

        assert "grid-global-invisible" in renderer.render_grid("=== cell A1 ===\nx")


@pytest.mark.unit
class TestRenderDocument:
    """Tests for whole-document rendering with mistune."""

    def test_grid_block_is_expanded(self):
        """Test that the fenced grid block becomes a grid container."""
        text = "# Title\n\n" + fenced(TWO_BY_ONE_BLOCK) + "\nAfter the grid.\n"
        soup = BeautifulSoup(DocumentRenderer().render_to_string(text), "html.parser")

        assert soup.h1.get_text() == "Title"
        assert soup.find("pre") is None
        container = soup.find("div", class_="grid-container")
        assert container is not None
        a1 = container.find("div", attrs={"data-cell": "A1"})
        assert a1.strong.get_text() == "bold"
        assert "After the grid." in soup.get_text()

    def test_other_code_blocks_are_left_alone(self):
        """Test that ordinary code blocks are not touched."""
        html = DocumentRenderer().render_to_string("```python\nprint('hi')\n```\n")

        assert "<pre>" in html
        assert "grid-container" not in html

    def test_multiple_grid_blocks(self):
        """Test that every grid block is expanded."""
        second = TWO_BY_ONE_BLOCK.replace("ID_1700000000000", "ID_2")
        text = fenced(TWO_BY_ONE_BLOCK) + "\ntext\n\n" + fenced(second)
        soup = BeautifulSoup(DocumentRenderer().render_to_string(text), "html.parser")

        ids = [div["data-grid-id"] for div in soup.select("div.grid-container")]
        assert ids == ["ID_1700000000000", "ID_2"]

    def test_images_inside_cells_are_post_processed(self):
        """Test embedded images in a 2-column grid."""
        block = (
            "=== start-grid: g\n\ngrid-settings\ncolumns: 2\nrows: 1\n\n"
            "=== cell A1 ===\n![[pic.png|left]]\n=== end-grid"
        )
        soup = BeautifulSoup(
            DocumentRenderer().render_to_string(fenced(block), source_path="notes/today.md"), "html.parser"
        )
        img = soup.find("img")

        assert img["src"] == "notes/pic.png"
        assert img["class"] == ["image-left", "grid-cell-image", "grid-img-2col"]
        assert "onerror" in img.attrs

    def test_fragment_by_default(self):
        """Test that documents render as fragments unless standalone is set."""
        html = DocumentRenderer().render_to_string("text")

        assert "<html>" not in html

    def test_standalone_page(self):
        """Test the standalone wrapper with title and stylesheet."""
        renderer = DocumentRenderer(GridRendererOptions(standalone=True, title="My <Notes>"))
        html = renderer.render_to_string("text")

        assert html.startswith("<!DOCTYPE html>")
        assert "<title>My &lt;Notes&gt;</title>" in html
        assert ".grid-container" in html
        assert "<body>" in html

    def test_standalone_without_css(self):
        """Test include_css=False."""
        html = DocumentRenderer(GridRendererOptions(standalone=True, include_css=False)).render_to_string("text")

        assert "<style>" not in html

    def test_standalone_invisible_body(self):
        """Test that invisible mode marks the page body."""
        renderer = DocumentRenderer(GridRendererOptions(standalone=True), RenderContext(invisible=True))

        assert '<body class="grid-global-invisible">' in renderer.render_to_string("text")

    def test_render_to_stream(self):
        """Test writing a document to a binary stream."""
        buffer = io.BytesIO()
        DocumentRenderer().render("**x**", buffer)

        assert buffer.getvalue() == b"<p><strong>x</strong></p>\n"
