#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the grid block parser."""

import io
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mdgrid.ast.nodes import GridSettings
from mdgrid.exceptions import FileNotFoundError, InvalidOptionsError, ParsingError
from mdgrid.options.grid import GridParserOptions, GridRendererOptions
from mdgrid.parsers.grid import GridParser

_SETTING_VALUES = st.one_of(
    st.sampled_from(["true", "false", "True", "0", "3", "+4", "27", "-1", ""]),
    st.text(alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters="\r\n"), max_size=10),
)


def _block(settings: str = "", cells: str = "") -> str:
    parts = ["=== start-grid: ID_1"]
    if settings:
        parts.append("")
        parts.append("grid-settings")
        parts.append(settings)
    parts.append("")
    if cells:
        parts.append(cells)
    parts.append("=== end-grid")
    return "\n".join(parts)


@pytest.mark.unit
class TestGridParserBasics:
    """Tests for settings, cells and the block id."""

    def test_parse_two_by_one_block(self, two_by_one_block):
        """Test parsing a complete 2x1 block."""
        block = GridParser().parse(two_by_one_block)

        assert block.grid_id == "ID_1700000000000"
        assert block.settings.columns == 2
        assert block.settings.rows == 1
        assert block.settings.show_borders is True
        assert [(c.id, c.row, c.column, c.content) for c in block.cells] == [
            ("A1", 0, 0, "Left **bold**"),
            ("B1", 0, 1, "Right"),
        ]

    def test_defaults_without_settings_section(self):
        """Test that a block without settings uses the defaults."""
        block = GridParser().parse("=== cell A1 ===\nhello")

        assert block.settings.columns == 2
        assert block.settings.rows == 2
        assert block.settings.show_borders is True
        assert block.settings.dynamic_height is True
        assert block.settings.cell_height is None
        assert block.grid_id is None

    @pytest.mark.parametrize("text", ["", "=== start-grid: ID_1\n=== end-grid", "\n\n"])
    def test_empty_block(self, text):
        """Test that a block without cells yields default settings and no cells."""
        block = GridParser().parse(text)

        assert block.settings == GridSettings()
        assert block.cells == ()

    def test_custom_defaults_from_options(self):
        """Test that parser options change the defaults."""
        options = GridParserOptions(default_columns=3, default_rows=4, default_dynamic_height=False)
        block = GridParser(options).parse("=== cell A1 ===\nx")

        assert block.settings.columns == 3
        assert block.settings.rows == 4
        assert block.settings.dynamic_height is False

    def test_string_settings_are_stored_raw(self):
        """Test cell-height, col-widths and row-heights."""
        block = GridParser().parse(
            _block("cell-height: 200px\ncol-widths: 1fr 2fr\nrow-heights: auto 100px")
        )

        assert block.settings.cell_height == "200px"
        assert block.settings.col_widths == "1fr 2fr"
        assert block.settings.row_heights == "auto 100px"

    def test_boolean_settings(self):
        """Test that only the literal 'true' enables a flag."""
        block = GridParser().parse(
            _block("show-borders: false\ndynamic-height: TRUE\ninvisible-mode: true")
        )

        assert block.settings.show_borders is False
        assert block.settings.dynamic_height is False
        assert block.settings.invisible_mode is True

    def test_setting_value_split_on_first_colon(self):
        """Test that values may contain colons."""
        block = GridParser().parse(_block("cell-height: calc(100px: 2)"))

        assert block.settings.cell_height == "calc(100px: 2)"

    def test_first_start_sentinel_wins(self):
        """Test that only the first sentinel sets the block id."""
        block = GridParser().parse("=== start-grid: first\n=== start-grid: second\n=== cell A1 ===\nx")

        assert block.grid_id == "first"


@pytest.mark.unit
class TestGridParserSettingsRecovery:
    """Tests for malformed settings."""

    @pytest.mark.parametrize("value", ["abc", "0", "-3", "", "2.5"])
    def test_invalid_column_count_falls_back_to_default(self, value):
        """Test that unusable counts fall back to the default."""
        block = GridParser().parse(_block(f"columns: {value}"))

        assert block.settings.columns == 2

    def test_invalid_row_count_falls_back_to_default(self):
        """Test that a non-numeric row count falls back to the default."""
        block = GridParser().parse(_block("rows: many"))

        assert block.settings.rows == 2

    def test_columns_clamped_to_alphabet(self):
        """Test that column counts beyond Z are clamped."""
        block = GridParser().parse(_block("columns: 40"))

        assert block.settings.columns == 26

    def test_columns_clamped_to_configured_maximum(self):
        """Test a lower configured maximum."""
        block = GridParser(GridParserOptions(max_columns=4)).parse(_block("columns: 6"))

        assert block.settings.columns == 4

    def test_unknown_setting_is_ignored(self):
        """Test that unknown keys do not affect the result."""
        block = GridParser().parse(_block("columns: 3\ncolour: red\nrows: 1"))

        assert block.settings.columns == 3
        assert block.settings.rows == 1

    def test_blank_line_ends_settings_section(self):
        """Test that settings after a blank line are not applied."""
        text = "grid-settings\ncolumns: 3\n\nrows: 5\n=== cell A1 ===\nx"
        block = GridParser().parse(text)

        assert block.settings.columns == 3
        assert block.settings.rows == 2
        assert block.cells[0].content == "x"

    @pytest.mark.parametrize("value", ["1_0", "٣", "３", "1e1", "0x3"])
    def test_count_requires_ascii_digits(self, value):
        """Test that Python-only integer spellings fall back to the default."""
        block = GridParser().parse(_block(f"columns: {value}\nrows: {value}"))

        assert (block.settings.columns, block.settings.rows) == (2, 2)

    def test_count_with_plus_sign(self):
        """Test that an explicit plus sign is accepted."""
        assert GridParser().parse(_block("columns: +3")).settings.columns == 3

    @given(
        st.fixed_dictionaries(
            {
                "columns": _SETTING_VALUES,
                "rows": _SETTING_VALUES,
                "show-borders": _SETTING_VALUES,
                "dynamic-height": _SETTING_VALUES,
                "invisible-mode": _SETTING_VALUES,
            }
        )
    )
    def test_coerced_settings_are_stable(self, values):
        """Test that writing parsed settings back out and parsing again changes nothing."""
        parser = GridParser()
        first = parser.parse(_block("\n".join(f"{key}: {value}" for key, value in values.items()))).settings

        rewritten = "\n".join(
            [
                f"columns: {first.columns}",
                f"rows: {first.rows}",
                f"show-borders: {str(first.show_borders).lower()}",
                f"dynamic-height: {str(first.dynamic_height).lower()}",
                f"invisible-mode: {str(first.invisible_mode).lower()}",
            ]
        )
        second = parser.parse(_block(rewritten)).settings

        assert second == first


    @given(st.text(alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters="\r\n"), max_size=20))
    def test_arbitrary_column_value_never_fails(self, value):
        """Test that any column value yields a usable column count."""
        block = GridParser().parse(_block(f"columns: {value}"))

        assert 1 <= block.settings.columns <= 26


@pytest.mark.unit
class TestGridParserCells:
    """Tests for cell boundaries and content."""

    def test_text_outside_cells_is_dropped(self):
        """Test that lines before the first cell are discarded."""
        block = GridParser().parse("stray text\n=== cell A1 ===\nkept")

        assert len(block.cells) == 1
        assert block.cells[0].content == "kept"

    def test_multiline_content_keeps_inner_indentation(self):
        """Test that content lines are kept raw apart from outer trimming."""
        text = "=== cell A1 ===\n\n- item\n    - nested\n\n=== cell B1 ===\nb"
        block = GridParser().parse(text)

        assert block.cells[0].content == "- item\n    - nested"

    def test_marker_with_surrounding_whitespace(self):
        """Test that markers are matched after stripping."""
        block = GridParser().parse("   === cell C2 ===   \nbody")

        assert block.cells[0].id == "C2"
        assert (block.cells[0].row, block.cells[0].column) == (1, 2)

    def test_lowercase_marker_is_content(self):
        """Test that only uppercase column letters form markers."""
        block = GridParser().parse("=== cell A1 ===\n=== cell b1 ===")

        assert len(block.cells) == 1
        assert block.cells[0].content == "=== cell b1 ==="

    def test_end_marker_is_not_content(self):
        """Test that the end marker never lands in a cell."""
        block = GridParser().parse("=== cell A1 ===\nx\n=== end-grid\n")

        assert block.cells[0].content == "x"

    def test_empty_cell(self):
        """Test a marker immediately followed by another marker."""
        block = GridParser().parse("=== cell A1 ===\n=== cell B1 ===\nb")

        assert block.cells[0].content == ""
        assert block.cells[1].content == "b"

    def test_duplicate_cells_are_kept_in_order(self):
        """Test that duplicate addresses are both parsed and the last one is looked up."""
        block = GridParser().parse("=== cell A1 ===\nfirst\n=== cell A1 ===\nsecond")

        assert [c.content for c in block.cells] == ["first", "second"]
        assert block.cell("A1").content == "second"

    def test_cells_outside_grid_are_parsed(self):
        """Test that out-of-range cells stay in the cell list."""
        block = GridParser().parse(_block("columns: 3\nrows: 1", "=== cell A1 ===\na\n=== cell D1 ===\nd"))

        assert [c.id for c in block.cells] == ["A1", "D1"]
        assert [c.id for c in block.placed_cells] == ["A1"]

    def test_crlf_line_endings(self):
        """Test that Windows line endings are normalized."""
        block = GridParser().parse("grid-settings\r\ncolumns: 3\r\n\r\n=== cell A1 ===\r\nx\r\n")

        assert block.settings.columns == 3
        assert block.cells[0].content == "x"


@pytest.mark.unit
class TestGridParserInput:
    """Tests for input types and options validation."""

    def test_parse_bytes(self, two_by_one_block):
        """Test parsing UTF-8 bytes."""
        block = GridParser().parse(two_by_one_block.encode("utf-8"))

        assert len(block.cells) == 2

    def test_parse_path(self, temp_dir, two_by_one_block):
        """Test parsing a file given as a Path."""
        path = temp_dir / "block.txt"
        path.write_text(two_by_one_block, encoding="utf-8")

        block = GridParser().parse(path)

        assert block.grid_id == "ID_1700000000000"

    def test_parse_stream(self, two_by_one_block):
        """Test parsing a binary stream."""
        block = GridParser().parse(io.BytesIO(two_by_one_block.encode("utf-8")))

        assert block.cells[1].content == "Right"

    def test_missing_path_raises(self, temp_dir):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            GridParser().parse(Path(temp_dir) / "missing.txt")

    def test_string_is_never_a_path(self, temp_dir):
        """Test that strings are parsed as content even when they name a file."""
        path = temp_dir / "block.txt"
        path.write_text("=== cell A1 ===\nfrom file", encoding="utf-8")

        block = GridParser().parse(str(path))

        assert block.cells == ()

    def test_wrong_options_type(self):
        """Test that renderer options are rejected."""
        with pytest.raises(InvalidOptionsError):
            GridParser(GridRendererOptions())  # type: ignore[arg-type]

    def test_unreadable_input_raises(self):
        """Test that objects without read() are rejected."""
        with pytest.raises(ParsingError) as exc_info:
            GridParser().parse(42)  # type: ignore[arg-type]

        assert exc_info.value.parsing_stage == "input_loading"

    def test_stream_returning_other_types_raises(self):
        """Test that a stream must yield str or bytes."""

        class ListStream:
            """Stream yielding a list."""

            def read(self):
                """Return the wrong type."""
                return ["=== cell A1 ==="]

        with pytest.raises(ParsingError) as exc_info:
            GridParser().parse(ListStream())  # type: ignore[arg-type]

        assert isinstance(exc_info.value.original_error, TypeError)
