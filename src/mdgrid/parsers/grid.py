#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdgrid/parsers/grid.py
"""Grid block parser.

This module converts the text of a grid block into a settings record and an
ordered tuple of labeled cells. The block syntax is line oriented::

    === start-grid: ID_1700000000000

    grid-settings
    columns: 2
    rows: 1
    show-borders: true

    === cell A1 ===
    Left column **markdown**

    === cell B1 ===
    Right column

    === end-grid

The parser never fails on malformed input: unknown settings keys are
ignored, unparseable numbers fall back to their defaults, and text outside
any cell is dropped.

"""

from __future__ import annotations

import logging
import re
from typing import Any

from mdgrid.ast.nodes import GridBlock, GridCell, GridSettings
from mdgrid.constants import (
    CELL_MARKER_PATTERN,
    GRID_END_MARKER,
    GRID_SETTINGS_MARKER,
    GRID_START_PREFIX,
    RECOGNIZED_SETTINGS,
    SETTING_CELL_HEIGHT,
    SETTING_COL_WIDTHS,
    SETTING_COLUMNS,
    SETTING_DYNAMIC_HEIGHT,
    SETTING_INVISIBLE_MODE,
    SETTING_ROW_HEIGHTS,
    SETTING_ROWS,
    SETTING_SHOW_BORDERS,
)
from mdgrid.options.grid import GridParserOptions
from mdgrid.parsers.base import BaseParser, ParserInput

logger = logging.getLogger(__name__)

_BOOLEAN_SETTINGS = {
    SETTING_SHOW_BORDERS: "show_borders",
    SETTING_DYNAMIC_HEIGHT: "dynamic_height",
    SETTING_INVISIBLE_MODE: "invisible_mode",
}
_STRING_SETTINGS = {
    SETTING_CELL_HEIGHT: "cell_height",
    SETTING_COL_WIDTHS: "col_widths",
    SETTING_ROW_HEIGHTS: "row_heights",
}

# ASCII decimal digits with an optional plus sign
_COUNT_PATTERN = re.compile(r"\+?[0-9]+")


class GridParser(BaseParser):
    """Parse grid block text into a :class:`~mdgrid.ast.nodes.GridBlock`.

    Parameters
    ----------
    options : GridParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> block = GridParser().parse("=== cell A1 ===\\nhello\\n=== end-grid")
        >>> block.cells[0].id, block.cells[0].row, block.cells[0].column, block.cells[0].content
        ('A1', 0, 0, 'hello')

    """

    def __init__(self, options: GridParserOptions | None = None):
        """Initialize the grid parser with options."""
        BaseParser._validate_options_type(options, GridParserOptions, "grid")
        options = options or GridParserOptions()
        super().__init__(options)
        self.options: GridParserOptions = options

    def parse(self, input_data: ParserInput) -> GridBlock:
        """Parse a grid block.

        Parameters
        ----------
        input_data : str, Path, bytes or file-like
            Block text. Strings are treated as content.

        Returns
        -------
        GridBlock
            Settings, cells in encounter order and the block id

        """
        text = self._load_text_content(input_data)
        lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")

        settings = self._default_settings()
        cells: list[GridCell] = []
        grid_id: str | None = None

        in_settings = False
        current_id: str | None = None
        buffer: list[str] = []

        for raw in lines:
            line = raw.strip()

            if line == GRID_SETTINGS_MARKER:
                in_settings = True
                continue

            if in_settings:
                if not line:
                    in_settings = False
                else:
                    self._apply_setting(settings, line)
                continue

            match = CELL_MARKER_PATTERN.match(line)
            if match:
                if current_id is not None:
                    cells.append(self._finalize_cell(current_id, buffer))
                current_id = match.group(1)
                buffer = []
                continue

            if line.startswith(GRID_START_PREFIX):
                if grid_id is None:
                    grid_id = line[len(GRID_START_PREFIX) :].strip() or None
                continue
            if line == GRID_END_MARKER:
                continue

            if current_id is not None:
                buffer.append(raw)

        if current_id is not None:
            cells.append(self._finalize_cell(current_id, buffer))

        block = GridBlock(settings=GridSettings(**settings), cells=tuple(cells), grid_id=grid_id)
        logger.debug(
            "Parsed grid block %s: %d columns x %d rows, %d cells",
            grid_id or "<anonymous>",
            block.settings.columns,
            block.settings.rows,
            len(block.cells),
        )
        return block

    def _default_settings(self) -> dict[str, Any]:
        return {
            "columns": self.options.default_columns,
            "rows": self.options.default_rows,
            "show_borders": self.options.default_show_borders,
            "dynamic_height": self.options.default_dynamic_height,
        }

    def _apply_setting(self, settings: dict[str, Any], line: str) -> None:
        key, _, value = line.partition(":")
        key = key.strip()
        value = value.strip()

        if key not in RECOGNIZED_SETTINGS:
            logger.debug("Ignoring unknown grid setting: %s", key)
            return

        if key == SETTING_COLUMNS:
            columns = self._coerce_count(key, value, self.options.default_columns)
            if columns > self.options.max_columns:
                logger.warning("Grid has %d columns; only %d are addressable", columns, self.options.max_columns)
                columns = self.options.max_columns
            settings["columns"] = columns
        elif key == SETTING_ROWS:
            settings["rows"] = self._coerce_count(key, value, self.options.default_rows)
        elif key in _BOOLEAN_SETTINGS:
            settings[_BOOLEAN_SETTINGS[key]] = value == "true"
        else:
            settings[_STRING_SETTINGS[key]] = value

    @staticmethod
    def _coerce_count(key: str, value: str, default: int) -> int:
        if not _COUNT_PATTERN.fullmatch(value):
            logger.debug("Invalid %s value %r, using default %d", key, value, default)
            return default
        count = int(value)
        if count <= 0:
            logger.debug("Non-positive %s value %r, using default %d", key, value, default)
            return default
        return count

    @staticmethod
    def _finalize_cell(cell_id: str, buffer: list[str]) -> GridCell:
        return GridCell.from_id(cell_id, "\n".join(buffer).strip())
