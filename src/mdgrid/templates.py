#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Generate ready-to-edit grid blocks.

Templates are fenced code blocks containing a start sentinel with a
time-based id, a settings section and one marker per cell, row by row.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from mdgrid.ast.nodes import cell_address
from mdgrid.constants import (
    DEFAULT_TEMPLATE_CELL_HEIGHT,
    DEFAULT_TEMPLATE_ROWS,
    GRID_END_MARKER,
    GRID_SETTINGS_MARKER,
    GRID_START_PREFIX,
    MAX_GRID_COLUMNS,
)
from mdgrid.exceptions import ValidationError


@dataclass(frozen=True)
class TemplatePreset:
    """A named template configuration."""

    name: str
    title: str
    columns: int
    rows: int
    dynamic: bool


TEMPLATE_PRESETS: dict[str, TemplatePreset] = {
    preset.name: preset
    for preset in (
        TemplatePreset("dynamic-2col", "Insert Dynamic 2-Column Grid", 2, DEFAULT_TEMPLATE_ROWS, True),
        TemplatePreset("dynamic-3col", "Insert Dynamic 3-Column Grid", 3, DEFAULT_TEMPLATE_ROWS, True),
    )
}


def generate_grid_id() -> str:
    """Return an opaque block id based on the current time in milliseconds."""
    return f"ID_{time.time_ns() // 1_000_000}"


def make_template(columns: int, rows: int, dynamic: bool = False, grid_id: Optional[str] = None) -> str:
    """Build a fenced grid block with placeholder content in every cell.

    Parameters
    ----------
    columns : int
        Number of columns (1-26)
    rows : int
        Number of rows
    dynamic : bool, default False
        Emit ``dynamic-height: true`` instead of a fixed ``cell-height``
    grid_id : str or None
        Block id; generated from the clock when omitted

    Returns
    -------
    str
        The template, starting and ending with a code fence

    Raises
    ------
    ValidationError
        If the counts are out of range

    Examples
    --------
        >>> print(make_template(1, 1, grid_id="ID_1"))
        ```
        === start-grid: ID_1
        <BLANKLINE>
        grid-settings
        columns: 1
        rows: 1
        show-borders: true
        cell-height: 120px
        <BLANKLINE>
        === cell A1 ===
        <!-- start of A1 -->
        Content for A1
        <!-- end of A1 -->
        <BLANKLINE>
        === end-grid
        ```

    """
    if not 0 < columns <= MAX_GRID_COLUMNS:
        raise ValidationError(
            f"columns must be between 1 and {MAX_GRID_COLUMNS}, got {columns}",
            parameter_name="columns",
            parameter_value=columns,
        )
    if rows <= 0:
        raise ValidationError(f"rows must be positive, got {rows}", parameter_name="rows", parameter_value=rows)

    height_setting = "dynamic-height: true" if dynamic else f"cell-height: {DEFAULT_TEMPLATE_CELL_HEIGHT}"
    parts = [
        "```\n",
        f"{GRID_START_PREFIX} {grid_id or generate_grid_id()}\n\n",
        f"{GRID_SETTINGS_MARKER}\n",
        f"columns: {columns}\nrows: {rows}\nshow-borders: true\n{height_setting}\n\n",
    ]
    for row in range(rows):
        for column in range(columns):
            cell_id = cell_address(row, column)
            parts.append(
                f"=== cell {cell_id} ===\n"
                f"<!-- start of {cell_id} -->\n"
                f"Content for {cell_id}\n"
                f"<!-- end of {cell_id} -->\n\n"
            )
    parts.append(f"{GRID_END_MARKER}\n```")
    return "".join(parts)


def make_preset_template(name: str, grid_id: Optional[str] = None) -> str:
    """Build the template of a named preset.

    Raises
    ------
    ValidationError
        If the preset does not exist

    """
    preset = TEMPLATE_PRESETS.get(name)
    if preset is None:
        raise ValidationError(
            f"Unknown template preset '{name}'. Choose from: {', '.join(TEMPLATE_PRESETS)}",
            parameter_name="preset",
            parameter_value=name,
        )
    return make_template(preset.columns, preset.rows, preset.dynamic, grid_id)
