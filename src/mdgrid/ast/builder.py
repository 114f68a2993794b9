#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdgrid/ast/builder.py
"""Layout builder mapping parsed grid cells onto addressable slots.

The builder produces an immutable :class:`~mdgrid.ast.nodes.GridLayout`;
content injection and HTML serialization happen later, in the renderers.

"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from mdgrid.ast.nodes import GridCell, GridLayout, GridSettings, GridSlot, cell_address
from mdgrid.constants import (
    CLASS_DYNAMIC_HEIGHT,
    CLASS_GLOBAL_INVISIBLE,
    CLASS_GRID_CONTAINER,
    CLASS_INVISIBLE_MODE,
    CLASS_NO_BORDERS,
    CSS_VAR_CELL_HEIGHT,
    CSS_VAR_COLUMNS,
    CSS_VAR_ROWS,
)
from mdgrid.context import RenderContext

logger = logging.getLogger(__name__)


class LayoutBuilder:
    """Build a grid layout from settings and parsed cells.

    One slot is created for every address in ``[0, rows) x [0, columns)``,
    row-major. Slots with no matching cell are flagged as placeholders.
    Cells addressed outside that rectangle are ignored here; they remain in
    the parsed cell list but never get a slot.

    Parameters
    ----------
    context : RenderContext or None, default None
        Application context; its invisible flag adds the
        ``grid-global-invisible`` class to every container.

    Examples
    --------
        >>> from mdgrid.ast import GridCell, GridSettings
        >>> layout = LayoutBuilder().build(GridSettings(columns=2, rows=1), [GridCell.from_id("A1", "x")])
        >>> [(s.id, s.placeholder) for s in layout.slots]
        [('A1', False), ('B1', True)]

    """

    def __init__(self, context: Optional[RenderContext] = None):
        """Initialize the builder with an optional render context."""
        self.context = context or RenderContext()

    def build(
        self, settings: GridSettings, cells: Iterable[GridCell], grid_id: Optional[str] = None
    ) -> GridLayout:
        """Build the layout for one grid block.

        Parameters
        ----------
        settings : GridSettings
            Parsed block settings
        cells : iterable of GridCell
            Parsed cells, in encounter order
        grid_id : str or None
            Opaque block identifier carried onto the layout

        Returns
        -------
        GridLayout
            Container description with ``rows * columns`` slots

        """
        cell_ids = {cell.id for cell in cells}

        slots = []
        for row in range(settings.rows):
            for column in range(settings.columns):
                slot_id = cell_address(row, column)
                slots.append(GridSlot(id=slot_id, row=row, column=column, placeholder=slot_id not in cell_ids))

        slot_ids = {slot.id for slot in slots}
        outside = sorted(cell_ids - slot_ids)
        if outside:
            logger.debug(
                "Cells outside the %dx%d grid are not placed: %s", settings.rows, settings.columns, ", ".join(outside)
            )

        return GridLayout(
            columns=settings.columns,
            rows=settings.rows,
            classes=self._container_classes(settings),
            style=self._container_style(settings),
            slots=tuple(slots),
            grid_id=grid_id,
        )

    def _container_classes(self, settings: GridSettings) -> tuple[str, ...]:
        classes = [CLASS_GRID_CONTAINER]
        if not settings.show_borders:
            classes.append(CLASS_NO_BORDERS)
        if settings.dynamic_height:
            classes.append(CLASS_DYNAMIC_HEIGHT)
        if settings.invisible_mode:
            classes.append(CLASS_INVISIBLE_MODE)
        classes.append(f"grid-cols-{settings.columns}")
        if self.context.invisible:
            classes.append(CLASS_GLOBAL_INVISIBLE)
        return tuple(classes)

    @staticmethod
    def _container_style(settings: GridSettings) -> tuple[tuple[str, str], ...]:
        style: list[tuple[str, str]] = [
            (CSS_VAR_COLUMNS, str(settings.columns)),
            (CSS_VAR_ROWS, str(settings.rows)),
        ]

        # Equal fair-share columns that never overflow the container
        if settings.col_widths:
            style.append(("grid-template-columns", settings.col_widths))
        else:
            style.append(("grid-template-columns", f"repeat({settings.columns}, minmax(0, 1fr))"))

        if settings.row_heights:
            style.append(("grid-template-rows", settings.row_heights))
        elif settings.dynamic_height:
            style.append(("grid-template-rows", f"repeat({settings.rows}, minmax(min-content, max-content))"))
        elif settings.cell_height:
            style.append((CSS_VAR_CELL_HEIGHT, settings.cell_height))

        return tuple(style)
