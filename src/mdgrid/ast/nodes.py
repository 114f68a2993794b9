#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdgrid/ast/nodes.py
"""Node classes describing parsed grid blocks and their layouts.

Parsing a grid block yields a :class:`GridBlock` (a :class:`GridSettings`
record plus an ordered tuple of :class:`GridCell`). The layout builder turns
that into a :class:`GridLayout`, an immutable description of the container
and one :class:`GridSlot` per (row, column) address. Renderers consume the
layout; nothing here touches HTML.

Addressing
----------
Cells are addressed as ``<ColumnLetter><RowNumber>``: ``A1`` is the top-left
cell, ``B1`` the one to its right, ``A2`` the one below it. Letters map to
zero-based columns (``A`` -> 0) and numbers to zero-based rows (``1`` -> 0).

"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from mdgrid.constants import (
    DEFAULT_DYNAMIC_HEIGHT,
    DEFAULT_GRID_COLUMNS,
    DEFAULT_GRID_ROWS,
    DEFAULT_SHOW_BORDERS,
    MODIFIER_SEPARATOR,
)


def cell_address(row: int, column: int) -> str:
    """Return the address string for a zero-based (row, column) pair.

    >>> cell_address(0, 0)
    'A1'
    >>> cell_address(2, 1)
    'B3'

    """
    return f"{chr(ord('A') + column)}{row + 1}"


def parse_cell_address(cell_id: str) -> tuple[int, int]:
    """Split an address such as ``"C12"`` into zero-based ``(row, column)``.

    Raises
    ------
    ValueError
        If the address is not a single uppercase letter followed by digits.

    """
    if len(cell_id) < 2 or not ("A" <= cell_id[0] <= "Z") or not cell_id[1:].isdigit():
        raise ValueError(f"Invalid cell address: {cell_id!r}")
    return int(cell_id[1:]) - 1, ord(cell_id[0]) - ord("A")


@dataclass(frozen=True)
class GridSettings:
    """Settings of a single grid block.

    Parameters
    ----------
    columns : int, default 2
        Number of columns
    rows : int, default 2
        Number of rows
    show_borders : bool, default True
        Whether cell borders are drawn
    cell_height : str or None
        Fixed CSS height applied to cells when rows are not dynamic
    dynamic_height : bool or None, default True
        Size rows to their content
    invisible_mode : bool or None
        Suppress borders and backgrounds for this block
    col_widths : str or None
        Explicit ``grid-template-columns`` track list
    row_heights : str or None
        Explicit ``grid-template-rows`` track list

    """

    columns: int = DEFAULT_GRID_COLUMNS
    rows: int = DEFAULT_GRID_ROWS
    show_borders: bool = DEFAULT_SHOW_BORDERS
    cell_height: Optional[str] = None
    dynamic_height: Optional[bool] = DEFAULT_DYNAMIC_HEIGHT
    invisible_mode: Optional[bool] = None
    col_widths: Optional[str] = None
    row_heights: Optional[str] = None

    @property
    def slot_count(self) -> int:
        """Number of addressable slots, ``rows * columns``."""
        return self.rows * self.columns

    def contains(self, row: int, column: int) -> bool:
        """Whether a zero-based address lies inside ``[0, rows) x [0, columns)``."""
        return 0 <= row < self.rows and 0 <= column < self.columns


@dataclass(frozen=True)
class GridCell:
    """A labeled content unit of a grid block.

    Parameters
    ----------
    id : str
        Address such as ``"A1"``
    row : int
        Zero-based row derived from the address
    column : int
        Zero-based column derived from the address
    content : str, default ""
        Raw Markdown body, trimmed

    """

    id: str
    row: int
    column: int
    content: str = ""

    @classmethod
    def from_id(cls, cell_id: str, content: str = "") -> GridCell:
        """Create a cell, deriving row and column from its address."""
        row, column = parse_cell_address(cell_id)
        return cls(id=cell_id, row=row, column=column, content=content)


@dataclass(frozen=True)
class GridBlock:
    """Result of parsing one grid block.

    Parameters
    ----------
    settings : GridSettings
        Defaults overridden by the block's ``grid-settings`` section
    cells : tuple of GridCell
        Cells in encounter order, including ones outside the grid rectangle
        and duplicates
    grid_id : str or None
        Opaque identifier from the ``=== start-grid:`` sentinel, if present

    """

    settings: GridSettings = field(default_factory=GridSettings)
    cells: tuple[GridCell, ...] = ()
    grid_id: Optional[str] = None

    def cell(self, cell_id: str) -> Optional[GridCell]:
        """Return the last cell parsed with this address, or None."""
        for cell in reversed(self.cells):
            if cell.id == cell_id:
                return cell
        return None

    @property
    def placed_cells(self) -> tuple[GridCell, ...]:
        """Cells whose address lies inside the grid rectangle."""
        return tuple(c for c in self.cells if self.settings.contains(c.row, c.column))


@dataclass(frozen=True)
class GridSlot:
    """Placeholder for one grid address in a layout.

    Parameters
    ----------
    id : str
        Address such as ``"B2"``
    row : int
        Zero-based row
    column : int
        Zero-based column
    placeholder : bool, default False
        True when no parsed cell refers to this address
    content : str or None
        Rendered HTML injected into the slot, once available

    """

    id: str
    row: int
    column: int
    placeholder: bool = False
    content: Optional[str] = None

    @property
    def grid_row(self) -> int:
        """One-based row line for CSS grid positioning."""
        return self.row + 1

    @property
    def grid_column(self) -> int:
        """One-based column line for CSS grid positioning."""
        return self.column + 1

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_grid_slot``."""
        return visitor.visit_grid_slot(self)


@dataclass(frozen=True)
class GridLayout:
    """Immutable description of a grid container and its slots.

    Parameters
    ----------
    columns : int
        Number of columns
    rows : int
        Number of rows
    classes : tuple of str
        CSS classes of the container, in order
    style : tuple of (str, str)
        CSS properties of the container, in declaration order
    slots : tuple of GridSlot
        One slot per address, row-major
    grid_id : str or None
        Opaque identifier of the source block

    """

    columns: int
    rows: int
    classes: tuple[str, ...] = ()
    style: tuple[tuple[str, str], ...] = ()
    slots: tuple[GridSlot, ...] = ()
    grid_id: Optional[str] = None

    def slot(self, cell_id: str) -> Optional[GridSlot]:
        """Return the slot with this address, or None if it is outside the grid."""
        for slot in self.slots:
            if slot.id == cell_id:
                return slot
        return None

    def style_value(self, name: str) -> Optional[str]:
        """Return the value of a container CSS property, or None."""
        for prop, value in self.style:
            if prop == name:
                return value
        return None

    def with_slot_content(self, cell_id: str, content: str) -> GridLayout:
        """Return a copy of the layout with ``content`` placed in a slot.

        The slot loses its placeholder flag. Unknown addresses leave the
        layout unchanged.

        """
        slots = tuple(
            replace(slot, content=content, placeholder=False) if slot.id == cell_id else slot for slot in self.slots
        )
        return replace(self, slots=slots)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_grid_layout``."""
        return visitor.visit_grid_layout(self)


@dataclass(frozen=True)
class ImageReference:
    """An embedded-image reference, ``![[filename|mod1|mod2]]``.

    Parameters
    ----------
    filename : str
        First pipe-delimited segment
    modifiers : tuple of str
        Remaining segments, in order

    """

    filename: str
    modifiers: tuple[str, ...] = ()

    @classmethod
    def from_inner(cls, inner: str) -> ImageReference:
        """Split the text between ``![[`` and ``]]`` into filename and modifiers."""
        filename, *modifiers = inner.split(MODIFIER_SEPARATOR)
        return cls(filename=filename, modifiers=tuple(modifiers))

    def to_markdown(self) -> str:
        """Serialize back to ``![[...]]`` syntax; no trailing pipe when there are no modifiers."""
        if self.modifiers:
            return f"![[{self.filename}{MODIFIER_SEPARATOR}{MODIFIER_SEPARATOR.join(self.modifiers)}]]"
        return f"![[{self.filename}]]"
