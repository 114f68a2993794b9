#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdgrid/ast/__init__.py
"""Data model for grid blocks and grid layouts.

- nodes: settings, cells, slots, layouts and image references
- builder: the LayoutBuilder that maps parsed cells onto slots

Examples
--------
    >>> from mdgrid.ast import GridCell, GridSettings, LayoutBuilder
    >>> layout = LayoutBuilder().build(GridSettings(columns=3, rows=1), [GridCell.from_id("A1", "x")])
    >>> [slot.id for slot in layout.slots]
    ['A1', 'B1', 'C1']

"""

from mdgrid.ast.builder import LayoutBuilder
from mdgrid.ast.nodes import (
    GridBlock,
    GridCell,
    GridLayout,
    GridSettings,
    GridSlot,
    ImageReference,
    cell_address,
    parse_cell_address,
)

__all__ = [
    "GridBlock",
    "GridCell",
    "GridLayout",
    "GridSettings",
    "GridSlot",
    "ImageReference",
    "LayoutBuilder",
    "cell_address",
    "parse_cell_address",
]
