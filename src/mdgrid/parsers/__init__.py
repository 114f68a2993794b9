#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers for mdgrid block syntax."""

from mdgrid.parsers.base import BaseParser
from mdgrid.parsers.grid import GridParser

__all__ = ["BaseParser", "GridParser"]
