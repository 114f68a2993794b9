#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Embedded-image reference editing: locate, rewrite and apply menu actions."""

from mdgrid.images.editor import LinesEditor, TextEditor
from mdgrid.images.locator import ImageLocator, ImageMatch
from mdgrid.images.modifier import IMAGE_MENU_ACTIONS, IMAGE_MENU_SECTIONS, ImageModifier, MenuAction
from mdgrid.images.rewriter import ModifierRewriter

__all__ = [
    "IMAGE_MENU_ACTIONS",
    "IMAGE_MENU_SECTIONS",
    "ImageLocator",
    "ImageMatch",
    "ImageModifier",
    "LinesEditor",
    "MenuAction",
    "ModifierRewriter",
    "TextEditor",
]
