#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers for grid layouts and Markdown documents."""

from mdgrid.renderers.base import BaseRenderer
from mdgrid.renderers.document import DocumentRenderer
from mdgrid.renderers.html import ContentInjector, GridHtmlRenderer
from mdgrid.renderers.markdown import MarkdownRenderer, MistuneMarkdownRenderer

__all__ = [
    "BaseRenderer",
    "ContentInjector",
    "DocumentRenderer",
    "GridHtmlRenderer",
    "MarkdownRenderer",
    "MistuneMarkdownRenderer",
]
