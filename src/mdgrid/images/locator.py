#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Find the embedded-image reference nearest to the cursor.

Host applications know which line the cursor is on but not which image was
right-clicked, so the locator scans a small window of lines around the
cursor and takes the first ``![[...]]`` reference it finds, top to bottom
and left to right.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from mdgrid.ast.nodes import ImageReference
from mdgrid.constants import DEFAULT_IMAGE_SEARCH_RADIUS, EMBEDDED_IMAGE_PATTERN
from mdgrid.images.editor import LinesEditor, TextEditor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageMatch:
    """An embedded-image reference found in a document line.

    Parameters
    ----------
    line_index : int
        Zero-based line holding the reference
    line_text : str
        Full text of that line
    start : int
        Offset of the reference within the line
    end : int
        Offset just past the reference
    reference : ImageReference
        Parsed filename and modifiers

    """

    line_index: int
    line_text: str
    start: int
    end: int
    reference: ImageReference

    @property
    def text(self) -> str:
        """The full matched text, e.g. ``![[pic.png|left]]``."""
        return self.line_text[self.start : self.end]

    @property
    def filename(self) -> str:
        """Filename of the reference."""
        return self.reference.filename

    @property
    def modifiers(self) -> tuple[str, ...]:
        """Modifiers of the reference, in order."""
        return self.reference.modifiers


class ImageLocator:
    """Scan the lines around a cursor for an embedded-image reference.

    Parameters
    ----------
    radius : int, default 2
        Lines searched above and below the cursor

    """

    def __init__(self, radius: int = DEFAULT_IMAGE_SEARCH_RADIUS):
        """Initialize the locator with a search radius."""
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")
        self.radius = radius

    def window(self, cursor_line: int, line_count: int) -> range:
        """Line indices searched for a cursor, clamped to the document."""
        if line_count <= 0:
            return range(0)
        first = max(0, cursor_line - self.radius)
        last = min(line_count - 1, cursor_line + self.radius)
        return range(first, last + 1)

    def locate(self, editor: TextEditor, cursor_line: int) -> Optional[ImageMatch]:
        """Return the first reference within the window, or None.

        Parameters
        ----------
        editor : TextEditor
            Document to search
        cursor_line : int
            Zero-based cursor line

        Returns
        -------
        ImageMatch or None
            The first match scanning top to bottom, left to right

        """
        for index in self.window(cursor_line, editor.line_count()):
            line = editor.get_line(index)
            match = EMBEDDED_IMAGE_PATTERN.search(line)
            if match:
                logger.debug("Found embedded image %s on line %d", match.group(0), index + 1)
                return ImageMatch(
                    line_index=index,
                    line_text=line,
                    start=match.start(),
                    end=match.end(),
                    reference=ImageReference.from_inner(match.group(1)),
                )
        logger.debug("No embedded image within %d lines of line %d", self.radius, cursor_line + 1)
        return None

    def locate_in_lines(self, lines: list[str], cursor_line: int) -> Optional[ImageMatch]:
        """Like :meth:`locate`, for a plain list of lines."""
        return self.locate(LinesEditor("\n".join(lines)), cursor_line)
