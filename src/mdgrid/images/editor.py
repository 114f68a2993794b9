#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Line-indexed text editor interface used by the image modifier.

Host applications adapt their editor to :class:`TextEditor`. For files and
tests, :class:`LinesEditor` keeps a document in memory.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextEditor(Protocol):
    """Minimal read/write access to the lines of the active document."""

    def line_count(self) -> int:
        """Number of lines in the document."""
        ...

    def get_line(self, index: int) -> str:
        """Return the zero-based line ``index`` without its line terminator."""
        ...

    def set_line(self, index: int, text: str) -> None:
        """Replace the zero-based line ``index``."""
        ...


class LinesEditor:
    """In-memory :class:`TextEditor` over a text document.

    The trailing newline of the original text, if any, is preserved by
    :attr:`text`.

    >>> editor = LinesEditor("a\\n![[pic.png]]\\n")
    >>> editor.set_line(1, "![[pic.png|small]]")
    >>> editor.text
    'a\\n![[pic.png|small]]\\n'

    """

    def __init__(self, text: str = ""):
        """Split ``text`` into lines."""
        self._trailing_newline = text.endswith("\n")
        body = text[:-1] if self._trailing_newline else text
        self._lines: list[str] = body.split("\n") if body or not self._trailing_newline else [""]
        self.modified = False

    @property
    def text(self) -> str:
        """The current document text."""
        joined = "\n".join(self._lines)
        return joined + "\n" if self._trailing_newline else joined

    def line_count(self) -> int:
        """Number of lines in the document."""
        return len(self._lines)

    def get_line(self, index: int) -> str:
        """Return line ``index``.

        Raises
        ------
        IndexError
            If the index is outside the document

        """
        if not 0 <= index < len(self._lines):
            raise IndexError(f"Line {index} out of range (document has {len(self._lines)} lines)")
        return self._lines[index]

    def set_line(self, index: int, text: str) -> None:
        """Replace line ``index``.

        Raises
        ------
        IndexError
            If the index is outside the document

        """
        if not 0 <= index < len(self._lines):
            raise IndexError(f"Line {index} out of range (document has {len(self._lines)} lines)")
        if self._lines[index] != text:
            self._lines[index] = text
            self.modified = True
