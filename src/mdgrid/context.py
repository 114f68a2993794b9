#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Render context shared by the layout builder and the document renderer.

The invisible-mode toggle is an explicit field of a small frozen record
that callers pass along; toggling returns a new context.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class RenderContext:
    """Application-level state that affects how every grid is rendered.

    Parameters
    ----------
    invisible : bool, default False
        Suppress borders and backgrounds of every grid, regardless of the
        block's own ``invisible-mode`` setting.

    """

    invisible: bool = False

    def toggle_invisible(self) -> RenderContext:
        """Return a copy with the invisible flag flipped."""
        return replace(self, invisible=not self.invisible)

    @property
    def notice(self) -> str:
        """User-facing message describing the current invisible-mode state."""
        return f"Grid invisible mode {'ON' if self.invisible else 'OFF'}"
