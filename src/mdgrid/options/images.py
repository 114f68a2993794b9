#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for rewriting embedded-image modifiers."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdgrid.constants import (
    DEFAULT_CLEAR_KEYWORD,
    DEFAULT_IMAGE_SEARCH_RADIUS,
    DEFAULT_POSITION_KEYWORDS,
    DEFAULT_SIZE_KEYWORDS,
)
from mdgrid.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class ImageModifierOptions(CloneFrozenMixin):
    """Keyword sets and search window for the image modifier.

    Parameters
    ----------
    position_keywords : tuple of str
        Modifiers treated as image positions. Any of these is removed when
        a new position (or a clear) is applied.
    size_keywords : tuple of str
        Modifiers treated as image sizes. Any of these is removed when a
        new size (or a clear) is applied.
    clear_keyword : str, default "clear"
        Sentinel value that removes a category without adding a replacement.
    search_radius : int, default 2
        Number of lines above and below the cursor searched for an
        embedded-image reference.

    """

    position_keywords: tuple[str, ...] = field(
        default=DEFAULT_POSITION_KEYWORDS,
        metadata={"help": "Modifiers recognized as image positions", "importance": "advanced"},
    )
    size_keywords: tuple[str, ...] = field(
        default=DEFAULT_SIZE_KEYWORDS,
        metadata={"help": "Modifiers recognized as image sizes", "importance": "advanced"},
    )
    clear_keyword: str = field(
        default=DEFAULT_CLEAR_KEYWORD,
        metadata={"help": "Value that clears a modifier category", "importance": "advanced"},
    )
    search_radius: int = field(
        default=DEFAULT_IMAGE_SEARCH_RADIUS,
        metadata={"help": "Lines searched above and below the cursor", "type": int, "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate the search window and keyword sets.

        Raises
        ------
        ValueError
            If the radius is negative or the keyword sets overlap.

        """
        if self.search_radius < 0:
            raise ValueError(f"search_radius must be non-negative, got {self.search_radius}")
        overlap = set(self.position_keywords) & set(self.size_keywords)
        if overlap:
            raise ValueError(f"position and size keywords overlap: {sorted(overlap)}")
        if self.clear_keyword in self.position_keywords or self.clear_keyword in self.size_keywords:
            raise ValueError(f"clear_keyword '{self.clear_keyword}' cannot also be a position or size keyword")

    @property
    def recognized_keywords(self) -> frozenset[str]:
        """All position and size keywords."""
        return frozenset(self.position_keywords) | frozenset(self.size_keywords)
