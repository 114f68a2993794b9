#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Rewrite the modifier list of an embedded-image reference.

Modifiers fall into two recognized categories, position and size. Applying
a value to a category removes every recognized token of that category and
puts the new value where the first removed token was (or at the end when
there was none). The clear keyword removes the category without a
replacement. A category that is not passed is left untouched, and
modifiers outside both categories are always preserved.

>>> from mdgrid.ast import ImageReference
>>> rewriter = ModifierRewriter()
>>> rewriter.rewrite_reference(ImageReference("pic.png", ("left", "small")), position="right").to_markdown()
'![[pic.png|right|small]]'

"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from mdgrid.ast.nodes import ImageReference
from mdgrid.images.locator import ImageMatch
from mdgrid.options.images import ImageModifierOptions

logger = logging.getLogger(__name__)


class ModifierRewriter:
    """Apply position and size changes to image references.

    Parameters
    ----------
    options : ImageModifierOptions or None, default None
        Keyword sets and the clear sentinel

    """

    def __init__(self, options: Optional[ImageModifierOptions] = None):
        """Initialize the rewriter with options."""
        self.options = options or ImageModifierOptions()

    def rewrite(self, match: ImageMatch, position: Optional[str] = None, size: Optional[str] = None) -> str:
        """Return the matched line with the reference rewritten.

        The caller writes the result back at ``match.line_index``.

        Parameters
        ----------
        match : ImageMatch
            Reference located in the document
        position : str or None
            New position, the clear keyword, or None to leave positions alone
        size : str or None
            New size, the clear keyword, or None to leave sizes alone

        Returns
        -------
        str
            The full updated line

        """
        reference = self.rewrite_reference(match.reference, position, size)
        new_text = reference.to_markdown()
        logger.debug("Rewriting %s -> %s on line %d", match.text, new_text, match.line_index + 1)
        return match.line_text[: match.start] + new_text + match.line_text[match.end :]

    def rewrite_reference(
        self, reference: ImageReference, position: Optional[str] = None, size: Optional[str] = None
    ) -> ImageReference:
        """Return a copy of ``reference`` with the requested categories replaced."""
        modifiers = list(reference.modifiers)
        if position is not None:
            modifiers = self._replace_category(modifiers, self.options.position_keywords, position)
        if size is not None:
            modifiers = self._replace_category(modifiers, self.options.size_keywords, size)
        return ImageReference(filename=reference.filename, modifiers=tuple(modifiers))

    def _replace_category(self, modifiers: list[str], keywords: Iterable[str], value: str) -> list[str]:
        keyword_set = frozenset(keywords)
        kept: list[str] = []
        insert_at: Optional[int] = None
        for modifier in modifiers:
            if modifier.strip() in keyword_set:
                if insert_at is None:
                    insert_at = len(kept)
                continue
            kept.append(modifier)

        if value == self.options.clear_keyword:
            return kept
        if insert_at is None:
            kept.append(value)
        else:
            kept.insert(insert_at, value)
        return kept
