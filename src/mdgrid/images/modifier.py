#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Context-menu actions that reposition and resize embedded images.

:class:`ImageModifier` ties the locator and the rewriter to an editor: it
finds the reference nearest the cursor, rewrites its modifiers and writes
the line back. Outcomes are reported through a notifier callback rather
than exceptions, since every action is a single user click.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from mdgrid.constants import DEFAULT_CLEAR_KEYWORD, NOTICE_IMAGE_NOT_FOUND
from mdgrid.exceptions import ValidationError
from mdgrid.images.editor import TextEditor
from mdgrid.images.locator import ImageLocator, ImageMatch
from mdgrid.images.rewriter import ModifierRewriter
from mdgrid.options.images import ImageModifierOptions

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


@dataclass(frozen=True)
class MenuAction:
    """One entry of the image context menu.

    Parameters
    ----------
    id : str
        Stable identifier, e.g. ``"float-left"``
    title : str
        Menu label
    notice : str
        Message shown after the action succeeds
    position : str or None
        Position applied by the action
    size : str or None
        Size applied by the action

    """

    id: str
    title: str
    notice: str
    position: Optional[str] = None
    size: Optional[str] = None


# Sections are separated in the rendered menu
IMAGE_MENU_SECTIONS: tuple[tuple[MenuAction, ...], ...] = (
    (
        MenuAction("float-left", "\U0001f4cd Float Left", "Image positioned left", position="float-left"),
        MenuAction("float-right", "\U0001f4cd Float Right", "Image positioned right", position="float-right"),
        MenuAction("center", "\U0001f3af Center Image", "Image centered", position="center"),
    ),
    (
        MenuAction("small", "\U0001f50d Small", "Image resized to small", size="small"),
        MenuAction("medium", "⚖️ Medium", "Image resized to medium", size="medium"),
        MenuAction("large", "\U0001f4cf Large", "Image resized to large", size="large"),
    ),
    (
        MenuAction(
            "clear",
            "\U0001f504 Clear Positioning",
            "Image styling cleared",
            position=DEFAULT_CLEAR_KEYWORD,
            size=DEFAULT_CLEAR_KEYWORD,
        ),
    ),
)

IMAGE_MENU_ACTIONS: dict[str, MenuAction] = {action.id: action for section in IMAGE_MENU_SECTIONS for action in section}


def _log_notice(message: str) -> None:
    logger.info(message)


class ImageModifier:
    """Apply image menu actions to the reference nearest the cursor.

    Parameters
    ----------
    editor : TextEditor
        Document being edited
    options : ImageModifierOptions or None, default None
        Keyword sets and search radius
    notifier : callable or None, default None
        Receives user-facing notices; logs at INFO level when omitted

    Examples
    --------
        >>> from mdgrid.images.editor import LinesEditor
        >>> editor = LinesEditor("intro\\n![[pic.png|left]]\\n")
        >>> ImageModifier(editor).run_action("small", cursor_line=0)
        True
        >>> editor.get_line(1)
        '![[pic.png|left|small]]'

    """

    def __init__(
        self,
        editor: TextEditor,
        options: Optional[ImageModifierOptions] = None,
        notifier: Optional[Notifier] = None,
    ):
        """Initialize the modifier for an editor."""
        self.editor = editor
        self.options = options or ImageModifierOptions()
        self.notifier: Notifier = notifier or _log_notice
        self.locator = ImageLocator(self.options.search_radius)
        self.rewriter = ModifierRewriter(self.options)

    def update(
        self, cursor_line: int, position: Optional[str] = None, size: Optional[str] = None
    ) -> Optional[ImageMatch]:
        """Rewrite the reference nearest ``cursor_line``.

        Returns
        -------
        ImageMatch or None
            The reference that was rewritten, or None (after notifying) when
            no reference is within the search window

        """
        match = self.locator.locate(self.editor, cursor_line)
        if match is None:
            self.notifier(NOTICE_IMAGE_NOT_FOUND)
            return None

        self.editor.set_line(match.line_index, self.rewriter.rewrite(match, position, size))
        return match

    def apply_position(self, cursor_line: int, position: str) -> bool:
        """Set the position of the nearest image; other modifiers are kept."""
        return self.update(cursor_line, position=position) is not None

    def apply_size(self, cursor_line: int, size: str) -> bool:
        """Set the size of the nearest image; other modifiers are kept."""
        return self.update(cursor_line, size=size) is not None

    def clear(self, cursor_line: int) -> bool:
        """Remove every recognized position and size modifier from the nearest image."""
        clear = self.options.clear_keyword
        return self.update(cursor_line, position=clear, size=clear) is not None

    def run_action(self, action_id: str, cursor_line: int) -> bool:
        """Run a context-menu action by id.

        Raises
        ------
        ValidationError
            If ``action_id`` is not a known menu action

        """
        action = IMAGE_MENU_ACTIONS.get(action_id)
        if action is None:
            raise ValidationError(
                f"Unknown image action '{action_id}'. Choose from: {', '.join(IMAGE_MENU_ACTIONS)}",
                parameter_name="action_id",
                parameter_value=action_id,
            )

        clear = self.options.clear_keyword
        position = clear if action.position == DEFAULT_CLEAR_KEYWORD else action.position
        size = clear if action.size == DEFAULT_CLEAR_KEYWORD else action.size
        if self.update(cursor_line, position=position, size=size) is None:
            return False
        self.notifier(action.notice)
        return True
