#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdgrid/renderers/markdown.py
"""Markdown to HTML rendering capability.

Grid cells and whole documents are rendered through the small
:class:`MarkdownRenderer` protocol so that a host application can plug in
its own renderer. :class:`MistuneMarkdownRenderer` is the default
implementation, built on mistune with an inline plugin for embedded
references (``![[file.png|left|small]]``).

"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Any, Callable, Optional, Protocol, runtime_checkable
from urllib.parse import quote

from mdgrid.ast.nodes import ImageReference
from mdgrid.constants import DEPS_MARKDOWN, IMAGE_CLASS_PREFIX, IMAGE_DIMENSION_PATTERN
from mdgrid.options.grid import GridRendererOptions
from mdgrid.options.images import ImageModifierOptions
from mdgrid.utils.decorators import requires_dependencies
from mdgrid.utils.html_utils import escape_html, format_class_list

logger = logging.getLogger(__name__)

WIKI_EMBED_PATTERN = r"!\[\[(?P<wiki_embed_target>[^\]]*)\]\]"

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp", ".svg", ".webp", ".avif", ".tif", ".tiff"})

MISTUNE_PLUGINS = ("strikethrough", "table", "url")


@runtime_checkable
class MarkdownRenderer(Protocol):
    """Anything that renders Markdown text to an HTML fragment.

    ``source_path`` is the path of the originating document; renderers use
    it to resolve relative links and embedded files.
    """

    def render(self, text: str, source_path: Optional[str] = None) -> str:
        """Render Markdown ``text`` to HTML."""
        ...


def resolve_attachment(filename: str, source_path: Optional[str] = None, attachment_base: Optional[str] = None) -> str:
    """Resolve an embedded filename to the URL used as ``src``/``href``.

    Absolute URLs and absolute paths are returned unchanged. Otherwise the
    filename is joined to ``attachment_base`` when given, else to the
    directory of ``source_path``.

    >>> resolve_attachment("pic.png", "notes/today.md")
    'notes/pic.png'
    >>> resolve_attachment("my pic.png", attachment_base="https://cdn.example.com/files/")
    'https://cdn.example.com/files/my%20pic.png'

    """
    if "://" in filename or filename.startswith("/"):
        return filename
    if attachment_base:
        return f"{attachment_base.rstrip('/')}/{quote(filename)}"
    if source_path:
        directory = PurePosixPath(source_path.replace("\\", "/")).parent
        if str(directory) not in ("", "."):
            return quote(str(directory / filename))
    return quote(filename)


def render_embed(
    reference: ImageReference,
    src: str,
    recognized_keywords: frozenset[str] = frozenset(),
) -> str:
    """Render an embedded reference as an ``<img>`` (images) or an ``<a>`` (anything else).

    Recognized position and size keywords become ``image-<keyword>``
    classes, a ``W`` or ``WxH`` modifier sets the dimensions, and every
    other modifier is preserved in ``data-modifiers``.

    """
    filename = reference.filename.strip()
    if PurePosixPath(filename).suffix.lower() not in IMAGE_EXTENSIONS:
        return f'<a class="internal-embed" href="{escape_html(src)}">{escape_html(filename)}</a>'

    classes: list[str] = []
    extra: list[str] = []
    width = height = None
    for modifier in (m.strip() for m in reference.modifiers):
        if not modifier:
            continue
        if modifier in recognized_keywords:
            classes.append(f"{IMAGE_CLASS_PREFIX}{modifier}")
            continue
        dimensions = IMAGE_DIMENSION_PATTERN.match(modifier)
        if dimensions and width is None:
            width, height = dimensions.group(1), dimensions.group(2)
            continue
        extra.append(modifier)

    attrs = [f'src="{escape_html(src)}"', f'alt="{escape_html(filename)}"']
    if classes:
        attrs.append(f'class="{format_class_list(classes)}"')
    if width:
        attrs.append(f'width="{width}"')
    if height:
        attrs.append(f'height="{height}"')
    if extra:
        attrs.append(f'data-modifiers="{escape_html(" ".join(extra))}"')
    return f"<img {' '.join(attrs)} />"


class MistuneMarkdownRenderer:
    """Render Markdown to HTML with mistune.

    Raw HTML in the source is passed through, matching how note-taking apps
    treat Markdown. Embedded references are handled by an inline plugin.

    Parameters
    ----------
    options : GridRendererOptions or None, default None
        Provides ``attachment_base`` for resolving embedded filenames
    image_options : ImageModifierOptions or None, default None
        Provides the position/size keywords turned into CSS classes

    Examples
    --------
        >>> MistuneMarkdownRenderer().render("**bold**")
        '<p><strong>bold</strong></p>\\n'

    """

    def __init__(
        self,
        options: Optional[GridRendererOptions] = None,
        image_options: Optional[ImageModifierOptions] = None,
    ):
        """Initialize the renderer with options."""
        self.options = options or GridRendererOptions()
        self.image_options = image_options or ImageModifierOptions()

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def render(self, text: str, source_path: Optional[str] = None) -> str:
        """Render Markdown ``text`` to an HTML fragment."""
        import mistune

        markdown = mistune.create_markdown(
            escape=False,
            plugins=[*MISTUNE_PLUGINS, self._wiki_embed_plugin(source_path)],
        )
        return str(markdown(text))

    def _wiki_embed_plugin(self, source_path: Optional[str]) -> Callable[[Any], None]:
        attachment_base = self.options.attachment_base
        keywords = self.image_options.recognized_keywords

        def parse_wiki_embed(inline: Any, m: Any, state: Any) -> int:
            state.append_token({"type": "wiki_embed", "raw": m.group("wiki_embed_target")})
            return m.end()

        def render_wiki_embed(renderer: Any, raw: str) -> str:
            reference = ImageReference.from_inner(raw)
            src = resolve_attachment(reference.filename.strip(), source_path, attachment_base)
            return render_embed(reference, src, keywords)

        def wiki_embed(md: Any) -> None:
            md.inline.register("wiki_embed", WIKI_EMBED_PATTERN, parse_wiki_embed, before="link")
            if md.renderer and md.renderer.NAME == "html":
                md.renderer.register("wiki_embed", render_wiki_embed)

        return wiki_embed
