#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdgrid/cli/commands.py
"""Subcommand handlers for the mdgrid CLI.

Each handler receives the parsed arguments and the image options built from
configuration, and returns an exit code. Library exceptions propagate to
:func:`mdgrid.cli.main`, which maps them to exit codes.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Callable, Dict, Optional

from mdgrid.cli.builder import EXIT_IMAGE_NOT_FOUND, EXIT_SUCCESS
from mdgrid.cli.output import make_notifier, print_success
from mdgrid.context import RenderContext
from mdgrid.exceptions import FileNotFoundError, OutputWriteError, ValidationError
from mdgrid.images.editor import LinesEditor
from mdgrid.images.modifier import ImageModifier
from mdgrid.options.grid import GridRendererOptions
from mdgrid.options.images import ImageModifierOptions
from mdgrid.renderers.document import DocumentRenderer
from mdgrid.templates import make_preset_template, make_template
from mdgrid.utils.encoding import decode_text

logger = logging.getLogger(__name__)

CommandHandler = Callable[[argparse.Namespace, ImageModifierOptions], int]


def _read_document(path: Path) -> str:
    if not path.is_file():
        raise FileNotFoundError(str(path))
    return decode_text(path.read_bytes())


def resolve_source_path(input_path: Path, output_path: Optional[Path]) -> str:
    """Path of the document as seen from where the HTML will be opened.

    Relative embeds are resolved against the directory of this path, so it is
    expressed relative to the output file's directory (or the current
    directory when writing to stdout).

    """
    base = output_path.resolve().parent if output_path else Path.cwd()
    try:
        relative = os.path.relpath(input_path.resolve(), base)
    except ValueError:
        # different drives on Windows
        return input_path.resolve().as_posix()
    return Path(relative).as_posix()


def handle_render(args: argparse.Namespace, image_options: ImageModifierOptions) -> int:
    """Render a Markdown file to HTML."""
    input_path = Path(args.input)
    text = _read_document(input_path)
    output_path = Path(args.output) if args.output else None

    options = GridRendererOptions(
        standalone=args.standalone,
        include_css=args.include_css,
        title=args.title or input_path.stem,
        image_error_handler=args.image_error_handler,
        image_error_text=args.image_error_text,
        attachment_base=args.attachment_base,
        fail_on_resource_errors=args.fail_on_resource_errors,
    )
    renderer = DocumentRenderer(options, RenderContext(invisible=args.invisible), image_options=image_options)
    source_path = resolve_source_path(input_path, output_path)
    logger.debug("Rendering %s with source path %s", input_path, source_path)

    if output_path is None:
        sys.stdout.write(renderer.render_to_string(text, source_path=source_path))
        return EXIT_SUCCESS

    renderer.render(text, output_path, source_path=source_path)
    print_success(f"Rendered {input_path} -> {output_path}")
    return EXIT_SUCCESS


def handle_template(args: argparse.Namespace, image_options: ImageModifierOptions) -> int:
    """Print a new grid block to stdout."""
    if args.preset:
        template = make_preset_template(args.preset, args.grid_id)
    else:
        template = make_template(args.columns, args.rows, args.dynamic, args.grid_id)
    sys.stdout.write(template + "\n")
    return EXIT_SUCCESS


def _check_keyword(value: Optional[str], allowed: tuple[str, ...], parameter_name: str) -> None:
    if value is not None and value not in allowed:
        raise ValidationError(
            f"Unknown {parameter_name} '{value}'. Choose from: {', '.join(allowed)}",
            parameter_name=parameter_name,
            parameter_value=value,
        )


def handle_image(args: argparse.Namespace, image_options: ImageModifierOptions) -> int:
    """Rewrite the image reference nearest ``--line`` in a Markdown file."""
    path = Path(args.file)
    text = _read_document(path)
    clear = image_options.clear_keyword
    _check_keyword(args.position, image_options.position_keywords + (clear,), "position")
    _check_keyword(args.size, image_options.size_keywords + (clear,), "size")

    editor = LinesEditor(text)
    modifier = ImageModifier(editor, image_options, make_notifier())
    cursor_line = args.line - 1

    if args.action:
        found = modifier.run_action(args.action, cursor_line)
    elif args.clear:
        found = modifier.clear(cursor_line)
    elif args.position:
        found = modifier.apply_position(cursor_line, args.position)
    else:
        found = modifier.apply_size(cursor_line, args.size)

    if not found:
        return EXIT_IMAGE_NOT_FOUND

    if args.dry_run:
        for before, after in zip(text.split("\n"), editor.text.split("\n")):
            if before != after:
                sys.stdout.write(after + "\n")
        return EXIT_SUCCESS

    if editor.modified:
        try:
            path.write_text(editor.text, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(str(path), original_error=e) from e
        print_success(f"Updated {path}")
    else:
        logger.info("Image reference already up to date")
    return EXIT_SUCCESS


COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "render": handle_render,
    "template": handle_template,
    "image": handle_image,
}
