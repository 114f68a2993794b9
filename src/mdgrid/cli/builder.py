#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdgrid/cli/builder.py
"""Argument parser construction and exit codes for the mdgrid CLI."""

import argparse

from mdgrid import __version__
from mdgrid.constants import DEFAULT_IMAGE_ERROR_TEXT
from mdgrid.exceptions import (
    DependencyError,
    FileError,
    ImageReferenceNotFoundError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from mdgrid.images.modifier import IMAGE_MENU_ACTIONS
from mdgrid.templates import TEMPLATE_PRESETS

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_IMAGE_NOT_FOUND = 5
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, ImageReferenceNotFoundError):
        return EXIT_IMAGE_NOT_FOUND

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'") from e
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def _add_common_arguments(parser: argparse.ArgumentParser, suppress_defaults: bool = False) -> None:
    # Subcommand copies leave values from the top-level parser in place
    def default(value):
        return argparse.SUPPRESS if suppress_defaults else value

    group = parser.add_argument_group("logging and configuration")
    group.add_argument(
        "--log-level",
        default=default("WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    group.add_argument("--log-file", default=default(None), help="Also write log records to this file")
    group.add_argument(
        "--trace", action="store_true", default=default(False), help="Timestamped log format with logger names"
    )
    group.add_argument("--rich", action="store_true", default=default(False), help="Route log output through rich")
    group.add_argument(
        "--config",
        default=default(None),
        help="Configuration file (.toml, .yaml, .json or pyproject.toml). "
        "Overrides discovery and the MDGRID_CONFIG environment variable",
    )
    group.add_argument(
        "--no-config", action="store_true", default=default(False), help="Ignore discovered configuration files"
    )


def _common_parent() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    _add_common_arguments(parent, suppress_defaults=True)
    return parent


def _add_render_command(subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser) -> None:
    parser = subparsers.add_parser(
        "render",
        parents=[common],
        help="Render a Markdown document with grid blocks to HTML",
        description="Render a Markdown document to HTML, expanding every fenced grid block into a CSS grid.",
    )
    parser.add_argument("input", help="Markdown file to render")
    parser.add_argument("-o", "--output", help="Write HTML to this file instead of stdout")
    parser.add_argument("--standalone", action="store_true", help="Emit a complete HTML page")
    parser.add_argument("--no-css", dest="include_css", action="store_false", help="Omit the grid stylesheet")
    parser.add_argument("--title", default="", help="Page title for standalone output (default: file name)")
    parser.add_argument("--invisible", action="store_true", help="Render grids in invisible mode (no chrome)")
    parser.add_argument("--attachment-base", help="Base URL or directory for embedded images")
    parser.add_argument(
        "--no-image-error-handler",
        dest="image_error_handler",
        action="store_false",
        help="Do not mark images that fail to load",
    )
    parser.add_argument(
        "--image-error-text",
        default=DEFAULT_IMAGE_ERROR_TEXT,
        help="Text shown in place of an image that fails to load",
    )
    parser.add_argument(
        "--fail-on-errors",
        dest="fail_on_resource_errors",
        action="store_true",
        help="Stop with an error when a grid block fails to render",
    )
    parser.set_defaults(command="render")


def _add_template_command(subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser) -> None:
    parser = subparsers.add_parser(
        "template",
        parents=[common],
        help="Print a new grid block",
        description="Print a fenced grid block with placeholder content in every cell.",
    )
    shape = parser.add_mutually_exclusive_group(required=True)
    shape.add_argument("--preset", choices=sorted(TEMPLATE_PRESETS), help="Named template")
    shape.add_argument("--columns", type=_positive_int, help="Number of columns (1-26)")
    parser.add_argument("--rows", type=_positive_int, default=2, help="Number of rows (default: 2)")
    parser.add_argument("--dynamic", action="store_true", help="Size rows to their content")
    parser.add_argument("--id", dest="grid_id", help="Block id (default: generated from the clock)")
    parser.set_defaults(command="template")


def _add_image_command(subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser) -> None:
    parser = subparsers.add_parser(
        "image",
        parents=[common],
        help="Reposition or resize the embedded image nearest a line",
        description="Rewrite the modifiers of the ![[...]] image nearest a line, keeping every other modifier.",
    )
    parser.add_argument("file", help="Markdown file to edit")
    parser.add_argument("--line", type=_positive_int, required=True, help="1-based line number of the cursor")
    change = parser.add_mutually_exclusive_group(required=True)
    change.add_argument("--action", choices=list(IMAGE_MENU_ACTIONS), help="Context-menu action to run")
    change.add_argument("--position", help="Position keyword to apply")
    change.add_argument("--size", help="Size keyword to apply")
    change.add_argument("--clear", action="store_true", help="Remove position and size modifiers")
    parser.add_argument("--dry-run", action="store_true", help="Print the rewritten line without saving")
    parser.set_defaults(command="image")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with every subcommand.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="mdgrid",
        description="Render Markdown grid layouts and edit embedded-image modifiers.",
        epilog="Exit codes: 0 success, 2 missing dependency, 3 invalid arguments, "
        "4 file error, 5 image not found, 6 parsing error, 7 rendering error.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_common_arguments(parser)

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True
    common = _common_parent()
    _add_render_command(subparsers, common)
    _add_template_command(subparsers, common)
    _add_image_command(subparsers, common)
    return parser
