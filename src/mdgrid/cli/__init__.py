#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdgrid/cli/__init__.py
"""Command-line interface for mdgrid.

Usage::

    mdgrid render notes.md -o notes.html --standalone
    mdgrid template --columns 3 --rows 2 --dynamic
    mdgrid template --preset dynamic-2col
    mdgrid image notes.md --line 12 --action float-left
    mdgrid image notes.md --line 12 --size large --dry-run

"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from mdgrid.cli.builder import EXIT_VALIDATION_ERROR, create_parser, get_exit_code_for_exception
from mdgrid.cli.commands import COMMAND_HANDLERS
from mdgrid.cli.config import apply_config_defaults, discover_config_file, load_config_file, split_image_section
from mdgrid.cli.output import print_error
from mdgrid.exceptions import MdGridError
from mdgrid.logging_utils import configure_logging
from mdgrid.options.images import ImageModifierOptions

logger = logging.getLogger(__name__)


def _pre_parse_config(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--config")
    pre_parser.add_argument("--no-config", action="store_true")
    known, _ = pre_parser.parse_known_args(argv)
    return known


def _load_config(argv: Optional[Sequence[str]]) -> dict:
    pre = _pre_parse_config(argv)
    if pre.no_config:
        return {}
    if pre.config:
        return load_config_file(pre.config)
    discovered = discover_config_file()
    return load_config_file(discovered) if discovered else {}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the mdgrid CLI.

    Parameters
    ----------
    argv : sequence of str or None
        Arguments without the program name; ``sys.argv[1:]`` when omitted

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()

    try:
        config = _load_config(argv)
        cli_defaults, image_config = split_image_section(config)
        image_options = ImageModifierOptions.from_mapping(image_config)
    except (argparse.ArgumentTypeError, ValueError) as e:
        print_error(f"Invalid configuration: {e}")
        return EXIT_VALIDATION_ERROR

    apply_config_defaults(parser, cli_defaults)
    args = parser.parse_args(argv)

    configure_logging(args.log_level, log_file=args.log_file, trace_mode=args.trace, rich_output=args.rich)
    logger.debug("Running command %s", args.command)

    handler = COMMAND_HANDLERS[args.command]
    try:
        return handler(args, image_options)
    except MdGridError as e:
        logger.debug("Command failed", exc_info=True)
        print_error(str(e))
        return get_exit_code_for_exception(e)
    except ImportError as e:
        print_error(f"Missing dependency: {e}")
        return get_exit_code_for_exception(e)


__all__ = ["main", "create_parser"]
