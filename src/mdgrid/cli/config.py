#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the mdgrid CLI.

Configuration files provide defaults for CLI flags (``standalone = true``,
``attachment_base = "..."``) and an optional ``[image]`` table with
:class:`~mdgrid.options.images.ImageModifierOptions` fields. Explicit CLI
flags always win.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MDGRID_CONFIG"
DEDICATED_CONFIG_FILENAMES = [".mdgrid.toml", ".mdgrid.yaml", ".mdgrid.yml", ".mdgrid.json"]
IMAGE_SECTION = "image"


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.mdgrid]`` table of a pyproject.toml, or an empty dict.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is not valid TOML or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get("mdgrid", {})
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.mdgrid] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or any of its parents.

    Each directory is checked for the dedicated config files first, then for
    a pyproject.toml with a ``[tool.mdgrid]`` section.

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in DEDICATED_CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError:
                logger.debug("Skipping unreadable %s", pyproject_path)

        parent = current.parent
        if parent == current:
            return None
        current = parent


def discover_config_file() -> Optional[Path]:
    """Discover a configuration file.

    Order: the ``MDGRID_CONFIG`` environment variable, the current directory
    and its parents, then the user's home directory.

    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    found = find_config_in_parents()
    if found:
        return found

    home = Path.home()
    for filename in DEDICATED_CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path
    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file does not exist, cannot be parsed, or is not a mapping

    """
    path = Path(config_path)
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {path}")

    if path.name == "pyproject.toml":
        return _load_pyproject_section(path)

    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            with open(path, "rb") as f:
                config = tomllib.load(f)
        elif suffix in (".yaml", ".yml"):
            with open(path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        elif suffix == ".json":
            with open(path, encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise argparse.ArgumentTypeError(
                f"Unsupported configuration file format: {path.suffix}. Use .toml, .yaml, .yml or .json"
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Invalid configuration file {path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"Configuration in {path} must be a mapping, got {type(config).__name__}")
    logger.debug("Loaded configuration from %s", path)
    return config


def split_image_section(config: Dict[str, Any]) -> tuple[Dict[str, Any], Dict[str, Any]]:
    """Separate the ``[image]`` table from flat CLI defaults.

    Returns
    -------
    tuple of dict
        (cli_defaults, image_options)

    """
    flat = {key.replace("-", "_"): value for key, value in config.items() if key != IMAGE_SECTION}
    image = config.get(IMAGE_SECTION) or {}
    if not isinstance(image, dict):
        raise argparse.ArgumentTypeError(f"[{IMAGE_SECTION}] must be a table, got {type(image).__name__}")
    return flat, image


def apply_config_defaults(parser: argparse.ArgumentParser, defaults: Dict[str, Any]) -> None:
    """Set argparse defaults from config values on a parser and all of its subparsers.

    Subparser defaults take precedence over the parent's in argparse, so
    every level is updated. Options whose subcommand copy suppresses its
    default are left to the top-level parser. Keys that match no argument
    are ignored.

    """
    parsers = [parser]
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            parsers.extend(action.choices.values())

    for current in parsers:
        known = {action.dest for action in current._actions if action.default is not argparse.SUPPRESS}
        matched = {key: value for key, value in defaults.items() if key in known}
        if matched:
            current.set_defaults(**matched)
