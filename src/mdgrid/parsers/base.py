#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdgrid/parsers/base.py
"""Base class for mdgrid parsers.

Parsers accept block text as a string, a path, raw bytes or a file-like
object and return a parsed structure. The base class centralizes options
validation and input loading.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Union

from mdgrid.exceptions import FileNotFoundError, InvalidOptionsError, ParsingError
from mdgrid.options.base import BaseParserOptions
from mdgrid.utils.encoding import decode_text, normalize_stream_to_text

logger = logging.getLogger(__name__)

ParserInput = Union[str, Path, IO[bytes], IO[str], bytes]


class BaseParser(ABC):
    """Abstract base class for all mdgrid parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Parser-specific options

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> Any:
        """Parse the input into a structured result."""
        raise NotImplementedError

    @staticmethod
    def _load_text_content(input_data: ParserInput) -> str:
        """Load text from a string, path, bytes or stream.

        Strings are always treated as content, never as file paths: grid
        blocks are short and a one-line block could otherwise be mistaken
        for a filename. Pass a :class:`~pathlib.Path` to read a file.

        Raises
        ------
        FileNotFoundError
            If a Path is given that does not exist
        ParsingError
            If the input is not readable or a stream yields neither str nor bytes

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, bytes):
            return decode_text(input_data)
        if isinstance(input_data, Path):
            if not input_data.is_file():
                raise FileNotFoundError(str(input_data))
            return decode_text(input_data.read_bytes())
        if not hasattr(input_data, "read"):
            raise ParsingError(
                f"Cannot read grid block from {type(input_data).__name__}", parsing_stage="input_loading"
            )
        if hasattr(input_data, "seek"):
            input_data.seek(0)
        try:
            return normalize_stream_to_text(input_data)
        except TypeError as e:
            raise ParsingError(str(e), parsing_stage="input_loading", original_error=e) from e
