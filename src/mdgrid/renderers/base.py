#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdgrid/renderers/base.py
"""Base class for mdgrid renderers.

Renderers turn parsed structures (grid layouts, whole documents) into text.
The base class handles options validation and writing rendered output to a
path or a file-like object.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from io import TextIOBase
from pathlib import Path
from typing import IO, Any, Union

from mdgrid.exceptions import InvalidOptionsError, OutputWriteError
from mdgrid.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for all mdgrid renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Renderer-specific options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def render_to_string(self, source: Any, **kwargs: Any) -> str:
        """Render ``source`` to a string."""
        raise NotImplementedError

    def render(self, source: Any, output: Union[str, Path, IO[bytes], IO[str]], **kwargs: Any) -> None:
        """Render ``source`` and write it to a path or file-like object.

        Raises
        ------
        OutputWriteError
            If the output cannot be written

        """
        content = self.render_to_string(source, **kwargs)

        if isinstance(output, (str, Path)):
            path = Path(output)
            try:
                path.write_text(content, encoding="utf-8")
            except OSError as e:
                raise OutputWriteError(str(path), original_error=e) from e
        elif isinstance(output, TextIOBase):
            output.write(content)
        else:
            output.write(content.encode("utf-8"))  # type: ignore[arg-type]
