#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Exception classes raised by mdgrid.

Grid rendering is forgiving by default. Malformed settings fall back to
defaults, cells outside the grid rectangle are not placed, and a block that
fails to render is logged and left as-is. What remains are the strict code
paths: explicit option validation, file I/O, the ``fail_on_resource_errors``
render mode and the API variant of image editing.

Exception Hierarchy
-------------------
- MdGridError

  - ValidationError
    - InvalidOptionsError

  - FileError
    - FileNotFoundError

  - ParsingError

  - RenderingError
    - OutputWriteError

  - ImageReferenceNotFoundError

  - DependencyError

"""

from typing import Any


def _requirement(name: str, version_spec: str) -> str:
    return f"{name}{version_spec}" if version_spec else name


class MdGridError(Exception):
    """Root of the mdgrid exception tree.

    Parameters
    ----------
    message : str
        Human-readable description
    original_error : Exception, optional
        Lower-level exception this error wraps

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Store the message and the wrapped exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MdGridError):
    """A caller-supplied value is out of range or not recognized.

    Used for template sizes, preset names and image keywords. The offending
    parameter is kept on the instance so the CLI can report it.

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Record which parameter failed and its value."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """A parser or renderer was handed the options class of another component."""

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Build the message from the expected and received option classes."""
        super().__init__(
            message or f"{component_name} takes {expected_type.__name__}, not {received_type.__name__}.",
            parameter_name="options",
            parameter_value=received_type,
            original_error=original_error,
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class FileError(MdGridError):
    """Reading a document or grid block from disk failed."""

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Keep the offending path."""
        super().__init__(message, original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """The input document does not exist."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Default the message to the missing path."""
        super().__init__(message or f"File not found: {file_path}", file_path=file_path, original_error=original_error)


class ParsingError(MdGridError):
    """Grid block input could not be turned into text.

    Parameters
    ----------
    message : str
        Description of the failure
    parsing_stage : str, optional
        Where parsing stopped, e.g. ``"input_loading"``

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Record the parsing stage."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(MdGridError):
    """A grid block or document could not be rendered.

    Parameters
    ----------
    message : str
        Description of the failure
    rendering_stage : str, optional
        Where rendering stopped, e.g. ``"content_injection"`` or ``"file_write"``

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Record the rendering stage."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Rendered HTML or an edited document could not be written."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Default the message to the target path."""
        super().__init__(
            message or f"Failed to write output file: {file_path}",
            rendering_stage="file_write",
            original_error=original_error,
        )
        self.file_path = file_path


class ImageReferenceNotFoundError(MdGridError):
    """No ``![[...]]`` reference lies within the search radius of the cursor.

    ``cursor_line`` is zero-based; the message reports it one-based.
    """

    def __init__(self, cursor_line: int, message: str | None = None):
        """Default the message to the one-based line number."""
        super().__init__(message or f"No embedded image reference found near line {cursor_line + 1}")
        self.cursor_line = cursor_line


class DependencyError(MdGridError):
    """A third-party package needed by a component is missing or too old.

    Parameters
    ----------
    component_name : str
        Component that needs the packages, e.g. ``"markdown"``
    missing_packages : list[tuple[str, str]]
        ``(package, version_spec)`` pairs that could not be imported
    version_mismatches : list[tuple[str, str, str]], optional
        ``(package, required, installed)`` triples
    install_command : str, optional
        Install hint to show instead of the generated pip command
    message : str, optional
        Replaces the generated message entirely
    original_import_error : ImportError, optional
        First ImportError seen while checking

    """

    def __init__(
        self,
        component_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Generate an install hint unless a message is supplied."""
        version_mismatches = version_mismatches or []
        if message is None:
            lines = []
            if missing_packages:
                names = ", ".join(f"'{_requirement(name, spec)}'" for name, spec in missing_packages)
                lines.append(f"{component_name} requires the following packages: {names}")
            for name, required, installed in version_mismatches:
                lines.append(f"{component_name} requires '{name}{required}' but {installed} is installed")

            wanted = missing_packages + [(name, required) for name, required, _ in version_mismatches]
            if install_command:
                lines.append(f"Install with: {install_command}")
            elif wanted:
                quoted = " ".join(f'"{_requirement(name, spec)}"' for name, spec in wanted)
                lines.append(f"Install with: pip install --upgrade {quoted}")
            message = "\n".join(lines)

        super().__init__(message)
        self.component_name = component_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
        self.original_import_error = original_import_error
