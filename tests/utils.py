"""Test utilities for the mdgrid test suite.

Sample grid blocks and test doubles shared by unit and integration tests.
"""

from typing import Optional

TWO_BY_ONE_BLOCK = """=== start-grid: ID_1700000000000

grid-settings
columns: 2
rows: 1
show-borders: true

=== cell A1 ===
Left **bold**

=== cell B1 ===
Right

=== end-grid"""


def fenced(block: str) -> str:
    """Wrap a grid block in a code fence, as it appears in a document."""
    return f"```\n{block}\n```\n"


class FakeMarkdownRenderer:
    """Markdown renderer double that records calls and wraps text in a paragraph."""

    def __init__(self, fail_on: Optional[str] = None):
        self.calls: list[tuple[str, Optional[str]]] = []
        self.fail_on = fail_on

    def render(self, text: str, source_path: Optional[str] = None) -> str:
        self.calls.append((text, source_path))
        if self.fail_on is not None and self.fail_on in text:
            raise RuntimeError(f"cannot render {text!r}")
        return f"<p>{text}</p>"
