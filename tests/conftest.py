"""Pytest configuration and shared fixtures for the mdgrid test suite.

This module provides shared fixtures, test configuration, and sample grid
blocks that are used across the entire test suite.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings
from rich.logging import RichHandler
from utils import TWO_BY_ONE_BLOCK, FakeMarkdownRenderer

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = Path(tempfile.mkdtemp(prefix="mdgrid_test_"))
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def two_by_one_block() -> str:
    """A 2x1 grid block with cells A1 and B1."""
    return TWO_BY_ONE_BLOCK


@pytest.fixture
def fake_markdown() -> FakeMarkdownRenderer:
    """A Markdown renderer double."""
    return FakeMarkdownRenderer()


@pytest.fixture
def isolated_config(monkeypatch, temp_dir) -> Path:
    """Run in an empty directory with no config discovery from the environment or home."""
    monkeypatch.chdir(temp_dir)
    monkeypatch.delenv("MDGRID_CONFIG", raising=False)
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return temp_dir


@pytest.fixture(autouse=True)
def reset_cli_logging() -> Generator[None, None, None]:
    """Remove console and file handlers installed by CLI runs."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler) or isinstance(handler, RichHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(logging.WARNING)
    logging.getLogger("mdgrid").setLevel(logging.NOTSET)
