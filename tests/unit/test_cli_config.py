#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for CLI configuration loading and argument parsing."""

import argparse
import json

import pytest

from mdgrid.cli.builder import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_IMAGE_NOT_FOUND,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
)
from mdgrid.cli.config import (
    apply_config_defaults,
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    split_image_section,
)
from mdgrid.exceptions import (
    DependencyError,
    FileNotFoundError,
    ImageReferenceNotFoundError,
    OutputWriteError,
    ParsingError,
    ValidationError,
)


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Tests for reading each supported format."""

    def test_toml(self, temp_dir):
        """Test a dedicated TOML file."""
        path = temp_dir / ".mdgrid.toml"
        path.write_text('standalone = true\n\n[image]\nsearch_radius = 3\n', encoding="utf-8")

        assert load_config_file(path) == {"standalone": True, "image": {"search_radius": 3}}

    def test_yaml(self, temp_dir):
        """Test a YAML file."""
        path = temp_dir / ".mdgrid.yaml"
        path.write_text("attachment_base: /files\nimage:\n  size_keywords: [tiny, huge]\n", encoding="utf-8")

        assert load_config_file(path) == {"attachment_base": "/files", "image": {"size_keywords": ["tiny", "huge"]}}

    def test_empty_yaml(self, temp_dir):
        """Test that an empty YAML file is an empty config."""
        path = temp_dir / ".mdgrid.yml"
        path.write_text("", encoding="utf-8")

        assert load_config_file(path) == {}

    def test_json(self, temp_dir):
        """Test a JSON file."""
        path = temp_dir / ".mdgrid.json"
        path.write_text(json.dumps({"title": "Notes"}), encoding="utf-8")

        assert load_config_file(path) == {"title": "Notes"}

    def test_pyproject_section(self, temp_dir):
        """Test the [tool.mdgrid] table."""
        path = temp_dir / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.mdgrid]\ninvisible = true\n', encoding="utf-8")

        assert load_config_file(path) == {"invisible": True}

    @pytest.mark.parametrize(
        "name, content",
        [
            ("bad.toml", "standalone = = true"),
            ("bad.json", "{not json"),
            ("bad.yaml", "a: [unclosed"),
            ("list.json", "[1, 2]"),
            ("config.ini", "[x]"),
        ],
    )
    def test_invalid_files(self, temp_dir, name, content):
        """Test that unreadable files raise ArgumentTypeError."""
        path = temp_dir / name
        path.write_text(content, encoding="utf-8")

        with pytest.raises(argparse.ArgumentTypeError):
            load_config_file(path)

    def test_missing_file(self, temp_dir):
        """Test that a missing file raises ArgumentTypeError."""
        with pytest.raises(argparse.ArgumentTypeError):
            load_config_file(temp_dir / "nope.toml")


@pytest.mark.unit
@pytest.mark.cli
class TestDiscovery:
    """Tests for config discovery."""

    def test_find_in_parent_directory(self, temp_dir):
        """Test that discovery walks up from a nested directory."""
        config = temp_dir / ".mdgrid.toml"
        config.write_text("standalone = true\n", encoding="utf-8")
        nested = temp_dir / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_in_parents(nested) == config.resolve()

    def test_pyproject_without_section_is_skipped(self, temp_dir):
        """Test that unrelated pyproject files are not used."""
        (temp_dir / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        nested = temp_dir / "sub"
        nested.mkdir()
        (nested / "pyproject.toml").write_text("[tool.mdgrid]\nstandalone = true\n", encoding="utf-8")

        assert find_config_in_parents(nested) == (nested / "pyproject.toml").resolve()
        assert find_config_in_parents(temp_dir) != (temp_dir / "pyproject.toml").resolve()

    def test_environment_variable_wins(self, isolated_config, monkeypatch):
        """Test MDGRID_CONFIG."""
        (isolated_config / ".mdgrid.toml").write_text("", encoding="utf-8")
        monkeypatch.setenv("MDGRID_CONFIG", "/somewhere/else.toml")

        assert str(discover_config_file()) == "/somewhere/else.toml"

    def test_home_directory_fallback(self, isolated_config, monkeypatch):
        """Test that the home directory is checked last."""
        work = isolated_config / "work"
        work.mkdir()
        monkeypatch.chdir(work)
        home_config = isolated_config / "home" / ".mdgrid.json"
        home_config.write_text("{}", encoding="utf-8")

        assert discover_config_file() == home_config


@pytest.mark.unit
@pytest.mark.cli
class TestParserDefaults:
    """Tests for applying config values to argparse."""

    def test_split_image_section(self):
        """Test separating flat defaults from the image table."""
        flat, image = split_image_section({"attachment-base": "/f", "image": {"search_radius": 1}})

        assert flat == {"attachment_base": "/f"}
        assert image == {"search_radius": 1}

    def test_image_section_must_be_a_table(self):
        """Test that a scalar image section is rejected."""
        with pytest.raises(argparse.ArgumentTypeError):
            split_image_section({"image": 3})

    def test_defaults_reach_subcommands(self):
        """Test that config values become subcommand defaults."""
        parser = create_parser()
        apply_config_defaults(parser, {"standalone": True, "title": "Notes", "log_level": "DEBUG", "bogus": 1})

        args = parser.parse_args(["render", "in.md"])

        assert args.standalone is True
        assert args.title == "Notes"
        assert args.log_level == "DEBUG"
        assert not hasattr(args, "bogus")

    def test_explicit_flags_override_config(self):
        """Test that command-line values win over config values."""
        parser = create_parser()
        apply_config_defaults(parser, {"title": "Notes"})

        assert parser.parse_args(["render", "in.md", "--title", "Other"]).title == "Other"

    def test_common_options_after_subcommand(self):
        """Test logging and config flags placed after the subcommand."""
        args = create_parser().parse_args(
            ["render", "in.md", "--log-level", "debug", "--trace", "--no-config", "--log-file", "x.log"]
        )

        assert args.log_level == "DEBUG"
        assert args.trace is True
        assert args.no_config is True
        assert args.log_file == "x.log"

    def test_common_options_before_subcommand_survive(self):
        """Test that subcommands do not reset flags given before them."""
        args = create_parser().parse_args(["--log-level", "INFO", "--rich", "template", "--columns", "2"])

        assert args.log_level == "INFO"
        assert args.rich is True

    def test_config_log_level_yields_to_explicit_flag(self):
        """Test that a configured log level does not override the command line."""
        parser = create_parser()
        apply_config_defaults(parser, {"log_level": "DEBUG"})

        image_args = ["image", "f.md", "--line", "1", "--clear"]

        assert parser.parse_args(["--log-level", "ERROR", *image_args]).log_level == "ERROR"
        assert parser.parse_args(image_args).log_level == "DEBUG"

    def test_template_requires_a_shape(self):
        """Test that template needs --columns or --preset."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["template"])

    def test_image_rejects_non_positive_line(self):
        """Test that line numbers are 1-based."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["image", "f.md", "--line", "0", "--clear"])


@pytest.mark.unit
@pytest.mark.cli
class TestExitCodes:
    """Tests for exception to exit code mapping."""

    @pytest.mark.parametrize(
        "error, code",
        [
            (DependencyError("markdown", [("mistune", "")]), EXIT_DEPENDENCY_ERROR),
            (ImportError("x"), EXIT_DEPENDENCY_ERROR),
            (ValidationError("bad"), EXIT_VALIDATION_ERROR),
            (FileNotFoundError("a.md"), EXIT_FILE_ERROR),
            (ImageReferenceNotFoundError(3), EXIT_IMAGE_NOT_FOUND),
            (ParsingError("bad"), EXIT_PARSING_ERROR),
            (OutputWriteError("out.html"), EXIT_RENDERING_ERROR),
            (RuntimeError("x"), EXIT_ERROR),
        ],
    )
    def test_mapping(self, error, code):
        """Test each exception family."""
        assert get_exit_code_for_exception(error) == code
