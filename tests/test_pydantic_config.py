"""
Tests for Pydantic-based configuration system.

This module tests the pydantic_config module including:
- ParserConfig, BoundaryConfig and ExportConfig validation
- ConfigurationManager file loading, environment and CLI overrides
- Sample configuration creation
- format_config_error formatting
"""

import json

import pytest
import toml
from pydantic import ValidationError

from bookmark_triage.config.pydantic_config import (
    BoundaryConfig,
    ConfigurationManager,
    ExportConfig,
    ParserConfig,
    TriageConfig,
    format_config_error,
)
from bookmark_triage.core.boundary_detector import (
    DEFAULT_SENTINEL_FOLDER,
    DEFAULT_SENTINEL_URL,
)
from bookmark_triage.utils.error_handler import ConfigurationError


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep default config lookups and env overrides out of the tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in (
        "BOOKMARK_TRIAGE_SENTINEL_URL",
        "BOOKMARK_TRIAGE_SENTINEL_FOLDER",
        "BOOKMARK_TRIAGE_PARSER_STRATEGY",
    ):
        monkeypatch.delenv(name, raising=False)


# ============================================================================
# Model Tests
# ============================================================================


class TestParserConfig:
    """Tests for ParserConfig model."""

    def test_default_strategy(self):
        """Test the tree walk is the default."""
        assert ParserConfig().strategy == "tree"

    def test_scan_strategy(self):
        """Test the scan strategy is accepted."""
        assert ParserConfig(strategy="scan").strategy == "scan"

    def test_unknown_strategy_raises_error(self):
        """Test unknown strategies are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            ParserConfig(strategy="regex")

        assert "strategy" in str(exc_info.value)


class TestBoundaryConfig:
    """Tests for BoundaryConfig model."""

    def test_defaults(self):
        """Test the default sentinel pair."""
        config = BoundaryConfig()

        assert config.sentinel_url == DEFAULT_SENTINEL_URL
        assert config.sentinel_folder == DEFAULT_SENTINEL_FOLDER

    def test_folder_is_stripped(self):
        """Test surrounding whitespace is removed from the folder."""
        assert BoundaryConfig(sentinel_folder="  Done ").sentinel_folder == "Done"

    @pytest.mark.parametrize("url", ["ftp://example.com", "example.com", ""])
    def test_invalid_url_raises_error(self, url):
        """Test the sentinel URL must be http(s)."""
        with pytest.raises(ValidationError):
            BoundaryConfig(sentinel_url=url)

    @pytest.mark.parametrize("folder", ["", "   ", "Bookmarks Bar/Tools"])
    def test_invalid_folder_raises_error(self, folder):
        """Test the folder must be one non-blank segment."""
        with pytest.raises(ValidationError):
            BoundaryConfig(sentinel_folder=folder)


class TestExportConfig:
    """Tests for ExportConfig model."""

    def test_default_filename(self):
        assert ExportConfig().filename == "bookmarks.html"

    def test_htm_accepted(self):
        assert ExportConfig(filename="keepers.HTM").filename == "keepers.HTM"

    def test_other_extension_raises_error(self):
        with pytest.raises(ValidationError):
            ExportConfig(filename="keepers.json")


# ============================================================================
# ConfigurationManager Tests
# ============================================================================


class TestConfigurationManager:
    """Tests for ConfigurationManager."""

    def test_defaults_without_files(self):
        """Test defaults when no configuration file exists."""
        config = ConfigurationManager().config

        assert config == TriageConfig()

    def test_load_toml(self, tmp_path):
        """Test loading an explicit TOML file."""
        path = tmp_path / "custom.toml"
        path.write_text(
            '[parser]\nstrategy = "scan"\n\n'
            '[boundary]\nsentinel_url = "https://end.example.com/"\nsentinel_folder = "Done"\n'
        )

        config = ConfigurationManager(path).config

        assert config.parser.strategy == "scan"
        assert config.boundary.sentinel_url == "https://end.example.com/"
        assert config.boundary.sentinel_folder == "Done"
        assert config.export.filename == "bookmarks.html"

    def test_load_json(self, tmp_path):
        """Test loading an explicit JSON file."""
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"export": {"filename": "keepers.html"}}))

        assert ConfigurationManager(path).config.export.filename == "keepers.html"

    def test_default_path_discovered(self, tmp_path):
        """Test bookmark_triage.toml in the working directory is picked up."""
        (tmp_path / "bookmark_triage.toml").write_text('[parser]\nstrategy = "scan"\n')

        assert ConfigurationManager().config.parser.strategy == "scan"

    def test_missing_file_raises(self, tmp_path):
        """Test an explicit missing file is an error."""
        with pytest.raises(FileNotFoundError):
            ConfigurationManager(tmp_path / "nope.toml")

    def test_unsupported_format_raises(self, tmp_path):
        """Test unknown file suffixes are rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("parser: {}")

        with pytest.raises(ValueError, match="Unsupported"):
            ConfigurationManager(path)

    def test_malformed_file_raises(self, tmp_path):
        """Test a broken TOML file reports a load failure."""
        path = tmp_path / "broken.toml"
        path.write_text("[parser\nstrategy = ")

        with pytest.raises(ValueError, match="Failed to load"):
            ConfigurationManager(path)

    def test_invalid_values_raise_formatted_error(self, tmp_path):
        """Test validation errors are reported readably."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"boundary": {"sentinel_url": "nope"}}))

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationManager(path)

        message = str(exc_info.value)
        assert message.startswith("Configuration validation failed:")
        assert "boundary -> sentinel_url" in message

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        """Test environment variables win over the file."""
        path = tmp_path / "custom.toml"
        path.write_text('[boundary]\nsentinel_folder = "Done"\n')
        monkeypatch.setenv("BOOKMARK_TRIAGE_SENTINEL_FOLDER", "Finished")
        monkeypatch.setenv("BOOKMARK_TRIAGE_SENTINEL_URL", "https://env.example.com/")
        monkeypatch.setenv("BOOKMARK_TRIAGE_PARSER_STRATEGY", "scan")

        config = ConfigurationManager(path).config

        assert config.boundary.sentinel_folder == "Finished"
        assert config.boundary.sentinel_url == "https://env.example.com/"
        assert config.parser.strategy == "scan"

    def test_cli_overrides_environment(self, monkeypatch):
        """Test command-line values win over everything."""
        monkeypatch.setenv("BOOKMARK_TRIAGE_SENTINEL_FOLDER", "Finished")
        manager = ConfigurationManager()

        manager.update_from_cli_args(
            {"strategy": "scan", "sentinel_url": None, "sentinel_folder": "Cli"}
        )

        assert manager.config.boundary.sentinel_folder == "Cli"
        assert manager.config.boundary.sentinel_url == DEFAULT_SENTINEL_URL
        assert manager.config.parser.strategy == "scan"

    def test_invalid_cli_override_raises(self):
        """Test CLI values are validated too."""
        manager = ConfigurationManager()

        with pytest.raises(ValueError):
            manager.update_from_cli_args({"sentinel_folder": "a/b"})


class TestSampleConfig:
    """Tests for create_sample_config."""

    def test_toml_sample_loads(self, tmp_path):
        """Test the TOML sample round-trips to the defaults."""
        path = tmp_path / "sample.toml"

        ConfigurationManager.create_sample_config(path, "toml")

        assert toml.load(path)["boundary"]["sentinel_url"] == DEFAULT_SENTINEL_URL
        assert ConfigurationManager(path).config == TriageConfig()

    def test_json_sample_loads(self, tmp_path):
        """Test the JSON sample round-trips to the defaults."""
        path = tmp_path / "sample.json"

        ConfigurationManager.create_sample_config(path, "json")

        assert ConfigurationManager(path).config == TriageConfig()

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ValueError):
            ConfigurationManager.create_sample_config(tmp_path / "x.yaml", "yaml")


class TestFormatConfigError:
    """Tests for format_config_error."""

    def test_plain_exception(self):
        assert format_config_error(RuntimeError("boom")) == "Configuration error: boom"

    def test_validation_error(self):
        """Test each failing field gets a line."""
        try:
            TriageConfig(parser={"strategy": "bad"}, export={"filename": "x.txt"})
        except ValidationError as e:
            message = format_config_error(e)

        lines = message.split("\n")
        assert len(lines) == 3
        assert any(line.startswith("  parser -> strategy:") for line in lines)
        assert any("export -> filename" in line for line in lines)
