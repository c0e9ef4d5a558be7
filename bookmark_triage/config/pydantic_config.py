"""
Pydantic-based configuration system for Bookmark Triage.

Settings cover the parse strategy, the boundary sentinel pair and the
export file name. They load from a TOML or JSON file, then environment
variables, then command-line overrides.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..core.boundary_detector import DEFAULT_SENTINEL_FOLDER, DEFAULT_SENTINEL_URL
from ..utils.error_handler import ConfigurationError

ENV_OVERRIDES = {
    "BOOKMARK_TRIAGE_SENTINEL_URL": ("boundary", "sentinel_url"),
    "BOOKMARK_TRIAGE_SENTINEL_FOLDER": ("boundary", "sentinel_folder"),
    "BOOKMARK_TRIAGE_PARSER_STRATEGY": ("parser", "strategy"),
}


class ParserConfig(BaseModel):
    """Bookmark HTML parsing settings."""

    strategy: Literal["tree", "scan"] = Field(
        default="tree",
        description="Parse strategy: BeautifulSoup tree walk or token scan",
    )


class BoundaryConfig(BaseModel):
    """Sentinel pair marking the last keeper bookmark."""

    sentinel_url: str = Field(
        default=DEFAULT_SENTINEL_URL,
        description="Exact URL of the boundary marker bookmark",
    )
    sentinel_folder: str = Field(
        default=DEFAULT_SENTINEL_FOLDER,
        min_length=1,
        description="Folder name (any path segment, case-insensitive) holding the marker",
    )

    @field_validator("sentinel_url")
    @classmethod
    def validate_sentinel_url(cls, v):
        """Require an http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Sentinel URL must start with http:// or https://")
        return v

    @field_validator("sentinel_folder")
    @classmethod
    def validate_sentinel_folder(cls, v):
        """A folder name is a single path segment."""
        v = v.strip()
        if not v:
            raise ValueError("Sentinel folder must not be blank")
        if "/" in v:
            raise ValueError("Sentinel folder must be a single folder name without '/'")
        return v


class ExportConfig(BaseModel):
    """Chrome export settings."""

    filename: str = Field(
        default="bookmarks.html",
        description="Default file name for exported bookmarks",
    )

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v):
        if not v.lower().endswith((".html", ".htm")):
            raise ValueError("Export file name must end with .html")
        return v


class TriageConfig(BaseModel):
    """Main configuration model."""

    parser: ParserConfig = Field(default_factory=ParserConfig)
    boundary: BoundaryConfig = Field(default_factory=BoundaryConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)


class ConfigurationManager:
    """Manages loading and validation of configuration from multiple sources."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Optional path to configuration file (TOML or JSON)
        """
        self._config: Optional[TriageConfig] = None
        self._load_configuration(Path(config_path) if config_path else None)

    def _get_default_config_paths(self) -> list[Path]:
        """Get list of default configuration file paths to try."""
        cwd = Path.cwd()
        return [
            cwd / "bookmark_triage.toml",
            cwd / "bookmark_triage.json",
            Path.home() / ".config" / "bookmark_triage" / "config.toml",
        ]

    def _load_configuration(self, config_path: Optional[Path] = None) -> None:
        """Load configuration from file or use defaults."""
        config_data: Dict[str, Any] = {}

        if config_path:
            config_data = self._load_config_file(config_path)
        else:
            for path in self._get_default_config_paths():
                if path.exists():
                    config_data = self._load_config_file(path)
                    break

        self._apply_env_overrides(config_data)

        try:
            self._config = TriageConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(format_config_error(e)) from e

    def _load_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Load configuration from TOML or JSON file."""
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            if config_path.suffix.lower() == ".toml":
                return toml.load(config_path)
            elif config_path.suffix.lower() == ".json":
                with open(config_path, "r", encoding="utf-8") as f:
                    return json.load(f)
        except (toml.TomlDecodeError, json.JSONDecodeError, OSError) as e:
            raise ConfigurationError(f"Failed to load configuration from {config_path}: {e}") from e

        raise ConfigurationError(f"Unsupported configuration file format: {config_path.suffix}")

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> None:
        """Apply environment variable overrides in place."""
        for env_var, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_var)
            if value:
                config_data.setdefault(section, {})[key] = value

    def update_from_cli_args(self, args: Dict[str, Any]) -> None:
        """Update configuration from command-line arguments."""
        if not self._config:
            raise RuntimeError("Configuration not loaded")

        config_dict = self._config.model_dump()

        if args.get("strategy"):
            config_dict["parser"]["strategy"] = args["strategy"]
        if args.get("sentinel_url"):
            config_dict["boundary"]["sentinel_url"] = args["sentinel_url"]
        if args.get("sentinel_folder"):
            config_dict["boundary"]["sentinel_folder"] = args["sentinel_folder"]

        try:
            self._config = TriageConfig(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(format_config_error(e)) from e

    @property
    def config(self) -> TriageConfig:
        """Get the current configuration."""
        if not self._config:
            raise RuntimeError("Configuration not loaded")
        return self._config

    @staticmethod
    def create_sample_config(output_path: Path, format: str = "toml") -> None:
        """Create a sample configuration file."""
        sample_config = TriageConfig().model_dump()

        if format.lower() == "toml":
            with open(output_path, "w", encoding="utf-8") as f:
                toml.dump(sample_config, f)
        elif format.lower() == "json":
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(sample_config, f, indent=2)
        else:
            raise ValueError(f"Unsupported format: {format}")


def format_config_error(error: Exception) -> str:
    """
    Format a configuration error into a readable multi-line message.

    Args:
        error: Exception that occurred during configuration

    Returns:
        Formatted error message
    """
    if isinstance(error, ValidationError):
        lines = ["Configuration validation failed:"]
        for detail in error.errors():
            location = " -> ".join(str(part) for part in detail["loc"]) or "configuration"
            lines.append(
                f"  {location}: {detail.get('msg', 'Invalid value')} "
                f"(got: {detail.get('input', 'N/A')})"
            )
        return "\n".join(lines)

    return f"Configuration error: {error}"
