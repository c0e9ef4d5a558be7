"""Configuration models and loading."""

from .pydantic_config import (
    BoundaryConfig,
    ConfigurationManager,
    ExportConfig,
    ParserConfig,
    TriageConfig,
    format_config_error,
)

__all__ = [
    "BoundaryConfig",
    "ConfigurationManager",
    "ExportConfig",
    "ParserConfig",
    "TriageConfig",
    "format_config_error",
]
