"""
Configuration file paths and constants for metadata-gen.

This module provides the ConfigPaths dataclass containing default paths
and constants used throughout the configuration system.
"""

from dataclasses import dataclass
from pathlib import Path

_SCHEMA_DIR = Path(__file__).resolve().parent / "schema"


@dataclass
class ConfigPaths:
    """Configuration file paths and constants."""

    DEFAULT_CONFIG_FILE: str = "metadatagen.config.json"
    SCHEMA_DIR: str = str(_SCHEMA_DIR)
    ENV_FILE: str = ".env"
    DEFAULT_CONFIG_SCHEMA: str = "config_schema.json"

    @property
    def schema_path(self) -> Path:
        return Path(self.SCHEMA_DIR) / self.DEFAULT_CONFIG_SCHEMA
