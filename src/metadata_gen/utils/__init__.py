"""
Utilities package for metadata-gen.

This package contains configuration loading, logging setup and the
document file reader.
"""

from .config import ConfigManager, ConfigPaths

__all__ = [
    "ConfigManager",
    "ConfigPaths",
]
