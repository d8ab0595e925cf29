"""
metadata-gen CLI Package.

This package contains the command-line interface: extraction,
validation, keyword and meta tag output, notation conversion and HTML
escaping.
"""

from .cli import app, cli_main

__all__ = ["app", "cli_main"]
