"""Shared test fixtures and configuration for metadata-gen tests."""

import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from metadata_gen.core.enums import AttributeKind
from metadata_gen.core.metatags import MetaTagSpec

# Configure asyncio for pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


@pytest.fixture(autouse=True)
def reset_root_logging():
    """Restore root logger handlers changed by CLI or LoggingManager tests."""
    root_logger = logging.getLogger()
    package_logger = logging.getLogger("metadata_gen")
    handlers = list(root_logger.handlers)
    level = root_logger.level
    package_level = package_logger.level

    yield

    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    package_logger.setLevel(package_level)


@pytest.fixture
def temp_directory():
    """Provide a temporary directory for testing."""
    temp_dir = tempfile.mkdtemp()
    temp_path = Path(temp_dir)

    yield temp_path

    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def yaml_document():
    """A blog post with YAML frontmatter."""
    return """---
title: "My Post"
description: A sample post about <tags> & "quotes"
date: 2024-01-15
keywords: rust, metadata; web, rust
tags:
  - python
  - testing
author:
  name: Jane Doe
  email: jane@example.com
---
# Heading

Body text.
"""


@pytest.fixture
def toml_document():
    """A blog post with TOML frontmatter."""
    return """+++
title = "TOML Post"
description = "Written in TOML"
keywords = ["toml", "config"]
draft = false
weight = 3

[author]
name = "Jane Doe"
+++
TOML body.
"""


@pytest.fixture
def json_document():
    """A blog post with JSON frontmatter."""
    return """{
  "title": "JSON Post",
  "description": "Written in JSON",
  "keywords": ["json", "web"],
  "rating": 4.5
}
JSON body.
"""


@pytest.fixture
def two_entry_field_map():
    """Field map with a name tag followed by a property tag."""
    return [
        MetaTagSpec("description", "description", AttributeKind.NAME),
        MetaTagSpec("title", "og:title", AttributeKind.PROPERTY),
    ]


@pytest.fixture
def write_document(temp_directory):
    """Write text to a file in the temporary directory and return its path."""
    def _write(text: str, name: str = "post.md") -> Path:
        path = temp_directory / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
