"""
metadata-gen: frontmatter metadata extraction and meta tag generation.
"""

__version__ = "0.1.0"

from .core import (
    FrontmatterExtractor,
    MetadataBundle,
    PipelineOptions,
    derive_keywords,
    escape_html,
    extract,
    extract_and_prepare_metadata,
    generate_meta_tags,
    unescape_html,
    validate,
)

__all__ = [
    "__version__",
    "FrontmatterExtractor",
    "MetadataBundle",
    "PipelineOptions",
    "derive_keywords",
    "escape_html",
    "extract",
    "extract_and_prepare_metadata",
    "generate_meta_tags",
    "unescape_html",
    "validate",
]
