"""
Document file reading.

Reads documents from disk and runs the metadata pipeline on them. The
async variants push the blocking read onto the default executor so the
core stays synchronous.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from ..core.pipeline import MetadataBundle, PipelineOptions, extract_and_prepare_metadata
from ..exceptions import DocumentReadError

logger = logging.getLogger(__name__)


def read_document(path: Union[str, Path]) -> str:
    """
    Read a document as UTF-8 text.

    Args:
        path: Path to the document

    Returns:
        File content

    Raises:
        DocumentReadError: If the file cannot be read or decoded
    """
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise DocumentReadError(f"Could not read file as UTF-8: {file_path}", str(file_path)) from e
    except OSError as e:
        raise DocumentReadError(f"Error reading file {file_path}: {e}", str(file_path)) from e

    logger.debug(f"Read {len(content)} characters from {file_path}")
    return content


def extract_metadata_from_file(
    path: Union[str, Path],
    options: Optional[PipelineOptions] = None
) -> MetadataBundle:
    """Read a document and run the pipeline on it.

    An empty or whitespace-only file yields an empty bundle.
    """
    content = read_document(path)
    if not content.strip():
        logger.debug(f"{path} is empty, returning empty bundle")
        return MetadataBundle(body=content)
    return extract_and_prepare_metadata(content, options)


async def async_read_document(path: Union[str, Path]) -> str:
    """Read a document without blocking the event loop."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, read_document, path)


async def async_extract_metadata_from_file(
    path: Union[str, Path],
    options: Optional[PipelineOptions] = None
) -> MetadataBundle:
    """
    Read a document asynchronously and run the pipeline on it.

    Args:
        path: Path to the document
        options: Pipeline settings (defaults when None)

    Returns:
        MetadataBundle; empty for an empty or whitespace-only file

    Raises:
        DocumentReadError: If the file cannot be read
        ExtractionError: If the frontmatter is malformed
        ValidationFailedError: If configured rules report violations
    """
    content = await async_read_document(path)
    if not content.strip():
        logger.debug(f"{path} is empty, returning empty bundle")
        return MetadataBundle(body=content)
    return extract_and_prepare_metadata(content, options)
