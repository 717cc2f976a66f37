"""Utility functions for loading schema sources and writing generated files.

This module provides functions for loading schema text from files, URLs and
standard input with proper error handling, plus writing generator output.
"""

import sys
from pathlib import Path
from typing import Iterable, TextIO
from urllib.parse import urlparse

import requests

from .codegen.core.generator import OutputFile
from .logging_config import get_logger

logger = get_logger(__name__)

SCHEMA_SUFFIX = ".type"


class SourceLoaderError(Exception):
    """Custom exception for schema source loading errors."""

    pass


def resolve_schema_path(file_path: str | Path) -> Path:
    """Resolve a schema path, appending the ``.type`` suffix when needed.

    The path is used as given when it exists or already ends in ``.type``.
    """
    path = Path(file_path)
    if path.exists() or path.suffix == SCHEMA_SUFFIX:
        return path
    return path.with_name(path.name + SCHEMA_SUFFIX)


def load_source_from_file(file_path: str | Path) -> tuple[str, str]:
    """Load schema text from a local file.

    Args:
        file_path: Path to the schema file, with or without ``.type``.

    Returns:
        Tuple of (source description, schema text).

    Raises:
        FileNotFoundError: If file doesn't exist.
        SourceLoaderError: If file cannot be read.
    """
    path = resolve_schema_path(file_path)
    logger.debug(f"Attempting to load schema from file: {path}")

    if not path.exists():
        logger.error(f"File not found: {path}")
        raise FileNotFoundError(f"File not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading file {path}: {e}", exc_info=True)
        raise SourceLoaderError(f"Error reading file {path}: {e}") from e

    logger.info(f"Successfully loaded schema from {path}")
    return f"📄 {path}", text


def load_source_from_url(url: str, timeout: int = 30) -> tuple[str, str]:
    """Load schema text from a URL.

    Args:
        url: URL to fetch the schema from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, schema text).

    Raises:
        SourceLoaderError: If URL is invalid or the request fails.
    """
    logger.debug(f"Attempting to load schema from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise SourceLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout:
        logger.error(f"Request timeout for URL: {url}")
        raise SourceLoaderError(f"Request timeout for URL: {url}")
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise SourceLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise SourceLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}", exc_info=True)
        raise SourceLoaderError(f"Request error for URL {url}: {e}") from e

    logger.info(f"Successfully loaded schema from {url}")
    return f"🌐 {url}", response.text


def load_source_from_stdin(stream: TextIO | None = None) -> tuple[str, str]:
    """Load schema text from standard input.

    Raises:
        SourceLoaderError: If nothing was read.
    """
    if stream is None:
        stream = sys.stdin
    text = stream.read()

    if not text.strip():
        logger.error("No schema provided on standard input")
        raise SourceLoaderError("No schema provided on standard input")

    return "📥 <stdin>", text


def load_source(
    file_path: str | Path | None = None,
    url: str | None = None,
    stdin: bool = False,
    timeout: int = 30,
) -> tuple[str, str]:
    """Load schema text from exactly one of a file, a URL or stdin.

    Args:
        file_path: Path to local schema file.
        url: URL to fetch the schema from.
        stdin: Read the schema from standard input.
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, schema text).

    Raises:
        SourceLoaderError: If not exactly one source is given, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    given = sum(1 for source in (file_path, url, stdin) if source)

    if given == 0:
        logger.error("No schema source provided")
        raise SourceLoaderError("Either a file, --url or --stdin must be provided")

    if given > 1:
        logger.error("Multiple schema sources provided")
        raise SourceLoaderError("Specify only one of a file, --url or --stdin")

    if file_path:
        return load_source_from_file(file_path)
    if url:
        return load_source_from_url(url, timeout)
    return load_source_from_stdin()


def write_output_files(
    files: Iterable[OutputFile], extension: str, output_dir: str | Path
) -> list[Path]:
    """Write generated files into ``output_dir``, creating it if needed.

    Returns:
        Paths of the written files, in order.
    """
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    written = []

    for output in files:
        path = directory / output.filename(extension)
        path.write_text(output.content + "\n", encoding="utf-8")
        logger.debug(f"Wrote {path}")
        written.append(path)

    return written
