"""Utility functions for loading schema documents.

This module provides functions for loading JSON from files and URLs with
proper error handling and validation.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urljoin, urlparse

import requests

from .codegen.core.errors import ConfigNotFoundError, InvalidSchemaSyntaxError
from .logging_config import get_logger

logger = get_logger(__name__)


def is_url(location: str | Path) -> bool:
    """Return True if the location is an http(s) URL."""
    if isinstance(location, Path):
        return False
    parsed = urlparse(str(location))
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def load_json_from_file(file_path: str | Path) -> Any:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Parsed JSON data.

    Raises:
        ConfigNotFoundError: If the file doesn't exist or cannot be read.
        InvalidSchemaSyntaxError: If the content is not valid JSON.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load JSON from file: {file_path}")

    if not file_path.is_file():
        logger.error(f"File not found: {file_path}")
        raise ConfigNotFoundError(f"Schema file not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"Loaded schema from {file_path}")
        return data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise InvalidSchemaSyntaxError(f"Invalid JSON in file {file_path}: {e}") from e
    except UnicodeDecodeError as e:
        logger.error(f"File {file_path} is not valid UTF-8: {e}")
        raise InvalidSchemaSyntaxError(f"File {file_path} is not valid UTF-8: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise ConfigNotFoundError(f"Error reading file {file_path}: {e}") from e


def load_json_from_url(url: str, timeout: int = 30) -> Any:
    """Load JSON data from a URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Parsed JSON data.

    Raises:
        ConfigNotFoundError: If the request fails or the URL does not resolve.
        InvalidSchemaSyntaxError: If the response isn't valid JSON.
    """
    logger.debug(f"Attempting to load JSON from URL: {url}")

    if not is_url(url):
        logger.error(f"Invalid URL format: {url}")
        raise ConfigNotFoundError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "application/json" not in content_type and not url.endswith(".json"):
            logger.warning(f"URL {url} does not have JSON content type: {content_type}")

        data = response.json()
        logger.info(f"Loaded schema from {url}")
        return data

    except requests.exceptions.JSONDecodeError as e:
        logger.error(f"Invalid JSON response from URL {url}: {e}")
        raise InvalidSchemaSyntaxError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise ConfigNotFoundError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise ConfigNotFoundError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise ConfigNotFoundError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}", exc_info=True)
        raise ConfigNotFoundError(f"Request error for URL {url}: {e}") from e


def load_json(location: str | Path, timeout: int = 30) -> Any:
    """Load JSON data from either a file path or a URL."""
    if is_url(location):
        return load_json_from_url(str(location), timeout)
    return load_json_from_file(location)


def resolve_relative(reference: str, source: str | Path | None) -> str:
    """Resolve an ``extends`` reference against the location that declared it.

    Args:
        reference: Relative (or absolute) path/URL from an ``extends`` field.
        source: Location of the referencing document, or a directory for
            in-memory documents. None means the current working directory.

    Returns:
        Absolute path or URL of the referenced document.
    """
    if is_url(reference):
        return reference

    if source is not None and is_url(source):
        return urljoin(str(source), reference)

    if source is None:
        base_dir = Path.cwd()
    else:
        source_path = Path(source)
        base_dir = source_path if source_path.is_dir() else source_path.parent

    return str((base_dir / reference).resolve())
