"""
Schema loading.

Reads a schema document from a path or URL and converts it into a
SchemaDocument. In-memory documents skip the read step.
"""

from pathlib import Path
from typing import Any, Mapping, Union

from ...logging_config import get_logger
from ...utils import is_url, load_json
from .schema import SchemaDocument, parse_schema_document

logger = get_logger(__name__)

SchemaSource = Union[str, Path, Mapping[str, Any], SchemaDocument]


def canonical_location(location: Union[str, Path]) -> str:
    """Absolute path or URL used to identify a document in an extends chain."""
    if is_url(location):
        return str(location)
    return str(Path(location).resolve())


def load_schema_document(location: Union[str, Path]) -> SchemaDocument:
    """
    Read and parse a schema document.

    Args:
        location: Filesystem path or http(s) URL

    Returns:
        Parsed SchemaDocument with ``source`` set to the canonical location

    Raises:
        ConfigNotFoundError: If the location does not resolve
        InvalidSchemaSyntaxError: If the content is not a well-formed JSON object
    """
    source = canonical_location(location)
    logger.debug("Loading schema document from %s", source)
    data = load_json(source)
    return parse_schema_document(data, source=source)


def coerce_document(schema: SchemaSource) -> SchemaDocument:
    """Turn any accepted schema input into a SchemaDocument."""
    if isinstance(schema, SchemaDocument):
        return schema
    if isinstance(schema, Mapping):
        return parse_schema_document(schema)
    return load_schema_document(schema)
