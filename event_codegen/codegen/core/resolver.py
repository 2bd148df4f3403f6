"""
Extends-chain resolution.

Follows ``extends`` references up to the root schema and folds the chain
into one ResolvedSchema. Events are merged with an ordered upsert keyed by
event name: an overriding definition replaces the inherited one in place,
new events are appended.
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from ...logging_config import get_logger
from ...utils import resolve_relative
from .errors import ConfigNotFoundError, CyclicExtendsError, ExtendsTargetNotFoundError
from .loader import SchemaSource, coerce_document, load_schema_document
from .schema import EventDef, ResolvedSchema, SchemaDocument
from .validator import validate_document, validate_resolved

logger = get_logger(__name__)

DocumentLoader = Callable[[str], SchemaDocument]


def collect_chain(
    document: SchemaDocument,
    base_path: Optional[Union[str, Path]] = None,
    loader: DocumentLoader = load_schema_document,
) -> List[SchemaDocument]:
    """
    Collect a document and all of its ancestors.

    Every level is validated as it is loaded.

    Args:
        document: The most specific (leaf) document
        base_path: Directory or file that in-memory documents resolve
            ``extends`` against (defaults to the working directory)
        loader: Callable that loads a document from an absolute location

    Returns:
        Documents ordered from the root ancestor down to the leaf

    Raises:
        ExtendsTargetNotFoundError: If a referenced parent does not exist
        CyclicExtendsError: If the chain refers back to a document in it
    """
    validate_document(document)

    chain = [document]
    visited = [document.source or "<in-memory schema>"]
    current = document

    while current.extends:
        origin = current.source or (str(base_path) if base_path else None)
        target = resolve_relative(current.extends, origin)

        if target in visited:
            raise CyclicExtendsError(visited + [target])

        logger.debug("Schema %s extends %s", visited[-1], target)
        try:
            parent = loader(target)
        except ConfigNotFoundError as e:
            logger.error("Extended schema not found: %s", target)
            raise ExtendsTargetNotFoundError(
                f"Extended schema not found: {target} (referenced from {visited[-1]})"
            ) from e

        validate_document(parent)
        chain.append(parent)
        visited.append(target)
        current = parent

    chain.reverse()
    return chain


def merge_events(chain: List[SchemaDocument]) -> List[EventDef]:
    """Fold event lists from root to leaf with an ordered upsert by name."""
    merged: Dict[str, EventDef] = {}

    for document in chain:
        for event in document.events or []:
            if event.name in merged:
                logger.debug("Event %r overridden by %s", event.name, document.source)
            # Assigning to an existing key keeps its position
            merged[event.name] = event

    return list(merged.values())


def merge_endpoint(chain: List[SchemaDocument]) -> str:
    """The most specific non-empty endpoint wins."""
    for document in reversed(chain):
        if document.endpoint:
            return document.endpoint
    return ""


def resolve_schema(
    schema: SchemaSource,
    base_path: Optional[Union[str, Path]] = None,
    loader: DocumentLoader = load_schema_document,
) -> ResolvedSchema:
    """
    Load (if needed), resolve and validate a schema.

    Args:
        schema: Path, URL, mapping or SchemaDocument
        base_path: Base for resolving ``extends`` of in-memory documents
        loader: Callable used to load parent documents

    Returns:
        Validated ResolvedSchema
    """
    document = coerce_document(schema)
    chain = collect_chain(document, base_path=base_path, loader=loader)

    resolved = ResolvedSchema(
        endpoint=merge_endpoint(chain),
        events=tuple(merge_events(chain)),
    )
    validate_resolved(resolved)

    logger.info(
        "Resolved schema with %d event(s) from %d document(s), endpoint %s",
        len(resolved.events),
        len(chain),
        resolved.endpoint,
    )
    return resolved
