"""
Structural validation of schema documents.

Checks presence of required fields per document level and the integrity
of the resolved schema. Semantics of payload values are not checked.
"""

from typing import Dict

from ...logging_config import get_logger
from .errors import (
    IdentifierCollisionError,
    MissingEndpointError,
    MissingEventNameError,
    MissingEventPayloadError,
    MissingEventsError,
    SchemaValidationError,
)
from .naming import to_pascal_case
from .schema import ResolvedSchema, SchemaDocument

logger = get_logger(__name__)


def _describe(document: SchemaDocument) -> str:
    return document.source or "<in-memory schema>"


def validate_document(document: SchemaDocument) -> None:
    """
    Validate a single, unresolved document level.

    The endpoint is not checked here because it may be inherited.

    Raises:
        MissingEventsError: If ``events`` is absent or not a list
        MissingEventNameError: If an event has an empty name
        MissingEventPayloadError: If an event payload is absent or empty
    """
    where = _describe(document)

    if document.events is None:
        logger.error("Schema %s has no events list", where)
        raise MissingEventsError(f'{where}: missing required "events" array')

    for index, event in enumerate(document.events):
        if not event.name:
            logger.error("Event #%d in %s has no name", index, where)
            raise MissingEventNameError(
                f'{where}: event #{index} missing required "name" field'
            )
        if not event.payload:
            logger.error("Event %r in %s has no payload", event.name, where)
            raise MissingEventPayloadError(
                f'{where}: event "{event.name}" missing required non-empty "payload" object'
            )


def validate_resolved(schema: ResolvedSchema) -> None:
    """
    Validate a schema after extends resolution.

    Raises:
        MissingEndpointError: If no level supplied a non-empty endpoint
        IdentifierCollisionError: If two wire names share a generated identifier
    """
    if not schema.endpoint:
        logger.error("Resolved schema has no endpoint")
        raise MissingEndpointError('Schema missing required "endpoint" field')

    seen: Dict[str, str] = {}
    for event in schema.events:
        identifier = to_pascal_case(event.name)
        if not identifier:
            raise SchemaValidationError(
                f'Event name "{event.name}" does not contain a usable identifier'
            )
        other = seen.get(identifier)
        if other is not None and other != event.name:
            raise IdentifierCollisionError(
                f'Events "{other}" and "{event.name}" both generate identifier "{identifier}"'
            )
        seen[identifier] = event.name
