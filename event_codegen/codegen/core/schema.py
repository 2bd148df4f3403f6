"""
Core schema representation for event code generation.

Converts loosely-typed ``events.json`` content into a normalized internal
format that both renderers work with consistently.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from enum import Enum

from .errors import InvalidSchemaSyntaxError, UnknownFieldTypeError


class FieldType(Enum):
    """Closed set of payload field types shared by every target."""

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER_LIST = "number[]"
    STRING_LIST = "string[]"
    OBJECT = "object"

    @classmethod
    def from_tag(cls, tag: Any) -> "FieldType":
        """
        Convert a schema type tag to a FieldType.

        Args:
            tag: Raw ``type`` value from a payload field

        Returns:
            Matching FieldType

        Raises:
            UnknownFieldTypeError: If the tag is not one of the supported types
        """
        if isinstance(tag, str):
            normalized = FIELD_TYPE_ALIASES.get(tag, tag)
            for member in cls:
                if member.value == normalized:
                    return member

        known = ", ".join(member.value for member in cls)
        raise UnknownFieldTypeError(
            f"Unknown field type {tag!r} (expected one of: {known})"
        )


# Alternate spellings accepted for list types
FIELD_TYPE_ALIASES = {
    "number-list": "number[]",
    "string-list": "string[]",
}


@dataclass(frozen=True)
class FieldDef:
    """A single payload field. Its name is the wire key."""

    name: str
    type: FieldType
    description: str = ""
    enum_values: Tuple[str, ...] = ()

    @property
    def has_enum(self) -> bool:
        """Enum values only constrain string fields."""
        return self.type == FieldType.STRING and bool(self.enum_values)


@dataclass(frozen=True)
class EventDef:
    """A single event definition."""

    name: str
    description: str = ""
    payload: Optional[Dict[str, FieldDef]] = None

    @property
    def fields(self) -> List[FieldDef]:
        """Payload fields in declared order."""
        return list((self.payload or {}).values())


@dataclass
class SchemaDocument:
    """Raw, unresolved schema document as read from one location."""

    endpoint: Optional[str] = None
    events: Optional[List[EventDef]] = None
    extends: Optional[str] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class ResolvedSchema:
    """Schema after following the extends chain."""

    endpoint: str
    events: Tuple[EventDef, ...] = ()

    @property
    def event_names(self) -> List[str]:
        return [event.name for event in self.events]

    def get_event(self, name: str) -> Optional[EventDef]:
        """Get event by wire name."""
        for event in self.events:
            if event.name == name:
                return event
        return None


@dataclass(frozen=True)
class GeneratedArtifact:
    """One rendered output file."""

    output_name: str
    content: str

    def write_to(self, directory: Union[str, Path]) -> Path:
        """Write the artifact into a directory and return the file path."""
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / self.output_name
        path.write_text(self.content, encoding="utf-8")
        return path


def parse_field(name: str, data: Any, event_name: str = "") -> FieldDef:
    """Convert one raw payload entry into a FieldDef."""
    where = f"field '{name}' of event '{event_name}'"

    if not isinstance(data, Mapping):
        raise InvalidSchemaSyntaxError(f"{where} must be an object")

    if "type" not in data:
        raise UnknownFieldTypeError(f"{where} has no type")

    try:
        field_type = FieldType.from_tag(data["type"])
    except UnknownFieldTypeError as e:
        raise UnknownFieldTypeError(f"{where}: {e}") from e

    enum_values = data.get("enum") or []
    if not isinstance(enum_values, list) or not all(
        isinstance(value, str) for value in enum_values
    ):
        raise InvalidSchemaSyntaxError(f"{where}: enum must be a list of strings")

    description = data.get("description") or ""
    if not isinstance(description, str):
        raise InvalidSchemaSyntaxError(f"{where}: description must be a string")

    return FieldDef(
        name=name,
        type=field_type,
        description=description,
        enum_values=tuple(enum_values),
    )


def parse_event(data: Any) -> EventDef:
    """
    Convert one raw event entry into an EventDef.

    Presence of ``name`` and ``payload`` is checked later by the validator,
    so absent values are kept as empty/None here.
    """
    if not isinstance(data, Mapping):
        raise InvalidSchemaSyntaxError("Event definitions must be objects")

    name = data.get("name")
    name = name if isinstance(name, str) else ""

    description = data.get("description") or ""
    if not isinstance(description, str):
        raise InvalidSchemaSyntaxError(f"Event '{name}': description must be a string")

    raw_payload = data.get("payload")
    payload = None
    if isinstance(raw_payload, Mapping):
        payload = {
            str(field_name): parse_field(str(field_name), field_data, name)
            for field_name, field_data in raw_payload.items()
        }

    return EventDef(name=name, description=description, payload=payload)


def parse_schema_document(
    data: Any, source: Optional[str] = None
) -> SchemaDocument:
    """
    Build a SchemaDocument from in-memory data.

    Args:
        data: Parsed JSON content (must be a mapping)
        source: Location the data was read from, if any

    Returns:
        SchemaDocument with strictly typed fields
    """
    if isinstance(data, SchemaDocument):
        return data

    if not isinstance(data, Mapping):
        where = f" in {source}" if source else ""
        raise InvalidSchemaSyntaxError(f"Schema{where} must be a JSON object")

    endpoint = data.get("endpoint")
    endpoint = endpoint if isinstance(endpoint, str) else None

    extends = data.get("extends")
    if extends is not None and not isinstance(extends, str):
        raise InvalidSchemaSyntaxError("'extends' must be a string")

    raw_events = data.get("events")
    events = None
    if isinstance(raw_events, list):
        events = [parse_event(item) for item in raw_events]

    return SchemaDocument(
        endpoint=endpoint,
        events=events,
        extends=extends or None,
        source=source,
    )
