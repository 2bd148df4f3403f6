"""
Event Code Generation Module

Generates the C++ emission header and the TypeScript consumption module
from one event schema.
"""

from .core import (
    SchemaError,
    ConfigNotFoundError,
    InvalidSchemaSyntaxError,
    UnknownFieldTypeError,
    ExtendsTargetNotFoundError,
    CyclicExtendsError,
    SchemaValidationError,
    MissingEndpointError,
    MissingEventsError,
    MissingEventNameError,
    MissingEventPayloadError,
    IdentifierCollisionError,
    FieldType,
    FieldDef,
    EventDef,
    SchemaDocument,
    ResolvedSchema,
    GeneratedArtifact,
    CodeGenerator,
    GeneratorError,
    GeneratorConfig,
    ConfigManager,
    ConfigError,
    TemplateError,
    load_config,
    load_schema_document,
    resolve_schema,
    to_pascal_case,
    to_type_name,
)
from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_languages,
)
from .types import TypeMapping, map_type
from .event_generator import EventGenerator, generate

__version__ = "0.1.0"

__all__ = [
    "EventGenerator",
    "generate",
    "map_type",
    "TypeMapping",
    "GeneratorRegistry",
    "RegistryError",
    "get_generator",
    "get_registry",
    "list_supported_languages",
    "SchemaError",
    "ConfigNotFoundError",
    "InvalidSchemaSyntaxError",
    "UnknownFieldTypeError",
    "ExtendsTargetNotFoundError",
    "CyclicExtendsError",
    "SchemaValidationError",
    "MissingEndpointError",
    "MissingEventsError",
    "MissingEventNameError",
    "MissingEventPayloadError",
    "IdentifierCollisionError",
    "FieldType",
    "FieldDef",
    "EventDef",
    "SchemaDocument",
    "ResolvedSchema",
    "GeneratedArtifact",
    "CodeGenerator",
    "GeneratorError",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "TemplateError",
    "load_config",
    "load_schema_document",
    "resolve_schema",
    "to_pascal_case",
    "to_type_name",
]
