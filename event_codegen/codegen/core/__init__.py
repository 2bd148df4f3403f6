"""
Core code generation components.

Provides the schema model, loading/resolution/validation pipeline and
base classes used by all target renderers.
"""

from .errors import (
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
)
from .schema import (
    FieldType,
    FieldDef,
    EventDef,
    SchemaDocument,
    ResolvedSchema,
    GeneratedArtifact,
    parse_schema_document,
)
from .loader import load_schema_document
from .resolver import resolve_schema
from .validator import validate_document, validate_resolved
from .naming import NameSanitizer, to_pascal_case, to_type_name
from .generator import CodeGenerator, GeneratorError
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Error taxonomy
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
    # Schema model
    "FieldType",
    "FieldDef",
    "EventDef",
    "SchemaDocument",
    "ResolvedSchema",
    "GeneratedArtifact",
    "parse_schema_document",
    # Pipeline
    "load_schema_document",
    "resolve_schema",
    "validate_document",
    "validate_resolved",
    # Naming utilities
    "NameSanitizer",
    "to_pascal_case",
    "to_type_name",
    # Base renderer interface
    "CodeGenerator",
    "GeneratorError",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
