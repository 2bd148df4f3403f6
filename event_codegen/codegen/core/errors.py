"""
Exception taxonomy for schema loading, resolution and validation.

Every error raised before rendering derives from SchemaError so callers
can catch the whole family in one place.
"""


class SchemaError(Exception):
    """Base exception for event schema errors."""

    pass


class ConfigNotFoundError(SchemaError):
    """Raised when a schema location cannot be read."""

    pass


class InvalidSchemaSyntaxError(SchemaError):
    """Raised when schema content is not well-formed structured data."""

    pass


class UnknownFieldTypeError(InvalidSchemaSyntaxError):
    """Raised when a payload field declares an unrecognized type tag."""

    pass


class ExtendsTargetNotFoundError(SchemaError):
    """Raised when an ``extends`` reference points at a missing schema."""

    pass


class CyclicExtendsError(SchemaError):
    """Raised when an ``extends`` chain refers back to itself."""

    def __init__(self, chain):
        self.chain = list(chain)
        super().__init__("Cyclic extends chain: " + " -> ".join(self.chain))


class SchemaValidationError(SchemaError, ValueError):
    """Base exception for structural validation failures."""

    pass


class MissingEndpointError(SchemaValidationError):
    pass


class MissingEventsError(SchemaValidationError):
    pass


class MissingEventNameError(SchemaValidationError):
    pass


class MissingEventPayloadError(SchemaValidationError):
    pass


class IdentifierCollisionError(SchemaValidationError):
    """Raised when distinct wire names map to the same generated identifier."""

    pass
