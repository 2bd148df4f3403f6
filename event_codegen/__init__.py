"""event-codegen: typed event modules for a C++ emitter and a TypeScript consumer."""

# codegen must be imported before utils: utils raises codegen's schema errors
from .codegen import (
    EventGenerator,
    SchemaError,
    __version__,
    generate,
    map_type,
)

__all__ = ["EventGenerator", "SchemaError", "__version__", "generate", "map_type"]
