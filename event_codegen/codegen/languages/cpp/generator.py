"""
C++ emission module renderer.

Generates Events.hpp: one inline Emit<Name>() function per event that
builds a JSON payload and hands it to the transport's broadcast call.
"""

from typing import Dict, List, Optional, Any
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import GeneratorConfig, get_config_manager
from ...core.generator import CodeGenerator
from ...core.naming import to_pascal_case
from ...core.schema import EventDef, ResolvedSchema
from .naming import create_cpp_sanitizer
from .types import CppTypeConfig, CppTypeMapper

logger = get_logger(__name__)

TEMPLATE_NAME = "events.hpp.j2"


class CppGenerator(CodeGenerator):
    """Renderer for the C++ emission header."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize C++ renderer with configuration."""
        super().__init__(config)

        self.sanitizer = create_cpp_sanitizer()

        self.namespace = self.config.get("namespace", "Events")
        self.transport_include = self.config.get("transport_include", "../SSE.hpp")
        self.broadcast_call = self.config.get("broadcast_call", "SSE::Broadcast")
        self.json_include = self.config.get("json_include", "nlohmann/json.hpp")

        self.type_config = CppTypeConfig(
            int_type=self.config.get("int_type", "int"),
            json_type=self.config.get("json_type", "nlohmann::json"),
        )
        self.type_mapper = CppTypeMapper(self.type_config)

    def get_template_directory(self) -> Optional[Path]:
        """Return the C++ templates directory."""
        return Path(__file__).parent / "templates"

    @property
    def language_name(self) -> str:
        return "cpp"

    @property
    def role(self) -> str:
        return "emission"

    @property
    def default_output_name(self) -> str:
        return "Events.hpp"

    def generate(self, schema: ResolvedSchema) -> str:
        """Generate the complete header for all events."""
        events = [self._generate_event_data(event) for event in schema.events]

        context = {
            "header_comment": self.config.header_comment,
            "add_comments": self.config.add_comments,
            "namespace": self.namespace,
            "transport_include": self.transport_include,
            "json_include": self.json_include,
            "json_type": self.type_config.json_type,
            "broadcast_call": self.broadcast_call,
            "indent": " " * self.config.indent_size,
            "events": events,
        }

        logger.debug("Rendering %s with %d event(s)", self.output_name, len(events))
        return self.render_template(TEMPLATE_NAME, context)

    def _generate_event_data(self, event: EventDef) -> Dict[str, Any]:
        """Build the template view for one event."""
        # Parameter names only need to be unique within one function
        self.sanitizer.reset_used_names()

        fields = []
        for field in event.fields:
            cpp_type = self.type_mapper.map_field(field)
            fields.append(
                {
                    "name": field.name,
                    "param": self._param_name(field.name),
                    "param_type": cpp_type.param_type,
                    "description": field.description,
                }
            )

        return {
            "name": event.name,
            "function_name": f"Emit{to_pascal_case(event.name)}",
            "description": event.description,
            "fields": fields,
        }

    def _param_name(self, field_name: str) -> str:
        """Field names are used as-is unless they are not legal C++ identifiers."""
        return self.sanitizer.sanitize_name(field_name)

    def validate_schema(self, schema: ResolvedSchema) -> List[str]:
        """Report fields whose parameter name differs from the wire key."""
        warnings = super().validate_schema(schema)

        for event in schema.events:
            self.sanitizer.reset_used_names()
            for field in event.fields:
                param = self._param_name(field.name)
                if param != field.name:
                    warnings.append(
                        f"Parameter for {event.name}.{field.name} renamed to {param} "
                        f"(wire key unchanged)"
                    )

        warnings.extend(get_config_manager().validate_config(self.config, self.language_name))

        return warnings


def create_cpp_generator(config: Optional[Dict[str, Any]] = None) -> CppGenerator:
    """Create a C++ renderer with default configuration plus overrides."""
    return CppGenerator(get_config_manager().get_config("cpp", custom_config=config))
