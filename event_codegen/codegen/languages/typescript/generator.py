"""
TypeScript consumption module renderer.

Generates events.ts: payload interfaces, the event name union and payload
map, the connection state machine and a reconnecting SSE client.
"""

import re
from typing import Dict, List, Optional, Any
from pathlib import Path

from ....logging_config import get_logger
from ....stream.machine import ReconnectPolicy
from ...core.config import GeneratorConfig, get_config_manager
from ...core.generator import CodeGenerator, GeneratorError
from ...core.naming import is_identifier, to_type_name
from ...core.schema import EventDef, ResolvedSchema
from .types import TypeScriptTypeMapper, ts_literal

logger = get_logger(__name__)

TEMPLATE_NAME = "events.ts.j2"

# Templates are written with two-space indentation
TEMPLATE_INDENT = 2

_LEADING_SPACES = re.compile(r"^( +)")


def property_key(name: str) -> str:
    """Object key as written in an interface: bare when legal, quoted otherwise."""
    return name if is_identifier(name) else ts_literal(name)


class TypeScriptGenerator(CodeGenerator):
    """Renderer for the TypeScript consumption module."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize TypeScript renderer with configuration."""
        super().__init__(config)

        self.config_import = self.config.get("config_import", "../config")
        self.client_class = self.config.get("client_class", "SSEClient")
        self.mock_guard = bool(self.config.get("mock_guard", True))

        try:
            self.policy = ReconnectPolicy(
                base_delay_ms=self.config.get("reconnect_base_delay_ms", 3000),
                max_attempts=self.config.get("max_reconnect_attempts", 10),
            )
        except (TypeError, ValueError) as e:
            raise GeneratorError(f"Invalid reconnect settings: {e}") from e

        if not is_identifier(self.client_class):
            raise GeneratorError(f"Invalid client class name: {self.client_class!r}")

        self.type_mapper = TypeScriptTypeMapper()

    def _setup_templates(self):
        super()._setup_templates()
        self._template_engine.add_filter("ts_string", ts_literal)

    def get_template_directory(self) -> Optional[Path]:
        """Return the TypeScript templates directory."""
        return Path(__file__).parent / "templates"

    @property
    def language_name(self) -> str:
        return "typescript"

    @property
    def role(self) -> str:
        return "consumption"

    @property
    def default_output_name(self) -> str:
        return "events.ts"

    def generate(self, schema: ResolvedSchema) -> str:
        """Generate the complete module for all events."""
        events = [self._generate_event_data(event) for event in schema.events]

        if events:
            event_names = " | ".join(ts_literal(event.name) for event in schema.events)
        else:
            event_names = "never"

        context = {
            "header_comment": self.config.header_comment,
            "add_comments": self.config.add_comments,
            "config_import": self.config_import,
            "mock_guard": self.mock_guard,
            "client_class": self.client_class,
            "endpoint": schema.endpoint,
            "base_delay_ms": self.policy.base_delay_ms,
            "max_attempts": self.policy.max_attempts,
            "event_names": event_names,
            "events": events,
        }

        logger.debug("Rendering %s with %d event(s)", self.output_name, len(events))
        code = self.render_template(TEMPLATE_NAME, context)
        return self._reindent(code)

    def _generate_event_data(self, event: EventDef) -> Dict[str, Any]:
        fields = [
            {
                "key": property_key(field.name),
                "ts_type": self.type_mapper.map_field(field).name,
                "description": field.description,
            }
            for field in event.fields
        ]

        return {
            "name": event.name,
            "key": property_key(event.name),
            "interface_name": to_type_name(event.name),
            "description": event.description,
            "fields": fields,
        }

    def _reindent(self, code: str) -> str:
        """Rescale leading indentation to the configured indent size."""
        size = self.config.indent_size
        if size == TEMPLATE_INDENT:
            return code

        def rescale(match):
            width = len(match.group(1))
            levels, rest = divmod(width, TEMPLATE_INDENT)
            return " " * (levels * size + rest)

        return "\n".join(_LEADING_SPACES.sub(rescale, line) for line in code.split("\n"))

    def validate_schema(self, schema: ResolvedSchema) -> List[str]:
        """Report names that have to be quoted in the generated interfaces."""
        warnings = super().validate_schema(schema)

        for event in schema.events:
            if not is_identifier(event.name):
                warnings.append(f"Event name {event.name!r} is quoted in EventPayloadMap")
            for field in event.fields:
                if not is_identifier(field.name):
                    warnings.append(
                        f"Field {event.name}.{field.name} is quoted in {to_type_name(event.name)}"
                    )

        warnings.extend(get_config_manager().validate_config(self.config, self.language_name))

        return warnings


def create_typescript_generator(
    config: Optional[Dict[str, Any]] = None,
) -> TypeScriptGenerator:
    """Create a TypeScript renderer with default configuration plus overrides."""
    return TypeScriptGenerator(
        get_config_manager().get_config("typescript", custom_config=config)
    )
