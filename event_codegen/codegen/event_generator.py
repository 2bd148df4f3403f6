"""
Generator facade.

Resolves and validates a schema once, at construction, and renders the
emission and consumption artifacts from the resolved schema on demand.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..logging_config import get_logger
from .core.config import ConfigError, GeneratorConfig
from .core.generator import CodeGenerator
from .core.loader import SchemaSource
from .core.resolver import resolve_schema
from .core.schema import GeneratedArtifact, ResolvedSchema, SchemaDocument
from .registry import get_registry

logger = get_logger(__name__)

EMISSION_TARGET = "cpp"
CONSUMPTION_TARGET = "typescript"

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path]


class EventGenerator:
    """
    Produces the two artifacts for one schema.

    Args:
        schema: Path, URL, mapping or SchemaDocument
        config: Per-target configuration. Either a mapping with ``cpp`` /
            ``typescript`` sections (plus shared top-level keys), a path to
            a JSON config file, or None for the defaults.
        base_path: Base for resolving ``extends`` of in-memory schemas

    Raises:
        SchemaError: If the schema cannot be loaded, resolved or validated
        ConfigError: If both targets are configured with the same output name
    """

    def __init__(
        self,
        schema: SchemaSource,
        config: Optional[ConfigSource] = None,
        base_path: Optional[Union[str, Path]] = None,
    ):
        self.schema: ResolvedSchema = resolve_schema(schema, base_path=base_path)

        registry = get_registry()
        self.emitter: CodeGenerator = registry.create_generator(EMISSION_TARGET, config)
        self.consumer: CodeGenerator = registry.create_generator(CONSUMPTION_TARGET, config)

        if self.emitter.output_name == self.consumer.output_name:
            raise ConfigError(
                f"Both artifacts would be written to {self.emitter.output_name!r}; "
                f"set output_name per target"
            )

    @classmethod
    def from_document(
        cls,
        document: Union[SchemaDocument, Dict[str, Any]],
        base_path: Optional[Union[str, Path]] = None,
        config: Optional[ConfigSource] = None,
    ) -> "EventGenerator":
        """Build from an in-memory document."""
        return cls(document, config=config, base_path=base_path)

    @property
    def renderers(self) -> List[CodeGenerator]:
        return [self.emitter, self.consumer]

    @property
    def warnings(self) -> List[str]:
        """Non-fatal issues reported by both renderers."""
        warnings = []
        for renderer in self.renderers:
            warnings.extend(renderer.validate_schema(self.schema))
        return warnings

    def generate_emission(self) -> GeneratedArtifact:
        return self.emitter.render(self.schema)

    def generate_consumption(self) -> GeneratedArtifact:
        return self.consumer.render(self.schema)

    def generate(self) -> List[GeneratedArtifact]:
        """Render ``[emission, consumption]``."""
        return [self.generate_emission(), self.generate_consumption()]

    def write(self, output_dir: Union[str, Path]) -> List[Path]:
        """
        Render both artifacts and write them into a directory.

        Both artifacts are rendered before anything is written, so a render
        failure leaves the directory untouched.
        """
        artifacts = self.generate()
        paths = [artifact.write_to(output_dir) for artifact in artifacts]
        for path in paths:
            logger.info("Wrote %s", path)
        return paths


def generate(
    schema: SchemaSource,
    config: Optional[ConfigSource] = None,
    base_path: Optional[Union[str, Path]] = None,
) -> List[GeneratedArtifact]:
    """Resolve a schema and render ``[emission, consumption]`` in one call."""
    return EventGenerator(schema, config=config, base_path=base_path).generate()
