"""
Base renderer interface for all code generation targets.

Defines the contract that every target renderer must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path

from .config import GeneratorConfig
from .schema import FieldType, GeneratedArtifact, ResolvedSchema
from .templates import TemplateEngine, create_template_engine


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all target renderers."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize renderer with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this renderer."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'cpp', 'typescript')."""
        pass

    @property
    @abstractmethod
    def role(self) -> str:
        """Return the artifact role: 'emission' or 'consumption'."""
        pass

    @property
    @abstractmethod
    def default_output_name(self) -> str:
        """Return the fixed file name of the generated artifact."""
        pass

    @property
    def output_name(self) -> str:
        return self.config.output_name or self.default_output_name

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this renderer.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this renderer."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, schema: ResolvedSchema) -> str:
        """
        Generate code for a resolved schema.

        Args:
            schema: Validated schema to render

        Returns:
            Generated code as a string
        """
        pass

    def render(self, schema: ResolvedSchema) -> GeneratedArtifact:
        """Generate, format and wrap the code into an artifact."""
        code = self.format_code(self.generate(schema))
        return GeneratedArtifact(output_name=self.output_name, content=code)

    def validate_schema(self, schema: ResolvedSchema) -> List[str]:
        """
        Report non-fatal issues for this target.

        Language renderers should override this to add target-specific checks.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for event in schema.events:
            for field in event.fields:
                if field.enum_values and field.type != FieldType.STRING:
                    warnings.append(
                        f"Enum on non-string field {event.name}.{field.name} is ignored"
                    )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:  # Collapse runs of blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        text = "\n".join(formatted_lines).strip("\n") + "\n"
        if self.config.line_ending != "\n":
            text = text.replace("\n", self.config.line_ending)
        return text

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)
