"""
C++ type system for the emission module.

Maps payload field types to C++ parameter types and decides which
parameters are passed by const reference.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from ...core.schema import FieldDef, FieldType


@dataclass(frozen=True)
class CppType:
    """A C++ parameter type."""

    name: str  # Base type, e.g. "std::vector<int>"
    pass_by_reference: bool = False

    @property
    def param_type(self) -> str:
        """Declaration used in a parameter list."""
        if self.pass_by_reference:
            return f"const {self.name}&"
        return self.name


@dataclass
class CppTypeConfig:
    """Configuration for C++ type mapping behavior."""

    int_type: str = "int"
    string_type: str = "std::string"
    bool_type: str = "bool"
    json_type: str = "nlohmann::json"

    # Custom type overrides
    type_overrides: Dict[FieldType, str] = field(default_factory=dict)


# Types that are copied cheaply and passed by value
BY_VALUE_TYPES = {FieldType.NUMBER, FieldType.BOOLEAN}


class CppTypeMapper:
    """Maps payload fields to C++ parameter types."""

    def __init__(self, config: Optional[CppTypeConfig] = None):
        """Initialize with type configuration."""
        self.config = config or CppTypeConfig()
        self._types = self._build_type_map()

    def _build_type_map(self) -> Dict[FieldType, str]:
        config = self.config
        types = {
            FieldType.NUMBER: config.int_type,
            FieldType.STRING: config.string_type,
            FieldType.BOOLEAN: config.bool_type,
            FieldType.NUMBER_LIST: f"std::vector<{config.int_type}>",
            FieldType.STRING_LIST: f"std::vector<{config.string_type}>",
            FieldType.OBJECT: config.json_type,
        }
        types.update(config.type_overrides)
        return types

    def map_type(self, field_type: FieldType) -> CppType:
        """Map an abstract field type to its C++ parameter type."""
        return CppType(
            name=self._types[field_type],
            pass_by_reference=field_type not in BY_VALUE_TYPES,
        )

    def map_field(self, field_def: FieldDef) -> CppType:
        """Map a field; enum constraints do not change the C++ type."""
        return self.map_type(field_def.type)
