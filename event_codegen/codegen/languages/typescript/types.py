"""
TypeScript type system for the consumption module.

Maps payload field types to TypeScript types, turning string enums into
literal unions.
"""

from dataclasses import dataclass
from typing import Dict

from ...core.schema import FieldDef, FieldType


TS_TYPE_MAP: Dict[FieldType, str] = {
    FieldType.NUMBER: "number",
    FieldType.STRING: "string",
    FieldType.BOOLEAN: "boolean",
    FieldType.NUMBER_LIST: "number[]",
    FieldType.STRING_LIST: "string[]",
    FieldType.OBJECT: "Record<string, unknown>",
}


def ts_literal(value: str) -> str:
    """Single-quoted TypeScript string literal."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


@dataclass(frozen=True)
class TsType:
    """A TypeScript type expression."""

    name: str
    is_literal: bool = False


class TypeScriptTypeMapper:
    """Maps payload fields to TypeScript types."""

    def map_type(self, field_type: FieldType) -> TsType:
        return TsType(name=TS_TYPE_MAP[field_type])

    def map_field(self, field_def: FieldDef) -> TsType:
        """Map a field, using a literal union for enum-constrained strings."""
        if field_def.has_enum:
            return self.map_enum(field_def.enum_values)
        return self.map_type(field_def.type)

    def map_enum(self, values) -> TsType:
        """Literal type for one value, union of literals for several (declared order)."""
        return TsType(name=" | ".join(ts_literal(v) for v in values), is_literal=True)
