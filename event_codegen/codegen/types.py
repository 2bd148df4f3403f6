"""
Target-neutral type mapping.

``map_type`` answers, for one abstract field type, how a given target
represents it and whether the emission side passes it by reference. Both
renderers use the same per-language mappers, so this is the single place
to compare the two sides.
"""

from dataclasses import dataclass
from typing import Sequence, Union

from .core.schema import FieldType
from .languages.cpp.types import CppTypeMapper
from .languages.typescript.types import TypeScriptTypeMapper
from .registry import get_registry

EMISSION = "emission"
CONSUMPTION = "consumption"


@dataclass(frozen=True)
class TypeMapping:
    representation: str
    pass_by_reference: bool = False


def _target_role(target: str) -> str:
    if target.lower() in (EMISSION, CONSUMPTION):
        return target.lower()
    return get_registry().create_generator(target).role


def map_type(
    field_type: Union[FieldType, str],
    target: str,
    enum_values: Sequence[str] = (),
) -> TypeMapping:
    """
    Map an abstract field type for a target.

    Args:
        field_type: FieldType or its tag (``"number[]"``, ``"string-list"``, ...)
        target: ``"emission"``, ``"consumption"`` or a registered renderer name
        enum_values: Enum constraint; only affects consumption-side strings

    Raises:
        UnknownFieldTypeError: For an unknown type tag
        RegistryError: For an unknown target
    """
    if not isinstance(field_type, FieldType):
        field_type = FieldType.from_tag(field_type)

    role = _target_role(target)

    if role == EMISSION:
        cpp_type = CppTypeMapper().map_type(field_type)
        return TypeMapping(cpp_type.name, cpp_type.pass_by_reference)

    mapper = TypeScriptTypeMapper()
    if field_type == FieldType.STRING and enum_values:
        return TypeMapping(mapper.map_enum(enum_values).name)
    return TypeMapping(mapper.map_type(field_type).name)
