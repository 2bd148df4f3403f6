import pytest

from event_codegen.codegen import RegistryError, TypeMapping, map_type
from event_codegen.codegen.core import FieldType, UnknownFieldTypeError


@pytest.mark.parametrize(
    "field_type, representation, by_ref",
    [
        (FieldType.NUMBER, "int", False),
        (FieldType.STRING, "std::string", True),
        (FieldType.BOOLEAN, "bool", False),
        (FieldType.NUMBER_LIST, "std::vector<int>", True),
        (FieldType.STRING_LIST, "std::vector<std::string>", True),
        (FieldType.OBJECT, "nlohmann::json", True),
    ],
)
def test_emission_mapping(field_type, representation, by_ref):
    assert map_type(field_type, "emission") == TypeMapping(representation, by_ref)


@pytest.mark.parametrize(
    "field_type, representation",
    [
        (FieldType.NUMBER, "number"),
        (FieldType.STRING, "string"),
        (FieldType.BOOLEAN, "boolean"),
        (FieldType.NUMBER_LIST, "number[]"),
        (FieldType.STRING_LIST, "string[]"),
        (FieldType.OBJECT, "Record<string, unknown>"),
    ],
)
def test_consumption_mapping(field_type, representation):
    mapping = map_type(field_type, "consumption")
    assert mapping.representation == representation
    assert mapping.pass_by_reference is False


def test_renderer_names_select_the_side():
    assert map_type("string", "cpp") == map_type("string", "emission")
    assert map_type("number-list", "ts") == map_type("number[]", "consumption")


def test_single_enum_value_is_a_literal():
    assert map_type("string", "consumption", ["opened"]).representation == "'opened'"


def test_enum_union_keeps_order_and_duplicates():
    mapping = map_type("string", "consumption", ["b", "a", "b"])
    assert mapping.representation == "'b' | 'a' | 'b'"


def test_emission_ignores_enum():
    assert map_type("string", "emission", ["a"]).representation == "std::string"


def test_enum_on_non_string_is_ignored():
    assert map_type("number", "consumption", ["1"]).representation == "number"


def test_unknown_tag():
    with pytest.raises(UnknownFieldTypeError):
        map_type("int64", "emission")


def test_unknown_target():
    with pytest.raises(RegistryError):
        map_type("number", "rust")
