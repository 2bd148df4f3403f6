import pytest

from event_codegen.codegen import EventGenerator
from event_codegen.codegen.core import (
    IdentifierCollisionError,
    MissingEndpointError,
    MissingEventNameError,
    MissingEventPayloadError,
    MissingEventsError,
    SchemaError,
    SchemaValidationError,
)


def test_missing_endpoint(sample_schema):
    del sample_schema["endpoint"]
    with pytest.raises(MissingEndpointError, match="endpoint"):
        EventGenerator(sample_schema)


def test_empty_endpoint(sample_schema):
    sample_schema["endpoint"] = ""
    with pytest.raises(MissingEndpointError):
        EventGenerator(sample_schema)


def test_missing_events(sample_schema):
    del sample_schema["events"]
    with pytest.raises(MissingEventsError, match="events"):
        EventGenerator(sample_schema)


def test_events_not_a_list(sample_schema):
    sample_schema["events"] = {"selection": {}}
    with pytest.raises(MissingEventsError):
        EventGenerator(sample_schema)


def test_missing_event_name(sample_schema):
    del sample_schema["events"][1]["name"]
    with pytest.raises(MissingEventNameError, match="name"):
        EventGenerator(sample_schema)


@pytest.mark.parametrize("payload", [None, {}, "count"])
def test_missing_or_empty_payload(sample_schema, payload):
    if payload is None:
        del sample_schema["events"][0]["payload"]
    else:
        sample_schema["events"][0]["payload"] = payload
    with pytest.raises(MissingEventPayloadError, match="payload"):
        EventGenerator(sample_schema)


def test_valid_schema_raises_nothing(sample_schema):
    generator = EventGenerator(sample_schema)
    assert generator.schema.event_names == ["selection", "document"]


def test_empty_events_is_valid():
    generator = EventGenerator({"endpoint": "/e", "events": []})
    assert generator.schema.events == ()


def test_identifier_collision():
    schema = {
        "endpoint": "/e",
        "events": [
            {"name": "art-changed", "payload": {"a": {"type": "number"}}},
            {"name": "artChanged", "payload": {"a": {"type": "number"}}},
        ],
    }
    with pytest.raises(IdentifierCollisionError):
        EventGenerator(schema)


def test_name_without_identifier_characters():
    schema = {"endpoint": "/e", "events": [{"name": "--", "payload": {"a": {"type": "number"}}}]}
    with pytest.raises(SchemaValidationError) as exc:
        EventGenerator(schema)
    assert not isinstance(exc.value, MissingEventNameError)


def test_errors_share_a_base(sample_schema):
    del sample_schema["endpoint"]
    with pytest.raises(SchemaError):
        EventGenerator(sample_schema)
