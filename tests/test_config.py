import json

import pytest

from event_codegen.codegen import ConfigError, ConfigManager, GeneratorConfig, load_config


def test_target_defaults():
    cpp = load_config("cpp")
    ts = load_config("typescript")

    assert cpp.output_name == "Events.hpp"
    assert cpp.indent_size == 4
    assert cpp.get("broadcast_call") == "SSE::Broadcast"
    assert ts.output_name == "events.ts"
    assert ts.indent_size == 2
    assert ts.get("max_reconnect_attempts") == 10


def test_defaults_are_not_shared_between_loads():
    load_config("cpp", custom_config={"namespace": "Changed"})
    assert load_config("cpp").get("namespace") == "Events"


def test_sectioned_overrides():
    custom = {"add_comments": False, "cpp": {"namespace": "Plugin"}, "typescript": {"indent_size": 4}}

    cpp = load_config("cpp", custom_config=custom)
    ts = load_config("typescript", custom_config=custom)

    assert cpp.add_comments is False and ts.add_comments is False
    assert cpp.get("namespace") == "Plugin"
    assert cpp.indent_size == 4
    assert ts.indent_size == 4
    assert ts.get("namespace") is None


def test_config_file_then_custom(tmp_path):
    path = tmp_path / "codegen.json"
    path.write_text(json.dumps({"cpp": {"namespace": "FromFile", "int_type": "int64_t"}}), encoding="utf-8")

    config = load_config("cpp", custom_config={"cpp": {"namespace": "FromArgs"}}, config_file=path)

    assert config.get("namespace") == "FromArgs"
    assert config.get("int_type") == "int64_t"


def test_get_falls_back():
    config = GeneratorConfig(custom={"namespace": "X"})
    assert config.get("namespace") == "X"
    assert config.get("indent_size") == 4
    assert config.get("missing", "fallback") == "fallback"


@pytest.mark.parametrize(
    "name, content",
    [
        ("codegen.yaml", "a: 1"),
        ("codegen.json", "{not json"),
        ("codegen.json", "[1, 2]"),
    ],
)
def test_bad_config_files(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        ConfigManager().load_config_file(path)


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config("cpp", config_file=tmp_path / "nope.json")


def test_validate_config():
    manager = ConfigManager()

    cpp = manager.get_config("cpp", custom_config={"namespace": "Bad Name"})
    ts = manager.get_config("typescript", custom_config={"max_reconnect_attempts": "ten"})

    assert manager.validate_config(cpp, "cpp") == ["Invalid C++ namespace: Bad Name"]
    assert manager.validate_config(ts, "typescript") == ["Invalid max_reconnect_attempts: ten"]
    assert manager.validate_config(manager.get_config("cpp"), "cpp") == []
