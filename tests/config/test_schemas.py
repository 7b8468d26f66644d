import pytest

from jsonfsm.core.schemas import iter_errors, load_schema


def test_bundled_schemas_load():
    assert load_schema("machine")["title"] == "jsonfsm machine definition"
    assert load_schema("settings.schema.yaml")["type"] == "object"


def test_unknown_schema_raises():
    with pytest.raises(FileNotFoundError):
        load_schema("does-not-exist")


def test_example_is_valid(alarm_config):
    assert iter_errors(alarm_config, "machine") == []


def test_errors_are_prefixed_with_their_path():
    errors = iter_errors({"initialState": "A", "states": [{"name": "A", "action": 3}], "transitions": []}, "machine")
    assert errors == ["states.0.action: 3 is not of type 'string'"]


def test_every_violation_is_reported():
    errors = iter_errors({"initialState": "A"}, "machine")
    assert any("'states' is a required property" in e for e in errors)
    assert any("'transitions' is a required property" in e for e in errors)
