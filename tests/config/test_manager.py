import json

import pytest
import yaml

from jsonfsm.core.config import (
    AuditConfig,
    ConfigManager,
    HandlersConfig,
    LoggingConfig,
    ServerConfig,
)
from jsonfsm.core.exceptions import ConfigValidationError
from jsonfsm.core.utils.merge import deep_merge, merge_arrays


def test_defaults_are_loaded():
    settings = ConfigManager().load_settings()
    server = ServerConfig(settings)
    assert (server.host, server.port, server.path) == ("0.0.0.0", 3000, "/send_event")
    assert LoggingConfig(settings).level == "INFO"
    assert LoggingConfig(settings).file is None
    assert AuditConfig(settings).enabled is False
    assert HandlersConfig(settings).paths == []


def test_settings_file_layers_over_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.safe_dump({"server": {"port": 8080}, "logging": {"level": "debug"}}))
    settings = ConfigManager(path).load_settings()
    assert ServerConfig(settings).port == 8080
    assert ServerConfig(settings).host == "0.0.0.0"
    assert LoggingConfig(settings).level == "DEBUG"


def test_env_overrides_beat_settings_file(tmp_path, monkeypatch):
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.safe_dump({"server": {"port": 8080}}))
    monkeypatch.setenv("JSONFSM_SERVER__PORT", "9090")
    monkeypatch.setenv("JSONFSM_AUDIT__ENABLED", "true")
    monkeypatch.setenv("JSONFSM_HANDLERS__PATHS", '["/opt/handlers"]')
    settings = ConfigManager(path).load_settings()
    assert ServerConfig(settings).port == 9090
    assert AuditConfig(settings).enabled is True
    assert [str(p) for p in HandlersConfig(settings).paths] == ["/opt/handlers"]


def test_explicit_overrides_win(monkeypatch):
    monkeypatch.setenv("JSONFSM_SERVER__PORT", "9090")
    settings = ConfigManager().load_settings({"server": {"port": 7000}})
    assert ServerConfig(settings).port == 7000


def test_malformed_env_key_is_ignored(monkeypatch):
    monkeypatch.setenv("JSONFSM_SERVER____PORT", "1")
    settings = ConfigManager().load_settings()
    assert ServerConfig(settings).port == 3000


def test_invalid_settings_fail_schema(monkeypatch):
    monkeypatch.setenv("JSONFSM_SERVER__PORT", "not-a-port")
    with pytest.raises(ConfigValidationError) as exc:
        ConfigManager().load_settings()
    assert any("server.port" in e for e in exc.value.errors)


def test_settings_file_must_be_mapping(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigValidationError):
        ConfigManager(path).load_settings()


def test_load_machine_from_json_and_yaml(tmp_path, alarm_config, write_config):
    json_path = write_config(alarm_config)
    yaml_path = tmp_path / "machine.yaml"
    yaml_path.write_text(yaml.safe_dump(alarm_config))
    manager = ConfigManager()
    assert manager.load_machine(json_path).to_dict() == manager.load_machine(yaml_path).to_dict()


def test_missing_machine_file(tmp_path):
    with pytest.raises(ConfigValidationError) as exc:
        ConfigManager().load_machine(tmp_path / "absent.json")
    assert "Cannot read configuration file" in str(exc.value)


def test_malformed_machine_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"initialState": "A", "states": [')
    with pytest.raises(ConfigValidationError) as exc:
        ConfigManager().load_machine(path)
    assert "Malformed configuration file" in str(exc.value)


def test_schema_errors_are_listed(write_config):
    path = write_config({"initialState": "A", "states": [{"name": "A"}], "transitions": [{"from": "A"}]})
    with pytest.raises(ConfigValidationError) as exc:
        ConfigManager().load_machine(path)
    joined = "\n".join(exc.value.errors)
    assert "'action' is a required property" in joined
    assert "'toSuccess' is a required property" in joined


def test_unknown_state_keys_are_rejected(alarm_config, write_config):
    alarm_config["states"][0]["wait_for_event"] = True
    with pytest.raises(ConfigValidationError):
        ConfigManager().load_machine(write_config(alarm_config))


def test_numeric_expected_code_is_rejected(alarm_config, write_config):
    alarm_config["expectedCode"] = 123
    with pytest.raises(ConfigValidationError):
        ConfigManager().load_machine(write_config(alarm_config))


def test_catalog_errors_carry_the_path(alarm_config, write_config):
    alarm_config["initialState"] = "NOWHERE"
    path = write_config(alarm_config)
    with pytest.raises(ConfigValidationError) as exc:
        ConfigManager().load_catalog(path)
    assert exc.value.context["path"] == str(path)


def test_deep_merge_does_not_mutate_inputs():
    base = {"server": {"port": 3000}, "handlers": {"paths": ["a"]}}
    merged = deep_merge(base, {"server": {"host": "::"}, "handlers": {"paths": ["+", "b"]}})
    assert merged == {"server": {"port": 3000, "host": "::"}, "handlers": {"paths": ["a", "b"]}}
    assert base == {"server": {"port": 3000}, "handlers": {"paths": ["a"]}}


def test_merge_arrays_replaces_by_default():
    assert merge_arrays([1, 2], [3]) == [3]


def test_section_accessor_loads_settings_when_none_given(monkeypatch):
    monkeypatch.setenv("JSONFSM_SERVER__HOST", "127.0.0.1")
    assert ServerConfig().host == "127.0.0.1"
