"""End-to-end run of the bundled alarm panel definition."""
import pytest

from jsonfsm.core.exceptions import TransitionNotFoundError
from jsonfsm.core.state import BufferedResponder


def _send(machine, event, param=""):
    responder = BufferedResponder()
    result = machine.send_event(event, param, responder=responder)
    return result, responder


def test_arm_with_correct_code(alarm_machine):
    init = alarm_machine.init()
    assert init.to_state == "DISARMED"

    result, responder = _send(alarm_machine, "ARM")
    assert result.to_state == "ENTER_CODE"
    assert (responder.status, responder.payload) == (200, "")

    result, responder = _send(alarm_machine, "USER_CODE", "123")
    assert result.path == ("SEND_OK_RESPONSE", "ARMED")
    assert (responder.status, responder.payload) == (200, "CODE OK")


def test_wrong_code_returns_to_code_entry(alarm_machine):
    alarm_machine.init()
    _send(alarm_machine, "ARM")

    result, responder = _send(alarm_machine, "USER_CODE", "000")
    assert result.path == ("SEND_ERROR_RESPONSE", "ENTER_CODE")
    assert responder.status == 406
    assert responder.payload == {"error": "WRONG CODE"}

    result, _ = _send(alarm_machine, "USER_CODE", "123")
    assert result.to_state == "ARMED"


def test_disarm_cycle(alarm_machine):
    alarm_machine.init()
    _send(alarm_machine, "ARM")
    _send(alarm_machine, "USER_CODE", "123")
    result, responder = _send(alarm_machine, "DISARM")
    assert result.to_state == "DISARMED"
    assert responder.status == 200


def test_out_of_order_event_is_rejected(alarm_machine):
    alarm_machine.init()
    with pytest.raises(TransitionNotFoundError):
        alarm_machine.send_event("DISARM")
    assert alarm_machine.current_state.name == "DISARMED"


def test_yaml_and_json_examples_agree(alarm_path):
    from jsonfsm.core.config import ConfigManager

    manager = ConfigManager()
    from_json = manager.load_catalog(alarm_path)
    from_yaml = manager.load_catalog(alarm_path.with_suffix(".yaml"))
    assert from_yaml.to_dict() == from_json.to_dict()
