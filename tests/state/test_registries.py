import pytest

from jsonfsm.core.exceptions import HandlerNotRegisteredError
from jsonfsm.core.state import ActionRegistry, action_registry, register_action
from jsonfsm.core.state.context import ActionContext, BufferedResponder
from jsonfsm.core.state.models import State


def test_builtin_actions_are_preloaded():
    registry = ActionRegistry(preload_defaults=True)
    assert {"Log", "ValidateCode", "SendResponse"} <= set(registry.names())


def test_empty_registry_lookup_raises():
    registry = ActionRegistry()
    assert registry.get("Log") is None
    with pytest.raises(HandlerNotRegisteredError) as exc:
        registry.lookup("Log")
    assert exc.value.action == "Log"


def test_register_replaces_previous_binding():
    registry = ActionRegistry()
    registry.register("Check", lambda arg, ctx: False)
    registry.register("Check", lambda arg, ctx: True)
    assert registry.execute("Check", "x") is True
    assert registry.names() == ["Check"]


def test_register_rejects_non_callables():
    with pytest.raises(TypeError):
        ActionRegistry().register("Bad", "not callable")


def test_execute_coerces_outcome_to_bool():
    registry = ActionRegistry()
    registry.add("Len", lambda arg, ctx: len(arg))
    assert registry.execute("Len", "") is False
    assert registry.execute("Len", "abc") is True


def test_reset_restores_builtins_only():
    registry = ActionRegistry(preload_defaults=True)
    registry.register("Custom", lambda arg, ctx: True)
    registry.reset()
    assert not registry.has("Custom")
    assert registry.has("Log")


def test_register_action_decorator_targets_default_registry():
    @register_action("DecoratedForTest")
    def decorated(arg, ctx):
        return arg == "yes"

    try:
        assert action_registry.lookup("DecoratedForTest") is decorated
    finally:
        action_registry.reset()


def _ctx(settings=None, send_response=False, responder=None):
    state = State("S", "Any", send_response=send_response)
    return ActionContext(state=state, settings=settings or {}, responder=responder)


def test_validate_code_uses_expected_code_setting(actions):
    ctx = _ctx({"expectedCode": "123"})
    assert actions.execute("ValidateCode", "123", ctx) is True
    assert actions.execute("ValidateCode", "999", ctx) is False


def test_send_response_answers_submitter(actions):
    responder = BufferedResponder()
    actions.execute("SendResponse", "OK", _ctx(responder=responder))
    actions.execute("SendResponse", "ERROR", _ctx(responder=responder))
    assert responder.history == [(200, "CODE OK"), (406, {"error": "WRONG CODE"})]


def test_log_acknowledges_only_when_state_responds(actions):
    responder = BufferedResponder()
    assert actions.execute("Log", "quiet", _ctx(responder=responder)) is True
    assert not responder.responded
    actions.execute("Log", "loud", _ctx(send_response=True, responder=responder))
    assert (responder.status, responder.payload) == (200, "")


def test_context_without_responder_discards_responses():
    ctx = _ctx()
    ctx.respond(200, "ignored")
    assert ctx.automatic is True
