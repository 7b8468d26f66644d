"""HTTP contract of the event ingress.

Each test checks the status code and the JSON body returned for one kind
of request: accepted events, handler responses, rejected events, malformed
bodies and server-side failures.
"""
import pytest
from fastapi.testclient import TestClient

from jsonfsm.core.exceptions import ActionInvocationError, ReentrantTransitionError, TransitionNotFoundError
from jsonfsm.ingress import create_app, error_payload, status_for


@pytest.fixture
def client(alarm_machine) -> TestClient:
    alarm_machine.init()
    return TestClient(create_app(alarm_machine))


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_state_endpoint(client):
    response = client.get("/state")
    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "DISARMED"
    assert body["events"] == ["ARM"]
    assert body["machine"] == "alarm-panel"


def test_handler_response_is_returned(client):
    assert client.post("/send_event", json={"action": "ARM"}).status_code == 200

    ok = client.post("/send_event", json={"action": "USER_CODE", "param": "123"})
    assert ok.status_code == 200
    assert ok.json() == "CODE OK"
    assert client.get("/state").json()["state"] == "ARMED"


def test_wrong_code_returns_406(client):
    client.post("/send_event", json={"action": "ARM"})
    response = client.post("/send_event", json={"action": "USER_CODE", "param": "999"})
    assert response.status_code == 406
    assert response.json() == {"error": "WRONG CODE"}
    assert client.get("/state").json()["state"] == "ENTER_CODE"


def test_default_body_when_no_handler_responds(alarm_config, actions):
    from jsonfsm.core.state import Catalog, StateMachine

    alarm_config["states"][0]["sendResponse"] = False
    machine = StateMachine(Catalog.from_mapping(alarm_config), actions)
    machine.init()
    client = TestClient(create_app(machine))
    response = client.post("/send_event", json={"action": "ARM"})
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "state": "ENTER_CODE"}


def test_unknown_event_is_400(client):
    response = client.post("/send_event", json={"action": "DISARM"})
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "TransitionNotFoundError"
    assert "No transition supports the current state" in body["error"]
    assert client.get("/state").json()["state"] == "DISARMED"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"json": {"param": "123"}},
        {"json": {"action": 5}},
        {"content": b"not json", "headers": {"content-type": "application/json"}},
    ],
)
def test_malformed_body_is_400(client, kwargs):
    response = client.post("/send_event", **kwargs)
    assert response.status_code == 400
    assert response.json()["code"] == "BadRequest"
    assert client.get("/state").json()["state"] == "DISARMED"


def test_handler_failure_is_500_without_internals(alarm_machine):
    def explode(arg, ctx):
        raise RuntimeError("secret database password")

    alarm_machine.actions.register("Log", explode)
    alarm_machine.init()
    client = TestClient(create_app(alarm_machine))
    response = client.post("/send_event", json={"action": "ARM"})
    assert response.status_code == 500
    body = response.json()
    assert body["code"] == "ActionInvocationError"
    assert "secret" not in body["error"]


def test_custom_event_path(alarm_machine):
    alarm_machine.init()
    client = TestClient(create_app(alarm_machine, {"server": {"path": "/events"}}))
    assert client.post("/events", json={"action": "ARM"}).status_code == 200
    assert client.post("/send_event", json={"action": "ARM"}).status_code == 404


def test_error_mapping():
    assert status_for(TransitionNotFoundError("A", "E")) == 400
    err = ActionInvocationError("Log", state="A", cause=ValueError("x"))
    assert status_for(err) == 500
    assert error_payload(err) == {"error": "Action 'Log' failed in state 'A'", "code": "ActionInvocationError"}
    assert status_for(ReentrantTransitionError("send an event", state="A")) == 500
