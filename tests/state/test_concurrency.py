import threading

from jsonfsm.core.state import ActionRegistry, Catalog, StateMachine


def _toggle_machine(registry):
    return StateMachine(
        Catalog.from_mapping(
            {
                "initialState": "OFF",
                "states": [
                    {"name": "OFF", "action": "Count", "waitForEvent": True},
                    {"name": "ON", "action": "Count", "waitForEvent": True},
                ],
                "transitions": [
                    {"from": "OFF", "toSuccess": "ON", "event": "FLIP"},
                    {"from": "ON", "toSuccess": "OFF", "event": "FLIP"},
                ],
            }
        ),
        registry,
    )


def test_concurrent_events_are_serialized():
    active = []
    overlaps = []
    guard = threading.Lock()

    def count(arg, ctx):
        with guard:
            active.append(arg)
            if len(active) > 1:
                overlaps.append(list(active))
        # Give other threads a chance to interleave if the engine let them.
        threading.Event().wait(0.001)
        with guard:
            active.remove(arg)
        return True

    registry = ActionRegistry()
    registry.register("Count", count)
    machine = _toggle_machine(registry)
    machine.init()

    flips = 40
    threads = [
        threading.Thread(target=machine.send_event, args=("FLIP", str(i)))
        for i in range(flips)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert overlaps == []
    # An even number of flips from OFF lands back on OFF.
    assert machine.current_state.name == "OFF"


def test_snapshot_is_consistent_while_events_flow():
    registry = ActionRegistry()
    registry.register("Count", lambda arg, ctx: True)
    machine = _toggle_machine(registry)
    machine.init()
    stop = threading.Event()
    seen = []

    def watch():
        while not stop.is_set():
            snap = machine.snapshot()
            seen.append((snap["state"], snap["status"]))

    watcher = threading.Thread(target=watch)
    watcher.start()
    for _ in range(50):
        machine.send_event("FLIP")
    stop.set()
    watcher.join()

    assert {state for state, _ in seen} <= {"ON", "OFF"}
    # Snapshots are taken under the lock, never in the middle of a transition.
    assert all(status == "ready" for _, status in seen)


def test_concurrent_chains_are_not_interleaved():
    visits = []

    def record(arg, ctx):
        visits.append((threading.current_thread().name, ctx.state.name))
        threading.Event().wait(0.001)
        return True

    registry = ActionRegistry()
    registry.register("Record", record)
    machine = StateMachine(
        Catalog.from_mapping(
            {
                "initialState": "WAIT",
                "states": [
                    {"name": "WAIT", "action": "Record", "waitForEvent": True},
                    {"name": "FETCH", "action": "Record"},
                    {"name": "STORE", "action": "Record"},
                ],
                "transitions": [
                    {"from": "WAIT", "toSuccess": "FETCH", "event": "GO"},
                    {"from": "FETCH", "toSuccess": "STORE"},
                    {"from": "STORE", "toSuccess": "WAIT"},
                ],
            }
        ),
        registry,
    )
    machine.init()

    threads = [
        threading.Thread(target=machine.send_event, args=("GO",), name=f"sender-{i}")
        for i in range(20)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(visits) == 60
    for start in range(0, len(visits), 3):
        chunk = visits[start:start + 3]
        # Each chain runs to completion under a single sender.
        assert len({name for name, _ in chunk}) == 1
        assert [state for _, state in chunk] == ["WAIT", "FETCH", "STORE"]
    assert machine.current_state.name == "WAIT"
