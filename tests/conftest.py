import json
import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'jsonfsm'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


from jsonfsm.core.audit import configure_audit, reset_stdlib_logging_for_tests
from jsonfsm.core.state import ActionRegistry, Catalog, StateMachine
from jsonfsm.data import clear_caches, get_data_path


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Drop JSONFSM_* overrides from the developer's shell and reset globals."""
    for key in list(os.environ):
        if key.startswith("JSONFSM_"):
            monkeypatch.delenv(key, raising=False)
    yield
    configure_audit(None)
    reset_stdlib_logging_for_tests()
    clear_caches()


@pytest.fixture
def alarm_path() -> Path:
    return get_data_path("examples", "alarm-panel.json")


@pytest.fixture
def alarm_config(alarm_path):
    return json.loads(alarm_path.read_text(encoding="utf-8"))


@pytest.fixture
def actions() -> ActionRegistry:
    """A registry holding only the built-in actions."""
    return ActionRegistry(preload_defaults=True)


@pytest.fixture
def alarm_machine(alarm_config, actions) -> StateMachine:
    return StateMachine(Catalog.from_mapping(alarm_config), actions, name="alarm-panel")


@pytest.fixture
def write_config(tmp_path):
    """Write a machine definition to disk as JSON and return its path."""

    def _write(data, name: str = "machine.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
