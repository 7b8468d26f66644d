"""
jsonfsm - declarative finite state machines driven by external events

A machine is described by a YAML or JSON document listing its states,
transitions and events. jsonfsm validates the description, runs it, and
exposes it over HTTP so events can be posted to it.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
