"""Core library: state machine engine, configuration and audit trail."""
