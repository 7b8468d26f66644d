"""Machine commands: serve and replay."""
