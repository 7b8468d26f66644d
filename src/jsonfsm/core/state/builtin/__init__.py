"""Built-in action handlers, loaded by path from the ``actions`` folder."""
