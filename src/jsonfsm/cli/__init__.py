"""
jsonfsm CLI package.

Provides the command-line interface with auto-discovery of commands
from subfolders (machine/, config/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Settings, logging and machine construction
"""
from ._args import (
    add_config_arg,
    add_handlers_flag,
    add_json_flag,
    add_settings_flag,
    add_standard_flags,
    add_verbose_flag,
)
from ._output import OutputFormatter
from ._utils import build_machine, handler_dirs, load_settings, setup_logging

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_config_arg",
    "add_settings_flag",
    "add_handlers_flag",
    "add_verbose_flag",
    "add_standard_flags",
    # Utilities
    "load_settings",
    "setup_logging",
    "handler_dirs",
    "build_machine",
]
