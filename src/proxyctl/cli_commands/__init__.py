"""CLI command modules; importing this package registers every command."""

from . import config_command, control_commands, verify_command

__all__ = ["config_command", "control_commands", "verify_command"]
