"""
CLI command modules.

Each function handles one subcommand and receives the parsed arguments
with the CLI context attached.
"""

from .tools import cmd_fix, cmd_lint

__all__ = ["cmd_fix", "cmd_lint"]
