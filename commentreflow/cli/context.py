"""
CLI context management.

Holds the workspace configuration resolved once per invocation and the
helpers commands use to turn it into engine options.
"""

import argparse
from dataclasses import dataclass
from pathlib import Path

from ..config import ReflowOptions, WorkspaceConfig
from ..errors import ReflowConfigError
from .errors import CLIConfigError


@dataclass
class CLIContext:
    """
    Shared context resolved from workspace configuration.

    Attributes:
        workspace_root: Root directory of the workspace
        config: Parsed workspace configuration
    """

    workspace_root: Path
    config: WorkspaceConfig


def get_cli_context(args: argparse.Namespace) -> CLIContext:
    """
    Retrieve CLIContext from parsed arguments.

    Raises:
        CLIConfigError: If context was not initialized
    """
    ctx = getattr(args, "cli_context", None)
    if ctx is None:
        raise CLIConfigError(
            "CLI context not initialized",
            hint="This is an internal error; call commands through main()",
        )
    return ctx


def resolve_options(args: argparse.Namespace) -> ReflowOptions:
    """Apply command-line overrides on top of the workspace options."""
    ctx = get_cli_context(args)
    try:
        return ctx.config.options.with_overrides(max_width=getattr(args, "max_width", None))
    except ReflowConfigError as exc:
        raise CLIConfigError(exc.message, hint=exc.hint) from exc
