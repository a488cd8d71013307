"""
Error handling for the commentreflow command line.

Commands raise ``CLIError`` subclasses for problems the user can fix and
let everything else propagate to ``handle_cli_exception``, which prints a
short report to stderr and exits.

Environment toggles:
    COMMENTREFLOW_VERBOSE   include context and a traceback in reports
    COMMENTREFLOW_RERAISE   re-raise instead of exiting (useful under a debugger)
    COMMENTREFLOW_DEBUG     both of the above
"""

import os
import sys
import traceback
from typing import Any, Dict, List, Optional

_TRACEBACK_LIMIT = 4000
_TRUTHY = {"1", "true", "yes", "on"}


class CLIError(Exception):
    """
    A problem reported to the user of the command line.

    Attributes:
        message: What went wrong
        code: Stable identifier printed in brackets, e.g. ``CLI_CONFIG_ERROR``
        hint: How to fix it, when known
        context: Extra key/value details shown in verbose mode
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class CLIConfigError(CLIError):
    """Invalid configuration file or option value."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_CONFIG_ERROR')
        super().__init__(message, **kwargs)


class CLIFileNotFoundError(CLIError):
    """No source file matched the requested targets."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_FILE_NOT_FOUND')
        super().__init__(message, **kwargs)


class CLIRuntimeError(CLIError):
    """A command failed while processing files."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_RUNTIME_ERROR')
        super().__init__(message, **kwargs)


def _headline(exc: BaseException) -> str:
    if isinstance(exc, CLIError):
        return f"Error [{exc.code}]: {exc.message}"
    # Core errors know how to describe their location and code.
    render = getattr(exc, "format", None)
    if callable(render):
        return f"Error: {render()}"
    return f"Error: {type(exc).__name__}: {exc}"


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False
) -> str:
    """
    Build the report printed for ``exc``.

    Examples:
        >>> print(format_cli_error(CLIConfigError("Invalid width", hint="Use a positive number")))
        Error [CLI_CONFIG_ERROR]: Invalid width
        Hint: Use a positive number
    """
    lines: List[str] = [_headline(exc)]

    if isinstance(exc, CLIError):
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            lines.append("Context:")
            lines.extend(f"  {key}: {value}" for key, value in exc.context.items())

    if include_traceback:
        trace = traceback.format_exc().strip()
        if len(trace) > _TRACEBACK_LIMIT:
            trace = trace[:_TRACEBACK_LIMIT - 3] + "..."
        lines.append("Traceback:")
        lines.append(trace)

    return "\n".join(lines)


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


def cli_verbose_enabled(verbose_flag: bool = False) -> bool:
    return verbose_flag or _flag("COMMENTREFLOW_VERBOSE") or _flag("COMMENTREFLOW_DEBUG")


def cli_reraise_enabled() -> bool:
    return _flag("COMMENTREFLOW_RERAISE") or _flag("COMMENTREFLOW_DEBUG")


def handle_cli_exception(
    exc: BaseException,
    *,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Print a report for ``exc`` and exit, or re-raise when asked to."""
    if cli_reraise_enabled():
        raise exc

    verbose = cli_verbose_enabled(verbose)
    print(format_cli_error(exc, verbose=verbose, include_traceback=verbose), file=sys.stderr)
    sys.exit(exit_code)
