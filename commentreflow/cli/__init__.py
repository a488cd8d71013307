"""
Comment reflow CLI entry point.

Resolves the workspace configuration once, then dispatches to the ``lint``
and ``fix`` command modules.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from commentreflow import __version__
from commentreflow.config import load_workspace_config
from commentreflow.errors import ReflowConfigError

from .commands import cmd_fix, cmd_lint
from .context import CLIContext
from .errors import CLIConfigError, handle_cli_exception


_LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'error': logging.ERROR,
}
_LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'


def _configure_logging(args) -> None:
    """Configure the ``commentreflow`` logger from --log-level or COMMENTREFLOW_LOG_LEVEL."""
    name = (args.log_level or os.getenv('COMMENTREFLOW_LOG_LEVEL') or 'warn').lower()

    package_logger = logging.getLogger('commentreflow')
    package_logger.setLevel(_LOG_LEVELS.get(name, logging.WARNING))

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        package_logger.addHandler(handler)
        # Records are printed once, here, and not again by the root logger.
        package_logger.propagate = False


def _add_file_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        'files',
        nargs='*',
        default=['.'],
        help='Files or directories to process (default: current directory)'
    )
    parser.add_argument(
        '--max-width',
        type=int,
        default=None,
        help='Maximum comment line width (overrides the configuration file)'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reflow source comments to fit a maximum line width",
        prog="commentreflow"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path to a commentreflow.toml configuration file'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print full tracebacks and detailed CLI errors (or set COMMENTREFLOW_VERBOSE=1)'
    )
    parser.add_argument(
        '--workspace',
        default=None,
        help='Workspace root directory (defaults to current working directory)'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default=None,
        help='Set logging level (or set COMMENTREFLOW_LOG_LEVEL)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    lint_parser = subparsers.add_parser(
        'lint',
        help='Report comment lines that should be split or merged'
    )
    _add_file_arguments(lint_parser)
    lint_parser.set_defaults(func=cmd_lint)

    fix_parser = subparsers.add_parser(
        'fix',
        help='Reflow comments in place'
    )
    _add_file_arguments(fix_parser)
    fix_parser.add_argument(
        '--check',
        action='store_true',
        help='Only report files that would change; exit 1 if any would'
    )
    fix_parser.add_argument(
        '--diff',
        action='store_true',
        help='Print a unified diff instead of writing files'
    )
    fix_parser.set_defaults(func=cmd_fix)

    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint with subcommand support.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Examples:
        >>> main(['lint', 'src'])  # doctest: +SKIP
        >>> main(['fix', '--check', '--max-width', '100', 'src'])  # doctest: +SKIP
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    args.verbose = getattr(args, "verbose", False)
    _configure_logging(args)

    workspace_root = Path(args.workspace).resolve() if args.workspace else Path.cwd()
    config_path = Path(args.config).resolve() if args.config else None
    try:
        config = load_workspace_config(workspace_root, config_path)
    except ReflowConfigError as exc:
        handle_cli_exception(
            CLIConfigError(exc.message, hint=exc.hint, context={"config": exc.path}),
            verbose=args.verbose,
        )
        return

    args.cli_context = CLIContext(workspace_root=config.root, config=config)
    args.func(args)


if __name__ == '__main__':  # pragma: no cover
    main()
