"""
Comment tooling commands.

Implements the ``lint`` and ``fix`` subcommands on top of the comment
linter and the fixed-point reflow driver.
"""

import argparse
import difflib
import logging
from pathlib import Path
from typing import List

from ...engine import reflow_text
from ...linter import CommentLinter, LintSeverity, get_default_rules
from ..context import get_cli_context, resolve_options
from ..errors import CLIFileNotFoundError, handle_cli_exception

logger = logging.getLogger(__name__)

_ICONS = {
    LintSeverity.ERROR: "E",
    LintSeverity.WARNING: "W",
    LintSeverity.INFO: "I",
    LintSeverity.HINT: "H",
}


def _collect_files(args: argparse.Namespace) -> List[Path]:
    ctx = get_cli_context(args)
    files = ctx.config.discover(args.files)
    if not files:
        raise CLIFileNotFoundError(
            "No source files found",
            hint=f"Pass files or directories containing {', '.join(ctx.config.extensions)} sources",
            context={"targets": args.files},
        )
    return files


def _read_source(path: Path) -> str:
    # newline="" keeps \r\n and \r so line terminators survive a rewrite.
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_source(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def cmd_lint(args: argparse.Namespace) -> None:
    """
    Handle the 'lint' subcommand.

    Prints one line per finding and exits with status 1 when any file has a
    warning or error level finding, or when a file could not be checked.

    Examples:
        >>> args = argparse.Namespace(files=['src'], max_width=100)
        >>> cmd_lint(args)  # doctest: +SKIP
        src/app.js:12:0: W comment-length/split Comment line should be split ...
    """
    try:
        options = resolve_options(args)
        linter = CommentLinter(get_default_rules(options))
        files = _collect_files(args)

        total_findings = 0
        failing = 0
        for file_path in files:
            content = _read_source(file_path)
            result = linter.lint_document(content, str(file_path))

            for error in result.errors:
                print(f"{file_path}: ERROR {error}")
            for finding in result.findings:
                icon = _ICONS[finding.severity]
                print(f"{file_path}:{finding.line}:{finding.column}: {icon} "
                      f"{finding.rule_id}/{finding.message_id} {finding.message}")
                if finding.suggestion:
                    print(f"    hint: {finding.suggestion}")

            total_findings += len(result.findings)
            if result.errors or result.error_count() or result.warning_count():
                failing += 1

        if total_findings == 0 and failing == 0:
            print(f"No comment issues found in {len(files)} file(s)")
            return

        print(f"Found {total_findings} issue(s) in {len(files)} file(s)")
        if failing:
            raise SystemExit(1)

    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


def cmd_fix(args: argparse.Namespace) -> None:
    """
    Handle the 'fix' subcommand.

    Reflows the comments of every file to a fixed point. With ``--check``
    nothing is written and the exit status is 1 when a file would change;
    ``--diff`` prints a unified diff instead of writing.
    """
    try:
        options = resolve_options(args)
        files = _collect_files(args)

        changed = 0
        for file_path in files:
            content = _read_source(file_path)
            result = reflow_text(content, options)
            if not result.converged:
                logger.warning("%s did not settle after %d passes", file_path, result.passes)
            if not result.is_changed:
                continue

            changed += 1
            if args.check:
                print(f"Would reflow {file_path}")
            elif args.diff:
                diff = difflib.unified_diff(
                    content.splitlines(keepends=True),
                    result.text.splitlines(keepends=True),
                    fromfile=str(file_path),
                    tofile=str(file_path),
                )
                print("".join(diff), end="")
            else:
                _write_source(file_path, result.text)
                print(f"Reflowed {file_path} ({result.edits_applied} edit(s))")

        if args.check:
            if changed:
                print(f"{changed} file(s) would be reflowed")
                raise SystemExit(1)
            print("All comments already fit")
        elif not args.diff:
            print(f"Reflowed {changed} of {len(files)} file(s)")

    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))
