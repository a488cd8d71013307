"""Tests for the commentreflow CLI."""

import pytest

from commentreflow import __version__
from commentreflow.cli import build_parser, main
from commentreflow.cli.errors import (
    CLIConfigError,
    CLIRuntimeError,
    format_cli_error,
    handle_cli_exception,
)
from commentreflow.errors import ReflowConfigError

from tests.cli.conftest import CLEAN_JS, LONG_COMMENT_JS, REFLOWED_JS


def run(argv):
    """Run the CLI and return its exit code (0 when it returns normally)."""
    try:
        main(argv)
    except SystemExit as exc:
        return exc.code
    return 0


class TestParser:
    """Argument parsing."""

    def test_fix_options(self):
        args = build_parser().parse_args(["fix", "--check", "--max-width", "100", "src"])
        assert args.command == "fix"
        assert args.check and not args.diff
        assert args.max_width == 100
        assert args.files == ["src"]

    def test_files_default_to_current_directory(self):
        assert build_parser().parse_args(["lint"]).files == ["."]

    def test_no_command_prints_help(self, capsys, clean_env):
        assert run([]) == 1
        assert "usage: commentreflow" in capsys.readouterr().out

    def test_version(self, capsys):
        assert run(["--version"]) == 0
        assert __version__ in capsys.readouterr().out


class TestLint:
    """The lint subcommand."""

    def test_reports_and_fails(self, project, capsys):
        code = run(["--workspace", str(project), "lint", "--max-width", "20", "src"])
        out = capsys.readouterr().out
        assert code == 1
        assert "long.js:1:0: W comment-length/split" in out
        assert "clean.js" not in out
        assert "readme.md" not in out
        assert "Found 1 issue(s) in 2 file(s)" in out

    def test_clean_files(self, project, capsys):
        code = run(["--workspace", str(project), "lint", "src/clean.js"])
        assert code == 0
        assert "No comment issues found in 1 file(s)" in capsys.readouterr().out

    def test_uses_workspace_config(self, project, capsys):
        (project / "commentreflow.toml").write_text("max_width = 20\n", encoding="utf-8")
        assert run(["--workspace", str(project), "lint", "src"]) == 1

    def test_no_files(self, project, capsys):
        code = run(["--workspace", str(project), "lint", "missing"])
        assert code == 1
        assert "CLI_FILE_NOT_FOUND" in capsys.readouterr().err

    def test_crlf_line_numbers(self, project, capsys):
        (project / "src" / "windows.js").write_bytes(b"x();\r\n// 01234567890123456789\r\n")
        code = run(["--workspace", str(project), "lint", "--max-width", "20", "src/windows.js"])
        assert code == 1
        assert "windows.js:2:0: W comment-length/split" in capsys.readouterr().out


class TestFix:
    """The fix subcommand."""

    def test_rewrites_files(self, project, capsys):
        code = run(["--workspace", str(project), "fix", "--max-width", "20", "src"])
        assert code == 0
        assert (project / "src" / "long.js").read_text(encoding="utf-8") == REFLOWED_JS
        assert (project / "src" / "clean.js").read_text(encoding="utf-8") == CLEAN_JS
        assert "Reflowed 1 of 2 file(s)" in capsys.readouterr().out

    def test_keeps_crlf_line_endings(self, project, capsys):
        target = project / "src" / "windows.js"
        target.write_bytes(b"// aaa bbb ccc ddd\r\nx();\r\n")
        code = run(["--workspace", str(project), "fix", "--max-width", "10", "src/windows.js"])
        assert code == 0
        assert target.read_bytes() == b"// aaa bbb\r\n// ccc ddd\r\nx();\r\n"

    def test_check_does_not_write(self, project, capsys):
        code = run(["--workspace", str(project), "fix", "--check", "--max-width", "20", "src"])
        out = capsys.readouterr().out
        assert code == 1
        assert "Would reflow" in out
        assert (project / "src" / "long.js").read_text(encoding="utf-8") == LONG_COMMENT_JS

    def test_check_passes_when_settled(self, project, capsys):
        code = run(["--workspace", str(project), "fix", "--check", "src/clean.js"])
        assert code == 0
        assert "All comments already fit" in capsys.readouterr().out

    def test_diff(self, project, capsys):
        code = run(["--workspace", str(project), "fix", "--diff", "--max-width", "20", "src"])
        out = capsys.readouterr().out
        assert code == 0
        assert "+// 789" in out
        assert "-// 01234567890123456789" in out
        assert (project / "src" / "long.js").read_text(encoding="utf-8") == LONG_COMMENT_JS


class TestErrors:
    """Error reporting at the top level."""

    def test_invalid_config_file(self, project, capsys):
        (project / "commentreflow.toml").write_text("max_width = 0\n", encoding="utf-8")
        assert run(["--workspace", str(project), "lint", "src"]) == 1
        assert "CLI_CONFIG_ERROR" in capsys.readouterr().err

    def test_invalid_width_flag(self, project, capsys):
        assert run(["--workspace", str(project), "fix", "--max-width", "0", "src"]) == 1
        err = capsys.readouterr().err
        assert "CLI_CONFIG_ERROR" in err
        assert "max_width must be positive" in err

    def test_missing_explicit_config(self, project, capsys):
        assert run(["--workspace", str(project), "--config", "nope.toml", "lint"]) == 1
        assert "does not exist" in capsys.readouterr().err

    def test_reraise_toggle(self, clean_env):
        clean_env.setenv("COMMENTREFLOW_RERAISE", "1")
        with pytest.raises(CLIRuntimeError):
            handle_cli_exception(CLIRuntimeError("boom"))

    def test_format_cli_error(self):
        exc = CLIConfigError("Invalid width", hint="Use a positive number", context={"value": 0})
        assert format_cli_error(exc) == "Error [CLI_CONFIG_ERROR]: Invalid width\nHint: Use a positive number"
        assert "value: 0" in format_cli_error(exc, verbose=True)

    def test_format_reflow_error(self):
        exc = ReflowConfigError("bad option", path="commentreflow.toml")
        assert format_cli_error(exc) == "Error: bad option (commentreflow.toml; REFLOW_CONFIG)"

    def test_format_plain_exception(self):
        assert format_cli_error(ValueError("nope")) == "Error: ValueError: nope"
