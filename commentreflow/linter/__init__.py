"""
Comment linter.

Wraps the reflow engine as a lint rule so hosts get findings with attached
fixes, plus findings for lines the engine deliberately leaves overflowing.
"""

from __future__ import annotations

__all__ = [
    "CommentLinter",
    "CommentLengthRule",
    "LintContext",
    "LintFinding",
    "LintResult",
    "LintRule",
    "LintSeverity",
    "get_default_rules",
]

from .core import CommentLinter, LintContext, LintFinding, LintResult, LintSeverity
from .rules import LintRule
from .builtin_rules import CommentLengthRule, get_default_rules
