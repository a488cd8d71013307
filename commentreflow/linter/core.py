"""Comment linter: runs rules over one document and collects their findings."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from commentreflow.edits import Edit, apply_edits
from commentreflow.errors import ReflowError
from commentreflow.scanner import scan_comments
from commentreflow.source import Comment, SourceText

from .rules import LintRule

logger = logging.getLogger(__name__)


class LintSeverity(Enum):
    """How loudly a finding is reported."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


@dataclass
class LintFinding:
    """
    One reported problem.

    ``line``/``end_line`` are 1-based source lines and ``column``/``end_column``
    0-based. ``fix`` is the edit that resolves the finding, when there is one.
    """
    rule_id: str
    message_id: str
    message: str
    severity: LintSeverity
    line: Optional[int] = None
    column: Optional[int] = None
    end_line: Optional[int] = None
    end_column: Optional[int] = None
    suggestion: Optional[str] = None
    code_context: Optional[str] = None
    fix: Optional[Edit] = None

    @property
    def is_fixable(self) -> bool:
        return self.fix is not None


@dataclass
class LintResult:
    """Findings for one document, plus rule failures recorded as ``errors``."""
    findings: List[LintFinding]
    errors: List[str]
    warnings: List[str]

    def _severities(self) -> Counter:
        return Counter(finding.severity for finding in self.findings)

    def success(self) -> bool:
        """True when every rule ran to completion."""
        return not self.errors

    def has_issues(self) -> bool:
        return bool(self.findings)

    def error_count(self) -> int:
        return self._severities()[LintSeverity.ERROR]

    def warning_count(self) -> int:
        return self._severities()[LintSeverity.WARNING]

    def fixes(self) -> List[Edit]:
        """Edits attached to findings, in finding order."""
        return [finding.fix for finding in self.findings if finding.fix is not None]


@dataclass
class LintContext:
    """The document as rules see it: raw text, line view and discovered comments."""
    source_text: str
    file_path: str
    source: SourceText
    comments: List[Comment] = field(default_factory=list)

    @classmethod
    def from_text(cls, source_text: str, file_path: str) -> "LintContext":
        return cls(
            source_text=source_text,
            file_path=file_path,
            source=SourceText(source_text),
            comments=scan_comments(source_text),
        )

    def get_line(self, line_number: int) -> Optional[str]:
        """Return a 1-based source line, or None past the end of the document."""
        if not self.source.has_line(line_number):
            return None
        return self.source.line(line_number)


class CommentLinter:
    """
    Runs comment lint rules over a document.

    Comments are discovered once per document and shared by every rule.
    A rule that raises a ``ReflowError`` is recorded in ``LintResult.errors``
    and the remaining rules still run.
    """

    def __init__(self, rules: Optional[List[LintRule]] = None):
        self.rules = list(rules or [])

    def lint_document(self, source_text: str, file_path: str = "untitled.js") -> LintResult:
        """
        Lint the comments of a document.

        Args:
            source_text: Full text of the document
            file_path: Path used in error messages

        Returns:
            LintResult with findings sorted by position
        """
        context = LintContext.from_text(source_text, file_path)
        result = LintResult(findings=[], errors=[], warnings=[])

        for rule in self.rules:
            try:
                result.findings.extend(rule.check(context))
            except ReflowError as exc:
                logger.warning("Rule %s failed on %s: %s", rule.rule_id, file_path, exc.format())
                result.errors.append(f"Rule {rule.rule_id} failed: {exc.format()}")

        result.findings.sort(key=lambda finding: (finding.line or 0, finding.column or 0))
        return result

    def fix_document(self, source_text: str, file_path: str = "untitled.js") -> str:
        """Apply the fixes of a single lint pass and return the new text."""
        result = self.lint_document(source_text, file_path)
        return apply_edits(source_text, result.fixes())
