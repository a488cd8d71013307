"""Built-in comment lint rules."""

from __future__ import annotations

from typing import List, Optional, Set

from commentreflow.config import ReflowOptions
from commentreflow.edits import Edit, EditKind
from commentreflow.engine import ReflowEngine
from commentreflow.line_model import CommentLine
from commentreflow.overflow import is_overflowing

from .core import LintContext, LintFinding, LintSeverity
from .rules import LintRule


class CommentLengthRule(LintRule):
    """Keep comment lines within the maximum width, splitting and merging as needed."""

    MESSAGES = {
        "split": "Comment line should be split to fit within {max_width} characters",
        "merge": "Comment lines can be merged within {max_width} characters",
        "overflow": "Comment line is {length} characters long, exceeding the maximum of {max_width}",
    }

    fixable = True

    def __init__(self, options: Optional[ReflowOptions] = None):
        super().__init__(
            rule_id="comment-length",
            description="Reflow comments to fit the configured maximum line width"
        )
        self.options = options or ReflowOptions()
        self.engine = ReflowEngine(self.options)

    def check(self, context: LintContext) -> List[LintFinding]:
        findings = []
        edits = self.engine.check_source(context.source, context.comments)

        touched: Set[int] = set()
        for edit in edits:
            touched.update(range(edit.line, edit.end_line + 1))
            findings.append(self._fix_finding(context, edit))

        # Lines the engine deliberately leaves overflowing still get reported.
        for comment in context.comments:
            if not self.engine.starts_line(context.source, comment):
                continue
            for index in range(comment.start.line, comment.end.line + 1):
                if index in touched:
                    continue
                line = self.engine.parse_line(context.source, comment, index)
                if is_overflowing(line, self.options.max_width):
                    findings.append(LintFinding(
                        rule_id=self.rule_id,
                        message_id="overflow",
                        message=self.MESSAGES["overflow"].format(
                            length=line.rendered_length,
                            max_width=self.options.max_width,
                        ),
                        severity=LintSeverity.WARNING,
                        line=index,
                        column=0,
                        end_line=index,
                        end_column=line.rendered_length,
                        code_context=line.analyzed_span.strip(),
                        suggestion=self._overflow_suggestion(line),
                    ))

        return findings

    def _fix_finding(self, context: LintContext, edit: Edit) -> LintFinding:
        if edit.kind is EditKind.SPLIT:
            message_id, severity = "split", LintSeverity.WARNING
        else:
            message_id, severity = "merge", LintSeverity.INFO
        text = context.get_line(edit.line) or ""
        return LintFinding(
            rule_id=self.rule_id,
            message_id=message_id,
            message=self.MESSAGES[message_id].format(max_width=self.options.max_width),
            severity=severity,
            line=edit.line,
            column=0,
            end_line=edit.end_line,
            end_column=len(context.get_line(edit.end_line) or ""),
            code_context=text.strip(),
            fix=edit,
        )

    def _overflow_suggestion(self, line: CommentLine) -> Optional[str]:
        if line.directive:
            return f"Directive '{line.directive}' comments are never wrapped; shorten the comment by hand"
        if line.is_table_row:
            return "Table rows are never wrapped; shorten the row by hand"
        if line.content_start >= self.options.max_width:
            return "The comment text starts past max_width; reduce the indentation or raise max_width"
        return "Break the long word by hand or raise max_width"


def get_default_rules(options: Optional[ReflowOptions] = None) -> List[LintRule]:
    """Get the default set of lint rules."""
    return [
        CommentLengthRule(options),
    ]
