"""
Language Server Protocol bridge for comment reflow.

Converts lint findings and reflow edits into ``lsprotocol`` types so an
editor integration can publish diagnostics and offer quick fixes.

Usage:
    from commentreflow.lsp import diagnostics_for, code_actions_for

    diagnostics = diagnostics_for(result.findings)
    actions = code_actions_for(uri, source, result.findings)
"""

from __future__ import annotations

from typing import Dict, List

from lsprotocol.types import (
    CodeAction,
    CodeActionKind,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    TextEdit,
    WorkspaceEdit,
)

from commentreflow.edits import Edit
from commentreflow.linter import LintFinding, LintSeverity
from commentreflow.source import SourceText

DIAGNOSTIC_SOURCE = "comment-reflow"

_SEVERITY_MAP: Dict[LintSeverity, DiagnosticSeverity] = {
    LintSeverity.ERROR: DiagnosticSeverity.Error,
    LintSeverity.WARNING: DiagnosticSeverity.Warning,
    LintSeverity.INFO: DiagnosticSeverity.Information,
    LintSeverity.HINT: DiagnosticSeverity.Hint,
}


def _position(source: SourceText, offset: int) -> Position:
    line, character = source.position_at(offset)
    return Position(line=line, character=character)


def edit_to_text_edit(source: SourceText, edit: Edit) -> TextEdit:
    """Convert an offset based edit into an LSP ``TextEdit``."""
    return TextEdit(
        range=Range(start=_position(source, edit.start), end=_position(source, edit.end)),
        new_text=edit.replacement,
    )


def finding_to_diagnostic(finding: LintFinding) -> Diagnostic:
    line = (finding.line or 1) - 1
    end_line = (finding.end_line or finding.line or 1) - 1
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=finding.column or 0),
            end=Position(line=end_line, character=finding.end_column or 0),
        ),
        message=finding.message,
        severity=_SEVERITY_MAP[finding.severity],
        code=finding.message_id,
        source=DIAGNOSTIC_SOURCE,
    )


def diagnostics_for(findings: List[LintFinding]) -> List[Diagnostic]:
    return [finding_to_diagnostic(finding) for finding in findings]


def code_actions_for(uri: str, source: SourceText, findings: List[LintFinding]) -> List[CodeAction]:
    """Build one quick fix per fixable finding."""
    actions: List[CodeAction] = []
    for finding in findings:
        if finding.fix is None:
            continue
        title = "Split comment line" if finding.message_id == "split" else "Merge comment lines"
        actions.append(
            CodeAction(
                title=title,
                kind=CodeActionKind.QuickFix,
                diagnostics=[finding_to_diagnostic(finding)],
                edit=WorkspaceEdit(changes={uri: [edit_to_text_edit(source, finding.fix)]}),
                is_preferred=True,
            )
        )
    return actions


__all__ = [
    "DIAGNOSTIC_SOURCE",
    "edit_to_text_edit",
    "finding_to_diagnostic",
    "diagnostics_for",
    "code_actions_for",
]
