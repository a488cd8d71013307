"""Error hierarchy for comment reflow.

Only contract violations and configuration problems are errors. Text that
cannot be reflowed (an overlong word, a directive) is a normal outcome and
never raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class ErrorLocation:
    """Where an error points: a file, a 1-based line and a 0-based column."""
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def __str__(self) -> str:
        if self.path is None:
            return f"line {self.line}" if self.line is not None else ""
        parts = [self.path]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)


class ReflowError(Exception):
    """Base class for all errors raised by the reflow core."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, line=line, column=column)
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    @property
    def path(self) -> Optional[str]:
        return self.location.path

    @property
    def line(self) -> Optional[int]:
        return self.location.line

    @property
    def column(self) -> Optional[int]:
        return self.location.column

    def format(self) -> str:
        """Render ``message (location; CODE) Hint: ...`` for terminal output."""
        details: List[str] = [part for part in (str(self.location), self.code or "") if part]
        text = self.message
        if details:
            text += f" ({'; '.join(details)})"
        if self.hint:
            text += f" Hint: {self.hint}"
        return text


class ContractViolation(ReflowError):
    """Raised when a caller hands the core inconsistent comment metadata.

    These are defects in the caller, not properties of the analyzed text.
    """

    code = "REFLOW_CONTRACT"


class UnknownCommentKindError(ContractViolation):
    """Raised when a comment kind is neither Line nor Block."""

    code = "REFLOW_UNKNOWN_KIND"


class LineIndexError(ContractViolation):
    """Raised when a line index falls outside the source or the comment."""

    code = "REFLOW_LINE_INDEX"


class ColumnMetadataError(ContractViolation):
    """Raised when comment columns do not point at the comment delimiters."""

    code = "REFLOW_COLUMN"


class OverlappingEditsError(ContractViolation):
    """Raised when two edits applied in the same pass share a range."""

    code = "REFLOW_OVERLAP"


class ReflowConfigError(ReflowError):
    """Raised when reflow options are missing or out of range."""

    code = "REFLOW_CONFIG"


__all__ = [
    "ErrorLocation",
    "ReflowError",
    "ContractViolation",
    "UnknownCommentKindError",
    "LineIndexError",
    "ColumnMetadataError",
    "OverlappingEditsError",
    "ReflowConfigError",
]
