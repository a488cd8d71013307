"""Source text records handed to the reflow core by its caller."""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union

from .errors import ColumnMetadataError, LineIndexError, UnknownCommentKindError

# Same line terminators ESLint uses when it builds its lines array.
_LINE_BREAK = re.compile(r"\r\n|[\r\n\u2028\u2029]")


class CommentKind(Enum):
    """Supported comment kinds."""
    LINE = "Line"
    BLOCK = "Block"

    @classmethod
    def coerce(cls, value: Union["CommentKind", str]) -> "CommentKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownCommentKindError(f"Unexpected comment type {value!r}") from None


@dataclass(frozen=True)
class SourcePosition:
    """A 1-based line and 0-based column."""
    line: int
    column: int


@dataclass(frozen=True)
class Comment:
    """
    A comment discovered by the caller.

    ``end.column`` is exclusive: for a block comment it points just past the
    closing ``*/``.
    """
    kind: CommentKind
    start: SourcePosition
    end: SourcePosition

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", CommentKind.coerce(self.kind))
        if self.end.line < self.start.line:
            raise ColumnMetadataError(
                "Comment ends before it starts",
                line=self.start.line,
                column=self.start.column,
            )
        if self.start.column < 0 or self.end.column < 0:
            raise ColumnMetadataError(
                "Comment columns must not be negative",
                line=self.start.line,
                column=self.start.column,
            )

    @classmethod
    def line(cls, line: int, start_column: int, end_column: int) -> "Comment":
        return cls(CommentKind.LINE, SourcePosition(line, start_column), SourcePosition(line, end_column))

    @classmethod
    def block(cls, start: Tuple[int, int], end: Tuple[int, int]) -> "Comment":
        return cls(CommentKind.BLOCK, SourcePosition(*start), SourcePosition(*end))

    @property
    def is_multiline(self) -> bool:
        return self.end.line > self.start.line

    def covers(self, line_index: int) -> bool:
        return self.start.line <= line_index <= self.end.line


class SourceText:
    """Line-indexed read-only view over a source buffer."""

    def __init__(self, text: str):
        self.text = text
        self.lines: List[str] = []
        self.line_offsets: List[int] = []
        self.eol = "\n"

        position = 0
        found_eol = False
        for match in _LINE_BREAK.finditer(text):
            self.line_offsets.append(position)
            self.lines.append(text[position:match.start()])
            if not found_eol:
                self.eol = match.group(0)
                found_eol = True
            position = match.end()
        self.line_offsets.append(position)
        self.lines.append(text[position:])

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def has_line(self, index: int) -> bool:
        return 1 <= index <= len(self.lines)

    def line(self, index: int) -> str:
        """Return the text of a 1-based line without its terminator."""
        if not self.has_line(index):
            raise LineIndexError(
                f"Line {index} is outside the source (1..{len(self.lines)})",
                line=index,
            )
        return self.lines[index - 1]

    def line_offset(self, index: int) -> int:
        """Return the absolute offset of the first character of a 1-based line."""
        if not self.has_line(index):
            raise LineIndexError(
                f"Line {index} is outside the source (1..{len(self.lines)})",
                line=index,
            )
        return self.line_offsets[index - 1]

    def offset(self, line: int, column: int) -> int:
        return self.line_offset(line) + column

    def position_at(self, offset: int) -> Tuple[int, int]:
        """Return the 0-based ``(line, character)`` pair for an absolute offset."""
        if offset < 0 or offset > len(self.text):
            raise LineIndexError(f"Offset {offset} is outside the source")
        line = bisect.bisect_right(self.line_offsets, offset) - 1
        return line, offset - self.line_offsets[line]

    def __repr__(self) -> str:
        return f"SourceText(lines={len(self.lines)})"


__all__ = ["CommentKind", "SourcePosition", "Comment", "SourceText"]
