"""Comment discovery for C-family source text.

Finds ``//`` and ``/* */`` comments while stepping over string and template
literals, so the engine can be driven without an external parser.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .source import Comment, CommentKind, SourcePosition

logger = logging.getLogger(__name__)

_NEWLINES = ("\n", "\r", "\u2028", "\u2029")


class CommentScanner:
    """Single pass scanner producing comments with 1-based lines and 0-based columns."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 0
        self.comments: List[Comment] = []

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character without consuming."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        char = self.source[self.pos]
        self.pos += 1

        if char == "\r" and self.peek() == "\n":
            self.column += 1
        elif char in _NEWLINES:
            self.line += 1
            self.column = 0
        else:
            self.column += 1

        return char

    def at_newline(self) -> bool:
        return self.peek() in _NEWLINES

    def skip_hashbang(self) -> None:
        if self.source.startswith("#!"):
            while self.peek() is not None and not self.at_newline():
                self.advance()

    def read_line_comment(self) -> None:
        start = SourcePosition(self.line, self.column)
        while self.peek() is not None and not self.at_newline():
            self.advance()
        self.comments.append(Comment(CommentKind.LINE, start, SourcePosition(self.line, self.column)))

    def read_block_comment(self) -> None:
        start = SourcePosition(self.line, self.column)
        self.advance()  # /
        self.advance()  # *
        while self.peek() is not None:
            if self.peek() == "*" and self.peek(1) == "/":
                self.advance()
                self.advance()
                self.comments.append(Comment(CommentKind.BLOCK, start, SourcePosition(self.line, self.column)))
                return
            self.advance()
        logger.debug("Unterminated block comment at %d:%d", start.line, start.column)

    def skip_string(self) -> None:
        quote = self.advance()
        while self.peek() is not None:
            char = self.peek()
            if char == "\\":
                self.advance()
                self.advance()
            elif char == quote:
                self.advance()
                return
            elif self.at_newline():
                return
            else:
                self.advance()

    def skip_template(self) -> None:
        self.advance()  # `
        while self.peek() is not None:
            char = self.advance()
            if char == "\\":
                self.advance()
            elif char == "`":
                return

    def scan(self) -> List[Comment]:
        """Scan the entire source."""
        self.skip_hashbang()
        while self.pos < len(self.source):
            char = self.peek()
            if char == "/" and self.peek(1) == "/":
                self.read_line_comment()
            elif char == "/" and self.peek(1) == "*":
                self.read_block_comment()
            elif char in ("'", '"'):
                self.skip_string()
            elif char == "`":
                self.skip_template()
            else:
                self.advance()
        return self.comments


def scan_comments(text: str) -> List[Comment]:
    """Return the comments of ``text`` in source order."""
    return CommentScanner(text).scan()


__all__ = ["CommentScanner", "scan_comments"]
