"""Overflow analysis: split comment lines that are wider than the limit."""

from __future__ import annotations

import logging
from typing import Optional

from .edits import Edit, EditKind
from .line_model import CommentLine
from .source import CommentKind
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def is_overflowing(line: CommentLine, max_width: int) -> bool:
    return line.rendered_length > max_width


def find_break(line: CommentLine, max_width: int) -> Optional[int]:
    """
    Find the column at which an overflowing line should be broken.

    The break falls before the whitespace run that precedes the first word
    crossing the limit. Without any whitespace in reach, the line breaks
    after the last hyphen, and failing that inside the word at the limit,
    unless the word could never fit on a line of its own.

    Returns:
        Column on the line's text, or None when the line is left as is
    """
    content_start = line.content_start
    if content_start >= max_width:
        return None

    last_space: Optional[int] = None
    last_hyphen_end: Optional[int] = None

    for start, token in tokenize(line.content).spans():
        begin = content_start + start
        end = begin + len(token)

        if token.isspace():
            if end > max_width:
                return begin
            last_space = begin
            continue

        if end > max_width:
            if last_space is not None:
                return last_space
            if last_hyphen_end is not None:
                return last_hyphen_end
            if len(token) > max_width:
                return None
            return max_width

        if token == "-" and begin > content_start:
            last_hyphen_end = end

    # The content fits but the suffix and close marker do not: move the last
    # word down together with the close marker.
    if line.close and last_space is not None:
        return last_space
    return None


def continuation_syntax(line: CommentLine) -> str:
    """Text that starts a new line split off ``line``."""
    if line.kind is CommentKind.LINE:
        marker = "//"
    elif line.is_javadoc:
        # Align the star under the second character of "/*" on the first line.
        marker = " *" if line.open else "*"
    else:
        return line.lead_whitespace
    return line.lead_whitespace + marker + " "


def check_overflow(line: CommentLine, max_width: int, eol: str = "\n") -> Optional[Edit]:
    """
    Check a comment line for overflow.

    Args:
        line: Parsed comment line
        max_width: Maximum rendered width of a line
        eol: Line terminator used when inserting the break

    Returns:
        A split edit, or None when the line fits or must stay as it is
    """
    if not is_overflowing(line, max_width):
        return None

    if line.directive:
        logger.debug("Line %d overflows but holds directive %r", line.index, line.directive)
        return None

    if line.is_table_row:
        logger.debug("Line %d overflows but is a table row", line.index)
        return None

    break_at = find_break(line, max_width)
    if break_at is None:
        logger.debug("Line %d overflows without a usable break point", line.index)
        return None

    # The whitespace run at the break is replaced by the continuation.
    rest = line.text[break_at:]
    start = line.absolute(break_at)
    end = start + len(rest) - len(rest.lstrip())
    return Edit(
        start=start,
        end=end,
        replacement=eol + continuation_syntax(line),
        kind=EditKind.SPLIT,
        line=line.index,
        end_line=line.index,
    )


__all__ = ["check_overflow", "continuation_syntax", "find_break", "is_overflowing"]
