"""Structural parse of a single physical line covered by a comment."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, NamedTuple, Tuple

from .classifiers import is_table_markup, parse_directive, parse_fixme, parse_markup
from .errors import ColumnMetadataError, LineIndexError
from .source import Comment, CommentKind

_LINE_OPEN = "//"
_BLOCK_OPEN = "/*"
_BLOCK_CLOSE = "*/"

_OPEN_PREFIX = re.compile(r"^\**\s*")
# A lone star with nothing after it is still a prefix, so blank javadoc lines have no content.
_CONTINUATION_PREFIX = re.compile(r"^\*(?:\s+|$)")


class LinePosition(Enum):
    """Where a physical line sits within its comment."""
    LINE = "line"
    BLOCK_SINGLE = "block_single"
    BLOCK_FIRST = "block_first"
    BLOCK_LAST = "block_last"
    BLOCK_INTERIOR = "block_interior"

    @classmethod
    def of(cls, comment: Comment, line_index: int) -> "LinePosition":
        if not comment.covers(line_index):
            raise LineIndexError(
                f"Line {line_index} is outside the comment "
                f"({comment.start.line}..{comment.end.line})",
                line=line_index,
            )
        if comment.kind is CommentKind.LINE:
            return cls.LINE
        is_first = line_index == comment.start.line
        is_last = line_index == comment.end.line
        if is_first and is_last:
            return cls.BLOCK_SINGLE
        if is_first:
            return cls.BLOCK_FIRST
        if is_last:
            return cls.BLOCK_LAST
        return cls.BLOCK_INTERIOR


class Region(Enum):
    """Regions of a comment line, in left-to-right order."""
    LEAD_WHITESPACE = 0
    OPEN = 1
    PREFIX = 2
    CONTENT = 3
    SUFFIX = 4
    CLOSE = 5


class _Regions(NamedTuple):
    open: str
    prefix: str
    content: str
    suffix: str
    close: str


@dataclass(frozen=True)
class CommentLine:
    """
    Parsed view of one physical line covered by a comment.

    Every region is a slice of ``text``. Concatenating ``lead_whitespace``,
    ``open``, ``prefix``, ``content``, ``suffix`` and ``close`` reproduces
    ``text`` up to the end of the comment on this line.

    ``markup``/``markup_space`` and ``directive``/``fixme`` are
    classifications of ``content`` and overlap with it.
    """
    comment: Comment
    index: int
    text: str
    position: LinePosition
    lead_whitespace: str
    open: str
    prefix: str
    content: str
    suffix: str
    close: str
    markup: str = ""
    markup_space: str = ""
    directive: str = ""
    fixme: str = ""
    offset: int = 0

    def end_of(self, region: Region) -> int:
        """Return the length of the line's text up to the end of ``region``."""
        lengths = (
            len(self.lead_whitespace),
            len(self.open),
            len(self.prefix),
            len(self.content),
            len(self.suffix),
            len(self.close),
        )
        return sum(lengths[:region.value + 1])

    @property
    def content_start(self) -> int:
        return self.end_of(Region.PREFIX)

    @property
    def rendered_length(self) -> int:
        return self.end_of(Region.CLOSE)

    @property
    def analyzed_span(self) -> str:
        return self.text[:self.rendered_length]

    @property
    def kind(self) -> CommentKind:
        return self.comment.kind

    @property
    def is_javadoc(self) -> bool:
        return self.comment.kind is CommentKind.BLOCK and self.prefix.startswith("*")

    @property
    def is_table_row(self) -> bool:
        return is_table_markup(self.markup)

    @property
    def is_blank(self) -> bool:
        return not self.content

    @property
    def is_first_line(self) -> bool:
        return self.index == self.comment.start.line

    def absolute(self, column: int) -> int:
        """Translate a column on this line into an absolute source offset."""
        return self.offset + column


def _split_content(text: str, start: int, stop: int) -> Tuple[str, str]:
    """Split ``text[start:stop]`` into trimmed content and trailing whitespace."""
    span = text[start:stop]
    content = span.rstrip()
    return content, span[len(content):]


def _check_open(text: str, comment: Comment, lead: str, token: str) -> None:
    if comment.start.column != len(lead) or not text.startswith(token, len(lead)):
        raise ColumnMetadataError(
            f"Expected {token!r} at column {comment.start.column}",
            line=comment.start.line,
            column=comment.start.column,
        )


def _close_start(text: str, comment: Comment) -> int:
    close_start = comment.end.column - len(_BLOCK_CLOSE)
    if close_start < 0 or text[close_start:comment.end.column] != _BLOCK_CLOSE:
        raise ColumnMetadataError(
            f"Expected {_BLOCK_CLOSE!r} ending at column {comment.end.column}",
            line=comment.end.line,
            column=comment.end.column,
        )
    return close_start


def _line_regions(text: str, comment: Comment, lead: str) -> _Regions:
    _check_open(text, comment, lead, _LINE_OPEN)
    after_open = len(lead) + len(_LINE_OPEN)
    rest = text[after_open:]
    prefix = rest[:len(rest) - len(rest.lstrip())]
    content, suffix = _split_content(text, after_open + len(prefix), len(text))
    return _Regions(_LINE_OPEN, prefix, content, suffix, "")


def _block_single_regions(text: str, comment: Comment, lead: str) -> _Regions:
    _check_open(text, comment, lead, _BLOCK_OPEN)
    after_open = len(lead) + len(_BLOCK_OPEN)
    close_start = _close_start(text, comment)
    if close_start < after_open:
        raise ColumnMetadataError(
            "Comment delimiters overlap",
            line=comment.start.line,
            column=comment.start.column,
        )
    prefix = _OPEN_PREFIX.match(text[after_open:close_start]).group(0)
    content, suffix = _split_content(text, after_open + len(prefix), close_start)
    return _Regions(_BLOCK_OPEN, prefix, content, suffix, _BLOCK_CLOSE)


def _block_first_regions(text: str, comment: Comment, lead: str) -> _Regions:
    _check_open(text, comment, lead, _BLOCK_OPEN)
    after_open = len(lead) + len(_BLOCK_OPEN)
    prefix = _OPEN_PREFIX.match(text[after_open:]).group(0)
    content, suffix = _split_content(text, after_open + len(prefix), len(text))
    return _Regions(_BLOCK_OPEN, prefix, content, suffix, "")


def _block_last_regions(text: str, comment: Comment, lead: str) -> _Regions:
    close_start = _close_start(text, comment)
    match = _CONTINUATION_PREFIX.match(text[len(lead):close_start])
    prefix = match.group(0) if match else ""
    content, suffix = _split_content(text, len(lead) + len(prefix), close_start)
    return _Regions("", prefix, content, suffix, _BLOCK_CLOSE)


def _block_interior_regions(text: str, comment: Comment, lead: str) -> _Regions:
    match = _CONTINUATION_PREFIX.match(text[len(lead):])
    prefix = match.group(0) if match else ""
    content, suffix = _split_content(text, len(lead) + len(prefix), len(text))
    return _Regions("", prefix, content, suffix, "")


_SPAN_RULES: Dict[LinePosition, Callable[[str, Comment, str], _Regions]] = {
    LinePosition.LINE: _line_regions,
    LinePosition.BLOCK_SINGLE: _block_single_regions,
    LinePosition.BLOCK_FIRST: _block_first_regions,
    LinePosition.BLOCK_LAST: _block_last_regions,
    LinePosition.BLOCK_INTERIOR: _block_interior_regions,
}


def parse_line(text: str, comment: Comment, line_index: int, *, offset: int = 0) -> CommentLine:
    """
    Parse one physical line of ``comment``.

    Args:
        text: Raw text of the source line, without its line terminator
        comment: The comment covering the line
        line_index: 1-based source line number
        offset: Absolute source offset of the line's first character

    Raises:
        UnknownCommentKindError: If the comment kind is not supported
        LineIndexError: If ``line_index`` is not covered by ``comment``
        ColumnMetadataError: If the comment columns do not match the text
    """
    position = LinePosition.of(comment, line_index)
    lead = text[:len(text) - len(text.lstrip())]
    regions = _SPAN_RULES[position](text, comment, lead)

    markup, markup_space = parse_markup(comment.kind, regions.prefix, regions.content)
    directive = parse_directive(
        comment.kind,
        regions.content,
        regions.prefix,
        first_line=line_index == comment.start.line,
    )

    return CommentLine(
        comment=comment,
        index=line_index,
        text=text,
        position=position,
        lead_whitespace=lead,
        open=regions.open,
        prefix=regions.prefix,
        content=regions.content,
        suffix=regions.suffix,
        close=regions.close,
        markup=markup,
        markup_space=markup_space,
        directive=directive,
        fixme=parse_fixme(regions.content),
        offset=offset,
    )


__all__ = ["CommentLine", "LinePosition", "Region", "parse_line"]
