"""Tests for source records and the line-indexed source view."""

import pytest

from commentreflow.errors import ColumnMetadataError, LineIndexError, UnknownCommentKindError
from commentreflow.source import Comment, CommentKind, SourcePosition, SourceText


class TestSourceText:
    """Line splitting and offset translation."""

    def test_lines_and_offsets(self):
        source = SourceText("a\nbc\r\nd")
        assert source.lines == ["a", "bc", "d"]
        assert source.line_offsets == [0, 2, 6]
        assert source.line_count == 3
        assert source.eol == "\n"

    def test_first_terminator_wins(self):
        assert SourceText("a\r\nb\nc").eol == "\r\n"
        assert SourceText("no newline").eol == "\n"

    def test_trailing_newline_makes_empty_line(self):
        assert SourceText("a\n").lines == ["a", ""]

    def test_line_access_is_one_based(self):
        source = SourceText("first\nsecond")
        assert source.line(1) == "first"
        assert source.line(2) == "second"
        assert source.line_offset(2) == 6
        assert source.offset(2, 3) == 9

    @pytest.mark.parametrize("index", [0, 3, -1])
    def test_line_outside_source(self, index):
        source = SourceText("first\nsecond")
        assert not source.has_line(index)
        with pytest.raises(LineIndexError):
            source.line(index)
        with pytest.raises(LineIndexError):
            source.line_offset(index)

    def test_position_at(self):
        source = SourceText("a\nbc\r\nd")
        assert source.position_at(0) == (0, 0)
        assert source.position_at(3) == (1, 1)
        assert source.position_at(7) == (2, 1)
        with pytest.raises(LineIndexError):
            source.position_at(8)


class TestComment:
    """Comment records handed over by a caller."""

    def test_kind_is_coerced(self):
        comment = Comment("Block", SourcePosition(1, 0), SourcePosition(2, 2))
        assert comment.kind is CommentKind.BLOCK
        assert comment.is_multiline

    def test_unknown_kind(self):
        with pytest.raises(UnknownCommentKindError):
            Comment("Shebang", SourcePosition(1, 0), SourcePosition(1, 2))

    def test_constructors(self):
        line = Comment.line(3, 2, 10)
        assert line.kind is CommentKind.LINE
        assert (line.start, line.end) == (SourcePosition(3, 2), SourcePosition(3, 10))
        block = Comment.block((1, 0), (4, 3))
        assert block.covers(1) and block.covers(4)
        assert not block.covers(5)

    def test_ends_before_start(self):
        with pytest.raises(ColumnMetadataError):
            Comment.block((3, 0), (2, 2))

    def test_negative_column(self):
        with pytest.raises(ColumnMetadataError):
            Comment.line(1, -1, 4)
