"""Tests for splitting overflowing comment lines."""

import pytest

from commentreflow.edits import EditKind, apply_edits
from commentreflow.line_model import Region
from commentreflow.overflow import check_overflow, find_break, is_overflowing
from commentreflow.tokenizer import tokenize

from tests.reflow.conftest import (
    FITTING_LINE_COMMENT,
    LONG_BLOCK_COMMENT,
    LONG_DIRECTIVE,
    LONG_LINE_COMMENT,
    TABLE_JAVADOC,
)


def split(parse, text, width, index=1):
    edit = check_overflow(parse(text, index), width)
    assert edit is not None
    return apply_edits(text, [edit])


class TestReferenceScenarios:
    """Splits at a 20 column limit."""

    def test_line_comment_breaks_inside_word_at_limit(self, parse):
        edit = check_overflow(parse(LONG_LINE_COMMENT), 20)
        assert edit.start == edit.end == 20
        assert edit.replacement == "\n// "
        assert edit.kind is EditKind.SPLIT
        assert (edit.line, edit.end_line) == (1, 1)
        assert apply_edits(LONG_LINE_COMMENT, [edit]) == "// 01234567890123456\n// 789"

    def test_block_comment_breaks_inside_word_at_limit(self, parse):
        assert split(parse, LONG_BLOCK_COMMENT, 20) == "/*012345678901234567\n89*/"

    def test_fitting_line_is_left_alone(self, parse):
        line = parse(FITTING_LINE_COMMENT)
        assert not is_overflowing(line, 20)
        assert check_overflow(line, 20) is None

    def test_directive_is_never_split(self, parse):
        line = parse(LONG_DIRECTIVE)
        assert is_overflowing(line, 20)
        assert check_overflow(line, 20) is None


class TestBreakPoints:
    """Where lines are broken."""

    def test_break_before_last_fitting_space(self, parse):
        assert split(parse, "// alpha beta gamma", 14) == "// alpha beta\n// gamma"

    def test_indentation_is_repeated(self, parse):
        assert split(parse, "    // alpha beta gamma", 18) == "    // alpha beta\n    // gamma"

    def test_break_after_hyphen_without_space(self, parse):
        assert split(parse, "// foo-barbazqux", 10) == "// foo-\n// barbazqux"

    def test_leading_hyphen_is_not_a_break(self, parse):
        # The hyphen at the start of the content must not leave a bare "//" line.
        line = parse("// -abcdefghij")
        assert find_break(line, 10) == 10

    def test_token_wider_than_limit_is_left(self, parse):
        line = parse("// " + "x" * 25)
        assert find_break(line, 20) is None
        assert check_overflow(line, 20) is None

    def test_no_room_after_prefix(self, parse):
        line = parse("        // word word")
        assert find_break(line, 10) is None

    def test_close_marker_moves_with_last_word(self, parse):
        assert split(parse, "/* aaa bbb */", 10) == "/* aaa\nbbb */"

    def test_crlf_terminator(self, parse):
        edit = check_overflow(parse("// alpha beta gamma"), 14, "\r\n")
        assert edit.replacement == "\r\n// "
        assert edit.end - edit.start == 1

    def test_wide_gap_crossing_limit_is_consumed(self, parse):
        edit = check_overflow(parse("// aaaa      bbbb"), 10)
        assert (edit.start, edit.end) == (7, 13)
        assert apply_edits("// aaaa      bbbb", [edit]) == "// aaaa\n// bbbb"

    def test_aligned_javadoc_columns(self, parse):
        text = "/**\n * key      description\n */"
        assert split(parse, text, 16, 2) == "/**\n * key\n * description\n */"

    @pytest.mark.parametrize("width", range(10, 40))
    def test_break_falls_on_token_boundary(self, parse, width):
        line = parse("// the quick brown fox jumps over the lazy dog, twice-over")
        boundaries = {line.content_start + start for start, _ in tokenize(line.content).spans()}
        boundaries.add(line.end_of(Region.CONTENT))
        column = find_break(line, width)
        if column is not None:
            assert column in boundaries


class TestContinuationSyntax:
    """Text that opens the new line."""

    def test_javadoc_interior_line(self, parse):
        text = "/**\n * alpha beta gamma\n */"
        assert split(parse, text, 16, 2) == "/**\n * alpha beta\n * gamma\n */"

    def test_javadoc_first_line_aligns_star(self, parse):
        assert split(parse, "/** alpha beta gamma */", 16) == "/** alpha beta\n * gamma */"

    def test_plain_block_reuses_indentation(self, parse):
        text = "/*\n  alpha beta gamma\n*/"
        assert split(parse, text, 12, 2) == "/*\n  alpha beta\n  gamma\n*/"

    def test_space_added_after_marker_for_hard_break(self, parse):
        assert split(parse, "/**\n * 0123456789\n */", 10, 2) == "/**\n * 0123456\n * 789\n */"


class TestImmunity:
    """Directive and table lines never split."""

    def test_table_row(self, parse):
        line = parse(TABLE_JAVADOC, 2)
        assert line.is_table_row
        assert check_overflow(line, 20) is None

    @pytest.mark.parametrize("width", [5, 20, 40])
    def test_directive_any_width(self, parse, width):
        assert check_overflow(parse("/* eslint-env browser, node, mocha, jest */"), width) is None
