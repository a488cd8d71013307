"""Test configuration and fixtures for reflow tests."""

import pytest

from commentreflow.config import ReflowOptions
from commentreflow.line_model import parse_line
from commentreflow.scanner import scan_comments
from commentreflow.source import SourceText


# Comments used across the analyzer and engine tests
LONG_LINE_COMMENT = "// 01234567890123456789"
FITTING_LINE_COMMENT = "// 01234567890123456"
LONG_BLOCK_COMMENT = "/*01234567890123456789*/"
SHORT_JAVADOC = "/**\n * short\n * line\n */"
LONG_DIRECTIVE = (
    "// eslint-disable-next-line no-console and then a very long trailing "
    "explanation that keeps going"
)

PARAGRAPH_JAVADOC = """/**
 * Reflowing comments keeps long explanations readable in narrow editors
 * and keeps diffs small.
 *
 * @param width the maximum number of characters allowed on a line
 */"""

FENCED_JAVADOC = """/**
 * Example:
 * ```
 * const value = computeSomethingVeryLongThatShouldNeverBeWrapped(argument);
 * ```
 */"""

EXAMPLE_JAVADOC = """/**
 * Adds numbers.
 * @example
 * add(1, 2) // returns the sum of both arguments passed to the function
 * @returns the sum
 */"""

TABLE_JAVADOC = """/**
 * | option name | what the option does when it is set |
 * | width | max |
 */"""


@pytest.fixture
def narrow():
    """Options with the 20 column limit used by the reference scenarios."""
    return ReflowOptions(max_width=20)


@pytest.fixture
def parse():
    """Parse line ``index`` of ``text`` using the comment that covers it."""

    def _parse(text, index=1):
        source = SourceText(text)
        comment = next(c for c in scan_comments(text) if c.covers(index))
        return parse_line(source.line(index), comment, index, offset=source.line_offset(index))

    return _parse
