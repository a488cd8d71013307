"""Classification of comment line content: markup, directives and fixme tags."""

from __future__ import annotations

import re
from typing import Tuple

from .source import CommentKind

# Bullet, ordered list marker, jsdoc tag or markdown heading, then whitespace.
_MARKUP_PATTERN = re.compile(r"^([*-]|\d+\.|@[a-zA-Z]+|#{1,6})(\s+)")
_BARE_TAG_PATTERN = re.compile(r"^@[a-zA-Z]+$")
_TABLE_ROW_PATTERN = re.compile(r"^\|.+\|$")
_TRIPLE_SLASH_PATTERN = re.compile(r"^/\s*<(reference|amd)")

# Recognized only on the first line of a comment.
_FIRST_LINE_DIRECTIVES = (
    ("global ", "global"),
    ("globals ", "globals"),
    ("jslint ", "jslint"),
    ("property ", "property"),
    ("eslint ", "eslint"),
)

# Recognized on any line. Longer literals come before their own prefixes.
_ANY_LINE_DIRECTIVES = (
    ("jshint ", "jshint"),
    ("istanbul ", "istanbul"),
    ("jscs ", "jscs"),
    ("eslint-env", "eslint-env"),
    ("eslint-disable-next-line", "eslint-disable-next-line"),
    ("eslint-disable-line", "eslint-disable-line"),
    ("eslint-disable", "eslint-disable"),
    ("eslint-enable", "eslint-enable"),
    ("exported", "exported"),
    ("@ts-check", "@ts-check"),
    ("@ts-nocheck", "@ts-nocheck"),
    ("@ts-ignore", "@ts-ignore"),
    ("@ts-expect-error", "@ts-expect-error"),
)

_FIXME_TAGS = (
    ("FIXME: ", "FIXME"),
    ("TODO: ", "TODO"),
    ("TODO(", "TODO"),
    ("NOTE: ", "NOTE"),
    ("BUG: ", "BUG"),
    ("WARN: ", "WARN"),
    ("WARNING: ", "WARNING"),
    ("HACK: ", "HACK"),
)


def parse_markup(kind: CommentKind, prefix: str, content: str) -> Tuple[str, str]:
    """
    Parse the leading markup of a comment line.

    Returns ``(markup, markup_space)``. Only javadoc style block comments
    carry markup. A markdown table row is returned whole with no trailing
    space.
    """
    if kind is not CommentKind.BLOCK:
        return "", ""
    if not prefix.startswith("*"):
        return "", ""
    if not content:
        return "", ""

    match = _MARKUP_PATTERN.match(content)
    if match:
        return match.group(1), match.group(2)

    # A jsdoc tag alone on its line, such as "@example", is markup without space.
    if _BARE_TAG_PATTERN.match(content):
        return content, ""

    if _TABLE_ROW_PATTERN.match(content):
        return content, ""

    return "", ""


def is_table_markup(markup: str) -> bool:
    return len(markup) > 1 and markup.startswith("|") and markup.endswith("|")


def parse_directive(kind: CommentKind, content: str, prefix: str = "", first_line: bool = True) -> str:
    """Return the canonical name of the directive that opens ``content``, or ``""``."""
    if not content:
        return ""

    if first_line and not prefix.startswith("*") and content.startswith("tslint:"):
        return "tslint"

    if first_line:
        for literal, name in _FIRST_LINE_DIRECTIVES:
            if content.startswith(literal):
                return name

    for literal, name in _ANY_LINE_DIRECTIVES:
        if content.startswith(literal):
            return name

    if kind is CommentKind.LINE:
        match = _TRIPLE_SLASH_PATTERN.match(content)
        if match:
            return match.group(1)

    return ""


def parse_fixme(content: str) -> str:
    for literal, name in _FIXME_TAGS:
        if content.startswith(literal):
            return name
    return ""


__all__ = ["parse_markup", "parse_directive", "parse_fixme", "is_table_markup"]
