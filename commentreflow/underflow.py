"""Underflow analysis: pull words up from the next line when they fit."""

from __future__ import annotations

import logging
from typing import List, Optional

from .edits import Edit, EditKind
from .line_model import CommentLine, Region
from .source import CommentKind
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def same_run(current: CommentLine, next_line: CommentLine) -> bool:
    """Return True when ``next_line`` continues the comment of ``current``."""
    if next_line.index != current.index + 1:
        return False
    if current.kind is CommentKind.BLOCK:
        return next_line.comment == current.comment
    # Consecutive line comments read as one comment when they share indentation.
    return (
        next_line.kind is CommentKind.LINE
        and next_line.lead_whitespace == current.lead_whitespace
    )


def _word_stops(content: str) -> List[int]:
    """Offsets in ``content`` where a whitespace-delimited word run ends."""
    tokens = list(tokenize(content).spans())
    stops = []
    for position, (start, token) in enumerate(tokens):
        if token.isspace():
            continue
        if position + 1 < len(tokens) and not tokens[position + 1][1].isspace():
            continue
        stops.append(start + len(token))
    return stops


def _is_mergeable_source(line: CommentLine) -> bool:
    return not (line.is_blank or line.directive or line.markup or line.fixme)


def _is_standalone_markup(line: CommentLine) -> bool:
    # Headings and bare tags stand alone; list items and tagged lines continue.
    return line.markup.startswith("#") or bool(line.markup and not line.markup_space)


def _is_mergeable_target(line: CommentLine) -> bool:
    if _is_standalone_markup(line):
        return False
    return not (line.is_blank or line.directive or line.is_table_row or line.close)


def check_underflow(
    current: CommentLine,
    next_line: Optional[CommentLine],
    max_width: int,
    eol: str = "\n",
) -> Optional[Edit]:
    """
    Check whether leading words of ``next_line`` fit at the end of ``current``.

    Words are pulled up in order, joined by a single space, for as long as the
    current line stays within ``max_width``. An interior line that would be
    left empty is removed entirely; a last line moves up together with its
    close marker.

    Returns:
        A merge edit, or None when nothing can be pulled up
    """
    if next_line is None or not same_run(current, next_line):
        return None
    if not _is_mergeable_source(next_line) or not _is_mergeable_target(current):
        return None

    current_end = current.end_of(Region.CONTENT)
    # Room for the joining space and the pulled words.
    budget = max_width - current_end - 1
    if budget <= 0:
        return None

    content = next_line.content
    tail = len(next_line.suffix) + len(next_line.close)
    take = 0
    for stop in _word_stops(content):
        needed = stop + tail if stop == len(content) and next_line.close else stop
        if needed > budget:
            break
        take = stop

    if take == 0:
        return None

    start = current.absolute(current_end)
    pulled = content[:take]

    if take == len(content):
        if next_line.close:
            end = next_line.absolute(next_line.end_of(Region.CLOSE))
            replacement = " " + content + next_line.suffix + next_line.close
        else:
            end = next_line.absolute(len(next_line.text))
            replacement = " " + pulled
    else:
        rest = take + len(content[take:]) - len(content[take:].lstrip())
        end = next_line.absolute(next_line.content_start + rest)
        replacement = " " + pulled + eol + next_line.text[:next_line.content_start]

    logger.debug("Pulling %r from line %d up to line %d", pulled, next_line.index, current.index)
    return Edit(
        start=start,
        end=end,
        replacement=replacement,
        kind=EditKind.MERGE,
        line=current.index,
        end_line=next_line.index,
    )


__all__ = ["check_underflow", "same_run"]
