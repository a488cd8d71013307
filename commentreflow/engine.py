"""Reflow engine: drives the line analyzers over whole comments."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .config import ReflowOptions
from .edits import Edit, apply_edits
from .line_model import CommentLine, parse_line
from .overflow import check_overflow
from .scanner import scan_comments
from .source import Comment, CommentKind, SourceText
from .underflow import check_underflow

logger = logging.getLogger(__name__)

_FENCES = ("```", "~~~")
_EXAMPLE_TAG = "@example"


@dataclass(frozen=True)
class _OpaqueState:
    """Tracks fenced code and jsdoc examples while walking a block comment."""
    in_fence: bool = False
    in_example: bool = False


@dataclass
class ReflowResult:
    """Outcome of running the engine to a fixed point."""
    text: str
    passes: int
    edits_applied: int
    converged: bool

    @property
    def is_changed(self) -> bool:
        return self.edits_applied > 0


class ReflowEngine:
    """
    Decides, line by line, whether a comment needs a split or a merge.

    The engine is stateless between calls; it only holds the resolved
    options. Each call sees one source snapshot and returns edits against it.
    """

    def __init__(self, options: Optional[ReflowOptions] = None):
        self.options = options or ReflowOptions()

    def check_source(self, source: SourceText, comments: Iterable[Comment]) -> List[Edit]:
        """Check every comment of a source, never touching a line twice."""
        edits: List[Edit] = []
        claimed_until = 0
        for comment in sorted(comments, key=lambda c: (c.start.line, c.start.column)):
            if comment.start.line <= claimed_until:
                continue
            comment_edits = self.check_comment(source, comment)
            if comment_edits:
                edits.extend(comment_edits)
                claimed_until = max(edit.end_line for edit in comment_edits)
        return edits

    def check_comment(self, source: SourceText, comment: Comment) -> List[Edit]:
        """Return the edits for one comment in the current pass."""
        if not self.starts_line(source, comment):
            logger.debug("Skipping comment at %d:%d that follows code", comment.start.line, comment.start.column)
            return []

        if comment.kind is CommentKind.LINE:
            return self._check_line_comment(source, comment)
        return self._check_block_comment(source, comment)

    def starts_line(self, source: SourceText, comment: Comment) -> bool:
        text = source.line(comment.start.line)
        return not text[:comment.start.column].strip()

    def parse_line(self, source: SourceText, comment: Comment, index: int) -> CommentLine:
        return parse_line(source.line(index), comment, index, offset=source.line_offset(index))

    def _check_line_comment(self, source: SourceText, comment: Comment) -> List[Edit]:
        width = self.options.max_width
        line = self.parse_line(source, comment, comment.start.line)

        edit = check_overflow(line, width, source.eol)
        if edit is None:
            edit = check_underflow(line, self._next_line_comment(source, line), width, source.eol)
        return [edit] if edit else []

    def _next_line_comment(self, source: SourceText, line: CommentLine) -> Optional[CommentLine]:
        index = line.index + 1
        if not source.has_line(index):
            return None
        text = source.line(index)
        stripped = text.lstrip()
        if not stripped.startswith("//"):
            return None
        lead_width = len(text) - len(stripped)
        follower = Comment.line(index, lead_width, len(text))
        return self.parse_line(source, follower, index)

    def _check_block_comment(self, source: SourceText, comment: Comment) -> List[Edit]:
        width = self.options.max_width
        edits: List[Edit] = []
        claimed_until = 0
        state = _OpaqueState()

        current = self.parse_line(source, comment, comment.start.line)
        while current is not None:
            following = None
            if current.index < comment.end.line:
                following = self.parse_line(source, comment, current.index + 1)

            opaque, state = self._advance(current, state)
            if current.index > claimed_until and not opaque:
                edit = check_overflow(current, width, source.eol)
                if edit is None and following is not None:
                    following_opaque, _ = self._advance(following, state)
                    if not following_opaque:
                        edit = check_underflow(current, following, width, source.eol)
                if edit is not None:
                    edits.append(edit)
                    claimed_until = edit.end_line
            current = following

        return edits

    def _advance(self, line: CommentLine, state: _OpaqueState) -> Tuple[bool, _OpaqueState]:
        """Return whether ``line`` is opaque, and the state after it."""
        content = line.content
        if self.options.fenced_code_opaque:
            if content.startswith(_FENCES):
                return True, _OpaqueState(in_fence=not state.in_fence, in_example=state.in_example)
            if state.in_fence:
                return True, state

        if self.options.jsdoc_example_opaque:
            if line.markup == _EXAMPLE_TAG:
                return False, _OpaqueState(in_fence=state.in_fence, in_example=True)
            if state.in_example:
                if line.markup.startswith("@"):
                    return False, _OpaqueState(in_fence=state.in_fence, in_example=False)
                return True, state

        return False, state


def check_text(text: str, options: Optional[ReflowOptions] = None) -> List[Edit]:
    """Scan ``text`` for comments and return the edits of a single pass."""
    source = SourceText(text)
    return ReflowEngine(options).check_source(source, scan_comments(text))


def reflow_text(text: str, options: Optional[ReflowOptions] = None) -> ReflowResult:
    """
    Reflow every comment of ``text`` until no more edits are produced.

    Each pass rescans the comments of the text produced by the previous one,
    the way a linter re-runs its fixes.
    """
    options = options or ReflowOptions()
    engine = ReflowEngine(options)
    applied = 0
    for passes in range(1, options.max_passes + 1):
        source = SourceText(text)
        edits = engine.check_source(source, scan_comments(text))
        if not edits:
            logger.debug("Reached a fixed point after %d pass(es)", passes)
            return ReflowResult(text=text, passes=passes, edits_applied=applied, converged=True)
        logger.debug("Pass %d: applying %d edit(s)", passes, len(edits))
        text = apply_edits(text, edits)
        applied += len(edits)

    logger.warning("Comment reflow stopped after %d passes without converging", options.max_passes)
    return ReflowResult(text=text, passes=options.max_passes, edits_applied=applied, converged=False)


__all__ = ["ReflowEngine", "ReflowResult", "check_text", "reflow_text"]
