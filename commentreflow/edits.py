"""Edit instructions produced by the analyzers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from .errors import OverlappingEditsError


class EditKind(Enum):
    """Why an edit was produced."""
    SPLIT = "split"
    MERGE = "merge"


@dataclass(frozen=True)
class Edit:
    """Replace ``source[start:end]`` with ``replacement``.

    Offsets are absolute character offsets into the analyzed source.
    ``line`` and ``end_line`` are the 1-based source lines the edit touches.
    """
    start: int
    end: int
    replacement: str
    kind: EditKind
    line: int
    end_line: int

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end

    def overlaps(self, other: "Edit") -> bool:
        if self.start == other.start:
            return True
        return self.start < other.end and other.start < self.end


def apply_edits(text: str, edits: Iterable[Edit]) -> str:
    """Apply non-overlapping edits to ``text`` and return the result."""
    ordered: List[Edit] = sorted(edits, key=lambda edit: (edit.start, edit.end))
    for previous, current in zip(ordered, ordered[1:]):
        if previous.overlaps(current):
            raise OverlappingEditsError(
                f"Edits at offsets {previous.start} and {current.start} overlap",
                line=current.line,
            )

    result = text
    for edit in reversed(ordered):
        result = result[:edit.start] + edit.replacement + result[edit.end:]
    return result


__all__ = ["Edit", "EditKind", "apply_edits"]
