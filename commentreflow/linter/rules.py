"""Lint rule interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .core import LintContext, LintFinding


class LintRule(ABC):
    """
    A check run over every document handed to ``CommentLinter``.

    Subclasses set ``rule_id`` and ``description`` and implement ``check``.
    ``fixable`` advertises whether the rule attaches edits to its findings.
    """

    fixable: bool = False

    def __init__(self, rule_id: str, description: str):
        self.rule_id = rule_id
        self.description = description

    @abstractmethod
    def check(self, context: "LintContext") -> List["LintFinding"]:
        """Return the findings for one document; an empty list when it is clean."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rule_id!r})"
