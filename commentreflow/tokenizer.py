"""Tokenization of comment content for word wrapping."""

from __future__ import annotations

import re
from typing import Iterator, Tuple

# A word is a run of anything but whitespace or hyphens; each hyphen stands alone.
_TOKEN_PATTERN = re.compile(r"[^\s-]+|\s+|-")


class TokenStream:
    """Lazy, restartable sequence of word, whitespace and hyphen tokens."""

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[str]:
        for match in _TOKEN_PATTERN.finditer(self.text):
            yield match.group(0)

    def spans(self) -> Iterator[Tuple[int, str]]:
        """Yield ``(start, token)`` pairs, start relative to the text."""
        for match in _TOKEN_PATTERN.finditer(self.text):
            yield match.start(), match.group(0)

    def __repr__(self) -> str:
        return f"TokenStream({self.text!r})"


def tokenize(text: str) -> TokenStream:
    """Split a string into word, hyphen, and space tokens."""
    return TokenStream(text)


def is_whitespace_token(token: str) -> bool:
    return token.isspace()


__all__ = ["TokenStream", "tokenize", "is_whitespace_token"]
