"""Shared fixtures for tokseg tests.

tokseg ships no tokenizer, so the tests carry a tiny regex lexer that turns
English-ish text into classified tokens. It only needs to be good enough to
exercise segmentation.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import pytest

from tokseg.registry import TokenizerRegistry
from tokseg.tokenizer import BaseTokenizer
from tokseg.types import Punctuation, Span, Token, TokenKind, WordMetadata

if TYPE_CHECKING:
    from collections.abc import Callable

_LINKING = WordMetadata(verb=True, linking_verb=True)
_CONJUNCTION = WordMetadata(conjunction=True)

LEXICON: dict[str, WordMetadata] = {
    "is": _LINKING,
    "are": _LINKING,
    "was": _LINKING,
    "were": _LINKING,
    "seems": _LINKING,
    "and": _CONJUNCTION,
    "but": _CONJUNCTION,
    "or": _CONJUNCTION,
    "built": WordMetadata(verb=True),
    "run": WordMetadata(noun=True, verb=True),
    "light": WordMetadata(noun=True, verb=True, adjective=True),
}

_TOKEN_RE = re.compile(
    r"""
      (?P<paragraph>\n{2,})
    | (?P<newline>\n)
    | (?P<space>[ \t]+)
    | (?P<code>`[^`]*`)
    | (?P<number>\d+(?:\.\d+)?)
    | (?P<word>[^\W\d_]+(?:'[^\W\d_]+)?)
    | (?P<ellipsis>\.\.\.)
    | (?P<other>.)
    """,
    re.VERBOSE | re.DOTALL,
)

# typographic variants fold onto the ASCII mark
_PUNCT_ALIASES = {
    "“": '"',
    "”": '"',
    "‘": "'",
    "’": "'",
    "–": "-",
    "—": "-",
}


def _classify(match: re.Match[str]) -> TokenKind:
    group = match.lastgroup
    text = match.group()
    if group == "paragraph":
        return TokenKind.paragraph_break()
    if group == "newline":
        return TokenKind.newline()
    if group == "space":
        return TokenKind.space(len(text))
    if group == "code":
        return TokenKind.unlintable()
    if group == "number":
        return TokenKind.number_kind(float(text))
    if group == "word":
        return TokenKind.word_kind(LEXICON.get(text.lower()))
    if group == "ellipsis":
        return TokenKind.punct(Punctuation.ELLIPSIS)

    try:
        mark = Punctuation(_PUNCT_ALIASES.get(text, text))
    except ValueError:
        return TokenKind.unlintable()
    return TokenKind.punct(mark)


def lex(text: str) -> list[Token]:
    """Tokenize ``text`` for tests."""
    return [
        Token(Span(m.start(), m.end()), _classify(m))
        for m in _TOKEN_RE.finditer(text)
    ]


class LexTokenizer(BaseTokenizer):
    """``BaseTokenizer`` wrapper around :func:`lex`."""

    def tokenize(self, source: str) -> list[Token]:
        return lex(source)


def word(start: int, end: int, metadata: WordMetadata | None = None) -> Token:
    return Token(Span(start, end), TokenKind.word_kind(metadata))


def punct(start: int, mark: Punctuation) -> Token:
    return Token(Span(start, start + 1), TokenKind.punct(mark))


def space(start: int, width: int = 1) -> Token:
    return Token(Span(start, start + width), TokenKind.space(width))


@pytest.fixture
def lexer() -> Callable[[str], list[Token]]:
    """The test lexer as a callable."""
    return lex


@pytest.fixture
def pigs() -> str:
    return "There were three little pigs. They built three little homes."


@pytest.fixture
def lex_registry(monkeypatch: pytest.MonkeyPatch) -> TokenizerRegistry:
    """A registry with the test lexer registered as ``lex``, installed for the CLI."""
    registry = TokenizerRegistry()
    registry.register("lex", lambda cfg: LexTokenizer())
    monkeypatch.setattr("tokseg.cli.default_registry", registry)
    return registry
