"""Token data contracts for tokseg.

Frozen value types that flow from an upstream tokenizer into the
segmentation layer:
  source buffer + Span → Token(span, kind) → FatToken (owned copy)
"""

from __future__ import annotations

import functools
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from tokseg.exceptions import SpanOutOfBoundsError

__all__ = [
    "FatToken",
    "KindTag",
    "Punctuation",
    "Span",
    "Token",
    "TokenKind",
    "WordMetadata",
]


@dataclass(frozen=True)
class Span:
    """Half-open character range ``[start, end)`` into a source buffer."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start == self.end

    def get_content(self, buffer: Sequence[str]) -> Sequence[str]:
        """Return ``buffer[start:end]``.

        Raises:
            SpanOutOfBoundsError: If the span ends past the end of ``buffer``.
        """
        if self.end > len(buffer):
            raise SpanOutOfBoundsError(
                f"Span [{self.start}, {self.end}) exceeds buffer of length {len(buffer)}"
            )
        return buffer[self.start : self.end]

    def get_content_string(self, buffer: Sequence[str]) -> str:
        """Return the spanned characters as an owned string."""
        return "".join(self.get_content(buffer))


# ---------------------------------------------------------------------------
# Kind taxonomy
# ---------------------------------------------------------------------------


class KindTag(str, Enum):
    """Discriminant of a ``TokenKind``."""

    WORD = "word"
    PUNCTUATION = "punctuation"
    SPACE = "space"
    NEWLINE = "newline"
    NUMBER = "number"
    PARAGRAPH_BREAK = "paragraph_break"
    UNLINTABLE = "unlintable"
    EMAIL_ADDRESS = "email_address"
    URL = "url"
    HOSTNAME = "hostname"


class Punctuation(str, Enum):
    """Punctuation marks, valued by their canonical character."""

    PERIOD = "."
    BANG = "!"
    QUESTION = "?"
    COMMA = ","
    COLON = ":"
    SEMICOLON = ";"
    QUOTE = '"'
    APOSTROPHE = "'"
    PIPE = "|"
    AT = "@"
    ELLIPSIS = "…"
    HYPHEN = "-"
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    AMPERSAND = "&"
    DOLLAR = "$"
    EURO = "€"
    POUND = "£"
    YEN = "¥"

    def is_currency(self) -> bool:
        return self in _CURRENCY

    def is_sentence_terminator(self) -> bool:
        return self in (Punctuation.PERIOD, Punctuation.BANG, Punctuation.QUESTION)


_CURRENCY = frozenset({Punctuation.DOLLAR, Punctuation.EURO, Punctuation.POUND, Punctuation.YEN})


@dataclass(frozen=True, order=True)
class WordMetadata:
    """Dictionary information attached to a word token."""

    noun: bool = False
    verb: bool = False
    adjective: bool = False
    adverb: bool = False
    conjunction: bool = False
    linking_verb: bool = False

    def is_linking_verb(self) -> bool:
        return self.linking_verb

    def is_conjunction(self) -> bool:
        return self.conjunction

    def is_likely_homograph(self) -> bool:
        """True when the word can act as more than one part of speech."""
        parts = (self.noun, self.verb, self.adjective, self.adverb, self.conjunction)
        return sum(parts) > 1


@functools.total_ordering
@dataclass(frozen=True)
class TokenKind:
    """Tagged classification of a token.

    ``tag`` selects the variant. Payloads live inline and are only valid for
    their own variant: ``word`` for WORD, ``punctuation`` for PUNCTUATION,
    ``count`` for SPACE/NEWLINE and ``number`` for NUMBER. Use the
    classmethod constructors rather than building instances by hand.
    """

    tag: KindTag
    word: WordMetadata | None = None
    punctuation: Punctuation | None = None
    count: int = 0
    number: float | None = None

    def __post_init__(self) -> None:
        if self.word is not None and self.tag is not KindTag.WORD:
            raise ValueError(f"Word metadata on non-word kind {self.tag.value}")
        if (self.punctuation is None) == (self.tag is KindTag.PUNCTUATION):
            raise ValueError(f"Punctuation payload mismatch for kind {self.tag.value}")
        if self.number is not None and self.tag is not KindTag.NUMBER:
            raise ValueError(f"Number payload on non-number kind {self.tag.value}")

    # -- constructors -------------------------------------------------------

    @classmethod
    def word_kind(cls, metadata: WordMetadata | None = None) -> TokenKind:
        return cls(KindTag.WORD, word=metadata)

    @classmethod
    def punct(cls, mark: Punctuation) -> TokenKind:
        return cls(KindTag.PUNCTUATION, punctuation=mark)

    @classmethod
    def space(cls, width: int = 1) -> TokenKind:
        return cls(KindTag.SPACE, count=width)

    @classmethod
    def newline(cls, count: int = 1) -> TokenKind:
        return cls(KindTag.NEWLINE, count=count)

    @classmethod
    def number_kind(cls, value: float) -> TokenKind:
        return cls(KindTag.NUMBER, number=value)

    @classmethod
    def paragraph_break(cls) -> TokenKind:
        return cls(KindTag.PARAGRAPH_BREAK)

    @classmethod
    def unlintable(cls) -> TokenKind:
        return cls(KindTag.UNLINTABLE)

    @classmethod
    def email_address(cls) -> TokenKind:
        return cls(KindTag.EMAIL_ADDRESS)

    @classmethod
    def url(cls) -> TokenKind:
        return cls(KindTag.URL)

    @classmethod
    def hostname(cls) -> TokenKind:
        return cls(KindTag.HOSTNAME)

    # -- predicates ---------------------------------------------------------

    def _is_mark(self, mark: Punctuation) -> bool:
        return self.punctuation is mark

    def is_word(self) -> bool:
        return self.tag is KindTag.WORD

    def is_word_like(self) -> bool:
        return self.tag in _WORD_LIKE

    def is_conjunction(self) -> bool:
        return self.word is not None and self.word.is_conjunction()

    def is_linking_verb(self) -> bool:
        return self.word is not None and self.word.is_linking_verb()

    def is_likely_homograph(self) -> bool:
        return self.word is not None and self.word.is_likely_homograph()

    def is_space(self) -> bool:
        return self.tag is KindTag.SPACE

    def is_newline(self) -> bool:
        return self.tag is KindTag.NEWLINE

    def is_whitespace(self) -> bool:
        return self.tag in (KindTag.SPACE, KindTag.NEWLINE)

    def is_number(self) -> bool:
        return self.tag is KindTag.NUMBER

    def is_unlintable(self) -> bool:
        return self.tag is KindTag.UNLINTABLE

    def is_paragraph_break(self) -> bool:
        return self.tag is KindTag.PARAGRAPH_BREAK

    def is_punctuation(self) -> bool:
        return self.tag is KindTag.PUNCTUATION

    def is_apostrophe(self) -> bool:
        return self._is_mark(Punctuation.APOSTROPHE)

    def is_pipe(self) -> bool:
        return self._is_mark(Punctuation.PIPE)

    def is_quote(self) -> bool:
        return self._is_mark(Punctuation.QUOTE)

    def is_at(self) -> bool:
        return self._is_mark(Punctuation.AT)

    def is_ellipsis(self) -> bool:
        return self._is_mark(Punctuation.ELLIPSIS)

    def is_currency(self) -> bool:
        return self.punctuation is not None and self.punctuation.is_currency()

    def is_sentence_terminator(self) -> bool:
        if self.is_paragraph_break():
            return True
        return self.punctuation is not None and self.punctuation.is_sentence_terminator()

    def is_chunk_terminator(self) -> bool:
        if self.is_sentence_terminator():
            return True
        return self.punctuation in _CHUNK_MARKS

    # -- ordering -----------------------------------------------------------

    def _sort_key(self) -> tuple[object, ...]:
        word_key = () if self.word is None else (1, self.word)
        number_key = () if self.number is None else (self.number,)
        mark = "" if self.punctuation is None else self.punctuation.value
        return (self.tag.value, mark, self.count, number_key, word_key)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TokenKind):
            return NotImplemented
        return self._sort_key() < other._sort_key()


_WORD_LIKE = frozenset({
    KindTag.WORD,
    KindTag.NUMBER,
    KindTag.EMAIL_ADDRESS,
    KindTag.URL,
    KindTag.HOSTNAME,
})

_CHUNK_MARKS = frozenset({
    Punctuation.COMMA,
    Punctuation.COLON,
    Punctuation.SEMICOLON,
    Punctuation.QUOTE,
})


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class FatToken:
    """A token that owns its characters instead of pointing into a buffer."""

    content: tuple[str, ...]
    kind: TokenKind

    @property
    def text(self) -> str:
        return "".join(self.content)


@dataclass(frozen=True)
class Token:
    """A classified span of the source buffer.

    Cheap to copy and never validated on construction: the tokenizer that
    builds it guarantees the span fits the buffer it will be resolved against.
    """

    span: Span
    kind: TokenKind

    def get_content(self, source: Sequence[str]) -> Sequence[str]:
        return self.span.get_content(source)

    def get_content_string(self, source: Sequence[str]) -> str:
        return self.span.get_content_string(source)

    def to_fat(self, source: Sequence[str]) -> FatToken:
        """Copy the spanned characters out of ``source`` into a ``FatToken``.

        Raises:
            SpanOutOfBoundsError: If the span does not fit ``source``.
        """
        return FatToken(content=tuple(self.span.get_content(source)), kind=self.kind)
