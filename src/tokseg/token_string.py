"""Read-only views over token sequences: classification queries and segmentation.

A ``TokenString`` borrows an ordered sequence of ``Token`` values (usually the
full-document list produced by a tokenizer) and never copies it. Slicing a
view, or segmenting it into chunks/sentences/paragraphs, yields further views
over the same backing sequence, so downstream code can re-segment recursively:

    doc = TokenString(tokens)
    for paragraph in doc.iter_paragraphs():
        for sentence in paragraph.iter_sentences():
            ...

All iterator methods return fresh generators, so calling one twice restarts
the scan and no state is shared between calls.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import overload

from tokseg.exceptions import InvariantError
from tokseg.kinds import KIND_PREDICATES, KindPredicate, get_predicate
from tokseg.types import FatToken, KindTag, Span, Token, TokenKind

__all__ = ["KindQuery", "Predicate", "TokenString"]

Predicate = Callable[[TokenKind], bool]


def _resolve(predicate: Predicate | str) -> Predicate:
    if isinstance(predicate, str):
        return get_predicate(predicate)
    return predicate


def _install_kind_methods(cls: type[TokenString]) -> type[TokenString]:
    """Attach the ``first_/last_/iter_`` family for every entry in ``KIND_PREDICATES``."""
    for entry in KIND_PREDICATES.values():
        _install_family(cls, entry)
    return cls


def _install_family(cls: type[TokenString], entry: KindPredicate) -> None:
    name = entry.name

    def first(self: TokenString) -> Token | None:
        return self.first(entry)

    def last(self: TokenString) -> Token | None:
        return self.last(entry)

    def last_index(self: TokenString) -> int | None:
        return self.last_index(entry)

    def iter_indices(self: TokenString) -> Iterator[int]:
        return self.iter_indices(entry)

    def iter_matching(self: TokenString) -> Iterator[Token]:
        return self.iter_matching(entry)

    for method, method_name, doc in (
        (first, f"first_{name}", f"First {name} token, or None."),
        (last, f"last_{name}", f"Last {name} token, or None."),
        (last_index, f"last_{name}_index", f"Index of the last {name} token, or None."),
        (iter_indices, f"iter_{name}_indices", f"Ascending indices of {name} tokens."),
        (iter_matching, f"iter_{entry.plural}", f"The {name} tokens, in order."),
    ):
        method.__name__ = method_name
        method.__qualname__ = f"{cls.__name__}.{method_name}"
        method.__doc__ = doc
        setattr(cls, method_name, method)


@_install_kind_methods
class TokenString(Sequence[Token]):
    """A contiguous, read-only window onto an ordered sequence of tokens.

    Besides the generic predicate queries below, every classification in
    ``tokseg.kinds.KIND_PREDICATES`` gets a named method family, e.g. for
    ``word``: ``first_word()``, ``last_word()``, ``last_word_index()``,
    ``iter_word_indices()`` and ``iter_words()``.

    Indices are always relative to the view. ``offset`` maps them back to the
    backing sequence.
    """

    __slots__ = ("_start", "_stop", "_tokens")

    def __init__(self, tokens: Sequence[Token] = ()) -> None:
        if isinstance(tokens, TokenString):
            self._tokens: Sequence[Token] = tokens._tokens
            self._start: int = tokens._start
            self._stop: int = tokens._stop
        else:
            self._tokens = tokens
            self._start = 0
            self._stop = len(tokens)

    @classmethod
    def _window(cls, tokens: Sequence[Token], start: int, stop: int) -> TokenString:
        view = cls.__new__(cls)
        view._tokens = tokens
        view._start = start
        view._stop = stop
        return view

    # -- sequence protocol --------------------------------------------------

    def __len__(self) -> int:
        return self._stop - self._start

    @overload
    def __getitem__(self, index: int) -> Token: ...

    @overload
    def __getitem__(self, index: slice) -> TokenString: ...

    def __getitem__(self, index: int | slice) -> Token | TokenString:
        if isinstance(index, slice):
            start, stop, step = index.indices(len(self))
            if step != 1:
                raise ValueError("TokenString slices must be contiguous (step 1)")
            stop = max(start, stop)
            return self._window(self._tokens, self._start + start, self._start + stop)

        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError(f"TokenString index {index} out of range")
        return self._tokens[self._start + index]

    def __iter__(self) -> Iterator[Token]:
        for i in range(self._start, self._stop):
            yield self._tokens[i]

    def __reversed__(self) -> Iterator[Token]:
        for i in range(self._stop - 1, self._start - 1, -1):
            yield self._tokens[i]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (TokenString, list, tuple)):
            return len(self) == len(other) and all(a == b for a, b in zip(self, other))
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TokenString({list(self)!r})"

    @property
    def offset(self) -> int:
        """Position of this view's first token in the backing sequence."""
        return self._start

    # -- generic queries ----------------------------------------------------

    def first(self, predicate: Predicate | str) -> Token | None:
        test = _resolve(predicate)
        return next((tok for tok in self if test(tok.kind)), None)

    def last(self, predicate: Predicate | str) -> Token | None:
        test = _resolve(predicate)
        return next((tok for tok in reversed(self) if test(tok.kind)), None)

    def last_index(self, predicate: Predicate | str) -> int | None:
        """Index of the last match, found by scanning from the end."""
        test = _resolve(predicate)
        for i, tok in enumerate(reversed(self)):
            if test(tok.kind):
                return len(self) - i - 1
        return None

    def iter_indices(self, predicate: Predicate | str) -> Iterator[int]:
        test = _resolve(predicate)
        return (i for i, tok in enumerate(self) if test(tok.kind))

    def iter_matching(self, predicate: Predicate | str) -> Iterator[Token]:
        return (self[i] for i in self.iter_indices(predicate))

    def query(self, name: str) -> KindQuery:
        """Bind this view to one named classification.

        Raises:
            KeyError: If ``name`` is not in ``KIND_PREDICATES``.
        """
        return KindQuery(self, get_predicate(name))

    # -- derived queries ----------------------------------------------------

    def first_non_whitespace(self) -> Token | None:
        return next((tok for tok in self if not tok.kind.is_whitespace()), None)

    def first_sentence_word(self) -> Token | None:
        """First word of the view, unless an unlintable token comes before it.

        Fragments that open with unlintable content (inline code, for
        instance) have no reliable sentence-initial word, so this returns
        ``None`` for them.
        """
        word_idx = next(self.iter_indices(TokenKind.is_word), None)
        if word_idx is None:
            return None

        unlintable_idx = next(self.iter_indices(TokenKind.is_unlintable), None)
        if unlintable_idx is None or word_idx < unlintable_idx:
            return self[word_idx]
        return None

    def iter_linking_verb_indices(self) -> Iterator[int]:
        """Indices of words whose metadata marks them as linking verbs.

        Raises:
            InvariantError: If the word index iterator yields a token that
                carries no word data.
        """
        for idx in self.iter_indices(KIND_PREDICATES["word"]):
            kind = self[idx].kind
            if kind.tag is not KindTag.WORD:
                raise InvariantError(
                    f"Token {idx} was classified as a word but has kind {kind.tag.value!r}"
                )
            if kind.word is not None and kind.word.is_linking_verb():
                yield idx

    def iter_linking_verbs(self) -> Iterator[Token]:
        return (self[idx] for idx in self.iter_linking_verb_indices())

    def span(self) -> Span | None:
        """Smallest span covering every token in the view.

        An empty view has no span. A single token collapses to an empty span
        at its start, not to the token's own extent, so callers that need the
        token's text should use ``get_content_string`` or ``view[0].span``.
        """
        if not self:
            return None
        if len(self) == 1:
            start = self[0].span.start
            return Span(start, start)
        bounds = [edge for tok in self for edge in (tok.span.start, tok.span.end)]
        return Span(min(bounds), max(bounds))

    # -- segmentation -------------------------------------------------------

    def iter_units(self, terminator: Predicate | str) -> Iterator[TokenString]:
        """Split the view after every token matching ``terminator``.

        Each terminator closes the unit it ends. Text after the last
        terminator forms a final unit; a view with no terminators is a single
        unit. Units are contiguous and together reproduce the view exactly.
        Two adjacent terminators leave a unit holding only the second one.
        """
        start = 0
        for boundary in self.iter_indices(terminator):
            yield self[start : boundary + 1]
            start = boundary + 1

        if start < len(self):
            yield self[start:]

    def iter_chunks(self) -> Iterator[TokenString]:
        """Iterate over chunks.

        For example, the following sentence contains two chunks separated by
        a comma::

            Here is an example, it is short.
        """
        return self.iter_units(KIND_PREDICATES["chunk_terminator"])

    def iter_sentences(self) -> Iterator[TokenString]:
        return self.iter_units(KIND_PREDICATES["sentence_terminator"])

    def iter_paragraphs(self) -> Iterator[TokenString]:
        return self.iter_units(KIND_PREDICATES["paragraph_break"])

    # -- content ------------------------------------------------------------

    def to_fat(self, source: Sequence[str]) -> list[FatToken]:
        return [tok.to_fat(source) for tok in self]

    def get_content_string(self, source: Sequence[str]) -> str:
        """Text from the start of the first token to the end of the last one."""
        if not self:
            return ""
        return Span(self[0].span.start, self[-1].span.end).get_content_string(source)


@dataclass(frozen=True)
class KindQuery:
    """The five per-classification queries bound to one view."""

    view: TokenString
    predicate: KindPredicate

    def first(self) -> Token | None:
        return self.view.first(self.predicate)

    def last(self) -> Token | None:
        return self.view.last(self.predicate)

    def last_index(self) -> int | None:
        return self.view.last_index(self.predicate)

    def iter_indices(self) -> Iterator[int]:
        return self.view.iter_indices(self.predicate)

    def __iter__(self) -> Iterator[Token]:
        return self.view.iter_matching(self.predicate)
