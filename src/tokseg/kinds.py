"""Dispatch table of the token classifications that ``TokenString`` queries by name.

Each entry maps a classification name (``"word"``, ``"sentence_terminator"``,
...) to the ``TokenKind`` predicate that decides membership. ``TokenString``
derives its ``first_<name>``/``last_<name>``/``iter_<name>_indices``/...
method family from this table, so adding an entry here is all it takes to
expose a new classification.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from tokseg.types import TokenKind

__all__ = ["KIND_PREDICATES", "KindPredicate", "get_predicate"]

KindTest = Callable[[TokenKind], bool]


@dataclass(frozen=True)
class KindPredicate:
    """One named classification."""

    name: str
    plural: str
    test: KindTest

    def __call__(self, kind: TokenKind) -> bool:
        return self.test(kind)


def _entry(name: str, plural: str | None = None) -> KindPredicate:
    return KindPredicate(
        name=name,
        plural=plural or f"{name}s",
        test=getattr(TokenKind, f"is_{name}"),
    )


KIND_PREDICATES: dict[str, KindPredicate] = {
    entry.name: entry
    for entry in (
        _entry("word"),
        _entry("word_like"),
        _entry("conjunction"),
        _entry("space"),
        _entry("apostrophe"),
        _entry("pipe"),
        _entry("quote"),
        _entry("number"),
        _entry("at"),
        _entry("ellipsis", "ellipses"),
        _entry("unlintable"),
        _entry("sentence_terminator"),
        _entry("paragraph_break"),
        _entry("chunk_terminator"),
        _entry("punctuation", "punctuations"),
        _entry("currency", "currencies"),
        _entry("likely_homograph"),
    )
}


def get_predicate(name: str) -> KindPredicate:
    """Return the table entry for ``name``.

    Raises:
        KeyError: If ``name`` is not a known classification.
    """
    try:
        return KIND_PREDICATES[name]
    except KeyError:
        raise KeyError(
            f"Unknown token classification {name!r}. Available: {sorted(KIND_PREDICATES)}"
        ) from None
