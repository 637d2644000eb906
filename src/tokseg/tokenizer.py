"""Tokenizer seam: the interface upstream tokenizers implement, plus input validation.

tokseg does not tokenize text itself. Tokenizers live in other packages and
are looked up through ``tokseg.registry``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from tokseg.exceptions import InvariantError, SpanOutOfBoundsError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tokseg.types import Token

__all__ = ["BaseTokenizer", "validate_tokens"]

logger = logging.getLogger(__name__)


class BaseTokenizer(ABC):
    """Base class for tokenizers that feed ``TokenString``.

    Subclasses turn source text into an ordered list of non-overlapping
    tokens whose spans index into that same text.
    """

    @abstractmethod
    def tokenize(self, source: str) -> list[Token]:
        """Split ``source`` into classified tokens.

        Args:
            source: The text to tokenize. Token spans index into it.

        Returns:
            Tokens ordered by span start, with disjoint spans.

        Raises:
            TokenizerError: If the text cannot be tokenized.
        """


def validate_tokens(tokens: Sequence[Token], source_len: int | None = None) -> None:
    """Check that ``tokens`` satisfy the ordering invariants segmentation relies on.

    Spans must be increasing and disjoint. When ``source_len`` is given every
    span must also fit inside a buffer of that length.

    Raises:
        InvariantError: If tokens are out of order or overlap.
        SpanOutOfBoundsError: If a span ends past ``source_len``.
    """
    prev_end = 0
    for idx, tok in enumerate(tokens):
        span = tok.span
        if span.start < prev_end:
            logger.error("Token %d at [%d, %d) overlaps its predecessor", idx, span.start, span.end)
            raise InvariantError(
                f"Token {idx} at [{span.start}, {span.end}) starts before the previous "
                f"token ends ({prev_end})"
            )
        if source_len is not None and span.end > source_len:
            logger.error("Token %d at [%d, %d) exceeds source length %d",
                         idx, span.start, span.end, source_len)
            raise SpanOutOfBoundsError(
                f"Token {idx} at [{span.start}, {span.end}) exceeds source of length {source_len}"
            )
        prev_end = span.end

    logger.debug("Validated %d tokens", len(tokens))
