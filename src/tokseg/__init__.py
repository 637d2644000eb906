"""tokseg — token-sequence queries and boundary-aware segmentation.

Wraps the ordered token stream produced by an upstream tokenizer in a
``TokenString`` view that can be queried by token classification and split
into chunks, sentences and paragraphs without copying text.
"""

from tokseg.exceptions import InvariantError, SpanOutOfBoundsError, TokSegError
from tokseg.kinds import KIND_PREDICATES, KindPredicate
from tokseg.token_string import KindQuery, TokenString
from tokseg.tokenizer import BaseTokenizer, validate_tokens
from tokseg.types import FatToken, KindTag, Punctuation, Span, Token, TokenKind, WordMetadata

__version__ = "0.1.0"

__all__ = [
    "KIND_PREDICATES",
    "BaseTokenizer",
    "FatToken",
    "InvariantError",
    "KindPredicate",
    "KindQuery",
    "KindTag",
    "Punctuation",
    "Span",
    "SpanOutOfBoundsError",
    "Token",
    "TokSegError",
    "TokenKind",
    "TokenString",
    "WordMetadata",
    "__version__",
    "validate_tokens",
]
