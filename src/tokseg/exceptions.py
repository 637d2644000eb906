"""Custom exception hierarchy for tokseg."""

__all__ = [
    "ConfigError",
    "InvariantError",
    "PluginError",
    "SpanOutOfBoundsError",
    "TokSegError",
    "TokenizerError",
]


class TokSegError(Exception):
    """Base exception for all tokseg errors."""


class InvariantError(TokSegError):
    """Raised when caller-supplied tokens break a structural invariant.

    These signal corrupted upstream data, not bad user input. Nothing inside
    tokseg catches them.
    """


class SpanOutOfBoundsError(InvariantError, IndexError):
    """Raised when a span reaches past the end of its source buffer."""


class ConfigError(TokSegError):
    """Raised when configuration loading or validation fails."""


class PluginError(TokSegError):
    """Raised when tokenizer loading or registration fails."""


class TokenizerError(TokSegError):
    """Raised when a tokenizer cannot produce tokens for its input."""
