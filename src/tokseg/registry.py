"""Tokenizer registry for tokseg.

Maps config strings to factory functions that create tokenizer instances.
Example: ``registry.create("plain", config)`` → ``PlainEnglishTokenizer``.

Tokenizer packages can register themselves without being imported by hand
through the ``tokseg.tokenizers`` entry-point group::

    [project.entry-points."tokseg.tokenizers"]
    plain = "mypkg.lexer:PlainEnglishTokenizer"

The entry point must resolve to a callable that accepts a ``TokSegConfig``.
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from typing import TYPE_CHECKING

from tokseg.exceptions import PluginError

if TYPE_CHECKING:
    from collections.abc import Callable

    from tokseg.config import TokSegConfig
    from tokseg.tokenizer import BaseTokenizer

__all__ = ["ENTRY_POINT_GROUP", "TokenizerRegistry", "default_registry"]

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "tokseg.tokenizers"


class TokenizerRegistry:
    """Config-driven factory that maps a name → tokenizer instance.

    When ``auto_discover`` is ``True``, the first lookup loads every entry
    point in the ``tokseg.tokenizers`` group and registers it under the entry
    point's name. Explicit registrations win over discovered ones, whether
    ``register`` runs before or after discovery.

    Usage::

        registry = TokenizerRegistry()
        registry.register("plain", lambda cfg: PlainEnglishTokenizer())
        tokenizer = registry.create("plain", config)
    """

    def __init__(self, *, auto_discover: bool = False) -> None:
        self._factories: dict[str, Callable[[TokSegConfig], BaseTokenizer]] = {}
        self._auto_discover = auto_discover
        self._discovered = False
        self._discovered_names: set[str] = set()

    def register(self, name: str, factory: Callable[[TokSegConfig], BaseTokenizer]) -> None:
        """Register a tokenizer factory.

        A factory discovered from an entry point is replaced.

        Args:
            name: Tokenizer name (e.g. "plain", "markdown").
            factory: Callable that accepts ``TokSegConfig`` and returns a tokenizer.

        Raises:
            PluginError: If a tokenizer with the same name was already
                registered explicitly.
        """
        if name in self._factories and name not in self._discovered_names:
            raise PluginError(f"Tokenizer '{name}' already registered")

        if name in self._discovered_names:
            self._discovered_names.discard(name)
            logger.debug("Replacing discovered tokenizer %s", name)
        self._factories[name] = factory
        logger.debug("Registered tokenizer %s", name)

    def _ensure_discovered(self) -> None:
        """Lazily load entry-point tokenizers on first use.

        Nothing is kept from a failed discovery, so the next lookup retries it.
        """
        if self._discovered or not self._auto_discover:
            return

        found: dict[str, Callable[[TokSegConfig], BaseTokenizer]] = {}
        for ep in entry_points(group=ENTRY_POINT_GROUP):
            if ep.name in self._factories:
                logger.debug("Skipping entry point %s, name already registered", ep.name)
                continue
            try:
                found[ep.name] = ep.load()
            except Exception as e:
                logger.error("Failed to load tokenizer entry point %s: %s", ep.name, e)
                raise PluginError(f"Failed to load tokenizer entry point '{ep.name}': {e}") from e
            logger.info("Discovered tokenizer %s from %s", ep.name, ep.value)

        self._factories.update(found)
        self._discovered_names.update(found)
        self._discovered = True

    def create(self, name: str, config: TokSegConfig) -> BaseTokenizer:
        """Create a tokenizer instance from the registry.

        Args:
            name: Tokenizer name.
            config: Configuration passed to the factory.

        Returns:
            Tokenizer instance.

        Raises:
            PluginError: If the name is not registered.
        """
        self._ensure_discovered()

        if name not in self._factories:
            raise PluginError(
                f"Unknown tokenizer '{name}'. Available: {sorted(self._factories)}"
            )

        factory = self._factories[name]
        logger.info("Creating tokenizer %s", name)
        return factory(config)

    def list_tokenizers(self) -> list[str]:
        """List registered tokenizer names."""
        self._ensure_discovered()
        return sorted(self._factories)

    def has_tokenizer(self, name: str) -> bool:
        """Check whether a tokenizer is registered."""
        self._ensure_discovered()
        return name in self._factories


default_registry = TokenizerRegistry(auto_discover=True)
