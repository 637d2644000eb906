"""Tests for tokseg.registry module — tokenizer registry."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from conftest import LexTokenizer

from tokseg.config import default_config
from tokseg.exceptions import PluginError
from tokseg.registry import ENTRY_POINT_GROUP, TokenizerRegistry


def _entry_point(name: str, factory=None, error: Exception | None = None):
    def load():
        if error is not None:
            raise error
        return factory

    return SimpleNamespace(name=name, value=f"fake.module:{name}", load=load)


class TestTokenizerRegistry:
    def test_register_and_create(self):
        registry = TokenizerRegistry()
        registry.register("lex", lambda cfg: LexTokenizer())
        result = registry.create("lex", default_config())
        assert isinstance(result, LexTokenizer)

    def test_factory_receives_config(self):
        registry = TokenizerRegistry()
        seen = []
        registry.register("lex", lambda cfg: seen.append(cfg) or LexTokenizer())
        config = default_config()
        registry.create("lex", config)
        assert seen == [config]

    def test_create_unknown_name_raises(self):
        registry = TokenizerRegistry()
        registry.register("lex", lambda cfg: LexTokenizer())
        with pytest.raises(PluginError, match="Unknown tokenizer 'markdown'"):
            registry.create("markdown", default_config())

    def test_duplicate_register_raises(self):
        registry = TokenizerRegistry()
        registry.register("lex", lambda cfg: "first")
        with pytest.raises(PluginError, match="already registered"):
            registry.register("lex", lambda cfg: "second")

    def test_list_tokenizers_empty(self):
        assert TokenizerRegistry().list_tokenizers() == []

    def test_list_tokenizers_returns_sorted(self):
        registry = TokenizerRegistry()
        registry.register("plain", lambda cfg: "plain")
        registry.register("markdown", lambda cfg: "markdown")
        registry.register("code", lambda cfg: "code")
        assert registry.list_tokenizers() == ["code", "markdown", "plain"]

    def test_has_tokenizer(self):
        registry = TokenizerRegistry()
        registry.register("lex", lambda cfg: "lex")
        assert registry.has_tokenizer("lex") is True
        assert registry.has_tokenizer("plain") is False


class TestAutoDiscovery:
    def test_discovers_entry_points(self, monkeypatch: pytest.MonkeyPatch):
        groups = []

        def fake_entry_points(*, group: str):
            groups.append(group)
            return [_entry_point("lex", lambda cfg: LexTokenizer())]

        monkeypatch.setattr("tokseg.registry.entry_points", fake_entry_points)
        registry = TokenizerRegistry(auto_discover=True)
        assert registry.list_tokenizers() == ["lex"]
        assert isinstance(registry.create("lex", default_config()), LexTokenizer)
        assert groups == [ENTRY_POINT_GROUP]

    def test_discovery_runs_once(self, monkeypatch: pytest.MonkeyPatch):
        calls = []

        def fake_entry_points(*, group: str):
            calls.append(group)
            return []

        monkeypatch.setattr("tokseg.registry.entry_points", fake_entry_points)
        registry = TokenizerRegistry(auto_discover=True)
        registry.list_tokenizers()
        registry.has_tokenizer("lex")
        assert len(calls) == 1

    def test_explicit_registration_wins(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(
            "tokseg.registry.entry_points",
            lambda *, group: [_entry_point("lex", lambda cfg: "discovered")],
        )
        registry = TokenizerRegistry(auto_discover=True)
        registry.register("lex", lambda cfg: "explicit")
        assert registry.create("lex", default_config()) == "explicit"

    def test_broken_entry_point_raises(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(
            "tokseg.registry.entry_points",
            lambda *, group: [_entry_point("broken", error=ImportError("no module"))],
        )
        registry = TokenizerRegistry(auto_discover=True)
        with pytest.raises(PluginError, match="Failed to load tokenizer entry point 'broken'"):
            registry.list_tokenizers()

    def test_failed_discovery_keeps_nothing_and_retries(self, monkeypatch: pytest.MonkeyPatch):
        points = [
            _entry_point("a", lambda cfg: "a"),
            _entry_point("b", error=ImportError("no module")),
            _entry_point("c", lambda cfg: "c"),
        ]
        monkeypatch.setattr("tokseg.registry.entry_points", lambda *, group: points)
        registry = TokenizerRegistry(auto_discover=True)

        with pytest.raises(PluginError, match="entry point 'b'"):
            registry.list_tokenizers()
        with pytest.raises(PluginError, match="entry point 'b'"):
            registry.list_tokenizers()

        points[1] = _entry_point("b", lambda cfg: "b")
        assert registry.list_tokenizers() == ["a", "b", "c"]

    def test_register_after_discovery_replaces(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(
            "tokseg.registry.entry_points",
            lambda *, group: [_entry_point("lex", lambda cfg: "discovered")],
        )
        registry = TokenizerRegistry(auto_discover=True)
        assert registry.has_tokenizer("lex")
        registry.register("lex", lambda cfg: "explicit")
        assert registry.create("lex", default_config()) == "explicit"
        with pytest.raises(PluginError, match="already registered"):
            registry.register("lex", lambda cfg: "again")

    def test_no_discovery_without_flag(self, monkeypatch: pytest.MonkeyPatch):
        def fail(*, group: str):
            raise AssertionError("entry points should not be read")

        monkeypatch.setattr("tokseg.registry.entry_points", fail)
        assert TokenizerRegistry().list_tokenizers() == []
