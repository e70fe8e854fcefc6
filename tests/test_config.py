"""Tests for StrategyConfig."""

import dataclasses

import pytest

from flattr_auth import StrategyConfig


def test_config_is_immutable(config):
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.client_id = "other"


def test_scope_string():
    base = dict(client_id="id", client_secret="secret", callback_url="https://app/cb")
    assert StrategyConfig(**base).scope_string is None
    assert StrategyConfig(**base, scope="flattr email").scope_string == "flattr email"
    assert StrategyConfig(**base, scope=["flattr", "extendedread"]).scope_string == "flattr extendedread"


def test_from_env(monkeypatch):
    monkeypatch.setenv("FLATTR_CLIENT_ID", "env-id")
    monkeypatch.setenv("FLATTR_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("FLATTR_CALLBACK_URL", "https://app/cb")
    monkeypatch.setenv("FLATTR_TOKEN_URL", "https://token.example/")
    monkeypatch.delenv("FLATTR_AUTHORIZATION_URL", raising=False)
    monkeypatch.delenv("FLATTR_SCOPE", raising=False)
    monkeypatch.delenv("FLATTR_PROFILE_URL", raising=False)

    config = StrategyConfig.from_env()

    assert config.client_id == "env-id"
    assert config.client_secret == "env-secret"
    assert config.callback_url == "https://app/cb"
    assert config.token_url == "https://token.example/"
    assert config.authorization_url is None
    assert config.scope is None


def test_from_env_custom_prefix(monkeypatch):
    monkeypatch.setenv("OTHER_CLIENT_ID", "x")
    assert StrategyConfig.from_env(prefix="OTHER_").client_id == "x"
