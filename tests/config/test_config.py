from __future__ import annotations

import logging

import pytest

from groundtruth.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_hubspot_config,
    get_server_config,
    require_env_vars,
)
from groundtruth.config.logging import resolve_log_level


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)
    monkeypatch.delenv("OTHER_MISSING", raising=False)
    monkeypatch.setenv("PRESENT_VAR", "value")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["PRESENT_VAR", "OTHER_MISSING", "MISSING_VAR"])

    assert exc.value.names == ("MISSING_VAR", "OTHER_MISSING")
    assert "MISSING_VAR, OTHER_MISSING" in str(exc.value)


def test_require_env_vars_treats_blank_values_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_vars(["EXAMPLE_VAR"])


def test_hubspot_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACCESS_TOKEN", "pat-na1-secret")
    monkeypatch.setenv("CUSTOM_OBJECT_TYPE", "2-12345")
    monkeypatch.delenv("HUBSPOT_BASE_URL", raising=False)

    config = get_hubspot_config()

    assert config.custom_object_type == "2-12345"
    assert config.contact_object_type == "contacts"
    assert config.page_size == 100
    assert config.resilience.base_url == "https://api.hubapi.com"
    assert config.resilience.default_headers == {
        "Authorization": "Bearer pat-na1-secret",
        "Content-Type": "application/json",
    }
    assert config.resilience.retry is not None
    assert "POST" not in config.resilience.retry.allowed_methods


@pytest.mark.parametrize("missing", ["ACCESS_TOKEN", "CUSTOM_OBJECT_TYPE"])
def test_hubspot_config_requires_token_and_object_type(
    monkeypatch: pytest.MonkeyPatch, missing: str
) -> None:
    monkeypatch.setenv("ACCESS_TOKEN", "pat-na1-secret")
    monkeypatch.setenv("CUSTOM_OBJECT_TYPE", "2-12345")
    monkeypatch.delenv(missing)

    with pytest.raises(MissingConfigurationError, match=missing):
        get_hubspot_config()


def test_server_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.delenv("GROUNDTRUTH_ENV", raising=False)

    config = get_server_config()

    assert config.port == 3000
    assert config.host == "127.0.0.1"
    assert not config.is_production


def test_server_config_rejects_invalid_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "eighty")

    with pytest.raises(ConfigurationError):
        get_server_config()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        ("", logging.INFO),
        ("loud", logging.INFO),
    ],
)
def test_log_level_from_environment(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: int
) -> None:
    monkeypatch.setenv("LOG_LEVEL", raw)

    assert resolve_log_level() == expected
