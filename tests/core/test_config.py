"""Layered configuration."""

import pytest

from formrules.core.config import DEFAULTS, Config, config, get_config, reset_config


def test_defaults():
    settings = Config(environ={})
    assert settings.get("validation.locale") == "en"
    assert settings.get("validation.fallback_locale") == "en"
    assert settings.get("validation.language_directories") == []
    assert settings.get("logging.level") == "WARNING"
    assert settings.get("missing.key", "x") == "x"


def test_defaults_are_not_shared():
    settings = Config(environ={})
    settings.get("validation.language_directories").append("/tmp")
    assert DEFAULTS["validation"]["language_directories"] == []


def test_environment_overrides():
    settings = Config(environ={
        "FORMRULES_VALIDATION_LOCALE": "pt-br",
        "FORMRULES_VALIDATION_FALLBACK_LOCALE": "es",
        "FORMRULES_LOGGING_LEVEL": "debug",
        "OTHER_VALUE": "ignored",
    })
    assert settings.get("validation.locale") == "pt-br"
    assert settings.get("validation.fallback_locale") == "es"
    assert settings.get("logging.level") == "debug"
    assert settings.get("logging.format") == "text"


def test_environment_values_are_parsed():
    settings = Config(environ={
        "FORMRULES_FEATURE_STRICT": "yes",
        "FORMRULES_VALIDATION_LANGUAGE_DIRECTORIES": '["/a", "/b"]',
    })
    assert settings.get("feature.strict") is True
    assert settings.get_list("validation.language_directories") == ["/a", "/b"]


def test_runtime_overrides_win():
    settings = Config(environ={"FORMRULES_VALIDATION_LOCALE": "pt-br"})
    settings.set("validation.locale", "en")
    assert settings.get("validation.locale") == "en"


def test_add_source_priority():
    settings = Config(environ={})
    settings.add_source("app", {"validation": {"locale": "pt-br"}}, priority=10)
    assert settings.get("validation.locale") == "pt-br"
    assert settings.get("validation.fallback_locale") == "en"


def test_get_bool_and_list():
    settings = Config(defaults={"a": {"flag": "true", "items": "x, y,,z"}}, environ={})
    assert settings.get_bool("a.flag")
    assert not settings.get_bool("a.missing")
    assert settings.get_list("a.items") == ["x", "y", "z"]
    assert settings.get_list("a.missing") == []


def test_has_and_item_access():
    settings = Config(environ={})
    assert settings.has("validation.locale")
    assert "logging.format" in settings
    assert settings["validation.locale"] == "en"
    with pytest.raises(KeyError):
        settings["missing"]


def test_global_instance(monkeypatch):
    assert get_config() is get_config()
    get_config().set("validation.locale", "pt-br")
    assert config("validation.locale") == "pt-br"

    monkeypatch.setenv("FORMRULES_VALIDATION_LOCALE", "es")
    reset_config()
    assert config("validation.locale") == "es"
