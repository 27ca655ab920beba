import dataclasses

import pytest

from core.config import DEFAULT_API_BASE_URL, Settings, load_settings
from core.errors import ConfigurationError


def test_defaults():
    settings = load_settings({"CONTEXTREPO_API_KEY": "gm_abc"})

    assert settings.api_key == "gm_abc"
    assert settings.api_base_url == DEFAULT_API_BASE_URL
    assert settings.timeout_seconds is None
    assert settings.log_level == "INFO"
    assert settings.key_looks_valid


@pytest.mark.parametrize("env", [{}, {"CONTEXTREPO_API_KEY": ""}, {"CONTEXTREPO_API_KEY": "   "}])
def test_missing_credential(env):
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings(env)
    assert "CONTEXTREPO_API_KEY" in exc_info.value.message


def test_overrides():
    settings = load_settings({
        "CONTEXTREPO_API_KEY": "legacy-key",
        "CONTEXTREPO_API_URL": "http://localhost:3210/",
        "CONTEXTREPO_TIMEOUT_SECONDS": "2.5",
        "CONTEXTREPO_LOG_LEVEL": "debug",
    })

    assert settings.api_base_url == "http://localhost:3210"
    assert settings.timeout_seconds == 2.5
    assert settings.log_level == "DEBUG"
    assert not settings.key_looks_valid


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_bad_timeout(raw):
    with pytest.raises(ConfigurationError):
        load_settings({"CONTEXTREPO_API_KEY": "gm_abc", "CONTEXTREPO_TIMEOUT_SECONDS": raw})


def test_settings_are_frozen():
    settings = Settings(api_key="gm_abc")
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.api_key = "gm_other"


def test_headers():
    assert Settings(api_key="gm_abc").headers == {
        "Authorization": "API-Key gm_abc",
        "Content-Type": "application/json",
    }
