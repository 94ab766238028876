"""Tests for settings loading."""

import pytest

from asfoauth.config import Settings, get_settings
from asfoauth.steam.openid import build_openid_redirect

KEYS = [
    "ASFOAUTH_ENV",
    "DATABASE_URL",
    "ASFOAUTH_LOCALE",
    "STEAM_COMMUNITY_URL",
    "ASFOAUTH_TIMEOUT",
    "ASF_IPC_PASSWORD",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in KEYS:
        # set first so monkeypatch restores the original state afterwards
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


def test_env_file(tmp_path, clean_env):
    env_file = tmp_path / ".env"
    env_file.write_text("ASFOAUTH_LOCALE=zh-CN\nASFOAUTH_TIMEOUT=5\nASF_IPC_PASSWORD=hunter2\n")

    settings = get_settings(str(env_file))

    assert settings.locale == "zh-CN"
    assert settings.request_timeout == 5.0
    assert settings.ipc_password == "hunter2"
    assert settings.steam_community_url == "https://steamcommunity.com"


def test_environment_overrides(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite:///other.db")
    clean_env.setenv("ASF_IPC_PASSWORD", "")

    settings = get_settings()

    assert settings.database_url == "sqlite:///other.db"
    assert settings.ipc_password is None


def test_timeout_must_be_positive():
    with pytest.raises(ValueError):
        Settings(request_timeout=0)


def test_openid_redirect_realm_defaults_to_origin():
    url = build_openid_redirect("https://example.com/auth/steam/callback")

    assert "openid.realm=https%3A%2F%2Fexample.com&" in url
    assert "openid.mode=checkid_setup" in url


def test_openid_redirect_explicit_realm():
    url = build_openid_redirect("https://example.com/cb", realm="https://example.com/")

    assert "openid.realm=https%3A%2F%2Fexample.com%2F&" in url
