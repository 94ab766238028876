"""Tests for the asfoauth command line."""

import pytest
from typer.testing import CliRunner

from asfoauth.__main__ import app

runner = CliRunner()


@pytest.fixture
def env(tmp_path):
    return {"DATABASE_URL": f"sqlite:///{tmp_path / 'cli.db'}", "ASFOAUTH_LOCALE": "en"}


def invoke(env, *args):
    return runner.invoke(app, list(args), env=env)


def test_bot_lifecycle(env):
    assert invoke(env, "init-db").exit_code == 0

    result = invoke(env, "add-bot", "Bot1", "--steamid", "76561198000000001", "--login-secure", "tok")
    assert result.exit_code == 0
    assert "Bot Bot1 created." in result.output

    result = invoke(env, "list-bots")
    assert result.exit_code == 0
    assert "Bot1\t76561198000000001\tlogged on" in result.output

    result = invoke(env, "remove-bot", "Bot1")
    assert result.exit_code == 0

    result = invoke(env, "remove-bot", "Bot1")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_login_url_unknown_bot(env):
    invoke(env, "init-db")

    result = invoke(env, "login-url", "--bot", "GhostBot", "--url", "https://steamcommunity.com/openid/login")

    assert result.exit_code == 2
    assert "Couldn't find any bot named GhostBot!" in result.output


def test_login_url_bot_without_session(env):
    invoke(env, "init-db")
    invoke(env, "add-bot", "Bot1")

    result = invoke(
        env, "login-url", "--bot", "Bot1", "--protocol", "oauth", "--url", "https://steamcommunity.com/oauth/login"
    )

    assert result.exit_code == 1
    assert '"Success": false' in result.output
    assert "error: bot is not logged on" in result.output


def test_openid_url(env):
    result = invoke(env, "openid-url", "--return-to", "https://example.com/auth/steam")

    assert result.exit_code == 0
    assert result.output.startswith("https://steamcommunity.com/openid/login?")
    assert "openid.realm=https%3A%2F%2Fexample.com" in result.output


def test_add_bot_keeps_disabled_flag(env):
    invoke(env, "init-db")
    invoke(env, "add-bot", "Bot1", "--disabled")

    result = invoke(env, "add-bot", "Bot1", "--login-secure", "rotated")
    assert result.exit_code == 0

    result = invoke(env, "list-bots")
    assert "Bot1\t-\tlogged on (disabled)" in result.output
