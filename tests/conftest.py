from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from asfoauth.bots.registry import Bot
from asfoauth.core.dispatcher import LoginDispatcher
from asfoauth.i18n import Localizer


class FakeRegistry:
    """In-memory registry recording every lookup."""

    def __init__(self, *bots: Bot):
        self.bots = {b.name: b for b in bots}
        self.lookups: list[str] = []

    def get_bot(self, name: str) -> Optional[Bot]:
        self.lookups.append(name)
        return self.bots.get(name)


@pytest.fixture
def bot():
    return Bot(
        name="Bot1",
        steam_id="76561198000000001",
        steam_login_secure="76561198000000001%7C%7CeyJhbGciOi",
        session_id="5f1c0ffee",
    )


@pytest.fixture
def registry(bot):
    return FakeRegistry(bot)


@pytest.fixture
def resolver():
    """Mock login-url resolver answering with a usable url for both protocols."""
    r = MagicMock()
    r.login_via_steam_oauth = AsyncMock(return_value="https://example.com/finish?token=abc")
    r.login_via_steam_openid = AsyncMock(return_value="https://example.com/openid/return?ok=1")
    return r


@pytest.fixture
def dispatcher(registry, resolver):
    return LoginDispatcher(registry, resolver, Localizer("en"))
