"""Validation and dispatch of bot-scoped Steam login handoffs."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from starlette.concurrency import run_in_threadpool

from ..bots.registry import Bot, BotRegistry
from ..i18n import Localizer

logger = logging.getLogger(__name__)

SUCCESS_PREFIX = "https"


class LoginProtocol(str, Enum):
    OAUTH = "OAuth"
    OPENID = "OpenId"

    @property
    def url_field(self) -> str:
        return f"{self.value}Url"


class LoginUrlResolver(Protocol):
    async def login_via_steam_oauth(self, bot: Bot, oauth_url: str) -> str:
        ...

    async def login_via_steam_openid(self, bot: Bot, openid_url: str) -> str:
        ...


class LoginRequestError(Exception):
    """A login request rejected before anything was sent to Steam."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class LoginOutcome:
    success: bool
    login_url: str


def classify_login_result(result: str) -> LoginOutcome:
    # the resolver signals success only through the shape of the url
    return LoginOutcome(success=result.startswith(SUCCESS_PREFIX), login_url=result)


class LoginDispatcher:
    def __init__(self, registry: BotRegistry, resolver: LoginUrlResolver, localizer: Optional[Localizer] = None):
        self.registry = registry
        self.resolver = resolver
        self.localizer = localizer or Localizer()

    async def resolve(self, protocol: LoginProtocol, bot_name: Optional[str], seed_url: Optional[str]) -> LoginOutcome:
        """Validate one login request, hand it to the resolver and classify the answer.

        Raises ``LoginRequestError`` for an empty bot name, an unknown bot or an
        empty seed url, checked in that order. The resolver is not called then.
        """
        if not bot_name:
            raise LoginRequestError(f"BotName or {protocol.url_field} can not be null")

        # registry lookups may block on storage, keep them off the event loop
        bot = await run_in_threadpool(self.registry.get_bot, bot_name)
        if bot is None:
            raise LoginRequestError(self.localizer.bot_not_found(bot_name))

        if not seed_url:
            raise LoginRequestError(f"{protocol.url_field} can not be null")

        logger.info("%s login requested for bot %s", protocol.value, bot.name)
        if protocol is LoginProtocol.OAUTH:
            result = await self.resolver.login_via_steam_oauth(bot, seed_url)
        else:
            result = await self.resolver.login_via_steam_openid(bot, seed_url)

        outcome = classify_login_result(result)
        if not outcome.success:
            logger.warning("%s login for bot %s failed: %s", protocol.value, bot.name, result)
        return outcome
