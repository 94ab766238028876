"""Steam Community login handoff performed with a bot's web session.

Both flows open the third-party login page on steamcommunity.com as the
bot, submit the confirmation form Steam renders for a signed-in account and
return the ``Location`` Steam redirects to. Failures are reported as short
``error: ...`` strings, never raised.
"""
from __future__ import annotations
import logging
import urllib.parse
from html.parser import HTMLParser
from typing import Dict, Optional

import httpx

from ..bots.registry import Bot
from ..config import DEFAULT_COMMUNITY_URL

logger = logging.getLogger(__name__)

REDIRECT_CODES = (301, 302, 303, 307, 308)


class LoginFormParser(HTMLParser):
    """Collect the action and hidden inputs of one ``<form>``.

    With ``form_id`` set only the form carrying that id is read, otherwise
    the first form posting data is used.
    """

    def __init__(self, form_id: Optional[str] = None) -> None:
        super().__init__(convert_charrefs=True)
        self.form_id = form_id
        self.found = False
        self.action: Optional[str] = None
        self.fields: Dict[str, str] = {}
        self._inside = False
        self._done = False

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        tag = tag.lower()
        attrs_dict = {name.lower(): (value or "") for name, value in attrs}
        if tag == "form" and not self._done and not self._inside:
            if self.form_id is not None:
                matches = attrs_dict.get("id") == self.form_id
            else:
                matches = attrs_dict.get("method", "get").lower() == "post"
            if matches:
                self._inside = True
                self.found = True
                self.action = attrs_dict.get("action") or None
            return

        if self._inside and tag == "input":
            if attrs_dict.get("type", "").lower() == "hidden":
                name = attrs_dict.get("name")
                if name:
                    self.fields[name] = attrs_dict.get("value", "")

    def handle_endtag(self, tag: str) -> None:
        if tag.lower() == "form" and self._inside:
            self._inside = False
            self._done = True


class SteamWebLogin:
    def __init__(
        self,
        community_url: str = DEFAULT_COMMUNITY_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.community_url = community_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @property
    def openid_endpoint(self) -> str:
        return f"{self.community_url}/openid/login"

    @property
    def oauth_endpoint(self) -> str:
        return f"{self.community_url}/oauth/login"

    async def login_via_steam_openid(self, bot: Bot, openid_url: str) -> str:
        return await self._handoff(bot, openid_url, self.openid_endpoint, form_id="openidForm")

    async def login_via_steam_oauth(self, bot: Bot, oauth_url: str) -> str:
        return await self._handoff(bot, oauth_url, self.oauth_endpoint, form_id=None)

    def _cookies(self, bot: Bot) -> httpx.Cookies:
        domain = urllib.parse.urlsplit(self.community_url).hostname or ""
        cookies = httpx.Cookies()
        cookies.set("steamLoginSecure", bot.steam_login_secure or "", domain=domain)
        if bot.session_id:
            cookies.set("sessionid", bot.session_id, domain=domain)
        return cookies

    def _client(self, bot: Bot) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            cookies=self._cookies(bot),
            follow_redirects=False,
            transport=self.transport,
        )

    async def _handoff(self, bot: Bot, seed_url: str, endpoint: str, form_id: Optional[str]) -> str:
        if not _is_under(seed_url, endpoint):
            logger.warning("Rejected seed url for bot %s: not under %s", bot.name, endpoint)
            return f"error: url must start with {endpoint}"

        if not bot.is_logged_on:
            logger.warning("Bot %s has no Steam Community session", bot.name)
            return "error: bot is not logged on"

        try:
            async with self._client(bot) as client:
                resp = await client.get(seed_url)

                # an already authorized account is sent straight back to the site
                location = _redirect_target(resp)
                if location:
                    return self._classify_redirect(bot, location)

                if resp.status_code != 200:
                    logger.warning("Steam answered %s for bot %s", resp.status_code, bot.name)
                    return f"error: steam returned {resp.status_code}"

                parser = LoginFormParser(form_id)
                parser.feed(resp.text)
                parser.close()
                if not parser.found or not parser.fields:
                    logger.warning("No login form for bot %s, session may have expired", bot.name)
                    return "error: login form not found"

                action = urllib.parse.urljoin(seed_url, parser.action or endpoint)
                if not _is_under(action, self.community_url):
                    return "error: unexpected form action"

                logger.debug("Submitting %d login fields for bot %s", len(parser.fields), bot.name)
                resp = await client.post(action, data=parser.fields)
        except httpx.HTTPError as exc:
            logger.error("Steam login request failed for bot %s: %s", bot.name, exc)
            return f"error: {exc.__class__.__name__}"

        location = _redirect_target(resp)
        if not location:
            logger.warning("Steam did not redirect bot %s (status %s)", bot.name, resp.status_code)
            return "error: no redirect from steam"
        return self._classify_redirect(bot, location)

    def _classify_redirect(self, bot: Bot, location: str) -> str:
        # staying on steamcommunity.com means the sign-in was refused, usually an expired session
        if _is_under(location, self.community_url):
            logger.warning("Steam kept bot %s on %s", bot.name, urllib.parse.urlsplit(location).path)
            return "error: steam session expired"
        logger.info("Bot %s obtained a login url", bot.name)
        return location


def _redirect_target(resp: httpx.Response) -> Optional[str]:
    if resp.status_code not in REDIRECT_CODES:
        return None
    location = resp.headers.get("Location")
    if not location:
        return None
    return urllib.parse.urljoin(str(resp.request.url), location)


def _is_under(url: str, prefix: str) -> bool:
    target = urllib.parse.urlsplit(url)
    base = urllib.parse.urlsplit(prefix)
    return (
        target.scheme == base.scheme
        and target.netloc.lower() == base.netloc.lower()
        and target.path.startswith(base.path)
    )
