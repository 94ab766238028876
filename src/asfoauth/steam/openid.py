from __future__ import annotations
import urllib.parse
from typing import Optional

STEAM_OPENID_ENDPOINT = "https://steamcommunity.com/openid/login"
OPENID_NS = "http://specs.openid.net/auth/2.0"
IDENTIFIER_SELECT = "http://specs.openid.net/auth/2.0/identifier_select"


def _default_realm(return_to: str) -> str:
    parts = urllib.parse.urlsplit(return_to)
    if parts.scheme and parts.netloc:
        return f"{parts.scheme}://{parts.netloc}"
    return return_to


def build_openid_redirect(return_to: str, realm: Optional[str] = None) -> str:
    params = {
        "openid.ns": OPENID_NS,
        "openid.mode": "checkid_setup",
        "openid.return_to": return_to,
        "openid.realm": realm or _default_realm(return_to),
        "openid.identity": IDENTIFIER_SELECT,
        "openid.claimed_id": IDENTIFIER_SELECT,
    }
    return f"{STEAM_OPENID_ENDPOINT}?{urllib.parse.urlencode(params)}"
