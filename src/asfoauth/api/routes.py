from __future__ import annotations
import secrets
from typing import Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request

from ..config import get_settings, Settings
from ..storage.db import DB
from ..bots.registry import SqlBotRegistry
from ..core.dispatcher import LoginDispatcher, LoginProtocol, LoginRequestError
from ..i18n import Localizer
from ..steam.weblogin import SteamWebLogin
from .models import GenericResponse, LoginResponse, OAuthRequest, OpenIdRequest

_databases: dict[str, DB] = {}


def get_settings_dep() -> Settings:
    return get_settings()


def get_db(settings: Settings = Depends(get_settings_dep)) -> DB:
    # one engine per database url for the process lifetime
    db = _databases.get(settings.database_url)
    if db is None:
        db = DB(settings.database_url)
        db.create_all()
        _databases[settings.database_url] = db
    return db


def get_dispatcher(
    db: DB = Depends(get_db), settings: Settings = Depends(get_settings_dep)
) -> LoginDispatcher:
    resolver = SteamWebLogin(settings.steam_community_url, timeout=settings.request_timeout)
    return LoginDispatcher(SqlBotRegistry(db), resolver, Localizer(settings.locale))


def verify_ipc_password(
    request: Request,
    password: Optional[str] = Query(None),
    settings: Settings = Depends(get_settings_dep),
) -> None:
    if not settings.ipc_password:
        return
    supplied = request.headers.get("Authentication") or password
    if not supplied:
        raise HTTPException(401, "IPC password is required")
    if not secrets.compare_digest(supplied.encode(), settings.ipc_password.encode()):
        raise HTTPException(403, "IPC password is invalid")


router = APIRouter()
api_router = APIRouter(prefix="/Api", dependencies=[Depends(verify_ipc_password)])

LoginEnvelope = GenericResponse[LoginResponse]


@router.get("/health")
def health():
    return {"status": "ok"}


async def _resolve(dispatcher: LoginDispatcher, protocol: LoginProtocol, bot_name, seed_url) -> LoginEnvelope:
    outcome = await dispatcher.resolve(protocol, bot_name, seed_url)
    return LoginEnvelope.ok(LoginResponse(success=outcome.success, login_url=outcome.login_url))


def _require_body(body):
    if body is None:
        raise LoginRequestError("Request body can not be null")
    return body


@api_router.post("/OAuth", response_model=LoginEnvelope)
async def oauth(
    request: Optional[OAuthRequest] = Body(None),
    dispatcher: LoginDispatcher = Depends(get_dispatcher),
):
    """Log a bot into a third-party website through Steam OAuth."""
    body = _require_body(request)
    return await _resolve(dispatcher, LoginProtocol.OAUTH, body.bot_name, body.oauth_url)


@api_router.api_route("/OAuth/{bot_name}/{oauth_url:path}", methods=["GET", "POST"], response_model=LoginEnvelope)
async def oauth_route(bot_name: str, oauth_url: str, dispatcher: LoginDispatcher = Depends(get_dispatcher)):
    return await _resolve(dispatcher, LoginProtocol.OAUTH, bot_name, oauth_url)


@api_router.post("/OpenId", response_model=LoginEnvelope)
async def openid(
    request: Optional[OpenIdRequest] = Body(None),
    dispatcher: LoginDispatcher = Depends(get_dispatcher),
):
    """Log a bot into a third-party website through Steam OpenID."""
    body = _require_body(request)
    return await _resolve(dispatcher, LoginProtocol.OPENID, body.bot_name, body.openid_url)


@api_router.api_route("/OpenId/{bot_name}/{openid_url:path}", methods=["GET", "POST"], response_model=LoginEnvelope)
async def openid_route(bot_name: str, openid_url: str, dispatcher: LoginDispatcher = Depends(get_dispatcher)):
    return await _resolve(dispatcher, LoginProtocol.OPENID, bot_name, openid_url)


router.include_router(api_router)
