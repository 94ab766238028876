import asyncio
import json
import logging
from typing import Optional
import typer

from .config import get_settings
from .steam.openid import build_openid_redirect
from .steam.weblogin import SteamWebLogin
from .storage.db import DB
from .bots.manage import list_bots, remove_bot, upsert_bot
from .bots.registry import SqlBotRegistry
from .core.dispatcher import LoginDispatcher, LoginProtocol, LoginRequestError
from .i18n import Localizer
from .api.app import create_app
import uvicorn

app = typer.Typer()

logger = logging.getLogger("asfoauth")


def setup_logging(verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to .env config file"
    ),
    verbose: int = typer.Option(0, "-v", count=True, help="Increase verbosity (-v, -vv)"),
):
    if config_file:
        settings = get_settings(config_file)
    else:
        settings = get_settings()
    ctx.obj = {"settings": settings, "db": DB(settings.database_url)}
    setup_logging(verbose)
    logger.debug("Settings loaded: %s", settings.model_dump(exclude={"ipc_password"}))


@app.command()
def init_db(ctx: typer.Context):
    db: DB = ctx.obj["db"]
    db.create_all()
    typer.echo("Database initialized.")


@app.command()
def add_bot(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Bot name"),
    steamid: Optional[str] = typer.Option(None, "--steamid", help="Bot SteamID64"),
    login_secure: Optional[str] = typer.Option(None, "--login-secure", help="steamLoginSecure cookie"),
    session_id: Optional[str] = typer.Option(None, "--session-id", help="sessionid cookie"),
    enabled: Optional[bool] = typer.Option(
        None, "--enabled/--disabled", help="Make the bot resolvable or not, unchanged when omitted"
    ),
):
    db: DB = ctx.obj["db"]
    result = upsert_bot(db, name, steamid, login_secure, session_id, enabled=enabled)
    typer.echo(f"Bot {name} {result['status']}.")


@app.command(name="remove-bot")
def remove_bot_cmd(ctx: typer.Context, name: str = typer.Argument(...)):
    db: DB = ctx.obj["db"]
    if not remove_bot(db, name):
        typer.echo(f"Bot {name} not found.", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Bot {name} removed.")


@app.command(name="list-bots")
def list_bots_cmd(ctx: typer.Context):
    db: DB = ctx.obj["db"]
    for b in list_bots(db):
        state = "logged on" if b["logged_on"] else "no session"
        flag = "" if b["enabled"] else " (disabled)"
        typer.echo(f"{b['name']}\t{b['steamid'] or '-'}\t{state}{flag}")


@app.command()
def login_url(
    ctx: typer.Context,
    bot: str = typer.Option(..., "--bot", help="Bot name or SteamID64"),
    url: str = typer.Option(..., "--url", help="OAuth or OpenID url from the website"),
    protocol: LoginProtocol = typer.Option(LoginProtocol.OPENID, "--protocol", case_sensitive=False),
):
    settings = ctx.obj["settings"]
    db: DB = ctx.obj["db"]
    dispatcher = LoginDispatcher(
        SqlBotRegistry(db),
        SteamWebLogin(settings.steam_community_url, timeout=settings.request_timeout),
        Localizer(settings.locale),
    )
    try:
        outcome = asyncio.run(dispatcher.resolve(protocol, bot, url))
    except LoginRequestError as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=2)
    typer.echo(json.dumps({"Success": outcome.success, "LoginUrl": outcome.login_url}))
    if not outcome.success:
        raise typer.Exit(code=1)


@app.command()
def openid_url(ctx: typer.Context, return_to: str = typer.Option(..., help="Return URL")):
    url = build_openid_redirect(return_to)
    typer.echo(url)


@app.command(name="serve-api")
def serve_api(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(8000, "--port"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload (dev only)"),
):

    app_instance = create_app()
    uvicorn.run(app_instance, host=host, port=port, reload=reload)

if __name__ == "__main__":
    app()
