from __future__ import annotations
from typing import List, Optional

from ..storage.db import DB, BotAccount


def upsert_bot(
    db: DB,
    name: str,
    steamid: Optional[str] = None,
    steam_login_secure: Optional[str] = None,
    session_id: Optional[str] = None,
    enabled: Optional[bool] = None,
) -> dict:
    with db.session() as s:
        bot = s.query(BotAccount).filter_by(name=name).one_or_none()
        created = bot is None
        if created:
            bot = BotAccount(name=name)
            s.add(bot)

        # only overwrite fields that were given
        if steamid is not None:
            bot.steamid = steamid
        if steam_login_secure is not None:
            bot.steam_login_secure = steam_login_secure
        if session_id is not None:
            bot.session_id = session_id
        if enabled is not None:
            bot.enabled = enabled

        s.commit()

    return {"status": "created" if created else "updated", "name": name}


def remove_bot(db: DB, name: str) -> bool:
    with db.session() as s:
        bot = s.query(BotAccount).filter_by(name=name).one_or_none()
        if not bot:
            return False
        s.delete(bot)
        s.commit()
    return True


def list_bots(db: DB) -> List[dict]:
    with db.session() as s:
        rows = s.query(BotAccount).order_by(BotAccount.name).all()
        return [
            {
                "name": b.name,
                "steamid": b.steamid,
                "enabled": b.enabled,
                "logged_on": bool(b.steam_login_secure),
            }
            for b in rows
        ]
