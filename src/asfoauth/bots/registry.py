"""Read-only lookup of managed bot accounts."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from ..storage.db import DB, BotAccount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bot:
    name: str
    steam_id: Optional[str] = None
    steam_login_secure: Optional[str] = None
    session_id: Optional[str] = None

    @property
    def is_logged_on(self) -> bool:
        return bool(self.steam_login_secure)

    def __repr__(self) -> str:
        # keep cookies out of logs and tracebacks
        return f"Bot(name={self.name!r}, steam_id={self.steam_id!r})"


class BotRegistry(Protocol):
    def get_bot(self, name: str) -> Optional[Bot]:
        ...


class SqlBotRegistry:
    """Bot registry backed by the ``bots`` table.

    A name is matched exactly first. Numeric names that match no bot are
    retried as a SteamID64.
    """

    def __init__(self, db: DB):
        self.db = db

    def get_bot(self, name: str) -> Optional[Bot]:
        if not name:
            return None
        with self.db.session() as s:
            row = s.query(BotAccount).filter_by(name=name, enabled=True).one_or_none()
            if row is None and name.isdigit():
                row = s.query(BotAccount).filter_by(steamid=name, enabled=True).first()
            if row is None:
                logger.debug("No enabled bot matches %r", name)
                return None
            return _to_bot(row)


def _to_bot(row: BotAccount) -> Bot:
    return Bot(
        name=row.name,
        steam_id=row.steamid,
        steam_login_secure=row.steam_login_secure,
        session_id=row.session_id,
    )
