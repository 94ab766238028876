from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from sqlalchemy import create_engine, String, Text, func
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Mapped, mapped_column
from datetime import datetime


class Base(DeclarativeBase):
    pass


class BotAccount(Base):
    __tablename__ = "bots"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    steamid: Mapped[Optional[str]] = mapped_column(String(32), nullable=True, index=True)
    # steamcommunity.com web session cookies
    steam_login_secure: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    session_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    enabled: Mapped[bool] = mapped_column(default=True)
    last_updated: Mapped[datetime] = mapped_column(default=func.now(), server_default=func.now())


@dataclass
class DB:
    engine_url: str

    def __post_init__(self):
        self.engine = create_engine(
            self.engine_url,
        )
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)

    def create_all(self):
        Base.metadata.create_all(self.engine)

    def session(self):
        return self.SessionLocal()
