from __future__ import annotations
import os
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///asfoauth.db"
DEFAULT_COMMUNITY_URL = "https://steamcommunity.com"


class Settings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    environment: str = Field(default="dev")
    database_url: str = Field(default=DEFAULT_DATABASE_URL)
    locale: str = Field(default="en", description="Locale for user facing messages")
    steam_community_url: str = Field(default=DEFAULT_COMMUNITY_URL)
    request_timeout: float = Field(default=30.0, gt=0, description="Steam request timeout in seconds")
    ipc_password: Optional[str] = Field(default=None, description="Password required on /Api requests")


def get_settings(env_file: Optional[str] = None) -> Settings:
    if env_file and os.path.exists(env_file):
        load_dotenv(env_file)
    else:
        load_dotenv()
    data = {
        "environment": os.getenv("ASFOAUTH_ENV", "dev"),
        "database_url": os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        "locale": os.getenv("ASFOAUTH_LOCALE", "en"),
        "steam_community_url": os.getenv("STEAM_COMMUNITY_URL", DEFAULT_COMMUNITY_URL),
        "request_timeout": os.getenv("ASFOAUTH_TIMEOUT", "30"),
        "ipc_password": os.getenv("ASF_IPC_PASSWORD") or None,
    }
    return Settings(**data)
