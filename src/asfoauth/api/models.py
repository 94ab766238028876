from __future__ import annotations
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class GenericResponse(BaseModel, Generic[T]):
    """Envelope wrapping every /Api response."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(alias="Success")
    message: Optional[str] = Field(default=None, alias="Message")
    data: Optional[T] = Field(default=None, alias="Data")

    @classmethod
    def ok(cls, data: Optional[T] = None, message: str = "OK") -> "GenericResponse[T]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str) -> "GenericResponse[T]":
        return cls(success=False, message=message)


# Both keys are required, null values are left to the dispatcher's checks.
class OAuthRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bot_name: Optional[str] = Field(..., alias="BotName")
    oauth_url: Optional[str] = Field(..., alias="OAuthUrl")


class OpenIdRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bot_name: Optional[str] = Field(..., alias="BotName")
    openid_url: Optional[str] = Field(..., alias="OpenIdUrl")


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(alias="Success")
    login_url: Optional[str] = Field(default=None, alias="LoginUrl")
