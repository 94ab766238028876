from __future__ import annotations
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.dispatcher import LoginRequestError
from .models import GenericResponse
from .routes import router

logger = logging.getLogger(__name__)


def _envelope(status_code: int, message: str) -> JSONResponse:
    body = GenericResponse.fail(message).model_dump(by_alias=True)
    return JSONResponse(status_code=status_code, content=body)


async def login_request_error_handler(request: Request, exc: LoginRequestError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return _envelope(400, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        problems.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    message = "Invalid request: " + "; ".join(problems) if problems else "Invalid request"
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return _envelope(400, message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _envelope(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _envelope(500, "Internal server error")


def create_app() -> FastAPI:
    app = FastAPI(
        title="ASFOAuth",
        description="Log managed Steam bots into third-party websites via Steam OAuth or OpenID",
    )
    app.add_exception_handler(LoginRequestError, login_request_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.include_router(router)
    return app
