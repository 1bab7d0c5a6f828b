from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.app.api.crud import error_response
from backend.app.core.errors import AppError, NotFoundError
from backend.app.db.gateway import DatabaseError

logger = logging.getLogger("stockbox.api")

GENERAL_ERROR_MESSAGE = "An unexpected error occurred"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(_req: Request, exc: AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message, exc.details, code=exc.code),
        )

    @app.exception_handler(RequestValidationError)
    async def _request_validation(_req: Request, exc: RequestValidationError):
        details = [
            {"field": ".".join(str(p) for p in e["loc"]), "message": e["msg"], "type": e["type"]}
            for e in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=error_response("Request validation failed", details, code="VALIDATION_ERROR"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc(req: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return await _app_error(req, NotFoundError(f"Route {req.method} {req.url.path} not found"))
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(str(exc.detail), code="HTTP_ERROR"),
        )

    @app.exception_handler(DatabaseError)
    async def _database_error(req: Request, exc: DatabaseError):
        # pas de détail interne côté client
        logger.error("DB_ERROR %s %s number=%s: %s", req.method, req.url.path, exc.number, exc.message)
        return JSONResponse(
            status_code=500,
            content=error_response(GENERAL_ERROR_MESSAGE, code="INTERNAL_SERVER_ERROR"),
        )

    @app.exception_handler(Exception)
    async def _unhandled_exc(req: Request, exc: Exception):
        logger.exception("UNHANDLED_EXC %s %s: %s", req.method, req.url.path, exc)
        return JSONResponse(
            status_code=500,
            content=error_response(GENERAL_ERROR_MESSAGE, code="INTERNAL_SERVER_ERROR"),
        )
