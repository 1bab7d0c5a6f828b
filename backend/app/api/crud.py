from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from backend.app.core.context import AppContext
from backend.app.core.errors import ForbiddenError, ValidationError
from backend.app.core.security import Credential
from backend.app.db.models.core_types import Permission

logger = logging.getLogger("stockbox.api")

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class CrudPermission:
    securable: str
    permission: Permission


@dataclass(frozen=True)
class ValidatedRequest(Generic[M]):
    credential: Credential
    params: M


def iso_timestamp() -> str:
    # même forme que Date.toISOString() : millisecondes + Z
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def success_response(data: Any) -> dict[str, Any]:
    return {
        "success": True,
        "data": jsonable_encoder(data),
        "timestamp": iso_timestamp(),
    }


def error_response(message: str, details: Any = None, code: str | None = None) -> dict[str, Any]:
    error: dict[str, Any] = {"message": message}
    if code:
        error["code"] = code
    if details is not None:
        error["details"] = jsonable_encoder(details)
    return {
        "success": False,
        "error": error,
        "timestamp": iso_timestamp(),
    }


def validation_details(exc: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "field": ".".join(str(p) for p in err["loc"]) or "body",
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]


async def collect_params(request: Request) -> dict[str, Any]:
    """path params + query + body JSON, le body l'emporte."""
    params: dict[str, Any] = {**request.path_params, **request.query_params}

    body = await request.body()
    if body:
        try:
            payload = json.loads(body)
        except ValueError:
            raise ValidationError([{"field": "body", "message": "Invalid JSON", "type": "json_invalid"}]) from None
        if not isinstance(payload, dict):
            raise ValidationError([{"field": "body", "message": "Body must be a JSON object", "type": "model_type"}])
        params.update(payload)

    return params


class CrudController:
    """
    Pipeline commun des endpoints : validation -> identité -> permissions.
    Lève ValidationError / UnauthorizedError / ForbiddenError ; le service n'est jamais appelé dans ces cas.
    """

    def __init__(self, context: AppContext, permissions: list[CrudPermission]):
        self.context = context
        self.permissions = permissions

    async def create(self, request: Request, schema: type[M]) -> ValidatedRequest[M]:
        return await self._validate_request(request, schema, Permission.create)

    async def read(self, request: Request, schema: type[M]) -> ValidatedRequest[M]:
        return await self._validate_request(request, schema, Permission.read)

    async def _validate_request(self, request: Request, schema: type[M], operation: Permission) -> ValidatedRequest[M]:
        raw = await collect_params(request)
        try:
            params = schema.model_validate(raw)
        except PydanticValidationError as exc:
            raise ValidationError(validation_details(exc)) from exc

        credential = await self.context.auth.authenticate(request)

        missing = []
        for p in self.permissions:
            if not await self.context.permissions.has_permission(credential, p.securable, p.permission):
                missing.append(f"{p.securable}:{p.permission.value}")
        if missing:
            logger.info("%s denied for account=%s user=%s: %s", operation.value, credential.id_account, credential.id_user, missing)
            raise ForbiddenError(missing)

        return ValidatedRequest(credential=credential, params=params)
