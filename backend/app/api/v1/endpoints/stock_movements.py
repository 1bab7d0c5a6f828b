from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from backend.app.api.crud import CrudController, CrudPermission, success_response
from backend.app.api.deps import get_context
from backend.app.core.context import AppContext
from backend.app.db.models.core_types import Permission
from backend.app.schemas.stock_movement import (
    StockMovementCreateBody,
    StockMovementCreateRequest,
    StockMovementGetParams,
    StockMovementGetRequest,
    StockMovementListQuery,
    StockMovementListRequest,
)
from backend.services.stock_movement import (
    stock_movement_create,
    stock_movement_get,
    stock_movement_list,
)

SECURABLE = "STOCK_MOVEMENT"

router = APIRouter(prefix="/stock-movement")


@router.post("")
async def create_stock_movement(request: Request, ctx: AppContext = Depends(get_context)):
    """
    Crée un mouvement (entrada, saida, ajuste, criacao, exclusao).
    Refus métier de la procédure -> 400 avec son message.
    """
    operation = CrudController(ctx, [CrudPermission(SECURABLE, Permission.create)])
    validated = await operation.create(request, StockMovementCreateBody)

    result = await stock_movement_create(
        ctx.db,
        StockMovementCreateRequest(
            **validated.params.model_dump(),
            id_account=validated.credential.id_account,
            id_user=validated.credential.id_user,
        ),
    )
    return success_response(result)


@router.get("")
async def list_stock_movements(request: Request, ctx: AppContext = Depends(get_context)):
    operation = CrudController(ctx, [CrudPermission(SECURABLE, Permission.read)])
    validated = await operation.read(request, StockMovementListQuery)

    result = await stock_movement_list(
        ctx.db,
        StockMovementListRequest(
            **validated.params.model_dump(),
            id_account=validated.credential.id_account,
        ),
    )
    return success_response(result)


@router.get("/{id}")
async def get_stock_movement(request: Request, ctx: AppContext = Depends(get_context)):
    # mouvement inexistant -> data: null, pas une erreur
    operation = CrudController(ctx, [CrudPermission(SECURABLE, Permission.read)])
    validated = await operation.read(request, StockMovementGetParams)

    result = await stock_movement_get(
        ctx.db,
        StockMovementGetRequest(
            id_account=validated.credential.id_account,
            id_stock_movement=validated.params.id,
        ),
    )
    return success_response(result)
