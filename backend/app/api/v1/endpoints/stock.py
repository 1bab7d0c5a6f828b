from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from backend.app.api.crud import CrudController, CrudPermission, success_response
from backend.app.api.deps import get_context
from backend.app.api.v1.endpoints.stock_movements import SECURABLE
from backend.app.core.context import AppContext
from backend.app.db.models.core_types import Permission
from backend.app.schemas.stock_movement import StockCurrentGetRequest, StockCurrentQuery
from backend.services.stock_movement import stock_current_get

router = APIRouter(prefix="/stock-current")


@router.get("")
async def get_current_stock(request: Request, ctx: AppContext = Depends(get_context)):
    """
    Stock courant (READ ONLY)
    - calculé par la procédure à partir des mouvements
    - filtre optionnel idProduct
    """
    operation = CrudController(ctx, [CrudPermission(SECURABLE, Permission.read)])
    validated = await operation.read(request, StockCurrentQuery)

    result = await stock_current_get(
        ctx.db,
        StockCurrentGetRequest(
            **validated.params.model_dump(),
            id_account=validated.credential.id_account,
        ),
    )
    return success_response(result)
