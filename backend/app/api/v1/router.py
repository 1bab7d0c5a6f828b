from fastapi import APIRouter

from backend.app.api.v1.endpoints.stock import router as stock_router
from backend.app.api.v1.endpoints.stock_movements import router as stock_movements_router

# authentifié
internal_router = APIRouter(prefix="/internal")
internal_router.include_router(stock_movements_router, tags=["stock_movements"])
internal_router.include_router(stock_router, tags=["stock"])

# public (vide pour l'instant)
external_router = APIRouter(prefix="/external")

router = APIRouter()
router.include_router(internal_router)
router.include_router(external_router)
