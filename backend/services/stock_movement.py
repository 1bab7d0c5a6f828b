"""
Service mouvements de stock.

Simple passe-plat vers les procédures [functional].sp* :
aucune règle de calcul de stock ici, tout est dans la base.
"""

from __future__ import annotations

import enum
from contextlib import contextmanager
from typing import Any, Iterator

from backend.app.core.errors import BusinessRuleError
from backend.app.db.gateway import DatabaseError, DatabaseGateway, ExpectedReturn
from backend.app.schemas.stock_movement import (
    CurrentStock,
    Pagination,
    StockCurrentGetRequest,
    StockMovementCreated,
    StockMovementCreateRequest,
    StockMovementDetail,
    StockMovementGetRequest,
    StockMovementListRequest,
    StockMovementPage,
)

SP_CREATE = "spStockMovementCreate"
SP_LIST = "spStockMovementList"
SP_GET = "spStockMovementGet"
SP_CURRENT = "spStockCurrentGet"


def _param(value: Any) -> Any:
    """Valeur absente ou vide -> NULL ; enums -> valeur brute."""
    if value is None or value == "":
        return None
    if isinstance(value, enum.Enum):
        return value.value
    return value


@contextmanager
def _business_rules(db: DatabaseGateway) -> Iterator[None]:
    # seul le numéro d'erreur distingue un refus métier d'une panne
    try:
        yield
    except DatabaseError as exc:
        if exc.number == db.business_rule_error_number:
            raise BusinessRuleError(exc.message, number=exc.number) from exc
        raise


async def stock_movement_create(db: DatabaseGateway, params: StockMovementCreateRequest) -> StockMovementCreated:
    with _business_rules(db):
        row = await db.execute(
            SP_CREATE,
            {
                "idAccount": params.id_account,
                "idUser": params.id_user,
                "idProduct": params.id_product,
                "movementType": _param(params.movement_type),
                "quantity": params.quantity,
                "reason": _param(params.reason),
                "referenceDocument": _param(params.reference_document),
                "batchNumber": _param(params.batch_number),
                "expirationDate": _param(params.expiration_date),
                "location": _param(params.location),
                "unitCost": _param(params.unit_cost),
            },
            ExpectedReturn.SINGLE,
        )
    return StockMovementCreated.model_validate(row)


async def stock_movement_list(db: DatabaseGateway, params: StockMovementListRequest) -> StockMovementPage:
    with _business_rules(db):
        results = await db.execute(
            SP_LIST,
            {
                "idAccount": params.id_account,
                "idProduct": _param(params.id_product),
                "movementType": _param(params.movement_type),
                "startDate": _param(params.start_date),
                "endDate": _param(params.end_date),
                "idUser": _param(params.id_user),
                "referenceDocument": _param(params.reference_document),
                "orderBy": _param(params.order_by) or "date_desc",
                "page": params.page or 1,
                "pageSize": params.page_size or 20,
            },
            ExpectedReturn.MULTI,
            result_set_names=["movements", "pagination"],
        )

    summary = results["pagination"]
    if summary:
        pagination = Pagination.model_validate(summary[0])
    else:
        pagination = Pagination(total_records=0, total_pages=0, current_page=1, page_size=params.page_size or 20)

    return StockMovementPage(movements=results["movements"], pagination=pagination)


async def stock_movement_get(db: DatabaseGateway, params: StockMovementGetRequest) -> StockMovementDetail | None:
    with _business_rules(db):
        row = await db.execute(
            SP_GET,
            {
                "idAccount": params.id_account,
                "idStockMovement": params.id_stock_movement,
            },
            ExpectedReturn.SINGLE,
        )
    if row is None:
        return None
    return StockMovementDetail.model_validate(row)


async def stock_current_get(db: DatabaseGateway, params: StockCurrentGetRequest) -> CurrentStock:
    with _business_rules(db):
        result_sets = await db.execute(
            SP_CURRENT,
            {
                "idAccount": params.id_account,
                "idProduct": _param(params.id_product),
            },
            ExpectedReturn.MULTI,
        )
    # tous les jeux renvoyés par la procédure, dans l'ordre
    return CurrentStock(stock=[row for rows in result_sets for row in rows])
