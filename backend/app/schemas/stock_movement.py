from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from backend.app.db.models.core_types import MovementOrder, MovementType, StockStatus


class CamelModel(BaseModel):
    """snake_case côté Python, camelCase sur le fil et côté procédures."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RowModel(CamelModel):
    # colonnes supplémentaires renvoyées par la procédure : conservées telles quelles
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


# ---------- Entrées HTTP ----------
class StockMovementCreateBody(CamelModel):
    id_product: int = Field(gt=0)
    movement_type: MovementType
    quantity: Decimal
    reason: str | None = Field(default=None, max_length=255)
    reference_document: str | None = Field(default=None, max_length=50)
    batch_number: str | None = Field(default=None, max_length=30)
    expiration_date: date | None = None
    location: str | None = Field(default=None, max_length=50)
    unit_cost: Decimal | None = Field(default=None, gt=0)


class StockMovementListQuery(CamelModel):
    id_product: int | None = Field(default=None, gt=0)
    movement_type: MovementType | None = None
    start_date: date | None = None
    end_date: date | None = None
    id_user: int | None = Field(default=None, gt=0)
    reference_document: str | None = Field(default=None, max_length=50)
    order_by: MovementOrder = MovementOrder.date_desc
    page: int = Field(default=1, gt=0)
    page_size: int = Field(default=20, gt=0, le=100)


class StockMovementGetParams(CamelModel):
    id: int = Field(gt=0)


class StockCurrentQuery(CamelModel):
    id_product: int | None = Field(default=None, gt=0)


# ---------- Requêtes service (avec identité) ----------
class StockMovementCreateRequest(StockMovementCreateBody):
    id_account: int
    id_user: int


class StockMovementListRequest(StockMovementListQuery):
    id_account: int


class StockMovementGetRequest(CamelModel):
    id_account: int
    id_stock_movement: int


class StockCurrentGetRequest(StockCurrentQuery):
    id_account: int


# ---------- Sorties ----------
class StockMovementCreated(RowModel):
    id_stock_movement: int = Field(gt=0)


class StockMovementDetail(RowModel):
    id_stock_movement: int
    id_product: int
    product_name: str | None = None
    movement_type: MovementType
    quantity: float
    date_time: datetime
    id_user: int | None = None
    reason: str | None = None
    reference_document: str | None = None
    batch_number: str | None = None
    expiration_date: date | None = None
    location: str | None = None
    unit_cost: float | None = None


class StockMovementRow(StockMovementDetail):
    user_name: str | None = None
    running_balance: float | None = None  # solde cumulé après le mouvement


class Pagination(RowModel):
    total_records: int = 0
    total_pages: int = 0
    current_page: int = 1
    page_size: int = 20


class StockMovementPage(CamelModel):
    movements: list[StockMovementRow] = Field(default_factory=list)
    pagination: Pagination


class CurrentStockRow(RowModel):
    id_product: int
    product_name: str | None = None
    current_quantity: float
    minimum_quantity: float | None = None
    maximum_quantity: float | None = None
    status: StockStatus | None = None
    last_movement_date: datetime | None = None


class CurrentStock(CamelModel):
    stock: list[CurrentStockRow] = Field(default_factory=list)
