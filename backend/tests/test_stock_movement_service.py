from datetime import date, datetime
from decimal import Decimal

import pytest

from backend.app.core.errors import BusinessRuleError
from backend.app.db.gateway import DatabaseError, ExpectedReturn
from backend.app.db.models.core_types import MovementOrder, MovementType, StockStatus
from backend.app.schemas.stock_movement import (
    StockCurrentGetRequest,
    StockMovementCreateRequest,
    StockMovementGetRequest,
    StockMovementListRequest,
)
from backend.services.stock_movement import (
    stock_current_get,
    stock_movement_create,
    stock_movement_get,
    stock_movement_list,
)

pytestmark = pytest.mark.asyncio

MOVEMENT_ROW = {
    "idStockMovement": 12,
    "idProduct": 5,
    "productName": "Parafuso 10mm",
    "movementType": "entrada",
    "quantity": Decimal("10.0000"),
    "dateTime": datetime(2026, 3, 1, 14, 30),
    "idUser": 3,
    "userName": "ana",
    "reason": None,
    "referenceDocument": "NF-123",
    "batchNumber": None,
    "expirationDate": None,
    "location": "A1",
    "unitCost": Decimal("2.5000"),
    "runningBalance": Decimal("30.0000"),
}


# ---------- create ----------
async def test_create_forwards_params_and_nulls_missing_optionals(fake_db):
    fake_db.results["spStockMovementCreate"] = [[{"idStockMovement": 99}]]

    out = await stock_movement_create(
        fake_db,
        StockMovementCreateRequest(
            id_account=7,
            id_user=3,
            id_product=5,
            movement_type=MovementType.entrada,
            quantity=Decimal("10"),
            reference_document="",
        ),
    )

    assert out.id_stock_movement == 99
    call = fake_db.calls[0]
    assert call["routine"] == "spStockMovementCreate"
    assert call["expected"] is ExpectedReturn.SINGLE
    assert call["parameters"] == {
        "idAccount": 7,
        "idUser": 3,
        "idProduct": 5,
        "movementType": "entrada",
        "quantity": Decimal("10"),
        "reason": None,
        "referenceDocument": None,
        "batchNumber": None,
        "expirationDate": None,
        "location": None,
        "unitCost": None,
    }


async def test_create_forwards_optional_fields(fake_db):
    fake_db.results["spStockMovementCreate"] = [[{"idStockMovement": 1}]]

    await stock_movement_create(
        fake_db,
        StockMovementCreateRequest(
            id_account=7,
            id_user=3,
            id_product=5,
            movement_type=MovementType.saida,
            quantity=Decimal("-2"),
            reason="venda balcão",
            batch_number="L-01",
            expiration_date=date(2027, 1, 31),
            location="B2",
            unit_cost=Decimal("4.75"),
        ),
    )

    params = fake_db.calls[0]["parameters"]
    assert params["movementType"] == "saida"
    assert params["quantity"] == Decimal("-2")
    assert params["expirationDate"] == date(2027, 1, 31)
    assert params["unitCost"] == Decimal("4.75")
    assert params["reason"] == "venda balcão"


async def test_create_business_rule_number_becomes_business_error(fake_db):
    fake_db.errors["spStockMovementCreate"] = DatabaseError("Estoque insuficiente", number=51000)

    with pytest.raises(BusinessRuleError) as excinfo:
        await stock_movement_create(
            fake_db,
            StockMovementCreateRequest(
                id_account=7, id_user=3, id_product=5, movement_type=MovementType.saida, quantity=Decimal("5")
            ),
        )
    assert excinfo.value.message == "Estoque insuficiente"


async def test_create_other_database_errors_propagate(fake_db):
    fake_db.errors["spStockMovementCreate"] = DatabaseError("deadlock", number=1205)

    with pytest.raises(DatabaseError):
        await stock_movement_create(
            fake_db,
            StockMovementCreateRequest(
                id_account=7, id_user=3, id_product=5, movement_type=MovementType.entrada, quantity=Decimal("1")
            ),
        )


# ---------- list ----------
async def test_list_applies_defaults_and_merges_result_sets(fake_db):
    fake_db.results["spStockMovementList"] = [
        [MOVEMENT_ROW],
        [{"totalRecords": 1, "totalPages": 1, "currentPage": 1, "pageSize": 20}],
    ]

    page = await stock_movement_list(fake_db, StockMovementListRequest(id_account=7))

    call = fake_db.calls[0]
    assert call["result_set_names"] == ["movements", "pagination"]
    assert call["parameters"] == {
        "idAccount": 7,
        "idProduct": None,
        "movementType": None,
        "startDate": None,
        "endDate": None,
        "idUser": None,
        "referenceDocument": None,
        "orderBy": "date_desc",
        "page": 1,
        "pageSize": 20,
    }
    assert len(page.movements) == 1
    assert page.movements[0].running_balance == 30.0
    assert page.movements[0].product_name == "Parafuso 10mm"
    assert page.pagination.total_records == 1


async def test_list_forwards_filters(fake_db):
    fake_db.results["spStockMovementList"] = [[], []]

    await stock_movement_list(
        fake_db,
        StockMovementListRequest(
            id_account=7,
            id_product=5,
            movement_type=MovementType.ajuste,
            start_date=date(2026, 1, 1),
            end_date=date(2026, 1, 31),
            order_by=MovementOrder.product_asc,
            page=3,
            page_size=50,
        ),
    )

    params = fake_db.calls[0]["parameters"]
    assert params["idProduct"] == 5
    assert params["movementType"] == "ajuste"
    assert params["startDate"] == date(2026, 1, 1)
    assert params["orderBy"] == "product_asc"
    assert (params["page"], params["pageSize"]) == (3, 50)


async def test_list_without_pagination_set_defaults_to_zero_totals(fake_db):
    fake_db.results["spStockMovementList"] = [[]]

    page = await stock_movement_list(fake_db, StockMovementListRequest(id_account=7))

    assert page.movements == []
    assert page.pagination.total_records == 0
    assert page.pagination.total_pages == 0
    assert page.pagination.current_page == 1


# ---------- get ----------
async def test_get_returns_detail(fake_db):
    fake_db.results["spStockMovementGet"] = [[MOVEMENT_ROW]]

    out = await stock_movement_get(fake_db, StockMovementGetRequest(id_account=7, id_stock_movement=12))

    assert fake_db.calls[0]["parameters"] == {"idAccount": 7, "idStockMovement": 12}
    assert out.id_stock_movement == 12
    assert out.movement_type is MovementType.entrada
    assert out.quantity == 10.0


async def test_get_missing_returns_none(fake_db):
    fake_db.results["spStockMovementGet"] = [[]]

    assert await stock_movement_get(fake_db, StockMovementGetRequest(id_account=7, id_stock_movement=404)) is None


# ---------- current stock ----------
async def test_current_stock_wraps_rows(fake_db):
    fake_db.results["spStockCurrentGet"] = [
        [
            {
                "idProduct": 5,
                "productName": "Parafuso 10mm",
                "currentQuantity": Decimal("3"),
                "minimumQuantity": Decimal("10"),
                "maximumQuantity": None,
                "status": "critico",
                "lastMovementDate": datetime(2026, 3, 1, 14, 30),
            }
        ]
    ]

    out = await stock_current_get(fake_db, StockCurrentGetRequest(id_account=7, id_product=5))

    call = fake_db.calls[0]
    assert call["parameters"] == {"idAccount": 7, "idProduct": 5}
    assert call["result_set_names"] is None
    assert out.stock[0].status is StockStatus.critico
    assert out.stock[0].current_quantity == 3.0


async def test_current_stock_without_filter_sends_null(fake_db):
    out = await stock_current_get(fake_db, StockCurrentGetRequest(id_account=7))

    assert fake_db.calls[0]["parameters"]["idProduct"] is None
    assert out.stock == []


async def test_current_stock_keeps_rows_of_every_result_set(fake_db):
    fake_db.results["spStockCurrentGet"] = [
        [{"idProduct": 5, "currentQuantity": 40, "status": "normal"}],
        [{"idProduct": 6, "currentQuantity": 2, "status": "critico"}],
    ]

    out = await stock_current_get(fake_db, StockCurrentGetRequest(id_account=7))

    assert [row.id_product for row in out.stock] == [5, 6]


async def test_current_stock_accepts_null_status(fake_db):
    fake_db.results["spStockCurrentGet"] = [[{"idProduct": 5, "currentQuantity": 0, "status": None}]]

    out = await stock_current_get(fake_db, StockCurrentGetRequest(id_account=7))

    assert out.stock[0].status is None


async def test_list_accepts_movement_without_user(fake_db):
    fake_db.results["spStockMovementList"] = [
        [
            {
                "idStockMovement": 1,
                "idProduct": 5,
                "movementType": "criacao",
                "quantity": Decimal("0"),
                "dateTime": datetime(2026, 3, 1, 14, 30),
                "idUser": None,
            }
        ],
        [{"totalRecords": 1, "totalPages": 1, "currentPage": 1, "pageSize": 20}],
    ]

    page = await stock_movement_list(fake_db, StockMovementListRequest(id_account=7))

    assert page.movements[0].id_user is None
