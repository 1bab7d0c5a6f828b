import pandas as pd
import plotly.graph_objects as go
import pytest

from frontend.components.current_stock_table import current_stock_frame, stock_levels_chart
from frontend.components.stock_movement_form import validate_form
from frontend.components.stock_movement_list import (
    format_datetime,
    format_quantity,
    movements_frame,
)

MOVEMENT = {
    "idStockMovement": 11,
    "idProduct": 3,
    "productName": "Parafuso M6",
    "movementType": "saida",
    "quantity": -4.0,
    "dateTime": "2024-03-05T14:30:00.000Z",
    "idUser": 2,
    "userName": "Ana",
    "runningBalance": 16.0,
}

STOCK = [
    {
        "idProduct": 3,
        "productName": "Parafuso M6",
        "currentQuantity": 16.0,
        "minimumQuantity": 20.0,
        "maximumQuantity": 100.0,
        "status": "baixo",
        "lastMovementDate": "2024-03-05T14:30:00.000Z",
    },
    {
        "idProduct": 4,
        "productName": None,
        "currentQuantity": 50.0,
        "minimumQuantity": 10.0,
        "maximumQuantity": 80.0,
        "status": "normal",
        "lastMovementDate": None,
    },
]


def valid_form(**overrides):
    values = {
        "idProduct": 3,
        "movementType": "entrada",
        "quantity": 10.0,
        "reason": None,
        "referenceDocument": None,
        "batchNumber": None,
        "expirationDate": None,
        "location": None,
        "unitCost": None,
    }
    values.update(overrides)
    return values


@pytest.mark.parametrize(
    "value,expected",
    [(10, "+10"), (2.5, "+2.5"), (-4.0, "-4"), (0, "0"), (None, "-")],
)
def test_format_quantity(value, expected):
    assert format_quantity(value) == expected


def test_format_datetime():
    assert format_datetime("2024-03-05T14:30:00") == "05/03/2024 14:30"
    assert format_datetime(None) == "-"
    assert format_datetime("") == "-"


def test_movements_frame_maps_columns_and_labels():
    df = movements_frame([MOVEMENT])

    assert list(df.columns) == ["ID", "Data/Hora", "Produto", "Tipo", "Quantidade", "Saldo", "Usuário"]
    row = df.iloc[0]
    assert row["ID"] == 11
    assert row["Tipo"] == "Saída"
    assert row["Quantidade"] == "-4"
    assert row["Saldo"] == 16.0
    assert row["Usuário"] == "Ana"


def test_movements_frame_fallbacks_when_names_missing():
    movement = {**MOVEMENT, "productName": None, "userName": None, "runningBalance": None}

    row = movements_frame([movement]).iloc[0]

    assert row["Produto"] == "Produto #3"
    assert row["Usuário"] == "Usuário #2"
    assert row["Saldo"] == "-"


def test_movements_frame_empty_keeps_columns():
    df = movements_frame([])

    assert df.empty
    assert "Tipo" in df.columns


def test_current_stock_frame():
    df = current_stock_frame(STOCK)

    assert df["Status"].tolist() == ["Baixo", "Normal"]
    assert df["Produto"].tolist() == ["Parafuso M6", "Produto #4"]
    assert pd.isna(df.loc[1, "Última Movimentação"])


def test_stock_levels_chart_has_quantity_and_thresholds():
    fig = stock_levels_chart(STOCK)

    assert isinstance(fig, go.Figure)
    assert [trace.name for trace in fig.data] == ["Quantidade Atual", "Mínimo", "Máximo"]
    assert list(fig.data[0].y) == [16.0, 50.0]
    assert list(fig.data[1].y) == [20.0, 10.0]


def test_validate_form_accepts_valid_values():
    assert validate_form(valid_form()) == {}


def test_validate_form_requires_product_type_and_nonzero_quantity():
    errors = validate_form(valid_form(idProduct=0, movementType=None, quantity=0))

    assert set(errors) == {"idProduct", "movementType", "quantity"}


@pytest.mark.parametrize("movement_type", ["ajuste", "exclusao"])
def test_validate_form_requires_reason_for_adjustments(movement_type):
    errors = validate_form(valid_form(movementType=movement_type, reason="   "))

    assert "reason" in errors
    assert validate_form(valid_form(movementType=movement_type, reason="Inventário")) == {}


def test_validate_form_checks_lengths_and_unit_cost():
    errors = validate_form(valid_form(batchNumber="x" * 31, location="y" * 51, unitCost=0))

    assert set(errors) == {"batchNumber", "location", "unitCost"}


def test_movements_frame_without_user():
    movement = {**MOVEMENT, "userName": None, "idUser": None}

    assert movements_frame([movement]).iloc[0]["Usuário"] == "-"
