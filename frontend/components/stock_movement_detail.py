from __future__ import annotations

from typing import Any

import streamlit as st

from frontend.components.stock_movement_list import format_datetime, format_quantity
from frontend.labels import MOVEMENT_TYPE_LABELS


def render_stock_movement_detail(movement: dict[str, Any] | None) -> None:
    if movement is None:
        st.warning("Movimentação não encontrada")
        return

    st.markdown(f"#### Movimentação #{movement['idStockMovement']}")
    c1, c2, c3 = st.columns(3)
    c1.metric("Produto", movement.get("productName") or f"#{movement['idProduct']}")
    c2.metric("Tipo", MOVEMENT_TYPE_LABELS.get(movement.get("movementType"), movement.get("movementType")))
    c3.metric("Quantidade", format_quantity(movement.get("quantity")))

    unit_cost = movement.get("unitCost")
    st.table(
        {
            "Campo": [
                "Data/Hora",
                "Usuário",
                "Motivo",
                "Documento de Referência",
                "Número do Lote",
                "Data de Validade",
                "Localização",
                "Custo Unitário",
            ],
            "Valor": [
                format_datetime(movement.get("dateTime")),
                f"#{movement['idUser']}" if movement.get("idUser") else "-",
                movement.get("reason") or "-",
                movement.get("referenceDocument") or "-",
                movement.get("batchNumber") or "-",
                movement.get("expirationDate") or "-",
                movement.get("location") or "-",
                f"{unit_cost:.2f}" if unit_cost is not None else "-",
            ],
        }
    )
