from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

import pandas as pd
import streamlit as st

from frontend.labels import MOVEMENT_TYPE_COLORS, MOVEMENT_TYPE_LABELS

COLUMNS = ["ID", "Data/Hora", "Produto", "Tipo", "Quantidade", "Saldo", "Usuário"]


def format_datetime(value: str | datetime | None) -> str:
    if not value:
        return "-"
    ts = pd.to_datetime(value)
    return ts.strftime("%d/%m/%Y %H:%M")


def format_quantity(value: float | int | None) -> str:
    if value is None:
        return "-"
    number = float(value)
    text = f"{number:g}"
    return f"+{text}" if number > 0 else text


def movements_frame(movements: list[dict[str, Any]]) -> pd.DataFrame:
    rows = [
        {
            "ID": m["idStockMovement"],
            "Data/Hora": format_datetime(m.get("dateTime")),
            "Produto": m.get("productName") or f"Produto #{m['idProduct']}",
            "Tipo": MOVEMENT_TYPE_LABELS.get(m.get("movementType"), m.get("movementType")),
            "Quantidade": format_quantity(m.get("quantity")),
            "Saldo": m.get("runningBalance") if m.get("runningBalance") is not None else "-",
            "Usuário": m.get("userName") or (f"Usuário #{m['idUser']}" if m.get("idUser") else "-"),
        }
        for m in movements
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def _type_style(value: str) -> str:
    for key, label in MOVEMENT_TYPE_LABELS.items():
        if value == label:
            return f"background-color: {MOVEMENT_TYPE_COLORS[key]}"
    return ""


def render_stock_movement_list(
    movements: list[dict[str, Any]],
    on_view_details: Callable[[int], None] | None = None,
) -> None:
    if not movements:
        st.info("Nenhuma movimentação encontrada")
        return

    df = movements_frame(movements)
    st.dataframe(df.style.map(_type_style, subset=["Tipo"]), hide_index=True, use_container_width=True)

    if on_view_details:
        c1, c2 = st.columns([3, 1])
        selected = c1.selectbox("Movimentação", options=df["ID"].tolist(), key="movement_detail_id")
        if c2.button("Ver detalhes", key="movement_detail_view"):
            on_view_details(int(selected))
