from __future__ import annotations

from typing import Any, Callable

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from frontend.labels import STATUS_COLORS, STATUS_LABELS

COLUMNS = ["ID", "Produto", "Quantidade Atual", "Mínimo", "Máximo", "Status", "Última Movimentação"]


def current_stock_frame(stock: list[dict[str, Any]]) -> pd.DataFrame:
    rows = [
        {
            "ID": item["idProduct"],
            "Produto": item.get("productName") or f"Produto #{item['idProduct']}",
            "Quantidade Atual": item.get("currentQuantity"),
            "Mínimo": item.get("minimumQuantity"),
            "Máximo": item.get("maximumQuantity"),
            "Status": STATUS_LABELS.get(item.get("status"), item.get("status")),
            "Última Movimentação": pd.to_datetime(item.get("lastMovementDate")),
        }
        for item in stock
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def stock_levels_chart(stock: list[dict[str, Any]]) -> go.Figure:
    """Quantité actuelle par produit, seuils min/max en repères."""
    names = [item.get("productName") or f"#{item['idProduct']}" for item in stock]
    colors = [STATUS_COLORS.get(item.get("status"), "#e5e7eb") for item in stock]

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=names,
            y=[item.get("currentQuantity") for item in stock],
            name="Quantidade Atual",
            marker=dict(color=colors, line=dict(color="#374151", width=1)),
        )
    )
    fig.add_trace(
        go.Scatter(
            x=names,
            y=[item.get("minimumQuantity") for item in stock],
            name="Mínimo",
            mode="markers",
            marker=dict(symbol="line-ew-open", size=24, color="#dc2626"),
        )
    )
    fig.add_trace(
        go.Scatter(
            x=names,
            y=[item.get("maximumQuantity") for item in stock],
            name="Máximo",
            mode="markers",
            marker=dict(symbol="line-ew-open", size=24, color="#2563eb"),
        )
    )
    fig.update_layout(
        height=350,
        margin=dict(l=20, r=20, t=30, b=20),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    return fig


def _status_style(value: str) -> str:
    for key, label in STATUS_LABELS.items():
        if value == label:
            return f"background-color: {STATUS_COLORS[key]}"
    return ""


def render_current_stock_table(
    stock: list[dict[str, Any]],
    on_view_movements: Callable[[int], None] | None = None,
) -> None:
    if not stock:
        st.info("Nenhum produto em estoque")
        return

    df = current_stock_frame(stock)
    st.dataframe(
        df.style.map(_status_style, subset=["Status"]),
        hide_index=True,
        use_container_width=True,
        column_config={
            "Última Movimentação": st.column_config.DatetimeColumn(format="DD/MM/YYYY HH:mm"),
        },
    )
    st.plotly_chart(stock_levels_chart(stock), use_container_width=True)

    if on_view_movements:
        c1, c2 = st.columns([3, 1])
        product = c1.selectbox(
            "Produto",
            options=df["ID"].tolist(),
            format_func=lambda pid: df.loc[df["ID"] == pid, "Produto"].iloc[0],
            key="current_stock_product",
        )
        if c2.button("Ver movimentações", key="current_stock_view"):
            on_view_movements(int(product))
