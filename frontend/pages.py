from __future__ import annotations

from typing import Any

import streamlit as st

from frontend.components.current_stock_table import render_current_stock_table
from frontend.components.stock_movement_detail import render_stock_movement_detail
from frontend.components.stock_movement_form import render_stock_movement_form
from frontend.components.stock_movement_list import render_stock_movement_list
from frontend.hooks.stock_movement import (
    create_stock_movement,
    load_current_stock,
    load_stock_movement,
    load_stock_movements,
)
from frontend.labels import MOVEMENT_TYPE_LABELS, ORDER_BY_LABELS
from frontend.services.stock_movement_service import ApiError

HOME = "Início"
MOVEMENTS = "Movimentações"
NEW_MOVEMENT = "Nova Movimentação"
CURRENT_STOCK = "Estoque Atual"
PAGES = [HOME, MOVEMENTS, NEW_MOVEMENT, CURRENT_STOCK]

DEFAULT_FILTERS = {"orderBy": "date_desc", "page": 1, "pageSize": 20}


def navigate(page: str, **state: Any) -> None:
    st.session_state["page"] = page
    st.session_state.update(state)
    st.rerun()


def _filters() -> dict[str, Any]:
    if "movement_filters" not in st.session_state:
        st.session_state["movement_filters"] = dict(DEFAULT_FILTERS)
    return st.session_state["movement_filters"]


def _set_filters(**changes: Any) -> None:
    # tout changement de filtre repart page 1
    current = _filters()
    if any(current.get(key) != value for key, value in changes.items()):
        st.session_state["movement_filters"] = {**current, **changes, "page": 1}
        st.session_state.pop("movement_detail", None)


def home_page() -> None:
    st.title("StockBox")
    st.write("Sistema para controlar itens no estoque: entradas, saídas e quantidade atual")
    c1, c2 = st.columns(2)
    if c1.button("Começar"):
        navigate(MOVEMENTS)
    if c2.button("Ver estoque atual"):
        navigate(CURRENT_STOCK)


def stock_movements_page() -> None:
    head, action = st.columns([4, 1])
    head.header("Movimentações de Estoque")
    if action.button(NEW_MOVEMENT):
        navigate(NEW_MOVEMENT)

    flash = st.session_state.pop("flash", None)
    if flash:
        st.success(flash)

    filters = _filters()
    c1, c2, c3, c4, c5 = st.columns(5)
    id_product = c1.number_input("Produto (ID)", min_value=0, step=1, value=filters.get("idProduct") or 0)
    type_options = [None, *MOVEMENT_TYPE_LABELS]
    movement_type = c2.selectbox(
        "Tipo de Movimentação",
        options=type_options,
        index=type_options.index(filters.get("movementType")),
        format_func=lambda v: "Todos" if v is None else MOVEMENT_TYPE_LABELS[v],
    )
    start_date = c3.date_input("Data Inicial", value=filters.get("startDate"), format="DD/MM/YYYY")
    end_date = c4.date_input("Data Final", value=filters.get("endDate"), format="DD/MM/YYYY")
    order_by = c5.selectbox(
        "Ordenação",
        options=list(ORDER_BY_LABELS),
        index=list(ORDER_BY_LABELS).index(filters["orderBy"]),
        format_func=ORDER_BY_LABELS.get,
    )
    _set_filters(
        idProduct=int(id_product) or None,
        movementType=movement_type,
        startDate=start_date,
        endDate=end_date,
        orderBy=order_by,
    )
    filters = _filters()

    try:
        with st.spinner("Carregando..."):
            data = load_stock_movements(filters)
    except ApiError as exc:
        st.error(f"Erro ao carregar movimentações: {exc.message}")
        if st.button("Tentar novamente"):
            load_stock_movements.clear()
            st.rerun()
        return

    movements = data.get("movements", [])
    pagination = data.get("pagination") or {}

    render_stock_movement_list(
        movements,
        on_view_details=lambda mid: st.session_state.update(movement_detail=mid),
    )

    total_pages = pagination.get("totalPages", 0)
    current = pagination.get("currentPage", filters["page"])
    if total_pages > 1:
        p1, p2, p3 = st.columns([1, 2, 1])
        if p1.button("Anterior", disabled=current <= 1):
            st.session_state["movement_filters"] = {**filters, "page": current - 1}
            st.rerun()
        p2.markdown(
            f"<p style='text-align:center'>Página {current} de {total_pages} "
            f"({pagination.get('totalRecords', 0)} registros)</p>",
            unsafe_allow_html=True,
        )
        if p3.button("Próxima", disabled=current >= total_pages):
            st.session_state["movement_filters"] = {**filters, "page": current + 1}
            st.rerun()

    detail_id = st.session_state.get("movement_detail")
    if detail_id:
        st.divider()
        try:
            render_stock_movement_detail(load_stock_movement(detail_id))
        except ApiError as exc:
            st.error(f"Erro ao carregar movimentação: {exc.message}")


def new_stock_movement_page() -> None:
    st.header("Nova Movimentação de Estoque")
    if st.button("← Voltar"):
        navigate(MOVEMENTS)

    def submit(values: dict[str, Any]) -> None:
        try:
            result = create_stock_movement(values)
        except ApiError as exc:
            st.error(f"Erro ao criar movimentação: {exc.message}")
            return
        st.session_state["flash"] = f"Movimentação #{result['idStockMovement']} registrada"
        navigate(MOVEMENTS)

    render_stock_movement_form(on_submit=submit, on_cancel=lambda: navigate(MOVEMENTS))


def current_stock_page() -> None:
    head, action = st.columns([4, 1])
    head.header("Estoque Atual")
    if action.button(NEW_MOVEMENT):
        navigate(NEW_MOVEMENT)

    id_product = st.number_input("Filtrar por Produto (ID)", min_value=0, step=1, value=0)

    try:
        with st.spinner("Carregando..."):
            stock = load_current_stock(int(id_product) or None)
    except ApiError as exc:
        st.error(f"Erro ao carregar estoque: {exc.message}")
        if st.button("Tentar novamente"):
            load_current_stock.clear()
            st.rerun()
        return

    def view_movements(pid: int) -> None:
        st.session_state["movement_filters"] = {**DEFAULT_FILTERS, "idProduct": pid}
        navigate(MOVEMENTS)

    render_current_stock_table(stock, on_view_movements=view_movements)


ROUTES = {
    HOME: home_page,
    MOVEMENTS: stock_movements_page,
    NEW_MOVEMENT: new_stock_movement_page,
    CURRENT_STOCK: current_stock_page,
}
