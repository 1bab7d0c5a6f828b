from __future__ import annotations

from typing import Any

import streamlit as st

from frontend.services.stock_movement_service import StockMovementClient

# 2 minutes
STALE_TIME = 120


@st.cache_resource
def get_client() -> StockMovementClient:
    return StockMovementClient()


@st.cache_data(ttl=STALE_TIME, show_spinner=False)
def load_stock_movements(filters: dict[str, Any]) -> dict[str, Any]:
    return get_client().list(filters)


@st.cache_data(ttl=STALE_TIME, show_spinner=False)
def load_current_stock(id_product: int | None = None) -> list[dict[str, Any]]:
    return get_client().get_current_stock(id_product)


def load_stock_movement(id_stock_movement: int) -> dict[str, Any] | None:
    return get_client().get_by_id(id_stock_movement)


def create_stock_movement(payload: dict[str, Any]) -> dict[str, Any]:
    """Crée puis invalide listes et stock courant pour refléter le mouvement."""
    result = get_client().create(payload)
    load_stock_movements.clear()
    load_current_stock.clear()
    return result
