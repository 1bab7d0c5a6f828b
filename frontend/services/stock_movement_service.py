from __future__ import annotations

import os
from datetime import date
from typing import Any, Mapping

import requests

DEFAULT_API_URL = "http://localhost:3000/api/v1/internal"


class ApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


def _clean(values: Mapping[str, Any] | None) -> dict[str, Any]:
    """Retire les valeurs vides ; dates en ISO (YYYY-MM-DD)."""
    out = {}
    for key, value in (values or {}).items():
        if value is None or value == "":
            continue
        out[key] = value.isoformat() if isinstance(value, date) else value
    return out


class StockMovementClient:
    """Client HTTP de l'API StockBox : déballe l'enveloppe {success, data, error}."""

    def __init__(self, base_url: str | None = None, session: requests.Session | None = None, timeout: float = 10):
        self.base_url = (base_url or os.getenv("STOCKBOX_API_URL", DEFAULT_API_URL)).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(f"API indisponível: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            raise ApiError(f"Resposta inválida da API (HTTP {response.status_code})", response.status_code) from None

        if not isinstance(body, dict) or not response.ok or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            error = error or {}
            raise ApiError(
                error.get("message") or f"HTTP {response.status_code}",
                response.status_code,
                error.get("details"),
            )
        return body.get("data")

    def list(self, filters: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self._request("GET", "/stock-movement", params=_clean(filters))

    def get_by_id(self, id_stock_movement: int) -> dict[str, Any] | None:
        return self._request("GET", f"/stock-movement/{int(id_stock_movement)}")

    def create(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/stock-movement", json=_clean(payload))

    def get_current_stock(self, id_product: int | None = None) -> list[dict[str, Any]]:
        params = {"idProduct": id_product} if id_product else {}
        data = self._request("GET", "/stock-current", params=params)
        return (data or {}).get("stock", [])
