from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from backend.app.core.config import Settings
from backend.app.core.context import AppContext
from backend.app.core.security import AllowAllPermissions, StaticAuthProvider
from backend.app.db.gateway import DatabaseGateway, ExpectedReturn, shape_result
from backend.app.main import create_app


class FakeGateway(DatabaseGateway):
    """
    Gateway en mémoire : enregistre les appels, renvoie des jeux de résultats préparés.

    results[routine] = liste de result sets (comme renvoyé par le curseur),
    errors[routine] = exception à lever.
    """

    def __init__(self, business_rule_error_number: int = 51000):
        super().__init__("mssql+aioodbc://fake", business_rule_error_number=business_rule_error_number)
        self.calls: list[dict[str, Any]] = []
        self.results: dict[str, list[list[dict[str, Any]]]] = {}
        self.errors: dict[str, Exception] = {}

    async def execute(self, routine, parameters, expected, transaction=None, result_set_names=None):
        self.calls.append(
            {
                "routine": routine,
                "parameters": dict(parameters),
                "expected": expected,
                "result_set_names": result_set_names,
            }
        )
        if routine in self.errors:
            raise self.errors[routine]
        return shape_result(self.results.get(routine, []), ExpectedReturn(expected), result_set_names)

    def routines(self) -> list[str]:
        return [c["routine"] for c in self.calls]


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, DEFAULT_ACCOUNT_ID=7, DEFAULT_USER_ID=3)


@pytest.fixture
def fake_db() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def context(settings, fake_db) -> AppContext:
    return AppContext(
        settings=settings,
        db=fake_db,
        auth=StaticAuthProvider(settings.DEFAULT_ACCOUNT_ID, settings.DEFAULT_USER_ID),
        permissions=AllowAllPermissions(),
    )


@pytest.fixture
def client(settings, context) -> TestClient:
    app = create_app(settings, context)
    with TestClient(app) as c:
        yield c
