from __future__ import annotations

from dataclasses import dataclass

from backend.app.core.config import Settings
from backend.app.core.security import (
    AllowAllPermissions,
    AuthProvider,
    PermissionChecker,
    StaticAuthProvider,
)
from backend.app.db.gateway import DatabaseGateway
from backend.app.db.session import database_url


@dataclass
class AppContext:
    """Ressources du process, construites une fois au démarrage et injectées via Depends."""

    settings: Settings
    db: DatabaseGateway
    auth: AuthProvider
    permissions: PermissionChecker

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        db = DatabaseGateway(
            database_url(settings),
            schema=settings.DB_PROCEDURE_SCHEMA,
            pool_size=settings.DB_POOL_SIZE,
            echo=settings.SQL_ECHO,
            business_rule_error_number=settings.BUSINESS_RULE_ERROR_NUMBER,
        )
        return cls(
            settings=settings,
            db=db,
            auth=StaticAuthProvider(settings.DEFAULT_ACCOUNT_ID, settings.DEFAULT_USER_ID),
            permissions=AllowAllPermissions(),
        )

    async def close(self) -> None:
        await self.db.dispose()
