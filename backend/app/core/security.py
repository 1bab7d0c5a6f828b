from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from fastapi import Request

from backend.app.db.models.core_types import Permission


@dataclass(frozen=True)
class Credential:
    id_account: int
    id_user: int


class AuthProvider(Protocol):
    async def authenticate(self, request: Request) -> Credential:
        """Résout l'identité de l'appelant ; lève UnauthorizedError sinon."""
        ...


class PermissionChecker(Protocol):
    async def has_permission(self, credential: Credential, securable: str, permission: Permission) -> bool:
        ...


class StaticAuthProvider:
    """
    Identité fixe (compte/utilisateur de la configuration).
    Placeholder : un déploiement réel doit fournir son propre AuthProvider.
    """

    def __init__(self, id_account: int, id_user: int):
        self.credential = Credential(id_account=id_account, id_user=id_user)

    async def authenticate(self, request: Request) -> Credential:
        return self.credential


class AllowAllPermissions:
    async def has_permission(self, credential: Credential, securable: str, permission: Permission) -> bool:
        return True
