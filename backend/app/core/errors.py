from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Erreur applicative rendue telle quelle dans l'enveloppe JSON."""

    status_code = 500
    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, details: list[dict[str, Any]], message: str = "Request validation failed"):
        super().__init__(message, details)


class BusinessRuleError(AppError):
    """Refus explicite d'une procédure (ex: stock insuffisant pour une saida)."""

    status_code = 400
    code = "BUSINESS_RULE_VIOLATION"

    def __init__(self, message: str, number: int | None = None):
        super().__init__(message)
        self.number = number


class UnauthorizedError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"

    def __init__(self, missing: list[str]):
        super().__init__("Permission denied", {"missing_permissions": missing})


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"
