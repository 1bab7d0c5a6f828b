from __future__ import annotations

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from backend.app.core.config import Settings


def database_url(settings: Settings) -> URL:
    """
    URL SQL Server (aioodbc).
    DATABASE_URL prime sur les champs DB_* s'il est défini.
    """
    if settings.DATABASE_URL:
        return make_url(settings.DATABASE_URL.strip().strip('"').strip("'"))

    return URL.create(
        "mssql+aioodbc",
        username=settings.DB_USER,
        password=settings.DB_PASSWORD,
        host=settings.DB_SERVER,
        port=settings.DB_PORT,
        database=settings.DB_NAME,
        query={
            "driver": settings.DB_DRIVER,
            "Encrypt": "yes" if settings.DB_ENCRYPT else "no",
            "TrustServerCertificate": "yes" if settings.DB_TRUST_SERVER_CERTIFICATE else "no",
        },
    )


def create_engine(url: URL, *, pool_size: int = 10, echo: bool = False) -> AsyncEngine:
    return create_async_engine(url, pool_size=pool_size, pool_pre_ping=True, echo=echo)
