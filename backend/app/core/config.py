from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuration globale StockBox (variables d'environnement ou fichier .env).
    """

    # Environnement
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # Base SQL Server (procédures stockées externes)
    DATABASE_URL: str | None = Field(
        default=None,
        description="URL SQLAlchemy complète ; si absente, construite à partir des champs DB_*",
    )
    DB_SERVER: str = Field(default="127.0.0.1")
    DB_PORT: int = Field(default=1433)
    DB_NAME: str = Field(default="stockbox")
    DB_USER: str = Field(default="sa")
    DB_PASSWORD: str = Field(default="")
    DB_DRIVER: str = Field(default="ODBC Driver 18 for SQL Server")
    DB_ENCRYPT: bool = Field(default=True)
    DB_TRUST_SERVER_CERTIFICATE: bool = Field(default=False)
    DB_POOL_SIZE: int = Field(default=10, ge=1)
    DB_PROCEDURE_SCHEMA: str = Field(default="functional")
    SQL_ECHO: bool = Field(default=False)

    # Numéro d'erreur levé par les procédures pour une règle métier (THROW 51000)
    BUSINESS_RULE_ERROR_NUMBER: int = Field(default=51000)

    # API
    API_PORT: int = Field(default=3000)
    API_VERSION: str = Field(default="v1")
    CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:8501", "http://127.0.0.1:8501"]
    )

    # Identité fixe tant qu'aucun fournisseur d'authentification réel n'est branché
    DEFAULT_ACCOUNT_ID: int = Field(default=1, gt=0)
    DEFAULT_USER_ID: int = Field(default=1, gt=0)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
