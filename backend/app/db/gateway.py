from __future__ import annotations

import enum
import logging
import re
from typing import Any, Mapping, Sequence

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from backend.app.db.session import create_engine

logger = logging.getLogger("stockbox.db")

Row = dict[str, Any]
ResultSets = list[list[Row]]
# Handle de transaction fourni par l'appelant : une AsyncConnection déjà begin()
Transaction = AsyncConnection

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
# "...Estoque insuficiente (51000) (SQLExecDirectW)"
_NATIVE_NUMBER = re.compile(r"\s*\((\d+)\)\s*\(SQL\w+\)")
# "[42000] [Microsoft][ODBC Driver 18 for SQL Server][SQL Server]"
_DRIVER_PREFIX = re.compile(r"^(?:\[[^\]]*\]\s*)+")


class ExpectedReturn(str, enum.Enum):
    SINGLE = "Single"
    MULTI = "Multi"
    NONE = "None"


class DatabaseError(Exception):
    """Toute erreur d'exécution d'une procédure, avec le numéro natif SQL Server."""

    def __init__(self, message: str, number: int | None = None, original: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.number = number
        self.original = original

    @classmethod
    def from_driver(cls, exc: BaseException) -> "DatabaseError":
        number, message = parse_driver_error(exc)
        return cls(message, number=number, original=exc)


def parse_driver_error(exc: BaseException) -> tuple[int | None, str]:
    """
    Extrait (numéro natif, message lisible) d'une erreur pyodbc,
    éventuellement enveloppée dans une DBAPIError SQLAlchemy.
    """
    orig = getattr(exc, "orig", None) or exc
    native = getattr(orig, "number", None)

    args = getattr(orig, "args", ()) or ()
    if len(args) > 1:
        text = str(args[1])  # pyodbc: (sqlstate, message)
    elif args:
        text = str(args[0])
    else:
        text = str(orig)

    match = _NATIVE_NUMBER.search(text)
    if native is None and match:
        native = int(match.group(1))

    message = text[: match.start()] if match else text
    message = _DRIVER_PREFIX.sub("", message.strip()).strip()
    return (int(native) if native is not None else None), (message or "Database error")


def build_exec_statement(
    routine: str,
    parameters: Mapping[str, Any],
    *,
    schema: str | None = None,
) -> tuple[str, tuple[Any, ...]]:
    """
    EXEC avec paramètres nommés et binding positionnel (qmark ODBC).
    Les noms sont interpolés : ils doivent être des identifiants simples.
    """
    parts = [p.strip().strip("[]") for p in routine.split(".")]
    if len(parts) == 1 and schema:
        parts.insert(0, schema)

    for name in [*parts, *parameters]:
        if not _IDENTIFIER.match(name):
            raise ValueError(f"Invalid SQL identifier: {name!r}")

    target = ".".join(f"[{p}]" for p in parts)
    statement = f"SET NOCOUNT ON; EXEC {target}"
    if parameters:
        statement += " " + ", ".join(f"@{name}=?" for name in parameters)
    return statement, tuple(parameters.values())


def shape_result(
    result_sets: ResultSets,
    expected: ExpectedReturn,
    result_set_names: Sequence[str] | None = None,
) -> Any:
    if expected is ExpectedReturn.NONE:
        return None

    if expected is ExpectedReturn.SINGLE:
        if result_sets and result_sets[0]:
            return result_sets[0][0]
        return None

    if result_set_names:
        return {
            name: (result_sets[i] if i < len(result_sets) else [])
            for i, name in enumerate(result_set_names)
        }
    return result_sets


async def _fetch_result_sets(conn: AsyncConnection, statement: str, values: tuple[Any, ...]) -> ResultSets:
    # SQLAlchemy ne remonte que le premier jeu de résultats : on passe par le curseur aioodbc
    raw = await conn.get_raw_connection()
    result_sets: ResultSets = []
    async with raw.driver_connection.cursor() as cursor:
        await cursor.execute(statement, *values)
        while True:
            if cursor.description is not None:
                columns = [col[0] for col in cursor.description]
                rows = await cursor.fetchall()
                result_sets.append([dict(zip(columns, row)) for row in rows])
            if not await cursor.nextset():
                break
    return result_sets


class DatabaseGateway:
    """
    Exécute les procédures stockées nommées.

    Le pool (AsyncEngine) est créé au premier appel puis réutilisé ;
    l'instance appartient à l'AppContext du process.
    """

    def __init__(
        self,
        url: URL | str,
        *,
        schema: str = "functional",
        pool_size: int = 10,
        echo: bool = False,
        business_rule_error_number: int = 51000,
    ):
        self.url = url
        self.schema = schema
        self.pool_size = pool_size
        self.echo = echo
        self.business_rule_error_number = business_rule_error_number
        self._engine: AsyncEngine | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            logger.info("opening connection pool (size=%s)", self.pool_size)
            self._engine = create_engine(self.url, pool_size=self.pool_size, echo=self.echo)
        return self._engine

    async def execute(
        self,
        routine: str,
        parameters: Mapping[str, Any],
        expected: ExpectedReturn,
        transaction: Transaction | None = None,
        result_set_names: Sequence[str] | None = None,
    ) -> Any:
        statement, values = build_exec_statement(routine, parameters, schema=self.schema)
        logger.debug("EXEC %s (%d params)", routine, len(values))

        try:
            if transaction is not None:
                result_sets = await _fetch_result_sets(transaction, statement, values)
            else:
                async with self.engine.begin() as conn:
                    result_sets = await _fetch_result_sets(conn, statement, values)
        except Exception as exc:
            error = DatabaseError.from_driver(exc)
            logger.warning("EXEC %s failed (number=%s): %s", routine, error.number, error.message)
            raise error from exc

        return shape_result(result_sets, expected, result_set_names)

    async def begin_transaction(self) -> Transaction:
        try:
            conn = await self.engine.connect()
            await conn.begin()
        except Exception as exc:
            raise DatabaseError.from_driver(exc) from exc
        return conn

    async def commit_transaction(self, transaction: Transaction) -> None:
        try:
            await transaction.commit()
        except Exception as exc:
            raise DatabaseError.from_driver(exc) from exc
        finally:
            await transaction.close()

    async def rollback_transaction(self, transaction: Transaction) -> None:
        try:
            await transaction.rollback()
        except Exception as exc:
            raise DatabaseError.from_driver(exc) from exc
        finally:
            await transaction.close()

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
