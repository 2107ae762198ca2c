# ============================================================================
# DATABASE GATEWAY
# ============================================================================
# STATUS: Infrastructure - Statement execution boundary
# PURPOSE: Execute rendered statements over any PEP 249 connection
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: Gateway, DbApiGateway, RequestResult, connect_mysql
# ============================================================================
"""
Database Gateway.

The only place tablewright talks to a database. Any DB-API 2.0 (PEP 249)
connection works, e.g. one from PyMySQL or mysql-connector:

    import pymysql
    gateway = DbApiGateway(pymysql.connect(host=..., user=..., database=...))

Statement failures are reported as RequestResult(success=False), never
raised. Transaction control (begin/commit/rollback) raises driver errors
to the caller.
"""

import logging
import os
from contextlib import closing
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

logger = logging.getLogger(__name__)


@dataclass
class RequestResult:
    """
    Outcome of one executed statement.

    Holds the open cursor of a successful statement; the caller closes it
    with close() (fetch_all() closes it after reading).
    """
    success: bool
    cursor: Any = None
    error: Optional[str] = None
    statement: str = ""

    def fetch_all(self) -> list:
        if not self.success or self.cursor is None:
            return []
        try:
            return list(self.cursor.fetchall())
        finally:
            self.close()

    def close(self) -> None:
        if self.cursor is None:
            return
        try:
            self.cursor.close()
        except Exception as e:
            logger.warning(f"Cursor close failed: {e}")
        self.cursor = None


@runtime_checkable
class Gateway(Protocol):
    """Statement execution with explicit transaction control."""

    def execute(self, statement: str, params: Sequence[Any] = ()) -> RequestResult: ...

    def begin_transaction(self) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


class DbApiGateway:
    """
    Gateway over a PEP 249 connection.

    The connection is owned by the caller; close() is provided for
    convenience and is not called implicitly.
    """

    def __init__(self, connection: Any):
        self.connection = connection
        self.last_statement: str = ""
        self.last_error: Optional[str] = None

    def execute(self, statement: str, params: Sequence[Any] = ()) -> RequestResult:
        """Execute one statement; driver errors (cursor creation included) become success=False."""
        self.last_statement = statement
        cursor = None
        try:
            cursor = self.connection.cursor()
            if params:
                cursor.execute(statement, tuple(params))
            else:
                cursor.execute(statement)
        except Exception as e:
            self.last_error = str(e)
            logger.error(f"Statement failed: {e}")
            logger.debug(f"Failed statement:\n{statement}")
            failed = RequestResult(success=False, cursor=cursor, error=str(e), statement=statement)
            failed.close()
            return failed

        self.last_error = None
        return RequestResult(success=True, cursor=cursor, statement=statement)

    def begin_transaction(self) -> None:
        with closing(self.connection.cursor()) as cursor:
            cursor.execute("START TRANSACTION")
        logger.debug("Transaction started")

    def commit(self) -> None:
        self.connection.commit()
        logger.debug("Transaction committed")

    def rollback(self) -> None:
        self.connection.rollback()
        logger.debug("Transaction rolled back")

    def close(self) -> None:
        self.connection.close()


def connect_mysql(
    host: Optional[str] = None,
    port: Optional[int] = None,
    database: Optional[str] = None,
    user: Optional[str] = None,
    password: Optional[str] = None,
    **kwargs: Any,
) -> DbApiGateway:
    """
    Open a mysql-connector-python connection and wrap it in a DbApiGateway.

    Unset arguments fall back to MYSQL_HOST, MYSQL_PORT, MYSQL_DATABASE,
    MYSQL_USER and MYSQL_PASSWORD. Autocommit is off so apply() controls
    the transaction.

    Raises:
        RuntimeError: mysql-connector-python is not installed
    """
    try:
        import mysql.connector
    except ImportError:
        raise RuntimeError(
            "mysql-connector-python is required for connect_mysql(). "
            "Install with: pip install tablewright[mysql]"
        ) from None

    host = host or os.getenv("MYSQL_HOST", "localhost")
    port = port or int(os.getenv("MYSQL_PORT", "3306"))
    database = database or os.getenv("MYSQL_DATABASE", "")

    connection = mysql.connector.connect(
        host=host,
        port=port,
        database=database,
        user=user or os.getenv("MYSQL_USER"),
        password=password or os.getenv("MYSQL_PASSWORD"),
        autocommit=False,
        **kwargs,
    )
    logger.info(f"Connected to MySQL at {host}:{port}/{database}")
    return DbApiGateway(connection)


__all__ = ["Gateway", "DbApiGateway", "RequestResult", "connect_mysql"]
