# ============================================================================
# GATEWAY TESTS
# ============================================================================
# STATUS: Tests - DB-API gateway
# PURPOSE: Verify statement execution, error capture and transaction calls
# CREATED: 18 OCT 2026
# ============================================================================

import sys
from unittest.mock import MagicMock

import pytest

from tablewright.infrastructure.gateway import DbApiGateway, Gateway, RequestResult, connect_mysql


def _connection():
    connection = MagicMock()
    cursor = MagicMock()
    cursor.fetchall.return_value = [(1, "Dune")]
    connection.cursor.return_value = cursor
    return connection, cursor


class TestDbApiGateway:
    def test_satisfies_protocol(self):
        assert isinstance(DbApiGateway(MagicMock()), Gateway)

    def test_execute_without_params(self):
        connection, cursor = _connection()
        result = DbApiGateway(connection).execute("SELECT 1")

        assert result.success is True
        assert result.statement == "SELECT 1"
        cursor.execute.assert_called_once_with("SELECT 1")

    def test_execute_with_params(self):
        connection, cursor = _connection()
        gateway = DbApiGateway(connection)
        result = gateway.execute("SELECT * FROM `book` WHERE id = %s", [1])

        cursor.execute.assert_called_once_with("SELECT * FROM `book` WHERE id = %s", (1,))
        assert result.fetch_all() == [(1, "Dune")]

    def test_driver_error_becomes_result(self):
        connection, cursor = _connection()
        cursor.execute.side_effect = RuntimeError("Table 'book' already exists")
        gateway = DbApiGateway(connection)

        result = gateway.execute("CREATE TABLE `book` (`id` INT)")

        assert result.success is False
        assert result.error == "Table 'book' already exists"
        assert result.fetch_all() == []
        assert gateway.last_statement == "CREATE TABLE `book` (`id` INT)"
        assert gateway.last_error == "Table 'book' already exists"

    def test_last_error_cleared_on_success(self):
        connection, cursor = _connection()
        gateway = DbApiGateway(connection)
        cursor.execute.side_effect = [RuntimeError("boom"), None]

        gateway.execute("BAD")
        gateway.execute("SELECT 1")
        assert gateway.last_error is None

    def test_cursor_failure_becomes_result(self):
        connection = MagicMock()
        connection.cursor.side_effect = Exception("MySQL Connection not available")

        result = DbApiGateway(connection).execute("SELECT 1")

        assert result.success is False
        assert result.error == "MySQL Connection not available"
        assert result.cursor is None

    def test_failed_statement_closes_cursor(self):
        connection, cursor = _connection()
        cursor.execute.side_effect = RuntimeError("syntax error")

        DbApiGateway(connection).execute("SELEC 1")
        cursor.close.assert_called_once()

    def test_fetch_all_closes_cursor(self):
        connection, cursor = _connection()
        result = DbApiGateway(connection).execute("SELECT 1")

        assert result.fetch_all() == [(1, "Dune")]
        cursor.close.assert_called_once()
        assert result.cursor is None

    def test_transaction_control(self):
        connection, cursor = _connection()
        gateway = DbApiGateway(connection)

        gateway.begin_transaction()
        gateway.commit()
        gateway.rollback()
        gateway.close()

        cursor.execute.assert_called_once_with("START TRANSACTION")
        cursor.close.assert_called_once()
        connection.commit.assert_called_once()
        connection.rollback.assert_called_once()
        connection.close.assert_called_once()


class TestRequestResult:
    def test_fetch_all_without_cursor(self):
        assert RequestResult(success=True).fetch_all() == []


class TestConnectMysql:
    @pytest.fixture
    def driver(self, monkeypatch):
        mysql = MagicMock()
        monkeypatch.setitem(sys.modules, "mysql", mysql)
        monkeypatch.setitem(sys.modules, "mysql.connector", mysql.connector)
        return mysql.connector

    def test_env_fallbacks(self, driver, monkeypatch):
        monkeypatch.setenv("MYSQL_HOST", "db.internal")
        monkeypatch.setenv("MYSQL_DATABASE", "library")
        monkeypatch.setenv("MYSQL_USER", "app")
        monkeypatch.delenv("MYSQL_PORT", raising=False)
        monkeypatch.delenv("MYSQL_PASSWORD", raising=False)

        gateway = connect_mysql()

        driver.connect.assert_called_once_with(
            host="db.internal",
            port=3306,
            database="library",
            user="app",
            password=None,
            autocommit=False,
        )
        assert gateway.connection is driver.connect.return_value

    def test_arguments_win(self, driver, monkeypatch):
        monkeypatch.setenv("MYSQL_HOST", "db.internal")
        connect_mysql(host="localhost", port=3307, database="test", charset="utf8mb4")

        kwargs = driver.connect.call_args.kwargs
        assert kwargs["host"] == "localhost"
        assert kwargs["port"] == 3307
        assert kwargs["charset"] == "utf8mb4"

    def test_missing_driver(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "mysql", None)
        monkeypatch.setitem(sys.modules, "mysql.connector", None)
        with pytest.raises(RuntimeError, match="mysql-connector-python"):
            connect_mysql()
