"""Tests for transaction handling."""

from unittest.mock import MagicMock, call, patch

import pytest
from conftest import make_connection

from schema_catalog.core.errors import TransactionError
from schema_catalog.core.session import DBAPITransaction, psycopg_connector, start_transaction


def test_transaction_rolls_back_and_closes_on_success():
    connection = make_connection(rows=[("public",)])
    connect = MagicMock(return_value=connection)

    with start_transaction(connect, "appdb") as txn:
        rows = txn.query("SELECT 1")

    connect.assert_called_once_with("appdb")
    assert rows == [("public",)]
    connection.rollback.assert_called_once()
    connection.close.assert_called_once()
    connection.commit.assert_not_called()


def test_transaction_rolls_back_and_closes_on_error():
    connection = make_connection()
    connect = MagicMock(return_value=connection)

    with pytest.raises(RuntimeError):
        with start_transaction(connect, "appdb"):
            raise RuntimeError("boom")

    connection.rollback.assert_called_once()
    connection.close.assert_called_once()


def test_connection_closed_even_if_rollback_fails():
    connection = make_connection()
    connection.rollback.side_effect = OSError("connection lost")

    with pytest.raises(OSError):
        with start_transaction(MagicMock(return_value=connection), "appdb"):
            pass

    connection.close.assert_called_once()


def test_connect_failure_raises_transaction_error():
    cause = OSError("could not connect to server")
    connect = MagicMock(side_effect=cause)
    body = MagicMock()

    with pytest.raises(TransactionError) as exc_info:
        with start_transaction(connect, "appdb"):
            body()

    body.assert_not_called()
    assert exc_info.value.database == "appdb"
    assert exc_info.value.__cause__ is cause


def test_dbapi_transaction_binds_params_and_closes_cursor():
    connection = make_connection(rows=[("a",), ("b",)])
    cursor = connection.cursor.return_value

    rows = DBAPITransaction(connection).query("SELECT %s", ["x"])

    assert rows == [("a",), ("b",)]
    cursor.execute.assert_called_once_with("SELECT %s", ["x"])
    cursor.close.assert_called_once()


def test_dbapi_transaction_without_params_passes_none():
    connection = make_connection()
    cursor = connection.cursor.return_value

    DBAPITransaction(connection).query("SELECT 'pg_%'")

    cursor.execute.assert_called_once_with("SELECT 'pg_%'", None)


def test_dbapi_transaction_closes_cursor_on_failure():
    connection = make_connection()
    cursor = connection.cursor.return_value
    cursor.execute.side_effect = RuntimeError("syntax error")

    with pytest.raises(RuntimeError):
        DBAPITransaction(connection).query("SELEC")
    cursor.close.assert_called_once()


def test_psycopg_connector_opens_read_only_connection():
    psycopg = MagicMock()
    with patch("schema_catalog.core.session.importlib.import_module", return_value=psycopg) as imp:
        connect = psycopg_connector("host=localhost user=reader")
        connection = connect("appdb")

    imp.assert_called_once_with("psycopg")
    assert psycopg.connect.call_args == call("host=localhost user=reader", dbname="appdb")
    assert connection is psycopg.connect.return_value
    assert connection.read_only is True


def test_rollback_failure_does_not_mask_body_error(caplog):
    connection = make_connection()
    connection.rollback.side_effect = ConnectionError("connection already closed")
    body_error = RuntimeError("terminating connection")

    with pytest.raises(RuntimeError) as exc_info:
        with start_transaction(MagicMock(return_value=connection), "appdb"):
            raise body_error

    assert exc_info.value is body_error
    connection.close.assert_called_once()
    assert "Could not release transaction on appdb" in caplog.text
    assert "connection already closed" in caplog.text


def test_close_failure_does_not_mask_body_error():
    connection = make_connection()
    connection.close.side_effect = OSError("socket gone")

    with pytest.raises(KeyError):
        with start_transaction(MagicMock(return_value=connection), "appdb"):
            raise KeyError("body")

    connection.rollback.assert_called_once()
