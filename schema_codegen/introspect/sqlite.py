"""
SQLite schema connector.

Reads tables from ``sqlite_master`` and columns from ``PRAGMA table_info``.
"""

import sqlite3
from pathlib import Path

from ..codegen.core.schema import Column, DatabaseSchema, Table
from ..logging_config import get_logger
from .base import DatabaseConnector, IntrospectionError
from .normalize import normalize_type

logger = get_logger(__name__)


def sqlite_path_from_dsn(dsn: str) -> str:
    """Strip ``sqlite:`` / ``sqlite://`` prefixes from a DSN."""
    for prefix in ("sqlite:///", "sqlite://", "sqlite:"):
        if dsn.startswith(prefix):
            return dsn[len(prefix):]
    return dsn


class SqliteConnector(DatabaseConnector):
    """Connector for SQLite database files."""

    def __init__(self, dsn: str):
        path = sqlite_path_from_dsn(dsn)
        if path != ":memory:" and not Path(path).exists():
            raise IntrospectionError(f"SQLite database not found: {path}")

        try:
            self._connection = sqlite3.connect(path)
        except sqlite3.Error as e:
            raise IntrospectionError(f"Failed to connect to SQLite: {dsn}: {e}") from e
        self._connection.row_factory = sqlite3.Row

    @classmethod
    def from_connection(cls, connection: sqlite3.Connection) -> "SqliteConnector":
        """Wrap an already open connection."""
        connector = cls.__new__(cls)
        connection.row_factory = sqlite3.Row
        connector._connection = connection
        return connector

    @property
    def dialect(self) -> str:
        return "sqlite"

    def get_schema(self, database_name: str = "main") -> DatabaseSchema:
        try:
            table_rows = self._connection.execute(
                "SELECT name FROM sqlite_master "
                "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' "
                "ORDER BY name"
            ).fetchall()
        except sqlite3.Error as e:
            raise IntrospectionError(f"Failed to query SQLite table names: {e}") from e

        tables = [self._read_table(row["name"]) for row in table_rows]
        logger.debug("Read %d tables from SQLite database %s", len(tables), database_name)
        return DatabaseSchema(name=database_name, tables=tables)

    def _read_table(self, table_name: str) -> Table:
        quoted = '"' + table_name.replace('"', '""') + '"'
        try:
            column_rows = self._connection.execute(
                f"PRAGMA table_info({quoted})"
            ).fetchall()
        except sqlite3.Error as e:
            raise IntrospectionError(
                f"Failed to query columns for table: {table_name}: {e}"
            ) from e

        columns = []
        for row in column_rows:
            data_type = row["type"] or ""
            default = row["dflt_value"]
            columns.append(
                Column(
                    name=row["name"],
                    database_type=data_type,
                    generic_type=normalize_type("sqlite", data_type),
                    is_nullable=row["notnull"] == 0,
                    default_value=None if default is None else str(default),
                    is_primary_key=row["pk"] > 0,
                )
            )
        return Table(name=table_name, columns=columns)

    def close(self):
        self._connection.close()
