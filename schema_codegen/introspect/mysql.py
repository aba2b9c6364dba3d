"""
MySQL schema connector.

Reads tables and columns from ``information_schema`` of one schema
(the database name).
"""

from typing import Any, Dict

from ..codegen.core.schema import Column, DatabaseSchema, Table
from ..logging_config import get_logger
from .engine import EngineConnector
from .normalize import normalize_type

logger = get_logger(__name__)

TABLES_QUERY = """
SELECT table_name AS table_name
FROM information_schema.tables
WHERE table_schema = :schema AND table_type = 'BASE TABLE'
ORDER BY table_name
"""

COLUMNS_QUERY = """
SELECT
    column_name AS column_name,
    data_type AS data_type,
    is_nullable AS is_nullable,
    column_key AS column_key,
    column_default AS column_default,
    column_comment AS column_comment
FROM information_schema.columns
WHERE table_schema = :schema AND table_name = :table_name
ORDER BY ordinal_position
"""


def column_from_row(row: Dict[str, Any]) -> Column:
    """Build a Column from an ``information_schema.columns`` row."""
    data_type = row["data_type"] or ""
    default = row["column_default"]
    return Column(
        name=row["column_name"],
        database_type=data_type,
        generic_type=normalize_type("mysql", data_type),
        is_nullable=row["is_nullable"] == "YES",
        default_value=None if default is None else str(default),
        comment=row["column_comment"] or None,
        is_primary_key=row["column_key"] == "PRI",
    )


class MySqlConnector(EngineConnector):
    """Connector for MySQL and MariaDB servers."""

    @property
    def dialect(self) -> str:
        return "mysql"

    def get_schema(self, database_name: str) -> DatabaseSchema:
        table_rows = self.fetch_all(
            TABLES_QUERY, "MySQL table names", schema=database_name
        )

        tables = []
        for table_row in table_rows:
            table_name = table_row["table_name"]
            column_rows = self.fetch_all(
                COLUMNS_QUERY,
                f"columns for table: {table_name}",
                schema=database_name,
                table_name=table_name,
            )
            tables.append(
                Table(name=table_name, columns=[column_from_row(row) for row in column_rows])
            )

        logger.debug("Read %d tables from MySQL schema %s", len(tables), database_name)
        return DatabaseSchema(name=database_name, tables=tables)
