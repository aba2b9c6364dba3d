"""
PostgreSQL schema connector.

Reads the tables of one namespace (``public`` by default) from
``pg_catalog`` and ``information_schema``. Column types are reported by
their ``udt_name`` (``int8``, ``varchar``, ``timestamptz``).
"""

from typing import Any, Dict, Set

from ..codegen.core.schema import Column, DatabaseSchema, Table
from ..logging_config import get_logger
from .engine import EngineConnector
from .normalize import normalize_type

logger = get_logger(__name__)

DEFAULT_SCHEMA = "public"

TABLES_QUERY = """
SELECT tablename AS table_name
FROM pg_catalog.pg_tables
WHERE schemaname = :schema
ORDER BY tablename
"""

COLUMNS_QUERY = """
SELECT
    isc.column_name AS column_name,
    isc.udt_name AS data_type,
    isc.is_nullable AS is_nullable,
    isc.column_default AS column_default,
    pg_catalog.col_description(t.oid, a.attnum) AS column_comment
FROM information_schema.columns isc
JOIN pg_catalog.pg_namespace n ON n.nspname = isc.table_schema
JOIN pg_catalog.pg_class t ON t.relname = isc.table_name AND t.relnamespace = n.oid
JOIN pg_catalog.pg_attribute a ON a.attrelid = t.oid AND a.attname = isc.column_name
WHERE isc.table_schema = :schema AND isc.table_name = :table_name
ORDER BY isc.ordinal_position
"""

PRIMARY_KEYS_QUERY = """
SELECT a.attname AS column_name
FROM pg_catalog.pg_index i
JOIN pg_catalog.pg_attribute a ON a.attrelid = i.indrelid AND a.attnum = ANY(i.indkey)
WHERE i.indrelid = CAST(quote_ident(:schema) || '.' || quote_ident(:table_name) AS regclass)
  AND i.indisprimary
"""


def column_from_row(row: Dict[str, Any], primary_keys: Set[str]) -> Column:
    """Build a Column from a catalog row and the table's primary key names."""
    data_type = row["data_type"] or ""
    default = row["column_default"]
    return Column(
        name=row["column_name"],
        database_type=data_type,
        generic_type=normalize_type("postgres", data_type),
        is_nullable=row["is_nullable"] == "YES",
        default_value=None if default is None else str(default),
        comment=row["column_comment"],
        is_primary_key=row["column_name"] in primary_keys,
    )


class PostgresConnector(EngineConnector):
    """Connector for PostgreSQL servers."""

    def __init__(self, dsn: str, schema: str = DEFAULT_SCHEMA):
        super().__init__(dsn)
        self.schema = schema

    @classmethod
    def from_engine(cls, engine, schema: str = DEFAULT_SCHEMA):
        connector = super().from_engine(engine)
        connector.schema = schema
        return connector

    @property
    def dialect(self) -> str:
        return "postgres"

    def get_schema(self, database_name: str) -> DatabaseSchema:
        table_rows = self.fetch_all(
            TABLES_QUERY, "PostgreSQL table names", schema=self.schema
        )

        tables = []
        for table_row in table_rows:
            table_name = table_row["table_name"]
            column_rows = self.fetch_all(
                COLUMNS_QUERY,
                f"columns for table: {table_name}",
                schema=self.schema,
                table_name=table_name,
            )
            primary_keys = {
                row["column_name"]
                for row in self.fetch_all(
                    PRIMARY_KEYS_QUERY,
                    f"primary keys for table: {table_name}",
                    schema=self.schema,
                    table_name=table_name,
                )
            }
            tables.append(
                Table(
                    name=table_name,
                    columns=[column_from_row(row, primary_keys) for row in column_rows],
                )
            )

        logger.debug("Read %d tables from PostgreSQL database %s", len(tables), database_name)
        return DatabaseSchema(name=database_name, tables=tables)
