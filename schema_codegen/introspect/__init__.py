"""
Schema connectors producing the intermediate DatabaseSchema.

Connectors are selected by the ``db_type`` of the active database.
"""

from pathlib import Path

from ..codegen.core.config import ConfigError, DatabaseConfig
from .base import DatabaseConnector, IntrospectionError
from .engine import sqlalchemy_url
from .mysql import MySqlConnector
from .normalize import normalize_type
from .postgres import PostgresConnector
from .schema_file import SchemaFileConnector
from .sqlite import SqliteConnector

SCHEMA_FILE_SUFFIXES = (".yaml", ".yml", ".json")


def _is_schema_file(dsn: str) -> bool:
    return Path(dsn).suffix.lower() in SCHEMA_FILE_SUFFIXES


def create_connector(db_config: DatabaseConfig) -> DatabaseConnector:
    """
    Create the connector for a database entry.

    ``sqlite`` opens the database file; ``file`` reads a schema document.
    ``mysql`` and ``postgres`` connect to the server named by the DSN, or
    read an exported schema document when the DSN is a YAML/JSON path.

    Raises:
        ConfigError: If the database type is unsupported
        IntrospectionError: If the server DSN or its driver is unusable
    """
    db_type = db_config.db_type.lower()

    if db_type in ("file", "sqlite", "mysql", "postgres") and _is_schema_file(db_config.dsn):
        return SchemaFileConnector(db_config.dsn, dialect=db_type)
    if db_type == "sqlite":
        return SqliteConnector(db_config.dsn)
    if db_type == "mysql":
        return MySqlConnector(db_config.dsn)
    if db_type == "postgres":
        return PostgresConnector(db_config.dsn)
    if db_type == "file":
        raise ConfigError(
            f"Schema file must end in {', '.join(SCHEMA_FILE_SUFFIXES)}: {db_config.dsn}"
        )
    raise ConfigError(f"Unsupported database type: {db_config.db_type}")


__all__ = [
    "DatabaseConnector",
    "IntrospectionError",
    "MySqlConnector",
    "PostgresConnector",
    "SchemaFileConnector",
    "SqliteConnector",
    "create_connector",
    "normalize_type",
    "sqlalchemy_url",
]
