"""
Shared plumbing for connectors that talk to a database server.

Connections go through a SQLAlchemy engine; the DBAPI driver for each
dialect is an optional extra (``schema-codegen[mysql]``,
``schema-codegen[postgres]``).
"""

from typing import Any, Dict, List

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from ..logging_config import get_logger
from .base import DatabaseConnector, IntrospectionError

logger = get_logger(__name__)

# DSN scheme -> SQLAlchemy dialect+driver
DRIVER_SCHEMES = {
    "mysql": "mysql+pymysql",
    "mariadb": "mysql+pymysql",
    "postgres": "postgresql+psycopg2",
    "postgresql": "postgresql+psycopg2",
}


def sqlalchemy_url(dsn: str) -> str:
    """
    Turn a plain DSN (``mysql://...``, ``postgres://...``) into an URL
    naming the driver. URLs that already name a driver are kept.
    """
    scheme, separator, rest = dsn.partition("://")
    if not separator:
        raise IntrospectionError(f"Invalid database DSN: {dsn}")
    if "+" in scheme:
        return dsn

    driver = DRIVER_SCHEMES.get(scheme.lower())
    if driver is None:
        raise IntrospectionError(f"Unsupported DSN scheme '{scheme}' in: {dsn}")
    return f"{driver}://{rest}"


class EngineConnector(DatabaseConnector):
    """Base class for connectors reading a server's catalog tables."""

    def __init__(self, dsn: str):
        url = sqlalchemy_url(dsn)
        try:
            self._engine = create_engine(url)
        except ImportError as e:
            raise IntrospectionError(
                f"Database driver for {self.dialect} is not installed "
                f"(pip install 'schema-codegen[{self.dialect}]'): {e}"
            ) from e
        except ArgumentError as e:
            raise IntrospectionError(f"Invalid database DSN: {dsn}: {e}") from e
        logger.debug("Created %s engine for %s", self.dialect, self._engine.url)

    @classmethod
    def from_engine(cls, engine: Engine):
        """Wrap an existing SQLAlchemy engine."""
        connector = cls.__new__(cls)
        connector._engine = engine
        return connector

    def fetch_all(self, sql: str, what: str, **params: Any) -> List[Dict[str, Any]]:
        """
        Run a catalog query and return its rows as dictionaries.

        Raises:
            IntrospectionError: If connecting or querying fails
        """
        try:
            with self._engine.connect() as connection:
                result = connection.execute(text(sql), params)
                return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as e:
            raise IntrospectionError(f"Failed to query {what}: {e}") from e

    def close(self):
        self._engine.dispose()
