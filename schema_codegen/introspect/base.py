"""
Base interface for schema connectors.

A connector reads a database (or a description of one) and returns the
intermediate DatabaseSchema consumed by the generators.
"""

from abc import ABC, abstractmethod

from ..codegen.core.schema import DatabaseSchema


class IntrospectionError(Exception):
    """Exception raised when a schema cannot be read."""

    pass


class DatabaseConnector(ABC):
    """Abstract base class for all schema connectors."""

    @property
    @abstractmethod
    def dialect(self) -> str:
        """Return the database dialect (e.g. 'sqlite', 'postgres')."""
        pass

    @abstractmethod
    def get_schema(self, database_name: str) -> DatabaseSchema:
        """
        Read the schema of a database.

        Args:
            database_name: Name recorded on the resulting schema

        Returns:
            DatabaseSchema with tables and columns in a stable order
        """
        pass

    def close(self):
        """Release any held resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
