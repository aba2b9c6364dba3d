"""
tests/conftest.py
Shared fixtures for the schema-codegen test suite.

Real file I/O is performed inside temporary directories managed by
pytest's tmp_path fixture; no database server is required.
"""

import copy
import pathlib
from typing import Any, Dict

import pytest
import yaml

from schema_codegen.codegen.core.config import Config, config_from_dict
from schema_codegen.codegen.core.schema import (
    Column,
    DatabaseSchema,
    GenericType,
    Table,
)


# ---------------------------------------------------------------------------
# Schema fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def users_table() -> Table:
    """The ``users`` table: a not-null id and a nullable email."""
    return Table(
        name="users",
        columns=[
            Column("id", "int8", GenericType.INTEGER, is_primary_key=True),
            Column("email", "varchar", GenericType.STRING, is_nullable=True,
                   comment="Primary contact address"),
        ],
    )


@pytest.fixture()
def schema(users_table: Table) -> DatabaseSchema:
    """A small schema with regular, internal and temporary tables."""
    return DatabaseSchema(
        name="shop",
        tables=[
            users_table,
            Table(
                name="blog_posts",
                columns=[
                    Column("id", "int8", GenericType.INTEGER, is_primary_key=True),
                    Column("title", "text", GenericType.STRING),
                    Column("published_at", "timestamptz", GenericType.DATETIME,
                           is_nullable=True),
                ],
            ),
            Table(name="_migrations", columns=[Column("version", "int4", GenericType.INTEGER)]),
            Table(name="temp_cache", columns=[Column("key", "text", GenericType.STRING)]),
        ],
    )


# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def config_dict(tmp_path: pathlib.Path) -> Dict[str, Any]:
    """A configuration document covering Go, Rust and TypeScript."""
    return {
        "active_database": "main",
        "databases": {
            "main": {
                "db_type": "postgres",
                "dsn": str(tmp_path / "schema.yaml"),
                "db_name": "shop",
            },
        },
        "generation": {
            "target_languages": ["go", "rust", "typescript"],
            "output_dir": str(tmp_path / "out"),
            "template_dir": str(tmp_path / "templates"),
            "table_name_patterns": {
                "include": ["*"],
                "exclude": ["_*", "temp_*"],
            },
        },
        "languages": {
            "go": {
                "nullable_strategy": "pointer",
                "package_name": "models",
                "field_name_case": "PascalCase",
                "tags": ['json:"{{ column_name }}"', 'db:"{{ column_name }}"'],
            },
            "rust": {
                "nullable_strategy": "option",
                "field_name_case": "snake_case",
            },
            "typescript": {"nullable_strategy": "union"},
        },
    }


@pytest.fixture()
def config(config_dict: Dict[str, Any]) -> Config:
    return config_from_dict(copy.deepcopy(config_dict))


@pytest.fixture()
def config_file(config_dict: Dict[str, Any], tmp_path: pathlib.Path) -> pathlib.Path:
    """Write the configuration document as YAML and return its path."""
    path = tmp_path / "codegen.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.safe_dump(config_dict, fh, default_flow_style=False)
    return path


@pytest.fixture()
def schema_file(tmp_path: pathlib.Path) -> pathlib.Path:
    """A schema document using postgres types; generic types are inferred."""
    path = tmp_path / "schema.yaml"
    document = {
        "name": "shop",
        "tables": [
            {
                "name": "users",
                "columns": [
                    {"name": "id", "database_type": "int8", "is_primary_key": True},
                    {"name": "email", "database_type": "varchar(255)", "is_nullable": True},
                ],
            },
            {
                "name": "_migrations",
                "columns": [{"name": "version", "database_type": "int4"}],
            },
        ],
    }
    with open(path, "w", encoding="utf-8") as fh:
        yaml.safe_dump(document, fh, sort_keys=False)
    return path
