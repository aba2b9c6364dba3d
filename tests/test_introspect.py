"""Tests for schema connectors and type normalization."""

import json
import sqlite3

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from schema_codegen.codegen.core.config import ConfigError, DatabaseConfig
from schema_codegen.codegen.core.schema import GenericType
from schema_codegen.introspect import (
    IntrospectionError,
    MySqlConnector,
    PostgresConnector,
    SchemaFileConnector,
    SqliteConnector,
    create_connector,
    normalize_type,
    sqlalchemy_url,
)
from schema_codegen.introspect.mysql import column_from_row as mysql_column_from_row
from schema_codegen.introspect.normalize import clean_type_name
from schema_codegen.introspect.postgres import column_from_row as postgres_column_from_row
from schema_codegen.introspect.sqlite import sqlite_path_from_dsn


class TestNormalizeType:
    @pytest.mark.parametrize(
        "dialect, raw, expected",
        [
            ("postgres", "int8", GenericType.INTEGER),
            ("postgres", "varchar(255)", GenericType.STRING),
            ("postgres", "timestamptz", GenericType.DATETIME),
            ("postgres", "bytea", GenericType.BYTES),
            ("postgres", "numeric(10, 2)", GenericType.FLOAT),
            ("mysql", "INT UNSIGNED", GenericType.INTEGER),
            ("mysql", "tinyint(1)", GenericType.INTEGER),
            ("mysql", "boolean", GenericType.BOOLEAN),
            ("sqlite", "INTEGER", GenericType.INTEGER),
            ("sqlite", "DOUBLE PRECISION", GenericType.FLOAT),
            ("sqlite", "unsigned big int", GenericType.INTEGER),
            ("sqlite", "BLOB", GenericType.BYTES),
        ],
    )
    def test_known_types(self, dialect, raw, expected):
        assert normalize_type(dialect, raw) is expected

    def test_unknown_type_is_string(self):
        assert normalize_type("postgres", "tsvector") is GenericType.STRING
        assert normalize_type("sqlite", "") is GenericType.STRING
        assert normalize_type("oracle", "NUMBER") is GenericType.STRING

    def test_clean_type_name(self):
        assert clean_type_name("  VARCHAR(64)  ") == "varchar"
        assert clean_type_name("Double   Precision") == "double precision"


@pytest.fixture()
def sqlite_db(tmp_path):
    path = tmp_path / "app.db"
    connection = sqlite3.connect(str(path))
    connection.executescript(
        """
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email VARCHAR(255),
            active BOOLEAN NOT NULL DEFAULT 1,
            created_at DATETIME NOT NULL
        );
        CREATE TABLE audit_log (entry TEXT, payload BLOB);
        """
    )
    connection.commit()
    connection.close()
    return path


class TestSqliteConnector:
    def test_dsn_prefixes(self):
        assert sqlite_path_from_dsn("sqlite:./data/app.db") == "./data/app.db"
        assert sqlite_path_from_dsn("sqlite:///tmp/app.db") == "tmp/app.db"
        assert sqlite_path_from_dsn("sqlite://app.db") == "app.db"
        assert sqlite_path_from_dsn("/tmp/app.db") == "/tmp/app.db"

    def test_get_schema(self, sqlite_db):
        with SqliteConnector(f"sqlite:{sqlite_db}") as connector:
            schema = connector.get_schema("main")

        assert schema.name == "main"
        # internal sqlite_* tables are excluded, the rest ordered by name
        assert [t.name for t in schema.tables] == ["audit_log", "users"]

        users = schema.get_table("users")
        assert [c.name for c in users.columns] == ["id", "email", "active", "created_at"]
        id_column, email, active, created_at = users.columns
        assert id_column.is_primary_key
        assert id_column.generic_type is GenericType.INTEGER
        assert email.is_nullable
        assert email.database_type == "VARCHAR(255)"
        assert email.generic_type is GenericType.STRING
        assert not active.is_nullable
        assert active.default_value == "1"
        assert active.generic_type is GenericType.BOOLEAN
        assert created_at.generic_type is GenericType.DATETIME

        payload = schema.get_table("audit_log").columns[1]
        assert payload.generic_type is GenericType.BYTES

    def test_missing_file(self, tmp_path):
        with pytest.raises(IntrospectionError, match="not found"):
            SqliteConnector(f"sqlite:{tmp_path / 'missing.db'}")

    def test_from_connection(self):
        connection = sqlite3.connect(":memory:")
        connection.execute("CREATE TABLE t (v REAL)")
        connector = SqliteConnector.from_connection(connection)
        assert connector.dialect == "sqlite"
        column = connector.get_schema().tables[0].columns[0]
        assert column.generic_type is GenericType.FLOAT
        connector.close()


class TestSchemaFileConnector:
    def test_yaml_with_inference(self, schema_file):
        schema = SchemaFileConnector(schema_file, dialect="postgres").get_schema("ignored")
        assert schema.name == "shop"
        users = schema.get_table("users")
        assert users.columns[0].generic_type is GenericType.INTEGER
        assert users.columns[0].is_primary_key
        assert users.columns[1].generic_type is GenericType.STRING
        assert users.columns[1].is_nullable

    def test_json_with_explicit_types(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(
            json.dumps(
                {
                    "tables": [
                        {
                            "name": "events",
                            "columns": [
                                {"name": "at", "database_type": "text", "generic_type": "datetime"}
                            ],
                        }
                    ]
                }
            ),
            encoding="utf-8",
        )
        schema = SchemaFileConnector(path).get_schema("events_db")
        assert schema.name == "events_db"
        assert schema.tables[0].columns[0].generic_type is GenericType.DATETIME

    def test_unknown_generic_type(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text(
            "tables:\n  - name: t\n    columns:\n      - {name: c, database_type: x, generic_type: money}\n",
            encoding="utf-8",
        )
        with pytest.raises(IntrospectionError, match="money"):
            SchemaFileConnector(path).get_schema()

    def test_missing_file(self, tmp_path):
        with pytest.raises(IntrospectionError, match="not found"):
            SchemaFileConnector(tmp_path / "nope.yaml").get_schema()


@pytest.fixture()
def mysql_catalog_engine():
    """SQLite engine exposing MySQL-shaped information_schema tables."""
    connection = sqlite3.connect(":memory:", check_same_thread=False)
    connection.executescript(
        """
        ATTACH DATABASE ':memory:' AS information_schema;
        CREATE TABLE information_schema.tables (
            table_schema TEXT, table_name TEXT, table_type TEXT
        );
        CREATE TABLE information_schema.columns (
            table_schema TEXT, table_name TEXT, ordinal_position INTEGER,
            column_name TEXT, data_type TEXT, is_nullable TEXT, column_key TEXT,
            column_default TEXT, column_comment TEXT
        );
        INSERT INTO information_schema.tables VALUES
            ('shop', 'users', 'BASE TABLE'),
            ('shop', 'orders', 'BASE TABLE'),
            ('shop', 'active_users', 'VIEW'),
            ('other', 'accounts', 'BASE TABLE');
        INSERT INTO information_schema.columns VALUES
            ('shop', 'users', 2, 'email', 'varchar', 'YES', '', NULL, 'Login address'),
            ('shop', 'users', 1, 'id', 'bigint', 'NO', 'PRI', NULL, ''),
            ('shop', 'users', 3, 'active', 'boolean', 'NO', '', '1', ''),
            ('shop', 'orders', 1, 'total', 'decimal', 'NO', '', '0.00', ''),
            ('other', 'accounts', 1, 'id', 'int', 'NO', 'PRI', NULL, '');
        """
    )
    connection.commit()
    engine = create_engine("sqlite://", creator=lambda: connection, poolclass=StaticPool)
    yield engine
    engine.dispose()


class TestMySqlConnector:
    def test_get_schema(self, mysql_catalog_engine):
        with MySqlConnector.from_engine(mysql_catalog_engine) as connector:
            assert connector.dialect == "mysql"
            schema = connector.get_schema("shop")

        assert schema.name == "shop"
        # views and other schemas are skipped, tables ordered by name
        assert [t.name for t in schema.tables] == ["orders", "users"]

        users = schema.get_table("users")
        assert [c.name for c in users.columns] == ["id", "email", "active"]
        id_column, email, active = users.columns
        assert id_column.is_primary_key
        assert not id_column.is_nullable
        assert id_column.generic_type is GenericType.INTEGER
        assert id_column.comment is None
        assert email.is_nullable
        assert email.comment == "Login address"
        assert active.generic_type is GenericType.BOOLEAN
        assert active.default_value == "1"

        total = schema.get_table("orders").columns[0]
        assert total.generic_type is GenericType.FLOAT
        assert total.database_type == "decimal"

    def test_query_failure(self):
        engine = create_engine("sqlite://", poolclass=StaticPool)
        connector = MySqlConnector.from_engine(engine)
        with pytest.raises(IntrospectionError, match="MySQL table names"):
            connector.get_schema("shop")
        connector.close()

    def test_column_from_row(self):
        column = mysql_column_from_row(
            {
                "column_name": "created_at",
                "data_type": "datetime",
                "is_nullable": "NO",
                "column_key": "MUL",
                "column_default": None,
                "column_comment": "",
            }
        )
        assert column.generic_type is GenericType.DATETIME
        assert not column.is_primary_key
        assert not column.is_nullable
        assert column.default_value is None
        assert column.comment is None


class TestPostgresConnector:
    def test_column_from_row(self):
        row = {
            "column_name": "id",
            "data_type": "int8",
            "is_nullable": "NO",
            "column_default": "nextval('users_id_seq'::regclass)",
            "column_comment": "Surrogate key",
        }
        column = postgres_column_from_row(row, {"id"})
        assert column.database_type == "int8"
        assert column.generic_type is GenericType.INTEGER
        assert column.is_primary_key
        assert not column.is_nullable
        assert column.default_value == "nextval('users_id_seq'::regclass)"
        assert column.comment == "Surrogate key"

    def test_column_outside_primary_key(self):
        row = {
            "column_name": "payload",
            "data_type": "jsonb",
            "is_nullable": "YES",
            "column_default": None,
            "column_comment": None,
        }
        column = postgres_column_from_row(row, {"id"})
        assert not column.is_primary_key
        assert column.is_nullable
        assert column.generic_type is GenericType.STRING

    def test_default_namespace(self):
        engine = create_engine("sqlite://", poolclass=StaticPool)
        assert PostgresConnector.from_engine(engine).schema == "public"
        assert PostgresConnector.from_engine(engine, schema="billing").schema == "billing"
        engine.dispose()


class TestSqlalchemyUrl:
    @pytest.mark.parametrize(
        "dsn, expected",
        [
            ("mysql://u:p@localhost:3306/shop", "mysql+pymysql://u:p@localhost:3306/shop"),
            ("postgres://u:p@localhost/shop", "postgresql+psycopg2://u:p@localhost/shop"),
            ("postgresql://localhost/shop", "postgresql+psycopg2://localhost/shop"),
            ("postgresql+asyncpg://localhost/shop", "postgresql+asyncpg://localhost/shop"),
        ],
    )
    def test_driver_is_named(self, dsn, expected):
        assert sqlalchemy_url(dsn) == expected

    def test_unknown_scheme(self):
        with pytest.raises(IntrospectionError, match="oracle"):
            sqlalchemy_url("oracle://localhost/db")


class TestCreateConnector:
    def test_sqlite(self, sqlite_db):
        connector = create_connector(DatabaseConfig("sqlite", f"sqlite:{sqlite_db}", "main"))
        assert isinstance(connector, SqliteConnector)
        connector.close()

    @pytest.mark.parametrize("db_type", ["file", "postgres", "mysql", "sqlite"])
    def test_schema_file(self, db_type, schema_file):
        connector = create_connector(DatabaseConfig(db_type, str(schema_file), "shop"))
        assert isinstance(connector, SchemaFileConnector)
        assert connector.dialect == db_type

    def test_postgres_server(self):
        pytest.importorskip("psycopg2")
        connector = create_connector(
            DatabaseConfig("postgres", "postgres://u:p@localhost/db", "db")
        )
        assert isinstance(connector, PostgresConnector)
        assert connector.dialect == "postgres"
        connector.close()

    def test_mysql_server(self):
        pytest.importorskip("pymysql")
        connector = create_connector(DatabaseConfig("mysql", "mysql://u:p@localhost/db", "db"))
        assert isinstance(connector, MySqlConnector)
        connector.close()

    def test_server_dsn_without_scheme(self):
        with pytest.raises(IntrospectionError, match="Invalid database DSN"):
            create_connector(DatabaseConfig("mysql", "localhost/db", "db"))

    def test_file_needs_schema_suffix(self):
        with pytest.raises(ConfigError):
            create_connector(DatabaseConfig("file", "schema.txt", "db"))

    def test_unsupported(self):
        with pytest.raises(ConfigError, match="Unsupported database type"):
            create_connector(DatabaseConfig("oracle", "x", "db"))
