"""
Raw column type normalization per SQL dialect.

Maps dialect-specific type names onto the generic categories of the IR.
Unknown types are treated as strings.
"""

import re
from typing import Dict

from ..codegen.core.schema import GenericType

# Type parameters and modifiers: varchar(255), int unsigned, numeric(10, 2)
_PARAMS_RE = re.compile(r"\(.*?\)")

MYSQL_TYPES: Dict[str, GenericType] = {
    **dict.fromkeys(["varchar", "text", "longtext", "mediumtext", "char"], GenericType.STRING),
    **dict.fromkeys(["int", "tinyint", "smallint", "mediumint", "bigint"], GenericType.INTEGER),
    **dict.fromkeys(["float", "double", "decimal"], GenericType.FLOAT),
    "boolean": GenericType.BOOLEAN,
    **dict.fromkeys(["datetime", "timestamp", "date"], GenericType.DATETIME),
    **dict.fromkeys(
        ["blob", "longblob", "mediumblob", "tinyblob", "binary", "varbinary"],
        GenericType.BYTES,
    ),
}

POSTGRES_TYPES: Dict[str, GenericType] = {
    **dict.fromkeys(["varchar", "text", "uuid", "name", "bpchar"], GenericType.STRING),
    **dict.fromkeys(["int2", "int4", "int8", "serial4", "serial8"], GenericType.INTEGER),
    **dict.fromkeys(["float4", "float8", "numeric"], GenericType.FLOAT),
    "bool": GenericType.BOOLEAN,
    **dict.fromkeys(["timestamptz", "timestamp", "date"], GenericType.DATETIME),
    "bytea": GenericType.BYTES,
}

SQLITE_TYPES: Dict[str, GenericType] = {
    **dict.fromkeys(
        [
            "text",
            "varchar",
            "character",
            "varying character",
            "nchar",
            "native character",
            "nvarchar",
            "clob",
        ],
        GenericType.STRING,
    ),
    **dict.fromkeys(
        [
            "integer",
            "int",
            "tinyint",
            "smallint",
            "mediumint",
            "bigint",
            "unsigned big int",
            "int2",
            "int8",
        ],
        GenericType.INTEGER,
    ),
    **dict.fromkeys(
        ["real", "double", "double precision", "float", "numeric"], GenericType.FLOAT
    ),
    "boolean": GenericType.BOOLEAN,
    "blob": GenericType.BYTES,
    **dict.fromkeys(["datetime", "date"], GenericType.DATETIME),
}

DIALECT_TYPES: Dict[str, Dict[str, GenericType]] = {
    "mysql": MYSQL_TYPES,
    "postgres": POSTGRES_TYPES,
    "sqlite": SQLITE_TYPES,
}


def clean_type_name(raw_type: str) -> str:
    """Lowercase a raw type and drop its parameters."""
    return " ".join(_PARAMS_RE.sub("", raw_type).lower().split())


def normalize_type(dialect: str, raw_type: str) -> GenericType:
    """
    Classify a raw column type.

    Args:
        dialect: "mysql", "postgres" or "sqlite"; other dialects classify
            every type as a string
        raw_type: Type as reported by the database

    Returns:
        Generic type category
    """
    table = DIALECT_TYPES.get(dialect.lower(), {})
    name = clean_type_name(raw_type)
    if name in table:
        return table[name]
    # "int unsigned", "timestamp without time zone"
    first_word = name.split(" ", 1)[0] if name else name
    return table.get(first_word, GenericType.STRING)
