"""
Type resolution for code generation.

Maps a column's raw database type and generic category to a target
language type, and applies the per-language nullability strategy.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from ...logging_config import get_logger
from ..registry import get_language_profile, get_registry, DEFAULT_FALLBACK_TYPE
from .config import Config
from .schema import GenericType

logger = get_logger(__name__)


class NullableStrategy(Enum):
    """How an optional column is spelled in the target language."""

    POINTER = "pointer"  # *T
    OPTION = "option"  # Option<T>
    NULLABLE_TYPE = "nullable_type"  # sql.NullString, Integer, T?
    UNION = "union"  # T | null
    OPTIONAL_PROPERTY = "optional_property"  # field?: T, handled by the template
    OPTIONAL_TYPE = "optional_type"  # Optional[T], ?T, Maybe T
    NATIVE = "native"  # nil is implicit


# (language, generic type) -> language type, used when no mapping is configured
BUILTIN_TYPES: Dict[Tuple[str, GenericType], str] = {
    ("go", GenericType.STRING): "string",
    ("go", GenericType.INTEGER): "int64",
    ("go", GenericType.FLOAT): "float64",
    ("go", GenericType.BOOLEAN): "bool",
    ("go", GenericType.DATETIME): "time.Time",
    ("go", GenericType.BYTES): "[]byte",
    ("rust", GenericType.STRING): "String",
    ("rust", GenericType.INTEGER): "i64",
    ("rust", GenericType.FLOAT): "f64",
    ("rust", GenericType.BOOLEAN): "bool",
    ("rust", GenericType.DATETIME): "chrono::NaiveDateTime",
    ("rust", GenericType.BYTES): "Vec<u8>",
    ("typescript", GenericType.STRING): "string",
    ("typescript", GenericType.INTEGER): "number",
    ("typescript", GenericType.FLOAT): "number",
    ("typescript", GenericType.BOOLEAN): "boolean",
    ("typescript", GenericType.DATETIME): "Date",
    ("typescript", GenericType.BYTES): "Uint8Array",
    ("csharp", GenericType.STRING): "string",
    ("csharp", GenericType.INTEGER): "long",
    ("csharp", GenericType.FLOAT): "double",
    ("csharp", GenericType.BOOLEAN): "bool",
    ("csharp", GenericType.DATETIME): "DateTime",
    ("csharp", GenericType.BYTES): "byte[]",
    ("java", GenericType.STRING): "String",
    ("java", GenericType.INTEGER): "int",
    ("java", GenericType.FLOAT): "double",
    ("java", GenericType.BOOLEAN): "boolean",
    ("java", GenericType.DATETIME): "java.time.LocalDateTime",
    ("java", GenericType.BYTES): "byte[]",
}

# Further templated languages, in GenericType declaration order:
# string, integer, float, boolean, datetime, bytes
_LANGUAGE_TYPE_ROWS = {
    "python": ("str", "int", "float", "bool", "datetime.datetime", "bytes"),
    "php": ("string", "int", "float", "bool", "\\DateTimeImmutable", "string"),
    "ruby": ("String", "Integer", "Float", "Boolean", "Time", "String"),
    "swift": ("String", "Int64", "Double", "Bool", "Date", "Data"),
    "kotlin": ("String", "Long", "Double", "Boolean", "java.time.LocalDateTime", "ByteArray"),
    "dart": ("String", "int", "double", "bool", "DateTime", "List<int>"),
    "zig": ("[]const u8", "i64", "f64", "bool", "i64", "[]const u8"),
    "nim": ("string", "int64", "float64", "bool", "DateTime", "seq[byte]"),
    "haskell": ("Text", "Int", "Double", "Bool", "UTCTime", "ByteString"),
    "elixir": ("String.t()", "integer()", "float()", "boolean()", "DateTime.t()", "binary()"),
    "crystal": ("String", "Int64", "Float64", "Bool", "Time", "Bytes"),
    "ocaml": ("string", "int", "float", "bool", "float", "bytes"),
}

BUILTIN_TYPES.update(
    {
        (language, generic): type_name
        for language, row in _LANGUAGE_TYPE_ROWS.items()
        for generic, type_name in zip(GenericType, row)
    }
)

# Go database/sql wrappers for nullable primitives
GO_SQL_NULL_TYPES = {
    "string": "sql.NullString",
    "int64": "sql.NullInt64",
    "float64": "sql.NullFloat64",
    "bool": "sql.NullBool",
}

# Java primitives and their boxed, nullable counterparts
JAVA_BOXED_TYPES = {
    "int": "Integer",
    "long": "Long",
    "boolean": "Boolean",
    "float": "Float",
    "double": "Double",
}

# Spelling of optional wrappers for the optional_type strategy
OPTIONAL_TYPE_FORMATS = {
    "python": "Optional[{}]",
    "zig": "?{}",
    "nim": "Option[{}]",
    "haskell": "Maybe {}",
    "ocaml": "{} option",
}


@dataclass(frozen=True)
class NullableType:
    """Result of applying a nullability strategy."""

    type_name: str
    imports: Tuple[str, ...] = field(default_factory=tuple)


def _add_import(imports: List[str], name: str):
    if name not in imports:
        imports.append(name)


def _nullable_type(raw_type: str, language: str, imports: List[str]) -> str:
    """Language-specific nullable equivalent of a raw type."""
    if language == "go":
        if raw_type.startswith("time."):
            _add_import(imports, "time")
            _add_import(imports, "database/sql")
            return "sql.NullTime"
        _add_import(imports, "database/sql")
        return GO_SQL_NULL_TYPES.get(raw_type, f"*{raw_type}")
    elif language == "csharp":
        return f"{raw_type}?"
    elif language == "java":
        # Reference types such as String are already nullable
        return JAVA_BOXED_TYPES.get(raw_type, raw_type)
    elif language == "php":
        return f"?{raw_type}"
    elif language in ("kotlin", "swift", "dart"):
        return f"{raw_type}?"
    else:
        return f"{raw_type} | null"


def apply_nullable(
    raw_type: str,
    strategy: Union[str, NullableStrategy],
    language: str,
    is_nullable: bool = True,
) -> NullableType:
    """
    Apply a nullability strategy to a resolved type.

    Args:
        raw_type: Type resolved for the column
        strategy: Strategy name from the language configuration
        language: Target language name
        is_nullable: Whether the column is nullable; non-nullable columns
            always keep the raw type

    Returns:
        NullableType with the final type and any imports it requires
    """
    if not is_nullable:
        return NullableType(raw_type)

    if isinstance(strategy, NullableStrategy):
        strategy = strategy.value

    imports: List[str] = []

    if strategy == NullableStrategy.POINTER.value:
        type_name = f"*{raw_type}"
    elif strategy == NullableStrategy.OPTION.value:
        type_name = f"Option<{raw_type}>"
    elif strategy == NullableStrategy.NULLABLE_TYPE.value:
        type_name = _nullable_type(raw_type, language, imports)
    elif strategy == NullableStrategy.UNION.value:
        type_name = f"{raw_type} | null"
    elif strategy == NullableStrategy.OPTIONAL_TYPE.value:
        type_format = OPTIONAL_TYPE_FORMATS.get(language)
        type_name = type_format.format(raw_type) if type_format else raw_type
        if language == "python":
            _add_import(imports, "typing.Optional")
    else:
        # optional_property, native and unknown strategies keep the raw type
        type_name = raw_type

    return NullableType(type_name, tuple(imports))


class TypeResolver:
    """
    Resolves column types for a target language.

    Configured type mappings always win over the built-in table; when
    neither knows the type the language's last-resort type is used.
    """

    def __init__(self, config: Optional[Config] = None):
        """Initialize with the run configuration (mappings may be empty)."""
        self.type_mappings = config.type_mappings if config else {}

    def resolve(
        self,
        db_type: str,
        db_column_type: str,
        generic_type: Union[str, GenericType],
        language: str,
    ) -> Optional[str]:
        """
        Resolve a language type, or None when nothing matches.

        Args:
            db_type: Database dialect (e.g. "postgres")
            db_column_type: Raw column type (e.g. "int8")
            generic_type: Generic category of the column
            language: Target language name as configured (an alias such
                as "golang" is accepted)

        Returns:
            Language type string or None
        """
        canonical = get_registry().canonical_name(language)

        mapping = self.type_mappings.get(db_type, {}).get(db_column_type)
        if mapping is not None:
            # The configured spelling wins over the primary language name
            for key in (language, canonical):
                if key in mapping.language_types:
                    return mapping.language_types[key]

        try:
            generic = GenericType(generic_type)
        except ValueError:
            return None
        return BUILTIN_TYPES.get((canonical, generic))

    def resolve_or_fallback(
        self,
        db_type: str,
        db_column_type: str,
        generic_type: Union[str, GenericType],
        language: str,
    ) -> Tuple[str, bool]:
        """
        Resolve a language type, falling back to the language default.

        Returns:
            Tuple of (type, whether the fallback was used)
        """
        resolved = self.resolve(db_type, db_column_type, generic_type, language)
        if resolved is not None:
            return resolved, False

        fallback = fallback_type_for(language)
        logger.warning(
            "No type mapping found for %s.%s in %s, using fallback: %s",
            db_type,
            db_column_type,
            language,
            fallback,
        )
        return fallback, True


def fallback_type_for(language: str) -> str:
    """Last-resort type for a language."""
    profile = get_language_profile(language)
    return profile.fallback_type if profile else DEFAULT_FALLBACK_TYPE
