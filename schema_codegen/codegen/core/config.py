"""
Configuration management for code generation.

Handles loading the YAML/JSON configuration document into dataclasses,
applying command-line overrides, and writing a starter configuration.
"""

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple, Union

import yaml


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings for one database entry."""

    db_type: str
    dsn: str
    db_name: str


@dataclass(frozen=True)
class TableNamePatterns:
    """Glob-style include/exclude patterns for table selection."""

    include: List[str] = field(default_factory=lambda: ["*"])
    exclude: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class GenerationConfig:
    """Run-wide generation settings."""

    output_dir: Path
    target_languages: List[str]
    template_dir: Path
    table_name_patterns: Optional[TableNamePatterns] = None
    output_structure: str = "flat"  # flat, by_language


@dataclass(frozen=True)
class LanguageConfig:
    """Per-language settings; every field is optional."""

    template_file: Optional[str] = None
    template_path: Optional[str] = None
    output_extension: Optional[str] = None
    struct_name_case: Optional[str] = None
    field_name_case: Optional[str] = None
    nullable_strategy: str = "generic"
    tags: Optional[List[str]] = None
    default_imports: Optional[List[str]] = None
    field_prefix: Optional[str] = None
    package_name: Optional[str] = None


@dataclass(frozen=True)
class TypeMapping:
    """Explicit type override for one raw column type."""

    generic: str
    language_types: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class NamingConventions:
    """Default case styles when a language does not override them."""

    table_to_struct_case: str = "PascalCase"
    column_to_field_case: str = "camelCase"


@dataclass(frozen=True)
class Config:
    """Complete configuration document."""

    active_database: str
    databases: Dict[str, DatabaseConfig]
    generation: GenerationConfig
    languages: Dict[str, LanguageConfig] = field(default_factory=dict)
    type_mappings: Dict[str, Dict[str, TypeMapping]] = field(default_factory=dict)
    naming_conventions: NamingConventions = field(default_factory=NamingConventions)

    def get_language_config(self, language: str) -> LanguageConfig:
        """
        Get the configuration entry for a target language.

        Raises:
            ConfigError: If the language has no entry in ``languages``
        """
        try:
            return self.languages[language]
        except KeyError:
            raise ConfigError(
                f"Language config for '{language}' not found in config.languages"
            )

    def get_database_config(self, name: Optional[str] = None) -> DatabaseConfig:
        """
        Get a database entry, the active one by default.

        Raises:
            ConfigError: If the entry does not exist
        """
        name = name or self.active_database
        try:
            return self.databases[name]
        except KeyError:
            raise ConfigError(
                f"Active database '{name}' not found in config.databases"
            )


# Document parsing


def _require_mapping(value: Any, key: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return value


def _string_list(value: Any, key: str) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list of strings")
    return [str(item) for item in value]


def _build_dataclass(cls, data: Dict[str, Any], key: str):
    """Instantiate ``cls`` from ``data``, rejecting unknown keys."""
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown keys in '{key}': {', '.join(unknown)}")
    try:
        return cls(**data)
    except TypeError as e:
        raise ConfigError(f"Invalid '{key}' section: {e}")


def _parse_language(name: str, data: Any) -> LanguageConfig:
    data = dict(_require_mapping(data, f"languages.{name}"))
    for list_key in ("tags", "default_imports"):
        if list_key in data:
            data[list_key] = _string_list(data[list_key], f"languages.{name}.{list_key}")
    if data.get("nullable_strategy") is None:
        data.pop("nullable_strategy", None)
    return _build_dataclass(LanguageConfig, data, f"languages.{name}")


def _parse_generation(data: Any) -> GenerationConfig:
    data = dict(_require_mapping(data, "generation"))

    # "table_patterns" is accepted as a shorter spelling
    patterns = data.pop("table_name_patterns", None)
    if patterns is None:
        patterns = data.pop("table_patterns", None)
    else:
        data.pop("table_patterns", None)

    for required in ("output_dir", "target_languages"):
        if required not in data:
            raise ConfigError(f"Missing required key 'generation.{required}'")

    table_patterns = None
    if patterns is not None:
        patterns = _require_mapping(patterns, "generation.table_name_patterns")
        table_patterns = TableNamePatterns(
            include=_string_list(patterns.get("include"), "include") or ["*"],
            exclude=_string_list(patterns.get("exclude"), "exclude") or [],
        )

    data["output_dir"] = Path(data["output_dir"])
    data["template_dir"] = Path(data.get("template_dir") or "./templates")
    data["target_languages"] = _string_list(
        data["target_languages"], "generation.target_languages"
    )
    data["table_name_patterns"] = table_patterns
    if data.get("output_structure") is None:
        data.pop("output_structure", None)

    return _build_dataclass(GenerationConfig, data, "generation")


def _parse_type_mappings(data: Any) -> Dict[str, Dict[str, TypeMapping]]:
    result: Dict[str, Dict[str, TypeMapping]] = {}
    for db_type, columns in _require_mapping(data, "type_mappings").items():
        columns = _require_mapping(columns, f"type_mappings.{db_type}")
        result[db_type] = {}
        for column_type, mapping in columns.items():
            mapping = dict(_require_mapping(mapping, f"type_mappings.{db_type}.{column_type}"))
            generic = mapping.pop("generic", None)
            if generic is None:
                raise ConfigError(
                    f"Missing 'generic' in type_mappings.{db_type}.{column_type}"
                )
            # Language keys sit next to "generic" in the document
            result[db_type][column_type] = TypeMapping(
                generic=str(generic),
                language_types={lang: str(t) for lang, t in mapping.items()},
            )
    return result


def config_from_dict(data: Dict[str, Any]) -> Config:
    """
    Convert a parsed configuration document to a Config instance.

    Args:
        data: Parsed YAML/JSON document

    Returns:
        Validated configuration

    Raises:
        ConfigError: If required keys are missing or sections are malformed
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration document must be a mapping")

    for required in ("active_database", "databases", "generation"):
        if required not in data:
            raise ConfigError(f"Missing required key '{required}'")

    databases = {
        name: _build_dataclass(
            DatabaseConfig, _require_mapping(entry, f"databases.{name}"), f"databases.{name}"
        )
        for name, entry in _require_mapping(data["databases"], "databases").items()
    }

    languages = {
        name: _parse_language(name, entry)
        for name, entry in _require_mapping(data.get("languages"), "languages").items()
    }

    naming = _build_dataclass(
        NamingConventions,
        _require_mapping(data.get("naming_conventions"), "naming_conventions"),
        "naming_conventions",
    )

    return Config(
        active_database=str(data["active_database"]),
        databases=databases,
        generation=_parse_generation(data["generation"]),
        languages=languages,
        type_mappings=_parse_type_mappings(data.get("type_mappings")),
        naming_conventions=naming,
    )


def _load_config_file(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a configuration document from a YAML or JSON file."""
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in configuration file {path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config YAML {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}")


def load_config(config_file: Union[str, Path]) -> Config:
    """
    Load and validate a configuration file.

    Args:
        config_file: Path to a ``.yaml``/``.yml`` or ``.json`` document

    Returns:
        Parsed configuration
    """
    return config_from_dict(_load_config_file(config_file))


def apply_overrides(
    config: Config,
    db_name: Optional[str] = None,
    db_type: Optional[str] = None,
    dsn: Optional[str] = None,
    languages: Optional[List[str]] = None,
    output_dir: Optional[Union[str, Path]] = None,
    tables: Optional[List[str]] = None,
) -> Tuple[Config, DatabaseConfig]:
    """
    Apply command-line overrides on top of a loaded configuration.

    Args:
        config: Loaded configuration
        db_name: Database entry to use instead of ``active_database``
        db_type: Replacement dialect for the selected database
        dsn: Replacement connection string for the selected database
        languages: Replacement target language list
        output_dir: Replacement output directory
        tables: Exact table names; replaces the configured table patterns

    Returns:
        Tuple of (new configuration, selected database configuration)
    """
    active_name = db_name or config.active_database
    db_config = config.get_database_config(active_name)

    if db_type:
        db_config = replace(db_config, db_type=db_type)
    if dsn:
        db_config = replace(db_config, dsn=dsn)

    generation = config.generation
    if languages:
        generation = replace(generation, target_languages=list(languages))
    if output_dir:
        generation = replace(generation, output_dir=Path(output_dir))
    if tables:
        generation = replace(
            generation,
            table_name_patterns=TableNamePatterns(include=list(tables), exclude=[]),
        )

    databases = dict(config.databases)
    databases[active_name] = db_config

    new_config = replace(
        config,
        active_database=active_name,
        databases=databases,
        generation=generation,
    )
    return new_config, db_config


DEFAULT_CONFIG_TEMPLATE = """\
# Database Code Generator Configuration
# This file defines how to read a database schema and generate code

# Active database to use for generation
active_database: "main"

# Database configurations
databases:
  main:
    db_type: "sqlite"  # sqlite, file, mysql, postgres
    db_name: "main"
    dsn: "sqlite:./data/app.db"

# Code generation settings
generation:
  # Languages to generate code for
  target_languages:
    - "rust"
    - "typescript"

  # Output directory for generated files
  output_dir: "./generated"

  # flat: every file in output_dir; by_language: one subdirectory per language
  output_structure: "flat"

  # Template directory for custom templates (optional)
  template_dir: "./templates"

  # Table filtering patterns (optional)
  table_name_patterns:
    include:
      - "*"  # Include all tables by default
    exclude:
      - "_*"  # Exclude tables starting with underscore
      - "temp_*"  # Exclude temporary tables

# Language-specific configurations
# All fields are optional:
# - template_file, template_path, output_extension: auto-detected
# - nullable_strategy: defaults to "generic" (type left unchanged)
languages:
  rust:
    nullable_strategy: "option"
    # tags:
    #   - '#[serde(rename = "{{ column_name }}")]'

  typescript:
    nullable_strategy: "union"

  go:
    nullable_strategy: "pointer"
    package_name: "models"
    # tags:
    #   - 'json:"{{ column_name }}"'
    #   - 'db:"{{ column_name }}"'

  python:
    nullable_strategy: "optional_type"

  java:
    nullable_strategy: "nullable_type"
    # tags:
    #   - '@Column(name = "{{ column_name }}")'

  csharp:
    nullable_strategy: "nullable_type"

  kotlin:
    nullable_strategy: "nullable_type"

  swift:
    nullable_strategy: "nullable_type"

  ruby:
    nullable_strategy: "native"

# Type mappings override the built-in defaults per database type
type_mappings:
  sqlite:
    INTEGER:
      generic: "integer"
      go: "int64"
      rust: "i64"
      typescript: "number"

# Naming conventions (used when a language does not set its own cases)
naming_conventions:
  table_to_struct_case: "PascalCase"
  column_to_field_case: "camelCase"
"""


def write_default_config(config_path: Union[str, Path]) -> Path:
    """
    Write the starter configuration file.

    Raises:
        ConfigError: If the file already exists or cannot be written
    """
    path = Path(config_path)
    if path.exists():
        raise ConfigError(f"Configuration file already exists at: {path}")

    try:
        path.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to write config file to {path}: {e}")
    return path
