"""
Core code generation components.

Provides the schema IR, configuration, naming, type resolution, tag
rendering, templates and the template-driven generator.
"""

from .config import (
    Config,
    ConfigError,
    DatabaseConfig,
    GenerationConfig,
    LanguageConfig,
    NamingConventions,
    TableNamePatterns,
    TypeMapping,
    apply_overrides,
    config_from_dict,
    load_config,
    write_default_config,
)
from .filters import matches_pattern, should_include
from .generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    RenderError,
    TemplateCodeGenerator,
    run_generation,
)
from .naming import NamingCase, convert_case
from .schema import Column, DatabaseSchema, GenericType, SchemaError, Table
from .tags import TagContext, TagRenderer
from .templates import TemplateEngine, TemplateError, resolve_template_source
from .types import NullableStrategy, NullableType, TypeResolver, apply_nullable

__all__ = [
    # Schema system - core data structures
    "Column",
    "DatabaseSchema",
    "GenericType",
    "SchemaError",
    "Table",
    # Configuration system
    "Config",
    "ConfigError",
    "DatabaseConfig",
    "GenerationConfig",
    "LanguageConfig",
    "NamingConventions",
    "TableNamePatterns",
    "TypeMapping",
    "apply_overrides",
    "config_from_dict",
    "load_config",
    "write_default_config",
    # Naming utilities
    "NamingCase",
    "convert_case",
    # Type resolution
    "NullableStrategy",
    "NullableType",
    "TypeResolver",
    "apply_nullable",
    # Tags, filters and templates
    "TagContext",
    "TagRenderer",
    "matches_pattern",
    "should_include",
    "TemplateEngine",
    "TemplateError",
    "resolve_template_source",
    # Generators
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "RenderError",
    "TemplateCodeGenerator",
    "run_generation",
]
