"""
Code generation module.

Generates data-model source files in various languages from a database
schema description.
"""

from .core import (
    CodeGenerator,
    Column,
    Config,
    ConfigError,
    DatabaseSchema,
    GenerationResult,
    GeneratorError,
    GenericType,
    LanguageConfig,
    RenderError,
    SchemaError,
    Table,
    TemplateCodeGenerator,
    TemplateError,
    apply_overrides,
    load_config,
    run_generation,
    write_default_config,
)
from .registry import (
    LanguageProfile,
    LanguageRegistry,
    RegistryError,
    TagStyle,
    get_language_info,
    get_registry,
    is_language_supported,
    list_supported_languages,
)

__all__ = [
    "CodeGenerator",
    "Column",
    "Config",
    "ConfigError",
    "DatabaseSchema",
    "GenerationResult",
    "GeneratorError",
    "GenericType",
    "LanguageConfig",
    "LanguageProfile",
    "LanguageRegistry",
    "RegistryError",
    "RenderError",
    "SchemaError",
    "Table",
    "TagStyle",
    "TemplateCodeGenerator",
    "TemplateError",
    "apply_overrides",
    "get_language_info",
    "get_registry",
    "is_language_supported",
    "list_supported_languages",
    "load_config",
    "run_generation",
    "write_default_config",
]
