"""
Template-driven code generator.

Binds each table of a DatabaseSchema into a template context (names,
resolved types, rendered tags) and writes one source file per table.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Any, Optional

from jinja2 import TemplateError as JinjaTemplateError

from ...logging_config import get_logger
from ..registry import get_registry
from .config import Config, ConfigError, DatabaseConfig, LanguageConfig
from .filters import should_include
from .naming import convert_case, to_snake_case
from .schema import DatabaseSchema, Table, Column
from .tags import TagContext, TagRenderer
from .templates import (
    TemplateEngine,
    create_template_engine,
    output_extension_for,
    resolve_template_source,
)
from .types import TypeResolver, apply_nullable

logger = get_logger(__name__)

DEFAULT_PACKAGE_NAME = "models"

OUTPUT_STRUCTURES = ("flat", "by_language")


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class RenderError(GeneratorError):
    """Raised when a table cannot be rendered or written."""

    def __init__(self, table_name: str, message: str):
        super().__init__(f"Failed to generate table '{table_name}': {message}")
        self.table_name = table_name


@dataclass
class GenerationResult:
    """Files produced for one language, plus what was skipped."""

    language: str
    files: List[Path] = field(default_factory=list)
    skipped_tables: List[str] = field(default_factory=list)
    fallback_columns: List[str] = field(default_factory=list)


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'go', 'rust')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files, without the dot."""
        pass

    @abstractmethod
    def generate(self, schema: DatabaseSchema, output_dir: Path) -> GenerationResult:
        """
        Generate code for every selected table of a schema.

        Args:
            schema: Introspected schema
            output_dir: Directory to write files into

        Returns:
            GenerationResult describing the written files
        """
        pass

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Strips trailing whitespace and collapses runs of blank lines.
        """
        formatted_lines = []
        blank_count = 0

        for line in code.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"


class TemplateCodeGenerator(CodeGenerator):
    """Renders tables through the template configured for one language."""

    def __init__(
        self,
        config: Config,
        db_config: DatabaseConfig,
        language: str,
        lang_config: Optional[LanguageConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        """
        Resolve and compile the language template.

        Args:
            config: Complete configuration
            db_config: Selected database (its db_type drives type mappings)
            language: Target language name as listed in the configuration
            lang_config: Language configuration (looked up when omitted)
            template_engine: Engine to compile with (a new one by default)
        """
        self.config = config
        self.db_config = db_config
        # Key under languages and type_mappings; may be an alias
        self.config_language = language
        self.language = get_registry().canonical_name(language)
        self.lang_config = lang_config or config.get_language_config(language)

        self.type_resolver = TypeResolver(config)
        self.tag_renderer = TagRenderer(self.language, self.lang_config.tags)
        self._extension = output_extension_for(self.language, self.lang_config)

        engine = template_engine or create_template_engine()
        self.template_source = resolve_template_source(
            self.language, self.lang_config, config.generation.template_dir
        )
        self._template = engine.compile(
            self.template_source.text, self.template_source.name
        )

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return self.language

    @property
    def file_extension(self) -> str:
        """Return the output file extension."""
        return self._extension

    @property
    def struct_name_case(self) -> str:
        return (
            self.lang_config.struct_name_case
            or self.config.naming_conventions.table_to_struct_case
        )

    @property
    def field_name_case(self) -> str:
        return (
            self.lang_config.field_name_case
            or self.config.naming_conventions.column_to_field_case
        )

    def struct_name(self, table: Table) -> str:
        """Name of the generated struct/class for a table."""
        return convert_case(table.name, self.struct_name_case)

    def field_name(self, column: Column) -> str:
        """Name of the generated field for a column, prefix included."""
        name = convert_case(column.name, self.field_name_case)
        if self.lang_config.field_prefix:
            name = f"{self.lang_config.field_prefix}{name}"
        return name

    def output_path(self, table: Table, output_dir: Path) -> Path:
        """Destination file for a table."""
        return Path(output_dir) / f"{to_snake_case(table.name)}.{self.file_extension}"

    def build_context(self, table: Table, result: Optional[GenerationResult] = None) -> Dict[str, Any]:
        """
        Assemble the template context for a table.

        Args:
            table: Table to describe
            result: Collects columns that needed the fallback type

        Returns:
            Template context dictionary
        """
        struct_name = self.struct_name(table)
        context: Dict[str, Any] = {
            "struct_name": struct_name,
            "table_name": table.name,
            "package_name": self.lang_config.package_name or DEFAULT_PACKAGE_NAME,
            "columns": [],
            "imports": list(self.lang_config.default_imports or []),
            "current_language": self.language,
            "config": {
                "nullable_strategy": self.lang_config.nullable_strategy,
                "field_prefix": self.lang_config.field_prefix,
                "struct_name_case": self.lang_config.struct_name_case,
                "field_name_case": self.lang_config.field_name_case,
            },
        }

        dynamic_imports: List[str] = []

        for column in table.columns:
            raw_type, used_fallback = self.type_resolver.resolve_or_fallback(
                self.db_config.db_type,
                column.database_type,
                column.generic_type,
                self.config_language,
            )
            if used_fallback and result is not None:
                result.fallback_columns.append(f"{table.name}.{column.name}")

            nullable = apply_nullable(
                raw_type,
                self.lang_config.nullable_strategy,
                self.language,
                column.is_nullable,
            )
            for imp in nullable.imports:
                if imp not in dynamic_imports:
                    dynamic_imports.append(imp)

            field_name = self.field_name(column)
            lang_tags = self.tag_renderer.render(
                TagContext(
                    column_name=column.name,
                    table_name=table.name,
                    actual_field_name=field_name,
                    lang_type=nullable.type_name,
                    is_nullable=column.is_nullable,
                    default_value=column.default_value,
                )
            )

            context["columns"].append(
                {
                    "field_name": field_name,
                    "lang_type": nullable.type_name,
                    "lang_tags": lang_tags,
                    "is_nullable": column.is_nullable,
                    "original_column_name": column.name,
                    "comment": column.comment,
                    "default_value": column.default_value,
                    "is_primary_key": column.is_primary_key,
                }
            )

        for imp in dynamic_imports:
            if imp not in context["imports"]:
                context["imports"].append(imp)

        return context

    def render_table(self, table: Table, result: Optional[GenerationResult] = None) -> str:
        """
        Render the source text for one table.

        Raises:
            RenderError: If the template fails for this table
        """
        context = self.build_context(table, result)
        try:
            rendered = self._template.render(**context)
        except JinjaTemplateError as e:
            raise RenderError(table.name, str(e))
        return self.format_code(rendered)

    def generate(self, schema: DatabaseSchema, output_dir: Path) -> GenerationResult:
        """Render and write every selected table, in schema order."""
        result = GenerationResult(language=self.language)
        patterns = self.config.generation.table_name_patterns
        output_dir = Path(output_dir)

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise GeneratorError(f"Failed to create output directory {output_dir}: {e}")

        for table in schema.tables:
            if not should_include(table.name, patterns):
                logger.info("Skipping table '%s' due to filter patterns", table.name)
                result.skipped_tables.append(table.name)
                continue

            code = self.render_table(table, result)
            path = self.output_path(table, output_dir)
            try:
                path.write_text(code, encoding="utf-8")
            except OSError as e:
                raise RenderError(table.name, f"Failed to write file {path}: {e}")

            logger.info("Generated: %s", path)
            result.files.append(path)

        return result


def language_output_dir(config: Config, language: str) -> Path:
    """
    Directory that receives a language's files.

    Raises:
        ConfigError: If the output structure is not recognized
    """
    structure = config.generation.output_structure
    if structure == "flat":
        return config.generation.output_dir
    if structure == "by_language":
        return config.generation.output_dir / get_registry().canonical_name(language)
    raise ConfigError(
        f"Unknown output_structure '{structure}'; expected one of: "
        f"{', '.join(OUTPUT_STRUCTURES)}"
    )


def run_generation(
    schema: DatabaseSchema,
    config: Config,
    db_config: Optional[DatabaseConfig] = None,
) -> List[GenerationResult]:
    """
    Generate code for every target language, one language at a time.

    Args:
        schema: Introspected schema
        config: Complete configuration
        db_config: Selected database (the active one by default)

    Returns:
        One GenerationResult per target language, in configuration order
    """
    db_config = db_config or config.get_database_config()
    results = []

    for language in config.generation.target_languages:
        lang_config = config.get_language_config(language)
        logger.info("Generating code for language: %s", language)

        generator = TemplateCodeGenerator(config, db_config, language, lang_config)
        results.append(generator.generate(schema, language_output_dir(config, language)))

    return results
