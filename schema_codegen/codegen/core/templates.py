"""
Template engine wrapper for code generation.

Provides a Jinja2 environment with case-conversion filters, and decides
which template source backs a target language: a custom path, a file in
the template directory, or a built-in template.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from jinja2 import (
    Environment,
    StrictUndefined,
    Template,
    TemplateError as JinjaTemplateError,
    pass_context,
)

from ...logging_config import get_logger
from ..registry import get_language_profile
from . import naming
from .builtin_templates import BUILTIN_TEMPLATES
from .config import ConfigError, LanguageConfig

logger = get_logger(__name__)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


# Output extension -> built-in template name
EXTENSION_TEMPLATES = {
    "rs": "rust_struct.j2",
    "ts": "typescript_interface.j2",
    "go": "go_struct.j2",
    "py": "python_class.j2",
    "java": "java_class.j2",
    "cs": "csharp_class.j2",
    "php": "php_class.j2",
    "rb": "ruby_class.j2",
    "swift": "swift_struct.j2",
    "kt": "kotlin_class.j2",
    "dart": "dart_class.j2",
    "zig": "zig_struct.j2",
    "nim": "nim_type.j2",
    "hs": "haskell_data.j2",
    "ex": "elixir_struct.j2",
    "exs": "elixir_struct.j2",
    "cr": "crystal_class.j2",
    "ml": "ocaml_type.j2",
    "mli": "ocaml_type.j2",
}


def _indent_filter(value: str, spaces: int = 4) -> str:
    """Indent all non-blank lines in a string."""
    indent = " " * spaces
    lines = str(value).split("\n")
    return "\n".join(indent + line if line.strip() else line for line in lines)


def _comment_filter(value: str, style: str = "//") -> str:
    """Add comment markers to each line."""
    lines = str(value).split("\n")
    return "\n".join(f"{style} {line}" if line.strip() else line for line in lines)


def _contains(items, value) -> bool:
    """Check membership in a list that may be missing."""
    return value in (items or [])


@pass_context
def _if_lang(context, language: str, content: str) -> str:
    """Emit content only when rendering for the given language."""
    return content if context.get("current_language") == language else ""


def create_environment() -> Environment:
    """
    Create a Jinja2 environment configured for source-code output.

    Output is never HTML-escaped, and referencing a missing variable is
    an error rather than an empty string.
    """
    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    env.filters["snake_case"] = naming.to_snake_case
    env.filters["camel_case"] = naming.to_camel_case
    env.filters["pascal_case"] = naming.to_pascal_case
    env.filters["kebab_case"] = naming.to_kebab_case
    env.filters["screaming_snake_case"] = naming.to_screaming_snake_case
    env.filters["capitalize_first"] = naming.capitalize
    env.filters["uncapitalize"] = naming.uncapitalize
    env.filters["pluralize"] = naming.pluralize
    env.filters["indent_code"] = _indent_filter
    env.filters["comment"] = _comment_filter

    env.globals["contains"] = _contains
    env.globals["if_lang"] = _if_lang

    return env


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self):
        """Initialize template engine."""
        self._env = create_environment()

    def compile(self, source: str, name: Optional[str] = None) -> Template:
        """
        Compile template text once for repeated rendering.

        Args:
            source: Template content
            name: Name used in error messages

        Returns:
            Compiled template
        """
        try:
            return self._env.from_string(source)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to compile template {name or '<string>'}: {e}")


def create_template_engine() -> TemplateEngine:
    """Create a fresh template engine."""
    return TemplateEngine()


@dataclass(frozen=True)
class TemplateSource:
    """Template text together with where it came from."""

    name: str
    text: str
    origin: str  # "custom", "template_dir" or "builtin"


def get_builtin_template(template_file: str) -> str:
    """
    Get the text of a built-in template.

    Raises:
        TemplateError: If no built-in template has that name
    """
    try:
        return BUILTIN_TEMPLATES[template_file]
    except KeyError:
        raise TemplateError(f"Unknown built-in template: {template_file}")


def default_output_extension(language: str) -> str:
    """
    Get the file extension for a known language.

    Raises:
        ConfigError: If the language is unknown
    """
    profile = get_language_profile(language)
    if profile is None:
        raise ConfigError(f"Unknown language: {language}")
    return profile.extension


def default_template_file(output_extension: str) -> str:
    """
    Get the built-in template name for a file extension.

    Raises:
        ConfigError: If the extension has no built-in template
    """
    try:
        return EXTENSION_TEMPLATES[output_extension.lstrip(".")]
    except KeyError:
        raise ConfigError(f"Unknown output extension: {output_extension}")


def output_extension_for(language: str, lang_config: LanguageConfig) -> str:
    """Configured output extension, or the language default."""
    if lang_config.output_extension:
        return lang_config.output_extension.lstrip(".")
    return default_output_extension(language)


def _read_template_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(f"Failed to load template from {path}: {e}")


def resolve_template_source(
    language: str, lang_config: LanguageConfig, template_dir: Optional[Path] = None
) -> TemplateSource:
    """
    Decide which template backs a language.

    Order: explicit ``template_path``; then ``template_file`` looked up in
    the template directory and then among the built-ins; otherwise the
    built-in template derived from the output extension.

    Args:
        language: Target language name
        lang_config: Language configuration
        template_dir: Directory holding user templates

    Returns:
        Resolved template source
    """
    if lang_config.template_path:
        path = Path(lang_config.template_path)
        logger.debug("Using custom template %s for %s", path, language)
        return TemplateSource(str(path), _read_template_file(path), "custom")

    if lang_config.template_file:
        if template_dir is not None:
            path = Path(template_dir) / lang_config.template_file
            if path.exists():
                logger.debug("Using template %s for %s", path, language)
                return TemplateSource(str(path), _read_template_file(path), "template_dir")

        text = get_builtin_template(lang_config.template_file)
        return TemplateSource(lang_config.template_file, text, "builtin")

    extension = output_extension_for(language, lang_config)
    template_file = default_template_file(extension)
    logger.debug("Using built-in template %s for %s", template_file, language)
    return TemplateSource(template_file, get_builtin_template(template_file), "builtin")
