"""
Per-field tag rendering.

Tags are short metadata strings (struct tags, attributes, annotations,
decorators) rendered from configured template strings and attached to a
generated field. Tags are best-effort: a tag that fails to render is left
out and the rest of the field is generated as usual.
"""

from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Sequence

from ...logging_config import get_logger
from ..registry import TagStyle, get_language_profile
from .templates import create_environment

logger = get_logger(__name__)

# Continuation between annotation-style tags, matching field indentation
ANNOTATION_SEPARATOR = "\n    "


@dataclass(frozen=True)
class TagContext:
    """
    Values a tag template can reference.

    Tag variables keep the meaning established by earlier configuration
    files: ``field_name`` and ``column_name`` are the raw column name,
    ``struct_name`` is the raw table name, and the generated field name is
    ``actual_field_name`` (``FieldName``). A missing default renders as an
    empty string.
    """

    column_name: str
    table_name: str
    actual_field_name: str
    lang_type: str
    is_nullable: bool
    default_value: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        default_value = "" if self.default_value is None else self.default_value
        return {
            "column_name": self.column_name,
            "field_name": self.column_name,
            "original_column_name": self.column_name,
            "OriginalColumnName": self.column_name,
            "table_name": self.table_name,
            "struct_name": self.table_name,
            "actual_field_name": self.actual_field_name,
            "FieldName": self.actual_field_name,
            "lang_type": self.lang_type,
            "LangType": self.lang_type,
            "is_nullable": self.is_nullable,
            "IsNullable": self.is_nullable,
            "default_value": default_value,
            "DefaultValue": default_value,
        }


def render_tag(template_string: str, context: Dict[str, Any]) -> Optional[str]:
    """
    Render one tag template in its own environment.

    Args:
        template_string: Tag template, e.g. ``json:"{{ column_name }}"``
        context: Tag variables

    Returns:
        Stripped tag text, or None when rendering failed or produced nothing
    """
    env = create_environment()
    try:
        rendered = env.from_string(template_string).render(**context)
    except Exception as e:
        logger.warning("Skipping tag %r for column %s: %s",
                       template_string, context.get("column_name"), e)
        return None

    rendered = rendered.strip()
    return rendered or None


def join_tags(tags: Sequence[str], language: str) -> str:
    """
    Lay out rendered tags according to the language's convention.

    Go gets one backtick-quoted struct tag, annotation languages get one
    tag per line, languages without field metadata get nothing.
    """
    if not tags:
        return ""

    profile = get_language_profile(language)
    style = profile.tag_style if profile else TagStyle.NONE

    if style == TagStyle.STRUCT_TAG:
        return "`" + " ".join(tags) + "`"
    elif style == TagStyle.ANNOTATION:
        return ANNOTATION_SEPARATOR.join(tags)
    return ""


class TagRenderer:
    """Renders the configured tag templates for one language."""

    def __init__(self, language: str, templates: Optional[Sequence[str]] = None):
        self.language = language
        self.templates: List[str] = list(templates or [])

    def render_all(self, context: TagContext) -> List[str]:
        """Render every tag template, keeping successful ones in order."""
        data = context.as_dict()
        tags = []
        for template_string in self.templates:
            tag = render_tag(template_string, data)
            if tag is not None:
                tags.append(tag)
        return tags

    def render(self, context: TagContext) -> str:
        """Render and join the tags for one column."""
        if not self.templates:
            return ""
        return join_tags(self.render_all(context), self.language)
