"""Tests for the template engine and template resolution."""

import pytest
from jinja2.exceptions import UndefinedError

from schema_codegen.codegen.core.builtin_templates import BUILTIN_TEMPLATES
from schema_codegen.codegen.core.config import ConfigError, LanguageConfig
from schema_codegen.codegen.core.templates import (
    EXTENSION_TEMPLATES,
    TemplateEngine,
    TemplateError,
    default_output_extension,
    default_template_file,
    get_builtin_template,
    output_extension_for,
    resolve_template_source,
)
from schema_codegen.codegen.registry import list_supported_languages


def render(source, **context):
    return TemplateEngine().compile(source).render(**context)


class TestTemplateEngine:
    def test_case_filters(self):
        result = render(
            "{{ name | pascal_case }} {{ name | camel_case }} {{ name | screaming_snake_case }}",
            name="blog_posts",
        )
        assert result == "BlogPosts blogPosts BLOG_POSTS"

    def test_no_html_escaping(self):
        assert render("{{ t }}", t='Vec<u8> "x" & y') == 'Vec<u8> "x" & y'

    def test_indent_and_comment_filters(self):
        assert render("{{ t | indent_code(2) }}", t="a\n\nb") == "  a\n\n  b"
        assert render("{{ t | comment('#') }}", t="a\nb") == "# a\n# b"

    def test_globals(self):
        source = "{{ if_lang('go', 'G') }}{{ 'Y' if contains(items, 'x') else 'N' }}"
        assert render(source, current_language="go", items=["x"]) == "GY"
        assert render(source, current_language="rust", items=None) == "N"

    def test_compile_error(self):
        with pytest.raises(TemplateError, match="broken.j2"):
            TemplateEngine().compile("{% for x in %}", "broken.j2")

    def test_undefined_is_error(self):
        template = TemplateEngine().compile("{{ missing }}")
        with pytest.raises(UndefinedError):
            template.render()


class TestDefaults:
    def test_every_language_has_a_builtin_template(self):
        for language in list_supported_languages():
            extension = default_output_extension(language)
            assert default_template_file(extension) in BUILTIN_TEMPLATES

    def test_extension_templates_exist(self):
        assert set(EXTENSION_TEMPLATES.values()) <= set(BUILTIN_TEMPLATES)

    def test_aliases(self):
        assert default_output_extension("golang") == "go"
        assert default_template_file(".rs") == "rust_struct.j2"

    def test_unknown_language(self):
        with pytest.raises(ConfigError):
            default_output_extension("cobol")

    def test_unknown_extension(self):
        with pytest.raises(ConfigError):
            default_template_file("cbl")

    def test_unknown_builtin(self):
        with pytest.raises(TemplateError, match="Unknown built-in template"):
            get_builtin_template("nope.j2")

    def test_configured_extension(self):
        assert output_extension_for("elixir", LanguageConfig(output_extension=".exs")) == "exs"
        assert output_extension_for("elixir", LanguageConfig()) == "ex"


class TestResolveTemplateSource:
    def test_builtin_from_extension(self, tmp_path):
        source = resolve_template_source("go", LanguageConfig(), tmp_path)
        assert source.name == "go_struct.j2"
        assert source.origin == "builtin"

    def test_output_extension_selects_template(self, tmp_path):
        source = resolve_template_source("elixir", LanguageConfig(output_extension="exs"), tmp_path)
        assert source.name == "elixir_struct.j2"

    def test_template_dir_before_builtin(self, tmp_path):
        (tmp_path / "go_struct.j2").write_text("custom {{ struct_name }}", encoding="utf-8")
        source = resolve_template_source(
            "go", LanguageConfig(template_file="go_struct.j2"), tmp_path
        )
        assert source.origin == "template_dir"
        assert source.text == "custom {{ struct_name }}"

    def test_template_file_falls_back_to_builtin(self, tmp_path):
        source = resolve_template_source(
            "typescript", LanguageConfig(template_file="typescript_interface.j2"), tmp_path
        )
        assert source.origin == "builtin"
        assert source.text == BUILTIN_TEMPLATES["typescript_interface.j2"]

    def test_template_path_wins(self, tmp_path):
        custom = tmp_path / "elsewhere.tmpl"
        custom.write_text("path {{ struct_name }}", encoding="utf-8")
        (tmp_path / "go_struct.j2").write_text("dir", encoding="utf-8")
        config = LanguageConfig(template_path=str(custom), template_file="go_struct.j2")
        source = resolve_template_source("go", config, tmp_path)
        assert source.origin == "custom"
        assert source.text == "path {{ struct_name }}"

    def test_missing_template_path(self, tmp_path):
        config = LanguageConfig(template_path=str(tmp_path / "missing.j2"))
        with pytest.raises(TemplateError, match="Failed to load template"):
            resolve_template_source("go", config, tmp_path)

    def test_unknown_template_file(self, tmp_path):
        with pytest.raises(TemplateError):
            resolve_template_source("go", LanguageConfig(template_file="nope.j2"), tmp_path)
