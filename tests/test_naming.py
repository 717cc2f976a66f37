"""Tests for naming utilities and the template engine."""

import pytest

from typegen.codegen.core.naming import NameSanitizer, to_snake_case
from typegen.codegen.core.templates import TemplateError, create_template_engine
from typegen.codegen.languages.gleam.naming import create_gleam_sanitizer
from typegen.codegen.languages.rust.naming import create_rust_sanitizer


@pytest.mark.parametrize(
    "name, expected",
    [
        ("userName", "user_name"),
        ("UserAccount", "user_account"),
        ("HTTPServer", "http_server"),
        ("user-id", "user_id"),
        ("already_snake", "already_snake"),
        ("Int64Value", "int64_value"),
        ("a_", "a_"),
        ("user__name", "user_name"),
    ],
)
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected


class TestNameSanitizer:
    def test_reserved_words_get_suffix(self):
        sanitizer = NameSanitizer({"if"}, {"list"})
        assert sanitizer.sanitize_name("if") == "if_"
        assert sanitizer.sanitize_name("list") == "list_"
        assert sanitizer.sanitize_name("value") == "value"

    def test_custom_escape(self):
        sanitizer = NameSanitizer({"if"}, escape=lambda name: f"r#{name}")
        assert sanitizer.sanitize_name("if") == "r#if"

    def test_invalid_characters(self):
        sanitizer = NameSanitizer()
        assert sanitizer.sanitize_name("user name!") == "user_name"
        assert sanitizer.sanitize_name("2fa") == "_2fa"
        assert sanitizer.sanitize_name("!!!") == "field"

    def test_trailing_underscore_is_kept(self):
        sanitizer = NameSanitizer()
        assert sanitizer.sanitize_name("a_") == "a_"
        assert sanitizer.sanitize_name("a") == "a"
        assert sanitizer.sanitize_name("_private") == "private"

    def test_same_input_same_output(self):
        sanitizer = NameSanitizer()
        first = sanitizer.sanitize_name("userName")
        assert sanitizer.sanitize_name("userName") == first == "user_name"


def test_backend_sanitizers():
    gleam = create_gleam_sanitizer()
    assert gleam.sanitize_name("type") == "type_"
    assert gleam.sanitize_name("decoder") == "decoder_"

    rust = create_rust_sanitizer()
    assert rust.sanitize_name("type") == "r#type"
    assert rust.sanitize_name("super") == "super_"
    assert rust.sanitize_name("loopCount") == "loop_count"


class TestTemplateEngine:
    def test_in_memory_templates(self):
        engine = create_template_engine()
        engine.add_template("greet.j2", "hello {{ name }}")
        assert engine.template_exists("greet.j2")
        assert engine.render_template("greet.j2", {"name": "user"}) == "hello user"

    def test_indent_lines_filter(self):
        engine = create_template_engine()
        assert engine.render_string("{{ text|indent_lines('  ') }}", {"text": "a\nb"}) == (
            "  a\n  b"
        )
        assert engine.render_string("{{ text|indent_lines }}", {"text": "a\n\nb"}) == (
            "    a\n\n    b"
        )

    def test_undefined_variable_fails(self):
        engine = create_template_engine()
        with pytest.raises(TemplateError):
            engine.render_string("{{ missing }}", {})

    def test_missing_template_fails(self):
        with pytest.raises(TemplateError, match="nope.j2"):
            create_template_engine().render_template("nope.j2", {})
