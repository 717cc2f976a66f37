"""Tests for the schema parser."""

import pytest

from typegen.codegen.core.schema import (
    ArrayItem,
    BasicItem,
    DictItem,
    Field,
    OptionalItem,
    Type,
)
from typegen.parser import LexError, ParseError, Parser, SchemaSyntaxError, parse


class TestDeclarations:
    def test_empty_source(self):
        assert parse("") == []
        assert parse("\n\n  \n") == []

    def test_single_field(self):
        assert parse("type Container { a: Int }") == [
            Type("Container", (Field("a", BasicItem("Int")),))
        ]

    def test_zero_fields(self):
        assert parse("type Empty {}") == [Type("Empty")]
        assert parse("type Empty {\n\n}") == [Type("Empty")]

    def test_multiline_with_trailing_delimiters(self):
        source = """
type User {
    name: String,
    nickname: String?

    level: Int,
}
"""
        (user,) = parse(source)
        assert [f.name for f in user.fields] == ["name", "nickname", "level"]
        assert user.get_field("nickname").type == OptionalItem(BasicItem("String"))

    def test_comma_separated_on_one_line(self):
        (ty,) = parse("type P { x: Float, y: Float,, }")
        assert [str(f) for f in ty.fields] == ["x: Float", "y: Float"]

    def test_declarations_keep_source_order(self):
        types = parse("type B { a: A }\n\ntype A {}\ntype C {} type D {}")
        assert [t.name for t in types] == ["B", "A", "C", "D"]

    def test_field_may_be_named_type(self):
        (ty,) = parse("type Token { type: String }")
        assert ty.fields[0].name == "type"

    def test_unknown_type_names_are_references(self):
        (ty,) = parse("type User { account: Account }")
        assert ty.fields[0].type == BasicItem("Account")
        assert ty.fields[0].type.is_reference
        assert ty.referenced_types() == ["Account"]


class TestTypeItems:
    def _item(self, text):
        (ty,) = parse(f"type T {{ f: {text} }}")
        return ty.fields[0].type

    def test_array(self):
        assert self._item("[Int]") == ArrayItem(BasicItem("Int"))

    def test_dict(self):
        assert self._item("{String: Bool}") == DictItem(
            BasicItem("String"), BasicItem("Bool")
        )

    def test_nested(self):
        assert self._item("{String: [Int?]}?") == OptionalItem(
            DictItem(BasicItem("String"), ArrayItem(OptionalItem(BasicItem("Int"))))
        )

    def test_repeated_optional(self):
        assert self._item("Int??") == OptionalItem(OptionalItem(BasicItem("Int")))

    def test_newlines_inside_compound_items(self):
        assert self._item("[\n  Int\n]") == ArrayItem(BasicItem("Int"))

    def test_str_round_trips_the_notation(self):
        assert str(self._item("{String: [Int?]}?")) == "{String: [Int?]}?"


class TestErrors:
    def test_missing_colon(self):
        with pytest.raises(SchemaSyntaxError) as exc_info:
            parse("type User { name String }")

        error = exc_info.value
        assert error.line == 1
        assert error.column == 18
        assert error.expected == "':'"
        assert error.token.text == "String"
        assert str(error) == (
            "line 1, column 18: expected ':', found type identifier 'String'"
        )

    def test_wrong_keyword(self):
        with pytest.raises(SchemaSyntaxError, match="expected 'type' keyword"):
            parse("struct User {}")

    def test_lowercase_type_name(self):
        with pytest.raises(SchemaSyntaxError, match="expected type identifier"):
            parse("type user {}")

    def test_tuple_types_rejected(self):
        with pytest.raises(SchemaSyntaxError) as exc_info:
            parse("type User { name: (Int) }")
        assert exc_info.value.column == 19
        assert "tuple types are not supported" in str(exc_info.value)

    def test_missing_closing_brace(self):
        with pytest.raises(SchemaSyntaxError, match="missing closing brace"):
            parse("type User {\n  name: String\n")

    def test_invalid_character_raises_lex_error(self):
        with pytest.raises(LexError) as exc_info:
            parse("type User { a: Int\n  @b: Int }")
        assert exc_info.value.line == 2
        assert exc_info.value.column == 3

    def test_optional_on_next_line(self):
        with pytest.raises(SchemaSyntaxError):
            parse("type T { a: Int\n? }")

    def test_missing_type_item(self):
        with pytest.raises(SchemaSyntaxError, match="expected type item"):
            parse("type T { a: }")

    def test_first_error_aborts_everything(self):
        with pytest.raises(ParseError):
            parse("type Good { a: Int }\ntype Bad { b Int }")

    def test_parse_declaration_on_empty_input(self):
        with pytest.raises(ParseError, match="end of input"):
            Parser("").parse_declaration()
