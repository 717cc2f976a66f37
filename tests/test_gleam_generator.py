"""Tests for the Gleam backend."""

import pytest

from typegen.codegen.core.config import GeneratorConfig
from typegen.codegen.core.generator import GeneratorError, RenderContext, generate_code
from typegen.codegen.core.schema import TypeItem
from typegen.codegen.languages.gleam import GleamGenerator
from typegen.parser import parse


def _generate(source, config=None):
    generator = GleamGenerator(config)
    for ty in parse(source):
        generator.add_type(ty)
    return {f.name: f.content for f in generator.generate()}


CONTAINER = """\
import gleam/decode
import gleam/dynamic.{type Dynamic}

pub type Container {
  Container(a: Int)
}

pub fn decoder() -> decode.Decoder(Container) {
  decode.into({
    use a <- decode.parameter
    Container(a)
  })
  |> decode.field("a", decode.int)
}

pub fn decode(data: Dynamic) {
  decoder() |> decode.from(data)
}"""


class TestOutput:
    def test_container_end_to_end(self):
        assert _generate("type Container { a: Int }") == {"container": CONTAINER}

    def test_empty_type(self):
        content = _generate("type Empty {}")["empty"]

        assert "pub type Empty {\n  Empty\n}" in content
        assert "  decode.into({\n    Empty\n  })\n}" in content
        assert "decode.field" not in content

    def test_file_names_are_snake_case(self):
        files = _generate("type UserAccount {}\ntype HTTPServer {}")
        assert list(files) == ["user_account", "http_server"]

    def test_labels_are_snake_case_and_keys_keep_original_name(self):
        content = _generate("type User { userName: String, type: Int }")["user"]

        assert "User(user_name: String, type_: Int)" in content
        assert "use user_name <- decode.parameter" in content
        assert "use type_ <- decode.parameter" in content
        assert "User(user_name, type_)" in content
        assert '|> decode.field("userName", decode.string)' in content
        assert '|> decode.field("type", decode.int)' in content

    def test_primitive_mapping(self):
        content = _generate(
            "type P { a: UInt8, b: Int64, c: Double, d: Float, e: Bool, f: String }"
        )["p"]
        assert "P(a: Int, b: Int, c: Float, d: Float, e: Bool, f: String)" in content
        assert "decode.float" in content
        assert "decode.bool" in content

    def test_compound_items(self):
        content = _generate("type C { m: {String: [Int?]}? }")["c"]

        assert "C(m: Option(Dict(String, List(Option(Int)))))" in content
        assert (
            '|> decode.field("m", decode.optional(decode.dict('
            "decode.string, decode.list(decode.optional(decode.int)))))"
        ) in content


class TestImports:
    def test_base_imports_only(self):
        content = _generate("type A { a: [Int] }")["a"]
        assert content.startswith(
            "import gleam/decode\nimport gleam/dynamic.{type Dynamic}\n\npub type"
        )

    def test_dict_import(self):
        content = _generate("type A { a: {String: Int} }")["a"]
        assert "import gleam/dict.{type Dict}" in content
        assert "import gleam/option" not in content

    def test_option_import(self):
        content = _generate("type A { a: Int? }")["a"]
        assert "import gleam/option.{type Option}" in content
        assert "import gleam/dict" not in content

    def test_nested_option_inside_dict_and_list(self):
        content = _generate("type A { a: [{String: Int?}] }")["a"]
        header = content.split("\n\n")[0]
        assert header.split("\n") == [
            "import gleam/decode",
            "import gleam/dynamic.{type Dynamic}",
            "import gleam/dict.{type Dict}",
            "import gleam/option.{type Option}",
        ]
        assert "a: List(Dict(String, Option(Int)))" in content

    def test_import_order(self):
        content = _generate("type A { o: Int?, d: {String: B} }")["a"]
        header = content.split("\n\n")[0]
        assert header.split("\n") == [
            "import gleam/decode",
            "import gleam/dynamic.{type Dynamic}",
            "import gleam/dict.{type Dict}",
            "import gleam/option.{type Option}",
            "import b",
        ]

    def test_imports_do_not_leak_between_declarations(self):
        files = _generate("type A { a: Int?, b: {String: Int} }\ntype B { c: Int }")
        assert "gleam/option" not in files["b"]
        assert "gleam/dict" not in files["b"]


class TestReferences:
    def test_reference_imports_in_first_use_order(self):
        content = _generate(
            "type User { group: UserGroup, account: Account, again: UserGroup }"
        )["user"]

        assert "import user_group\nimport account\n" in content
        assert content.count("import user_group") == 1
        assert "group: user_group.UserGroup" in content
        assert "decode.field(\"account\", account.decoder())" in content

    def test_module_name_prefixes_imports(self):
        config = GeneratorConfig(module_name="models/", indent_size=2)
        content = _generate("type User { account: Account }", config)["user"]
        assert "import models/account" in content

    def test_self_reference_is_unqualified(self):
        content = _generate("type Node { children: [Node] }")["node"]

        assert "Node(children: List(Node))" in content
        assert (
            'decode.field("children", decode.list(decode.recursive(fn() { decoder() })))'
            in content
        )
        assert "import node" not in content

    def test_optional_self_reference_is_deferred(self):
        content = _generate("type Node { next: Node? }")["node"]
        assert "decode.optional(decode.recursive(fn() { decoder() }))" in content
        assert "decode.optional(decoder())" not in content

    def test_reserved_module_name_is_escaped(self):
        files = _generate("type Holder { d: Decoder }\ntype Decoder {}")
        assert list(files) == ["holder", "decoder_"]
        assert "import decoder_" in files["holder"]
        assert "decoder_.Decoder" in files["holder"]


def test_indent_follows_config():
    config = GeneratorConfig(indent_size=4)
    content = _generate("type A { a: Int }", config)["a"]
    assert "pub type A {\n    A(a: Int)\n}" in content


def test_unknown_type_item_fails():
    class TupleItem(TypeItem):
        pass

    generator = GleamGenerator()
    with pytest.raises(GeneratorError, match="Unsupported type item"):
        generator.render_type_item(TupleItem(), RenderContext())


def test_generate_code_reports_external_references():
    result = generate_code(GleamGenerator(), parse("type A { b: B }"))
    assert result.metadata["external_references"] == ["B"]
    assert result.metadata["file_extension"] == "gleam"


class TestFieldLabels:
    def test_trailing_underscore_is_a_distinct_label(self):
        content = _generate("type T { a: Int, a_: String }")["t"]
        assert "T(a: Int, a_: String)" in content

    def test_colliding_labels_are_rejected(self):
        generator = GleamGenerator()
        (ty,) = parse("type T { userName: String, user_name: Int }")
        with pytest.raises(GeneratorError, match="both map to 'user_name' in gleam"):
            generator.add_type(ty)

    def test_colliding_labels_fail_generation(self):
        result = generate_code(GleamGenerator(), parse("type T { aB: Int, a_b: Int }"))
        assert not result.success
        assert result.files == []
