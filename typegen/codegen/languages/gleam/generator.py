"""
Gleam code generator implementation.

Renders each declaration as a single-constructor custom type together with
a ``gleam/decode`` decoder that builds the value from dynamic data.
"""

from pathlib import Path
from typing import List, Optional

from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, GeneratorError, RenderContext
from ...core.schema import (
    ArrayItem,
    BasicItem,
    DictItem,
    Field,
    OptionalItem,
    Type,
    TypeItem,
)
from .config import (
    DECODE_IMPORT,
    DICT_IMPORT,
    DYNAMIC_IMPORT,
    GLEAM_DECODER_MAP,
    GLEAM_TYPE_MAP,
    OPTION_IMPORT,
)
from .naming import create_gleam_sanitizer, module_file_name


class GleamGenerator(CodeGenerator):
    """Code generator for Gleam custom types with runtime decoders."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Gleam generator with configuration."""
        super().__init__(config)
        self.sanitizer = create_gleam_sanitizer()
        self.module_name = self.config.module_name.strip("/")

    @property
    def language_name(self) -> str:
        return "gleam"

    @property
    def file_extension(self) -> str:
        return "gleam"

    @property
    def field_separator(self) -> str:
        return ", "

    def get_template_directory(self) -> Path:
        """Return the Gleam templates directory."""
        return Path(__file__).parent / "templates"

    def sanitize_identifier(self, name: str) -> str:
        return self.sanitizer.sanitize_name(name)

    def to_file_name(self, name: str) -> str:
        return self.sanitizer.escape_reserved(module_file_name(name))

    def module_path(self, type_name: str) -> str:
        """Import path of the module generated for ``type_name``."""
        file_name = self.to_file_name(type_name)
        if self.module_name:
            return f"{self.module_name}/{file_name}"
        return file_name

    # Rendering

    def render_field(self, field: Field, ctx: RenderContext) -> str:
        label = self.sanitize_identifier(field.name)
        return f"{label}: {self.render_type_item(field.type, ctx)}"

    def render_type_item(self, item: TypeItem, ctx: RenderContext) -> str:
        if isinstance(item, ArrayItem):
            return f"List({self.render_type_item(item.element, ctx)})"
        if isinstance(item, DictItem):
            ctx.uses_dict = True
            key = self.render_type_item(item.key, ctx)
            value = self.render_type_item(item.value, ctx)
            return f"Dict({key}, {value})"
        if isinstance(item, OptionalItem):
            ctx.uses_optional = True
            return f"Option({self.render_type_item(item.inner, ctx)})"
        if isinstance(item, BasicItem):
            if item.is_primitive:
                return GLEAM_TYPE_MAP[item.name]
            if item.name == ctx.type_name:
                return item.name
            ctx.reference(item.name)
            return f"{self.to_file_name(item.name)}.{item.name}"
        raise GeneratorError(f"Unsupported type item: {item!r}")

    def render_declaration(self, name: str, fields: str) -> str:
        constructor = f"{name}({fields})" if fields else name
        return self.render_template(
            "type.gleam.j2",
            {
                "name": name,
                "constructor": constructor,
                "indent": self.config.indent,
            },
        )

    def render_decoder(self, ty: Type, ctx: RenderContext) -> str:
        params = [self.sanitize_identifier(f.name) for f in ty.fields]
        constructor_call = f"{ty.name}({', '.join(params)})" if params else ty.name

        field_decoders = [
            {"key": f.name, "decoder": self.type_item_decoder(f.type, ty.name)}
            for f in ty.fields
        ]

        return self.render_template(
            "decoder.gleam.j2",
            {
                "name": ty.name,
                "params": params,
                "constructor_call": constructor_call,
                "field_decoders": field_decoders,
                "indent": self.config.indent,
            },
        )

    def type_item_decoder(self, item: TypeItem, type_name: str) -> str:
        """Decoder expression for a type item."""
        if isinstance(item, ArrayItem):
            return f"decode.list({self.type_item_decoder(item.element, type_name)})"
        if isinstance(item, DictItem):
            key = self.type_item_decoder(item.key, type_name)
            value = self.type_item_decoder(item.value, type_name)
            return f"decode.dict({key}, {value})"
        if isinstance(item, OptionalItem):
            return f"decode.optional({self.type_item_decoder(item.inner, type_name)})"
        if isinstance(item, BasicItem):
            if item.is_primitive:
                return GLEAM_DECODER_MAP[item.name]
            if item.name == type_name:
                # Deferred so building the decoder does not call itself.
                return "decode.recursive(fn() { decoder() })"
            return f"{self.to_file_name(item.name)}.decoder()"
        raise GeneratorError(f"Unsupported type item: {item!r}")

    def render_imports(self, ctx: RenderContext) -> str:
        imports: List[str] = [DECODE_IMPORT, DYNAMIC_IMPORT]

        if ctx.uses_dict:
            imports.append(DICT_IMPORT)

        if ctx.uses_optional:
            imports.append(OPTION_IMPORT)

        for name in ctx.referenced_types:
            imports.append(f"import {self.module_path(name)}")

        return "\n".join(imports)


def create_gleam_generator(config: Optional[GeneratorConfig] = None) -> GleamGenerator:
    """Create a Gleam generator with default configuration."""
    return GleamGenerator(config)
