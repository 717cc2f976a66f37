"""
Rust code generator implementation.

Renders each declaration as a struct with derived capabilities; serde derives
take care of (de)serialization, so no decoder body is generated. A running
``mod.rs`` index declares and re-exports every generated module.
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ...core.config import GeneratorConfig
from ...core.generator import (
    CodeGenerator,
    GeneratorError,
    OutputFile,
    RenderContext,
)
from ...core.schema import (
    FLOAT_TYPES,
    ArrayItem,
    BasicItem,
    DictItem,
    Field,
    OptionalItem,
    Type,
    TypeItem,
)
from .config import DEFAULT_DERIVES, HASHMAP_IMPORT, MODULE_INDEX_NAME, RUST_TYPE_MAP
from .naming import (
    RUST_RESERVED_WORDS,
    create_rust_sanitizer,
    module_file_name,
    unraw,
)


class RustGenerator(CodeGenerator):
    """Code generator for Rust structs with derive annotations."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Rust generator with configuration."""
        super().__init__(config)
        self.sanitizer = create_rust_sanitizer()
        self.derives: List[str] = list(self.config.custom.get("derives", DEFAULT_DERIVES))
        self._modules: List[Dict[str, str]] = []

    @property
    def language_name(self) -> str:
        return "rust"

    @property
    def file_extension(self) -> str:
        return "rs"

    @property
    def field_separator(self) -> str:
        return ",\n"

    def get_template_directory(self) -> Path:
        """Return the Rust templates directory."""
        return Path(__file__).parent / "templates"

    def sanitize_identifier(self, name: str) -> str:
        return self.sanitizer.sanitize_name(name)

    def to_file_name(self, name: str) -> str:
        return module_file_name(name)

    def type_name(self, name: str) -> str:
        """Struct name for a declared type; ``Self`` is a keyword."""
        if name in RUST_RESERVED_WORDS:
            return f"{name}_"
        return name

    # Rendering

    def render_field(self, field: Field, ctx: RenderContext) -> str:
        name = self.sanitize_identifier(field.name)
        line = f"pub {name}: {self.render_type_item(field.type, ctx)}"

        if unraw(name) != field.name:
            return f'#[serde(rename = "{field.name}")]\n{line}'
        return line

    def render_type_item(self, item: TypeItem, ctx: RenderContext) -> str:
        return self._render_item(item, ctx, in_collection=False)

    def _render_item(self, item: TypeItem, ctx: RenderContext, in_collection: bool) -> str:
        # A struct containing itself needs indirection unless a collection
        # already provides it.
        if isinstance(item, ArrayItem):
            return f"Vec<{self._render_item(item.element, ctx, True)}>"
        if isinstance(item, DictItem):
            ctx.uses_dict = True
            key = self._render_item(item.key, ctx, True)
            value = self._render_item(item.value, ctx, True)
            return f"HashMap<{key}, {value}>"
        if isinstance(item, OptionalItem):
            ctx.uses_optional = True
            return f"Option<{self._render_item(item.inner, ctx, in_collection)}>"
        if isinstance(item, BasicItem):
            if item.is_primitive:
                return RUST_TYPE_MAP[item.name]
            name = self.type_name(item.name)
            if item.name == ctx.type_name:
                return name if in_collection else f"Box<{name}>"
            ctx.reference(item.name)
            return f"super::{self.to_file_name(item.name)}::{name}"
        raise GeneratorError(f"Unsupported type item: {item!r}")

    def render_declaration(self, name: str, fields: str) -> str:
        return self.render_template(
            "struct.rs.j2",
            {
                "name": self.type_name(name),
                "fields": fields,
                "derives": self.derives,
                "indent": self.config.indent,
            },
        )

    def render_imports(self, ctx: RenderContext) -> str:
        if ctx.uses_dict:
            return HASHMAP_IMPORT
        return ""

    def validate_types(self, types: Sequence[Type]) -> List[str]:
        """Base checks plus map keys that cannot be hashed in Rust."""
        warnings = super().validate_types(types)

        for ty in types:
            for f in ty.fields:
                for item in f.type.walk():
                    if (
                        isinstance(item, DictItem)
                        and isinstance(item.key, BasicItem)
                        and item.key.name in FLOAT_TYPES
                    ):
                        warnings.append(
                            f"Field {ty.name}.{f.name} uses {item.key.name} as a map "
                            f"key; {RUST_TYPE_MAP[item.key.name]} does not implement "
                            "Hash or Eq"
                        )

        return warnings

    def add_boilerplate(self, ty: Type, output: OutputFile):
        """Declare and re-export the new file's module in the running index."""
        if all(module["name"] != output.name for module in self._modules):
            self._modules.append(
                {"name": output.name, "type_name": self.type_name(ty.name)}
            )

    def module_index(self) -> OutputFile:
        """The ``mod.rs`` file declaring every generated module so far."""
        content = self.render_template("mod.rs.j2", {"modules": self._modules})
        return OutputFile(name=MODULE_INDEX_NAME, content=self.format_code(content))

    def generate(self) -> List[OutputFile]:
        """Finalize and return the per-type files followed by ``mod.rs``."""
        files = super().generate()
        if self._modules:
            files.append(self.module_index())
        return files


def create_rust_generator(config: Optional[GeneratorConfig] = None) -> RustGenerator:
    """Create a Rust generator with default configuration."""
    return RustGenerator(config)
