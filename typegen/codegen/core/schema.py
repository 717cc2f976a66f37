"""
Core schema representation for code generation.

The parser produces these nodes and every generator reads them. All nodes
are immutable; a parsed schema is simply an ordered list of ``Type``.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

# Names that map to a fixed primitive spelling in every target language.
# Any other capitalized name refers to another declared type.
STRING_TYPES = frozenset({"String"})
BOOL_TYPES = frozenset({"Bool"})
SIGNED_INT_TYPES = frozenset({"Int", "Int8", "Int16", "Int32", "Int64", "ISize"})
UNSIGNED_INT_TYPES = frozenset(
    {"UInt", "UInt8", "UInt16", "UInt32", "UInt64", "USize"}
)
INT_TYPES = SIGNED_INT_TYPES | UNSIGNED_INT_TYPES
FLOAT_TYPES = frozenset({"Float", "Double"})

PRIMITIVE_TYPES = STRING_TYPES | BOOL_TYPES | INT_TYPES | FLOAT_TYPES


class TypeItem:
    """Base class for the type expression attached to a field."""

    __slots__ = ()

    def walk(self) -> Iterator["TypeItem"]:
        """Yield this item and every nested item, outermost first."""
        yield self


@dataclass(frozen=True)
class ArrayItem(TypeItem):
    """Homogeneous sequence: ``[element]``."""

    element: TypeItem

    def walk(self) -> Iterator[TypeItem]:
        yield self
        yield from self.element.walk()

    def __str__(self) -> str:
        return f"[{self.element}]"


@dataclass(frozen=True)
class DictItem(TypeItem):
    """Homogeneous mapping: ``{key: value}``."""

    key: TypeItem
    value: TypeItem

    def walk(self) -> Iterator[TypeItem]:
        yield self
        yield from self.key.walk()
        yield from self.value.walk()

    def __str__(self) -> str:
        return f"{{{self.key}: {self.value}}}"


@dataclass(frozen=True)
class OptionalItem(TypeItem):
    """Optional value: ``inner?``. May wrap another OptionalItem."""

    inner: TypeItem

    def walk(self) -> Iterator[TypeItem]:
        yield self
        yield from self.inner.walk()

    def __str__(self) -> str:
        return f"{self.inner}?"


@dataclass(frozen=True)
class BasicItem(TypeItem):
    """A primitive name or a reference to another declared type."""

    name: str

    @property
    def is_primitive(self) -> bool:
        return self.name in PRIMITIVE_TYPES

    @property
    def is_reference(self) -> bool:
        return not self.is_primitive

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Field:
    """A named field of a declaration."""

    name: str
    type: TypeItem

    def __str__(self) -> str:
        return f"{self.name}: {self.type}"


@dataclass(frozen=True)
class Type:
    """A ``type Name { ... }`` declaration."""

    name: str
    fields: Tuple[Field, ...] = ()

    def get_field(self, name: str):
        """Get field by name, or None."""
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def referenced_types(self) -> list[str]:
        """Names of non-primitive types used by this declaration, in first-use order."""
        names: list[str] = []
        for field in self.fields:
            for item in field.type.walk():
                if isinstance(item, BasicItem) and item.is_reference:
                    if item.name not in names:
                        names.append(item.name)
        return names
