"""
Rust-specific naming utilities and sanitization.

Handles Rust keywords: most become raw identifiers (``r#type``), the few
that cannot be raw get an underscore suffix instead.
"""

from ...core.naming import NameSanitizer, to_snake_case


# Strict and reserved keywords (2021 edition)
RUST_RESERVED_WORDS = {
    "abstract",
    "as",
    "async",
    "await",
    "become",
    "box",
    "break",
    "const",
    "continue",
    "crate",
    "do",
    "dyn",
    "else",
    "enum",
    "extern",
    "false",
    "final",
    "fn",
    "for",
    "gen",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "macro",
    "match",
    "mod",
    "move",
    "mut",
    "override",
    "priv",
    "pub",
    "ref",
    "return",
    "self",
    "Self",
    "static",
    "struct",
    "super",
    "trait",
    "true",
    "try",
    "type",
    "typeof",
    "unsafe",
    "unsized",
    "use",
    "virtual",
    "where",
    "while",
    "yield",
}

# Keywords that are not allowed as raw identifiers
RUST_NON_RAW_WORDS = {"crate", "self", "Self", "super"}


def escape_rust_identifier(name: str) -> str:
    """Turn a keyword into a usable identifier."""
    if name in RUST_NON_RAW_WORDS:
        return f"{name}_"
    return f"r#{name}"


def create_rust_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Rust fields."""
    return NameSanitizer(RUST_RESERVED_WORDS, escape=escape_rust_identifier)


def module_file_name(type_name: str) -> str:
    """Rust modules are snake_case and cannot be raw: ``Type`` -> ``type_``."""
    name = to_snake_case(type_name)
    if name in RUST_RESERVED_WORDS:
        return f"{name}_"
    return name


def unraw(name: str) -> str:
    """Name as serde sees it: ``r#type`` serializes as ``type``."""
    return name[2:] if name.startswith("r#") else name
