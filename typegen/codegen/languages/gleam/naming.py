"""
Gleam-specific naming utilities and sanitization.

Handles Gleam reserved words and module/file naming conventions.
"""

from ...core.naming import NameSanitizer, to_snake_case


# Gleam reserved words
GLEAM_RESERVED_WORDS = {
    "as",
    "assert",
    "auto",
    "case",
    "const",
    "delegate",
    "derive",
    "echo",
    "else",
    "fn",
    "if",
    "implement",
    "import",
    "let",
    "macro",
    "opaque",
    "panic",
    "pub",
    "test",
    "todo",
    "type",
    "use",
}

# Module aliases and functions the generated module itself uses
GLEAM_GENERATED_NAMES = {
    "decode",
    "decoder",
    "dict",
    "dynamic",
    "option",
}


def create_gleam_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Gleam labels."""
    return NameSanitizer(GLEAM_RESERVED_WORDS, GLEAM_GENERATED_NAMES)


def module_file_name(type_name: str) -> str:
    """Gleam modules are snake_case: ``UserAccount`` -> ``user_account``."""
    return to_snake_case(type_name)
