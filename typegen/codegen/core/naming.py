"""
Naming utilities for safe code generation.

Handles snake_case conversion and reserved-word escaping across target
languages. Sanitization is a pure function of its input: the same name
always maps to the same output, which keeps regenerated files byte-identical.
"""

import re
from typing import Callable, Dict, Optional, Set


class NameSanitizer:
    """Handles name sanitization for field labels."""

    def __init__(
        self,
        reserved_words: Set[str] = None,
        builtin_types: Set[str] = None,
        escape: Optional[Callable[[str], str]] = None,
    ):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin names that might conflict
            escape: Turns a conflicting name into a safe one
                (default: append an underscore)
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self.escape = escape or (lambda name: f"{name}_")
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(self, name: str) -> str:
        """
        Sanitize a name for safe use in target language.

        Args:
            name: Original name to sanitize

        Returns:
            Sanitized snake_case name safe for use
        """
        if name in self._name_cache:
            return self._name_cache[name]

        converted = to_snake_case(self._clean_basic(name))

        if converted[0].isdigit():
            converted = f"_{converted}"

        final_name = self.escape_reserved(converted)

        self._name_cache[name] = final_name
        return final_name

    def is_reserved(self, name: str) -> bool:
        return name in self.reserved_words or name in self.builtin_types

    def escape_reserved(self, name: str) -> str:
        """Escape a name that collides with a reserved word or builtin."""
        if self.is_reserved(name):
            return self.escape(name)
        return name

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - replace runs of invalid characters.

        Leading underscores are dropped; trailing ones are part of the name.
        """
        cleaned = re.sub(r"[^a-zA-Z0-9_]+", " ", name).strip()
        cleaned = cleaned.replace(" ", "_").lstrip("_")

        if not cleaned:
            cleaned = "field"

        return cleaned


def to_snake_case(name: str) -> str:
    """Convert to snake_case. ``UserAccount`` and ``HTTPServer`` both split on case."""
    name = name.replace("-", "_")

    # Acronym followed by a word: HTTPServer -> HTTP_Server
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    # Lower/digit followed by upper: userName -> user_Name
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)

    name = name.lower()
    return re.sub(r"_+", "_", name)
