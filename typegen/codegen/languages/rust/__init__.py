"""
Rust code generator module.

Generates Rust structs with serde derives plus a ``mod.rs`` index.
"""

from .generator import RustGenerator, create_rust_generator
from .naming import create_rust_sanitizer

__all__ = [
    "RustGenerator",
    "create_rust_generator",
    "create_rust_sanitizer",
]
