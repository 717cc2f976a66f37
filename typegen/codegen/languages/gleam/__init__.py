"""
Gleam code generator module.

Generates Gleam custom types with ``gleam/decode`` decoders.
"""

from .generator import GleamGenerator, create_gleam_generator
from .naming import create_gleam_sanitizer

__all__ = [
    "GleamGenerator",
    "create_gleam_generator",
    "create_gleam_sanitizer",
]
