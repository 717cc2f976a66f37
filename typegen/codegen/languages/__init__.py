"""
Language-specific code generators.

This module contains generators for different programming languages.
"""

from .gleam import GleamGenerator, create_gleam_generator
from .rust import RustGenerator, create_rust_generator

__all__ = [
    "GleamGenerator",
    "create_gleam_generator",
    "RustGenerator",
    "create_rust_generator",
]
