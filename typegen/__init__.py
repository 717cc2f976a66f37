"""
typegen - generate typed declarations and decoders from a small schema language.

Schemas are tokenized and parsed into ``Type`` declarations, which language
backends (Gleam, Rust) turn into one output file per declaration.
"""

from .codegen import (
    GenerationResult,
    OutputFile,
    __version__,
    generate_from_source,
    get_generator,
    list_supported_languages,
    quick_generate,
)
from .codegen.core.schema import (
    ArrayItem,
    BasicItem,
    DictItem,
    Field,
    OptionalItem,
    Type,
    TypeItem,
)
from .parser import LexError, ParseError, Parser, SchemaSyntaxError, parse
from .tokenizer import Span, Token, TokenKind, Tokenizer, tokenize

__all__ = [
    "__version__",
    # Front end
    "Tokenizer",
    "Token",
    "TokenKind",
    "Span",
    "tokenize",
    "Parser",
    "parse",
    "ParseError",
    "SchemaSyntaxError",
    "LexError",
    # Schema AST
    "Type",
    "Field",
    "TypeItem",
    "ArrayItem",
    "DictItem",
    "OptionalItem",
    "BasicItem",
    # Code generation
    "OutputFile",
    "GenerationResult",
    "generate_from_source",
    "quick_generate",
    "get_generator",
    "list_supported_languages",
]
