"""
Core code generation components.

Provides the schema AST, the generator contract and the utilities
shared by all language generators.
"""

from .generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    GeneratorState,
    OutputFile,
    RenderContext,
    generate_code,
)
from .schema import (
    PRIMITIVE_TYPES,
    ArrayItem,
    BasicItem,
    DictItem,
    Field,
    OptionalItem,
    Type,
    TypeItem,
)
from .naming import NameSanitizer
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GeneratorState",
    "GenerationResult",
    "OutputFile",
    "RenderContext",
    "generate_code",
    # Schema AST
    "Type",
    "Field",
    "TypeItem",
    "ArrayItem",
    "DictItem",
    "OptionalItem",
    "BasicItem",
    "PRIMITIVE_TYPES",
    # Naming utilities - language-agnostic
    "NameSanitizer",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system - language-agnostic
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
