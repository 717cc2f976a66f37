"""
typegen Code Generation Module

Generates type declarations and decoders in various languages from
parsed schema definitions.
"""

from dataclasses import replace
from pathlib import Path

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_languages,
)
from .core.generator import CodeGenerator, GenerationResult, OutputFile, generate_code
from .core.schema import Type, Field, TypeItem
from .core.config import GeneratorConfig, ConfigManager, load_config

# Version info
__version__ = "0.1.0"


# Convenience functions
def generate_from_source(source, language="gleam", config=None, module_name=None):
    """
    Generate code from schema source text.

    Args:
        source: Schema source text
        language: Target language name or alias
        config: Generator configuration (GeneratorConfig, dict or path)
        module_name: Module the generated files live in, overrides config

    Returns:
        GenerationResult with generated files

    Raises:
        ParseError: If the source does not parse
    """
    from ..parser import parse

    types = parse(source)

    if module_name is not None:
        config = _with_module_name(language, config, module_name)

    generator = get_generator(language, config)
    return generate_code(generator, types)


def _with_module_name(language, config, module_name):
    """Fold a module name override into any accepted config form."""
    if isinstance(config, GeneratorConfig):
        return replace(config, module_name=module_name)
    if isinstance(config, (str, Path)):
        primary = get_registry().resolve(language)
        return load_config(primary, {"module_name": module_name}, config)
    return {**(config or {}), "module_name": module_name}


def quick_generate(source, language="gleam", **options):
    """
    Quick code generation from schema source text.

    Args:
        source: Schema source text
        language: Target language
        **options: Generator options

    Returns:
        Dict mapping file names (with extension) to their content
    """
    result = generate_from_source(source, language, options or None)

    if result.success:
        extension = result.metadata["file_extension"]
        return {f.filename(extension): f.content for f in result.files}
    else:
        raise RuntimeError(f"Code generation failed: {result.error_message}")


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "OutputFile",
    "Type",
    "Field",
    "TypeItem",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "generate_code",
    "generate_from_source",
    "quick_generate",
    "get_generator",
    "list_supported_languages",
]
