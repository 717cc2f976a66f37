"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement and the
fixed algorithm that drives them: every declaration passed to
:meth:`CodeGenerator.add_type` becomes one :class:`OutputFile`, and
:meth:`CodeGenerator.generate` finalizes the generator and returns the files.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ...logging_config import get_logger
from .config import GeneratorConfig, load_config
from .schema import Field, Type, TypeItem
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class GeneratorState(Enum):
    """Lifecycle of a generator instance."""

    IDLE = "idle"
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


@dataclass(frozen=True)
class OutputFile:
    """One generated file: a file stem and its full content."""

    name: str
    content: str

    def filename(self, extension: str) -> str:
        return f"{self.name}.{extension.lstrip('.')}"


@dataclass
class RenderContext:
    """Bookkeeping collected while rendering a single declaration.

    A new context is created for every declaration, so nothing carries over
    from one type to the next.
    """

    type_name: str = ""
    uses_optional: bool = False
    uses_dict: bool = False
    referenced_types: List[str] = field(default_factory=list)

    def reference(self, name: str):
        """Record a reference to another declared type."""
        if name not in self.referenced_types:
            self.referenced_types.append(name)


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or load_config(self.language_name)
        self._files: List[OutputFile] = []
        self._state = GeneratorState.IDLE
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'gleam', 'rust')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files, without the dot."""
        pass

    @property
    @abstractmethod
    def field_separator(self) -> str:
        """String placed between rendered fields."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @property
    def state(self) -> GeneratorState:
        return self._state

    @property
    def output_files(self) -> Tuple[OutputFile, ...]:
        """Files accumulated so far, read-only."""
        return tuple(self._files)

    # Required rendering operations

    @abstractmethod
    def render_field(self, field: Field, ctx: RenderContext) -> str:
        """Render one field declaration."""
        pass

    @abstractmethod
    def render_type_item(self, item: TypeItem, ctx: RenderContext) -> str:
        """Render a (possibly nested) type expression."""
        pass

    @abstractmethod
    def render_declaration(self, name: str, fields: str) -> str:
        """Render the full declaration from a type name and the joined fields."""
        pass

    @abstractmethod
    def to_file_name(self, name: str) -> str:
        """Derive the output file stem from a declared type name."""
        pass

    @abstractmethod
    def sanitize_identifier(self, name: str) -> str:
        """Escape an identifier that collides with a target reserved word."""
        pass

    # Optional hooks

    def render_decoder(self, ty: Type, ctx: RenderContext) -> str:
        """
        Render decoding code for a declaration.

        Backends whose target derives serialization from annotations
        leave this empty.
        """
        return ""

    def render_imports(self, ctx: RenderContext) -> str:
        """Render import statements required by the declaration just rendered."""
        return ""

    def add_boilerplate(self, ty: Type, output: OutputFile):
        """Hook for cross-file boilerplate such as a module index."""
        pass

    # Driver

    def add_type(self, ty: Type) -> OutputFile:
        """
        Generate the file for one declaration and add it to the output.

        Args:
            ty: Parsed declaration

        Returns:
            The OutputFile that was appended

        Raises:
            GeneratorError: If the generator was already finalized, or two
                fields sanitize to the same label
        """
        if self._state is GeneratorState.FINALIZED:
            raise GeneratorError(
                f"{self.language_name} generator is finalized; cannot add {ty.name}"
            )

        labels: Dict[str, str] = {}
        for f in ty.fields:
            label = self.sanitize_identifier(f.name)
            if label in labels:
                raise GeneratorError(
                    f"Fields {ty.name}.{labels[label]} and {ty.name}.{f.name} "
                    f"both map to '{label}' in {self.language_name}"
                )
            labels[label] = f.name

        self._state = GeneratorState.ACCUMULATING

        ctx = RenderContext(type_name=ty.name)
        fields = self.field_separator.join(
            self.render_field(f, ctx) for f in ty.fields
        )
        declaration = self.render_declaration(ty.name, fields)
        decoder = self.render_decoder(ty, ctx)
        imports = self.render_imports(ctx)

        sections = [part for part in (imports, declaration, decoder) if part.strip()]
        content = self.format_code("\n\n".join(sections))

        output = OutputFile(name=self.to_file_name(ty.name), content=content)
        self.add_boilerplate(ty, output)
        self._files.append(output)

        logger.debug(
            "Generated %s.%s (%d bytes)",
            output.name,
            self.file_extension,
            len(content),
        )
        return output

    def generate(self) -> List[OutputFile]:
        """
        Finalize the generator and return every generated file.

        Raises:
            GeneratorError: If called more than once
        """
        if self._state is GeneratorState.FINALIZED:
            raise GeneratorError(f"{self.language_name} generator already finalized")
        self._state = GeneratorState.FINALIZED
        return list(self._files)

    def validate_types(self, types: Sequence[Type]) -> List[str]:
        """
        Check declarations for issues worth reporting.

        Never fails: the returned messages are warnings only.
        """
        warnings = []
        seen = set()

        for ty in types:
            if not ty.fields:
                warnings.append(f"Type '{ty.name}' has no fields")

            if ty.name in seen:
                warnings.append(f"Type '{ty.name}' is declared more than once")
            seen.add(ty.name)

            for f in ty.fields:
                safe = self.sanitize_identifier(f.name)
                if safe != f.name:
                    warnings.append(
                        f"Field {ty.name}.{f.name} renamed to {safe} "
                        f"for {self.language_name}"
                    )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply formatting to generated code.

        Strips trailing whitespace and collapses blank-line runs to one.
        """
        formatted_lines = []
        blank_count = 0

        for line in code.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n")

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template from this generator's template directory."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: List[OutputFile],
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Generated files
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.files = files
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(files=[])
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, types: Sequence[Type]) -> GenerationResult:
    """
    Run a generator over parsed declarations with error handling.

    Args:
        generator: Fresh code generator instance
        types: Declarations in source order

    Returns:
        GenerationResult with the generated files, or a failed result
    """
    try:
        warnings = generator.validate_types(types)

        for ty in types:
            generator.add_type(ty)
        files = generator.generate()

        declared = {ty.name for ty in types}
        external = []
        for ty in types:
            for name in ty.referenced_types():
                if name not in declared and name not in external:
                    external.append(name)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "type_count": len(types),
            "file_count": len(files),
            "external_references": external,
        }

        logger.info(
            "Generated %d %s file(s) from %d type(s)",
            len(files),
            generator.language_name,
            len(types),
        )
        return GenerationResult(files=files, warnings=warnings, metadata=metadata)

    except GeneratorError as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(str(e), e)
    except Exception as e:
        logger.error("Unexpected error during generation: %s", e, exc_info=True)
        return GenerationResult.error(f"Unexpected error: {e}", e)
