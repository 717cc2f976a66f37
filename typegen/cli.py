"""
Command-line interface for typegen.

Reads a schema from a file, URL or stdin, runs every requested backend and
writes the generated files only once all of them have succeeded.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .codegen import __version__
from .codegen.core.config import ConfigError, load_config
from .codegen.core.generator import GenerationResult, generate_code
from .codegen.core.schema import Type
from .codegen.registry import (
    RegistryError,
    get_generator,
    get_language_info,
    get_registry,
    list_all_language_info,
    list_supported_languages,
)
from .logging_config import get_logger, setup_logging
from .parser import ParseError, parse
from .utils import SourceLoaderError, load_source, write_output_files

logger = get_logger(__name__)

DEFAULT_LANGUAGE = "gleam"

# Initialize rich console
console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``typegen`` command."""
    parser = argparse.ArgumentParser(
        prog="typegen",
        description="Generate typed declarations and decoders from a schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  typegen user.type
  typegen user -l gleam -l rust -o generated
  typegen --url https://example.com/user.type --dry-run
  typegen --list-languages
  typegen --language-info rust
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument(
        "file", nargs="?", help="Schema file (the .type suffix may be omitted)"
    )
    input_group.add_argument("--url", help="URL to fetch the schema from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the schema from standard input"
    )

    # Core generation options
    parser.add_argument(
        "--language",
        "-l",
        action="append",
        metavar="LANGUAGE",
        help=f"Target language, may be repeated (default: {DEFAULT_LANGUAGE})",
    )
    parser.add_argument(
        "--output",
        "-o",
        metavar="DIR",
        default=".",
        help="Output directory (default: current directory)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--module-name",
        metavar="NAME",
        help="Module the generated files live in (used for imports)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print generated files instead of writing them",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging and show generation metadata",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    # Informational commands
    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--language-info",
        metavar="LANGUAGE",
        help="Show detailed info about a language and exit",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Entry point for the ``typegen`` command.

    Args:
        argv: Command line arguments, defaults to ``sys.argv[1:]``

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = create_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.list_languages:
            return _list_languages()

        if args.language_info:
            return _show_language_info(args.language_info)

        return _run(args)

    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        logger.error("CLI error: %s", e)
        return 1


def _run(args: argparse.Namespace) -> int:
    """Load, parse, generate every backend, then write or print the files."""
    languages = _resolve_languages(args.language or [DEFAULT_LANGUAGE])

    try:
        source, text = load_source(args.file, args.url, args.stdin)
    except (SourceLoaderError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e

    console.print(f"📄 Loaded: {source}")

    try:
        types = parse(text)
    except ParseError as e:
        console.print(
            f"[red]✗ Parse error[/red] at line {e.line}, column {e.column}: "
            f"{escape(e.message)}"
        )
        return 1

    # Nothing is written until every backend has succeeded
    results = []
    for language in languages:
        result = _generate(language, types, args)
        if not result.success:
            console.print(
                f"[red]✗ {language} generation failed:[/red] "
                f"{escape(result.error_message)}"
            )
            return 1
        results.append((language, result))

    for language, result in results:
        if args.dry_run:
            _print_files(language, result)
        else:
            _write_files(language, result, args.output, len(results) > 1)

        if args.verbose and result.metadata:
            _print_metadata(result)

        _print_warnings(result)

    return 0


def _resolve_languages(languages: list[str]) -> list[str]:
    """Map names and aliases to primary names, dropping duplicates."""
    registry = get_registry()
    resolved = []

    for language in languages:
        try:
            primary = registry.resolve(language)
        except RegistryError as e:
            supported = ", ".join(list_supported_languages())
            raise CLIError(
                f"Unsupported language '{language}' (supported: {supported})"
            ) from e
        if primary not in resolved:
            resolved.append(primary)

    return resolved


def _generate(
    language: str, types: list[Type], args: argparse.Namespace
) -> GenerationResult:
    """Run one backend over the parsed declarations."""
    overrides = {}
    if args.module_name:
        overrides["module_name"] = args.module_name

    try:
        config = load_config(language, overrides, args.config)
        generator = get_generator(language, config)
    except (ConfigError, RegistryError) as e:
        raise CLIError(f"Configuration error: {e}") from e

    logger.debug("Generating %s with %s", language, config)
    return generate_code(generator, types)


def _write_files(
    language: str, result: GenerationResult, output_dir: str, per_language: bool
):
    """Write one backend's files, in a language subdirectory when several ran."""
    directory = Path(output_dir)
    if per_language:
        directory = directory / language

    try:
        paths = write_output_files(
            result.files, result.metadata["file_extension"], directory
        )
    except OSError as e:
        raise CLIError(f"Failed to write to {directory}: {e}") from e

    for path in paths:
        console.print(f"[green]✓[/green] Written [cyan]{path}[/cyan]")


def _print_files(language: str, result: GenerationResult):
    """Display generated files with syntax highlighting."""
    extension = result.metadata["file_extension"]

    for output in result.files:
        console.print()
        console.rule(f"📄 {output.filename(extension)}", style="green")
        console.print(Syntax(output.content, language, theme="monokai"))


def _print_metadata(result: GenerationResult):
    metadata_table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )

    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        if isinstance(value, list):
            value = ", ".join(value) or "-"
        metadata_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(metadata_table)


def _print_warnings(result: GenerationResult):
    if not result.warnings:
        return

    console.print("\n[yellow]⚠️  Warnings:[/yellow]")
    for warning in result.warnings:
        console.print(f"  [yellow]•[/yellow] {escape(warning)}")
    console.print()


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(
            f"🔧 {lang_name}", f".{info['file_extension']}", info["class"], aliases
        )

    console.print()
    console.print(table)
    console.print()

    console.print(
        Panel(
            "[bold]Usage:[/bold] typegen [dim]schema.type[/dim] -l [cyan]LANGUAGE[/cyan]\n"
            "[bold]Info:[/bold] typegen --language-info [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )

    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    try:
        info = get_language_info(language)
    except RegistryError:
        console.print(f"[red]✗ Language '{escape(language)}' is not supported[/red]")
        console.print("[dim]Use --list-languages to see available options[/dim]")
        return 1

    info_text = f"""[bold]Language:[/bold] {info['name']}
[bold]File Extension:[/bold] .{info['file_extension']}
[bold]Generator Class:[/bold] {info['class']}
[bold]Module:[/bold] {info['module']}"""

    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(
        Panel(
            info_text,
            title=f"🔧 {info['name'].title()} Generator",
            border_style="green",
        )
    )

    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )

    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")

    for key, value in info["config"].to_dict().items():
        config_table.add_row(key.replace("_", " ").title(), escape(str(value)))

    console.print()
    console.print(config_table)

    return 0


if __name__ == "__main__":
    sys.exit(main())
