"""
cursorgen command line interface.

Commands:
- generate: Write .cursors.ts files for a project
- schema: Show the state schema extracted from one source file
"""

from __future__ import annotations

import asyncio
import logging
import platform
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from cursorgen import __version__
from cursorgen.core.errors import ConfigError, ExtractionError
from cursorgen.core.extractor import ParsedSource, TypeScriptExtractor
from cursorgen.core.manifest import MANIFEST_NAME, load_manifest
from cursorgen.core.project import project_from_manifest
from cursorgen.core.writer import MemoryWriter, write_to_disk
from cursorgen.cursors import create_generation_process

console = Console()

app = typer.Typer(
    help="cursorgen - generate state cursors from TypeScript state declarations",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"cursorgen {__version__}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """cursorgen CLI main callback for global options."""
    pass


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def generate(
    project_dir: Annotated[
        Path, typer.Argument(help="Project directory (default: current directory)")
    ] = Path("."),
    state: Annotated[
        str | None, typer.Option("--state", "-s", help="Root state interface name")
    ] = None,
    root_key: Annotated[
        str | None, typer.Option("--root-key", "-k", help="Literal root key for the cursors")
    ] = None,
    recurse: Annotated[
        bool | None,
        typer.Option("--recurse/--no-recurse", help="Follow states into imported files"),
    ] = None,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help=f"Path to {MANIFEST_NAME}")
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-n", help="Print generated files instead of writing")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Debug logging")] = False,
) -> None:
    """
    Generate .cursors.ts files next to the state declaration files.

    Examples:
        cursorgen generate                      # Use ./cursorgen.toml
        cursorgen generate app --state IAppState
        cursorgen generate --root-key app --no-recurse
        cursorgen generate --dry-run
    """
    _configure_logging(verbose)
    project_path = project_dir.resolve()

    try:
        manifest = load_manifest(config.resolve() if config else project_path / MANIFEST_NAME)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if state:
        manifest.app_state = state
    if recurse is not None:
        manifest.generation.recurse = recurse

    writer = MemoryWriter() if dry_run else write_to_disk
    project = project_from_manifest(manifest, writer)
    if not project.source_files:
        console.print(f"[red]No TypeScript sources found in {manifest.project_root}[/red]")
        raise typer.Exit(code=1)

    process = create_generation_process(project, TypeScriptExtractor(), root_key)
    run = process.run_recurse if manifest.generation.recurse else process.run
    try:
        result = asyncio.run(run())
    except OSError as e:
        console.print(f"[red]Could not load sources:[/red] {e}")
        raise typer.Exit(code=1)

    if isinstance(writer, MemoryWriter):
        for path in result.files_created:
            console.rule(str(path))
            console.print(Syntax(writer.text(path), "typescript"))

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
    for error in result.errors:
        console.print(f"[red]Error:[/red] {escape(error)}")

    verb = "Generated" if not dry_run else "Would generate"
    console.print(f"[green]{verb} {len(result.files_created)} cursors file(s)[/green]")
    if not result.success:
        raise typer.Exit(code=1)


@app.command()
def schema(
    source_file: Annotated[Path, typer.Argument(help="TypeScript state declaration file")],
) -> None:
    """Show the states, enums and imports extracted from a source file."""
    path = source_file.resolve()
    if not path.is_file():
        console.print(f"[red]No such file: {path}[/red]")
        raise typer.Exit(code=1)

    try:
        extracted = TypeScriptExtractor().extract(ParsedSource(path=path, content=path.read_bytes()))
    except ExtractionError as e:
        console.print(f"[red]Extraction error:[/red] {e}")
        raise typer.Exit(code=1)

    for state in extracted.states:
        table = Table(title=f"{state.type_name} ({state.capability.value})")
        table.add_column("Field")
        table.add_column("Type")
        for f in state.fields:
            table.add_row(escape(f.name), escape(f.declared_type))
        console.print(table)

    if extracted.enums:
        console.print(f"Enums: {', '.join(extracted.enums)}")
    if extracted.imports:
        imports = Table(title="Imports")
        imports.add_column("Alias")
        imports.add_column("Path")
        for imp in extracted.imports:
            imports.add_row(imp.prefix, imp.relative_path)
        console.print(imports)


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
