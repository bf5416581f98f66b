"""
Project loading utilities.

Provides the generation project descriptor and the asynchronous bulk load
of every source file the cursors generator may visit.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .extractor import ParsedSource
from .fileset import discover_source_files
from .manifest import MANIFEST_NAME, GenerationConfig, ProjectManifest, load_manifest
from .writer import WriteFileCallback, write_to_disk

logger = logging.getLogger(__name__)


@dataclass
class GenerationProject:
    """
    Everything the generator needs to know about a project.

    Attributes:
        source_files: Every file that may be visited, including import targets
        app_state_name: Name of the root state looked up in each originating file
        state_files: Originating files; empty means every source file
        write_file: Receives ``(path, content)`` for each generated file
        config: Generation options
    """

    source_files: list[Path]
    app_state_name: str
    state_files: list[Path] = field(default_factory=list)
    write_file: WriteFileCallback = write_to_disk
    config: GenerationConfig = field(default_factory=GenerationConfig)


@dataclass
class LoadedProject:
    """Source files read into memory, keyed by resolved path."""

    sources: dict[Path, ParsedSource]
    state_files: list[Path]

    def resolve_source(self, path: Path) -> ParsedSource | None:
        return self.sources.get(path.resolve())


async def load_source_files(project: GenerationProject) -> LoadedProject:
    """
    Read every project source file.

    Raises:
        OSError: If a source file cannot be read
    """
    paths = sorted({p.resolve() for p in project.source_files})
    logger.info("Loading %d source files", len(paths))
    contents = await asyncio.gather(*(asyncio.to_thread(p.read_bytes) for p in paths))
    sources = {p: ParsedSource(path=p, content=c) for p, c in zip(paths, contents, strict=True)}

    state_files = [p.resolve() for p in project.state_files] or paths
    missing = [p for p in state_files if p not in sources]
    if missing:
        raise FileNotFoundError(f"State files are not project sources: {missing}")
    return LoadedProject(sources=sources, state_files=state_files)


def project_from_manifest(
    manifest: ProjectManifest,
    write_file: WriteFileCallback = write_to_disk,
) -> GenerationProject:
    """Build a GenerationProject from a loaded manifest."""
    root = manifest.project_root
    return GenerationProject(
        source_files=discover_source_files(root, manifest),
        app_state_name=manifest.app_state,
        state_files=[(root / rel).resolve() for rel in manifest.state_files],
        write_file=write_file,
        config=manifest.generation,
    )


def load_project(
    project_dir: Path | str,
    manifest_path: Path | str | None = None,
    write_file: WriteFileCallback = write_to_disk,
) -> GenerationProject:
    """
    Load a cursorgen project descriptor.

    Args:
        project_dir: Path to the project root directory
        manifest_path: Optional explicit path to cursorgen.toml.
                      If not provided, looks for cursorgen.toml in project_dir.
        write_file: Writer for generated files

    Returns:
        GenerationProject ready for the cursors generator

    Raises:
        ConfigError: If the manifest is invalid

    Example:
        >>> from cursorgen.core import load_project
        >>> project = load_project("./my-app")
        >>> print(project.app_state_name, len(project.source_files))
    """
    project_dir = Path(project_dir).resolve()

    if manifest_path is None:
        manifest_path = project_dir / MANIFEST_NAME
    else:
        manifest_path = Path(manifest_path).resolve()

    manifest = load_manifest(manifest_path)
    return project_from_manifest(manifest, write_file)
