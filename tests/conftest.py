"""Shared pytest fixtures for cursorgen tests."""

from collections.abc import Callable
from pathlib import Path
from textwrap import dedent

import pytest

from cursorgen.core.extractor import TypeScriptExtractor
from cursorgen.core.manifest import GenerationConfig
from cursorgen.core.project import GenerationProject
from cursorgen.core.writer import MemoryWriter


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def ts_project_dir(fixtures_dir: Path) -> Path:
    """Return path to the sample TypeScript project."""
    return fixtures_dir / "ts"


@pytest.fixture
def extractor() -> TypeScriptExtractor:
    return TypeScriptExtractor()


@pytest.fixture
def writer() -> MemoryWriter:
    return MemoryWriter()


@pytest.fixture
def write_sources(tmp_path: Path) -> Callable[[dict[str, str]], list[Path]]:
    """Write TypeScript sources below tmp_path and return their resolved paths."""

    def _write(sources: dict[str, str]) -> list[Path]:
        paths = []
        for rel, text in sources.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dedent(text).lstrip())
            paths.append(path.resolve())
        return paths

    return _write


@pytest.fixture
def make_project(
    write_sources: Callable[[dict[str, str]], list[Path]], writer: MemoryWriter
) -> Callable[..., GenerationProject]:
    """Build a GenerationProject over inline sources; the first source is the originating file."""

    def _make(
        sources: dict[str, str],
        app_state: str = "IApplicationState",
        state_files: list[str] | None = None,
        **config: object,
    ) -> GenerationProject:
        paths = write_sources(sources)
        by_name = dict(zip(sources, paths, strict=True))
        originating = [by_name[s] for s in state_files] if state_files else paths[:1]
        return GenerationProject(
            source_files=paths,
            app_state_name=app_state,
            state_files=originating,
            write_file=writer,
            config=GenerationConfig(**config),  # type: ignore[arg-type]
        )

    return _make
