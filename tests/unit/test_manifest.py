"""Tests for cursorgen.toml loading and source discovery."""

from pathlib import Path

import pytest

from cursorgen.core.errors import ConfigError
from cursorgen.core.fileset import discover_source_files, is_state_source
from cursorgen.core.manifest import DEFAULT_APP_STATE, load_manifest


def test_missing_manifest_uses_defaults(tmp_path: Path) -> None:
    manifest = load_manifest(tmp_path / "cursorgen.toml")
    assert manifest.project_root == tmp_path.resolve()
    assert manifest.app_state == DEFAULT_APP_STATE
    assert manifest.source_paths == ["./"]
    assert manifest.state_files == []
    assert manifest.generation.recurse is True
    assert manifest.generation.root_key is None
    assert manifest.generation.library_alias == "bf"


def test_full_manifest(tmp_path: Path) -> None:
    path = tmp_path / "cursorgen.toml"
    path.write_text(
        """
[project]
app_state = "IAppState"
paths = ["src/"]
states = ["src/state.ts"]

[generation]
recurse = false
root_key = "app"
library_alias = "flux"
state_alias = "st"
cache_schemas = true
"""
    )
    manifest = load_manifest(path)
    assert manifest.app_state == "IAppState"
    assert manifest.source_paths == ["src/"]
    assert manifest.state_files == ["src/state.ts"]
    assert manifest.generation.recurse is False
    assert manifest.generation.root_key == "app"
    assert manifest.generation.library_alias == "flux"
    assert manifest.generation.state_alias == "st"
    assert manifest.generation.cache_schemas is True


@pytest.mark.parametrize(
    "content",
    [
        "[generation]\nrecurse = 'yes'\n",
        "[project]\npaths = 'src/'\n",
        "[project]\napp_state = ''\n",
        "project = 1\n",
        "[project\n",
    ],
)
def test_invalid_manifest(tmp_path: Path, content: str) -> None:
    path = tmp_path / "cursorgen.toml"
    path.write_text(content)
    with pytest.raises(ConfigError):
        load_manifest(path)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("state.ts", True),
        ("view.tsx", True),
        ("state.cursors.ts", False),
        ("types.d.ts", False),
        ("state.js", False),
    ],
)
def test_is_state_source(name: str, expected: bool) -> None:
    assert is_state_source(Path(name)) is expected


def test_discover_source_files(tmp_path: Path) -> None:
    for rel in ["src/state.ts", "src/state.cursors.ts", "src/a/b.ts", "node_modules/x/y.ts"]:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")
    manifest = load_manifest(tmp_path / "cursorgen.toml")

    files = discover_source_files(tmp_path, manifest)

    root = tmp_path.resolve()
    assert files == [root / "src/a/b.ts", root / "src/state.ts"]
