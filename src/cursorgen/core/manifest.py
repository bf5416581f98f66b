import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError

MANIFEST_NAME = "cursorgen.toml"

DEFAULT_APP_STATE = "IApplicationState"


@dataclass
class GenerationConfig:
    """Generation options."""

    recurse: bool = True  # follow route/component states into other files
    root_key: str | None = None  # None: use the library's root cursor key
    library_alias: str = "bf"  # used when the root state has no qualified heritage
    state_alias: str = "s"  # preferred alias for importing the state module
    cache_schemas: bool = False  # memoize extraction per file within one run


@dataclass
class ProjectManifest:
    """Contents of cursorgen.toml."""

    project_root: Path
    app_state: str = DEFAULT_APP_STATE
    source_paths: list[str] = field(default_factory=lambda: ["./"])
    state_files: list[str] = field(default_factory=list)  # empty: every discovered file
    generation: GenerationConfig = field(default_factory=GenerationConfig)


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load cursorgen.toml.

    A missing file yields the defaults rooted at the file's directory.

    Raises:
        ConfigError: If the file is not valid TOML or holds wrong value types
    """
    root = path.parent.resolve()
    if not path.exists():
        return ProjectManifest(project_root=root)

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    project = _table(data, "project")
    generation = _table(data, "generation")

    app_state = _typed(project, "app_state", str, DEFAULT_APP_STATE)
    if not app_state:
        raise ConfigError("project.app_state must not be empty")

    return ProjectManifest(
        project_root=root,
        app_state=app_state,
        source_paths=_str_list(project, "paths", ["./"]),
        state_files=_str_list(project, "states", []),
        generation=GenerationConfig(
            recurse=_typed(generation, "recurse", bool, True),
            root_key=_typed(generation, "root_key", str, None),
            library_alias=_typed(generation, "library_alias", str, "bf"),
            state_alias=_typed(generation, "state_alias", str, "s"),
            cache_schemas=_typed(generation, "cache_schemas", bool, False),
        ),
    )


def _table(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table")
    return value


def _typed(table: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = table.get(key, default)
    if value is not None and not isinstance(value, kind):
        raise ConfigError(f"'{key}' must be of type {kind.__name__}, got {value!r}")
    return value


def _str_list(table: dict[str, Any], key: str, default: list[str]) -> list[str]:
    value = table.get(key, default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return list(value)
