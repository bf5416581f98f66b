from pathlib import Path

from .manifest import ProjectManifest

SOURCE_SUFFIXES = (".ts", ".tsx")
GENERATED_MARKER = ".cursors"


def is_state_source(path: Path) -> bool:
    """TypeScript sources, minus declaration files and generated cursors."""
    name = path.name
    if not name.endswith(SOURCE_SUFFIXES) or name.endswith(".d.ts"):
        return False
    return not path.stem.endswith(GENERATED_MARKER)


def discover_source_files(root: Path, manifest: ProjectManifest) -> list[Path]:
    files: list[Path] = []
    for rel in manifest.source_paths:
        base = (root / rel).resolve()
        if not base.exists():
            continue
        if base.is_file():
            if is_state_source(base):
                files.append(base)
            continue
        for p in base.rglob("*"):
            if "node_modules" in p.parts:
                continue
            if p.is_file() and is_state_source(p):
                files.append(p)
    return sorted(set(files))
