"""
Output writers for generated cursors files.

A writer is any callable taking ``(path, content)``. ``write_to_disk`` is the
default; ``MemoryWriter`` keeps the output in memory for dry runs and tests.
"""

from collections.abc import Callable
from pathlib import Path

WriteFileCallback = Callable[[Path, bytes], None]


def write_to_disk(path: Path, content: bytes) -> None:
    """Write content to a file, creating parent directories if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


class MemoryWriter:
    """Collects written files instead of persisting them."""

    def __init__(self) -> None:
        self.files: dict[Path, bytes] = {}

    def __call__(self, path: Path, content: bytes) -> None:
        self.files[path] = content

    def text(self, path: Path) -> str:
        return self.files[path].decode("utf-8")
