"""
Cursors generation.

Usage:
    from cursorgen.core import TypeScriptExtractor, load_project
    from cursorgen.cursors import create_generation_process

    process = create_generation_process(load_project("."), TypeScriptExtractor())
    result = await process.run_recurse()
"""

from .generator import (
    CursorsGenerator,
    GenerationResult,
    PendingExpansion,
    create_generation_process,
)
from .render import cursors_file_path

__all__ = [
    "CursorsGenerator",
    "GenerationResult",
    "PendingExpansion",
    "create_generation_process",
    "cursors_file_path",
]
