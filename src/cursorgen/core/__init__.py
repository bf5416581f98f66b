"""
cursorgen core: schema IR, extraction, configuration and project loading.
"""

from .errors import ConfigError, CursorGenError, ExtractionError, SchemaError
from .extractor import ParsedSource, SchemaExtractor, TypeScriptExtractor
from .manifest import GenerationConfig, ProjectManifest, load_manifest
from .project import GenerationProject, LoadedProject, load_project, load_source_files
from .writer import MemoryWriter, write_to_disk

__all__ = [
    # Errors
    "CursorGenError",
    "SchemaError",
    "ExtractionError",
    "ConfigError",
    # Extraction
    "ParsedSource",
    "SchemaExtractor",
    "TypeScriptExtractor",
    # Configuration
    "GenerationConfig",
    "ProjectManifest",
    "load_manifest",
    # Projects
    "GenerationProject",
    "LoadedProject",
    "load_project",
    "load_source_files",
    # Writers
    "MemoryWriter",
    "write_to_disk",
]
