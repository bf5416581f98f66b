"""
Cursors generator.

Walks the state graph of every originating source file and writes a
companion ``.cursors.ts`` file with one key-addressable accessor per field:

- record-typed fields are expanded after the record's own fields, under
  the field's key (sibling expansion);
- in recursive mode, fields typed with a state from another file are
  followed through the file's imports: route component states get their
  own cursors file rooted at the field's key, component states are
  expanded into the current file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from cursorgen.core import ir
from cursorgen.core.errors import CursorGenError, ExtractionError, make_schema_error
from cursorgen.core.extractor import ParsedSource, SchemaExtractor
from cursorgen.core.naming import (
    ROOT_ACCESSOR,
    NameRegistry,
    compose_cursor_key,
    create_unused_alias,
)
from cursorgen.core.project import GenerationProject, LoadedProject, load_source_files

from .render import (
    cursors_file_path,
    render_field_cursor,
    render_imports,
    render_root_cursor,
    render_root_key,
)

logger = logging.getLogger(__name__)

IMPORT_SUFFIXES = (".ts", ".tsx", "/index.ts", "/index.tsx")


@dataclass
class GenerationResult:
    """
    Result of one generation run.

    Attributes:
        files_created: Cursors files handed to the writer, in write order
        errors: Roots or files that failed
        warnings: Expansions skipped for reasons worth reporting
    """

    files_created: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Whether generation succeeded (no errors)."""
        return len(self.errors) == 0

    def add_file(self, path: Path) -> None:
        self.files_created.append(path)

    def add_error(self, error: str) -> None:
        self.errors.append(error)

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)


@dataclass(frozen=True)
class PendingExpansion:
    """A record whose fields are still to be expanded under ``prefix``."""

    state: ir.StateSpec
    prefix: str | None
    ancestors: tuple[ir.StateSpec, ...] = ()


@dataclass
class CursorsFile:
    """Per-output settings shared by every accessor of one cursors file."""

    schema: ir.SourceSchema
    root_key: str | None
    library_prefix: str
    state_alias: str
    names: NameRegistry = field(default_factory=lambda: NameRegistry(reserved=(ROOT_ACCESSOR,)))


class CursorsGenerator:
    """
    Generates cursors files for a project.

    Example:
        generator = CursorsGenerator(project, TypeScriptExtractor(), root_key="app")
        result = await generator.run_recurse()
    """

    def __init__(
        self,
        project: GenerationProject,
        extractor: SchemaExtractor,
        root_key: str | None = None,
    ):
        self.project = project
        self.extractor = extractor
        self.root_key = _normalize_root_key(
            root_key if root_key is not None else project.config.root_key
        )

    async def run(self) -> GenerationResult:
        """Generate cursors without following states into other files."""
        return await self._run(recurse=False)

    async def run_recurse(self) -> GenerationResult:
        """Generate cursors, following route and component states across files."""
        return await self._run(recurse=True)

    async def _run(self, recurse: bool) -> GenerationResult:
        loaded = await load_source_files(self.project)
        result = GenerationResult()
        schema_cache: dict[Path, ir.SourceSchema] | None = (
            {} if self.project.config.cache_schemas else None
        )

        for path in loaded.state_files:
            session = _CursorsSession(self, loaded, recurse, result, schema_cache)
            try:
                session.write_cursors(loaded.sources[path], self.project.app_state_name, self.root_key)
            except CursorGenError as e:
                logger.error("Error on cursors writing for %s: %s", path, e)
                result.add_error(f"{path}: {e}")

        return result


class _CursorsSession:
    """Generation of one originating root, including route files it reaches."""

    def __init__(
        self,
        generator: CursorsGenerator,
        loaded: LoadedProject,
        recurse: bool,
        result: GenerationResult,
        schema_cache: dict[Path, ir.SourceSchema] | None,
    ):
        self.project = generator.project
        self.extractor = generator.extractor
        self.loaded = loaded
        self.recurse = recurse
        self.result = result
        self.schema_cache = schema_cache
        self._active: set[tuple[Path, str]] = set()

    def extract(self, source: ParsedSource) -> ir.SourceSchema:
        if self.schema_cache is None:
            return self.extractor.extract(source)
        if source.path not in self.schema_cache:
            self.schema_cache[source.path] = self.extractor.extract(source)
        return self.schema_cache[source.path]

    def write_cursors(self, source: ParsedSource, state_name: str, root_key: str | None) -> None:
        schema = self.extract(source)
        main_state = schema.resolve_state(state_name)
        if main_state is None:
            logger.debug("No state '%s' in %s, skipping", state_name, source.path)
            return

        marker = (source.path, state_name)
        if marker in self._active:
            self._warn(f"{source.path}: route state '{state_name}' reaches itself, not regenerated")
            return

        self._active.add(marker)
        try:
            config = self.project.config
            out = CursorsFile(
                schema=schema,
                root_key=root_key,
                library_prefix=main_state.capability_prefix or config.library_alias,
                state_alias=create_unused_alias(config.state_alias, schema.imports),
            )
            logger.info("Generating has been started for: %s", source.path)
            content = (
                render_imports(out.state_alias, schema.file_name, schema.imports)
                + render_root_key(root_key, out.library_prefix)
                + render_root_cursor(root_key, out.library_prefix, out.state_alias, main_state.type_name)
                + "\n".join(self._expand(source, out, main_state))
            )
            self._write(cursors_file_path(source.path), content)
            logger.info("Generating ended for: %s", source.path)
        finally:
            self._active.discard(marker)

    def _expand(self, source: ParsedSource, out: CursorsFile, root: ir.StateSpec) -> list[str]:
        """Render the accessors of ``root`` and of every record it expands into."""
        cursors: list[str] = []
        stack = [PendingExpansion(state=root, prefix=None)]

        while stack:
            item = stack.pop()
            ancestors = (*item.ancestors, item.state)
            pending: list[PendingExpansion] = []
            for f in item.state.fields:
                cursors.append(self._field_cursor(source, out, f, item.prefix, pending))

            queued = []
            for p in pending:
                if p.state in ancestors:
                    self._warn(
                        f"{source.path}: '{p.state.type_name}' under '{p.prefix}' "
                        "contains itself, not expanded"
                    )
                    continue
                queued.append(replace(p, ancestors=ancestors))
            # Reversed so the first queued record is expanded first.
            stack.extend(reversed(queued))

        return cursors

    def _field_cursor(
        self,
        source: ParsedSource,
        out: CursorsFile,
        f: ir.FieldSpec,
        prefix: str | None,
        pending: list[PendingExpansion],
    ) -> str:
        key = compose_cursor_key(prefix, f.name)
        field_type = f.declared_type

        if self.recurse and f.is_external:
            external = self._resolve_external(source, out.schema, f.type)
            if external is not None:
                external_source, external_state = external
                capability = external_state.capability
                if capability is ir.StateCapability.ROUTE_COMPONENT:
                    self.write_cursors(
                        external_source,
                        external_state.type_name,
                        compose_cursor_key(out.root_key, key),
                    )
                elif capability is ir.StateCapability.COMPONENT:
                    pending.append(PendingExpansion(state=external_state, prefix=key))

        local_states = out.schema.states_named(f.type)
        if len(local_states) > 1:
            raise make_schema_error(
                f"Two states named '{f.type}' could not be generated; "
                "duplicate declarations are a compilation error.",
                file=source.path,
                type_name=f.type,
            )
        if local_states or out.schema.is_enum(f.type):
            field_type = f"{out.state_alias}.{field_type}"
        if local_states and not f.is_array:
            pending.append(PendingExpansion(state=local_states[0], prefix=key))

        return render_field_cursor(
            prefix,
            key,
            f.name,
            out.library_prefix,
            field_type,
            bool(out.root_key),
            out.names,
        )

    def _resolve_external(
        self, source: ParsedSource, schema: ir.SourceSchema, type_name: str
    ) -> tuple[ParsedSource, ir.StateSpec] | None:
        """Follow ``alias.TypeName`` to its declaring source; None when it cannot be followed."""
        alias, external_name = type_name.split(".", 1)
        imp = schema.find_import(alias)
        if imp is None:
            return None

        external_source = self._find_import_source(source.path, imp.relative_path)
        if external_source is None:
            logger.debug("Import '%s' of %s is not a project source", imp.relative_path, source.path)
            return None

        try:
            external_schema = self.extract(external_source)
        except ExtractionError as e:
            self._warn(f"{external_source.path}: not expanded, {e.message}")
            return None

        external_state = external_schema.resolve_state(external_name)
        if external_state is None:
            return None
        return external_source, external_state

    def _find_import_source(self, importer: Path, relative_path: str) -> ParsedSource | None:
        if not relative_path.startswith("."):
            return None
        base = importer.parent / relative_path
        for suffix in IMPORT_SUFFIXES:
            found = self.loaded.resolve_source(Path(f"{base}{suffix}"))
            if found is not None:
                return found
        return None

    def _write(self, path: Path, content: str) -> None:
        try:
            self.project.write_file(path, content.encode("utf-8"))
        except OSError as e:
            logger.error("Error on writing %s: %s", path, e)
            self.result.add_error(f"{path}: {e}")
            return
        self.result.add_file(path)

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.result.add_warning(message)


def _normalize_root_key(root_key: str | None) -> str | None:
    """Accept ``foo`` as well as the literal ``'foo'``; empty means no root key."""
    if not root_key:
        return None
    if len(root_key) >= 2 and root_key[0] == root_key[-1] and root_key[0] in "'\"":
        root_key = root_key[1:-1]
    return root_key or None


def create_generation_process(
    project: GenerationProject,
    extractor: SchemaExtractor,
    root_key: str | None = None,
) -> CursorsGenerator:
    """Driver entry point: an object exposing ``run()`` and ``run_recurse()``."""
    return CursorsGenerator(project, extractor, root_key)
