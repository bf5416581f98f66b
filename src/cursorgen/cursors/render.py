"""
Text rendering for cursors files.

Pure formatting functions; the generator decides what to render and in
which order.
"""

from collections.abc import Iterable
from pathlib import Path

from cursorgen.core.ir import ImportSpec
from cursorgen.core.naming import NameRegistry, accessor_name

CURSORS_SUFFIX = ".cursors"


def render_imports(state_alias: str, state_module: str, imports: Iterable[ImportSpec]) -> str:
    """Re-import everything the state module imports, plus the state module itself."""
    lines = [f"import * as {imp.prefix} from '{imp.relative_path}';" for imp in imports]
    lines.append(f"import * as {state_alias} from './{state_module}';")
    return "\n".join(lines) + "\n\n"


def string_literal(text: str) -> str:
    """Single-quoted TypeScript string literal of ``text``."""
    escaped = text.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


def quote_key(key: str) -> str:
    """Render a root key as a string literal; an already quoted key is not quoted twice."""
    if len(key) >= 2 and key[0] == key[-1] and key[0] in "'\"":
        key = key[1:-1]
    return string_literal(key)


def render_root_key(root_key: str | None, library_prefix: str) -> str:
    value = quote_key(root_key) if root_key else f"{library_prefix}.rootCursor.key"
    return f"export const rootKey = {value};\n\n"


def render_root_cursor(
    root_key: str | None, library_prefix: str, state_alias: str, type_name: str
) -> str:
    declaration = f"export const rootCursor: {library_prefix}.ICursor<{state_alias}.{type_name}>"
    if root_key:
        return f"{declaration} = {{\n    key: rootKey\n}}\n\n"
    return f"{declaration} = {library_prefix}.rootCursor\n\n"


def render_field_cursor(
    prefix: str | None,
    key: str,
    field_name: str,
    library_prefix: str,
    type_name: str,
    with_root: bool,
    names: NameRegistry | None = None,
) -> str:
    """
    Render one field accessor.

    Args:
        prefix: Key prefix of the record being expanded, None at the root
        key: Full cursor key of the field below the root key
        field_name: Declared field name
        library_prefix: Alias of the cursor library import
        type_name: Type to declare, already alias-qualified where needed
        with_root: Compute the key relative to ``rootKey``
        names: Registry keeping identifiers unique within one file
    """
    name = accessor_name(prefix, field_name)
    if names is not None:
        name = names.claim(name)
    key_expr = f"rootKey + {string_literal('.' + key)}" if with_root else string_literal(key)
    return (
        f"export const {name}Cursor: {library_prefix}.ICursor<{type_name}> = {{\n"
        f"    key: {key_expr}\n"
        "}\n"
    )


def cursors_file_path(state_file_path: Path) -> Path:
    """``src/state.ts`` -> ``src/state.cursors.ts``."""
    return state_file_path.with_name(f"{state_file_path.stem}{CURSORS_SUFFIX}.ts")
