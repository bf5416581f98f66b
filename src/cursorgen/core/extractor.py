"""
TypeScript schema extractor.

Parses state declaration modules with tree-sitter and returns the
``SourceSchema`` the cursors generator works from:

- every ``interface`` becomes a state record, its ``extends`` clause the
  heritage list;
- property signatures become fields (``T[]`` and ``Array<T>`` mark arrays);
- ``enum`` declarations are collected by name;
- ``import * as alias from 'path'`` declarations become imports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from . import ir
from .errors import ErrorContext, ExtractionError

logger = logging.getLogger(__name__)

TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())
TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())

ARRAY_GENERICS = {"Array", "ReadonlyArray"}


@dataclass(frozen=True)
class ParsedSource:
    """A loaded source file, ready for schema extraction."""

    path: Path
    content: bytes

    @property
    def module_name(self) -> str:
        return self.path.stem


class SchemaExtractor(Protocol):
    """Anything that turns a loaded source into a schema."""

    def extract(self, source: ParsedSource) -> ir.SourceSchema: ...


class TypeScriptExtractor:
    """Extract state schemas from TypeScript sources using tree-sitter."""

    def __init__(self) -> None:
        self._parsers = {
            ".ts": Parser(language=TS_LANGUAGE),
            ".tsx": Parser(language=TSX_LANGUAGE),
        }

    def extract(self, source: ParsedSource) -> ir.SourceSchema:
        """
        Extract the schema of one source file.

        Raises:
            ExtractionError: If the source does not parse cleanly
        """
        parser = self._parsers.get(source.path.suffix, self._parsers[".ts"])
        tree = parser.parse(source.content)
        root = tree.root_node
        if root.has_error:
            raise ExtractionError(
                "TypeScript source contains syntax errors",
                ErrorContext(file=source.path),
            )

        reader = _NodeReader(source.content)
        states: list[ir.StateSpec] = []
        enums: list[str] = []
        imports: list[ir.ImportSpec] = []

        for node in root.named_children:
            decl = node
            if node.type == "export_statement":
                decl = node.child_by_field_name("declaration")
                if decl is None:
                    continue

            if decl.type == "import_statement":
                imp = reader.namespace_import(decl)
                if imp is not None:
                    imports.append(imp)
            elif decl.type == "interface_declaration":
                states.append(reader.state(decl))
            elif decl.type == "enum_declaration":
                enums.append(reader.text(decl.child_by_field_name("name")))

        logger.debug(
            "Extracted %d states, %d enums, %d imports from %s",
            len(states),
            len(enums),
            len(imports),
            source.path,
        )
        return ir.SourceSchema(
            file_name=source.module_name,
            path=source.path,
            states=states,
            enums=enums,
            imports=imports,
        )


class _NodeReader:
    """Reads declaration pieces out of a tree-sitter syntax tree."""

    def __init__(self, source: bytes):
        self.source = source

    def text(self, node: Node | None) -> str:
        if node is None:
            return ""
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def namespace_import(self, node: Node) -> ir.ImportSpec | None:
        """Read ``import * as alias from 'path'``; other import forms are ignored."""
        source_node = node.child_by_field_name("source")
        if source_node is None:
            return None
        for clause in node.named_children:
            if clause.type != "import_clause":
                continue
            for part in clause.named_children:
                if part.type != "namespace_import":
                    continue
                for ident in part.named_children:
                    if ident.type == "identifier":
                        return ir.ImportSpec(
                            prefix=self.text(ident),
                            relative_path=_unquote(self.text(source_node)),
                        )
        return None

    def state(self, node: Node) -> ir.StateSpec:
        heritages: list[str] = []
        for child in node.named_children:
            if child.type == "extends_type_clause":
                for base in child.named_children:
                    # Drop type arguments: bf.IRouteComponentState<P> -> bf.IRouteComponentState
                    name = self.text(base).split("<", 1)[0].strip()
                    if name and name not in heritages:
                        heritages.append(name)

        fields: list[ir.FieldSpec] = []
        body = node.child_by_field_name("body")
        if body is not None:
            for member in body.named_children:
                if member.type == "property_signature":
                    fields.append(self.field(member))

        return ir.StateSpec(
            type_name=self.text(node.child_by_field_name("name")),
            fields=fields,
            heritages=heritages,
        )

    def field(self, node: Node) -> ir.FieldSpec:
        name = _unquote(self.text(node.child_by_field_name("name")))
        annotation = node.child_by_field_name("type")
        if annotation is None or not annotation.named_children:
            return ir.FieldSpec(name=name, type="any")

        type_node = annotation.named_children[0]
        if type_node.type == "array_type":
            return ir.FieldSpec(
                name=name, type=self.text(type_node.named_children[0]), is_array=True
            )
        if type_node.type == "generic_type":
            generic = self.text(type_node.child_by_field_name("name"))
            args = type_node.child_by_field_name("type_arguments")
            if generic in ARRAY_GENERICS and args is not None and len(args.named_children) == 1:
                return ir.FieldSpec(
                    name=name, type=self.text(args.named_children[0]), is_array=True
                )
        return ir.FieldSpec(name=name, type=self.text(type_node))


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"`":
        return value[1:-1]
    return value
