"""
Schema IR types for cursorgen.

This module contains the structured description of one TypeScript source
file as produced by the schema extractor: state records, their fields,
enum names and namespace imports.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .errors import make_schema_error

STATE_BASE = "IState"
COMPONENT_STATE_BASE = "IComponentState"
ROUTE_COMPONENT_STATE_BASE = "IRouteComponentState"

_QUALIFIED_TYPE = re.compile(r"^[A-Za-z_$][\w$]*\.[A-Za-z_$][\w$]*$")


class StateCapability(str, Enum):
    """What a state record declares itself to be through its heritages."""

    ROUTE_COMPONENT = "route_component"  # rooted in its own cursors file
    COMPONENT = "component"  # flattened into the parent's cursors
    STATE = "state"
    PLAIN = "plain"


_CAPABILITY_BASES = {
    ROUTE_COMPONENT_STATE_BASE: StateCapability.ROUTE_COMPONENT,
    COMPONENT_STATE_BASE: StateCapability.COMPONENT,
    STATE_BASE: StateCapability.STATE,
}


def heritage_base(heritage: str) -> str:
    """Return the unqualified type name of a heritage (``bf.IState`` -> ``IState``)."""
    return heritage.rsplit(".", 1)[-1]


class FieldSpec(BaseModel):
    """
    A single property of a state record.

    Examples:
        - ``name: string``: FieldSpec(name="name", type="string")
        - ``items: ITodo[]``: FieldSpec(name="items", type="ITodo", is_array=True)
        - ``detail: ns.IDetail``: FieldSpec(name="detail", type="ns.IDetail")
    """

    name: str
    type: str
    is_array: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def declared_type(self) -> str:
        """Field type as written in generated code."""
        return f"{self.type}[]" if self.is_array else self.type

    @property
    def is_external(self) -> bool:
        """Whether the type is qualified with an import alias."""
        return is_external_type(self.type)


class StateSpec(BaseModel):
    """
    A declared state record (TypeScript interface).

    Attributes:
        type_name: Interface name, unique within one source file
        fields: Properties in declaration order
        heritages: Names from the ``extends`` clause, as written
    """

    type_name: str
    fields: list[FieldSpec] = Field(default_factory=list)
    heritages: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def capability(self) -> StateCapability:
        """Classify the heritage set; route components win over components."""
        bases = {heritage_base(h) for h in self.heritages}
        for base, capability in _CAPABILITY_BASES.items():
            if base in bases:
                return capability
        return StateCapability.PLAIN

    @property
    def capability_prefix(self) -> str | None:
        """Namespace qualifier of the capability heritage (``bf`` in ``bf.IState``)."""
        for heritage in self.heritages:
            if heritage_base(heritage) in _CAPABILITY_BASES and "." in heritage:
                return heritage.rsplit(".", 1)[0]
        return None


class ImportSpec(BaseModel):
    """A namespace import: ``import * as <prefix> from '<relative_path>'``."""

    prefix: str
    relative_path: str

    model_config = ConfigDict(frozen=True)


class SourceSchema(BaseModel):
    """
    Extracted schema of a single source file.

    Attributes:
        file_name: Module name without extension (``state`` for ``state.ts``)
        path: Path of the source file
        states: State records in declaration order
        enums: Names of declared enums
        imports: Namespace imports in declaration order
    """

    file_name: str
    path: Path
    states: list[StateSpec] = Field(default_factory=list)
    enums: list[str] = Field(default_factory=list)
    imports: list[ImportSpec] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def states_named(self, type_name: str) -> list[StateSpec]:
        """All states declared with the given name."""
        return [s for s in self.states if s.type_name == type_name]

    def resolve_state(self, type_name: str) -> StateSpec | None:
        """
        Find a state by name.

        Raises:
            SchemaError: If more than one state has the name
        """
        states = self.states_named(type_name)
        if len(states) > 1:
            raise make_schema_error(
                f"Two states named '{type_name}' could not be generated; "
                "duplicate declarations are a compilation error.",
                file=self.path,
                type_name=type_name,
            )
        return states[0] if states else None

    def is_enum(self, type_name: str) -> bool:
        return type_name in self.enums

    def find_import(self, prefix: str) -> ImportSpec | None:
        for imp in self.imports:
            if imp.prefix == prefix:
                return imp
        return None


def is_external_type(type_name: str) -> bool:
    """Whether a field type references another module (``ns.IState``)."""
    return _QUALIFIED_TYPE.match(type_name) is not None
