"""Schema model: named data shapes with typed, constrained fields."""
from __future__ import annotations
import copy
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple

from .constants import PRIMITIVE_KINDS
from .constraints import FieldConstraint

_MISSING: Any = object()


@dataclass(frozen=True)
class TypeRef:
    """Semantic type of a field or parameter.

    `kind` is a primitive kind, `array` (with `items`) or `ref` (with
    `ref` naming a schema in the same registry).
    """

    kind: str
    items: Optional["TypeRef"] = None
    ref: Optional[str] = None

    def schema_refs(self) -> Iterator[str]:
        if self.kind == "ref" and self.ref:
            yield self.ref
        elif self.kind == "array" and self.items is not None:
            yield from self.items.schema_refs()

    def problems(self):
        if self.kind == "array":
            if self.items is None:
                return ["array type without item type"]
            return self.items.problems()
        if self.kind == "ref":
            return [] if self.ref else ["schema reference without a name"]
        if self.kind not in PRIMITIVE_KINDS:
            return [f"unknown type kind {self.kind!r}"]
        return []


STRING = TypeRef("string")
INTEGER = TypeRef("integer")
NUMBER = TypeRef("number")
BOOLEAN = TypeRef("boolean")
OBJECT = TypeRef("object")


def ref(name: str) -> TypeRef:
    return TypeRef("ref", ref=name)


def array_of(item: TypeRef) -> TypeRef:
    return TypeRef("array", items=item)


@dataclass(frozen=True)
class FieldSpec:
    name: str
    type: TypeRef
    required: bool = True
    constraints: Tuple[FieldConstraint, ...] = ()
    example: Any = _MISSING
    default: Any = _MISSING
    description: Optional[str] = None
    nullable: bool = False

    def __post_init__(self):
        object.__setattr__(self, "constraints", tuple(self.constraints))
        # stored by value
        for attr in ("example", "default"):
            value = getattr(self, attr)
            if value is not _MISSING:
                object.__setattr__(self, attr, copy.deepcopy(value))

    @property
    def has_example(self) -> bool:
        return self.example is not _MISSING

    @property
    def has_default(self) -> bool:
        return self.default is not _MISSING


def optional(name: str, type_: TypeRef, *constraints: FieldConstraint, **kw) -> FieldSpec:
    """Shorthand for a non-required, nullable field."""
    kw.setdefault("nullable", True)
    return FieldSpec(name, type_, required=False, constraints=constraints, **kw)


def required(name: str, type_: TypeRef, *constraints: FieldConstraint, **kw) -> FieldSpec:
    return FieldSpec(name, type_, required=True, constraints=constraints, **kw)


@dataclass(frozen=True)
class SchemaModel:
    name: str
    fields: Tuple[FieldSpec, ...]
    description: Optional[str] = None
    example: Any = _MISSING

    def __post_init__(self):
        object.__setattr__(self, "fields", tuple(self.fields))
        if self.example is not _MISSING:
            object.__setattr__(self, "example", copy.deepcopy(self.example))

    @property
    def has_example(self) -> bool:
        return self.example is not _MISSING

    def schema_refs(self) -> Iterator[str]:
        for f in self.fields:
            yield from f.type.schema_refs()

    def required_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.required)


__all__ = [
    "TypeRef",
    "STRING",
    "INTEGER",
    "NUMBER",
    "BOOLEAN",
    "OBJECT",
    "ref",
    "array_of",
    "FieldSpec",
    "optional",
    "required",
    "SchemaModel",
]
