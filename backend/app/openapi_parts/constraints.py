"""Field constraint variants.

Each constraint is a small frozen dataclass that knows which OpenAPI
keywords it projects to (`keywords()`) and what is wrong with it
(`problems(kind)`). Construction never raises: malformed constraints are
reported together at finalize time.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional, Tuple, Union

from .constants import KNOWN_FORMATS, NUMERIC_KINDS

Number = Union[int, float]


def _is_int(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _is_number(v) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _value_fits(kind: str, v) -> bool:
    if kind == "string":
        return isinstance(v, str)
    if kind == "integer":
        return _is_int(v)
    if kind == "number":
        return _is_number(v)
    return True


def _bounds_problems(low, high, low_name: str, high_name: str, check) -> List[str]:
    out: List[str] = []
    for label, v in ((low_name, low), (high_name, high)):
        if v is not None and not check(v):
            out.append(f"{label} {v!r} is not a valid bound")
    if out:
        return out
    if low is not None and high is not None and low > high:
        out.append(f"{low_name} {low} greater than {high_name} {high}")
    return out


@dataclass(frozen=True)
class Pattern:
    regex: str
    applies_to: ClassVar[FrozenSet[str]] = frozenset({"string"})

    def keywords(self) -> Dict[str, Any]:
        return {"pattern": self.regex}

    def problems(self, kind: str) -> List[str]:
        out: List[str] = []
        if not isinstance(self.regex, str):
            out.append(f"pattern {self.regex!r} is not a string")
            return out
        try:
            re.compile(self.regex)
        except re.error as e:
            out.append(f"pattern {self.regex!r} does not compile: {e}")
        return out


@dataclass(frozen=True)
class Length:
    min: Optional[int] = None
    max: Optional[int] = None
    applies_to: ClassVar[FrozenSet[str]] = frozenset({"string"})

    def keywords(self) -> Dict[str, Any]:
        kw: Dict[str, Any] = {}
        if self.min is not None:
            kw["minLength"] = self.min
        if self.max is not None:
            kw["maxLength"] = self.max
        return kw

    def problems(self, kind: str) -> List[str]:
        out: List[str] = []
        if self.min is None and self.max is None:
            out.append("length constraint without bounds")
        bounds = _bounds_problems(self.min, self.max, "minLength", "maxLength", _is_int)
        if not bounds:
            for label, v in (("minLength", self.min), ("maxLength", self.max)):
                if v is not None and v < 0:
                    out.append(f"{label} {v} is negative")
        out.extend(bounds)
        return out


@dataclass(frozen=True)
class Range:
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    applies_to: ClassVar[FrozenSet[str]] = NUMERIC_KINDS

    def keywords(self) -> Dict[str, Any]:
        kw: Dict[str, Any] = {}
        if self.minimum is not None:
            kw["minimum"] = self.minimum
        if self.maximum is not None:
            kw["maximum"] = self.maximum
        return kw

    def problems(self, kind: str) -> List[str]:
        out: List[str] = []
        if self.minimum is None and self.maximum is None:
            out.append("range constraint without bounds")
        out.extend(_bounds_problems(self.minimum, self.maximum, "minimum", "maximum", _is_number))
        return out


@dataclass(frozen=True)
class Choices:
    values: Tuple[Any, ...] = ()
    applies_to: ClassVar[FrozenSet[str]] = frozenset({"string", "integer", "number"})

    def __post_init__(self):
        # lists passed by callers are frozen so the dataclass stays hashable
        object.__setattr__(self, "values", tuple(self.values))

    def keywords(self) -> Dict[str, Any]:
        return {"enum": list(self.values)}

    def problems(self, kind: str) -> List[str]:
        if not self.values:
            return ["enum has no allowed values"]
        out: List[str] = []
        seen = set()
        for v in self.values:
            if not _value_fits(kind, v):
                out.append(f"enum value {v!r} does not match type {kind}")
                continue
            if v in seen:
                out.append(f"enum lists {v!r} more than once")
            seen.add(v)
        return out


@dataclass(frozen=True)
class Format:
    tag: str
    applies_to: ClassVar[FrozenSet[str]] = frozenset({"string", "integer", "number"})

    def keywords(self) -> Dict[str, Any]:
        return {"format": self.tag}

    def problems(self, kind: str) -> List[str]:
        if not self.tag:
            return ["format tag is empty"]
        if not isinstance(self.tag, str):
            return [f"format tag {self.tag!r} is not a string"]
        expected = KNOWN_FORMATS.get(self.tag)
        if expected and kind != expected and not (expected in NUMERIC_KINDS and kind in NUMERIC_KINDS):
            return [f"format {self.tag!r} does not apply to {kind}"]
        return []


FieldConstraint = Union[Pattern, Length, Range, Choices, Format]


def constraint_problems(constraints: Tuple[FieldConstraint, ...], kind: str) -> List[str]:
    """Return human readable problems for a constraint set on a `kind` value."""
    out: List[str] = []
    seen = set()
    for c in constraints:
        variant = type(c).__name__
        if variant in seen:
            out.append(f"more than one {variant} constraint")
        seen.add(variant)
        if kind not in c.applies_to:
            out.append(f"{variant} constraint does not apply to {kind}")
            continue
        out.extend(c.problems(kind))
    return out


def constraint_keywords(constraints: Tuple[FieldConstraint, ...]) -> Dict[str, Any]:
    kw: Dict[str, Any] = {}
    for c in constraints:
        kw.update(c.keywords())
    return kw


__all__ = [
    "Pattern",
    "Length",
    "Range",
    "Choices",
    "Format",
    "FieldConstraint",
    "constraint_problems",
    "constraint_keywords",
]
