"""Operation descriptors: one documented endpoint each.

Registration-time checks (path placeholders vs. path parameters, status
codes) live here as plain functions so the registry can run them before it
stores anything.
"""
from __future__ import annotations
import copy
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .constants import MAX_STATUS, MIN_STATUS, PARAM_LOCATIONS
from .constraints import FieldConstraint
from .errors import InvalidStatusCodeError, PathParameterMismatchError
from .schema import _MISSING, STRING, TypeRef

PLACEHOLDER_RE = re.compile(r"\{([^{}/]+)\}")


@dataclass(frozen=True)
class ParameterDescriptor:
    name: str
    location: str
    type: TypeRef = STRING
    required: bool = False
    constraints: Tuple[FieldConstraint, ...] = ()
    default: Any = _MISSING
    description: Optional[str] = None

    def __post_init__(self):
        if self.location not in PARAM_LOCATIONS:
            raise ValueError(f"parameter {self.name!r}: location must be one of {PARAM_LOCATIONS}")
        object.__setattr__(self, "constraints", tuple(self.constraints))
        if self.has_default:
            object.__setattr__(self, "default", copy.deepcopy(self.default))
        if self.location == "path":
            object.__setattr__(self, "required", True)

    @property
    def has_default(self) -> bool:
        return self.default is not _MISSING


def path_param(name: str, type_: TypeRef = STRING, *constraints: FieldConstraint, description: Optional[str] = None) -> ParameterDescriptor:
    return ParameterDescriptor(name, "path", type_, True, constraints, description=description)


def query_param(
    name: str,
    type_: TypeRef = STRING,
    *constraints: FieldConstraint,
    required: bool = False,
    default: Any = _MISSING,
    description: Optional[str] = None,
) -> ParameterDescriptor:
    return ParameterDescriptor(name, "query", type_, required, constraints, default, description)


@dataclass(frozen=True)
class ResponseDescriptor:
    status: int
    description: str
    body: Optional[str] = None


@dataclass(frozen=True)
class SecurityScheme:
    name: str
    type: str = "http"
    scheme: Optional[str] = "bearer"
    bearer_format: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Tag:
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class OperationDescriptor:
    method: str
    path: str
    responses: Tuple[ResponseDescriptor, ...]
    summary: Optional[str] = None
    description: Optional[str] = None
    tag: Optional[str] = None
    parameters: Tuple[ParameterDescriptor, ...] = ()
    request_body: Optional[str] = None
    security: Tuple[str, ...] = ()
    operation_id: Optional[str] = None
    deprecated: bool = False

    @property
    def key(self) -> Tuple[str, str]:
        return self.method, self.path

    @property
    def label(self) -> str:
        return f"{self.method.upper()} {self.path}"

    @property
    def sort_key(self) -> Tuple[str, str, str]:
        return self.tag or "", self.path, self.method

    @property
    def response_map(self) -> Dict[int, ResponseDescriptor]:
        return {r.status: r for r in self.responses}

    def resolved_operation_id(self) -> str:
        if self.operation_id:
            return self.operation_id
        rid = self.path.strip("/").replace("/", "_").replace("{", "").replace("}", "")
        return f"auto_{self.method}_{rid}"

    def schema_refs(self) -> Iterator[Tuple[str, str]]:
        """Yield (schema name, where) for every schema this operation names."""
        if self.request_body:
            yield self.request_body, f"{self.label} request body"
        for r in self.responses:
            if r.body:
                yield r.body, f"{self.label} response {r.status}"
        for p in self.parameters:
            for name in p.type.schema_refs():
                yield name, f"{self.label} parameter {p.name}"


def path_placeholders(path: str) -> List[str]:
    return PLACEHOLDER_RE.findall(path)


def check_path_parameters(path: str, parameters: Iterable[ParameterDescriptor]) -> None:
    placeholders = path_placeholders(path)
    declared = [p.name for p in parameters if p.location == "path"]
    missing = [n for n in dict.fromkeys(placeholders) if n not in declared]
    unexpected = [n for n in declared if n not in placeholders]
    duplicated = [n for n in dict.fromkeys(placeholders) if placeholders.count(n) > 1]
    if missing or unexpected or duplicated:
        raise PathParameterMismatchError(path, missing, unexpected, duplicated)


def _status_code(raw) -> int:
    if isinstance(raw, bool):
        raise InvalidStatusCodeError(raw)
    if isinstance(raw, str):
        if not (len(raw) == 3 and raw.isdigit()):
            raise InvalidStatusCodeError(raw)
        raw = int(raw)
    if not isinstance(raw, int) or not MIN_STATUS <= raw <= MAX_STATUS:
        raise InvalidStatusCodeError(raw)
    return raw


ResponsesArg = Union[Iterable[ResponseDescriptor], Mapping[Any, ResponseDescriptor]]


def normalize_responses(responses: ResponsesArg) -> Tuple[ResponseDescriptor, ...]:
    """Validate status codes and return responses ordered by status.

    Accepts a sequence of descriptors or a status -> descriptor mapping.
    """
    if isinstance(responses, Mapping):
        pairs = list(responses.items())
    else:
        pairs = [(r.status, r) for r in responses]
    if not pairs:
        raise InvalidStatusCodeError(None, "operation declares no responses")
    out: Dict[int, ResponseDescriptor] = {}
    for key, resp in pairs:
        status = _status_code(key)
        if _status_code(resp.status) != status:
            raise InvalidStatusCodeError(key, f"mapped to a response declared for {resp.status}")
        if status in out:
            raise InvalidStatusCodeError(status, "declared more than once")
        out[status] = ResponseDescriptor(status, resp.description, resp.body)
    return tuple(out[s] for s in sorted(out))


__all__ = [
    "ParameterDescriptor",
    "path_param",
    "query_param",
    "ResponseDescriptor",
    "SecurityScheme",
    "Tag",
    "OperationDescriptor",
    "path_placeholders",
    "check_path_parameters",
    "normalize_responses",
]
