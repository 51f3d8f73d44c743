"""Shared contract pieces: error envelope, pagination wrapper, auth scheme."""
from __future__ import annotations
from ..operation import SecurityScheme
from ..registry import Registry
from ..schema import INTEGER, STRING, array_of, optional, ref, required
from ..constraints import Range

BEARER_AUTH = "BearerAuth"
ERROR_SCHEMA = "ApiError"


def register_common(registry: Registry) -> None:
    registry.define_security_scheme(SecurityScheme(BEARER_AUTH, "http", "bearer", bearer_format="JWT"))
    registry.define_schema("ValidationError", [
        required("field", STRING, example="email"),
        required("message", STRING, example="must be a valid email address"),
    ])
    registry.define_schema("ErrorDetails", [
        required("code", STRING, example="VALIDATION_FAILED"),
        required("message", STRING),
        optional("details", array_of(ref("ValidationError"))),
    ])
    registry.define_schema(ERROR_SCHEMA, [required("error", ref("ErrorDetails"))])
    registry.define_schema("PaginationInfo", [
        required("page", INTEGER, Range(minimum=1)),
        required("per_page", INTEGER, Range(minimum=1)),
        required("total", INTEGER, Range(minimum=0)),
        required("total_pages", INTEGER, Range(minimum=0)),
    ])


def register_page(registry: Registry, item: str) -> str:
    """Define the paginated list wrapper for `item` and return its name."""
    name = f"{item}Page"
    registry.define_schema(name, [
        required("data", array_of(ref(item))),
        required("pagination", ref("PaginationInfo")),
    ], description=f"One page of {item} records")
    return name


__all__ = ["BEARER_AUTH", "ERROR_SCHEMA", "register_common", "register_page"]
