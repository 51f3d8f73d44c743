"""Centralized constants for the contract registry and emitter.

Tests depend on deterministic ordering and content.
"""
from typing import Dict, FrozenSet, Tuple

OPENAPI_VERSION = "3.0.3"

SCHEMA_REF_PREFIX = "#/components/schemas/"

JSON_MEDIA_TYPE = "application/json"

# Emission order inside a path item follows this tuple.
HTTP_METHODS: Tuple[str, ...] = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

PARAM_LOCATIONS: Tuple[str, ...] = ("path", "query")

PRIMITIVE_KINDS: FrozenSet[str] = frozenset({"string", "integer", "number", "boolean", "object"})
NUMERIC_KINDS: FrozenSet[str] = frozenset({"integer", "number"})

MIN_STATUS = 100
MAX_STATUS = 599

# Format tags used by the employee contract; other tags are passed through.
KNOWN_FORMATS: Dict[str, str] = {
    "date": "string",
    "date-time": "string",
    "email": "string",
    "uuid": "string",
    "uri": "string",
    "int32": "integer",
    "int64": "integer",
    "float": "number",
    "double": "number",
}

__all__ = [
    "OPENAPI_VERSION",
    "SCHEMA_REF_PREFIX",
    "JSON_MEDIA_TYPE",
    "HTTP_METHODS",
    "PARAM_LOCATIONS",
    "PRIMITIVE_KINDS",
    "NUMERIC_KINDS",
    "MIN_STATUS",
    "MAX_STATUS",
    "KNOWN_FORMATS",
]
