"""Canonical builder for the service's OpenAPI document.

`build_registry` assembles an open registry carrying every domain
contribution; `build_openapi_spec` finalizes it and emits the document.
`app/openapi.py` re-exports from here.
"""
from typing import Any, Dict, Optional

from .openapi_parts import Registry, emit
from .openapi_parts.domains import contribute_all
from .openapi_parts.domains._common import BEARER_AUTH

DEFAULT_TITLE = "Employee Management API"
DEFAULT_VERSION = "1.0.0"

__all__ = ["build_registry", "build_openapi_spec", "DEFAULT_TITLE", "DEFAULT_VERSION"]


def build_registry(title: str = DEFAULT_TITLE, version: str = DEFAULT_VERSION, description: Optional[str] = None) -> Registry:
    registry = Registry(title, version, description, security=[BEARER_AUTH])
    return contribute_all(registry)


def build_openapi_spec(registry: Optional[Registry] = None) -> Dict[str, Any]:
    if registry is None:
        registry = build_registry()
    return emit(registry.finalize())
