"""Small projection helpers shared by the emitter and the app.

These are deliberately tiny to avoid changing output ordering or semantics.
"""
import re
from typing import Any, Dict

from .constants import JSON_MEDIA_TYPE, SCHEMA_REF_PREFIX

_FLASK_VAR_RE = re.compile(r"<(?:[^<>:]+:)?([^<>]+)>")


def schema_ref(name: str) -> Dict[str, Any]:
    return {"$ref": f"{SCHEMA_REF_PREFIX}{name}"}


def json_content(name: str) -> Dict[str, Any]:
    return {JSON_MEDIA_TYPE: {"schema": schema_ref(name)}}


def path_template_from_rule(rule: str) -> str:
    """Convert a Flask URL rule (`/employees/<uuid:id>`) to `/employees/{id}`."""
    return _FLASK_VAR_RE.sub(lambda m: "{" + m.group(1) + "}", rule)


__all__ = ["schema_ref", "json_content", "path_template_from_rule"]
