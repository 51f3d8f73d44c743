"""Deterministic OpenAPI 3 emitter.

`emit()` is a pure function of the ResolvedDocument: it builds a fresh
JSON-serializable dict on every call and never touches shared state, so
repeated or concurrent calls are safe. Ordering comes from the resolved
document (operations by tag/path/method, schemas and tags by name).
"""
from __future__ import annotations
import copy
from typing import Any, Dict, List

from .constants import OPENAPI_VERSION
from .constraints import constraint_keywords
from .helpers import json_content, schema_ref
from .operation import OperationDescriptor, ParameterDescriptor, SecurityScheme
from .registry import ResolvedDocument
from .schema import FieldSpec, SchemaModel, TypeRef


def _type_schema(t: TypeRef) -> Dict[str, Any]:
    if t.kind == "ref":
        return schema_ref(t.ref)
    if t.kind == "array":
        return {"type": "array", "items": _type_schema(t.items)}
    return {"type": t.kind}


def _field_schema(f: FieldSpec) -> Dict[str, Any]:
    out = _type_schema(f.type)
    if f.type.kind == "ref" and (f.nullable or f.description):
        # siblings of $ref are ignored by OpenAPI 3.0 tooling
        out = {"allOf": [out]}
    out.update(constraint_keywords(f.constraints))
    if f.description:
        out["description"] = f.description
    if f.nullable:
        out["nullable"] = True
    if f.has_default:
        out["default"] = copy.deepcopy(f.default)
    if f.has_example:
        out["example"] = copy.deepcopy(f.example)
    return out


def emit_schema(model: SchemaModel) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "type": "object",
        "properties": {f.name: _field_schema(f) for f in model.fields},
    }
    req = model.required_names()
    if req:
        out["required"] = list(req)
    if model.description:
        out["description"] = model.description
    if model.has_example:
        out["example"] = copy.deepcopy(model.example)
    return out


def _parameter(p: ParameterDescriptor) -> Dict[str, Any]:
    schema = _type_schema(p.type)
    schema.update(constraint_keywords(p.constraints))
    if p.has_default:
        schema["default"] = copy.deepcopy(p.default)
    out: Dict[str, Any] = {"name": p.name, "in": p.location, "required": p.required}
    if p.description:
        out["description"] = p.description
    out["schema"] = schema
    return out


def emit_operation(op: OperationDescriptor) -> Dict[str, Any]:
    out: Dict[str, Any] = {"operationId": op.resolved_operation_id()}
    if op.summary:
        out["summary"] = op.summary
    if op.description:
        out["description"] = op.description
    if op.tag:
        out["tags"] = [op.tag]
    if op.parameters:
        out["parameters"] = [_parameter(p) for p in op.parameters]
    if op.request_body:
        out["requestBody"] = {"required": True, "content": json_content(op.request_body)}
    responses: Dict[str, Any] = {}
    for r in op.responses:
        body: Dict[str, Any] = {"description": r.description}
        if r.body:
            body["content"] = json_content(r.body)
        responses[str(r.status)] = body
    out["responses"] = responses
    if op.security:
        out["security"] = [{name: []} for name in op.security]
    if op.deprecated:
        out["deprecated"] = True
    return out


def _security_scheme(s: SecurityScheme) -> Dict[str, Any]:
    out: Dict[str, Any] = {"type": s.type}
    if s.scheme:
        out["scheme"] = s.scheme
    if s.bearer_format:
        out["bearerFormat"] = s.bearer_format
    if s.description:
        out["description"] = s.description
    return out


def emit(resolved: ResolvedDocument) -> Dict[str, Any]:
    info: Dict[str, Any] = {"title": resolved.title, "version": resolved.version}
    if resolved.description:
        info["description"] = resolved.description

    paths: Dict[str, Dict[str, Any]] = {}
    for op in resolved.operations:
        paths.setdefault(op.path, {})[op.method] = emit_operation(op)

    components: Dict[str, Any] = {
        "schemas": {s.name: emit_schema(s) for s in resolved.schemas},
        "securitySchemes": {s.name: _security_scheme(s) for s in resolved.security_schemes},
    }

    tags: List[Dict[str, Any]] = []
    for t in resolved.tags:
        entry: Dict[str, Any] = {"name": t.name}
        if t.description:
            entry["description"] = t.description
        tags.append(entry)

    doc: Dict[str, Any] = {
        "openapi": OPENAPI_VERSION,
        "info": info,
        "paths": paths,
        "components": components,
    }
    if resolved.security:
        doc["security"] = [{name: []} for name in resolved.security]
    doc["tags"] = tags
    return doc


__all__ = ["emit", "emit_schema", "emit_operation"]
