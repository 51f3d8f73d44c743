"""Contract registry: collects schemas and operations, then finalizes them.

The registry has two states. While `open` it accepts registrations; the
cheap checks (duplicates, path placeholders, status codes) run immediately.
`finalize()` runs any deferred contributors, performs the closure check
over every cross reference and constraint, and either raises a single
`ValidationErrors` carrying every violation or flips to `finalized` and
returns an immutable `ResolvedDocument`. There is no way back to `open`.

Usage:
    registry = Registry("Employee Management API", "1.0.0")
    registry.define_schema("Employee", [required("id", STRING, Format("uuid"))])
    registry.define_operation("get", "/employees/{id}",
                              parameters=[path_param("id", STRING, Format("uuid"))],
                              responses=[ResponseDescriptor(200, "Employee details", "Employee")])
    resolved = registry.finalize()
"""
from __future__ import annotations
import dataclasses
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .constants import HTTP_METHODS
from .constraints import constraint_problems
from .errors import (
    ContractError,
    DuplicateOperationIdError,
    DuplicateRouteError,
    DuplicateSchemaError,
    InvalidConstraintError,
    InvalidParameterError,
    InvalidSchemaError,
    InvalidRouteError,
    RegistryFinalizedError,
    UnknownSchemaError,
    UnknownSecuritySchemeError,
    ValidationErrors,
)
from .operation import (
    OperationDescriptor,
    ParameterDescriptor,
    ResponsesArg,
    SecurityScheme,
    Tag,
    check_path_parameters,
    normalize_responses,
)
from .schema import FieldSpec, SchemaModel

logger = logging.getLogger(__name__)

STATE_OPEN = "open"
STATE_FINALIZED = "finalized"

Contributor = Callable[["Registry"], Any]


@dataclass(frozen=True)
class ResolvedDocument:
    """Validated, immutable view of a finalized registry.

    Collections are pre-sorted in emission order: schemas, tags and
    security schemes by name, operations by (tag, path, method).
    """

    title: str
    version: str
    description: Optional[str]
    schemas: Tuple[SchemaModel, ...]
    operations: Tuple[OperationDescriptor, ...]
    security_schemes: Tuple[SecurityScheme, ...]
    tags: Tuple[Tag, ...]
    security: Tuple[str, ...]

    def schema(self, name: str) -> SchemaModel:
        for s in self.schemas:
            if s.name == name:
                return s
        raise UnknownSchemaError(name)

    def operation(self, method: str, path: str) -> Optional[OperationDescriptor]:
        method = method.lower()
        for op in self.operations:
            if op.key == (method, path):
                return op
        return None


class Registry:
    def __init__(self, title: str, version: str, description: Optional[str] = None, security: Sequence[str] = ()):
        self.title = title
        self.version = version
        self.description = description
        self.security = tuple(security)
        self._lock = threading.RLock()
        self._schemas: Dict[str, SchemaModel] = {}
        self._operations: Dict[Tuple[str, str], OperationDescriptor] = {}
        self._security_schemes: Dict[str, SecurityScheme] = {}
        self._tags: Dict[str, Tag] = {}
        self._contributors: List[Contributor] = []
        self._resolved: Optional[ResolvedDocument] = None

    @property
    def state(self) -> str:
        return STATE_FINALIZED if self._resolved is not None else STATE_OPEN

    @property
    def is_finalized(self) -> bool:
        return self._resolved is not None

    def _ensure_open(self, action: str) -> None:
        if self._resolved is not None:
            raise RegistryFinalizedError(action)

    # ---------------- Registration ---------------- #

    def define_schema(self, name: str, fields: Iterable[FieldSpec], description: Optional[str] = None) -> SchemaModel:
        with self._lock:
            self._ensure_open(f"define_schema({name!r})")
            if name in self._schemas:
                raise DuplicateSchemaError(name)
            model = SchemaModel(name, tuple(fields), description)
            self._schemas[name] = model
            logger.debug("schema registered: %s (%d fields)", name, len(model.fields))
            return model

    def add_example(self, name: str, value: Any) -> SchemaModel:
        with self._lock:
            self._ensure_open(f"add_example({name!r})")
            model = self._schemas.get(name)
            if model is None:
                raise UnknownSchemaError(name)
            model = dataclasses.replace(model, example=value)
            self._schemas[name] = model
            return model

    def define_operation(
        self,
        method: str,
        path: str,
        *,
        responses: ResponsesArg,
        summary: Optional[str] = None,
        description: Optional[str] = None,
        tag: Optional[str] = None,
        parameters: Iterable[ParameterDescriptor] = (),
        request_body: Optional[str] = None,
        security: Sequence[str] = (),
        operation_id: Optional[str] = None,
        deprecated: bool = False,
    ) -> OperationDescriptor:
        method = method.lower()
        with self._lock:
            self._ensure_open(f"define_operation({method.upper()} {path})")
            if method not in HTTP_METHODS:
                raise InvalidRouteError(method, path, "unsupported HTTP method")
            if not path.startswith("/"):
                raise InvalidRouteError(method, path, "path template must start with '/'")
            if (method, path) in self._operations:
                raise DuplicateRouteError(method, path)
            parameters = tuple(parameters)
            check_path_parameters(path, parameters)
            op = OperationDescriptor(
                method=method,
                path=path,
                responses=normalize_responses(responses),
                summary=summary,
                description=description,
                tag=tag,
                parameters=parameters,
                request_body=request_body,
                security=tuple(security),
                operation_id=operation_id,
                deprecated=deprecated,
            )
            self._operations[op.key] = op
            logger.debug("operation registered: %s", op.label)
            return op

    def define_security_scheme(self, scheme: SecurityScheme) -> SecurityScheme:
        with self._lock:
            self._ensure_open(f"define_security_scheme({scheme.name!r})")
            if scheme.name in self._security_schemes:
                raise ContractError(f"security scheme {scheme.name!r} already registered")
            self._security_schemes[scheme.name] = scheme
            return scheme

    def define_tag(self, name: str, description: Optional[str] = None) -> Tag:
        with self._lock:
            self._ensure_open(f"define_tag({name!r})")
            if name in self._tags:
                raise ContractError(f"tag {name!r} already registered")
            tag = Tag(name, description)
            self._tags[name] = tag
            return tag

    def defer(self, contributor: Contributor) -> None:
        """Queue `contributor(registry)` to run inside `finalize()`."""
        with self._lock:
            self._ensure_open("defer")
            self._contributors.append(contributor)

    # ---------------- Lookup ---------------- #

    def has_schema(self, name: str) -> bool:
        return name in self._schemas

    def get_schema(self, name: str) -> SchemaModel:
        try:
            return self._schemas[name]
        except KeyError:
            raise UnknownSchemaError(name) from None

    def operations(self) -> List[OperationDescriptor]:
        return list(self._operations.values())

    # ---------------- Finalization ---------------- #

    def finalize(self) -> ResolvedDocument:
        """Validate every declaration and freeze the registry.

        Idempotent: once finalized the same ResolvedDocument is returned.
        Raises ValidationErrors listing every violation; the registry then
        stays open so the declarations can be corrected. Deferred
        contributors that failed are retried on the next call.
        """
        with self._lock:
            if self._resolved is not None:
                return self._resolved
            errors = self._run_contributors()
            errors.extend(self._collect_violations())
            if errors:
                logger.warning("contract validation failed with %d violation(s)", len(errors))
                raise ValidationErrors(errors)
            self._resolved = self._resolve()
            logger.info(
                "contract finalized: %d operations, %d schemas",
                len(self._resolved.operations),
                len(self._resolved.schemas),
            )
            return self._resolved

    def _snapshot(self) -> Tuple[Any, ...]:
        return (
            dict(self._schemas),
            dict(self._operations),
            dict(self._security_schemes),
            dict(self._tags),
            list(self._contributors),
        )

    def _restore(self, snapshot: Tuple[Any, ...]) -> None:
        (self._schemas, self._operations, self._security_schemes,
         self._tags, self._contributors) = snapshot

    def _run_contributors(self) -> List[ContractError]:
        """Run queued contributors, each one all-or-nothing.

        A contributor that raises has its registrations rolled back and stays
        queued, so every later `finalize()` runs it again and fails the same
        way until the cause is fixed. Contributors may defer further ones.
        """
        errors: List[ContractError] = []
        i = 0
        while i < len(self._contributors):
            contributor = self._contributors[i]
            snapshot = self._snapshot()
            try:
                contributor(self)
            except ContractError as e:
                self._restore(snapshot)
                errors.append(e)
                i += 1
                continue
            except Exception:
                self._restore(snapshot)
                raise
            self._contributors.pop(i)
        return errors

    def _collect_violations(self) -> List[ContractError]:
        errors: List[ContractError] = []
        for name in sorted(self._schemas):
            errors.extend(self._schema_violations(self._schemas[name]))
        seen_ids: Dict[str, OperationDescriptor] = {}
        reported_ids = set()
        for op in sorted(self._operations.values(), key=lambda o: o.sort_key):
            errors.extend(self._operation_violations(op))
            op_id = op.resolved_operation_id()
            if op_id in seen_ids and op_id not in reported_ids:
                errors.append(DuplicateOperationIdError(op_id))
                reported_ids.add(op_id)
            seen_ids.setdefault(op_id, op)
        for scheme in self.security:
            if scheme not in self._security_schemes:
                errors.append(UnknownSecuritySchemeError(scheme, "document"))
        return errors

    def _schema_violations(self, model: SchemaModel) -> List[ContractError]:
        errors: List[ContractError] = []
        seen = set()
        for f in model.fields:
            owner = f"{model.name}.{f.name}"
            if f.name in seen:
                errors.append(InvalidSchemaError(model.name, f"field {f.name!r} declared more than once"))
            seen.add(f.name)
            if f.required and f.has_default:
                errors.append(InvalidSchemaError(model.name, f"required field {f.name!r} has a default"))
            for problem in f.type.problems():
                errors.append(InvalidSchemaError(model.name, f"field {f.name!r}: {problem}"))
            for problem in constraint_problems(f.constraints, f.type.kind):
                errors.append(InvalidConstraintError(owner, problem))
            for target in f.type.schema_refs():
                if target not in self._schemas:
                    errors.append(UnknownSchemaError(target, f"schema {model.name} field {f.name}"))
        return errors

    def _operation_violations(self, op: OperationDescriptor) -> List[ContractError]:
        errors: List[ContractError] = []
        for target, where in op.schema_refs():
            if target not in self._schemas:
                errors.append(UnknownSchemaError(target, where))
        seen = set()
        for p in op.parameters:
            if (p.name, p.location) in seen:
                errors.append(InvalidParameterError(op.label, f"{p.location} parameter {p.name!r} declared more than once"))
            seen.add((p.name, p.location))
            if p.has_default and p.location == "path":
                errors.append(InvalidParameterError(op.label, f"path parameter {p.name!r} cannot have a default"))
            elif p.has_default and p.required:
                errors.append(InvalidParameterError(op.label, f"required parameter {p.name!r} has a default"))
            for problem in p.type.problems():
                errors.append(InvalidParameterError(op.label, f"parameter {p.name!r}: {problem}"))
            for problem in constraint_problems(p.constraints, p.type.kind):
                errors.append(InvalidConstraintError(f"{op.label} parameter {p.name}", problem))
        for scheme in op.security:
            if scheme not in self._security_schemes:
                errors.append(UnknownSecuritySchemeError(scheme, op.label))
        return errors

    def _resolve(self) -> ResolvedDocument:
        operations = tuple(sorted(self._operations.values(), key=lambda o: o.sort_key))
        tags = dict(self._tags)
        for op in operations:
            if op.tag and op.tag not in tags:
                tags[op.tag] = Tag(op.tag)
        return ResolvedDocument(
            title=self.title,
            version=self.version,
            description=self.description,
            schemas=tuple(self._schemas[n] for n in sorted(self._schemas)),
            operations=operations,
            security_schemes=tuple(self._security_schemes[n] for n in sorted(self._security_schemes)),
            tags=tuple(tags[n] for n in sorted(tags)),
            security=self.security,
        )


__all__ = ["Registry", "ResolvedDocument", "STATE_OPEN", "STATE_FINALIZED"]
