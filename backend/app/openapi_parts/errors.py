"""Configuration errors raised while assembling the API contract.

Every error here is a programmer mistake in the declarations, never a
request-time condition. Registration calls raise them immediately; the
finalize-time checks collect them into a single `ValidationErrors` so the
whole report is visible at once.
"""
from __future__ import annotations
from typing import Iterable, List, Optional, Sequence


class ContractError(Exception):
    """Base class for every contract declaration error."""


class DuplicateSchemaError(ContractError):
    def __init__(self, name: str):
        super().__init__(f"schema {name!r} already registered")
        self.name = name


class UnknownSchemaError(ContractError):
    def __init__(self, name: str, referenced_by: Optional[str] = None):
        where = f" (referenced by {referenced_by})" if referenced_by else ""
        super().__init__(f"schema {name!r} is not registered{where}")
        self.name = name
        self.referenced_by = referenced_by


class PathParameterMismatchError(ContractError):
    """Placeholders in the path template and path parameters disagree.

    `missing` are placeholders with no parameter, `unexpected` are path
    parameters with no placeholder, `duplicated` are placeholders that
    appear more than once in the template.
    """

    def __init__(
        self,
        path: str,
        missing: Sequence[str] = (),
        unexpected: Sequence[str] = (),
        duplicated: Sequence[str] = (),
    ):
        parts = []
        if missing:
            parts.append(f"no path parameter for {', '.join(missing)}")
        if unexpected:
            parts.append(f"no placeholder for {', '.join(unexpected)}")
        if duplicated:
            parts.append(f"placeholder repeated: {', '.join(duplicated)}")
        super().__init__(f"{path}: {'; '.join(parts)}")
        self.path = path
        self.missing = tuple(missing)
        self.unexpected = tuple(unexpected)
        self.duplicated = tuple(duplicated)


class InvalidRouteError(ContractError, ValueError):
    """Unsupported HTTP method or malformed path template."""

    def __init__(self, method: str, path: str, reason: str):
        super().__init__(f"route {method.upper()} {path}: {reason}")
        self.method = method
        self.path = path


class InvalidStatusCodeError(ContractError):
    def __init__(self, status, reason: str = "not a 3-digit HTTP status code"):
        super().__init__(f"status {status!r}: {reason}")
        self.status = status


class DuplicateRouteError(ContractError):
    def __init__(self, method: str, path: str):
        super().__init__(f"route {method.upper()} {path} already registered")
        self.method = method
        self.path = path


class RegistryFinalizedError(ContractError):
    def __init__(self, action: str = "registration"):
        super().__init__(f"{action} rejected: registry is finalized")


class InvalidConstraintError(ContractError):
    def __init__(self, owner: str, message: str):
        super().__init__(f"{owner}: {message}")
        self.owner = owner


class InvalidSchemaError(ContractError):
    def __init__(self, schema: str, message: str):
        super().__init__(f"schema {schema!r}: {message}")
        self.schema = schema


class InvalidParameterError(ContractError):
    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class DuplicateOperationIdError(ContractError):
    def __init__(self, operation_id: str):
        super().__init__(f"operationId {operation_id!r} used by more than one operation")
        self.operation_id = operation_id


class UnknownSecuritySchemeError(ContractError):
    def __init__(self, scheme: str, operation: str):
        super().__init__(f"{operation}: security scheme {scheme!r} is not declared")
        self.scheme = scheme
        self.operation = operation


class ValidationErrors(ContractError):
    """Aggregate of every violation found by `Registry.finalize()`."""

    def __init__(self, errors: Iterable[ContractError]):
        self.errors: List[ContractError] = list(errors)
        lines = "\n".join(f"  - {e}" for e in self.errors)
        super().__init__(f"{len(self.errors)} contract violation(s):\n{lines}")

    def __iter__(self):
        return iter(self.errors)

    def __len__(self):
        return len(self.errors)

    def of_type(self, kind):
        return [e for e in self.errors if isinstance(e, kind)]


__all__ = [
    "ContractError",
    "DuplicateSchemaError",
    "UnknownSchemaError",
    "PathParameterMismatchError",
    "InvalidRouteError",
    "InvalidStatusCodeError",
    "DuplicateRouteError",
    "RegistryFinalizedError",
    "InvalidConstraintError",
    "InvalidSchemaError",
    "InvalidParameterError",
    "DuplicateOperationIdError",
    "UnknownSecuritySchemeError",
    "ValidationErrors",
]
