"""Contract registry, validator and emitter for the service's OpenAPI document.

Application code declares schemas and operations on a `Registry`,
`Registry.finalize()` validates the whole contract, and `emit()` turns the
resolved state into a JSON-serializable OpenAPI 3 document.
"""
from .constraints import Choices, Format, Length, Pattern, Range
from .emitter import emit
from .errors import (
    ContractError,
    DuplicateOperationIdError,
    DuplicateRouteError,
    DuplicateSchemaError,
    InvalidConstraintError,
    InvalidParameterError,
    InvalidSchemaError,
    InvalidRouteError,
    InvalidStatusCodeError,
    PathParameterMismatchError,
    RegistryFinalizedError,
    UnknownSchemaError,
    UnknownSecuritySchemeError,
    ValidationErrors,
)
from .operation import (
    OperationDescriptor,
    ParameterDescriptor,
    ResponseDescriptor,
    SecurityScheme,
    Tag,
    path_param,
    query_param,
)
from .registry import Registry, ResolvedDocument
from .schema import (
    BOOLEAN,
    INTEGER,
    NUMBER,
    OBJECT,
    STRING,
    FieldSpec,
    SchemaModel,
    TypeRef,
    array_of,
    optional,
    ref,
    required,
)

__all__ = [
    "Registry",
    "ResolvedDocument",
    "emit",
    "SchemaModel",
    "FieldSpec",
    "TypeRef",
    "STRING",
    "INTEGER",
    "NUMBER",
    "BOOLEAN",
    "OBJECT",
    "ref",
    "array_of",
    "optional",
    "required",
    "OperationDescriptor",
    "ParameterDescriptor",
    "ResponseDescriptor",
    "SecurityScheme",
    "Tag",
    "path_param",
    "query_param",
    "Pattern",
    "Length",
    "Range",
    "Choices",
    "Format",
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
