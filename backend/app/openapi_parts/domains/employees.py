"""Employee management contract: schemas and the three documented endpoints."""
from __future__ import annotations
from app.config.pagination import DEFAULT_PAGE, DEFAULT_PER_PAGE, MAX_PER_PAGE

from ..constraints import Choices, Format, Length, Pattern, Range
from ..operation import ResponseDescriptor, path_param, query_param
from ..registry import Registry
from ..schema import INTEGER, STRING, optional, required
from ._common import BEARER_AUTH, ERROR_SCHEMA, register_page

TAG = "employees"
EMPLOYEE_ID_PATTERN = "^[A-Z]{3}[0-9]{3}$"
EMPLOYMENT_STATUSES = ("active", "inactive", "terminated")

EMPLOYEE_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "employee_id": "EMP001",
    "first_name": "John",
    "last_name": "Doe",
    "email": "john.doe@company.com",
    "employment_status": "active",
    "hire_date": "2024-01-15",
    "created_at": "2024-01-15T10:30:00Z",
    "updated_at": "2024-01-15T10:30:00Z",
}

CREATE_EXAMPLE = {
    "employee_id": "EMP001",
    "first_name": "John",
    "last_name": "Doe",
    "email": "john.doe@company.com",
    "hire_date": "2024-01-15",
}


def _name_field(name: str):
    return required(name, STRING, Length(1, 100))


def register(registry: Registry) -> None:
    registry.define_tag(TAG, "Employee management endpoints")

    registry.define_schema("Employee", [
        required("id", STRING, Format("uuid")),
        required("employee_id", STRING, Pattern(EMPLOYEE_ID_PATTERN)),
        _name_field("first_name"),
        _name_field("last_name"),
        required("email", STRING, Format("email")),
        required("employment_status", STRING, Choices(EMPLOYMENT_STATUSES)),
        required("hire_date", STRING, Format("date")),
        required("created_at", STRING, Format("date-time")),
        required("updated_at", STRING, Format("date-time")),
    ])
    registry.add_example("Employee", EMPLOYEE_EXAMPLE)

    registry.define_schema("CreateEmployeeRequest", [
        required("employee_id", STRING, Pattern(EMPLOYEE_ID_PATTERN)),
        _name_field("first_name"),
        _name_field("last_name"),
        required("email", STRING, Format("email")),
        optional("department_id", STRING, Format("uuid")),
        optional("position", STRING, Length(max=100)),
        required("hire_date", STRING, Format("date")),
    ])
    registry.add_example("CreateEmployeeRequest", CREATE_EXAMPLE)

    page = register_page(registry, "Employee")

    registry.define_operation(
        "get", "/employees",
        operation_id="list_employees",
        tag=TAG,
        summary="List employees",
        description="Retrieve a paginated list of employees with optional filtering",
        parameters=[
            query_param("page", INTEGER, Range(minimum=1), default=DEFAULT_PAGE, description="Page number"),
            query_param("per_page", INTEGER, Range(1, MAX_PER_PAGE), default=DEFAULT_PER_PAGE, description="Items per page"),
            query_param("department", STRING, description="Filter by department"),
            query_param("status", STRING, Choices(EMPLOYMENT_STATUSES), description="Filter by employment status"),
        ],
        responses=[
            ResponseDescriptor(200, "List of employees", page),
            ResponseDescriptor(401, "Unauthorized", ERROR_SCHEMA),
        ],
        security=[BEARER_AUTH],
    )
    registry.define_operation(
        "post", "/employees",
        operation_id="create_employee",
        tag=TAG,
        summary="Create employee",
        description="Create a new employee",
        request_body="CreateEmployeeRequest",
        responses=[
            ResponseDescriptor(201, "Employee created successfully", "Employee"),
            ResponseDescriptor(400, "Bad request", ERROR_SCHEMA),
            ResponseDescriptor(422, "Validation error", ERROR_SCHEMA),
        ],
        security=[BEARER_AUTH],
    )
    registry.define_operation(
        "get", "/employees/{id}",
        operation_id="get_employee",
        tag=TAG,
        summary="Get employee",
        description="Retrieve a specific employee by ID",
        parameters=[path_param("id", STRING, Format("uuid"), description="Employee ID")],
        responses=[
            ResponseDescriptor(200, "Employee details", "Employee"),
            ResponseDescriptor(404, "Employee not found", ERROR_SCHEMA),
        ],
        security=[BEARER_AUTH],
    )


__all__ = ["register", "TAG", "EMPLOYMENT_STATUSES", "EMPLOYEE_ID_PATTERN"]
