"""Employee route placeholders.

The handlers exist so the documented contract has a live route behind every
operation; persistence and business rules are provided elsewhere.
"""
from __future__ import annotations
from flask import Blueprint, abort

employees_bp = Blueprint('employees', __name__)

NOT_IMPLEMENTED = 'Employee storage is not wired into this service'


@employees_bp.get('/employees')
def list_employees():
    abort(501, description=NOT_IMPLEMENTED)


@employees_bp.post('/employees')
def create_employee():
    abort(501, description=NOT_IMPLEMENTED)


@employees_bp.get('/employees/<uuid:id>')
def get_employee(id):
    abort(501, description=NOT_IMPLEMENTED)
