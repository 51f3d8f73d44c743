"""Per-domain contract contributions.

Each module exports `register(registry)`; `contribute_all` queues them on a
registry as deferred contributions so they run inside `finalize()`.
"""
from ..registry import Registry
from . import employees
from ._common import register_common

CONTRIBUTORS = [
    register_common,
    employees.register,
]


def contribute_all(registry: Registry) -> Registry:
    for contributor in CONTRIBUTORS:
        registry.defer(contributor)
    return registry


__all__ = ["CONTRIBUTORS", "contribute_all", "employees"]
