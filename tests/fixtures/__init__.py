"""
Test fixtures and factories for Planner Suite tests.
"""

from tests.fixtures.factories import (
    DEFAULT_PASSWORD,
    STAGE_PERMISSIONS,
    activate_module,
    assign_role,
    create_organization,
    create_role,
    create_tenant,
    create_user,
)

__all__ = [
    "DEFAULT_PASSWORD",
    "STAGE_PERMISSIONS",
    "activate_module",
    "assign_role",
    "create_organization",
    "create_role",
    "create_tenant",
    "create_user",
]
