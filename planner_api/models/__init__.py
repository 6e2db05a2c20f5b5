### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - API Models Package -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
API Models Package

Contains SQLAlchemy models for the credential store and planning data:
- Tenant, Organization, ModuleActivation: tenancy and entitlements
- User, Profile: accounts
- Role, Permission, RoleAssignment: authorization
- Event, EventAssignment, TechnicalTeam, TeamMember: stage planning
"""

from planner_api.models.tenant import (
    ModuleActivation,
    ModuleType,
    Organization,
    Tenant,
    TenantStatus,
)
from planner_api.models.user import Profile, User, UserStatus, hash_password, verify_password
from planner_api.models.role import (
    DEFAULT_PERMISSIONS,
    Permission,
    Role,
    RoleAssignment,
    role_permissions,
)
from planner_api.models.planning import (
    AssignmentStatus,
    Event,
    EventAssignment,
    EventStatus,
    EventType,
    TeamMember,
    TechnicalTeam,
)

__all__ = [
    "AssignmentStatus",
    "DEFAULT_PERMISSIONS",
    "Event",
    "EventAssignment",
    "EventStatus",
    "EventType",
    "ModuleActivation",
    "ModuleType",
    "Organization",
    "Permission",
    "Profile",
    "Role",
    "RoleAssignment",
    "TeamMember",
    "TechnicalTeam",
    "Tenant",
    "TenantStatus",
    "User",
    "UserStatus",
    "hash_password",
    "role_permissions",
    "verify_password",
]
