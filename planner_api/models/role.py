### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Role & Permission Models -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Role & Permission Models

Permissions are flat "<verb>:<resource>" strings (e.g. "read:event").
Roles group permissions; users hold roles through RoleAssignment.
The effective permission set of a user is derived, never stored.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from planner_api.database import Base
from planner_api.models.tenant import new_id

role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column("role_id", String(36), ForeignKey("roles.id"), primary_key=True),
    Column("permission_id", String(36), ForeignKey("permissions.id"), primary_key=True),
)

# Permission catalogue seeded on first startup
DEFAULT_PERMISSIONS = [
    "read:event",
    "create:event",
    "update:event",
    "delete:event",
    "export:event",
    "read:team",
    "create:team",
    "update:team",
    "delete:team",
    "read:user",
    "export:user",
    "create:assignment",
    "update:assignment",
    "delete:assignment",
    "read:statistics",
]


class Permission(Base):
    __tablename__ = "permissions"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)

    roles = relationship("Role", secondary=role_permissions, back_populates="permissions")

    def __repr__(self):
        return f"<Permission(name='{self.name}')>"


class Role(Base):
    """Role - named set of permissions, optionally scoped to one tenant"""

    __tablename__ = "roles"

    id = Column(String(36), primary_key=True, default=new_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    permissions = relationship("Permission", secondary=role_permissions, back_populates="roles")
    assignments = relationship("RoleAssignment", back_populates="role")

    __table_args__ = (UniqueConstraint("tenant_id", "name", name="uq_roles_tenant_name"),)

    def __repr__(self):
        return f"<Role(id={self.id}, name='{self.name}')>"


class RoleAssignment(Base):
    """Links a user to a role"""

    __tablename__ = "role_assignments"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    role_id = Column(String(36), ForeignKey("roles.id"), nullable=False)
    assigned_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="role_assignments")
    role = relationship("Role", back_populates="assignments")

    __table_args__ = (UniqueConstraint("user_id", "role_id", name="uq_role_assignments_user_role"),)

    def __repr__(self):
        return f"<RoleAssignment(user_id={self.user_id}, role_id={self.role_id})>"
