### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Tenant Models -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Tenant Models

A Tenant is an isolated customer account (the multi-tenancy boundary).
Tenants own Organizations, and each tenant independently activates
a subset of the planning modules.
"""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from planner_api.database import Base


def new_id() -> str:
    """Generate an opaque primary key"""
    return str(uuid.uuid4())


class TenantStatus(str, Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    PENDING = "PENDING"
    CANCELLED = "CANCELLED"


class ModuleType(str, Enum):
    """Closed set of planning modules a tenant can activate"""

    STAGE = "stage"
    BAR = "bar"
    SECURITY = "security"
    CLEANING = "cleaning"
    MERCHANTS = "merchants"
    FESTIVAL = "festival"
    LIFE = "life"


class Tenant(Base):
    """
    Tenant model - an isolated customer account.

    A request is only servable when status is ACTIVE and the subscription
    end date is absent or in the future.
    """

    __tablename__ = "tenants"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    subdomain = Column(String(63), nullable=False, unique=True)
    status = Column(String(20), nullable=False, default=TenantStatus.PENDING.value)
    subscription_end_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships (no ORM cascades - cleanup is explicit)
    organizations = relationship("Organization", back_populates="tenant")
    module_activations = relationship("ModuleActivation", back_populates="tenant")

    def __repr__(self):
        return f"<Tenant(id={self.id}, subdomain='{self.subdomain}', status='{self.status}')>"


class Organization(Base):
    """Organization - a unit within a tenant that owns users"""

    __tablename__ = "organizations"

    id = Column(String(36), primary_key=True, default=new_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    tenant = relationship("Tenant", back_populates="organizations")
    users = relationship("User", back_populates="organization")
    module_activations = relationship("ModuleActivation", back_populates="organization")

    def __repr__(self):
        return f"<Organization(id={self.id}, name='{self.name}')>"


class ModuleActivation(Base):
    """
    ModuleActivation - (tenant, module, is_active) entitlement row.

    A module is usable by a tenant iff a row exists with is_active=True
    for that exact (tenant, module) pair.
    """

    __tablename__ = "module_activations"

    id = Column(String(36), primary_key=True, default=new_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=False)
    organization_id = Column(String(36), ForeignKey("organizations.id"), nullable=True)
    module_type = Column(String(30), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    activated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    tenant = relationship("Tenant", back_populates="module_activations")
    organization = relationship("Organization", back_populates="module_activations")

    __table_args__ = (
        UniqueConstraint("tenant_id", "module_type", name="uq_module_activation_tenant_module"),
        Index("ix_module_activations_lookup", "tenant_id", "module_type", "is_active"),
    )

    def __repr__(self):
        return (
            f"<ModuleActivation(tenant_id={self.tenant_id}, "
            f"module='{self.module_type}', active={self.is_active})>"
        )
