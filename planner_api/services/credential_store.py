### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Credential Store -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Credential Store

Read access to tenants, users, roles and module activations, plus the few
atomic writes the authentication flow needs (failure counter, last login,
token version bumps).

Every call carries a bounded timeout. Timeouts and database failures are
raised as StoreError so callers fail closed. Results are plain frozen
records, never ORM instances.
"""

import asyncio
from datetime import datetime
from typing import Protocol

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from planner_api.context import (
    LoginRecord,
    OrganizationRecord,
    ProfileRecord,
    RoleRecord,
    TenantRecord,
    UserRecord,
)
from planner_api.errors import StoreError
from planner_api.models import (
    ModuleActivation,
    Organization,
    Role,
    RoleAssignment,
    Tenant,
    User,
    UserStatus,
)
from planner_api.utils import get_logger

logger = get_logger(__name__)


class CredentialStore(Protocol):
    """Interface consumed by the resolver, loader, gate and login flow"""

    async def find_tenant(self, identifier: str) -> TenantRecord | None: ...

    async def get_user(self, user_id: str) -> UserRecord | None: ...

    async def find_login_user(self, tenant_id: str, email: str) -> LoginRecord | None: ...

    async def increment_login_attempts(self, user_id: str) -> None: ...

    async def record_successful_login(self, user_id: str, at: datetime) -> None: ...

    async def increment_token_version(self, user_id: str) -> int: ...

    async def update_password(self, user_id: str, password_hash: str) -> int: ...

    async def is_module_active(self, tenant_id: str, module: str) -> bool: ...

    async def get_password_hash(self, user_id: str) -> str | None: ...

    async def is_subdomain_taken(self, subdomain: str) -> bool: ...


def _tenant_record(tenant: Tenant) -> TenantRecord:
    return TenantRecord(
        id=tenant.id,
        subdomain=tenant.subdomain,
        name=tenant.name,
        status=tenant.status,
        subscription_end_date=tenant.subscription_end_date,
    )


def _user_record(user: User) -> UserRecord:
    organization = None
    if user.organization is not None:
        organization = OrganizationRecord(
            id=user.organization.id,
            tenant_id=user.organization.tenant_id,
            name=user.organization.name,
        )

    profile = None
    if user.profile is not None:
        profile = ProfileRecord(
            first_name=user.profile.first_name,
            last_name=user.profile.last_name,
            avatar_url=user.profile.avatar_url,
        )

    # Global roles (no tenant) and roles of the user's own tenant only
    tenant_id = organization.tenant_id if organization else None
    roles = tuple(
        RoleRecord(
            id=assignment.role.id,
            name=assignment.role.name,
            permissions=frozenset(p.name for p in assignment.role.permissions),
        )
        for assignment in user.role_assignments
        if assignment.role is not None and assignment.role.tenant_id in (None, tenant_id)
    )

    return UserRecord(
        id=user.id,
        email=user.email,
        status=user.status,
        organization_id=user.organization_id,
        token_version=user.token_version,
        email_verified=bool(user.email_verified),
        organization=organization,
        profile=profile,
        roles=roles,
    )


class SqlCredentialStore:
    """
    CredentialStore backed by async SQLAlchemy.

    Args:
        session_factory: async_sessionmaker bound to the credential database
        timeout: Seconds allowed per store call before failing with StoreError
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        timeout: float = 5.0,
    ):
        self.session_factory = session_factory
        self.timeout = timeout

    async def _run(self, operation: str, coro):
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Credential store timeout during {operation} ({self.timeout}s)")
            raise StoreError(f"Credential store timed out during {operation}") from e
        except SQLAlchemyError as e:
            logger.error(f"Credential store error during {operation}: {e}")
            raise StoreError(f"Credential store failed during {operation}") from e

    # ========================================
    # Reads
    # ========================================

    async def find_tenant(self, identifier: str) -> TenantRecord | None:
        """Single lookup matching either the tenant id or its subdomain"""

        async def _query():
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Tenant).where(
                        or_(Tenant.id == identifier, Tenant.subdomain == identifier)
                    )
                )
                tenant = result.scalars().first()
                return _tenant_record(tenant) if tenant else None

        return await self._run("find_tenant", _query())

    async def get_user(self, user_id: str) -> UserRecord | None:
        """Load a user with profile, organization and roles -> permissions"""

        async def _query():
            async with self.session_factory() as session:
                result = await session.execute(
                    select(User)
                    .where(User.id == user_id)
                    .options(
                        selectinload(User.profile),
                        selectinload(User.organization),
                        selectinload(User.role_assignments)
                        .selectinload(RoleAssignment.role)
                        .selectinload(Role.permissions),
                    )
                )
                user = result.scalars().first()
                return _user_record(user) if user else None

        return await self._run("get_user", _query())

    async def find_login_user(self, tenant_id: str, email: str) -> LoginRecord | None:
        """Find an ACTIVE user by email within the tenant (case-insensitive email)"""

        async def _query():
            async with self.session_factory() as session:
                result = await session.execute(
                    select(User)
                    .join(Organization, User.organization_id == Organization.id)
                    .where(
                        Organization.tenant_id == tenant_id,
                        func.lower(User.email) == email.strip().lower(),
                        User.status == UserStatus.ACTIVE.value,
                    )
                    .options(selectinload(User.profile))
                )
                user = result.scalars().first()
                if user is None:
                    return None
                return LoginRecord(
                    id=user.id,
                    email=user.email,
                    password_hash=user.password_hash,
                    organization_id=user.organization_id,
                    token_version=user.token_version,
                    email_verified=bool(user.email_verified),
                    first_name=user.profile.first_name if user.profile else None,
                    last_name=user.profile.last_name if user.profile else None,
                )

        return await self._run("find_login_user", _query())

    async def is_module_active(self, tenant_id: str, module: str) -> bool:
        async def _query():
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ModuleActivation.id).where(
                        ModuleActivation.tenant_id == tenant_id,
                        ModuleActivation.module_type == module,
                        ModuleActivation.is_active.is_(True),
                    )
                )
                return result.first() is not None

        return await self._run("is_module_active", _query())

    # ========================================
    # Atomic writes
    # ========================================

    async def increment_login_attempts(self, user_id: str) -> None:
        """Atomic increment at the database, never read-then-write"""

        async def _query():
            async with self.session_factory() as session:
                await session.execute(
                    update(User)
                    .where(User.id == user_id)
                    .values(login_attempts=User.login_attempts + 1)
                )
                await session.commit()

        await self._run("increment_login_attempts", _query())

    async def record_successful_login(self, user_id: str, at: datetime) -> None:
        async def _query():
            async with self.session_factory() as session:
                await session.execute(
                    update(User)
                    .where(User.id == user_id)
                    .values(login_attempts=0, last_login_at=at)
                )
                await session.commit()

        await self._run("record_successful_login", _query())

    async def increment_token_version(self, user_id: str) -> int:
        """Bump the token version, invalidating every credential issued so far"""

        async def _query():
            async with self.session_factory() as session:
                await session.execute(
                    update(User)
                    .where(User.id == user_id)
                    .values(token_version=User.token_version + 1)
                )
                result = await session.execute(
                    select(User.token_version).where(User.id == user_id)
                )
                version = result.scalar_one()
                await session.commit()
                return version

        return await self._run("increment_token_version", _query())

    async def update_password(self, user_id: str, password_hash: str) -> int:
        """Store a new password hash and bump the token version in one statement"""

        async def _query():
            async with self.session_factory() as session:
                await session.execute(
                    update(User)
                    .where(User.id == user_id)
                    .values(
                        password_hash=password_hash,
                        token_version=User.token_version + 1,
                        login_attempts=0,
                    )
                )
                result = await session.execute(
                    select(User.token_version).where(User.id == user_id)
                )
                version = result.scalar_one()
                await session.commit()
                return version

        return await self._run("update_password", _query())

    async def get_password_hash(self, user_id: str) -> str | None:
        async def _query():
            async with self.session_factory() as session:
                result = await session.execute(
                    select(User.password_hash).where(User.id == user_id)
                )
                return result.scalar_one_or_none()

        return await self._run("get_password_hash", _query())

    async def is_subdomain_taken(self, subdomain: str) -> bool:
        async def _query():
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Tenant.id).where(Tenant.subdomain == subdomain)
                )
                return result.first() is not None

        return await self._run("is_subdomain_taken", _query())
