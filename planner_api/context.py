### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Request Context -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Request Context

Immutable values passed between pipeline stages. Each stage receives the
context produced by the previous one and returns an enriched copy; nothing
is stored on the request object.

Also holds the plain records the credential store hands back, so that no
ORM instance (or open session) outlives a store call.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime


@dataclass(frozen=True)
class TenantRecord:
    id: str
    subdomain: str
    name: str
    status: str
    subscription_end_date: datetime | None = None


@dataclass(frozen=True)
class OrganizationRecord:
    id: str
    tenant_id: str
    name: str


@dataclass(frozen=True)
class ProfileRecord:
    first_name: str | None = None
    last_name: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True)
class RoleRecord:
    id: str
    name: str
    permissions: frozenset[str] = frozenset()


@dataclass(frozen=True)
class UserRecord:
    """A user together with everything the identity loader needs"""

    id: str
    email: str
    status: str
    organization_id: str
    token_version: int
    email_verified: bool = False
    organization: OrganizationRecord | None = None
    profile: ProfileRecord | None = None
    roles: tuple[RoleRecord, ...] = ()

    @property
    def tenant_id(self) -> str | None:
        return self.organization.tenant_id if self.organization else None


@dataclass(frozen=True)
class LoginRecord:
    """Minimal user view used by the login flow"""

    id: str
    email: str
    password_hash: str
    organization_id: str
    token_version: int
    email_verified: bool = False
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True)
class TokenPayload:
    """Decoded credential claims"""

    user_id: str
    email: str
    organization_id: str
    tenant_id: str
    token_version: int
    issued_at: datetime | None = None
    expires_at: datetime | None = None


@dataclass(frozen=True)
class Identity:
    """Fully hydrated caller identity"""

    user: UserRecord
    permissions: frozenset[str] = frozenset()

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def organization_id(self) -> str:
        return self.user.organization_id

    def has_permission(self, permission: str) -> bool:
        """Exact-match check; permission names are opaque tokens"""
        return permission in self.permissions


@dataclass(frozen=True)
class RequestContext:
    """
    Per-request pipeline state.

    Attributes:
        host: Hostname the request was addressed to
        client_address: Caller network address (for rate-limit keys)
        tenant_identifier: Candidate taken from the header or subdomain
        tenant_source: "header", "subdomain", "credential" or None
        tenant: Tenant record once resolved
        tenant_validated: True after require-mode checks passed
        identity: Hydrated identity once authenticated
        token: Raw bearer token (kept for revocation on logout)
        token_payload: Decoded claims of the bearer token
    """

    host: str = ""
    client_address: str = ""
    tenant_identifier: str | None = None
    tenant_source: str | None = None
    tenant_id: str | None = None
    tenant: TenantRecord | None = None
    tenant_validated: bool = False
    identity: Identity | None = None
    organization_id: str | None = None
    token: str | None = field(default=None, repr=False)
    token_payload: TokenPayload | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    @property
    def permissions(self) -> frozenset[str]:
        return self.identity.permissions if self.identity else frozenset()

    def evolve(self, **changes) -> "RequestContext":
        """Return a copy with the given fields replaced"""
        return replace(self, **changes)
