### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Tenant Resolver -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Tenant Resolver

Derives the tenant a request belongs to from the explicit tenant header or
the leftmost hostname label, and validates that the tenant is servable.

Two modes:
- identify(): best effort, never fails when no tenant matches
- require(): tenant must exist, be ACTIVE and hold a valid subscription

When both the header and a subdomain are present, the header wins.
"""

import ipaddress
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from planner_api.context import RequestContext, TenantRecord
from planner_api.errors import (
    SubscriptionExpired,
    TenantInactive,
    TenantNotFound,
    TenantRequired,
)
from planner_api.models import TenantStatus
from planner_api.services.credential_store import CredentialStore
from planner_api.utils import get_logger

logger = get_logger(__name__)

DEFAULT_RESERVED_SUBDOMAINS = ("www", "api", "app", "admin")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _strip_port(host: str) -> str:
    host = host.strip()
    if host.startswith("["):
        # [ipv6]:port
        return host[1 : host.find("]")] if "]" in host else host
    if host.count(":") == 1:
        return host.split(":", 1)[0]
    return host


def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        return False


def subdomain_candidate(host: str | None, reserved: Iterable[str]) -> str | None:
    """
    Leftmost hostname label, when it can name a tenant.

    "acme.planner.app" -> "acme"; "www.planner.app", "planner.app",
    "localhost" and IP literals -> None.
    """
    if not host:
        return None
    hostname = _strip_port(host)
    if not hostname or _is_ip_literal(hostname):
        return None
    labels = hostname.split(".")
    if len(labels) <= 2:
        return None
    first = labels[0]
    if not first or first.lower() in {r.lower() for r in reserved}:
        return None
    return first


def ensure_servable(tenant: TenantRecord, now: datetime | None = None) -> None:
    """
    Raise if the tenant cannot serve requests.

    Raises:
        TenantInactive: status is anything other than ACTIVE
        SubscriptionExpired: subscription end date is in the past
    """
    if tenant.status != TenantStatus.ACTIVE.value:
        raise TenantInactive(tenant.status)

    end = tenant.subscription_end_date
    if end is not None:
        now = now or _utcnow()
        # Stored values are naive UTC
        if end.tzinfo is None and now.tzinfo is not None:
            now = now.astimezone(timezone.utc).replace(tzinfo=None)
        elif end.tzinfo is not None and now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        if end < now:
            raise SubscriptionExpired()


class TenantResolver:
    """
    Args:
        store: CredentialStore used for the tenant lookup
        reserved_subdomains: First labels that never name a tenant
        clock: Returns the current time (aware UTC); overridable for tests
    """

    def __init__(
        self,
        store: CredentialStore,
        reserved_subdomains: Iterable[str] = DEFAULT_RESERVED_SUBDOMAINS,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.reserved_subdomains = tuple(reserved_subdomains)
        self.clock = clock

    def candidate(self, host: str | None, header: str | None) -> tuple[str | None, str | None]:
        """
        Pick the tenant identifier for a request.

        Returns:
            (identifier, source) where source is "header", "subdomain" or None
        """
        if header is not None and header.strip():
            return header.strip(), "header"
        subdomain = subdomain_candidate(host, self.reserved_subdomains)
        if subdomain:
            return subdomain, "subdomain"
        return None, None

    async def identify(self, ctx: RequestContext, header: str | None = None) -> RequestContext:
        """
        Identify-only mode: attach the tenant when one matches.

        A missing or unknown tenant is not an error here. Store failures
        still propagate (fail closed).
        """
        identifier, source = self.candidate(ctx.host, header)
        if identifier is None:
            return ctx

        tenant = await self.store.find_tenant(identifier)
        if tenant is None:
            logger.debug(f"No tenant matches '{identifier}' (from {source})")
            return ctx.evolve(tenant_identifier=identifier, tenant_source=source)

        return ctx.evolve(
            tenant_identifier=identifier,
            tenant_source=source,
            tenant_id=tenant.id,
            tenant=tenant,
        )

    async def require(self, ctx: RequestContext) -> RequestContext:
        """
        Require mode: the request must carry a servable tenant.

        Raises:
            TenantRequired: no tenant context at all
            TenantNotFound: an identifier was given but matches no tenant
            TenantInactive / SubscriptionExpired: tenant is not servable
        """
        tenant = ctx.tenant

        if tenant is None:
            if ctx.tenant_identifier is not None:
                # Already looked up during identify
                raise TenantNotFound()
            if ctx.tenant_id is None:
                raise TenantRequired()
            # Tenant taken from a verified credential
            tenant = await self.store.find_tenant(ctx.tenant_id)
            if tenant is None:
                raise TenantNotFound()

        ensure_servable(tenant, self.clock())

        return ctx.evolve(
            tenant=tenant,
            tenant_id=tenant.id,
            tenant_source=ctx.tenant_source or "credential",
            tenant_validated=True,
        )

    async def resolve(
        self, ctx: RequestContext, header: str | None = None, required: bool = True
    ) -> RequestContext:
        """identify() followed by require() when required"""
        ctx = await self.identify(ctx, header)
        return await self.require(ctx) if required else ctx
