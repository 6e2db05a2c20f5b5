### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Request Pipeline Dependencies -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Request Pipeline Dependencies

Runs the per-request stages in strict order, each one returning an
enriched RequestContext:

    resolve tenant -> verify bearer token -> load identity -> authorize

Dependencies:
- tenant_context: identify-only tenant resolution (public routes)
- required_tenant_context: tenant must be servable (login)
- authenticated_context: valid bearer token and active user
- tenant_scoped_context: authenticated and tenant servable
- require_permission(p) / require_module(m): route gates
"""

from enum import Enum

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from slowapi.util import get_remote_address

from planner_api.config import get_api_settings
from planner_api.context import RequestContext
from planner_api.dependencies import (
    get_authorization_gate,
    get_counter_store,
    get_identity_loader,
    get_tenant_resolver,
    get_token_codec,
)
from planner_api.errors import MissingCredential, TokenRevoked
from planner_api.services import (
    AuthorizationGate,
    CounterStore,
    IdentityLoader,
    TenantResolver,
    TokenCodec,
    check_permission,
)

# Bearer token for credential authentication
bearer_scheme = HTTPBearer(auto_error=False, description="Signed access token")


def build_context(request: Request) -> RequestContext:
    """Initial context from request metadata only"""
    return RequestContext(
        host=request.headers.get("host", ""),
        client_address=get_remote_address(request),
    )


async def tenant_context(
    request: Request,
    resolver: TenantResolver = Depends(get_tenant_resolver),
) -> RequestContext:
    """Identify-only tenant resolution; never fails on an unknown tenant"""
    settings = get_api_settings()
    ctx = build_context(request)
    return await resolver.identify(ctx, request.headers.get(settings.tenant_header))


async def required_tenant_context(
    ctx: RequestContext = Depends(tenant_context),
    resolver: TenantResolver = Depends(get_tenant_resolver),
) -> RequestContext:
    """Tenant must be present, ACTIVE and subscribed"""
    return await resolver.require(ctx)


async def _authenticate(
    ctx: RequestContext,
    bearer: HTTPAuthorizationCredentials | None,
    codec: TokenCodec,
    counters: CounterStore,
    loader: IdentityLoader,
) -> RequestContext:
    if bearer is None or not bearer.credentials:
        raise MissingCredential()

    token = bearer.credentials
    payload = codec.verify(token)

    if get_api_settings().token_blacklist_enabled and await counters.is_token_revoked(token):
        raise TokenRevoked()

    ctx = ctx.evolve(token=token, token_payload=payload)
    return await loader.load(ctx, payload)


async def authenticated_context(
    ctx: RequestContext = Depends(tenant_context),
    bearer: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    codec: TokenCodec = Depends(get_token_codec),
    counters: CounterStore = Depends(get_counter_store),
    loader: IdentityLoader = Depends(get_identity_loader),
) -> RequestContext:
    """
    Verify the bearer token and hydrate the caller identity.

    Raises:
        CredentialError: token missing, malformed, forged or expired
        IdentityError: user missing, token revoked or account not active
    """
    return await _authenticate(ctx, bearer, codec, counters, loader)


async def tenant_scoped_context(
    ctx: RequestContext = Depends(tenant_context),
    bearer: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    resolver: TenantResolver = Depends(get_tenant_resolver),
    codec: TokenCodec = Depends(get_token_codec),
    counters: CounterStore = Depends(get_counter_store),
    loader: IdentityLoader = Depends(get_identity_loader),
) -> RequestContext:
    """
    Authenticated request against a servable tenant.

    A tenant named by header or subdomain is validated before the credential
    is looked at; a tenant taken from the credential is validated after.
    """
    if ctx.tenant_identifier is not None:
        ctx = await resolver.require(ctx)

    ctx = await _authenticate(ctx, bearer, codec, counters, loader)

    if not ctx.tenant_validated:
        ctx = await resolver.require(ctx)
    return ctx


def require_permission(permission: str):
    """
    Dependency factory for permission checking

    Usage:
        @router.get("/events")
        async def list_events(
            ctx: RequestContext = Depends(require_permission("read:event")),
        ):
            ...
    """

    async def permission_dependency(
        ctx: RequestContext = Depends(tenant_scoped_context),
    ) -> RequestContext:
        check_permission(ctx, permission)
        return ctx

    return permission_dependency


def require_module(module: str | Enum):
    """Dependency factory that requires an active module for the tenant"""

    async def module_dependency(
        ctx: RequestContext = Depends(tenant_scoped_context),
        gate: AuthorizationGate = Depends(get_authorization_gate),
    ) -> RequestContext:
        await gate.check_module(ctx, module)
        return ctx

    return module_dependency
