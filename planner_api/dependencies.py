### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - FastAPI Dependencies -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
FastAPI Dependencies

Provides dependency injection for:
- Credential store (async SQLAlchemy session factory)
- Counter store (Redis or in-process)
- Pipeline components (resolver, codec, loader, gate, limiter)
- Planning repository (per-request session)

Each component receives its store through its constructor; tests swap
stores through app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from planner_api.config import get_api_settings, get_rate_limit_config
from planner_api.database import get_session, get_session_factory
from planner_api.services import (
    AuthService,
    AuthorizationGate,
    CounterStore,
    CredentialStore,
    IdentityLoader,
    PlanningRepository,
    RateLimiter,
    RateLimitRule,
    SqlCredentialStore,
    TenantResolver,
    TokenCodec,
    load_rules,
)

# Service instances (created on first request, reused)
_counter_store: CounterStore | None = None


def get_credential_store(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> CredentialStore:
    """Dependency that provides the credential store"""
    settings = get_api_settings()
    return SqlCredentialStore(session_factory, timeout=settings.store_timeout_seconds)


def get_counter_store() -> CounterStore:
    """
    Dependency that provides the counter store.

    Uses a singleton so in-process counters and the Redis connection pool
    survive across requests.
    """
    global _counter_store

    if _counter_store is None:
        settings = get_api_settings()
        _counter_store = CounterStore.from_url(
            settings.redis_url,
            key_prefix=settings.redis_key_prefix,
            timeout=settings.counter_timeout_seconds,
        )
    return _counter_store


async def close_counter_store():
    """Close the counter store connection (call on shutdown)"""
    global _counter_store

    if _counter_store is not None:
        await _counter_store.close()
        _counter_store = None


def get_token_codec() -> TokenCodec:
    settings = get_api_settings()
    return TokenCodec(
        secret_key=settings.secret_key,
        algorithm=settings.token_algorithm,
        expiry_seconds=settings.token_expiry_seconds,
    )


def get_tenant_resolver(store: CredentialStore = Depends(get_credential_store)) -> TenantResolver:
    settings = get_api_settings()
    return TenantResolver(store, reserved_subdomains=settings.reserved_subdomains)


def get_identity_loader(store: CredentialStore = Depends(get_credential_store)) -> IdentityLoader:
    settings = get_api_settings()
    return IdentityLoader(store, strict_organization_check=settings.strict_organization_check)


def get_authorization_gate(store: CredentialStore = Depends(get_credential_store)) -> AuthorizationGate:
    return AuthorizationGate(store)


def get_rate_limiter(counters: CounterStore = Depends(get_counter_store)) -> RateLimiter:
    return RateLimiter(counters)


def get_rate_limit_rule(name: str) -> RateLimitRule:
    """Look up a named rule (defaults merged with config.yaml overrides)"""
    return load_rules(get_rate_limit_config())[name]


def get_auth_service(
    store: CredentialStore = Depends(get_credential_store),
    codec: TokenCodec = Depends(get_token_codec),
    counters: CounterStore = Depends(get_counter_store),
) -> AuthService:
    return AuthService(store, codec, counters)


def get_planning_repository(session: AsyncSession = Depends(get_session)) -> PlanningRepository:
    return PlanningRepository(session)
