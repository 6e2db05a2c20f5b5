### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - API Services Package -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
API Services Package

Contains the request pipeline components and data access services:
- credential_store: tenants, users, roles and module activations
- counter_store: rate limit counters and token blacklist
- token_codec: signed credential issue/verify
- tenant_resolver, identity_loader, authorization, rate_limiter: pipeline stages
- auth_service: login/logout/password flows
- planning_repository: stage planner data access
"""

from .auth_service import AuthService
from .authorization import AuthorizationGate, check_permission
from .counter_store import CounterStore
from .credential_store import CredentialStore, SqlCredentialStore
from .identity_loader import IdentityLoader, effective_permissions
from .planning_repository import PlanningRepository
from .rate_limiter import RateLimiter, RateLimitRule, load_rules
from .tenant_resolver import TenantResolver
from .token_codec import TokenCodec

__all__ = [
    "AuthService",
    "AuthorizationGate",
    "CounterStore",
    "CredentialStore",
    "IdentityLoader",
    "PlanningRepository",
    "RateLimitRule",
    "RateLimiter",
    "SqlCredentialStore",
    "TenantResolver",
    "TokenCodec",
    "check_permission",
    "effective_permissions",
    "load_rules",
]
