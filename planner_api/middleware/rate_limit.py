### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Rate Limiting Middleware -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Rate Limiting Middleware

Per-route throttling as a FastAPI dependency. Counters live in the shared
counter store (Redis, or in-process when Redis is absent or down).
Successful requests carry RateLimit-Limit/Remaining/Reset headers;
exhausted windows raise RateLimitExceeded (429 with Retry-After).
"""

from collections.abc import Callable

from fastapi import Depends, Response

from planner_api.context import RequestContext
from planner_api.dependencies import get_rate_limit_rule, get_rate_limiter
from planner_api.middleware.auth import tenant_context
from planner_api.services import RateLimiter


def enforce_rate_limit(rule_name: str, context: Callable = tenant_context):
    """
    Dependency factory applying a named rate limit rule

    Usage:
        @router.post("/login", dependencies=[Depends(enforce_rate_limit("login"))])

    Args:
        rule_name: Rule from the rate_limits config section
        context: Context dependency that supplies tenant/identity for the key
    """

    async def rate_limit_dependency(
        response: Response,
        ctx: RequestContext = Depends(context),
        limiter: RateLimiter = Depends(get_rate_limiter),
    ) -> None:
        rule = get_rate_limit_rule(rule_name)
        status = await limiter.check(rule, ctx, ctx.client_address)
        response.headers["RateLimit-Limit"] = str(status.limit)
        response.headers["RateLimit-Remaining"] = str(status.remaining)
        response.headers["RateLimit-Reset"] = str(status.reset_in)

    return rate_limit_dependency
