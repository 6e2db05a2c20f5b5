### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Rate Limiter -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Rate Limiter

Fixed-window throttling of sensitive operations per caller key.

Key strategies:
- address: client address, scoped by tenant when one is resolved
- identity: authenticated user id (falls back to address)

Rules come from DEFAULT_RULES, overridden by the rate_limits section of
config.yaml.
"""

from dataclasses import dataclass

from planner_api.context import RequestContext
from planner_api.errors import RateLimitExceeded
from planner_api.services.counter_store import CounterStore


@dataclass(frozen=True)
class RateLimitRule:
    name: str
    max_requests: int
    window_seconds: int
    key_by: str = "address"  # "address" | "identity"
    message: str = "Too many requests. Please try again later."


@dataclass(frozen=True)
class RateLimitStatus:
    limit: int
    remaining: int
    reset_in: int


DEFAULT_RULES = {
    "auth_default": RateLimitRule(
        name="auth_default",
        max_requests=100,
        window_seconds=900,
    ),
    "login": RateLimitRule(
        name="login",
        max_requests=10,
        window_seconds=900,
        message="Too many login attempts. Please try again later.",
    ),
    "tenant_registration": RateLimitRule(
        name="tenant_registration",
        max_requests=5,
        window_seconds=3600,
        message="Too many registration attempts. Please try again later.",
    ),
    "password_reset": RateLimitRule(
        name="password_reset",
        max_requests=3,
        window_seconds=3600,
        message="Too many password reset requests. Please try again later.",
    ),
}


def load_rules(overrides: dict | None = None) -> dict[str, RateLimitRule]:
    """Merge config.yaml overrides onto the default rules"""
    rules = dict(DEFAULT_RULES)
    for name, values in (overrides or {}).items():
        values = values or {}
        base = rules.get(name) or RateLimitRule(name=name, max_requests=100, window_seconds=900)
        rules[name] = RateLimitRule(
            name=name,
            max_requests=int(values.get("max_requests", base.max_requests)),
            window_seconds=int(values.get("window_seconds", base.window_seconds)),
            key_by=str(values.get("key", base.key_by)),
            message=str(values.get("message", base.message)),
        )
    return rules


def rate_limit_key(rule: RateLimitRule, ctx: RequestContext, address: str) -> str:
    """
    Counter key for a request.

    address strategy: "rl:<rule>:<tenant>:<address>" or "rl:<rule>:<address>"
    identity strategy: "rl:<rule>:user:<user id>" when authenticated
    """
    if rule.key_by == "identity" and ctx.identity is not None:
        return f"rl:{rule.name}:user:{ctx.identity.user_id}"
    if ctx.tenant_id:
        return f"rl:{rule.name}:{ctx.tenant_id}:{address}"
    return f"rl:{rule.name}:{address}"


class RateLimiter:
    def __init__(self, counters: CounterStore):
        self.counters = counters

    async def check(self, rule: RateLimitRule, ctx: RequestContext, address: str) -> RateLimitStatus:
        """
        Count the request and raise once the window is exhausted.

        Raises:
            RateLimitExceeded: count went past max_requests in this window
        """
        key = rate_limit_key(rule, ctx, address)
        allowed, remaining, reset_in = await self.counters.hit(
            key, rule.max_requests, rule.window_seconds
        )
        if not allowed:
            raise RateLimitExceeded(rule.message, retry_after=reset_in, limit=rule.max_requests)
        return RateLimitStatus(
            limit=rule.max_requests,
            remaining=remaining,
            reset_in=reset_in,
        )
