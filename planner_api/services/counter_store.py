### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Counter Store -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Counter Store

Shared fixed-window counters (rate limiting) and the credential revocation
list (token blacklist).

Counting goes through the `limits` fixed-window strategy, backed by Redis when
PLANNER_REDIS_URL is set and by limits' in-process MemoryStorage otherwise.
Counter failures degrade to the in-process storage so a Redis outage never
blocks traffic. Blacklist reads against a configured but unreachable Redis
fail closed with StoreError.
"""

import asyncio
import hashlib
import math
import time
from threading import Lock

import redis.asyncio as aioredis
from limits import RateLimitItemPerSecond
from limits.aio.storage import MemoryStorage, RedisStorage, Storage
from limits.aio.strategies import FixedWindowRateLimiter
from limits.errors import StorageError
from redis.exceptions import RedisError

from planner_api.errors import StoreError
from planner_api.utils import get_logger

logger = get_logger(__name__)

# Failures that send the counter to its in-process fallback
BACKEND_ERRORS = (RedisError, StorageError, asyncio.TimeoutError, OSError)


def token_digest(token: str) -> str:
    """Blacklist key for a raw token (the token itself is never stored)"""
    return hashlib.sha256(token.encode()).hexdigest()


class MemoryBlacklist:
    """In-process revocation list with per-entry expiry"""

    def __init__(self):
        self._revoked: dict[str, float] = {}
        self._lock = Lock()

    def revoke(self, digest: str, ttl_seconds: int) -> None:
        with self._lock:
            self._revoked[digest] = time.monotonic() + ttl_seconds

    def is_revoked(self, digest: str) -> bool:
        now = time.monotonic()
        with self._lock:
            expires_at = self._revoked.get(digest)
            if expires_at is None:
                return False
            if expires_at <= now:
                del self._revoked[digest]
                return False
            return True


class CounterStore:
    """
    Counter service used by the rate limiter and the logout flow.

    Args:
        client: redis.asyncio client for the blacklist (None = in-process only)
        key_prefix: Namespace prepended to every Redis key
        timeout: Seconds allowed per Redis round trip
        limiter_storage: limits storage for the counters (default: Redis
            storage sharing the client's connection pool, or MemoryStorage)
    """

    def __init__(
        self,
        client: aioredis.Redis | None = None,
        key_prefix: str = "planner-suite:",
        timeout: float = 1.0,
        limiter_storage: Storage | None = None,
    ):
        self.client = client
        self.key_prefix = key_prefix
        self.timeout = timeout
        self.blacklist = MemoryBlacklist()

        self.memory_storage = MemoryStorage()
        self.fallback = FixedWindowRateLimiter(self.memory_storage)

        if limiter_storage is None and client is not None:
            limiter_storage = RedisStorage(
                "async+redis://",
                implementation="redispy",
                key_prefix=f"{key_prefix}limits",
                wrap_exceptions=True,
                connection_pool=client.connection_pool,
            )
        self.storage = limiter_storage or self.memory_storage
        self.limiter = (
            self.fallback
            if self.storage is self.memory_storage
            else FixedWindowRateLimiter(self.storage)
        )

    @classmethod
    def from_url(
        cls,
        redis_url: str | None,
        key_prefix: str = "planner-suite:",
        timeout: float = 1.0,
    ) -> "CounterStore":
        """Build a store from a Redis URL (None or empty = in-process only)"""
        client = None
        if redis_url:
            client = aioredis.from_url(
                redis_url,
                decode_responses=True,
                socket_timeout=timeout,
                socket_connect_timeout=timeout,
            )
            logger.info("Counter store using Redis backend")
        else:
            logger.info("Counter store using in-process backend")
        return cls(client=client, key_prefix=key_prefix, timeout=timeout)

    @property
    def backend(self) -> str:
        return "redis" if self.client is not None else "memory"

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    # ========================================
    # Fixed-window counters
    # ========================================

    async def hit(self, key: str, max_requests: int, window_seconds: int) -> tuple[bool, int, int]:
        """
        Count one request against a fixed window of max_requests.

        Returns:
            (allowed, remaining in the window, seconds until the window resets)
        """
        item = RateLimitItemPerSecond(max_requests, window_seconds)
        if self.limiter is self.fallback:
            return await _consume(self.fallback, item, key)

        try:
            return await asyncio.wait_for(_consume(self.limiter, item, key), timeout=self.timeout)
        except BACKEND_ERRORS as e:
            logger.warning(f"Counter store unavailable, using in-process counter: {e!r}")
            return await _consume(self.fallback, item, key)

    # ========================================
    # Token blacklist
    # ========================================

    async def revoke_token(self, token: str, ttl_seconds: int) -> None:
        """Blacklist a raw token for its remaining validity"""
        if ttl_seconds <= 0:
            return
        digest = token_digest(token)
        if self.client is None:
            self.blacklist.revoke(digest, ttl_seconds)
            return

        try:
            await asyncio.wait_for(
                self.client.set(self._key(f"bl:{digest}"), "1", ex=ttl_seconds),
                timeout=self.timeout,
            )
        except BACKEND_ERRORS as e:
            logger.error(f"Failed to blacklist token: {e!r}")
            raise StoreError("Counter store failed while revoking token") from e

    async def is_token_revoked(self, token: str) -> bool:
        digest = token_digest(token)
        if self.client is None:
            return self.blacklist.is_revoked(digest)

        try:
            exists = await asyncio.wait_for(
                self.client.exists(self._key(f"bl:{digest}")), timeout=self.timeout
            )
        except BACKEND_ERRORS as e:
            logger.error(f"Failed to read token blacklist: {e!r}")
            raise StoreError("Counter store failed while checking token revocation") from e
        return bool(exists)

    # ========================================
    # Lifecycle
    # ========================================

    async def ping(self) -> bool:
        if self.client is None:
            return True
        try:
            return bool(await asyncio.wait_for(self.client.ping(), timeout=self.timeout))
        except BACKEND_ERRORS:
            return False

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()


async def _consume(
    limiter: FixedWindowRateLimiter, item: RateLimitItemPerSecond, key: str
) -> tuple[bool, int, int]:
    allowed = await limiter.hit(item, key)
    stats = await limiter.get_window_stats(item, key)
    reset_in = max(1, math.ceil(stats.reset_time - time.time()))
    return allowed, stats.remaining, reset_in
