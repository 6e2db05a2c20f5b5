### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Authentication Service -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Authentication Service

Login, logout and password change flows on top of the credential store,
token codec and counter store.
"""

from dataclasses import dataclass
from datetime import datetime

from planner_api.context import LoginRecord, RequestContext
from planner_api.errors import InvalidCredentials, TenantRequired, Unauthenticated
from planner_api.models import hash_password, verify_password
from planner_api.services.counter_store import CounterStore
from planner_api.services.credential_store import CredentialStore
from planner_api.services.token_codec import TokenCodec
from planner_api.utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LoginResult:
    access_token: str
    expires_in: int
    user: LoginRecord


class AuthService:
    def __init__(self, store: CredentialStore, codec: TokenCodec, counters: CounterStore):
        self.store = store
        self.codec = codec
        self.counters = counters

    async def login(self, ctx: RequestContext, email: str, password: str) -> LoginResult:
        """
        Authenticate an email/password pair within the resolved tenant.

        The same InvalidCredentials error is raised for unknown emails and
        wrong passwords. A wrong password increments the failure counter;
        success resets it and records the login time.
        """
        if not ctx.tenant_validated or ctx.tenant_id is None:
            raise TenantRequired()

        user = await self.store.find_login_user(ctx.tenant_id, email)
        if user is None:
            logger.info(f"Login failed: unknown email on tenant {ctx.tenant_id}")
            raise InvalidCredentials()

        if not verify_password(password, user.password_hash):
            await self.store.increment_login_attempts(user.id)
            logger.info(f"Login failed: wrong password for user {user.id}")
            raise InvalidCredentials()

        await self.store.record_successful_login(user.id, datetime.utcnow())

        token = self.codec.issue(
            user_id=user.id,
            email=user.email,
            organization_id=user.organization_id,
            tenant_id=ctx.tenant_id,
            token_version=user.token_version,
        )
        logger.info(f"User {user.id} logged in on tenant {ctx.tenant_id}")
        return LoginResult(access_token=token, expires_in=self.codec.expiry_seconds, user=user)

    async def logout(self, ctx: RequestContext) -> None:
        """Blacklist the presented credential for its remaining validity"""
        if ctx.token is None or ctx.token_payload is None:
            raise Unauthenticated()
        ttl = self.codec.remaining_seconds(ctx.token_payload)
        await self.counters.revoke_token(ctx.token, ttl)
        logger.info(f"User {ctx.token_payload.user_id} logged out")

    async def logout_all(self, ctx: RequestContext) -> int:
        """Invalidate every credential of the caller by bumping the token version"""
        if ctx.identity is None:
            raise Unauthenticated()
        version = await self.store.increment_token_version(ctx.identity.user_id)
        logger.info(f"User {ctx.identity.user_id} logged out of all sessions (v{version})")
        return version

    async def change_password(self, ctx: RequestContext, current_password: str, new_password: str) -> int:
        """Verify the current password, store the new one and revoke old credentials"""
        if ctx.identity is None:
            raise Unauthenticated()
        current_hash = await self.store.get_password_hash(ctx.identity.user_id)
        if current_hash is None or not verify_password(current_password, current_hash):
            raise InvalidCredentials("Current password is incorrect.")
        version = await self.store.update_password(ctx.identity.user_id, hash_password(new_password))
        logger.info(f"User {ctx.identity.user_id} changed password (v{version})")
        return version

    async def is_subdomain_available(self, subdomain: str) -> bool:
        return not await self.store.is_subdomain_taken(subdomain)
