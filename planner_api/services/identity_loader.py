### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Identity Loader -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Identity Loader

Turns a verified credential payload into a fully hydrated identity.

Gates, in order (first failure wins):
1. User exists
2. Credential token version equals the stored token version
3. User status is ACTIVE
4. Permission set is the union over all assigned roles
5. Tenant from the credential is used only when none was resolved earlier;
   whichever tenant is used must be the user's tenant
6. Credential organization differing from the stored organization is logged
   (stored value wins) or rejected when strict checking is enabled

Permissions are recomputed on every request and never cached.
"""

from collections.abc import Iterable

from planner_api.context import Identity, RequestContext, RoleRecord, TokenPayload
from planner_api.errors import (
    AccountNotActive,
    OrganizationMismatch,
    TenantMismatch,
    TokenRevoked,
    UserNotFound,
)
from planner_api.models import UserStatus
from planner_api.services.credential_store import CredentialStore
from planner_api.utils import get_logger

logger = get_logger(__name__)


def effective_permissions(roles: Iterable[RoleRecord]) -> frozenset[str]:
    """Union of permission names across roles (duplicates collapse)"""
    permissions: set[str] = set()
    for role in roles:
        permissions.update(role.permissions)
    return frozenset(permissions)


class IdentityLoader:
    """
    Args:
        store: CredentialStore used to load the user
        strict_organization_check: Reject (instead of log) credentials whose
            organization no longer matches the user
    """

    def __init__(self, store: CredentialStore, strict_organization_check: bool = False):
        self.store = store
        self.strict_organization_check = strict_organization_check

    async def load(self, ctx: RequestContext, payload: TokenPayload) -> RequestContext:
        user = await self.store.get_user(payload.user_id)
        if user is None:
            raise UserNotFound()

        if payload.token_version != user.token_version:
            logger.info(
                f"Revoked credential for user {user.id} "
                f"(token v{payload.token_version}, current v{user.token_version})"
            )
            raise TokenRevoked()

        if user.status != UserStatus.ACTIVE.value:
            raise AccountNotActive(user.status)

        permissions = effective_permissions(user.roles)

        # Resolved tenant first, credential tenant otherwise; either must be the user's
        tenant_id = ctx.tenant_id if ctx.tenant_id is not None else payload.tenant_id
        if user.tenant_id is not None and tenant_id != user.tenant_id:
            logger.warning(
                f"User {user.id} of tenant {user.tenant_id} presented a credential "
                f"on tenant {tenant_id}"
            )
            raise TenantMismatch()

        if payload.organization_id != user.organization_id:
            if self.strict_organization_check:
                logger.warning(
                    f"Organization mismatch for user {user.id}: token "
                    f"{payload.organization_id}, stored {user.organization_id} (rejected)"
                )
                raise OrganizationMismatch()
            logger.warning(
                f"Organization mismatch for user {user.id}: token "
                f"{payload.organization_id}, stored {user.organization_id} (using stored)"
            )

        return ctx.evolve(
            identity=Identity(user=user, permissions=permissions),
            organization_id=user.organization_id,
            tenant_id=tenant_id,
            token_payload=payload,
        )
