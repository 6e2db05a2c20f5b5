### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Authorization Gate -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Authorization Gate

Route-declared checks over an already hydrated request context:
- check_permission: identity holds an exact permission name
- check_module: tenant has an active activation row for the module

Neither check resolves tenants or loads identities.
"""

from enum import Enum

from planner_api.context import RequestContext
from planner_api.errors import Forbidden, ModuleNotEnabled, TenantRequired, Unauthenticated
from planner_api.services.credential_store import CredentialStore


def check_permission(ctx: RequestContext, permission: str) -> None:
    """
    Raises:
        Unauthenticated: no identity attached
        Forbidden: identity lacks the permission
    """
    if ctx.identity is None:
        raise Unauthenticated()
    if not ctx.identity.has_permission(permission):
        raise Forbidden(permission)


class AuthorizationGate:
    """Permission and module checks; the module check needs the store"""

    def __init__(self, store: CredentialStore):
        self.store = store

    def check_permission(self, ctx: RequestContext, permission: str) -> None:
        check_permission(ctx, permission)

    async def check_module(self, ctx: RequestContext, module: str | Enum) -> None:
        """
        Raises:
            TenantRequired: no tenant attached
            ModuleNotEnabled: no active activation for (tenant, module)
        """
        module_name = module.value if isinstance(module, Enum) else str(module)
        if ctx.tenant_id is None:
            raise TenantRequired()
        if not await self.store.is_module_active(ctx.tenant_id, module_name):
            raise ModuleNotEnabled(module_name)
