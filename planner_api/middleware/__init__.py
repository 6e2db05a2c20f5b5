### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - API Middleware Package -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
API Middleware Package

Contains middleware for request processing:
- auth: tenant resolution, credential verification and route gates
- logging: Request/response logging
- rate_limit: Per-route rate limiting
"""

from .auth import (
    authenticated_context,
    require_module,
    require_permission,
    required_tenant_context,
    tenant_context,
    tenant_scoped_context,
)
from .logging import RequestLoggingMiddleware
from .rate_limit import enforce_rate_limit

__all__ = [
    "RequestLoggingMiddleware",
    "authenticated_context",
    "enforce_rate_limit",
    "require_module",
    "require_permission",
    "required_tenant_context",
    "tenant_context",
    "tenant_scoped_context",
]
