### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Error Taxonomy -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Error Taxonomy

Every failure in the request pipeline is raised as a PlannerError subclass.
Each class carries the HTTP status it maps to; main.py turns them into the
standard {status: "error", message} envelope.

Families:
- TenantError: tenant resolution (400/403/404)
- CredentialError: signed token transport and verification (401)
- IdentityError: identity hydration (401/403)
- AuthorizationError: permission and module gates (401/403)
- RateLimitExceeded: throttling (429)
- StoreError: credential/counter store failures (500, detail redacted)
"""


class PlannerError(Exception):
    """Base class for all errors raised by the request pipeline"""

    status_code: int = 500
    # Messages of safe errors are returned to the client verbatim
    safe: bool = True
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


# ========================================
# Tenant Errors
# ========================================

class TenantError(PlannerError):
    """Tenant could not be resolved or is not servable"""

    status_code = 403


class TenantRequired(TenantError):
    status_code = 400
    default_message = (
        "Tenant required. Provide a valid subdomain or an X-Tenant-Id header."
    )


class TenantNotFound(TenantError):
    status_code = 404
    default_message = "Tenant not found."


class TenantInactive(TenantError):
    status_code = 403

    def __init__(self, status: str):
        self.tenant_status = status
        super().__init__(
            f"Access for this tenant is currently {status}. Please contact support."
        )


class SubscriptionExpired(TenantError):
    status_code = 403
    default_message = "The subscription for this tenant has expired. Please renew your subscription."


# ========================================
# Credential Errors
# ========================================

class CredentialError(PlannerError):
    """Bearer credential missing or failed verification"""

    status_code = 401

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class MissingCredential(CredentialError):
    default_message = "Unauthorized. Missing or malformed bearer token."


class MalformedCredential(CredentialError):
    default_message = "Invalid token."


class SignatureInvalid(CredentialError):
    default_message = "Invalid token."


class CredentialExpired(CredentialError):
    default_message = "Token expired."


# ========================================
# Identity Errors
# ========================================

class IdentityError(PlannerError):
    """Verified credential could not be turned into a usable identity"""

    status_code = 401

    @property
    def headers(self) -> dict[str, str] | None:
        if self.status_code == 401:
            return {"WWW-Authenticate": "Bearer"}
        return None


class UserNotFound(IdentityError):
    default_message = "User not found for this token."


class TokenRevoked(IdentityError):
    default_message = "Token has been revoked. Please log in again."


class AccountNotActive(IdentityError):
    status_code = 403

    def __init__(self, status: str):
        self.account_status = status
        super().__init__(f"User account is {status}. Access denied.")


class OrganizationMismatch(IdentityError):
    default_message = "Token organization no longer matches the user. Please log in again."


class TenantMismatch(IdentityError):
    status_code = 403
    default_message = "This token is not valid for the requested tenant."


class InvalidCredentials(IdentityError):
    """Generic login failure - never reveals whether the email exists"""

    default_message = "Incorrect email or password."


# ========================================
# Authorization Errors
# ========================================

class AuthorizationError(PlannerError):
    status_code = 403


class Unauthenticated(AuthorizationError):
    status_code = 401
    default_message = "User not authenticated for permission check."


class Forbidden(AuthorizationError):
    def __init__(self, permission: str):
        self.permission = permission
        super().__init__(f"Access denied. Missing permission '{permission}'.")


class ModuleNotEnabled(AuthorizationError):
    def __init__(self, module: str):
        self.module = module
        super().__init__(
            f"Access denied. The module '{module}' is not enabled for your organization."
        )


# ========================================
# Rate Limiting
# ========================================

class RateLimitExceeded(PlannerError):
    status_code = 429
    default_message = "Too many requests. Please try again later."

    def __init__(
        self,
        message: str | None = None,
        retry_after: int = 60,
        limit: int | None = None,
    ):
        self.retry_after = max(1, int(retry_after))
        self.limit = limit
        super().__init__(message)

    @property
    def headers(self) -> dict[str, str] | None:
        headers = {
            "Retry-After": str(self.retry_after),
            "RateLimit-Remaining": "0",
            "RateLimit-Reset": str(self.retry_after),
        }
        if self.limit is not None:
            headers["RateLimit-Limit"] = str(self.limit)
        return headers


# ========================================
# Store Errors
# ========================================

class StoreError(PlannerError):
    """Credential or counter store unreachable, timed out, or failed"""

    status_code = 500
    safe = False
    default_message = "Internal error while contacting a backing store."


# ========================================
# Generic API Errors
# ========================================

class ResourceNotFound(PlannerError):
    status_code = 404
    default_message = "Resource not found."


class NotImplementedYet(PlannerError):
    status_code = 501
    default_message = "Not implemented."


class BadRequest(PlannerError):
    status_code = 400
    default_message = "Bad request."
