### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Authentication Router -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Authentication API Endpoints

Provides endpoints for:
- Login (tenant required, rate limited)
- Logout of one session (token blacklist) or of all sessions (token version bump)
- Current identity and password change
- Subdomain availability

Invitation, email verification, password reset, token refresh, tenant
registration and device endpoints are declared but not implemented (501).
"""

from fastapi import APIRouter, Depends, Path

from planner_api.context import RequestContext
from planner_api.dependencies import get_auth_service
from planner_api.errors import NotImplementedYet
from planner_api.middleware import (
    authenticated_context,
    enforce_rate_limit,
    required_tenant_context,
    tenant_scoped_context,
)
from planner_api.schemas.auth import (
    ChangePasswordRequest,
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    LoginUser,
    OrganizationSummary,
    RoleSummary,
    SubdomainAvailability,
    TenantSummary,
)
from planner_api.schemas.responses import APIResponse
from planner_api.services import AuthService

router = APIRouter(dependencies=[Depends(enforce_rate_limit("auth_default"))])


# ========================================
# Session Endpoints
# ========================================

@router.post(
    "/login",
    response_model=APIResponse[LoginResponse],
    summary="Log in",
    description="Authenticate with email and password within the resolved tenant",
    dependencies=[Depends(enforce_rate_limit("login"))],
)
async def login(
    data: LoginRequest,
    ctx: RequestContext = Depends(required_tenant_context),
    auth: AuthService = Depends(get_auth_service),
) -> APIResponse[LoginResponse]:
    """Log in and receive a bearer token"""
    result = await auth.login(ctx, data.email, data.password)
    user = result.user
    return APIResponse(
        status="success",
        message="Login successful",
        data=LoginResponse(
            access_token=result.access_token,
            token_type="bearer",
            expires_in=result.expires_in,
            user=LoginUser(
                id=user.id,
                email=user.email,
                email_verified=user.email_verified,
                first_name=user.first_name,
                last_name=user.last_name,
            ),
        ),
    )


@router.post(
    "/logout",
    response_model=APIResponse[None],
    summary="Log out",
    description="Revoke the presented token",
)
async def logout(
    ctx: RequestContext = Depends(authenticated_context),
    auth: AuthService = Depends(get_auth_service),
) -> APIResponse[None]:
    await auth.logout(ctx)
    return APIResponse(status="success", message="Logged out successfully")


@router.post(
    "/logout-all",
    response_model=APIResponse[None],
    summary="Log out everywhere",
    description="Invalidate every token issued to the current user",
)
async def logout_all(
    ctx: RequestContext = Depends(authenticated_context),
    auth: AuthService = Depends(get_auth_service),
) -> APIResponse[None]:
    await auth.logout_all(ctx)
    return APIResponse(status="success", message="Logged out of all sessions")


@router.get(
    "/me",
    response_model=APIResponse[CurrentUserResponse],
    summary="Current user",
    description="Current identity with roles and effective permissions",
)
async def me(
    ctx: RequestContext = Depends(tenant_scoped_context),
) -> APIResponse[CurrentUserResponse]:
    user = ctx.identity.user
    profile = user.profile
    return APIResponse(
        status="success",
        data=CurrentUserResponse(
            id=user.id,
            email=user.email,
            status=user.status,
            email_verified=user.email_verified,
            first_name=profile.first_name if profile else None,
            last_name=profile.last_name if profile else None,
            avatar_url=profile.avatar_url if profile else None,
            organization=(
                OrganizationSummary(id=user.organization.id, name=user.organization.name)
                if user.organization
                else None
            ),
            tenant=(
                TenantSummary(
                    id=ctx.tenant.id,
                    subdomain=ctx.tenant.subdomain,
                    name=ctx.tenant.name,
                    status=ctx.tenant.status,
                )
                if ctx.tenant
                else None
            ),
            roles=[RoleSummary(id=role.id, name=role.name) for role in user.roles],
            permissions=sorted(ctx.permissions),
        ),
    )


@router.post(
    "/change-password",
    response_model=APIResponse[None],
    summary="Change password",
    description="Change the password and invalidate all existing tokens",
)
async def change_password(
    data: ChangePasswordRequest,
    ctx: RequestContext = Depends(authenticated_context),
    auth: AuthService = Depends(get_auth_service),
) -> APIResponse[None]:
    await auth.change_password(ctx, data.current_password, data.new_password)
    return APIResponse(
        status="success",
        message="Password changed successfully. Please log in again.",
    )


@router.get(
    "/validate-subdomain/{subdomain}",
    response_model=APIResponse[SubdomainAvailability],
    summary="Check subdomain",
    description="Check whether a subdomain is free for a new tenant",
)
async def validate_subdomain(
    subdomain: str = Path(..., min_length=3, max_length=63, pattern=r"^[a-z0-9](?:[a-z0-9-]*[a-z0-9])?$"),
    auth: AuthService = Depends(get_auth_service),
) -> APIResponse[SubdomainAvailability]:
    available = await auth.is_subdomain_available(subdomain)
    return APIResponse(
        status="success",
        message="Subdomain is available" if available else "Subdomain is already taken",
        data=SubdomainAvailability(subdomain=subdomain, available=available),
    )


# ========================================
# Not Implemented
# ========================================

def _not_implemented(feature: str):
    raise NotImplementedYet(f"{feature} is not implemented yet.")


@router.post("/register", summary="Register by invitation (not implemented)")
async def register_by_invitation():
    _not_implemented("Registration by invitation")


@router.post("/invitations", summary="Send invitation (not implemented)")
async def send_invitation(ctx: RequestContext = Depends(tenant_scoped_context)):
    _not_implemented("Sending invitations")


@router.post("/verify-email", summary="Verify email (not implemented)")
async def verify_email():
    _not_implemented("Email verification")


@router.post("/resend-verification", summary="Resend verification (not implemented)")
async def resend_verification():
    _not_implemented("Resending verification")


@router.post(
    "/forgot-password",
    summary="Request password reset (not implemented)",
    dependencies=[Depends(enforce_rate_limit("password_reset"))],
)
async def forgot_password():
    _not_implemented("Password reset")


@router.post("/reset-password", summary="Reset password (not implemented)")
async def reset_password():
    _not_implemented("Password reset")


@router.post("/refresh-token", summary="Refresh token (not implemented)")
async def refresh_token():
    _not_implemented("Token refresh")


@router.post(
    "/register-tenant",
    summary="Register tenant (not implemented)",
    dependencies=[Depends(enforce_rate_limit("tenant_registration"))],
)
async def register_tenant():
    _not_implemented("Tenant registration")


@router.post("/devices", summary="Register device (not implemented)")
async def register_device(ctx: RequestContext = Depends(authenticated_context)):
    _not_implemented("Device registration")


@router.delete("/devices/{device_id}", summary="Unregister device (not implemented)")
async def unregister_device(device_id: str, ctx: RequestContext = Depends(authenticated_context)):
    _not_implemented("Device unregistration")
