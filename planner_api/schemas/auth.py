### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Authentication Schemas -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Authentication Schemas

Pydantic models for login, session and account endpoints.
"""

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class LoginRequest(BaseModel):
    """Login credentials"""
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN, description="Account email")
    password: str = Field(..., min_length=1, max_length=128, description="Account password")


class LoginUser(BaseModel):
    """Minimal user summary returned at login"""
    id: str
    email: str
    email_verified: bool = False
    first_name: str | None = None
    last_name: str | None = None


class LoginResponse(BaseModel):
    """Issued credential"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Seconds until the token expires")
    user: LoginUser


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=8, max_length=128)


class RoleSummary(BaseModel):
    id: str
    name: str


class OrganizationSummary(BaseModel):
    id: str
    name: str


class TenantSummary(BaseModel):
    id: str
    subdomain: str
    name: str
    status: str


class CurrentUserResponse(BaseModel):
    """Current identity with roles and effective permissions"""
    id: str
    email: str
    status: str
    email_verified: bool
    first_name: str | None = None
    last_name: str | None = None
    avatar_url: str | None = None
    organization: OrganizationSummary | None = None
    tenant: TenantSummary | None = None
    roles: list[RoleSummary] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)


class SubdomainAvailability(BaseModel):
    subdomain: str
    available: bool
