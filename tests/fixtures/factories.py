"""
Factory functions for creating test model instances.

These factories create valid model instances with sensible defaults,
making it easy to set up test scenarios.
"""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from planner_api.models import (
    Event,
    EventAssignment,
    ModuleActivation,
    ModuleType,
    Organization,
    Permission,
    Profile,
    Role,
    RoleAssignment,
    TeamMember,
    TechnicalTeam,
    Tenant,
    TenantStatus,
    User,
    UserStatus,
    hash_password,
)

DEFAULT_PASSWORD = "CorrectHorse42!"

STAGE_PERMISSIONS = [
    "read:event",
    "create:event",
    "update:event",
    "delete:event",
    "read:team",
    "create:team",
    "update:team",
    "delete:team",
]

# bcrypt is slow - hash the default password once per test session
_DEFAULT_HASH: Optional[str] = None


def _password_hash(password: str) -> str:
    global _DEFAULT_HASH
    if password != DEFAULT_PASSWORD:
        return hash_password(password)
    if _DEFAULT_HASH is None:
        _DEFAULT_HASH = hash_password(DEFAULT_PASSWORD)
    return _DEFAULT_HASH


def create_tenant(
    db: Session,
    subdomain: str = "acme",
    name: Optional[str] = None,
    status: TenantStatus | str = TenantStatus.ACTIVE,
    subscription_end_date: Optional[datetime] = None,
) -> Tenant:
    """
    Create and persist a tenant for testing.

    Args:
        db: Database session
        subdomain: Unique subdomain
        name: Display name (default: derived from subdomain)
        status: Lifecycle status
        subscription_end_date: Optional subscription end (naive UTC)

    Returns:
        Created Tenant instance
    """
    tenant = Tenant(
        name=name or subdomain.title(),
        subdomain=subdomain,
        status=status.value if isinstance(status, TenantStatus) else status,
        subscription_end_date=subscription_end_date,
    )
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    return tenant


def create_organization(db: Session, tenant: Tenant, name: str = "Test Organization") -> Organization:
    organization = Organization(tenant_id=tenant.id, name=name)
    db.add(organization)
    db.commit()
    db.refresh(organization)
    return organization


def create_user(
    db: Session,
    organization: Organization,
    email: str = "user@example.com",
    password: str = DEFAULT_PASSWORD,
    status: UserStatus | str = UserStatus.ACTIVE,
    token_version: int = 0,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> User:
    """
    Create and persist a user (with a profile when names are given).

    Returns:
        Created User instance
    """
    user = User(
        organization_id=organization.id,
        email=email,
        password_hash=_password_hash(password),
        status=status.value if isinstance(status, UserStatus) else status,
        token_version=token_version,
        email_verified=True,
    )
    db.add(user)
    db.commit()

    if first_name or last_name:
        db.add(Profile(user_id=user.id, first_name=first_name, last_name=last_name))
        db.commit()

    db.refresh(user)
    return user


def create_role(
    db: Session,
    name: str = "Test Role",
    permissions: Optional[list[str]] = None,
    tenant: Optional[Tenant] = None,
) -> Role:
    """Create a role, creating any missing Permission rows by name"""
    role = Role(name=name, tenant_id=tenant.id if tenant else None)
    for permission_name in permissions or []:
        permission = db.query(Permission).filter(Permission.name == permission_name).first()
        if permission is None:
            permission = Permission(name=permission_name)
            db.add(permission)
        role.permissions.append(permission)
    db.add(role)
    db.commit()
    db.refresh(role)
    return role


def assign_role(db: Session, user: User, role: Role) -> RoleAssignment:
    assignment = RoleAssignment(user_id=user.id, role_id=role.id)
    db.add(assignment)
    db.commit()
    return assignment


def activate_module(
    db: Session,
    tenant: Tenant,
    module: ModuleType = ModuleType.STAGE,
    is_active: bool = True,
) -> ModuleActivation:
    activation = ModuleActivation(tenant_id=tenant.id, module_type=module.value, is_active=is_active)
    db.add(activation)
    db.commit()
    return activation


def create_event(
    db: Session,
    organization: Organization,
    title: str = "Main Stage Night",
    start_date: Optional[datetime] = None,
    duration_hours: int = 4,
) -> Event:
    start = start_date or datetime.utcnow() + timedelta(days=7)
    event = Event(
        organization_id=organization.id,
        title=title,
        start_date=start,
        end_date=start + timedelta(hours=duration_hours),
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def assign_to_event(db: Session, event: Event, user: User, role: str = "Sound") -> EventAssignment:
    assignment = EventAssignment(event_id=event.id, user_id=user.id, role=role)
    db.add(assignment)
    db.commit()
    return assignment


def create_team(db: Session, organization: Organization, name: str = "Sound Crew") -> TechnicalTeam:
    team = TechnicalTeam(organization_id=organization.id, name=name, team_type="SOUND")
    db.add(team)
    db.commit()
    db.refresh(team)
    return team


def add_team_member(db: Session, team: TechnicalTeam, user: User, role: str = "Engineer") -> TeamMember:
    member = TeamMember(team_id=team.id, user_id=user.id, role=role)
    db.add(member)
    db.commit()
    return member
