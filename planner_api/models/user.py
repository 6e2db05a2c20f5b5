### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - User Models -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
User Models

Stores users with:
- Hashed password (bcrypt)
- Status (only ACTIVE users can authenticate)
- Login failure counter and last login timestamp
- Token version (bumped to invalidate every issued credential)
"""

from datetime import datetime
from enum import Enum

import bcrypt as _bcrypt
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from planner_api.database import Base
from planner_api.models.tenant import new_id


def hash_password(plaintext: str) -> str:
    """Hash a password using bcrypt"""
    return _bcrypt.hashpw(plaintext.encode(), _bcrypt.gensalt()).decode()


def verify_password(plaintext: str, hashed: str) -> bool:
    """Verify a plaintext password against a hash"""
    try:
        return _bcrypt.checkpw(plaintext.encode(), hashed.encode())
    except ValueError:
        # Corrupt or non-bcrypt hash
        return False


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"
    SUSPENDED = "SUSPENDED"


class User(Base):
    """
    User model - belongs to exactly one organization (and so one tenant).

    Email is unique within the organization.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    organization_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default=UserStatus.PENDING.value)
    email_verified = Column(Boolean, default=False, nullable=False)

    # Authentication tracking
    login_attempts = Column(Integer, default=0, nullable=False)
    last_login_at = Column(DateTime, nullable=True)
    token_version = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    organization = relationship("Organization", back_populates="users")
    profile = relationship("Profile", back_populates="user", uselist=False)
    role_assignments = relationship("RoleAssignment", back_populates="user")

    __table_args__ = (
        UniqueConstraint("organization_id", "email", name="uq_users_organization_email"),
    )

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', status='{self.status}')>"

    def set_password(self, plaintext: str):
        self.password_hash = hash_password(plaintext)

    def check_password(self, plaintext: str) -> bool:
        return verify_password(plaintext, self.password_hash)


class Profile(Base):
    """Optional display attributes of a user (1:1)"""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, unique=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    avatar_url = Column(String(500), nullable=True)

    user = relationship("User", back_populates="profile")

    def __repr__(self):
        return f"<Profile(user_id={self.user_id})>"
