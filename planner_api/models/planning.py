### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Planning Models -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Planning Models

Stage planner data owned by an organization:
- Event: a scheduled stage event
- EventAssignment: a crew member assigned to an event
- TechnicalTeam / TeamMember: technical crews and their members
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from planner_api.database import Base
from planner_api.models.tenant import new_id


class EventStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    CANCELLED = "CANCELLED"


class EventType(str, Enum):
    STAGE_EVENT = "STAGE_EVENT"


class AssignmentStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=new_id)
    organization_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    event_type = Column(String(30), nullable=False, default=EventType.STAGE_EVENT.value)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(200), nullable=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False, default=EventStatus.DRAFT.value)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    assignments = relationship("EventAssignment", back_populates="event")

    def __repr__(self):
        return f"<Event(id={self.id}, title='{self.title}', status='{self.status}')>"


class EventAssignment(Base):
    __tablename__ = "event_assignments"

    id = Column(String(36), primary_key=True, default=new_id)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    role = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default=AssignmentStatus.PENDING.value)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    event = relationship("Event", back_populates="assignments")

    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_event_assignments_event_user"),)


class TechnicalTeam(Base):
    __tablename__ = "technical_teams"

    id = Column(String(36), primary_key=True, default=new_id)
    organization_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    team_type = Column(String(50), nullable=True)  # e.g. "SOUND", "LIGHT", "RIGGING"
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    members = relationship("TeamMember", back_populates="team")

    def __repr__(self):
        return f"<TechnicalTeam(id={self.id}, name='{self.name}')>"


class TeamMember(Base):
    __tablename__ = "team_members"

    id = Column(String(36), primary_key=True, default=new_id)
    team_id = Column(String(36), ForeignKey("technical_teams.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    role = Column(String(100), nullable=True)
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    team = relationship("TechnicalTeam", back_populates="members")

    __table_args__ = (UniqueConstraint("team_id", "user_id", name="uq_team_members_team_user"),)
