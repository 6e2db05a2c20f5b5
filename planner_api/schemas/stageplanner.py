### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Stage Planner Schemas -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Stage Planner Schemas

Pydantic models for stage events and technical teams.
"""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, field_validator


def _to_naive_utc(v: datetime) -> datetime:
    """Store and compare event dates as naive UTC (offsets are converted, then dropped)"""
    if v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


# Accepts "2030-01-01T20:00:00", "...Z" or "...+02:00" and yields naive UTC
UtcDatetime = Annotated[datetime, AfterValidator(_to_naive_utc)]

# ========================================
# Event Schemas
# ========================================

class EventCreate(BaseModel):
    """Create a new stage event"""
    title: str = Field(..., min_length=1, max_length=200, description="Event title")
    description: str | None = Field(None, max_length=5000)
    location: str | None = Field(None, max_length=200)
    start_date: UtcDatetime
    end_date: UtcDatetime


class EventUpdate(BaseModel):
    """Update event fields (omitted fields are left unchanged)"""
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    location: str | None = Field(None, max_length=200)
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None

    @field_validator("title", "start_date", "end_date")
    @classmethod
    def reject_null(cls, v):
        """Required columns may be omitted but not cleared"""
        if v is None:
            raise ValueError("Field may not be null")
        return v


class EventAssignmentResponse(BaseModel):
    id: str
    user_id: str
    role: str | None = None
    status: str

    class Config:
        from_attributes = True


class EventResponse(BaseModel):
    """Stage event"""
    id: str
    organization_id: str
    event_type: str
    title: str
    description: str | None = None
    location: str | None = None
    start_date: datetime
    end_date: datetime
    status: str
    created_by_id: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class EventDetailResponse(EventResponse):
    assignments: list[EventAssignmentResponse] = Field(default_factory=list)


# ========================================
# Technical Team Schemas
# ========================================

class TeamCreate(BaseModel):
    """Create a technical team"""
    name: str = Field(..., min_length=1, max_length=150, description="Team name")
    team_type: str | None = Field(None, max_length=50, description="e.g. SOUND, LIGHT")
    description: str | None = Field(None, max_length=2000)


class TeamMemberCreate(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=36)
    role: str | None = Field(None, max_length=100)


class TeamMemberResponse(BaseModel):
    id: str
    user_id: str
    role: str | None = None
    joined_at: datetime

    class Config:
        from_attributes = True


class TeamResponse(BaseModel):
    """Technical team with members"""
    id: str
    organization_id: str
    name: str
    team_type: str | None = None
    description: str | None = None
    created_at: datetime
    members: list[TeamMemberResponse] = Field(default_factory=list)

    class Config:
        from_attributes = True
