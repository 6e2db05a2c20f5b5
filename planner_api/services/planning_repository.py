### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Planning Repository -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Planning Repository

Organization-scoped data access for stage planner events and technical teams.
Every query filters on the caller's organization id. Dependent rows
(event assignments, team members) are deleted explicitly in the same
transaction as their parent; there are no ORM cascades.
"""

from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from planner_api.errors import BadRequest, ResourceNotFound
from planner_api.models import (
    Event,
    EventAssignment,
    EventStatus,
    TeamMember,
    TechnicalTeam,
    User,
)


class PlanningRepository:
    """Repository for events and technical teams of one organization"""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ========================================
    # Events
    # ========================================

    async def list_events(
        self,
        organization_id: str,
        status: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Event], int]:
        query = select(Event).where(Event.organization_id == organization_id)
        if status:
            query = query.where(Event.status == status)

        total = await self.db.scalar(select(func.count()).select_from(query.subquery()))

        result = await self.db.execute(
            query.order_by(Event.start_date.asc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return list(result.scalars().all()), total or 0

    async def get_event(self, organization_id: str, event_id: str) -> Event:
        result = await self.db.execute(
            select(Event)
            .where(Event.id == event_id, Event.organization_id == organization_id)
            .options(selectinload(Event.assignments))
            .execution_options(populate_existing=True)
        )
        event = result.scalar_one_or_none()
        if event is None:
            raise ResourceNotFound("Event not found.")
        return event

    async def create_event(self, organization_id: str, created_by_id: str, data: dict) -> Event:
        _check_dates(data.get("start_date"), data.get("end_date"))
        event = Event(
            organization_id=organization_id,
            created_by_id=created_by_id,
            status=EventStatus.DRAFT.value,
            **data,
        )
        self.db.add(event)
        await self.db.commit()
        return await self.get_event(organization_id, event.id)

    async def update_event(self, organization_id: str, event_id: str, data: dict) -> Event:
        event = await self.get_event(organization_id, event_id)
        for field, value in data.items():
            setattr(event, field, value)
        _check_dates(event.start_date, event.end_date)
        await self.db.commit()
        return await self.get_event(organization_id, event_id)

    async def set_event_status(self, organization_id: str, event_id: str, status: EventStatus) -> Event:
        event = await self.get_event(organization_id, event_id)
        if event.status == EventStatus.CANCELLED.value and status == EventStatus.PUBLISHED:
            raise BadRequest("A cancelled event cannot be published.")
        event.status = status.value
        await self.db.commit()
        return await self.get_event(organization_id, event_id)

    async def delete_event(self, organization_id: str, event_id: str) -> None:
        """Delete an event and its assignments in one transaction"""
        event = await self.get_event(organization_id, event_id)
        await self.db.execute(delete(EventAssignment).where(EventAssignment.event_id == event.id))
        await self.db.execute(delete(Event).where(Event.id == event.id))
        await self.db.commit()

    # ========================================
    # Technical Teams
    # ========================================

    async def list_teams(self, organization_id: str) -> list[TechnicalTeam]:
        result = await self.db.execute(
            select(TechnicalTeam)
            .where(TechnicalTeam.organization_id == organization_id)
            .options(selectinload(TechnicalTeam.members))
            .order_by(TechnicalTeam.name.asc())
        )
        return list(result.scalars().all())

    async def get_team(self, organization_id: str, team_id: str) -> TechnicalTeam:
        result = await self.db.execute(
            select(TechnicalTeam)
            .where(TechnicalTeam.id == team_id, TechnicalTeam.organization_id == organization_id)
            .options(selectinload(TechnicalTeam.members))
            .execution_options(populate_existing=True)
        )
        team = result.scalar_one_or_none()
        if team is None:
            raise ResourceNotFound("Technical team not found.")
        return team

    async def create_team(self, organization_id: str, data: dict) -> TechnicalTeam:
        team = TechnicalTeam(organization_id=organization_id, **data)
        self.db.add(team)
        await self.db.commit()
        return await self.get_team(organization_id, team.id)

    async def delete_team(self, organization_id: str, team_id: str) -> None:
        """Delete a team and its members in one transaction"""
        team = await self.get_team(organization_id, team_id)
        await self.db.execute(delete(TeamMember).where(TeamMember.team_id == team.id))
        await self.db.execute(delete(TechnicalTeam).where(TechnicalTeam.id == team.id))
        await self.db.commit()

    async def add_team_member(
        self, organization_id: str, team_id: str, user_id: str, role: str | None = None
    ) -> TechnicalTeam:
        team = await self.get_team(organization_id, team_id)

        member_org = await self.db.scalar(select(User.organization_id).where(User.id == user_id))
        if member_org != organization_id:
            raise ResourceNotFound("User not found.")

        if any(m.user_id == user_id for m in team.members):
            raise BadRequest("User is already a member of this team.")

        self.db.add(TeamMember(team_id=team.id, user_id=user_id, role=role))
        await self.db.commit()
        return await self.get_team(organization_id, team_id)

    async def remove_team_member(self, organization_id: str, team_id: str, user_id: str) -> TechnicalTeam:
        team = await self.get_team(organization_id, team_id)
        result = await self.db.execute(
            delete(TeamMember).where(TeamMember.team_id == team.id, TeamMember.user_id == user_id)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise ResourceNotFound("Team member not found.")
        await self.db.commit()
        return await self.get_team(organization_id, team_id)


def _check_dates(start: datetime | None, end: datetime | None) -> None:
    if start is not None and end is not None and end < start:
        raise BadRequest("Event end date must be after its start date.")
