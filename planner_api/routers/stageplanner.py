### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Stage Planner Router -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Stage Planner API Endpoints

Provides endpoints for managing:
- Events: CRUD plus publish/cancel
- Technical Teams: CRUD plus member management

Every endpoint requires an authenticated user on a servable tenant with the
'stage' module active; each endpoint also declares its own permission.
Data is scoped to the caller's organization.
"""

from fastapi import APIRouter, Depends, Query, status

from planner_api.context import RequestContext
from planner_api.dependencies import get_planning_repository
from planner_api.errors import NotImplementedYet
from planner_api.middleware import require_module, require_permission
from planner_api.models import EventStatus, ModuleType
from planner_api.schemas.responses import APIResponse, PaginatedResponse, PaginationMeta
from planner_api.schemas.stageplanner import (
    EventCreate,
    EventDetailResponse,
    EventResponse,
    EventUpdate,
    TeamCreate,
    TeamMemberCreate,
    TeamResponse,
)
from planner_api.services import PlanningRepository

router = APIRouter(dependencies=[Depends(require_module(ModuleType.STAGE))])


# ========================================
# Event Endpoints
# ========================================

@router.get(
    "/events",
    response_model=PaginatedResponse[EventResponse],
    summary="List events",
    description="List stage events of the caller's organization",
)
async def list_events(
    ctx: RequestContext = Depends(require_permission("read:event")),
    repo: PlanningRepository = Depends(get_planning_repository),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    event_status: EventStatus | None = Query(None, alias="status", description="Filter by status"),
) -> PaginatedResponse[EventResponse]:
    events, total = await repo.list_events(
        ctx.organization_id,
        status=event_status.value if event_status else None,
        page=page,
        page_size=page_size,
    )
    return PaginatedResponse(
        status="success",
        data=[EventResponse.model_validate(e) for e in events],
        pagination=PaginationMeta.build(page, page_size, total),
    )


@router.post(
    "/events",
    response_model=APIResponse[EventDetailResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create event",
)
async def create_event(
    data: EventCreate,
    ctx: RequestContext = Depends(require_permission("create:event")),
    repo: PlanningRepository = Depends(get_planning_repository),
) -> APIResponse[EventDetailResponse]:
    event = await repo.create_event(ctx.organization_id, ctx.identity.user_id, data.model_dump())
    return APIResponse(
        status="success",
        message="Event created successfully",
        data=EventDetailResponse.model_validate(event),
    )


@router.get(
    "/events/{event_id}",
    response_model=APIResponse[EventDetailResponse],
    summary="Get event",
)
async def get_event(
    event_id: str,
    ctx: RequestContext = Depends(require_permission("read:event")),
    repo: PlanningRepository = Depends(get_planning_repository),
) -> APIResponse[EventDetailResponse]:
    event = await repo.get_event(ctx.organization_id, event_id)
    return APIResponse(status="success", data=EventDetailResponse.model_validate(event))


@router.patch(
    "/events/{event_id}",
    response_model=APIResponse[EventDetailResponse],
    summary="Update event",
)
async def update_event(
    event_id: str,
    data: EventUpdate,
    ctx: RequestContext = Depends(require_permission("update:event")),
    repo: PlanningRepository = Depends(get_planning_repository),
) -> APIResponse[EventDetailResponse]:
    event = await repo.update_event(
        ctx.organization_id, event_id, data.model_dump(exclude_unset=True)
    )
    return APIResponse(
        status="success",
        message="Event updated successfully",
        data=EventDetailResponse.model_validate(event),
    )


@router.delete(
    "/events/{event_id}",
    response_model=APIResponse[None],
    summary="Delete event",
    description="Delete an event and its crew assignments",
)
async def delete_event(
    event_id: str,
    ctx: RequestContext = Depends(require_permission("delete:event")),
    repo: PlanningRepository = Depends(get_planning_repository),
) -> APIResponse[None]:
    await repo.delete_event(ctx.organization_id, event_id)
    return APIResponse(status="success", message="Event deleted successfully")


@router.post(
    "/events/{event_id}/publish",
    response_model=APIResponse[EventDetailResponse],
    summary="Publish event",
)
async def publish_event(
    event_id: str,
    ctx: RequestContext = Depends(require_permission("update:event")),
    repo: PlanningRepository = Depends(get_planning_repository),
) -> APIResponse[EventDetailResponse]:
    event = await repo.set_event_status(ctx.organization_id, event_id, EventStatus.PUBLISHED)
    return APIResponse(
        status="success",
        message="Event published",
        data=EventDetailResponse.model_validate(event),
    )


@router.post(
    "/events/{event_id}/cancel",
    response_model=APIResponse[EventDetailResponse],
    summary="Cancel event",
)
async def cancel_event(
    event_id: str,
    ctx: RequestContext = Depends(require_permission("update:event")),
    repo: PlanningRepository = Depends(get_planning_repository),
) -> APIResponse[EventDetailResponse]:
    event = await repo.set_event_status(ctx.organization_id, event_id, EventStatus.CANCELLED)
    return APIResponse(
        status="success",
        message="Event cancelled",
        data=EventDetailResponse.model_validate(event),
    )


# ========================================
# Technical Team Endpoints
# ========================================

@router.get(
    "/teams",
    response_model=APIResponse[list[TeamResponse]],
    summary="List technical teams",
)
async def list_teams(
    ctx: RequestContext = Depends(require_permission("read:team")),
    repo: PlanningRepository = Depends(get_planning_repository),
) -> APIResponse[list[TeamResponse]]:
    teams = await repo.list_teams(ctx.organization_id)
    return APIResponse(status="success", data=[TeamResponse.model_validate(t) for t in teams])


@router.post(
    "/teams",
    response_model=APIResponse[TeamResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create technical team",
)
async def create_team(
    data: TeamCreate,
    ctx: RequestContext = Depends(require_permission("create:team")),
    repo: PlanningRepository = Depends(get_planning_repository),
) -> APIResponse[TeamResponse]:
    team = await repo.create_team(ctx.organization_id, data.model_dump())
    return APIResponse(
        status="success",
        message="Technical team created successfully",
        data=TeamResponse.model_validate(team),
    )


@router.get(
    "/teams/{team_id}",
    response_model=APIResponse[TeamResponse],
    summary="Get technical team",
)
async def get_team(
    team_id: str,
    ctx: RequestContext = Depends(require_permission("read:team")),
    repo: PlanningRepository = Depends(get_planning_repository),
) -> APIResponse[TeamResponse]:
    team = await repo.get_team(ctx.organization_id, team_id)
    return APIResponse(status="success", data=TeamResponse.model_validate(team))


@router.delete(
    "/teams/{team_id}",
    response_model=APIResponse[None],
    summary="Delete technical team",
    description="Delete a team and its memberships",
)
async def delete_team(
    team_id: str,
    ctx: RequestContext = Depends(require_permission("delete:team")),
    repo: PlanningRepository = Depends(get_planning_repository),
) -> APIResponse[None]:
    await repo.delete_team(ctx.organization_id, team_id)
    return APIResponse(status="success", message="Technical team deleted successfully")


@router.post(
    "/teams/{team_id}/members",
    response_model=APIResponse[TeamResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add team member",
)
async def add_team_member(
    team_id: str,
    data: TeamMemberCreate,
    ctx: RequestContext = Depends(require_permission("update:team")),
    repo: PlanningRepository = Depends(get_planning_repository),
) -> APIResponse[TeamResponse]:
    team = await repo.add_team_member(ctx.organization_id, team_id, data.user_id, data.role)
    return APIResponse(
        status="success",
        message="Member added",
        data=TeamResponse.model_validate(team),
    )


@router.delete(
    "/teams/{team_id}/members/{user_id}",
    response_model=APIResponse[TeamResponse],
    summary="Remove team member",
)
async def remove_team_member(
    team_id: str,
    user_id: str,
    ctx: RequestContext = Depends(require_permission("update:team")),
    repo: PlanningRepository = Depends(get_planning_repository),
) -> APIResponse[TeamResponse]:
    team = await repo.remove_team_member(ctx.organization_id, team_id, user_id)
    return APIResponse(
        status="success",
        message="Member removed",
        data=TeamResponse.model_validate(team),
    )


# ========================================
# Reporting (not implemented)
# ========================================

@router.get("/statistics", summary="Event statistics (not implemented)")
async def get_statistics(ctx: RequestContext = Depends(require_permission("read:statistics"))):
    raise NotImplementedYet("Statistics are not implemented yet.")


@router.get("/events/{event_id}/export", summary="Export event (not implemented)")
async def export_event(
    event_id: str,
    ctx: RequestContext = Depends(require_permission("export:event")),
):
    raise NotImplementedYet("Event export is not implemented yet.")
