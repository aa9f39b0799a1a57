"""
Planner endpoints.
"""

from fastapi import APIRouter, status

from app.api.deps import DbSession
from app.schemas.event import PlannerCreate, PlannerResponse
from app.services.event import EventService


router = APIRouter()


@router.post(
    "",
    response_model=PlannerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a planner",
)
async def create_planner(
    data: PlannerCreate,
    db: DbSession,
) -> PlannerResponse:
    planner = await EventService(db).create_planner(data)
    return PlannerResponse.model_validate(planner)


@router.get(
    "",
    response_model=list[PlannerResponse],
    summary="List planners",
)
async def list_planners(db: DbSession) -> list[PlannerResponse]:
    planners = await EventService(db).list_planners()
    return [PlannerResponse.model_validate(p) for p in planners]


@router.get(
    "/{planner_id}",
    response_model=PlannerResponse,
    summary="Get a planner",
)
async def get_planner(
    planner_id: int,
    db: DbSession,
) -> PlannerResponse:
    planner = await EventService(db).get_planner_or_404(planner_id)
    return PlannerResponse.model_validate(planner)
