# backend/app/api/v1/endpoints/goals.py
from backend.app.api.crud import build_owned_router
from backend.app.models.goal import Goal
from backend.app.schemas.goal import GoalCreate, GoalResponse, GoalUpdate

router = build_owned_router(
    model=Goal,
    create_schema=GoalCreate,
    update_schema=GoalUpdate,
    response_schema=GoalResponse,
    entity="Goal",
    action="GOAL",
    label="Goal",
)
