# backend/app/api/v1/endpoints/budgets.py
from backend.app.api.crud import build_owned_router
from backend.app.models.budget import Budget
from backend.app.schemas.budget import BudgetCreate, BudgetResponse, BudgetUpdate

router = build_owned_router(
    model=Budget,
    create_schema=BudgetCreate,
    update_schema=BudgetUpdate,
    response_schema=BudgetResponse,
    entity="Budget",
    action="BUDGET",
    label="Budget",
)
