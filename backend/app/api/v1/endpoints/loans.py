# backend/app/api/v1/endpoints/loans.py
from backend.app.api.crud import build_owned_router
from backend.app.models.loan import Loan
from backend.app.schemas.loan import LoanCreate, LoanResponse, LoanUpdate

router = build_owned_router(
    model=Loan,
    create_schema=LoanCreate,
    update_schema=LoanUpdate,
    response_schema=LoanResponse,
    entity="Loan",
    action="LOAN",
    label="Loan",
)
