# backend/app/api/v1/router.py
from fastapi import APIRouter
from backend.app.api.v1.endpoints import (
    activity_logs,
    auth,
    budgets,
    goals,
    loans,
    scheduled_payments,
    subscriptions,
    transactions,
    users,
)

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
api_router.include_router(budgets.router, prefix="/budgets", tags=["budgets"])
api_router.include_router(goals.router, prefix="/goals", tags=["goals"])
api_router.include_router(loans.router, prefix="/loans", tags=["loans"])
api_router.include_router(subscriptions.router, prefix="/subscriptions", tags=["subscriptions"])
api_router.include_router(
    scheduled_payments.router, prefix="/scheduled-payments", tags=["scheduled-payments"]
)
api_router.include_router(activity_logs.router, prefix="/activity-logs", tags=["activity"])
