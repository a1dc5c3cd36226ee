from backend.app.models.user import User, UserRole
from backend.app.models.activity_log import ActivityLog
from backend.app.models.transaction import Transaction
from backend.app.models.budget import Budget
from backend.app.models.goal import Goal
from backend.app.models.loan import Loan
from backend.app.models.subscription import Subscription
from backend.app.models.scheduled_payment import ScheduledPayment

# Tables whose rows belong to a single user and go with the account
OWNED_MODELS = (Transaction, Budget, Goal, Loan, Subscription, ScheduledPayment)

__all__ = [
    "User",
    "UserRole",
    "ActivityLog",
    "Transaction",
    "Budget",
    "Goal",
    "Loan",
    "Subscription",
    "ScheduledPayment",
    "OWNED_MODELS",
]
