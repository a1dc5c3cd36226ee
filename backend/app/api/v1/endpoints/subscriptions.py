# backend/app/api/v1/endpoints/subscriptions.py
from backend.app.api.crud import build_owned_router
from backend.app.models.subscription import Subscription
from backend.app.schemas.subscription import SubscriptionCreate, SubscriptionResponse, SubscriptionUpdate

router = build_owned_router(
    model=Subscription,
    create_schema=SubscriptionCreate,
    update_schema=SubscriptionUpdate,
    response_schema=SubscriptionResponse,
    entity="Subscription",
    action="SUBSCRIPTION",
    label="Subscription",
    order_by=Subscription.next_billing.asc(),
)
