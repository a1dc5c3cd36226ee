# backend/app/api/v1/endpoints/scheduled_payments.py
from backend.app.api.crud import build_owned_router
from backend.app.models.scheduled_payment import ScheduledPayment
from backend.app.schemas.scheduled_payment import (
    ScheduledPaymentCreate,
    ScheduledPaymentResponse,
    ScheduledPaymentUpdate,
)

router = build_owned_router(
    model=ScheduledPayment,
    create_schema=ScheduledPaymentCreate,
    update_schema=ScheduledPaymentUpdate,
    response_schema=ScheduledPaymentResponse,
    entity="ScheduledPayment",
    action="SCHEDULED_PAYMENT",
    label="Scheduled payment",
    # Next payment due first
    order_by=ScheduledPayment.next_date.asc(),
)
