"""
Subscription endpoints.

POST /subscribe — Register an email and/or phone number for updates
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from amicus_api.core.store import RowStore, get_row_store
from amicus_api.schemas.subscriptions import (
    ErrorResponse,
    SubscriptionRequest,
    SubscriptionResponse,
)
from amicus_api.services import subscriptions as subscription_service

router = APIRouter()

SUCCESS_MESSAGE = "Subscription successful!"


@router.post(
    "/subscribe",
    response_model=SubscriptionResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    tags=["Subscriptions"],
)
async def subscribe(
    body: Optional[SubscriptionRequest] = None,
    store: RowStore = Depends(get_row_store),
):
    """Validate the request and record an active subscription."""
    rows = await subscription_service.create_subscription(
        body or SubscriptionRequest(), store
    )
    return SubscriptionResponse(message=SUCCESS_MESSAGE, data=rows)
