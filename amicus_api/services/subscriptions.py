"""
Subscription service: validate, insert, and translate the store's answer.
"""

from __future__ import annotations

from typing import Any

import structlog

from amicus_api.core.errors import UNEXPECTED_ERROR_MESSAGE, ServiceError
from amicus_api.core.store import RowStore, RowStoreError
from amicus_api.schemas.subscriptions import (
    SubscriptionRequest,
    build_record,
    validate_subscription,
)

log = structlog.get_logger()

DUPLICATE_MESSAGE = "This email or phone number is already subscribed."
DATABASE_ERROR_MESSAGE = "Failed to subscribe due to a database error."


async def create_subscription(
    req: SubscriptionRequest, store: RowStore
) -> list[dict[str, Any]]:
    """Insert one active subscription. Returns the inserted row(s)."""
    valid, msg = validate_subscription(req)
    if not valid:
        raise ServiceError(400, msg)

    record = build_record(req)

    try:
        rows = await store.insert(record)
    except RowStoreError as exc:
        if exc.is_unique_violation:
            log.info(
                "subscription.duplicate",
                subscription_type=record["subscription_type"],
            )
            raise ServiceError(409, DUPLICATE_MESSAGE) from exc
        log.error(
            "subscription.store_error",
            code=exc.code,
            error=exc.message,
            details=exc.details,
            hint=exc.hint,
        )
        raise ServiceError(500, DATABASE_ERROR_MESSAGE, details=exc.message) from exc
    except Exception as exc:
        log.exception("subscription.unexpected_error", error=str(exc))
        raise ServiceError(500, UNEXPECTED_ERROR_MESSAGE) from exc

    log.info(
        "subscription.created",
        subscription_type=record["subscription_type"],
        rows=len(rows),
        ids=[row.get("id") for row in rows if "id" in row],
    )
    return rows
