"""Subscription request/response schemas and request validation."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class SubscriptionType(str, Enum):
    EMAIL = "email"
    SMS = "sms"
    BOTH = "both"


SUBSCRIPTION_TYPES: list[str] = [t.value for t in SubscriptionType]

# Matched with fullmatch so a trailing newline cannot slip past an end anchor.
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"\+?[0-9\s()-]+")

IDENTIFIER_REQUIRED_MESSAGE = "Email or Phone Number is required."
INVALID_TYPE_MESSAGE = (
    'Invalid or missing subscription_type. Must be "email", "sms", or "both".'
)
INVALID_EMAIL_MESSAGE = "Invalid email format."
INVALID_PHONE_MESSAGE = "Invalid phone number format."


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class SubscriptionRequest(BaseModel):
    """Inbound subscription body.

    Fields are deliberately loose; ``validate_subscription`` applies the
    ordered checks so each failure gets its own message.
    """
    email: Optional[str] = None
    phone_number: Optional[str] = None
    subscription_type: Optional[str] = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class SubscriptionResponse(BaseModel):
    success: bool = True
    message: str
    data: List[Dict[str, Any]]


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    details: Optional[str] = None


class HealthResponse(BaseModel):
    message: str


def validate_subscription(req: SubscriptionRequest) -> tuple[bool, str]:
    """Validate a subscription request.

    Checks run in order and the first failure wins:
    - at least one of email / phone_number
    - subscription_type is one of email, sms, both
    - email shape
    - phone number characters

    Empty strings count as absent. Returns (is_valid, error_message).
    """
    if not req.email and not req.phone_number:
        return False, IDENTIFIER_REQUIRED_MESSAGE

    if not req.subscription_type or req.subscription_type not in SUBSCRIPTION_TYPES:
        return False, INVALID_TYPE_MESSAGE

    if req.email and not EMAIL_PATTERN.fullmatch(req.email):
        return False, INVALID_EMAIL_MESSAGE

    if req.phone_number and not PHONE_PATTERN.fullmatch(req.phone_number):
        return False, INVALID_PHONE_MESSAGE

    return True, ""


def build_record(req: SubscriptionRequest) -> dict[str, Any]:
    """Row to insert for an already validated request. Absent identifiers are omitted."""
    record: dict[str, Any] = {"subscription_type": SubscriptionType(req.subscription_type).value}
    if req.email:
        record["email"] = req.email
    if req.phone_number:
        record["phone_number"] = req.phone_number
    record["is_active"] = True
    return record
