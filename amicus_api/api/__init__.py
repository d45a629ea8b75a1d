"""
API Router
"""

from fastapi import APIRouter
from . import subscriptions

router = APIRouter()

router.include_router(subscriptions.router)
