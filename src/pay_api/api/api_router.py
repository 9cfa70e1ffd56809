"""API router initialization."""

from fastapi import APIRouter
from loguru import logger

from pay_api.api.transactions import router as transactions_router

# Create main API router
router = APIRouter()

router.include_router(transactions_router, tags=["transactions"])

logger.debug("API router initialized (transactions router mounted)")
