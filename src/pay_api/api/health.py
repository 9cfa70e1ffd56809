"""Health check API endpoint."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from loguru import logger

from pay_api.database import borrow_db_session, is_healthy
from pay_api.models.api_model import HealthResponse

router = APIRouter(tags=["System"])


@router.get("/health", response_model=HealthResponse, responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthResponse}})
def health() -> HealthResponse | JSONResponse:
    """
    Health check endpoint.

    Returns:
        HealthResponse: The database connection status, with 503 when it is unusable.
    """
    logger.debug("Health check requested")

    try:
        with borrow_db_session() as session:
            db_info = is_healthy(session)
    except Exception as e:  # noqa: BLE001
        db_info = {"status": "unhealthy", "error": str(e), "connection": "failed"}

    response = HealthResponse(**db_info)
    if response.status != "healthy":
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=response.model_dump())
    return response
