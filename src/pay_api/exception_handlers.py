"""Global exception handlers for the FastAPI application.

This module contains custom exception handlers that convert
application exceptions into proper HTTP responses.
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from pay_api.constants import FIELD_DATE_FORMAT_MESSAGE, FIELD_JSON_MESSAGE, FIELD_REQUIRED_MESSAGE, FIELD_UUID_MESSAGE
from pay_api.models.api_model import FieldError, ValidationErrorResponse

_MESSAGES_BY_ERROR_TYPE = {
    "missing": FIELD_REQUIRED_MESSAGE,
    "string_too_short": FIELD_REQUIRED_MESSAGE,
    "ddmmyyyy": FIELD_DATE_FORMAT_MESSAGE,
    "uuid_parsing": FIELD_UUID_MESSAGE,
    "uuid_type": FIELD_UUID_MESSAGE,
    "json_invalid": FIELD_JSON_MESSAGE,
}


def _field_name(error: dict[str, Any]) -> str:
    """Return the JSON key an error points at, or ``body`` for the body itself."""
    if error["type"] == "json_invalid":
        return "body"
    loc = error.get("loc", ())
    parts = [str(part) for part in loc if part != "body"]
    return ".".join(parts) or "body"


def format_validation_errors(errors: list[dict[str, Any]]) -> list[FieldError]:
    """Convert pydantic error dicts into field/message pairs.

    Args:
        errors: Errors as returned by ``RequestValidationError.errors()``

    Returns:
        One FieldError per reported problem, in the order pydantic reported them
    """
    return [
        FieldError(
            field=_field_name(error),
            message=_MESSAGES_BY_ERROR_TYPE.get(error["type"], f"Validation failed on {error['type']}"),
        )
        for error in errors
    ]


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request body problems as a 400 with a list of field errors."""
    field_errors = format_validation_errors(list(exc.errors()))
    logger.debug(f"Rejected request to {request.url.path}: {len(field_errors)} validation error(s)")
    body = ValidationErrorResponse(errors=field_errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)  # type: ignore[arg-type]
    logger.debug("Registered exception handlers")
