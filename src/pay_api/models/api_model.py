"""API models for the pay API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from pay_api.constants import FIELD_DATE_FORMAT_MESSAGE
from pay_api.models.base_model import PatientBase, TransactionBase, TransactionStatus
from pay_api.utils.dates import is_ddmmyyyy


class PatientResponse(PatientBase):
    id: UUID


class TransactionInput(TransactionBase):
    """A fully built transaction, ready to be written to the store."""

    id: UUID
    patient_id: UUID
    status: TransactionStatus
    record_type: str
    date_of_birth: str


class TransactionResponse(TransactionBase):
    id: UUID
    patient_id: UUID
    status: TransactionStatus
    record_type: str
    date_of_birth: str
    created_at: datetime


class PayTransactionRequest(BaseModel):
    """Inbound command to pay a transaction for a patient."""

    patient_id: UUID
    date_of_birth: str = Field(min_length=1, examples=["15-03-1990"])
    record_type: str = Field(min_length=1, examples=["NEW"])

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v: str) -> str:
        """Require the DD-MM-YYYY layout."""
        if not is_ddmmyyyy(v):
            raise PydanticCustomError("ddmmyyyy", FIELD_DATE_FORMAT_MESSAGE)
        return v


class FieldError(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    errors: list[FieldError]


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    connection: str
    error: str | None = None


__all__ = [
    "ErrorResponse",
    "FieldError",
    "HealthResponse",
    "PatientResponse",
    "PayTransactionRequest",
    "TransactionInput",
    "TransactionResponse",
    "ValidationErrorResponse",
]

