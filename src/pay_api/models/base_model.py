from enum import StrEnum
from typing import Any
from uuid import UUID

from sqlalchemy import JSON
from sqlmodel import Field, SQLModel


class TransactionStatus(StrEnum):
    """Final status of a pay transaction."""

    SUCCESS = "success"
    FAILED = "failed"


class PatientBase(SQLModel):
    """Base model for a patient."""

    id: UUID | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None


class TransactionBase(SQLModel):
    """Base model for a pay transaction."""

    id: UUID | None = None
    patient_id: UUID | None = None
    status: TransactionStatus | None = None
    api_response: dict[str, Any] = Field(sa_type=JSON, default_factory=dict)
    record_type: str | None = None
    date_of_birth: str | None = None
