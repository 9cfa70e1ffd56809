from datetime import datetime
from uuid import UUID, uuid4

import arrow
from sqlalchemy import DateTime
from sqlmodel import Field

from pay_api.models.base_model import PatientBase, TransactionBase


def _utcnow() -> datetime:
    return arrow.utcnow().datetime


class Patient(PatientBase, table=True):
    """Patient model."""

    __tablename__ = "patients"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=_utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=_utcnow, sa_type=DateTime(timezone=True))


class Transaction(TransactionBase, table=True):
    """Pay transaction model.

    Rows are written once and never updated.
    """

    __tablename__ = "transactions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    patient_id: UUID = Field(foreign_key="patients.id", index=True)
    # Stored as plain text so the column stays portable across databases
    status: str = Field(max_length=20)
    record_type: str
    date_of_birth: str = Field(max_length=10)
    created_at: datetime = Field(default_factory=_utcnow, sa_type=DateTime(timezone=True))
