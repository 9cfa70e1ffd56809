"""Outcome of the pay transaction workflow.

A workflow run either records a transaction (whose status may still be
``failed`` when a business rule rejects it) or is rejected before anything
can be returned to the caller.
"""

from enum import StrEnum

from pydantic import BaseModel

from pay_api.models.api_model import TransactionResponse


class ErrorKind(StrEnum):
    """Why a workflow run was rejected."""

    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    STORAGE = "storage"


class Recorded(BaseModel):
    """A transaction was persisted and is returned to the caller."""

    transaction: TransactionResponse


class Rejected(BaseModel):
    """A precondition or storage failure; no transaction is returned."""

    kind: ErrorKind
    message: str


Outcome = Recorded | Rejected
