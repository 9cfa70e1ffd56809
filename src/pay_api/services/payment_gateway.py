"""External payment authorization.

The workflow only depends on the ``PaymentGateway`` protocol: given the
patient, their age and the record type, the provider either authorizes the
payment or declines it. ``SimulatedPaymentGateway`` stands in for the real
provider until one is integrated.
"""

import secrets
from functools import lru_cache
from typing import Protocol

from loguru import logger
from pydantic import BaseModel

from pay_api.models.api_model import PatientResponse
from pay_api.settings import Settings, get_settings


class PaymentAuthorizationRequest(BaseModel):
    """Payload submitted to the payment provider."""

    patient: PatientResponse
    age: int
    record_type: str


class PaymentGateway(Protocol):
    """Capability to authorize a payment with an external provider."""

    def authorize(self, request: PaymentAuthorizationRequest) -> bool:
        """Return True if the provider accepted the payment."""
        ...


class SimulatedPaymentGateway:
    """Payment gateway that approves or declines with equal probability."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def authorize(self, request: PaymentAuthorizationRequest) -> bool:
        logger.info(
            "Gateway: submitting payment for patient {} (age={}, record_type={}, api_key={})",
            request.patient.id,
            request.age,
            request.record_type,
            "configured" if self.settings.payment_api_key else "missing",
        )
        approved = secrets.randbelow(2) == 1
        logger.debug(f"Gateway: provider {'approved' if approved else 'declined'} payment for patient {request.patient.id}")
        return approved


@lru_cache
def get_payment_gateway() -> PaymentGateway:
    """Get the payment gateway singleton using global settings."""
    return SimulatedPaymentGateway(get_settings())
