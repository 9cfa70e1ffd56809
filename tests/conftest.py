"""Shared fixtures for the pay API tests."""

from collections.abc import Generator
from datetime import date

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from pay_api.models.api_model import PatientResponse
from pay_api.models.db_model import Patient
from pay_api.services.payment_gateway import PaymentAuthorizationRequest

# Fixed reference date used wherever age matters
TODAY = date(2026, 10, 17)


class FixedPaymentGateway:
    """Payment gateway double that always returns the same decision."""

    def __init__(self, approve: bool = True):
        self.approve = approve
        self.requests: list[PaymentAuthorizationRequest] = []

    def authorize(self, request: PaymentAuthorizationRequest) -> bool:
        self.requests.append(request)
        return self.approve


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by every connection of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Generator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def patient(session: Session) -> PatientResponse:
    """A stored patient."""
    model = Patient(
        name="John Doe",
        email="john.doe@example.com",
        phone="123-456-7890",
        address="123 Main St",
        city="Anytown",
        state="State",
        zip="12345",
    )
    session.add(model)
    session.commit()
    session.refresh(model)
    return PatientResponse.model_validate(model, from_attributes=True)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def approving_gateway() -> FixedPaymentGateway:
    return FixedPaymentGateway(approve=True)


@pytest.fixture
def declining_gateway() -> FixedPaymentGateway:
    return FixedPaymentGateway(approve=False)
