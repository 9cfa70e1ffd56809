"""End-to-end tests for the pay transaction endpoint."""

from unittest import mock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlmodel import select

from pay_api.app import app
from pay_api.exceptions import TransactionStoreError
from pay_api.models.db_model import Transaction
from pay_api.services.patient_service import PatientService, get_patient_service
from pay_api.services.transaction_repository import TransactionRepository

URL = "/api/patients/pay-transaction"


class FailingTransactionRepository(TransactionRepository):
    def create_transaction(self, session, transaction):
        raise TransactionStoreError("transaction not created")


@pytest.fixture
def service(approving_gateway, today) -> PatientService:
    return PatientService(payment_gateway=approving_gateway, today_provider=lambda: today)


@pytest.fixture
def client(borrowed_session, service):
    app.dependency_overrides[get_patient_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_pay_transaction_success(client, session, patient):
    response = client.post(URL, json={"patient_id": str(patient.id), "date_of_birth": "12-12-2000", "record_type": "NEW"})

    assert response.status_code == 200
    body = response.json()
    assert body["patient_id"] == str(patient.id)
    assert body["status"] == "success"
    assert body["api_response"] == {"message": "Transaction success"}
    assert body["record_type"] == "NEW"
    assert body["date_of_birth"] == "12-12-2000"
    assert set(body) == {"id", "patient_id", "status", "api_response", "record_type", "date_of_birth", "created_at"}

    stored = session.exec(select(Transaction)).all()
    assert [str(t.id) for t in stored] == [body["id"]]


def test_pay_transaction_declined(client, session, patient, approving_gateway):
    approving_gateway.approve = False

    response = client.post(URL, json={"patient_id": str(patient.id), "date_of_birth": "12-12-2000", "record_type": "NEW"})

    assert response.status_code == 200
    assert response.json()["status"] == "failed"
    assert response.json()["api_response"] == {"error": "Transaction failed"}


def test_under_age_is_recorded(client, session, patient):
    response = client.post(URL, json={"patient_id": str(patient.id), "date_of_birth": "17-10-2016", "record_type": "NEW"})

    assert response.status_code == 200
    assert response.json()["status"] == "failed"
    assert response.json()["api_response"] == {"error": "Patient must be more than 18 years old"}
    assert len(session.exec(select(Transaction)).all()) == 1


def test_wrong_record_type_is_recorded(client, session, patient):
    response = client.post(URL, json={"patient_id": str(patient.id), "date_of_birth": "12-12-2000", "record_type": "new"})

    assert response.status_code == 200
    assert response.json()["status"] == "failed"
    assert response.json()["api_response"] == {"error": "Record type must be NEW"}
    assert response.json()["record_type"] == "new"


def test_unknown_patient(client, session, patient):
    missing_id = uuid4()

    response = client.post(URL, json={"patient_id": str(missing_id), "date_of_birth": "12-12-2000", "record_type": "NEW"})

    assert response.status_code == 404
    assert response.json() == {"error": f"Patient not found: {missing_id}"}
    assert session.exec(select(Transaction)).all() == []


def test_storage_failure(borrowed_session, patient, approving_gateway, today):
    service = PatientService(
        transaction_repository=FailingTransactionRepository(),
        payment_gateway=approving_gateway,
        today_provider=lambda: today,
    )
    app.dependency_overrides[get_patient_service] = lambda: service
    try:
        response = TestClient(app).post(URL, json={"patient_id": str(patient.id), "date_of_birth": "12-12-2000", "record_type": "NEW"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "transaction not created"}


class TestFieldValidation:
    """Malformed bodies are rejected before the workflow runs."""

    def _errors(self, response) -> dict[str, str]:
        assert response.status_code == 400
        return {error["field"]: error["message"] for error in response.json()["errors"]}

    def test_missing_fields(self, client):
        errors = self._errors(client.post(URL, json={}))

        assert errors == {
            "patient_id": "This field is required",
            "date_of_birth": "This field is required",
            "record_type": "This field is required",
        }

    def test_iso_date_rejected(self, client, patient):
        response = client.post(URL, json={"patient_id": str(patient.id), "date_of_birth": "1990-03-15", "record_type": "NEW"})

        assert self._errors(response) == {"date_of_birth": "Date must be in DD-MM-YYYY format"}

    def test_impossible_date_rejected(self, client, patient):
        response = client.post(URL, json={"patient_id": str(patient.id), "date_of_birth": "31-02-1990", "record_type": "NEW"})

        assert self._errors(response) == {"date_of_birth": "Date must be in DD-MM-YYYY format"}

    def test_malformed_patient_id(self, client):
        response = client.post(URL, json={"patient_id": "abc", "date_of_birth": "12-12-2000", "record_type": "NEW"})

        assert self._errors(response) == {"patient_id": "Must be a valid UUID"}

    def test_empty_strings_are_missing(self, client, patient):
        response = client.post(URL, json={"patient_id": str(patient.id), "date_of_birth": "", "record_type": ""})

        assert self._errors(response) == {
            "date_of_birth": "This field is required",
            "record_type": "This field is required",
        }

    def test_invalid_json(self, client):
        response = client.post(URL, content=b"{not json", headers={"content-type": "application/json"})

        assert self._errors(response) == {"body": "Request body must be valid JSON"}

    def test_nothing_is_stored(self, client, session):
        client.post(URL, json={"patient_id": "abc"})

        assert session.exec(select(Transaction)).all() == []


class TestValidationWithoutDatabase:
    """Field errors are reported even when no database is reachable."""

    @pytest.fixture
    def unreachable_database(self):
        with mock.patch("pay_api.api.transactions.borrow_db_session", side_effect=AssertionError("database was opened")) as borrow:
            yield borrow

    def test_malformed_body_is_rejected_before_database(self, unreachable_database):
        response = TestClient(app).post(URL, json={"patient_id": "abc", "date_of_birth": "1990-03-15", "record_type": ""})

        assert response.status_code == 400
        errors = {error["field"]: error["message"] for error in response.json()["errors"]}
        assert errors == {
            "patient_id": "Must be a valid UUID",
            "date_of_birth": "Date must be in DD-MM-YYYY format",
            "record_type": "This field is required",
        }
        unreachable_database.assert_not_called()

    def test_unconfigured_database_still_reports_field_errors(self, monkeypatch):
        monkeypatch.delenv("PAY_API_DATABASE_URL", raising=False)

        response = TestClient(app).post(URL, json={})

        assert response.status_code == 400
        assert {error["field"] for error in response.json()["errors"]} == {"patient_id", "date_of_birth", "record_type"}
