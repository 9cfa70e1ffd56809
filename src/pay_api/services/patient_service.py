"""Service for patient-related operations."""

from collections.abc import Callable
from datetime import date
from functools import lru_cache
from typing import Any
from uuid import uuid4

from loguru import logger
from sqlmodel import Session

from pay_api.constants import (
    ACCEPTED_RECORD_TYPE,
    DATE_OF_BIRTH_FORMAT_MESSAGE,
    MINIMUM_PATIENT_AGE,
    PATIENT_UNDERAGE_MESSAGE,
    RECORD_TYPE_MESSAGE,
    TRANSACTION_FAILED_MESSAGE,
    TRANSACTION_SUCCESS_MESSAGE,
)
from pay_api.exceptions import InvalidDateOfBirthError, PatientNotFoundError, TransactionStoreError
from pay_api.models.api_model import PayTransactionRequest, TransactionInput
from pay_api.models.base_model import TransactionStatus
from pay_api.models.outcome import ErrorKind, Outcome, Recorded, Rejected
from pay_api.services.patient_repository import PatientRepository, get_patient_repository
from pay_api.services.payment_gateway import PaymentAuthorizationRequest, PaymentGateway, get_payment_gateway
from pay_api.services.transaction_repository import TransactionRepository, get_transaction_repository
from pay_api.utils.dates import calculate_age, parse_ddmmyyyy, utc_today


class PatientService:
    """Service for patient-related operations.

    Collaborators are injected so tests can substitute fakes; the defaults
    are the process-wide singletons.
    """

    def __init__(
        self,
        patient_repository: PatientRepository | None = None,
        transaction_repository: TransactionRepository | None = None,
        payment_gateway: PaymentGateway | None = None,
        today_provider: Callable[[], date] = utc_today,
    ):
        """Initialize the patient service."""
        self.patient_repository = patient_repository or get_patient_repository()
        self.transaction_repository = transaction_repository or get_transaction_repository()
        self.payment_gateway = payment_gateway or get_payment_gateway()
        self.today_provider = today_provider

    def pay_transaction(self, session: Session, request: PayTransactionRequest) -> Outcome:
        """Validate a pay request, authorize it and record the result.

        The checks run in a fixed order. A missing patient or an unparsable
        date of birth rejects the request without writing anything. Every
        other path writes exactly one transaction: ``failed`` when the
        patient is under age or the record type is not ``NEW``, otherwise
        whatever the payment gateway decides.

        Args:
            session: Database session
            request: The validated pay transaction request

        Returns:
            Recorded with the stored transaction, or Rejected with the reason
        """
        logger.debug(f"Service: pay_transaction for patient_id={request.patient_id}, record_type={request.record_type!r}")

        try:
            patient = self.patient_repository.get_patient(session, request.patient_id)
        except PatientNotFoundError as e:
            logger.warning(f"Service: pay_transaction - {e}")
            return Rejected(kind=ErrorKind.NOT_FOUND, message=str(e))

        try:
            born = self._parse_date_of_birth(request.date_of_birth)
        except InvalidDateOfBirthError as e:
            logger.warning(f"Service: pay_transaction - {e}")
            return Rejected(kind=ErrorKind.INVALID_INPUT, message=DATE_OF_BIRTH_FORMAT_MESSAGE)

        age = calculate_age(born, self.today_provider())

        if age < MINIMUM_PATIENT_AGE:
            logger.debug(f"Service: pay_transaction - patient {patient.id} is {age}, below {MINIMUM_PATIENT_AGE}")
            return self._record(session, request, TransactionStatus.FAILED, {"error": PATIENT_UNDERAGE_MESSAGE})

        if request.record_type != ACCEPTED_RECORD_TYPE:
            logger.debug(f"Service: pay_transaction - record type {request.record_type!r} not accepted")
            return self._record(session, request, TransactionStatus.FAILED, {"error": RECORD_TYPE_MESSAGE})

        authorization = PaymentAuthorizationRequest(patient=patient, age=age, record_type=request.record_type)
        if self.payment_gateway.authorize(authorization):
            return self._record(session, request, TransactionStatus.SUCCESS, {"message": TRANSACTION_SUCCESS_MESSAGE})
        return self._record(session, request, TransactionStatus.FAILED, {"error": TRANSACTION_FAILED_MESSAGE})

    @staticmethod
    def _parse_date_of_birth(value: str) -> date:
        born = parse_ddmmyyyy(value)
        if born is None:
            raise InvalidDateOfBirthError(value)
        return born

    def _record(
        self,
        session: Session,
        request: PayTransactionRequest,
        status: TransactionStatus,
        api_response: dict[str, Any],
    ) -> Outcome:
        """Build the transaction and write it to the store exactly once."""
        transaction = TransactionInput(
            id=uuid4(),
            patient_id=request.patient_id,
            status=status,
            api_response=api_response,
            record_type=request.record_type,
            date_of_birth=request.date_of_birth,
        )

        try:
            stored = self.transaction_repository.create_transaction(session, transaction)
        except TransactionStoreError as e:
            logger.error(f"Service: pay_transaction - failed to store transaction {transaction.id}: {e}")
            return Rejected(kind=ErrorKind.STORAGE, message=str(e))

        logger.info(f"Service: pay_transaction - recorded transaction {stored.id} with status {stored.status}")
        return Recorded(transaction=stored)


@lru_cache
def get_patient_service() -> PatientService:
    """Get the patient service singleton.

    The @lru_cache decorator ensures this functions as a singleton,
    returning the same instance for all calls.

    Returns:
        PatientService: The singleton patient service instance
    """
    return PatientService()
