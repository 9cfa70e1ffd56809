"""
Transaction API - pay transactions for patients.

The endpoint delegates to PatientService for the workflow and only maps its
outcome onto an HTTP response.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from pay_api.database import borrow_db_session
from pay_api.models.api_model import ErrorResponse, PayTransactionRequest, TransactionResponse, ValidationErrorResponse
from pay_api.models.outcome import ErrorKind, Rejected
from pay_api.services.patient_service import PatientService, get_patient_service

router = APIRouter()

STATUS_BY_ERROR_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.post(
    "/patients/pay-transaction",
    response_model=TransactionResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
def pay_transaction(
    body: PayTransactionRequest,
    patient_service: PatientService = Depends(get_patient_service),
) -> TransactionResponse | JSONResponse:
    """Pay a transaction for a patient.

    The database session is borrowed inside the handler, so a malformed body
    gets its 400 field errors without touching the database.

    Args:
        body: Patient ID, date of birth (DD-MM-YYYY) and record type
        patient_service: Patient service instance

    Returns:
        The recorded transaction, whose status is ``success`` or ``failed``,
        or an error body when nothing was recorded
    """
    with borrow_db_session() as session:
        outcome = patient_service.pay_transaction(session, body)

    if isinstance(outcome, Rejected):
        return JSONResponse(
            status_code=STATUS_BY_ERROR_KIND[outcome.kind],
            content=ErrorResponse(error=outcome.message).model_dump(),
        )
    return outcome.transaction
