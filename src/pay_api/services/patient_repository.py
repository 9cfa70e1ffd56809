"""Repository for patient lookups."""

from functools import lru_cache
from uuid import UUID

from loguru import logger
from sqlmodel import Session, select

from pay_api.exceptions import PatientNotFoundError
from pay_api.models.api_model import PatientResponse
from pay_api.models.db_model import Patient as PatientModel


class PatientRepository:
    """Read-only access to stored patients."""

    def get_patient(self, session: Session, patient_id: UUID) -> PatientResponse:
        """Get a patient by ID.

        Args:
            session: Database session
            patient_id: UUID of the patient to retrieve

        Returns:
            PatientResponse for the stored patient

        Raises:
            PatientNotFoundError: If no patient has this ID
        """
        logger.debug(f"Repository: get_patient with patient_id={patient_id}")
        stmt = select(PatientModel).where(PatientModel.id == patient_id)
        patient = session.exec(stmt).first()

        if patient is None:
            logger.debug(f"Repository: get_patient - patient not found: {patient_id}")
            raise PatientNotFoundError(patient_id)

        return PatientResponse.model_validate(patient, from_attributes=True)


@lru_cache
def get_patient_repository() -> PatientRepository:
    """Get the patient repository singleton."""
    return PatientRepository()
