"""Repository for persisting pay transactions."""

from functools import lru_cache

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from pay_api.constants import TRANSACTION_NOT_CREATED_MESSAGE
from pay_api.exceptions import TransactionStoreError
from pay_api.models.api_model import TransactionInput, TransactionResponse
from pay_api.models.db_model import Transaction as TransactionModel


class TransactionRepository:
    """Write-once storage for transactions.

    There is deliberately no update or delete path: a transaction is
    immutable once it has been stored.
    """

    def create_transaction(self, session: Session, transaction: TransactionInput) -> TransactionResponse:
        """Persist a transaction.

        Args:
            session: Database session
            transaction: The fully built transaction to store

        Returns:
            TransactionResponse with the stored values, including created_at

        Raises:
            TransactionStoreError: If the row could not be written
        """
        logger.debug(f"Repository: create_transaction id={transaction.id} patient_id={transaction.patient_id} status={transaction.status}")

        try:
            new_transaction = TransactionModel(**transaction.model_dump())
            session.add(new_transaction)
            session.commit()
            session.refresh(new_transaction)
        except SQLAlchemyError as e:
            logger.error(f"Repository: create_transaction - failed to create transaction: {e}")
            session.rollback()
            raise TransactionStoreError(TRANSACTION_NOT_CREATED_MESSAGE) from e

        logger.debug(f"Repository: create_transaction - successfully created transaction {new_transaction.id}")
        return TransactionResponse.model_validate(new_transaction, from_attributes=True)


@lru_cache
def get_transaction_repository() -> TransactionRepository:
    """Get the transaction repository singleton."""
    return TransactionRepository()
