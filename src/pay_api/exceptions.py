"""Common exceptions for the pay API.

Repositories raise these; the transaction workflow turns them into
rejected outcomes instead of letting them reach the HTTP layer.
"""

from uuid import UUID


class ResourceNotFoundError(Exception):
    """Raised when a resource doesn't exist.

    Generic exception for any resource that cannot be found by its identifier.
    """

    def __init__(self, resource_type: str, identifier: str | UUID | int):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")


class PatientNotFoundError(ResourceNotFoundError):
    """Raised when a patient identifier does not resolve to a stored patient."""

    def __init__(self, identifier: str | UUID):
        super().__init__("Patient", identifier)


class InvalidDateOfBirthError(ValueError):
    """Raised when a date of birth does not match the DD-MM-YYYY layout."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid date of birth: {value!r}")


class TransactionStoreError(Exception):
    """Raised when a transaction cannot be persisted."""
