"""Global constants for the pay API.

This module defines constants used throughout the application to avoid
hardcoded strings and make the codebase more maintainable.
"""

# Date of birth layout accepted on the wire (e.g. 15-03-1990)
DATE_OF_BIRTH_FORMAT = "%d-%m-%Y"
DATE_OF_BIRTH_PATTERN = r"^\d{2}-\d{2}-\d{4}$"

# Business rules
MINIMUM_PATIENT_AGE = 18
ACCEPTED_RECORD_TYPE = "NEW"

# Messages stored in a transaction's api_response
PATIENT_UNDERAGE_MESSAGE = "Patient must be more than 18 years old"
RECORD_TYPE_MESSAGE = "Record type must be NEW"
TRANSACTION_FAILED_MESSAGE = "Transaction failed"
TRANSACTION_SUCCESS_MESSAGE = "Transaction success"

# Messages surfaced to the caller when nothing is recorded
DATE_OF_BIRTH_FORMAT_MESSAGE = "date of birth format must be DD-MM-YYYY"
TRANSACTION_NOT_CREATED_MESSAGE = "transaction not created"

# Field validation messages
FIELD_REQUIRED_MESSAGE = "This field is required"
FIELD_DATE_FORMAT_MESSAGE = "Date must be in DD-MM-YYYY format"
FIELD_UUID_MESSAGE = "Must be a valid UUID"
FIELD_JSON_MESSAGE = "Request body must be valid JSON"
