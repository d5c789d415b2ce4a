"""Customer service error taxonomy.

Every failure that leaves the service or repository layers is one of the
classes below. Callers switch on ``kind`` (or on the class) instead of
comparing messages, and the HTTP layer maps each kind onto a status code.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    VALIDATION_FAILED = "validation_failed"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    VERIFICATION_NOT_FOUND = "verification_not_found"
    PRECONDITION_FAILED = "precondition_failed"
    STORAGE_UNAVAILABLE = "storage_unavailable"


class CustomerServiceError(Exception):
    kind: ErrorKind
    message: str = "customer service error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class InvalidArgument(CustomerServiceError):
    kind = ErrorKind.INVALID_ARGUMENT
    message = "invalid argument"


class ValidationFailed(CustomerServiceError):
    kind = ErrorKind.VALIDATION_FAILED
    field: str = ""

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        if field is not None:
            self.field = field
        super().__init__(message or f"invalid {self.field}")


class InvalidName(ValidationFailed):
    field = "name"


class InvalidEmail(ValidationFailed):
    field = "email"


class InvalidPhone(ValidationFailed):
    field = "phone"


class InvalidPAN(ValidationFailed):
    field = "pan_number"


class InvalidStatus(ValidationFailed):
    field = "status"


class Conflict(CustomerServiceError):
    kind = ErrorKind.CONFLICT
    message = "conflict: email or phone already exists"


class NotFound(CustomerServiceError):
    kind = ErrorKind.NOT_FOUND
    message = "customer not found"


class VerificationNotFound(CustomerServiceError):
    kind = ErrorKind.VERIFICATION_NOT_FOUND
    message = "verification not found"


class PreconditionFailed(CustomerServiceError):
    kind = ErrorKind.PRECONDITION_FAILED
    message = "pan_number must be provided before updating status"


class StorageUnavailable(CustomerServiceError):
    kind = ErrorKind.STORAGE_UNAVAILABLE
    message = "storage unavailable"
