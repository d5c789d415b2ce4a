from enum import Enum

from customer_service.core.errors import InvalidStatus


class VerificationStatus(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, value) -> "VerificationStatus":
        """Single entry point for turning a caller literal into a status."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidStatus(f"invalid verification status: {value!r}")
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise InvalidStatus(f"invalid verification status: {value!r}") from None

    @property
    def is_sentinel(self) -> bool:
        return self is VerificationStatus.NOT_FOUND
