from typing import Optional

from customer_service.core.errors import PreconditionFailed
from customer_service.enums.verification_status import VerificationStatus


def has_document(pan_number: Optional[str]) -> bool:
    return bool(pan_number and pan_number.strip())


def check_transition(pan_number: Optional[str], target: VerificationStatus) -> VerificationStatus:
    """Any status but the NOT_FOUND sentinel needs a PAN on record.

    Re-applying the current status is allowed.
    """
    if not target.is_sentinel and not has_document(pan_number):
        raise PreconditionFailed()
    return target
