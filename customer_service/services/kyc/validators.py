import re
from typing import Optional

import phonenumbers
from email_validator import validate_email, EmailNotValidError

from customer_service.core.config import settings
from customer_service.core.errors import InvalidName, InvalidEmail, InvalidPhone, InvalidPAN
from customer_service.enums.verification_status import VerificationStatus
from customer_service.schemas.customer import CustomerCreate, CustomerPatch
from customer_service.services.kyc.status_machine import check_transition

PAN_PATTERN = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")


def check_name(name: Optional[str]) -> None:
    if name is None or not name.strip():
        raise InvalidName()


def check_email(email: Optional[str]) -> None:
    if not email or not email.strip():
        raise InvalidEmail()
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise InvalidEmail(f"invalid email: {e}") from None


def check_phone(phone: Optional[str], region: Optional[str] = None) -> None:
    if not phone or not phone.strip():
        raise InvalidPhone()
    try:
        number = phonenumbers.parse(phone, region or settings.phone_default_region)
    except phonenumbers.NumberParseException:
        raise InvalidPhone() from None
    if not phonenumbers.is_valid_number(number):
        raise InvalidPhone()


def normalize_pan(pan: Optional[str]) -> Optional[str]:
    """Upper-case and strip a PAN; ``None``/blank stays absent"""
    if pan is None or not pan.strip():
        return None
    pan = pan.strip().upper()
    if not PAN_PATTERN.match(pan):
        raise InvalidPAN("invalid PAN format, expected ABCDE1234F")
    return pan


def validate_for_create(customer: CustomerCreate, region: Optional[str] = None) -> None:
    """Validate a new customer in place.

    Normalizes ``pan_number`` and fills in ``status`` when it is unset:
    ``PENDING`` once a PAN is supplied, the ``NOT_FOUND`` sentinel otherwise.
    """
    check_name(customer.name)
    check_email(customer.email)
    check_phone(customer.phone, region)

    customer.pan_number = normalize_pan(customer.pan_number)

    if customer.status is None or not str(customer.status).strip():
        customer.status = (
            VerificationStatus.PENDING if customer.pan_number else VerificationStatus.NOT_FOUND
        )
    status = VerificationStatus.parse(customer.status)
    check_transition(customer.pan_number, status)
    customer.status = status


def validate_for_update(patch: CustomerPatch, region: Optional[str] = None) -> None:
    """Validate a sparse update in place.

    A present but blank name is rejected; blank email/phone are dropped
    from the patch so they never overwrite stored values.
    """
    if patch.name is not None:
        check_name(patch.name)

    if patch.email is not None and not patch.email.strip():
        patch.email = None
    if patch.email is not None:
        check_email(patch.email)

    if patch.phone is not None and not patch.phone.strip():
        patch.phone = None
    if patch.phone is not None:
        check_phone(patch.phone, region)
