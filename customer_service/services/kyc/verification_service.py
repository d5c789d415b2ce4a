from loguru import logger

from customer_service.core.errors import CustomerServiceError, InvalidPAN
from customer_service.enums.verification_status import VerificationStatus
from customer_service.repositories.customer_repository import CustomerRepository
from customer_service.schemas.verification import VerificationDetail
from customer_service.services.kyc.customer_service import parse_customer_id
from customer_service.services.kyc.status_machine import check_transition
from customer_service.services.kyc.validators import normalize_pan


class VerificationService:
    @staticmethod
    async def create_verification(customer_id: str, pan_number: str) -> VerificationDetail:
        """Attach a PAN document to a live customer"""
        cid = parse_customer_id(customer_id)
        logger.info(f"Create verification for customer {cid} invoked")
        try:
            pan = normalize_pan(pan_number)
            if pan is None:
                raise InvalidPAN("pan_number is required")
            await CustomerRepository.get(cid)
            verification = await CustomerRepository.create_verification(cid, pan)
        except CustomerServiceError as e:
            logger.warning(f"Create verification for customer {cid} failed: {e.message}")
            raise
        logger.info(f"Verification {verification.id} stored for customer {cid}")
        return verification

    @staticmethod
    async def get_verification(customer_id: str) -> VerificationDetail:
        cid = parse_customer_id(customer_id)
        try:
            verification = await CustomerRepository.get_verification_by_customer_id(cid)
        except CustomerServiceError as e:
            logger.warning(f"Get verification for customer {cid} failed: {e.message}")
            raise
        logger.debug(f"Verification {verification.id} fetched for customer {cid}")
        return verification

    @staticmethod
    async def update_verification_status(customer_id: str, new_status: str) -> VerificationDetail:
        """Move the verification to ``new_status`` and return the re-read record.

        The status literal is rejected before any storage access.
        """
        cid = parse_customer_id(customer_id)
        logger.info(f"Update verification status for customer {cid} invoked: {new_status}")
        try:
            status = VerificationStatus.parse(new_status)
            current = await CustomerRepository.get_verification_by_customer_id(cid)
            check_transition(current.pan_number, status)
            await CustomerRepository.update_verification_status(cid, status)
            verification = await CustomerRepository.get_verification_by_customer_id(cid)
        except CustomerServiceError as e:
            logger.warning(f"Update verification status for customer {cid} failed: {e.message}")
            raise
        logger.info(f"Verification {verification.id} of customer {cid} is now {verification.status.value}")
        return verification
