from uuid import UUID
from typing import Optional

from loguru import logger

from customer_service.core.errors import CustomerServiceError, InvalidArgument
from customer_service.enums.verification_status import VerificationStatus
from customer_service.repositories.customer_repository import CustomerRepository
from customer_service.schemas.customer import CustomerCreate, CustomerDetail, CustomerPage, CustomerPatch
from customer_service.services.kyc.validators import validate_for_create, validate_for_update

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 200


def parse_customer_id(value) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except (ValueError, TypeError):
        raise InvalidArgument("invalid id") from None


def normalize_page(page: Optional[int], limit: Optional[int]) -> tuple[int, int, int]:
    """Clamp paging input; returns (page, limit, offset). Never fails."""
    if page is None or page <= 0:
        page = 1
    if limit is None or limit <= 0 or limit > MAX_PAGE_LIMIT:
        limit = DEFAULT_PAGE_LIMIT
    return page, limit, (page - 1) * limit


class CustomerService:
    @staticmethod
    async def create(customer: CustomerCreate) -> CustomerDetail:
        logger.info("Create customer invoked")
        try:
            validate_for_create(customer)
        except CustomerServiceError as e:
            logger.warning(f"Create customer validation failed: {e.message}")
            raise

        try:
            created = await CustomerRepository.create(customer)
        except CustomerServiceError as e:
            logger.error(f"Create customer failed: {e.message}")
            raise
        logger.info(f"Customer {created.id} created")
        return created

    @staticmethod
    async def get(customer_id) -> CustomerDetail:
        cid = parse_customer_id(customer_id)
        try:
            customer = await CustomerRepository.get(cid)
        except CustomerServiceError as e:
            logger.warning(f"Get customer {cid} failed: {e.message}")
            raise
        logger.debug(f"Customer {cid} fetched")
        return customer

    @staticmethod
    async def list(
        page: Optional[int] = 1,
        limit: Optional[int] = DEFAULT_PAGE_LIMIT,
        status: Optional[str] = None
    ) -> CustomerPage:
        logger.info(f"List customers invoked: page={page} limit={limit} status={status}")
        page, limit, offset = normalize_page(page, limit)
        status_filter = VerificationStatus.parse(status) if status else None

        try:
            items, total = await CustomerRepository.list(offset, limit, status_filter)
        except CustomerServiceError as e:
            logger.error(f"List customers failed: {e.message}")
            raise
        logger.info(f"List customers returned {len(items)} of {total}")
        return CustomerPage(items=items, total=total, page=page, limit=limit)

    @staticmethod
    async def update(customer_id, patch: CustomerPatch) -> CustomerDetail:
        cid = parse_customer_id(customer_id)
        logger.info(f"Update customer {cid} invoked")
        try:
            validate_for_update(patch)
            customer = await CustomerRepository.update(cid, patch)
        except CustomerServiceError as e:
            logger.warning(f"Update customer {cid} failed: {e.message}")
            raise
        logger.info(f"Customer {cid} updated")
        return customer

    @staticmethod
    async def soft_delete(customer_id) -> None:
        cid = parse_customer_id(customer_id)
        logger.info(f"Soft delete customer {cid} invoked")
        try:
            await CustomerRepository.soft_delete(cid)
        except CustomerServiceError as e:
            logger.warning(f"Soft delete customer {cid} failed: {e.message}")
            raise
        logger.info(f"Customer {cid} soft deleted")
