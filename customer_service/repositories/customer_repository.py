import uuid
from uuid import UUID
from typing import Callable, Optional
from contextlib import contextmanager

from loguru import logger
from tortoise import timezone
from tortoise.exceptions import IntegrityError, OperationalError, DBConnectionError
from tortoise.transactions import in_transaction

from customer_service.core.errors import (
    Conflict, InvalidArgument, NotFound, StorageUnavailable, VerificationNotFound,
)
from customer_service.enums.verification_status import VerificationStatus
from customer_service.models import Customer, Verification
from customer_service.schemas.customer import CustomerCreate, CustomerDetail, CustomerPatch
from customer_service.schemas.verification import VerificationDetail


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _keep(value: str) -> str:
    return value


# patch field -> (column, normalizer). Only fields listed here can be written by update().
PATCH_COLUMNS: dict[str, tuple[str, Callable[[str], str]]] = {
    "name": ("name", _keep),
    "email": ("email", normalize_email),
    "phone": ("phone", _keep),
}


def patch_assignments(patch: CustomerPatch) -> dict:
    """Column assignments for the fields present in ``patch``"""
    assignments = {}
    for field, (column, normalize) in PATCH_COLUMNS.items():
        value = getattr(patch, field)
        if value is not None:
            assignments[column] = normalize(value)
    return assignments


def is_unique_violation(exc: IntegrityError) -> bool:
    cause = exc.args[0] if exc.args else None
    sqlstate = getattr(cause, "sqlstate", None)
    if sqlstate is not None:
        return sqlstate == "23505"
    return "unique" in str(exc).lower()


@contextmanager
def store_errors(conflict_message: Optional[str] = None):
    """Translate driver/ORM failures into the service error taxonomy"""
    try:
        yield
    except IntegrityError as e:
        if is_unique_violation(e):
            raise Conflict(conflict_message) from e
        logger.error(f"Integrity error: {str(e)}")
        raise InvalidArgument("constraint violation") from e
    except (DBConnectionError, OperationalError, OSError) as e:
        logger.error(f"Storage error: {str(e)}")
        raise StorageUnavailable() from e


def _to_detail(customer: Customer, verification: Optional[Verification]) -> CustomerDetail:
    return CustomerDetail(
        id=customer.id,
        name=customer.name,
        email=customer.email,
        phone=customer.phone,
        pan_number=verification.pan_number if verification else None,
        status=verification.status if verification else None,
        created_at=customer.created_at,
        updated_at=customer.updated_at,
    )


class CustomerRepository:

    @staticmethod
    async def _fetch(customer_id: UUID, conn=None) -> CustomerDetail:
        customer = await Customer.filter(id=customer_id, deleted_at__isnull=True).using_db(conn).first()
        if customer is None:
            raise NotFound()
        verification = await Verification.filter(customer_id=customer.id).using_db(conn).first()
        return _to_detail(customer, verification)

    @staticmethod
    async def create(record: CustomerCreate) -> CustomerDetail:
        """Insert the customer and its verification row in one transaction"""
        status = VerificationStatus.parse(record.status or VerificationStatus.NOT_FOUND)
        with store_errors():
            async with in_transaction() as conn:
                customer = await Customer.create(
                    id=uuid.uuid4(),
                    name=record.name,
                    email=normalize_email(record.email),
                    phone=record.phone,
                    using_db=conn,
                )
                verification = await Verification.create(
                    customer_id=customer.id,
                    pan_number=record.pan_number,
                    status=status,
                    using_db=conn,
                )
        return _to_detail(customer, verification)

    @staticmethod
    async def get(customer_id: UUID) -> CustomerDetail:
        with store_errors():
            return await CustomerRepository._fetch(customer_id)

    @staticmethod
    async def list(
        offset: int,
        limit: int,
        status: Optional[VerificationStatus] = None
    ) -> tuple[list[CustomerDetail], int]:
        """Live customers, newest first, with the total matching the filter"""
        query = Customer.filter(deleted_at__isnull=True)
        if status is not None:
            query = query.filter(verification__status=status)

        with store_errors():
            total = await query.count()
            customers = await query.order_by("-created_at").offset(offset).limit(limit)
            verifications = {}
            if customers:
                rows = await Verification.filter(customer_id__in=[c.id for c in customers])
                verifications = {v.customer_id: v for v in rows}

        return [_to_detail(c, verifications.get(c.id)) for c in customers], total

    @staticmethod
    async def update(customer_id: UUID, patch: CustomerPatch) -> CustomerDetail:
        if patch.is_empty():
            return await CustomerRepository.get(customer_id)
        assignments = patch_assignments(patch)
        assignments["updated_at"] = timezone.now()

        with store_errors():
            async with in_transaction() as conn:
                affected = await Customer.filter(
                    id=customer_id, deleted_at__isnull=True
                ).using_db(conn).update(**assignments)
                if not affected:
                    raise NotFound()
                return await CustomerRepository._fetch(customer_id, conn)

    @staticmethod
    async def soft_delete(customer_id: UUID) -> None:
        now = timezone.now()
        with store_errors():
            affected = await Customer.filter(
                id=customer_id, deleted_at__isnull=True
            ).update(deleted_at=now, updated_at=now)
        if not affected:
            raise NotFound()

    @staticmethod
    async def create_verification(customer_id: UUID, pan_number: str) -> VerificationDetail:
        """Attach a PAN to the customer's verification and reset it to PENDING"""
        with store_errors("conflict: PAN already exists"):
            async with in_transaction() as conn:
                verification = await Verification.filter(
                    customer_id=customer_id
                ).select_for_update().using_db(conn).first()
                if verification is None:
                    verification = await Verification.create(
                        customer_id=customer_id,
                        pan_number=pan_number,
                        status=VerificationStatus.PENDING,
                        using_db=conn,
                    )
                else:
                    verification.pan_number = pan_number
                    verification.status = VerificationStatus.PENDING
                    await verification.save(using_db=conn)
        return VerificationDetail.model_validate(verification)

    @staticmethod
    async def get_verification_by_customer_id(customer_id: UUID) -> VerificationDetail:
        with store_errors():
            verification = await Verification.filter(
                customer_id=customer_id, customer__deleted_at__isnull=True
            ).first()
        if verification is None:
            raise VerificationNotFound()
        return VerificationDetail.model_validate(verification)

    @staticmethod
    async def update_verification_status(customer_id: UUID, status: VerificationStatus) -> None:
        """Write the status only; callers re-read the canonical row"""
        with store_errors():
            async with in_transaction() as conn:
                live = await Customer.filter(
                    id=customer_id, deleted_at__isnull=True
                ).select_for_update().using_db(conn).first()
                affected = 0
                if live is not None:
                    affected = await Verification.filter(
                        customer_id=customer_id
                    ).using_db(conn).update(status=status, updated_at=timezone.now())
        if not affected:
            raise VerificationNotFound()
