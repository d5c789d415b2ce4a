import pytest
from tortoise.exceptions import DBConnectionError, IntegrityError, OperationalError

from customer_service.core.errors import Conflict, ErrorKind, InvalidArgument, StorageUnavailable
from customer_service.repositories.customer_repository import (
    PATCH_COLUMNS, is_unique_violation, patch_assignments, store_errors,
)
from customer_service.schemas.customer import CustomerPatch


class FakePgError(Exception):
    def __init__(self, sqlstate):
        super().__init__("constraint")
        self.sqlstate = sqlstate


def test_patch_columns_cover_exactly_the_patchable_fields():
    assert set(PATCH_COLUMNS) == {"name", "email", "phone"}
    assert {column for column, _ in PATCH_COLUMNS.values()} == {"name", "email", "phone"}


@pytest.mark.parametrize("patch,expected", [
    (CustomerPatch(), {}),
    (CustomerPatch(name="Asha R."), {"name": "Asha R."}),
    (CustomerPatch(email="New@AcmeBank.IN"), {"email": "new@acmebank.in"}),
    (CustomerPatch(phone="+919876543219"), {"phone": "+919876543219"}),
    (
        CustomerPatch(name="A", email="A@B.IN", phone="9876543210"),
        {"name": "A", "email": "a@b.in", "phone": "9876543210"},
    ),
])
def test_patch_assignments(patch, expected):
    assert patch_assignments(patch) == expected


def test_unique_violation_detection():
    assert is_unique_violation(IntegrityError(FakePgError("23505")))
    assert not is_unique_violation(IntegrityError(FakePgError("23503")))
    assert is_unique_violation(IntegrityError("UNIQUE constraint failed: customers.email, customers.phone"))
    assert not is_unique_violation(IntegrityError("FOREIGN KEY constraint failed"))


def test_unique_violation_becomes_conflict():
    with pytest.raises(Conflict) as exc:
        with store_errors():
            raise IntegrityError(FakePgError("23505"))
    assert exc.value.kind is ErrorKind.CONFLICT
    assert "23505" not in exc.value.message


def test_conflict_message_override():
    with pytest.raises(Conflict) as exc:
        with store_errors("conflict: PAN already exists"):
            raise IntegrityError(FakePgError("23505"))
    assert exc.value.message == "conflict: PAN already exists"


def test_other_integrity_errors_are_invalid_arguments():
    with pytest.raises(InvalidArgument):
        with store_errors():
            raise IntegrityError(FakePgError("23503"))


@pytest.mark.parametrize("error", [
    DBConnectionError("connection refused"),
    OperationalError("server closed the connection unexpectedly"),
    ConnectionResetError("reset by peer"),
])
def test_connection_failures_become_storage_unavailable(error):
    with pytest.raises(StorageUnavailable) as exc:
        with store_errors():
            raise error
    assert exc.value.kind is ErrorKind.STORAGE_UNAVAILABLE
