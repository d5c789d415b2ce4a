from uuid import UUID
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_serializer

from customer_service.enums.verification_status import VerificationStatus


class CustomerCreate(BaseModel):
    """In-memory customer record handed to the validator and repository.

    Fields are plain strings; format checks happen in the validator.
    """
    name: str = ""
    email: str = ""
    phone: str = ""
    pan_number: Optional[str] = None
    status: Optional[str] = None


class CustomerPatch(BaseModel):
    """Sparse update; ``None`` means the field is left untouched"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    def is_empty(self) -> bool:
        return self.name is None and self.email is None and self.phone is None


class CustomerDetail(BaseModel):
    """Persisted customer joined with its verification record"""
    id: UUID
    name: str
    email: str
    phone: str
    pan_number: Optional[str] = None
    status: Optional[VerificationStatus] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CustomerResponse(BaseModel):
    customer_id: UUID
    name: str
    email: str
    phone: str
    pan_number: Optional[str] = None
    status: Optional[VerificationStatus] = None
    created_at: datetime
    updated_at: datetime
    status_url: str
    verification_url: str

    @field_serializer("customer_id")
    def serialize_uuid(self, v: UUID, _info):
        return str(v)

    @classmethod
    def from_detail(cls, customer: CustomerDetail) -> "CustomerResponse":
        return cls(
            customer_id=customer.id,
            name=customer.name,
            email=customer.email,
            phone=customer.phone,
            pan_number=customer.pan_number,
            status=customer.status,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
            status_url=f"/v1/customers/{customer.id}/status",
            verification_url=f"/v1/customers/{customer.id}/verification",
        )


class CustomerListResponse(BaseModel):
    """Schema for paginated customer list"""
    page: int
    limit: int
    total: int
    data: list[CustomerResponse]


class CreateCustomerRequest(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    pan_number: Optional[str] = Field(None, max_length=32)


class PatchCustomerRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class CustomerPage(BaseModel):
    """One normalized page of customers plus the total matching the filter"""
    items: list[CustomerDetail]
    total: int
    page: int
    limit: int
