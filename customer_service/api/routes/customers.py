from typing import Optional

from fastapi import APIRouter, Query, Response, status

from customer_service.core.errors import InvalidArgument
from customer_service.schemas.customer import (
    CreateCustomerRequest,
    CustomerCreate,
    CustomerListResponse,
    CustomerPatch,
    CustomerResponse,
    PatchCustomerRequest,
)
from customer_service.schemas.verification import UpdateVerificationRequest, VerificationDetail
from customer_service.services.kyc.customer_service import CustomerService
from customer_service.services.kyc.verification_service import VerificationService

router = APIRouter()


@router.post("/customers", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(body: CreateCustomerRequest):
    """Register a customer together with its verification record"""
    customer = await CustomerService.create(
        CustomerCreate(name=body.name, email=body.email, phone=body.phone, pan_number=body.pan_number)
    )
    return CustomerResponse.from_detail(customer)


@router.get("/customers", response_model=CustomerListResponse)
async def list_customers(
    page: int = Query(1),
    limit: int = Query(20),
    status_filter: Optional[str] = Query(None, alias="status")
):
    """Live customers, newest first. Out of range paging is clamped."""
    result = await CustomerService.list(page=page, limit=limit, status=status_filter)
    return CustomerListResponse(
        page=result.page,
        limit=result.limit,
        total=result.total,
        data=[CustomerResponse.from_detail(c) for c in result.items],
    )


@router.get("/customers/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: str):
    customer = await CustomerService.get(customer_id)
    return CustomerResponse.from_detail(customer)


@router.patch("/customers/{customer_id}", response_model=CustomerResponse)
async def patch_customer(customer_id: str, body: PatchCustomerRequest):
    """Partial update; omitted fields keep their stored values"""
    customer = await CustomerService.update(
        customer_id, CustomerPatch(name=body.name, email=body.email, phone=body.phone)
    )
    return CustomerResponse.from_detail(customer)


@router.delete("/customers/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(customer_id: str):
    await CustomerService.soft_delete(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/customers/{customer_id}/status", response_model=VerificationDetail)
async def get_customer_kyc_status(customer_id: str):
    return await VerificationService.get_verification(customer_id)


@router.patch("/customers/{customer_id}/verification", response_model=VerificationDetail)
async def update_kyc(customer_id: str, body: UpdateVerificationRequest, response: Response):
    """Attach a PAN (201) or change the verification status (200)"""
    if body.pan_number:
        response.status_code = status.HTTP_201_CREATED
        return await VerificationService.create_verification(customer_id, body.pan_number)
    if body.status:
        return await VerificationService.update_verification_status(customer_id, body.status)
    raise InvalidArgument("nothing to update")
