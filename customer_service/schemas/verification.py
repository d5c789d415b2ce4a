from uuid import UUID
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_serializer

from customer_service.enums.verification_status import VerificationStatus


class VerificationDetail(BaseModel):
    id: UUID
    customer_id: UUID
    pan_number: Optional[str] = None
    status: VerificationStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("id", "customer_id")
    def serialize_uuid(self, v: UUID, _info):
        return str(v)


class UpdateVerificationRequest(BaseModel):
    """Either attaches a PAN or moves the status; PAN wins when both are sent"""
    pan_number: Optional[str] = None
    status: Optional[str] = None
