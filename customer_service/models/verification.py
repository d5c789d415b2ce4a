import uuid
from tortoise import fields, models

from customer_service.enums.verification_status import VerificationStatus


class Verification(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    customer = fields.OneToOneField(
        "models.Customer", related_name="verification", on_delete=fields.CASCADE
    )
    pan_number = fields.CharField(max_length=10, null=True, unique=True)
    status = fields.CharEnumField(VerificationStatus, max_length=16, default=VerificationStatus.NOT_FOUND)

    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "verifications"

    def __str__(self):
        return f"Verification {self.id} - {self.customer_id} ({self.status})"
