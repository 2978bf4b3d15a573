from enum import Enum
from tortoise import fields, models
import uuid


class Role(str, Enum):
    CUSTOMER = "Customer"
    RUNNER = "Runner"
    CANTEEN = "Canteen"
    ADMIN = "Admin"


class User(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    name = fields.CharField(max_length=255)
    email = fields.CharField(max_length=255, null=True)
    phone = fields.CharField(max_length=32, unique=True, null=True)
    role = fields.CharEnumField(Role)
    # Runners only; everyone else is implicitly approved
    campus_id = fields.CharField(max_length=64, null=True)
    is_approved = fields.BooleanField(default=True)
    # Canteen staff only, scopes them to one vendor's order queue
    vendor_id = fields.UUIDField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "users"
        indexes = [
            ("role",),
        ]
