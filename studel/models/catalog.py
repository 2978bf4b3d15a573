from tortoise import fields, models
import uuid


class Vendor(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    name = fields.CharField(max_length=255)
    operating_hours = fields.CharField(max_length=128, default="")
    image_url = fields.CharField(max_length=512, default="")
    is_active = fields.BooleanField(default=True)

    class Meta:
        table = "vendors"


class Product(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    vendor = fields.ForeignKeyField("models.Vendor", related_name="products")
    name = fields.CharField(max_length=255)
    description = fields.TextField(default="")
    price = fields.DecimalField(max_digits=12, decimal_places=2)
    category = fields.CharField(max_length=128, default="")
    # Toggled by the vendor; placed orders keep their own snapshot
    is_available = fields.BooleanField(default=True)

    class Meta:
        table = "products"
        indexes = [
            ("vendor_id",),
            ("vendor_id", "is_available"),
        ]


class DeliveryZone(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    name = fields.CharField(max_length=255)
    delivery_fee = fields.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        table = "delivery_zones"
