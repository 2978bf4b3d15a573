from enum import Enum
from tortoise import fields, models
import uuid


class OrderStatus(str, Enum):
    PLACED = "Placed"  # Initial state, set only by order placement
    ACCEPTED = "Accepted"  # Vendor took the order
    PREPARING = "Preparing"
    READY_FOR_PICKUP = "Ready for Pickup"  # Visible to approved runners
    PICKED_UP = "Picked Up"  # Runner bound to the order
    ARRIVING = "Arriving"
    DELIVERED = "Delivered"  # Terminal, payment collected on delivery
    CANCELLED = "Cancelled"  # Terminal


class Order(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    customer_id = fields.UUIDField()
    customer_name = fields.CharField(max_length=255)
    # Set once by the runner-accept transition, never cleared or reassigned
    runner_id = fields.UUIDField(null=True)
    runner_name = fields.CharField(max_length=255, null=True)
    vendor_id = fields.UUIDField()
    # Snapshot of the delivery zone chosen at checkout
    delivery_zone_id = fields.UUIDField()
    delivery_zone_name = fields.CharField(max_length=255)
    total_price = fields.DecimalField(max_digits=12, decimal_places=2)
    delivery_fee = fields.DecimalField(max_digits=12, decimal_places=2)
    final_amount = fields.DecimalField(max_digits=14, decimal_places=2)
    status = fields.CharEnumField(OrderStatus, default=OrderStatus.PLACED)
    payment_collected = fields.BooleanField(default=False)
    created_at = fields.DatetimeField()
    updated_at = fields.DatetimeField()

    class Meta:
        table = "orders"
        indexes = [
            ("customer_id",),            # Customer order history
            ("runner_id",),              # Runner active order and earnings
            ("vendor_id",),              # Vendor order queue
            ("status",),                 # Marketplace of ready orders
            ("created_at",),             # Daily summaries
            ("vendor_id", "status"),     # Composite: vendor queue by status
        ]


class OrderItem(models.Model):
    """Line item snapshot of a product taken at order time."""
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    order = fields.ForeignKeyField("models.Order", related_name="items")
    product_id = fields.UUIDField()
    name = fields.CharField(max_length=255)
    unit_price = fields.DecimalField(max_digits=12, decimal_places=2)
    quantity = fields.IntField()
    line_total = fields.DecimalField(max_digits=14, decimal_places=2)

    class Meta:
        table = "order_items"
        indexes = [
            ("order_id",),
        ]


class OrderStatusEntry(models.Model):
    """
    Append-only status history. Rows are only ever inserted, in the same
    transaction as the status change they record; the integer key fixes order.
    """
    id = fields.IntField(primary_key=True)
    order = fields.ForeignKeyField("models.Order", related_name="status_history")
    status = fields.CharEnumField(OrderStatus)
    timestamp = fields.DatetimeField()

    class Meta:
        table = "order_status_history"
        indexes = [
            ("order_id", "id"),
        ]
