from datetime import datetime
from decimal import Decimal
from typing import List, Optional
import uuid

from pydantic import BaseModel, Field

from studel.models.order import Order, OrderStatus
from studel.services.order_lifecycle import is_terminal, progress_index
from studel.services.summaries import DailyTotal


class OrderItemRequest(BaseModel):
    """Schema for a single item in the order request."""
    product_id: uuid.UUID
    quantity: int


class OrderRequest(BaseModel):
    """Schema for the full order placement request body."""
    delivery_zone_id: uuid.UUID
    items: List[OrderItemRequest]


class OrderItemResponse(BaseModel):
    """Schema for an item inside the detailed order response."""
    product_id: uuid.UUID
    name: str
    unit_price: Decimal
    quantity: int
    line_total: Decimal


class StatusHistoryEntry(BaseModel):
    status: OrderStatus
    timestamp: datetime


class DeliveryZoneSnapshot(BaseModel):
    id: uuid.UUID
    name: str
    delivery_fee: Decimal


class OrderDetailResponse(BaseModel):
    """Schema for an order snapshot returned to every role."""
    id: uuid.UUID
    customer_id: uuid.UUID
    customer_name: str
    runner_id: Optional[uuid.UUID] = None
    runner_name: Optional[str] = None
    vendor_id: uuid.UUID
    items: List[OrderItemResponse]
    total_price: Decimal
    delivery_fee: Decimal
    final_amount: Decimal
    delivery_zone: DeliveryZoneSnapshot
    status: OrderStatus
    progress_index: Optional[int] = Field(None, description="Step in the delivery flow; null when cancelled.")
    is_terminal: bool
    payment_collected: bool
    created_at: datetime
    status_history: List[StatusHistoryEntry]

    @classmethod
    def from_order(cls, order: Order) -> "OrderDetailResponse":
        # Expects items and status_history to be prefetched (see order_store)
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            customer_name=order.customer_name,
            runner_id=order.runner_id,
            runner_name=order.runner_name,
            vendor_id=order.vendor_id,
            items=[
                OrderItemResponse(
                    product_id=i.product_id,
                    name=i.name,
                    unit_price=i.unit_price,
                    quantity=i.quantity,
                    line_total=i.line_total,
                )
                for i in order.items
            ],
            total_price=order.total_price,
            delivery_fee=order.delivery_fee,
            final_amount=order.final_amount,
            delivery_zone=DeliveryZoneSnapshot(
                id=order.delivery_zone_id,
                name=order.delivery_zone_name,
                delivery_fee=order.delivery_fee,
            ),
            status=order.status,
            progress_index=progress_index(order.status),
            is_terminal=is_terminal(order.status),
            payment_collected=order.payment_collected,
            created_at=order.created_at,
            status_history=[
                StatusHistoryEntry(status=h.status, timestamp=h.timestamp)
                for h in order.status_history
            ],
        )


class DailyTotalResponse(BaseModel):
    """Today's order count and amount for a vendor (revenue) or runner (earnings)."""
    day_start: datetime
    day_end: datetime
    order_count: int
    total: Decimal
    order_ids: List[uuid.UUID]

    @classmethod
    def from_total(cls, summary: DailyTotal) -> "DailyTotalResponse":
        return cls(
            day_start=summary.day_start,
            day_end=summary.day_end,
            order_count=summary.order_count,
            total=summary.total,
            order_ids=[o.id for o in summary.orders],
        )
