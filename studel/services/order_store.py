"""
Persistence for orders: create, read, list and the compare-and-swap status
write underlying every lifecycle transition.
"""
import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from tortoise import timezone as tz
from tortoise.query_utils import Prefetch
from tortoise.transactions import in_transaction

from studel.core.errors import NotFound, StateConflict, ValidationFailed
from studel.models.order import Order, OrderItem, OrderStatus, OrderStatusEntry
from studel.services.cart import OrderDraft

log = logging.getLogger(__name__)


def _with_details(query):
    # History is prefetched in insertion order so history[-1] is the latest entry
    return query.prefetch_related(
        "items",
        Prefetch("status_history", queryset=OrderStatusEntry.all().order_by("id")),
    )


async def create_order(draft: OrderDraft, now: Optional[datetime] = None) -> Order:
    """
    Persists a new order in the Placed state with its line items and initial
    history entry. Totals are computed here from the snapshot, never passed in.
    """
    if not draft.items:
        raise ValidationFailed("Order must contain items.")
    for line in draft.items:
        if line.quantity < 1:
            raise ValidationFailed(f"Quantity for {line.name} must be at least 1.")

    now = now or tz.now()
    total_price = sum((line.line_total for line in draft.items), Decimal("0"))

    async with in_transaction() as conn:
        order = await Order.create(
            customer_id=draft.customer_id,
            customer_name=draft.customer_name,
            vendor_id=draft.vendor_id,
            delivery_zone_id=draft.delivery_zone_id,
            delivery_zone_name=draft.delivery_zone_name,
            total_price=total_price,
            delivery_fee=draft.delivery_fee,
            final_amount=total_price + draft.delivery_fee,
            status=OrderStatus.PLACED,
            payment_collected=False,
            created_at=now,
            updated_at=now,
            using_db=conn,
        )
        for line in draft.items:
            await OrderItem.create(
                order=order,
                product_id=line.product_id,
                name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity,
                line_total=line.line_total,
                using_db=conn,
            )
        await OrderStatusEntry.create(order=order, status=OrderStatus.PLACED, timestamp=now, using_db=conn)

    return await get_order(order.id)


async def get_order(order_id: uuid.UUID) -> Order:
    order = await _with_details(Order.filter(id=order_id)).first()
    if order is None:
        raise NotFound(f"Order {order_id} not found. Refresh and try again.")
    return order


async def list_orders(
    customer_id: Optional[uuid.UUID] = None,
    runner_id: Optional[uuid.UUID] = None,
    vendor_id: Optional[uuid.UUID] = None,
    statuses: Optional[Iterable[OrderStatus]] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    limit: Optional[int] = None,
) -> List[Order]:
    """Orders matching every given filter, newest first. ``created_to`` is exclusive."""
    query = Order.all()
    if customer_id is not None:
        query = query.filter(customer_id=customer_id)
    if runner_id is not None:
        query = query.filter(runner_id=runner_id)
    if vendor_id is not None:
        query = query.filter(vendor_id=vendor_id)
    if statuses is not None:
        query = query.filter(status__in=list(statuses))
    if created_from is not None:
        query = query.filter(created_at__gte=created_from)
    if created_to is not None:
        query = query.filter(created_at__lt=created_to)
    query = query.order_by("-created_at")
    if limit is not None:
        query = query.limit(limit)
    return await _with_details(query)


async def update_order_status(
    order_id: uuid.UUID,
    expected_status: OrderStatus,
    new_status: OrderStatus,
    extra_fields: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> Order:
    """
    Moves the order to ``new_status`` only if it is still in ``expected_status``.

    The status column, any extra fields and the history row commit together or
    not at all. Setting ``runner_id`` additionally requires that no runner is
    bound yet, so a runner can never be overwritten.

    Raises:
        NotFound: no such order
        StateConflict: the order is no longer in ``expected_status``
    """
    now = now or tz.now()
    values = dict(extra_fields or {})
    values.update(status=new_status, updated_at=now)

    async with in_transaction() as conn:
        query = Order.filter(id=order_id, status=expected_status)
        if "runner_id" in values:
            query = query.filter(runner_id__isnull=True)
        updated = await query.using_db(conn).update(**values)

        if not updated:
            if not await Order.filter(id=order_id).using_db(conn).exists():
                raise NotFound(f"Order {order_id} not found. Refresh and try again.")
            log.warning(f"Status CONFLICT: Order {order_id} is no longer {expected_status.value}.")
            raise StateConflict()

        await OrderStatusEntry.create(order_id=order_id, status=new_status, timestamp=now, using_db=conn)

    log.info(f"Status UPDATE: Order {order_id} moved {expected_status.value} -> {new_status.value}.")
    return await get_order(order_id)
