import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from studel.core.auth import Actor
from studel.core.errors import AuthorizationDenied
from studel.models.catalog import Product
from studel.models.order import Order, OrderStatus
from studel.models.user import Role
from studel.services import catalog_service, order_store, summaries
from studel.services.order_lifecycle import Action, require_role
from studel.services.order_service import apply_transition

log = logging.getLogger(__name__)

VENDOR_QUEUE_STATUSES = [
    OrderStatus.PLACED,
    OrderStatus.ACCEPTED,
    OrderStatus.PREPARING,
    OrderStatus.READY_FOR_PICKUP,
]


def _require_vendor_staff(actor: Actor) -> UUID:
    require_role(actor, Role.CANTEEN)
    if actor.vendor_id is None:
        raise AuthorizationDenied("Your account is not linked to a vendor.")
    return actor.vendor_id


async def list_vendor_queue(actor: Actor) -> List[Order]:
    """The actor's vendor orders that still need kitchen work or a runner."""
    vendor_id = _require_vendor_staff(actor)
    return await order_store.list_orders(vendor_id=vendor_id, statuses=VENDOR_QUEUE_STATUSES)


async def accept_order(actor: Actor, order_id: UUID, now: Optional[datetime] = None) -> Order:
    return await apply_transition(actor, order_id, Action.VENDOR_ACCEPT, now=now)


async def start_preparing(actor: Actor, order_id: UUID, now: Optional[datetime] = None) -> Order:
    return await apply_transition(actor, order_id, Action.START_PREPARING, now=now)


async def mark_ready(actor: Actor, order_id: UUID, now: Optional[datetime] = None) -> Order:
    return await apply_transition(actor, order_id, Action.MARK_READY, now=now)


async def daily_summary(actor: Actor, now: Optional[datetime] = None) -> summaries.DailyTotal:
    vendor_id = _require_vendor_staff(actor)
    return await summaries.fetch_vendor_daily_summary(vendor_id, now=now)


async def set_product_availability(actor: Actor, product_id: UUID, is_available: bool) -> Product:
    vendor_id = _require_vendor_staff(actor)
    product = await catalog_service.get_product(product_id)
    if product.vendor_id != vendor_id:
        raise AuthorizationDenied("This product belongs to another vendor.")
    return await catalog_service.update_product_availability(product_id, is_available)
