import logging
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from studel.core.auth import Actor
from studel.core.errors import ValidationFailed
from studel.models.order import Order
from studel.models.user import Role
from studel.services import catalog_service, order_store
from studel.services.cart import Cart
from studel.services.order_lifecycle import Action, require_role
from studel.services.order_service import apply_transition

log = logging.getLogger(__name__)


async def place_order(
    actor: Actor,
    items: List[Dict],
    delivery_zone_id: UUID,
    now: Optional[datetime] = None,
) -> Order:
    """
    Snapshots the requested products and zone into a new Placed order.

    ``items`` is a list of ``{"product_id", "quantity"}``; repeated products
    are merged. Every product must be available and belong to the same vendor.
    """
    require_role(actor, Role.CUSTOMER)
    if not items:
        raise ValidationFailed("Order must contain items.")
    try:
        requested = [(UUID(str(it["product_id"])), int(it["quantity"])) for it in items]
    except (KeyError, TypeError, ValueError):
        raise ValidationFailed("Each item needs a valid product_id and an integer quantity.")
    if any(qty < 1 for _, qty in requested):
        raise ValidationFailed("Every item quantity must be at least 1.")

    products = await catalog_service.get_products(pid for pid, _ in requested)
    product_map = {p.id: p for p in products}
    zone = await catalog_service.get_delivery_zone(delivery_zone_id)

    cart = Cart()
    for pid, qty in requested:
        product = product_map[pid]
        if not product.is_available:
            raise ValidationFailed(f"{product.name} is currently unavailable.")
        cart.add(product, qty)

    vendor = await catalog_service.get_vendor(cart.vendor_id)
    if not vendor.is_active:
        raise ValidationFailed(f"{vendor.name} is not taking orders right now.")

    order = await order_store.create_order(cart.to_draft(actor.id, actor.name, zone), now=now)
    log.info(f"Order {order.id} placed by customer {actor.id}: {order.final_amount}.")
    return order


async def list_my_orders(actor: Actor) -> List[Order]:
    require_role(actor, Role.CUSTOMER)
    return await order_store.list_orders(customer_id=actor.id)


async def cancel_order(actor: Actor, order_id: UUID, now: Optional[datetime] = None) -> Order:
    """Self-service cancel, only while the order is still Placed."""
    return await apply_transition(actor, order_id, Action.CUSTOMER_CANCEL, now=now)
