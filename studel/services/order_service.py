import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from studel.core.auth import Actor
from studel.core.errors import AuthorizationDenied, StudelError
from studel.models.order import Order, OrderStatus
from studel.models.user import Role
from studel.services import order_store
from studel.services.order_lifecycle import (
    Action,
    TRANSITIONS,
    authorize,
    ensure_transition_allowed,
    require_role,
    transition_fields,
)

log = logging.getLogger(__name__)


async def apply_transition(actor: Actor, order_id: UUID, action: Action, now: Optional[datetime] = None) -> Order:
    """
    Runs one lifecycle transition on behalf of ``actor``.

    Role is checked before the order is read; ownership, approval and the
    state precondition are checked against the read snapshot; the write is a
    compare-and-swap on the observed status, so a concurrent transition that
    wins the race turns this call into a StateConflict.
    """
    rule = TRANSITIONS[action]
    try:
        require_role(actor, rule.role)
        order = await order_store.get_order(order_id)
        authorize(action, actor, order)
        ensure_transition_allowed(action, order.status)
        order = await order_store.update_order_status(
            order_id,
            expected_status=order.status,
            new_status=rule.to_status,
            extra_fields=transition_fields(action, actor),
            now=now,
        )
    except StudelError as e:
        log.warning(f"Transition {action.value} on order {order_id} by {actor.role.value} {actor.id} rejected: {e.code}")
        raise
    log.info(f"Transition {action.value} on order {order_id} by {actor.role.value} {actor.id} committed: {order.status.value}")
    return order


async def view_order(actor: Actor, order_id: UUID) -> Order:
    """Fetches an order for any party allowed to see it."""
    order = await order_store.get_order(order_id)
    if actor.role == Role.ADMIN:
        return order
    if actor.role == Role.CUSTOMER and order.customer_id == actor.id:
        return order
    if actor.role == Role.CANTEEN and actor.vendor_id is not None and order.vendor_id == actor.vendor_id:
        return order
    if actor.role == Role.RUNNER:
        if order.runner_id == actor.id:
            return order
        if actor.is_approved and order.status == OrderStatus.READY_FOR_PICKUP:
            return order
    raise AuthorizationDenied("You are not allowed to view this order.")
