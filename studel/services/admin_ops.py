from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from studel.core.auth import Actor
from studel.models.catalog import DeliveryZone
from studel.models.order import Order, OrderStatus
from studel.models.user import Role, User
from studel.services import catalog_service, order_store, user_service
from studel.services.order_lifecycle import Action, require_role
from studel.services.order_service import apply_transition


async def list_all_orders(
    actor: Actor, statuses: Optional[List[OrderStatus]] = None, limit: Optional[int] = None
) -> List[Order]:
    require_role(actor, Role.ADMIN)
    return await order_store.list_orders(statuses=statuses or None, limit=limit)


async def force_cancel(actor: Actor, order_id: UUID, now: Optional[datetime] = None) -> Order:
    """Cancels any order that has not reached a terminal state."""
    return await apply_transition(actor, order_id, Action.FORCE_CANCEL, now=now)


async def list_runners(actor: Actor) -> List[User]:
    require_role(actor, Role.ADMIN)
    return await user_service.list_runners()


async def approve_runner(actor: Actor, runner_id: UUID) -> User:
    require_role(actor, Role.ADMIN)
    return await user_service.approve_runner(runner_id)


async def update_delivery_zone(
    actor: Actor, zone_id: UUID, name: Optional[str] = None, delivery_fee: Optional[Decimal] = None
) -> DeliveryZone:
    require_role(actor, Role.ADMIN)
    return await catalog_service.update_delivery_zone(zone_id, name=name, delivery_fee=delivery_fee)
