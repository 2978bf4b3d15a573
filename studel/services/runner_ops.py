from datetime import datetime
from typing import List, Optional
from uuid import UUID

from studel.core.auth import Actor
from studel.core.errors import AuthorizationDenied
from studel.models.order import Order, OrderStatus
from studel.models.user import Role
from studel.services import order_store, summaries
from studel.services.order_lifecycle import Action, require_role
from studel.services.order_service import apply_transition

RUNNER_ACTIVE_STATUSES = [OrderStatus.PICKED_UP, OrderStatus.ARRIVING]


def _require_approved_runner(actor: Actor) -> None:
    require_role(actor, Role.RUNNER)
    if not actor.is_approved:
        raise AuthorizationDenied("Runner account is awaiting admin approval.")


async def list_available_orders(actor: Actor) -> List[Order]:
    """Orders waiting at a vendor for any approved runner to claim."""
    _require_approved_runner(actor)
    return await order_store.list_orders(statuses=[OrderStatus.READY_FOR_PICKUP])


async def get_active_order(actor: Actor) -> Optional[Order]:
    require_role(actor, Role.RUNNER)
    orders = await order_store.list_orders(runner_id=actor.id, statuses=RUNNER_ACTIVE_STATUSES, limit=1)
    return orders[0] if orders else None


async def accept_delivery(actor: Actor, order_id: UUID, now: Optional[datetime] = None) -> Order:
    return await apply_transition(actor, order_id, Action.RUNNER_ACCEPT, now=now)


async def mark_arriving(actor: Actor, order_id: UUID, now: Optional[datetime] = None) -> Order:
    return await apply_transition(actor, order_id, Action.MARK_ARRIVING, now=now)


async def mark_delivered(actor: Actor, order_id: UUID, now: Optional[datetime] = None) -> Order:
    return await apply_transition(actor, order_id, Action.MARK_DELIVERED, now=now)


async def daily_earnings(actor: Actor, now: Optional[datetime] = None) -> summaries.DailyTotal:
    require_role(actor, Role.RUNNER)
    return await summaries.fetch_runner_daily_earnings(actor, now=now)
