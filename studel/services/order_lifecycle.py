"""
Order status state machine.

Pure rules only: which role may trigger which transition, from which state,
and which extra fields the transition writes. Persistence and the
compare-and-swap write live in order_store; the role-scoped entry points live
in the *_ops modules.
"""
from enum import Enum
from typing import Any, Dict, FrozenSet, NamedTuple, Optional

from studel.core.auth import Actor
from studel.core.errors import AuthorizationDenied, StateConflict
from studel.models.order import Order, OrderStatus
from studel.models.user import Role

ORDER_STATUS_FLOW = [
    OrderStatus.PLACED,
    OrderStatus.ACCEPTED,
    OrderStatus.PREPARING,
    OrderStatus.READY_FOR_PICKUP,
    OrderStatus.PICKED_UP,
    OrderStatus.ARRIVING,
    OrderStatus.DELIVERED,
]

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})
ACTIVE_STATUSES = frozenset(s for s in OrderStatus if s not in TERMINAL_STATUSES)


class Action(str, Enum):
    VENDOR_ACCEPT = "vendor_accept"
    START_PREPARING = "start_preparing"
    MARK_READY = "mark_ready"
    RUNNER_ACCEPT = "runner_accept"
    MARK_ARRIVING = "mark_arriving"
    MARK_DELIVERED = "mark_delivered"
    CUSTOMER_CANCEL = "customer_cancel"
    FORCE_CANCEL = "force_cancel"


class TransitionRule(NamedTuple):
    role: Role
    from_statuses: FrozenSet[OrderStatus]
    to_status: OrderStatus


TRANSITIONS: Dict[Action, TransitionRule] = {
    Action.VENDOR_ACCEPT: TransitionRule(Role.CANTEEN, frozenset({OrderStatus.PLACED}), OrderStatus.ACCEPTED),
    Action.START_PREPARING: TransitionRule(Role.CANTEEN, frozenset({OrderStatus.ACCEPTED}), OrderStatus.PREPARING),
    Action.MARK_READY: TransitionRule(Role.CANTEEN, frozenset({OrderStatus.PREPARING}), OrderStatus.READY_FOR_PICKUP),
    Action.RUNNER_ACCEPT: TransitionRule(Role.RUNNER, frozenset({OrderStatus.READY_FOR_PICKUP}), OrderStatus.PICKED_UP),
    Action.MARK_ARRIVING: TransitionRule(Role.RUNNER, frozenset({OrderStatus.PICKED_UP}), OrderStatus.ARRIVING),
    Action.MARK_DELIVERED: TransitionRule(Role.RUNNER, frozenset({OrderStatus.ARRIVING}), OrderStatus.DELIVERED),
    Action.CUSTOMER_CANCEL: TransitionRule(Role.CUSTOMER, frozenset({OrderStatus.PLACED}), OrderStatus.CANCELLED),
    Action.FORCE_CANCEL: TransitionRule(Role.ADMIN, ACTIVE_STATUSES, OrderStatus.CANCELLED),
}


def progress_index(status: OrderStatus) -> Optional[int]:
    """Position of ``status`` in the delivery flow; ``None`` for Cancelled."""
    try:
        return ORDER_STATUS_FLOW.index(status)
    except ValueError:
        return None


def is_terminal(status: OrderStatus) -> bool:
    return status in TERMINAL_STATUSES


def require_role(actor: Actor, role: Role) -> None:
    if actor.role != role:
        raise AuthorizationDenied(f"This action requires the {role.value} role.")


def authorize(action: Action, actor: Actor, order: Order) -> None:
    """Checks role plus the ownership or approval relation the action needs."""
    rule = TRANSITIONS[action]
    require_role(actor, rule.role)

    if rule.role == Role.CANTEEN:
        if actor.vendor_id is None or actor.vendor_id != order.vendor_id:
            raise AuthorizationDenied("This order belongs to another vendor.")
    elif action == Action.RUNNER_ACCEPT:
        if not actor.is_approved:
            raise AuthorizationDenied("Runner account is awaiting admin approval.")
    elif rule.role == Role.RUNNER:
        if order.runner_id != actor.id:
            raise AuthorizationDenied("This delivery is assigned to another runner.")
    elif action == Action.CUSTOMER_CANCEL:
        if order.customer_id != actor.id:
            raise AuthorizationDenied("You can only cancel your own orders.")


def ensure_transition_allowed(action: Action, current: OrderStatus) -> None:
    rule = TRANSITIONS[action]
    if current not in rule.from_statuses:
        raise StateConflict(
            f"Order is {current.value}; cannot move it to {rule.to_status.value}. Refresh and try again."
        )


def transition_fields(action: Action, actor: Actor) -> Dict[str, Any]:
    """Extra columns written together with the status change."""
    if action == Action.RUNNER_ACCEPT:
        return {"runner_id": actor.id, "runner_name": actor.name}
    if action == Action.MARK_DELIVERED:
        return {"payment_collected": True}
    return {}
