from types import SimpleNamespace
from uuid import uuid4

import pytest

from studel.core.auth import Actor
from studel.core.errors import AuthorizationDenied, StateConflict
from studel.models.order import OrderStatus
from studel.models.user import Role
from studel.services.order_lifecycle import (
    ORDER_STATUS_FLOW,
    TERMINAL_STATUSES,
    TRANSITIONS,
    Action,
    authorize,
    ensure_transition_allowed,
    is_terminal,
    progress_index,
    transition_fields,
)

VENDOR = uuid4()


def actor(role, **kw):
    return Actor(id=kw.pop("id", uuid4()), name="Test User", role=role, **kw)


def order(**kw):
    defaults = dict(customer_id=uuid4(), vendor_id=VENDOR, runner_id=None, status=OrderStatus.PLACED)
    defaults.update(kw)
    return SimpleNamespace(**defaults)


def test_progress_index_follows_flow():
    assert [progress_index(s) for s in ORDER_STATUS_FLOW] == list(range(7))
    assert progress_index(OrderStatus.CANCELLED) is None


def test_terminal_states_have_no_outgoing_transitions():
    assert TERMINAL_STATUSES == {OrderStatus.DELIVERED, OrderStatus.CANCELLED}
    for rule in TRANSITIONS.values():
        assert not (rule.from_statuses & TERMINAL_STATUSES)
    assert is_terminal(OrderStatus.DELIVERED)
    assert not is_terminal(OrderStatus.ARRIVING)


def test_flow_steps_are_consecutive():
    steps = [
        Action.VENDOR_ACCEPT,
        Action.START_PREPARING,
        Action.MARK_READY,
        Action.RUNNER_ACCEPT,
        Action.MARK_ARRIVING,
        Action.MARK_DELIVERED,
    ]
    for i, action in enumerate(steps):
        rule = TRANSITIONS[action]
        assert rule.from_statuses == {ORDER_STATUS_FLOW[i]}
        assert rule.to_status == ORDER_STATUS_FLOW[i + 1]


def test_force_cancel_allowed_from_every_active_state():
    for status in OrderStatus:
        if status in TERMINAL_STATUSES:
            with pytest.raises(StateConflict):
                ensure_transition_allowed(Action.FORCE_CANCEL, status)
        else:
            ensure_transition_allowed(Action.FORCE_CANCEL, status)


def test_customer_cancel_only_from_placed():
    ensure_transition_allowed(Action.CUSTOMER_CANCEL, OrderStatus.PLACED)
    with pytest.raises(StateConflict):
        ensure_transition_allowed(Action.CUSTOMER_CANCEL, OrderStatus.ACCEPTED)


def test_vendor_must_own_order():
    authorize(Action.VENDOR_ACCEPT, actor(Role.CANTEEN, vendor_id=VENDOR), order())
    with pytest.raises(AuthorizationDenied):
        authorize(Action.VENDOR_ACCEPT, actor(Role.CANTEEN, vendor_id=uuid4()), order())
    with pytest.raises(AuthorizationDenied):
        authorize(Action.VENDOR_ACCEPT, actor(Role.CANTEEN), order())


def test_runner_accept_requires_approval():
    authorize(Action.RUNNER_ACCEPT, actor(Role.RUNNER, is_approved=True), order())
    with pytest.raises(AuthorizationDenied):
        authorize(Action.RUNNER_ACCEPT, actor(Role.RUNNER, is_approved=False), order())


def test_runner_steps_require_assignment():
    runner = actor(Role.RUNNER)
    authorize(Action.MARK_ARRIVING, runner, order(runner_id=runner.id))
    with pytest.raises(AuthorizationDenied):
        authorize(Action.MARK_DELIVERED, runner, order(runner_id=uuid4()))


def test_role_mismatch_is_denied():
    with pytest.raises(AuthorizationDenied):
        authorize(Action.FORCE_CANCEL, actor(Role.CUSTOMER), order())
    with pytest.raises(AuthorizationDenied):
        authorize(Action.CUSTOMER_CANCEL, actor(Role.ADMIN), order())


def test_transition_fields():
    runner = actor(Role.RUNNER)
    assert transition_fields(Action.RUNNER_ACCEPT, runner) == {"runner_id": runner.id, "runner_name": "Test User"}
    assert transition_fields(Action.MARK_DELIVERED, runner) == {"payment_collected": True}
    assert transition_fields(Action.VENDOR_ACCEPT, runner) == {}
