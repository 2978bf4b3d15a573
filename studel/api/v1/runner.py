from fastapi import APIRouter, Depends
from uuid import UUID

from studel.core.auth import Actor, get_current_actor
from studel.schemas.order import DailyTotalResponse, OrderDetailResponse
from studel.schemas.response import ERROR_RESPONSES, SuccessResponse, ok
from studel.services import runner_ops

router = APIRouter(responses=ERROR_RESPONSES)


@router.get("/orders/available", response_model=SuccessResponse)
async def list_available_endpoint(actor: Actor = Depends(get_current_actor)):
    """Orders ready for pickup that any approved runner may claim."""
    orders = await runner_ops.list_available_orders(actor)
    return ok([OrderDetailResponse.from_order(o) for o in orders])


@router.get("/orders/active", response_model=SuccessResponse)
async def active_order_endpoint(actor: Actor = Depends(get_current_actor)):
    """The runner's in-flight delivery, or null."""
    order = await runner_ops.get_active_order(actor)
    return ok(OrderDetailResponse.from_order(order) if order else None)


@router.post("/orders/{order_id}/accept", response_model=SuccessResponse)
async def accept_delivery_endpoint(order_id: UUID, actor: Actor = Depends(get_current_actor)):
    """Claims the order; the first runner to commit wins, others get 409."""
    order = await runner_ops.accept_delivery(actor, order_id)
    return ok(OrderDetailResponse.from_order(order))


@router.post("/orders/{order_id}/arriving", response_model=SuccessResponse)
async def mark_arriving_endpoint(order_id: UUID, actor: Actor = Depends(get_current_actor)):
    order = await runner_ops.mark_arriving(actor, order_id)
    return ok(OrderDetailResponse.from_order(order))


@router.post("/orders/{order_id}/delivered", response_model=SuccessResponse)
async def mark_delivered_endpoint(order_id: UUID, actor: Actor = Depends(get_current_actor)):
    """Completes the delivery and records the payment as collected."""
    order = await runner_ops.mark_delivered(actor, order_id)
    return ok(OrderDetailResponse.from_order(order))


@router.get("/earnings/today", response_model=SuccessResponse)
async def earnings_today_endpoint(actor: Actor = Depends(get_current_actor)):
    summary = await runner_ops.daily_earnings(actor)
    return ok(DailyTotalResponse.from_total(summary))
