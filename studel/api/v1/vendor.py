from fastapi import APIRouter, Depends
from uuid import UUID

from studel.core.auth import Actor, get_current_actor
from studel.schemas.catalog import AvailabilityUpdate, ProductResponse
from studel.schemas.order import DailyTotalResponse, OrderDetailResponse
from studel.schemas.response import ERROR_RESPONSES, SuccessResponse, ok
from studel.services import vendor_ops

router = APIRouter(responses=ERROR_RESPONSES)


@router.get("/orders", response_model=SuccessResponse)
async def vendor_queue_endpoint(actor: Actor = Depends(get_current_actor)):
    """The vendor's open orders, newest first. Clients poll this every few seconds."""
    orders = await vendor_ops.list_vendor_queue(actor)
    return ok([OrderDetailResponse.from_order(o) for o in orders])


@router.post("/orders/{order_id}/accept", response_model=SuccessResponse)
async def accept_order_endpoint(order_id: UUID, actor: Actor = Depends(get_current_actor)):
    order = await vendor_ops.accept_order(actor, order_id)
    return ok(OrderDetailResponse.from_order(order))


@router.post("/orders/{order_id}/preparing", response_model=SuccessResponse)
async def start_preparing_endpoint(order_id: UUID, actor: Actor = Depends(get_current_actor)):
    order = await vendor_ops.start_preparing(actor, order_id)
    return ok(OrderDetailResponse.from_order(order))


@router.post("/orders/{order_id}/ready", response_model=SuccessResponse)
async def mark_ready_endpoint(order_id: UUID, actor: Actor = Depends(get_current_actor)):
    """Marks the order ready; it then appears in the runners' marketplace."""
    order = await vendor_ops.mark_ready(actor, order_id)
    return ok(OrderDetailResponse.from_order(order))


@router.get("/summary/today", response_model=SuccessResponse)
async def summary_today_endpoint(actor: Actor = Depends(get_current_actor)):
    """Today's order count and revenue, delivery fees excluded."""
    summary = await vendor_ops.daily_summary(actor)
    return ok(DailyTotalResponse.from_total(summary))


@router.patch("/products/{product_id}/availability", response_model=SuccessResponse)
async def product_availability_endpoint(
    product_id: UUID, payload: AvailabilityUpdate, actor: Actor = Depends(get_current_actor)
):
    product = await vendor_ops.set_product_availability(actor, product_id, payload.is_available)
    return ok(ProductResponse.model_validate(product))
