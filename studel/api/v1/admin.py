from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from uuid import UUID

from studel.core.auth import Actor, get_current_actor
from studel.models.order import OrderStatus
from studel.schemas.catalog import DeliveryZoneResponse, DeliveryZoneUpdate
from studel.schemas.order import OrderDetailResponse
from studel.schemas.response import ERROR_RESPONSES, SuccessResponse, ok
from studel.schemas.user import UserResponse
from studel.services import admin_ops

router = APIRouter(responses=ERROR_RESPONSES)


@router.get("/orders", response_model=SuccessResponse)
async def list_orders_endpoint(
    status: Optional[List[OrderStatus]] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=500),
    actor: Actor = Depends(get_current_actor),
):
    """All orders newest first, optionally narrowed to some statuses."""
    orders = await admin_ops.list_all_orders(actor, statuses=status, limit=limit)
    return ok([OrderDetailResponse.from_order(o) for o in orders])


@router.post("/orders/{order_id}/cancel", response_model=SuccessResponse)
async def force_cancel_endpoint(order_id: UUID, actor: Actor = Depends(get_current_actor)):
    """Force-cancels any order that is not yet delivered or cancelled."""
    order = await admin_ops.force_cancel(actor, order_id)
    return ok(OrderDetailResponse.from_order(order))


@router.get("/runners", response_model=SuccessResponse)
async def list_runners_endpoint(actor: Actor = Depends(get_current_actor)):
    runners = await admin_ops.list_runners(actor)
    return ok([UserResponse.model_validate(r) for r in runners])


@router.post("/runners/{runner_id}/approve", response_model=SuccessResponse)
async def approve_runner_endpoint(runner_id: UUID, actor: Actor = Depends(get_current_actor)):
    runner = await admin_ops.approve_runner(actor, runner_id)
    return ok(UserResponse.model_validate(runner))


@router.put("/delivery-zones/{zone_id}", response_model=SuccessResponse)
async def update_zone_endpoint(
    zone_id: UUID, payload: DeliveryZoneUpdate, actor: Actor = Depends(get_current_actor)
):
    zone = await admin_ops.update_delivery_zone(
        actor, zone_id, name=payload.name, delivery_fee=payload.delivery_fee
    )
    return ok(DeliveryZoneResponse.model_validate(zone))
