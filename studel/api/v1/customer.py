from fastapi import APIRouter, Depends, status
from uuid import UUID

from studel.core.auth import Actor, get_current_actor
from studel.schemas.order import OrderDetailResponse, OrderRequest
from studel.schemas.response import ERROR_RESPONSES, SuccessResponse, ok
from studel.services import customer_ops

router = APIRouter(responses=ERROR_RESPONSES)


@router.post("/orders", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def place_order_endpoint(request_data: OrderRequest, actor: Actor = Depends(get_current_actor)):
    """
    Places a new order from the submitted cart. Prices and the delivery fee
    are snapshotted now; payment is collected by the runner on delivery.
    """
    items = [{"product_id": item.product_id, "quantity": item.quantity} for item in request_data.items]
    order = await customer_ops.place_order(actor, items, request_data.delivery_zone_id)
    return ok(OrderDetailResponse.from_order(order))


@router.get("/orders", response_model=SuccessResponse)
async def list_my_orders_endpoint(actor: Actor = Depends(get_current_actor)):
    """Lists the customer's orders, newest first."""
    orders = await customer_ops.list_my_orders(actor)
    return ok([OrderDetailResponse.from_order(o) for o in orders])


@router.post("/orders/{order_id}/cancel", response_model=SuccessResponse)
async def cancel_order_endpoint(order_id: UUID, actor: Actor = Depends(get_current_actor)):
    """Cancels the order while the vendor has not yet accepted it."""
    order = await customer_ops.cancel_order(actor, order_id)
    return ok(OrderDetailResponse.from_order(order))
