from fastapi import APIRouter, Depends
from uuid import UUID

from studel.core.auth import Actor, get_current_actor
from studel.schemas.order import OrderDetailResponse
from studel.schemas.response import ERROR_RESPONSES, SuccessResponse, ok
from studel.services.order_service import view_order

router = APIRouter(responses={k: ERROR_RESPONSES[k] for k in (401, 403, 404)})


@router.get("/{order_id}", response_model=SuccessResponse)
async def get_order_endpoint(order_id: UUID, actor: Actor = Depends(get_current_actor)):
    """Fetches an order snapshot with items, history and progress for any party to it."""
    order = await view_order(actor, order_id)
    return ok(OrderDetailResponse.from_order(order))
