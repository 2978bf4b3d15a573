from fastapi import APIRouter, Depends, status

from studel.core.auth import Actor, get_current_actor
from studel.schemas.response import ERROR_RESPONSES, SuccessResponse, ok
from studel.schemas.user import UserRegistration, UserResponse
from studel.services import user_service

router = APIRouter(responses={k: ERROR_RESPONSES[k] for k in (400, 401, 403, 404)})


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def register_user_endpoint(payload: UserRegistration):
    """
    Creates the profile for an identity verified by the identity provider.
    Runners start unapproved until an admin approves them.
    """
    user = await user_service.register_user(
        name=payload.name,
        role=payload.role,
        phone=payload.phone,
        email=payload.email,
        campus_id=payload.campus_id,
        vendor_id=payload.vendor_id,
    )
    return ok(UserResponse.model_validate(user))


@router.get("/me", response_model=SuccessResponse)
async def me_endpoint(actor: Actor = Depends(get_current_actor)):
    user = await user_service.get_user(actor.id)
    return ok(UserResponse.model_validate(user))
