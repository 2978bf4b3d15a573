import logging
from typing import List, Optional
from uuid import UUID

from studel.core.errors import AuthorizationDenied, NotFound, ValidationFailed
from studel.models.catalog import Vendor
from studel.models.user import Role, User

log = logging.getLogger(__name__)


async def register_user(
    name: str,
    role: Role,
    phone: Optional[str] = None,
    email: Optional[str] = None,
    campus_id: Optional[str] = None,
    vendor_id: Optional[UUID] = None,
) -> User:
    """
    Creates the profile for an identity the provider has already verified.
    Runners start unapproved and need a campus id; canteen staff need the
    vendor they work for. Admin profiles are never self-registered.
    """
    if not name or not name.strip():
        raise ValidationFailed("Name is required.")
    if role == Role.ADMIN:
        raise AuthorizationDenied("Admin accounts cannot be self-registered.")
    if role == Role.RUNNER and not (campus_id and campus_id.strip()):
        raise ValidationFailed("Runners must provide a campus ID.")
    if role == Role.CANTEEN:
        if vendor_id is None:
            raise ValidationFailed("Canteen staff must be linked to a vendor.")
        if not await Vendor.filter(id=vendor_id).exists():
            raise NotFound(f"Vendor {vendor_id} not found.")
    if phone and await User.filter(phone=phone).exists():
        raise ValidationFailed("A user with this phone number already exists.")

    user = await User.create(
        name=name.strip(),
        role=role,
        phone=phone,
        email=email,
        campus_id=campus_id.strip() if role == Role.RUNNER else None,
        vendor_id=vendor_id if role == Role.CANTEEN else None,
        is_approved=role != Role.RUNNER,
    )
    log.info(f"Registered {role.value} {user.id}.")
    return user


async def get_user(user_id: UUID) -> User:
    user = await User.get_or_none(id=user_id)
    if user is None:
        raise NotFound(f"User {user_id} not found.")
    return user


async def list_runners() -> List[User]:
    return await User.filter(role=Role.RUNNER).order_by("name")


async def approve_runner(user_id: UUID) -> User:
    user = await get_user(user_id)
    if user.role != Role.RUNNER:
        raise ValidationFailed("Only runner accounts need approval.")
    if not user.is_approved:
        user.is_approved = True
        await user.save(update_fields=["is_approved"])
        log.info(f"Runner {user_id} approved.")
    return user
