from decimal import Decimal
from types import SimpleNamespace

import pytest_asyncio

from studel.core.auth import Actor
from studel.core.db import init_db, close_db
from studel.models.catalog import DeliveryZone, Product, Vendor
from studel.models.user import Role, User


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory SQLite database for each test."""
    await init_db("sqlite://:memory:", generate_schemas=True)
    yield
    await close_db()


async def _user(name, role, **extra):
    user = await User.create(name=name, role=role, **extra)
    return Actor.from_user(user)


@pytest_asyncio.fixture
async def world(db):
    """Two vendors, their products, a few zones and one user per role."""
    canteen = await Vendor.create(name="South Indian Canteen", operating_hours="8:00 AM - 9:00 PM")
    bakery = await Vendor.create(name="The Bake Shop")

    dosa = await Product.create(vendor=canteen, name="Masala Dosa", price=Decimal("120"), category="Main Course")
    idli = await Product.create(vendor=canteen, name="Idli Sambar", price=Decimal("80"), category="Main Course")
    vada = await Product.create(vendor=canteen, name="Medu Vada", price=Decimal("50"), is_available=False)
    cake = await Product.create(vendor=bakery, name="Truffle Cake", price=Decimal("150"), category="Desserts")

    zones = {}
    for fee in ("20", "25", "30", "100"):
        zones[fee] = await DeliveryZone.create(name=f"Zone {fee}", delivery_fee=Decimal(fee))

    return SimpleNamespace(
        canteen=canteen,
        bakery=bakery,
        dosa=dosa,
        idli=idli,
        vada=vada,
        cake=cake,
        zones=zones,
        zone=zones["25"],
        customer=await _user("Alice Johnson", Role.CUSTOMER, phone="1111111111"),
        other_customer=await _user("Bob Williams", Role.CUSTOMER, phone="2222222222"),
        runner=await _user("Charlie Brown", Role.RUNNER, campus_id="RUN001", is_approved=True),
        other_runner=await _user("Diana Miller", Role.RUNNER, campus_id="RUN002", is_approved=True),
        pending_runner=await _user("Eve Davis", Role.RUNNER, campus_id="RUN003", is_approved=False),
        vendor_staff=await _user("Henry Taylor", Role.CANTEEN, vendor_id=canteen.id),
        bakery_staff=await _user("Iris Baker", Role.CANTEEN, vendor_id=bakery.id),
        admin=await _user("Ivy Green", Role.ADMIN),
    )

