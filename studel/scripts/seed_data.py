# studel/scripts/seed_data.py
import asyncio
import logging
from decimal import Decimal

from studel.core.auth import create_access_token
from studel.core.db import init_db, close_db
from studel.models.catalog import DeliveryZone, Product, Vendor
from studel.models.user import Role, User

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("seed_data")

VENDORS = [
    ("South Indian Canteen", "8:00 AM - 9:00 PM", [
        ("Masala Dosa", "Crispy rice crepe filled with spiced potatoes.", "120", "Main Course", True),
        ("Idli Sambar", "Steamed rice cakes served with lentil soup.", "80", "Main Course", True),
        ("Filter Coffee", "Traditional South Indian filter coffee.", "40", "Beverages", True),
    ]),
    ("North Indian Canteen", "11:00 AM - 10:00 PM", [
        ("Butter Chicken", "Creamy tomato-based curry with tender chicken.", "250", "Main Course", True),
        ("Garlic Naan", "Soft flatbread with garlic and butter.", "60", "Sides", True),
        ("Lassi", "A refreshing yogurt-based drink.", "70", "Beverages", True),
    ]),
    ("The Bake Shop", "10:00 AM - 8:00 PM", [
        ("Chocolate Truffle Cake", "Rich and decadent chocolate cake slice.", "150", "Desserts", True),
        ("Red Velvet Pastry", "Cream cheese frosting on a moist red velvet base.", "130", "Desserts", False),
    ]),
    ("Campus Xerox", "9:00 AM - 6:00 PM", [
        ("B&W Print (A4)", "Single-sided black and white print.", "2", "Printing", True),
        ("Spiral Binding", "Per book, up to 100 pages.", "50", "Binding", True),
    ]),
]

ZONES = [
    ("Innovation Hall (Building A)", "20"),
    ("Library Commons (Building B)", "25"),
    ("Science Center (Building C)", "22"),
]


async def seed():
    vendors = {}
    for name, hours, products in VENDORS:
        vendor, _ = await Vendor.get_or_create(name=name, defaults={"operating_hours": hours})
        vendors[name] = vendor
        for p_name, desc, price, category, available in products:
            await Product.get_or_create(
                vendor=vendor,
                name=p_name,
                defaults={
                    "description": desc,
                    "price": Decimal(price),
                    "category": category,
                    "is_available": available,
                },
            )
    log.info(f"Vendors: {', '.join(f'{n}={v.id}' for n, v in vendors.items())}")

    for name, fee in ZONES:
        await DeliveryZone.get_or_create(name=name, defaults={"delivery_fee": Decimal(fee)})
    log.info("Delivery zones seeded.")

    users = [
        ("Alice Johnson", "1111111111", Role.CUSTOMER, {}),
        ("Charlie Brown", "3333333333", Role.RUNNER, {"campus_id": "RUN001", "is_approved": True}),
        ("Eve Davis", "5555555555", Role.RUNNER, {"campus_id": "RUN003", "is_approved": False}),
        ("Henry Taylor", "8888888888", Role.CANTEEN, {"vendor_id": vendors["South Indian Canteen"].id}),
        ("Ivy Green", "9999999999", Role.ADMIN, {}),
    ]
    for name, phone, role, extra in users:
        user, _ = await User.get_or_create(phone=phone, defaults={"name": name, "role": role, **extra})
        # Development tokens only; real tokens come from the identity provider
        log.info(f"{role.value} {name}: {create_access_token(user.id)}")


async def main():
    await init_db()
    try:
        await seed()
    finally:
        await close_db()

if __name__ == "__main__":
    asyncio.run(main())
