"""Read-only catalog lookups used by order placement, plus the two catalog writes."""
import logging
from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

from studel.core.errors import NotFound, ValidationFailed
from studel.models.catalog import DeliveryZone, Product, Vendor

log = logging.getLogger(__name__)


async def list_vendors() -> List[Vendor]:
    return await Vendor.filter(is_active=True).order_by("name")


async def get_vendor(vendor_id: UUID) -> Vendor:
    vendor = await Vendor.get_or_none(id=vendor_id)
    if vendor is None:
        raise NotFound(f"Vendor {vendor_id} not found.")
    return vendor


async def list_products(vendor_id: UUID) -> List[Product]:
    await get_vendor(vendor_id)
    return await Product.filter(vendor_id=vendor_id).order_by("category", "name")


async def get_products(product_ids: Iterable[UUID]) -> List[Product]:
    """Fetches every product in ``product_ids``; a missing one is NotFound."""
    wanted = set(product_ids)
    products = await Product.filter(id__in=list(wanted))
    missing = wanted - {p.id for p in products}
    if missing:
        raise NotFound(f"Product {sorted(str(m) for m in missing)[0]} not found.")
    return products


async def get_product(product_id: UUID) -> Product:
    product = await Product.get_or_none(id=product_id)
    if product is None:
        raise NotFound(f"Product {product_id} not found.")
    return product


async def update_product_availability(product_id: UUID, is_available: bool) -> Product:
    product = await get_product(product_id)
    product.is_available = is_available
    await product.save(update_fields=["is_available"])
    log.info(f"Product {product_id} availability set to {is_available}.")
    return product


async def list_delivery_zones() -> List[DeliveryZone]:
    return await DeliveryZone.all().order_by("name")


async def get_delivery_zone(zone_id: UUID) -> DeliveryZone:
    zone = await DeliveryZone.get_or_none(id=zone_id)
    if zone is None:
        raise NotFound(f"Delivery zone {zone_id} not found.")
    return zone


async def update_delivery_zone(zone_id: UUID, name: Optional[str] = None, delivery_fee: Optional[Decimal] = None) -> DeliveryZone:
    """Edits a zone. Orders already placed keep the fee they were created with."""
    if delivery_fee is not None and delivery_fee < 0:
        raise ValidationFailed("Delivery fee cannot be negative.")
    if name is not None and not name.strip():
        raise ValidationFailed("Zone name cannot be empty.")

    zone = await get_delivery_zone(zone_id)
    if name is not None:
        zone.name = name.strip()
    if delivery_fee is not None:
        zone.delivery_fee = delivery_fee
    await zone.save()
    log.info(f"Delivery zone {zone_id} updated: {zone.name} / {zone.delivery_fee}.")
    return zone
