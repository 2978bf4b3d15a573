"""
Cart-to-order assembly.

A cart collects product snapshots for a single vendor. Prices are copied from
the product when the line is added, so later catalog edits never reach a
placed order.
"""
import uuid
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel

from studel.core.errors import NotFound, ValidationFailed
from studel.models.catalog import DeliveryZone, Product


class CartLine(BaseModel):
    product_id: uuid.UUID
    name: str
    unit_price: Decimal
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class OrderDraft(BaseModel):
    """Everything the store needs to persist a new order."""
    customer_id: uuid.UUID
    customer_name: str
    vendor_id: uuid.UUID
    items: List[CartLine]
    delivery_zone_id: uuid.UUID
    delivery_zone_name: str
    delivery_fee: Decimal


class Cart:
    def __init__(self):
        self.vendor_id: Optional[uuid.UUID] = None
        self._lines: Dict[uuid.UUID, CartLine] = {}

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def total_price(self) -> Decimal:
        return sum((line.line_total for line in self._lines.values()), Decimal("0"))

    def add(self, product: Product, quantity: int = 1, replace: bool = False) -> CartLine:
        """
        Adds ``quantity`` of ``product``. A product from another vendor is
        rejected unless ``replace`` is set, in which case the cart is emptied
        first.
        """
        if quantity < 1:
            raise ValidationFailed(f"Quantity for {product.name} must be at least 1.")
        if self.vendor_id is not None and product.vendor_id != self.vendor_id:
            if not replace:
                raise ValidationFailed("Your cart has items from another shop. Clear the cart to add this item.")
            self.clear()

        self.vendor_id = product.vendor_id
        line = self._lines.get(product.id)
        if line is None:
            line = CartLine(product_id=product.id, name=product.name, unit_price=product.price, quantity=0)
            self._lines[product.id] = line
        line.quantity += quantity
        return line

    def set_quantity(self, product_id: uuid.UUID, quantity: int) -> None:
        if quantity < 0:
            raise ValidationFailed("Quantity cannot be negative.")
        if product_id not in self._lines:
            raise NotFound(f"Product {product_id} is not in the cart.")
        if quantity == 0:
            del self._lines[product_id]
            if not self._lines:
                self.vendor_id = None
        else:
            self._lines[product_id].quantity = quantity

    def clear(self) -> None:
        self._lines.clear()
        self.vendor_id = None

    def to_draft(self, customer_id: uuid.UUID, customer_name: str, zone: DeliveryZone) -> OrderDraft:
        if self.is_empty:
            raise ValidationFailed("Order must contain items.")
        return OrderDraft(
            customer_id=customer_id,
            customer_name=customer_name,
            vendor_id=self.vendor_id,
            items=self.lines,
            delivery_zone_id=zone.id,
            delivery_zone_name=zone.name,
            delivery_fee=zone.delivery_fee,
        )
