from fastapi import APIRouter
from uuid import UUID

from studel.schemas.catalog import DeliveryZoneResponse, ProductResponse, VendorResponse
from studel.schemas.response import ERROR_RESPONSES, SuccessResponse, ok
from studel.services import catalog_service

router = APIRouter(responses={404: ERROR_RESPONSES[404]})


@router.get("/vendors", response_model=SuccessResponse)
async def list_vendors_endpoint():
    """Lists active vendors (canteens and shops)."""
    vendors = await catalog_service.list_vendors()
    return ok([VendorResponse.model_validate(v) for v in vendors])


@router.get("/vendors/{vendor_id}", response_model=SuccessResponse)
async def get_vendor_endpoint(vendor_id: UUID):
    vendor = await catalog_service.get_vendor(vendor_id)
    return ok(VendorResponse.model_validate(vendor))


@router.get("/vendors/{vendor_id}/products", response_model=SuccessResponse)
async def list_products_endpoint(vendor_id: UUID):
    """Lists a vendor's products, including unavailable ones (shown greyed out)."""
    products = await catalog_service.list_products(vendor_id)
    return ok([ProductResponse.model_validate(p) for p in products])


@router.get("/delivery-zones", response_model=SuccessResponse)
async def list_delivery_zones_endpoint():
    zones = await catalog_service.list_delivery_zones()
    return ok([DeliveryZoneResponse.model_validate(z) for z in zones])
