from decimal import Decimal
from uuid import uuid4

import httpx
import pytest
import pytest_asyncio

from studel.core.auth import create_access_token
from studel.main import app


@pytest_asyncio.fixture
async def client(world):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def auth(actor):
    return {"Authorization": f"Bearer {create_access_token(actor.id)}"}


async def _place(client, world):
    response = await client.post(
        "/api/v1/customer/orders",
        json={
            "delivery_zone_id": str(world.zone.id),
            "items": [
                {"product_id": str(world.dosa.id), "quantity": 2},
                {"product_id": str(world.idli.id), "quantity": 1},
            ],
        },
        headers=auth(world.customer),
    )
    assert response.status_code == 201
    return response.json()["data"]


class TestOrderRoutes:
    @pytest.mark.asyncio
    async def test_place_order(self, client, world):
        data = await _place(client, world)
        assert data["status"] == "Placed"
        assert Decimal(data["total_price"]) == Decimal("320")
        assert Decimal(data["final_amount"]) == Decimal("345")
        assert data["progress_index"] == 0
        assert data["delivery_zone"]["name"] == "Zone 25"
        assert [h["status"] for h in data["status_history"]] == ["Placed"]

    @pytest.mark.asyncio
    async def test_missing_token_is_401(self, client, world):
        response = await client.get("/api/v1/customer/orders")
        assert response.status_code == 401
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_bad_token_is_401(self, client, world):
        response = await client.get("/api/v1/customer/orders", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_empty_cart_is_400(self, client, world):
        response = await client.post(
            "/api/v1/customer/orders",
            json={"delivery_zone_id": str(world.zone.id), "items": []},
            headers=auth(world.customer),
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "validation_error"

    @pytest.mark.asyncio
    async def test_malformed_body_is_422(self, client, world):
        response = await client.post(
            "/api/v1/customer/orders",
            json={"items": "nope"},
            headers=auth(world.customer),
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_full_lifecycle_over_http(self, client, world):
        order = await _place(client, world)
        oid = order["id"]

        for step in ("accept", "preparing", "ready"):
            response = await client.post(f"/api/v1/vendor/orders/{oid}/{step}", headers=auth(world.vendor_staff))
            assert response.status_code == 200

        available = await client.get("/api/v1/runner/orders/available", headers=auth(world.runner))
        assert [o["id"] for o in available.json()["data"]] == [oid]

        response = await client.post(f"/api/v1/runner/orders/{oid}/accept", headers=auth(world.runner))
        assert response.json()["data"]["runner_id"] == str(world.runner.id)

        response = await client.post(f"/api/v1/runner/orders/{oid}/accept", headers=auth(world.other_runner))
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "state_conflict"

        active = await client.get("/api/v1/runner/orders/active", headers=auth(world.runner))
        assert active.json()["data"]["id"] == oid

        await client.post(f"/api/v1/runner/orders/{oid}/arriving", headers=auth(world.runner))
        response = await client.post(f"/api/v1/runner/orders/{oid}/delivered", headers=auth(world.runner))
        data = response.json()["data"]
        assert data["status"] == "Delivered"
        assert data["payment_collected"] is True
        assert data["is_terminal"] is True
        assert len(data["status_history"]) == 7

        earnings = await client.get("/api/v1/runner/earnings/today", headers=auth(world.runner))
        assert Decimal(earnings.json()["data"]["total"]) == Decimal("25")
        assert earnings.json()["data"]["order_count"] == 1

        summary = await client.get("/api/v1/vendor/summary/today", headers=auth(world.vendor_staff))
        assert Decimal(summary.json()["data"]["total"]) == Decimal("320")

        response = await client.post(f"/api/v1/admin/orders/{oid}/cancel", headers=auth(world.admin))
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_other_vendor_gets_403(self, client, world):
        order = await _place(client, world)
        response = await client.post(f"/api/v1/vendor/orders/{order['id']}/accept", headers=auth(world.bakery_staff))
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "authorization_denied"

    @pytest.mark.asyncio
    async def test_unknown_order_is_404(self, client, world):
        response = await client.post(f"/api/v1/admin/orders/{uuid4()}/cancel", headers=auth(world.admin))
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "not_found"

    @pytest.mark.asyncio
    async def test_customer_cancel_and_view(self, client, world):
        order = await _place(client, world)
        response = await client.post(f"/api/v1/customer/orders/{order['id']}/cancel", headers=auth(world.customer))
        data = response.json()["data"]
        assert data["status"] == "Cancelled"
        assert data["progress_index"] is None

        view = await client.get(f"/api/v1/orders/{order['id']}", headers=auth(world.customer))
        assert view.status_code == 200
        view = await client.get(f"/api/v1/orders/{order['id']}", headers=auth(world.other_customer))
        assert view.status_code == 403


class TestCatalogAndAdminRoutes:
    @pytest.mark.asyncio
    async def test_catalog_listing(self, client, world):
        vendors = await client.get("/api/v1/catalog/vendors")
        assert {v["name"] for v in vendors.json()["data"]} == {"South Indian Canteen", "The Bake Shop"}

        products = await client.get(f"/api/v1/catalog/vendors/{world.canteen.id}/products")
        assert len(products.json()["data"]) == 3

        zones = await client.get("/api/v1/catalog/delivery-zones")
        assert len(zones.json()["data"]) == 4

    @pytest.mark.asyncio
    async def test_runner_registration_and_approval(self, client, world):
        response = await client.post("/api/v1/users/", json={"name": "Frank White", "role": "Runner"})
        assert response.status_code == 400

        response = await client.post(
            "/api/v1/users/",
            json={"name": "Frank White", "role": "Runner", "campus_id": "RUN004", "phone": "6666666666"},
        )
        assert response.status_code == 201
        runner = response.json()["data"]
        assert runner["is_approved"] is False

        response = await client.post(f"/api/v1/admin/runners/{runner['id']}/approve", headers=auth(world.runner))
        assert response.status_code == 403

        response = await client.post(f"/api/v1/admin/runners/{runner['id']}/approve", headers=auth(world.admin))
        assert response.json()["data"]["is_approved"] is True

    @pytest.mark.asyncio
    async def test_zone_fee_update_does_not_touch_placed_orders(self, client, world):
        order = await _place(client, world)
        response = await client.put(
            f"/api/v1/admin/delivery-zones/{world.zone.id}",
            json={"delivery_fee": "40"},
            headers=auth(world.admin),
        )
        assert Decimal(response.json()["data"]["delivery_fee"]) == Decimal("40")

        view = await client.get(f"/api/v1/orders/{order['id']}", headers=auth(world.admin))
        assert Decimal(view.json()["data"]["delivery_fee"]) == Decimal("25")

    @pytest.mark.asyncio
    async def test_vendor_toggles_availability(self, client, world):
        response = await client.patch(
            f"/api/v1/vendor/products/{world.dosa.id}/availability",
            json={"is_available": False},
            headers=auth(world.vendor_staff),
        )
        assert response.json()["data"]["is_available"] is False

    @pytest.mark.asyncio
    async def test_admin_lists_orders_by_status(self, client, world):
        await _place(client, world)
        response = await client.get("/api/v1/admin/orders", params={"status": "Placed"}, headers=auth(world.admin))
        assert len(response.json()["data"]) == 1
        response = await client.get("/api/v1/admin/orders", params={"status": "Delivered"}, headers=auth(world.admin))
        assert response.json()["data"] == []
