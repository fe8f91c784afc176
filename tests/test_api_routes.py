from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from nextable.core.exceptions import InvalidLineItem, NotFoundError, PermissionDeniedError
from nextable.core.security import CurrentUser, get_current_user
from nextable.main import app
from nextable.models import AssignmentRole, OrderStatus, UserRole


@pytest.fixture
def client():
    app.dependency_overrides[get_current_user] = lambda: CurrentUser(user_id=7, role=UserRole.CUSTOMER)
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_order(**overrides):
    """Stand-in for an Order fetched with its relations."""
    item = SimpleNamespace(
        id=1,
        menu_item_id=11,
        menu_item=SimpleNamespace(name="Lasagna"),
        quantity=2,
        price_at_order=Decimal("10.00"),
        notes=None,
    )
    order = SimpleNamespace(
        id=42,
        restaurant_id=3,
        placed_by_id=7,
        placed_by=SimpleNamespace(email="guest@example.com"),
        table_id=None,
        table=None,
        status=OrderStatus.PENDING,
        total=Decimal("20.00"),
        notes=None,
        estimated_ready=None,
        created_at=datetime(2024, 5, 1, 12, 0),
        updated_at=datetime(2024, 5, 1, 12, 0),
        items=[item],
    )
    for key, value in overrides.items():
        setattr(order, key, value)
    return order


class TestOrderRoutes:
    def test_place_order_returns_201_with_items(self, client):
        """Test order creation returns the persisted order"""
        with patch("nextable.api.v1.orders.require_role", new_callable=AsyncMock) as mock_role, \
                patch("nextable.api.v1.orders.place_order", new_callable=AsyncMock) as mock_place_order:
            mock_role.return_value = AssignmentRole.CUSTOMER
            mock_place_order.return_value = make_order()

            response = client.post(
                "/api/v1/orders/3",
                json={"items": [{"menu_item_id": 11, "quantity": 2, "notes": "extra cheese"}]},
            )

            assert response.status_code == 201
            data = response.json()["data"]
            assert data["status"] == "pending"
            assert Decimal(data["total"]) == Decimal("20.00")
            assert Decimal(data["subtotal"]) == Decimal("20.00")
            assert data["items"][0]["name"] == "Lasagna"

            kwargs = mock_place_order.call_args.kwargs
            assert kwargs["user_id"] == 7
            assert kwargs["items"] == [{"menu_item_id": 11, "quantity": 2, "notes": "extra cheese"}]

    def test_place_order_empty_items(self, client):
        """Test validation for empty items"""
        with patch("nextable.api.v1.orders.require_role", new_callable=AsyncMock):
            response = client.post("/api/v1/orders/3", json={"items": []})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "order_rejected"

    def test_place_order_invalid_line_names_the_item(self, client):
        with patch("nextable.api.v1.orders.require_role", new_callable=AsyncMock), \
                patch("nextable.api.v1.orders.place_order", new_callable=AsyncMock) as mock_place_order:
            mock_place_order.side_effect = InvalidLineItem(
                "Menu item 12 not found or unavailable.", menu_item_id=12, quantity=1
            )

            response = client.post("/api/v1/orders/3", json={"items": [{"menu_item_id": 12, "quantity": 1}]})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["details"]["menu_item_id"] == 12
        assert response.json()["success"] is False

    def test_place_order_rejects_non_integer_quantities(self, client):
        with patch("nextable.api.v1.orders.require_role", new_callable=AsyncMock), \
                patch("nextable.api.v1.orders.place_order", new_callable=AsyncMock) as mock_place_order:
            for quantity in (True, "2", 1.5):
                response = client.post(
                    "/api/v1/orders/3", json={"items": [{"menu_item_id": 11, "quantity": quantity}]}
                )

                assert response.status_code == 422
                assert response.json()["error"]["code"] == "validation_error"

        mock_place_order.assert_not_called()

    def test_place_order_forbidden_for_chef(self, client):
        with patch("nextable.api.v1.orders.require_role", new_callable=AsyncMock) as mock_role, \
                patch("nextable.api.v1.orders.place_order", new_callable=AsyncMock) as mock_place_order:
            mock_role.side_effect = PermissionDeniedError("Unauthorized: Access to restaurant denied")

            response = client.post("/api/v1/orders/3", json={"items": [{"menu_item_id": 11, "quantity": 1}]})

        assert response.status_code == 403
        mock_place_order.assert_not_called()

    def test_get_order_not_found(self, client):
        with patch("nextable.api.v1.orders.require_role", new_callable=AsyncMock), \
                patch("nextable.api.v1.orders.get_order", new_callable=AsyncMock) as mock_get_order:
            mock_get_order.side_effect = NotFoundError("Order not found")

            response = client.get("/api/v1/orders/3/99")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "not_found"

    def test_list_orders_rejects_unknown_status(self, client):
        with patch("nextable.api.v1.orders.require_role", new_callable=AsyncMock):
            response = client.get("/api/v1/orders/3", params={"status": "teleported"})

        assert response.status_code == 422

    def test_update_order_passes_only_present_fields(self, client):
        with patch("nextable.api.v1.orders.require_role", new_callable=AsyncMock), \
                patch("nextable.api.v1.orders.update_order", new_callable=AsyncMock) as mock_update:
            mock_update.return_value = make_order(status=OrderStatus.SERVED)

            response = client.put("/api/v1/orders/3/42", json={"status": "served"})

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "served"
        mock_update.assert_called_once_with(42, 3, {"status": OrderStatus.SERVED})


class TestMenuRoutes:
    def test_price_zero_is_a_real_update(self, client):
        with patch("nextable.api.v1.menu.require_role", new_callable=AsyncMock), \
                patch("nextable.api.v1.menu.update_menu_item", new_callable=AsyncMock) as mock_update:
            mock_update.return_value = SimpleNamespace(
                id=11, restaurant_id=3, name="Water", description=None, price=Decimal("0"),
                category="Drinks", image_url=None, is_available=True, allergens=[], modifiers={},
                created_at=None,
            )

            response = client.put("/api/v1/menu/3/11", json={"price": 0})

        assert response.status_code == 200
        mock_update.assert_called_once_with(11, 3, {"price": Decimal("0")})

    def test_negative_price_is_rejected(self, client):
        with patch("nextable.api.v1.menu.require_role", new_callable=AsyncMock):
            response = client.post("/api/v1/menu/3", json={"name": "Soup", "price": -1, "category": "Starters"})

        assert response.status_code == 422


class TestAuth:
    def test_missing_token_is_rejected(self):
        response = TestClient(app).get("/api/v1/restaurants")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "unauthorized"

    def test_garbage_token_is_rejected(self):
        response = TestClient(app).get(
            "/api/v1/users/profile", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401
