"""Fixtures for API tests: records created through the HTTP surface."""

import pytest
from httpx import AsyncClient


@pytest.fixture
async def supplier_id(client: AsyncClient) -> int:
    response = await client.post("/api/suppliers", json={"name": "Acme Wholesale"})
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
async def customer_id(client: AsyncClient) -> int:
    response = await client.post("/api/customers", json={"name": "Corner Shop"})
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
async def item_id(client: AsyncClient) -> int:
    response = await client.post(
        "/api/items",
        json={"name": "Widget", "unit": "pcs", "basePrice": 5, "sellingPrice": 8},
    )
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
async def account_id(client: AsyncClient) -> int:
    response = await client.post(
        "/api/accounts",
        json={
            "bankName": "First Bank",
            "accountNumber": "0012345",
            "accountHolder": "Shop Owner",
            "openingBalance": 1000,
        },
    )
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def current_stock(client: AsyncClient):
    """Read an item's stock back over HTTP."""

    async def read(item_id: int) -> float:
        response = await client.get(f"/api/items/{item_id}")
        return response.json()["currentStock"]

    return read


@pytest.fixture
def balance(client: AsyncClient):
    """Read an account's balance back over HTTP."""

    async def read(account_id: int) -> float:
        response = await client.get(f"/api/accounts/{account_id}")
        return response.json()["balance"]

    return read
