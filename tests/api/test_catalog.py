"""Tests for supplier, customer, item and account endpoints."""

from httpx import AsyncClient


async def test_parties(client: AsyncClient, ledger_db):
    created = await client.post(
        "/api/suppliers", json={"name": "Acme", "phone": "555", "address": "Dock 4"}
    )
    assert created.status_code == 201
    supplier = created.json()

    assert (await client.get(f"/api/suppliers/{supplier['id']}")).json()["phone"] == "555"
    assert [s["name"] for s in (await client.get("/api/suppliers")).json()] == ["Acme"]

    assert (await client.post("/api/customers", json={"name": ""})).status_code == 422
    response = await client.get("/api/customers/77")
    assert response.status_code == 404
    assert response.json()["error_code"] == "CUSTOMER_NOT_FOUND"


async def test_item_opening_stock(client: AsyncClient, ledger_db):
    response = await client.post(
        "/api/items", json={"name": "Bolt", "unit": "pcs", "openingStock": 25}
    )
    assert response.status_code == 201
    assert response.json()["currentStock"] == 25


async def test_item_update(client: AsyncClient, item_id):
    response = await client.patch(
        f"/api/items/{item_id}", json={"sellingPrice": 9.5, "description": None}
    )
    assert response.status_code == 200
    assert response.json()["sellingPrice"] == 9.5

    assert (await client.patch(f"/api/items/{item_id}", json={})).status_code == 400
    assert (await client.patch(f"/api/items/{item_id}", json={"unit": None})).status_code == 400
    assert (await client.patch("/api/items/999", json={"name": "X"})).status_code == 404


async def test_stock_and_balance_not_writable(client: AsyncClient, item_id, account_id,
                                              current_stock, balance):
    response = await client.patch(f"/api/items/{item_id}", json={"currentStock": 100})
    assert response.status_code == 422
    assert await current_stock(item_id) == 0

    response = await client.patch(f"/api/accounts/{account_id}", json={"balance": 0})
    assert response.status_code == 422
    assert await balance(account_id) == 1000


async def test_account_update(client: AsyncClient, account_id):
    response = await client.patch(
        f"/api/accounts/{account_id}", json={"accountHolder": "New Owner"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["accountHolder"] == "New Owner"
    assert data["openingBalance"] == 1000

    accounts = (await client.get("/api/accounts")).json()
    assert [a["id"] for a in accounts] == [account_id]


async def test_movements_for_unknown_item(client: AsyncClient, ledger_db):
    response = await client.get("/api/items/5/movements")
    assert response.status_code == 404
    assert response.json()["error_code"] == "ITEM_NOT_FOUND"
