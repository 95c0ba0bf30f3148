"""Tests for sale endpoints."""

from httpx import AsyncClient


async def stock_up(client: AsyncClient, supplier_id: int, item_id: int, quantity: float) -> None:
    response = await client.post(
        "/api/purchases",
        json={
            "supplierId": supplier_id,
            "date": "2024-03-01",
            "items": [{"itemId": item_id, "quantity": quantity, "unitPrice": 5}],
        },
    )
    assert response.status_code == 201


def sale_body(customer_id: int, item_id: int, quantity: float, **extra) -> dict:
    return {
        "customerId": customer_id,
        "date": "2024-03-15",
        "items": [{"itemId": item_id, "quantity": quantity, "unitPrice": 8}],
        **extra,
    }


async def test_create_sale(client: AsyncClient, supplier_id, customer_id, item_id, current_stock):
    await stock_up(client, supplier_id, item_id, 10)

    response = await client.post(
        "/api/sales", json=sale_body(customer_id, item_id, 4, receivedAmount=32, status="paid")
    )

    assert response.status_code == 201
    data = response.json()
    assert data["customerName"] == "Corner Shop"
    assert data["totalAmount"] == 32
    assert data["receivedAmount"] == 32
    assert await current_stock(item_id) == 6


async def test_oversell_is_409(
    client: AsyncClient, supplier_id, customer_id, item_id, current_stock
):
    await stock_up(client, supplier_id, item_id, 10)

    response = await client.post("/api/sales", json=sale_body(customer_id, item_id, 12))

    assert response.status_code == 409
    data = response.json()
    assert data["error_code"] == "INSUFFICIENT_STOCK"
    assert "Available: 10" in data["message"]
    assert (await client.get("/api/sales")).json()["total"] == 0
    assert await current_stock(item_id) == 10


async def test_update_and_delete(
    client: AsyncClient, supplier_id, customer_id, item_id, current_stock
):
    await stock_up(client, supplier_id, item_id, 10)
    sale = (await client.post("/api/sales", json=sale_body(customer_id, item_id, 4))).json()
    url = f"/api/sales/{sale['id']}"

    response = await client.patch(url, json={"items": [{"itemId": item_id, "quantity": 7}]})
    assert response.status_code == 200
    assert await current_stock(item_id) == 3

    response = await client.patch(url, json={"items": [{"itemId": item_id, "quantity": 20}]})
    assert response.status_code == 409
    assert await current_stock(item_id) == 3

    response = await client.patch(url, json={"receivedAmount": -1})
    assert response.status_code == 400

    assert (await client.delete(url)).status_code == 204
    assert await current_stock(item_id) == 10
    assert (await client.get(url)).status_code == 404


async def test_list_by_customer(client: AsyncClient, supplier_id, customer_id, item_id):
    await stock_up(client, supplier_id, item_id, 10)
    await client.post("/api/sales", json=sale_body(customer_id, item_id, 1))

    response = await client.get("/api/sales", params={"customerId": customer_id})
    data = response.json()
    assert data["total"] == 1
    assert data["sales"][0]["items"][0]["itemUnit"] == "pcs"

    response = await client.get("/api/sales", params={"customerId": customer_id + 100})
    assert response.json()["total"] == 0
