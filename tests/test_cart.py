import pytest
from sqlalchemy import func, select
from milkrun.cart import repository as cart_repository
from milkrun.cart.services import add_to_cart
from milkrun.cart.utils import add_line, cart_total, set_line_quantity
from milkrun.db.connection import async_session
from milkrun.schema.full_schema import Cart
from helpers import url_prefix


def test_cart_total_tracks_every_mutation():
    items = add_line([], 1, "Toned Milk", 60.0, 2)
    assert cart_total(items) == 120.0

    items = add_line(items, 2, "Curd", 35.5, 1)
    assert cart_total(items) == 155.5

    items = set_line_quantity(items, 0, 5)
    assert cart_total(items) == round(sum(i["price"] * i["quantity"] for i in items), 2)

    items = set_line_quantity(items, 1, 0)
    assert [i["product_id"] for i in items] == [1]
    assert cart_total(items) == 300.0


def test_add_line_keeps_original_price_for_existing_line():
    items = add_line([], 1, "Toned Milk", 60.0, 1)
    items = add_line(items, 1, "Toned Milk", 55.0, 1)
    assert items == [{"product_id": 1, "name": "Toned Milk", "quantity": 2, "price": 60.0}]


@pytest.mark.asyncio
async def test_add_same_product_twice_merges_line(ac_client, customer_headers, product):
    resp = await ac_client.post(f"{url_prefix}/cart", json={"product_id": product.id, "quantity": 2},
                                headers=customer_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["total_amount"] == 120

    resp = await ac_client.post(f"{url_prefix}/cart", json={"product_id": product.id, "quantity": 1},
                                headers=customer_headers)
    assert resp.status_code == 200, resp.text

    cart = resp.json()["data"]
    assert cart["total_amount"] == 180
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 3
    assert cart["items"][0]["name"] == "Toned Milk"


@pytest.mark.asyncio
async def test_discounted_price_is_used(ac_client, customer_headers, make_product):
    paneer = await make_product(name="Paneer", price=100.0, discounted_price=90.0)
    resp = await ac_client.post(f"{url_prefix}/cart", json={"product_id": paneer.id, "quantity": 2},
                                headers=customer_headers)
    assert resp.json()["data"]["items"][0]["price"] == 90.0
    assert resp.json()["data"]["total_amount"] == 180.0


@pytest.mark.asyncio
async def test_get_cart_without_row_is_empty(ac_client, customer_headers):
    resp = await ac_client.get(f"{url_prefix}/cart", headers=customer_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["items"] == []
    assert resp.json()["data"]["total_amount"] == 0


@pytest.mark.asyncio
async def test_update_quantity_and_remove(ac_client, customer_headers, product, make_product):
    curd = await make_product(name="Curd", price=40.0)
    for p, qty in ((product, 1), (curd, 2)):
        await ac_client.post(f"{url_prefix}/cart", json={"product_id": p.id, "quantity": qty},
                             headers=customer_headers)

    resp = await ac_client.patch(f"{url_prefix}/cart/{product.id}", json={"quantity": 4}, headers=customer_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["total_amount"] == 4 * 60 + 2 * 40

    resp = await ac_client.patch(f"{url_prefix}/cart/{curd.id}", json={"quantity": 0}, headers=customer_headers)
    assert [i["product_id"] for i in resp.json()["data"]["items"]] == [product.id]
    assert resp.json()["data"]["total_amount"] == 240

    resp = await ac_client.delete(f"{url_prefix}/cart/{product.id}", headers=customer_headers)
    assert resp.json()["data"]["items"] == []
    assert resp.json()["data"]["total_amount"] == 0


@pytest.mark.asyncio
async def test_missing_product_or_cart_is_404(ac_client, customer_headers, product):
    resp = await ac_client.post(f"{url_prefix}/cart", json={"product_id": 9999, "quantity": 1},
                                headers=customer_headers)
    assert resp.status_code == 404

    # no cart yet
    resp = await ac_client.patch(f"{url_prefix}/cart/{product.id}", json={"quantity": 2}, headers=customer_headers)
    assert resp.status_code == 404
    resp = await ac_client.delete(f"{url_prefix}/cart", headers=customer_headers)
    assert resp.status_code == 404

    await ac_client.post(f"{url_prefix}/cart", json={"product_id": product.id, "quantity": 1},
                         headers=customer_headers)
    resp = await ac_client.patch(f"{url_prefix}/cart/4242", json={"quantity": 2}, headers=customer_headers)
    assert resp.status_code == 404
    assert resp.json()["error"]["details"]["message"] == "Product not in cart"


@pytest.mark.asyncio
async def test_clear_cart_keeps_row(ac_client, customer_headers, product):
    await ac_client.post(f"{url_prefix}/cart", json={"product_id": product.id, "quantity": 3},
                         headers=customer_headers)
    resp = await ac_client.delete(f"{url_prefix}/cart", headers=customer_headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["id"] is not None
    assert data["items"] == []
    assert data["total_amount"] == 0


@pytest.mark.asyncio
async def test_cart_requires_auth(ac_client):
    resp = await ac_client.get(f"{url_prefix}/cart")
    assert resp.status_code == 401
    assert resp.json()["status"] == "error"


@pytest.mark.asyncio
async def test_quantity_must_be_positive_on_add(ac_client, customer_headers, product):
    resp = await ac_client.post(f"{url_prefix}/cart", json={"product_id": product.id, "quantity": 0},
                                headers=customer_headers)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_add_to_cart_recovers_when_cart_was_created_concurrently(db_session, monkeypatch, customer, product):
    # another request commits the customer's cart between our lookup and our insert
    async with async_session() as other:
        other.add(Cart(user_id=customer.id, items=[], total_amount=0))
        await other.commit()

    real_get_cart = cart_repository.get_cart
    calls = []

    async def late_get_cart(session, user_id, for_update=False):
        calls.append(user_id)
        if len(calls) == 1:
            return None
        return await real_get_cart(session, user_id, for_update)

    monkeypatch.setattr(cart_repository, "get_cart", late_get_cart)

    cart = await add_to_cart(db_session, customer.id, product.id, 2)
    assert len(calls) == 2
    assert cart.items == [{"product_id": product.id, "name": "Toned Milk", "quantity": 2, "price": 60.0}]
    assert cart.total_amount == 120

    count = (await db_session.execute(select(func.count()).select_from(Cart))).scalar_one()
    assert count == 1
