import pytest
from milkrun.products.utils import slugify
from helpers import url_prefix


def test_slugify():
    assert slugify("Full Cream  Milk") == "full-cream-milk"
    assert slugify("A2 Cow Ghee (500ml)!") == "a2-cow-ghee-500ml"
    assert slugify("Dahi_Plain") == "dahi_plain"
    assert slugify("Crème Brûlée") == "crme-brle"
    assert slugify("Paneer") == slugify("Paneer")


@pytest.mark.asyncio
async def test_category_crud_and_conflicts(ac_client, admin_headers):
    resp = await ac_client.post(f"{url_prefix}/categories", json={"name": "Fresh Milk", "sort_order": 2},
                                headers=admin_headers)
    assert resp.status_code == 201, resp.text
    milk = resp.json()["data"]
    assert milk["slug"] == "fresh-milk"

    await ac_client.post(f"{url_prefix}/categories", json={"name": "Butter", "sort_order": 1}, headers=admin_headers)
    await ac_client.post(f"{url_prefix}/categories", json={"name": "Archive", "is_active": False, "sort_order": 1},
                         headers=admin_headers)

    resp = await ac_client.post(f"{url_prefix}/categories", json={"name": "Fresh Milk"}, headers=admin_headers)
    assert resp.status_code == 409

    resp = await ac_client.get(f"{url_prefix}/categories")
    assert [c["name"] for c in resp.json()["data"]] == ["Archive", "Butter", "Fresh Milk"]
    resp = await ac_client.get(f"{url_prefix}/categories", params={"is_active": "true"})
    assert [c["name"] for c in resp.json()["data"]] == ["Butter", "Fresh Milk"]

    resp = await ac_client.get(f"{url_prefix}/categories/slug/fresh-milk")
    assert resp.json()["data"]["id"] == milk["id"]

    resp = await ac_client.patch(f"{url_prefix}/categories/{milk['id']}", json={"name": "Farm Milk"},
                                 headers=admin_headers)
    assert resp.json()["data"]["slug"] == "farm-milk"
    assert (await ac_client.get(f"{url_prefix}/categories/slug/fresh-milk")).status_code == 404

    resp = await ac_client.delete(f"{url_prefix}/categories/{milk['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert (await ac_client.get(f"{url_prefix}/categories/{milk['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_product_create_and_lookup(ac_client, admin_headers, category):
    body = {"name": "Toned Milk 1L", "category_id": category.id, "price": 60, "discounted_price": 55,
            "unit": "1L", "tags": ["milk"], "is_featured": True}
    resp = await ac_client.post(f"{url_prefix}/products", json=body, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    product = resp.json()["data"]
    assert product["slug"] == "toned-milk-1l"

    resp = await ac_client.post(f"{url_prefix}/products", json=body, headers=admin_headers)
    assert resp.status_code == 409

    resp = await ac_client.post(f"{url_prefix}/products", json={**body, "name": "Other", "category_id": 999},
                                headers=admin_headers)
    assert resp.status_code == 404

    resp = await ac_client.get(f"{url_prefix}/products/slug/toned-milk-1l")
    assert resp.json()["data"]["id"] == product["id"]
    resp = await ac_client.get(f"{url_prefix}/products", params={"is_featured": "true", "category_id": category.id})
    assert [p["id"] for p in resp.json()["data"]] == [product["id"]]

    resp = await ac_client.patch(f"{url_prefix}/products/{product['id']}", json={"name": "Toned Milk", "is_active": False},
                                 headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["slug"] == "toned-milk"
    resp = await ac_client.get(f"{url_prefix}/products")
    assert resp.json()["data"] == []

    resp = await ac_client.delete(f"{url_prefix}/products/{product['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert (await ac_client.get(f"{url_prefix}/products/{product['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_catalog_writes_need_admin(ac_client, customer_headers, category):
    resp = await ac_client.post(f"{url_prefix}/categories", json={"name": "Cheese"}, headers=customer_headers)
    assert resp.status_code == 403
    resp = await ac_client.post(f"{url_prefix}/categories", json={"name": "Cheese"})
    assert resp.status_code == 401
    resp = await ac_client.delete(f"{url_prefix}/products/1", headers=customer_headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_category_with_products_cannot_be_deleted(ac_client, admin_headers, category, product):
    resp = await ac_client.delete(f"{url_prefix}/categories/{category.id}", headers=admin_headers)
    assert resp.status_code == 409
    assert resp.json()["error"]["details"]["message"] == "Category still has products"

    assert (await ac_client.get(f"{url_prefix}/categories/{category.id}")).status_code == 200
    assert (await ac_client.get(f"{url_prefix}/products/{product.id}")).status_code == 200
