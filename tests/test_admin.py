import pytest
from helpers import next_phone, url_prefix


@pytest.mark.asyncio
async def test_admin_login(ac_client, admin, make_user):
    resp = await ac_client.post(f"{url_prefix}/admin/login", json={"email": admin.email, "password": "Admin@1234"})
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["user"]["role"] == "admin"

    resp = await ac_client.post(f"{url_prefix}/admin/login", json={"email": admin.email, "password": "wrong"})
    assert resp.status_code == 401

    customer = await make_user(email="buyer@milkrun.in", password="Buyer@1234")
    resp = await ac_client.post(f"{url_prefix}/admin/login", json={"email": customer.email, "password": "Buyer@1234"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_create_delivery_boy_and_listings(ac_client, admin_headers, customer):
    body = {"phone": next_phone(), "password": "Rider@1234", "first_name": "Sunil"}
    resp = await ac_client.post(f"{url_prefix}/admin/delivery-boy", json=body, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    rider = resp.json()["data"]
    assert rider["role"] == "delivery_boy"

    resp = await ac_client.post(f"{url_prefix}/admin/delivery-boy", json=body, headers=admin_headers)
    assert resp.status_code == 409

    resp = await ac_client.post(f"{url_prefix}/admin/delivery-boy", json={**body, "phone": customer.phone},
                                headers=admin_headers)
    assert resp.status_code == 409

    resp = await ac_client.get(f"{url_prefix}/admin/delivery-boys", headers=admin_headers)
    assert [u["public_id"] for u in resp.json()["data"]] == [rider["public_id"]]

    resp = await ac_client.get(f"{url_prefix}/admin/customers", headers=admin_headers)
    assert [u["public_id"] for u in resp.json()["data"]] == [str(customer.public_id)]

    resp = await ac_client.get(f"{url_prefix}/admin/users", headers=admin_headers)
    assert len(resp.json()["data"]) == 3

    resp = await ac_client.get(f"{url_prefix}/users/{rider['public_id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["first_name"] == "Sunil"


@pytest.mark.asyncio
async def test_role_guards(ac_client, customer_headers, delivery_headers):
    for headers in (customer_headers, delivery_headers):
        resp = await ac_client.get(f"{url_prefix}/admin/users", headers=headers)
        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "HTTP_403"
        resp = await ac_client.get(f"{url_prefix}/users", headers=headers)
        assert resp.status_code == 403

    resp = await ac_client.get(f"{url_prefix}/admin/users")
    assert resp.status_code == 401

    resp = await ac_client.get(f"{url_prefix}/admin/users", headers={"Authorization": "Bearer forged.token.value"})
    assert resp.status_code == 401
