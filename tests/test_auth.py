import pytest
from milkrun.auth.utils import create_access_token, create_refresh_token, decode_access_token, decode_refresh_token
from milkrun.schema.full_schema import UserRole
from helpers import auth_headers, next_phone, url_prefix


async def _otp_login(ac_client, phone, path="auth", **names):
    resp = await ac_client.post(f"{url_prefix}/{path}/request-otp", json={"phone": phone})
    assert resp.status_code == 200, resp.text
    code = resp.json()["data"]["otp"]  # only echoed in dev
    return await ac_client.post(f"{url_prefix}/{path}/verify-otp", json={"phone": phone, "otp": code, **names})


@pytest.mark.asyncio
async def test_access_and_refresh_tokens_use_separate_keys(customer):
    access = create_access_token(customer)
    refresh = create_refresh_token(customer)

    claims = decode_access_token(access)
    assert claims["sub"] == str(customer.public_id)
    assert claims["role"] == "customer"
    assert claims["phone"] == customer.phone
    assert {"iat", "exp", "email"} <= set(claims)

    assert decode_refresh_token(access) is None
    assert decode_access_token(refresh) is None
    assert decode_access_token("not-a-token") is None


@pytest.mark.asyncio
async def test_otp_signup_creates_customer(ac_client):
    phone = next_phone()
    resp = await _otp_login(ac_client, phone, first_name="Meera")
    assert resp.status_code == 200, resp.text

    data = resp.json()["data"]
    assert data["access_token"] and data["refresh_token"]
    assert data["user"]["role"] == "customer"
    assert data["user"]["phone"] == phone
    assert data["user"]["first_name"] == "Meera"
    assert data["user"]["is_phone_verified"] is True
    assert "password_hash" not in data["user"]

    resp = await ac_client.get(f"{url_prefix}/users/profile",
                               headers={"Authorization": f"Bearer {data['access_token']}"})
    assert resp.status_code == 200
    assert resp.json()["data"]["public_id"] == data["user"]["public_id"]


@pytest.mark.asyncio
async def test_otp_login_reuses_existing_customer(ac_client, customer):
    resp = await _otp_login(ac_client, customer.phone)
    assert resp.status_code == 200
    assert resp.json()["data"]["user"]["public_id"] == str(customer.public_id)


@pytest.mark.asyncio
async def test_otp_login_rejects_inactive_account(ac_client, make_user):
    user = await make_user(is_active=False)
    resp = await _otp_login(ac_client, user.phone)
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_wrong_otp_is_bad_request(ac_client):
    phone = next_phone()
    await ac_client.post(f"{url_prefix}/auth/request-otp", json={"phone": phone})
    resp = await ac_client.post(f"{url_prefix}/auth/verify-otp", json={"phone": phone, "otp": "abcdef"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "HTTP_400"


@pytest.mark.asyncio
async def test_password_login_by_phone_or_email(ac_client, make_user):
    user = await make_user(email="pia@milkrun.in", password="Secret@123")

    resp = await ac_client.post(f"{url_prefix}/auth/login", json={"phone": user.phone, "password": "Secret@123"})
    assert resp.status_code == 200, resp.text
    resp = await ac_client.post(f"{url_prefix}/auth/login", json={"email": "pia@milkrun.in", "password": "Secret@123"})
    assert resp.status_code == 200

    resp = await ac_client.post(f"{url_prefix}/auth/login", json={"phone": user.phone, "password": "nope"})
    assert resp.status_code == 401
    resp = await ac_client.post(f"{url_prefix}/auth/login", json={"password": "Secret@123"})
    assert resp.status_code == 400
    resp = await ac_client.post(f"{url_prefix}/auth/login", json={"phone": next_phone(), "password": "Secret@123"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_login_rejects_inactive_and_passwordless(ac_client, make_user):
    inactive = await make_user(password="Secret@123", is_active=False)
    resp = await ac_client.post(f"{url_prefix}/auth/login", json={"phone": inactive.phone, "password": "Secret@123"})
    assert resp.status_code == 401

    otp_only = await make_user()
    resp = await ac_client.post(f"{url_prefix}/auth/login", json={"phone": otp_only.phone, "password": "anything"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_refresh_rotates_and_old_token_dies(ac_client, make_user):
    user = await make_user(password="Secret@123")
    login = await ac_client.post(f"{url_prefix}/auth/login", json={"phone": user.phone, "password": "Secret@123"})
    old_refresh = login.json()["data"]["refresh_token"]

    resp = await ac_client.post(f"{url_prefix}/auth/refresh", json={"refresh_token": old_refresh})
    assert resp.status_code == 200, resp.text
    new_refresh = resp.json()["data"]["refresh_token"]
    assert new_refresh != old_refresh

    resp = await ac_client.post(f"{url_prefix}/auth/refresh", json={"refresh_token": old_refresh})
    assert resp.status_code == 401

    resp = await ac_client.post(f"{url_prefix}/auth/refresh", json={"refresh_token": new_refresh})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_refresh_rejects_access_token_and_garbage(ac_client, customer):
    resp = await ac_client.post(f"{url_prefix}/auth/refresh", json={"refresh_token": create_access_token(customer)})
    assert resp.status_code == 401
    resp = await ac_client.post(f"{url_prefix}/auth/refresh", json={"refresh_token": "garbage"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_logout_clears_refresh(ac_client, make_user):
    user = await make_user(password="Secret@123")
    login = await ac_client.post(f"{url_prefix}/auth/login", json={"phone": user.phone, "password": "Secret@123"})
    tokens = login.json()["data"]
    headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    resp = await ac_client.post(f"{url_prefix}/auth/logout", headers=headers)
    assert resp.status_code == 200

    resp = await ac_client.post(f"{url_prefix}/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_delivery_boy_otp_flow(ac_client, delivery_boy, customer):
    resp = await _otp_login(ac_client, delivery_boy.phone, path="auth/delivery-boy")
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["user"]["role"] == "delivery_boy"

    # customers cannot use the delivery login
    resp = await ac_client.post(f"{url_prefix}/auth/delivery-boy/request-otp", json={"phone": customer.phone})
    assert resp.status_code == 401
    resp = await ac_client.post(f"{url_prefix}/auth/delivery-boy/request-otp", json={"phone": next_phone()})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_deactivated_user_token_is_rejected(ac_client, make_user, db_session):
    user = await make_user()
    headers = auth_headers(user)
    assert (await ac_client.get(f"{url_prefix}/users/profile", headers=headers)).status_code == 200

    user.is_active = False
    await db_session.commit()
    resp = await ac_client.get(f"{url_prefix}/users/profile", headers=headers)
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_request_id_is_echoed(ac_client):
    resp = await ac_client.get(f"{url_prefix}/health/live", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"
    assert resp.json()["request_id"] == "req-123"

    resp = await ac_client.get(f"{url_prefix}/cart")
    assert resp.status_code == 401
    assert resp.headers.get("X-Request-ID")
    assert resp.json()["request_id"] == resp.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_profile_update_keeps_role(ac_client, make_user, customer_headers):
    taken = await make_user(email="taken@milkrun.in")
    resp = await ac_client.patch(f"{url_prefix}/users/profile", json={"last_name": "Kulkarni", "role": "admin"},
                                 headers=customer_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["last_name"] == "Kulkarni"
    assert resp.json()["data"]["role"] == UserRole.CUSTOMER.value

    resp = await ac_client.patch(f"{url_prefix}/users/profile", json={"email": taken.email}, headers=customer_headers)
    assert resp.status_code == 409
