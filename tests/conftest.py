import os
import tempfile

# must be set before milkrun is imported: settings and engine are built at import time
_DB_DIR = tempfile.mkdtemp(prefix="milkrun-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["ENV"] = "dev"
os.environ["ENABLE_ADMIN"] = "true"

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlmodel import SQLModel

import milkrun.schema.full_schema  # noqa: F401  registers tables
from milkrun.db.connection import async_engine, async_session
from milkrun.main import app
from milkrun.schema.full_schema import Address, Category, Product, UserRole
from milkrun.user.services import create_user
from helpers import auth_headers, next_phone


# sqlite leaves foreign keys unenforced unless asked, per connection
@event.listens_for(async_engine.sync_engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def fresh_schema():
    async with async_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield
    await async_engine.dispose()


@pytest.fixture
async def ac_client(fresh_schema):
    async with LifespanManager(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac


@pytest.fixture
async def db_session(fresh_schema):
    async with async_session() as session:
        yield session


@pytest.fixture
def make_user(db_session):
    async def _make(role=UserRole.CUSTOMER, phone=None, email=None, password=None, is_active=True, **names):
        user = await create_user(db_session, phone=phone or next_phone(), role=role, email=email,
                                 password=password, **names)
        if not is_active:
            user.is_active = False
            await db_session.commit()
            await db_session.refresh(user)
        return user
    return _make


@pytest.fixture
async def customer(make_user):
    return await make_user(first_name="Asha")

@pytest.fixture
def customer_headers(customer):
    return auth_headers(customer)


@pytest.fixture
async def admin(make_user):
    return await make_user(role=UserRole.ADMIN, email="admin@milkrun.in", password="Admin@1234")

@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
async def delivery_boy(make_user):
    return await make_user(role=UserRole.DELIVERY_BOY, password="Rider@1234", first_name="Ravi")

@pytest.fixture
def delivery_headers(delivery_boy):
    return auth_headers(delivery_boy)


@pytest.fixture
async def category(db_session):
    cat = Category(name="Dairy", slug="dairy")
    db_session.add(cat)
    await db_session.commit()
    await db_session.refresh(cat)
    return cat


@pytest.fixture
def make_product(db_session, category):
    async def _make(name="Toned Milk", price=60.0, discounted_price=0, **extra):
        product = Product(name=name, slug=name.lower().replace(" ", "-"), category_id=category.id,
                          price=price, discounted_price=discounted_price, unit="1L", **extra)
        db_session.add(product)
        await db_session.commit()
        await db_session.refresh(product)
        return product
    return _make


@pytest.fixture
async def product(make_product):
    return await make_product()


@pytest.fixture
async def address(db_session, customer):
    addr = Address(user_id=customer.id, full_name="Asha K", phone=customer.phone, address_line1="12 Lake Road",
                   city="Pune", state="MH", pincode="411001", is_default=True)
    db_session.add(addr)
    await db_session.commit()
    await db_session.refresh(addr)
    return addr
