import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from tortoise import Tortoise

from customer_service.core.database import DatabaseManager
from customer_service.main import create_app
from customer_service.schemas.customer import CustomerCreate, CustomerDetail
from customer_service.services.kyc.customer_service import CustomerService

TEST_DB_CONFIG = {
    "connections": {"default": "sqlite://:memory:"},
    "apps": {
        "models": {
            "models": ["customer_service.models"],
            "default_connection": "default",
        }
    },
}


@pytest.fixture(scope="function")
async def db():
    """Fresh in-memory database for every test"""
    await DatabaseManager.init(TEST_DB_CONFIG)
    yield
    await Tortoise._drop_databases()


@pytest.fixture
async def client(db) -> AsyncGenerator:
    """Async HTTP client bound to the app without running its lifespan"""
    app = create_app(use_lifespan=False)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def test_customer(db) -> CustomerDetail:
    """A live customer without a PAN"""
    return await CustomerService.create(
        CustomerCreate(name="Asha Rao", email="Asha.Rao@AcmeBank.in", phone="+919876543210")
    )


@pytest.fixture
async def verified_ready_customer(db) -> CustomerDetail:
    """A live customer that already has a PAN on record"""
    return await CustomerService.create(
        CustomerCreate(
            name="Vikram Shah",
            email="vikram@acmebank.in",
            phone="+919876543211",
            pan_number="abcde1234f",
        )
    )
