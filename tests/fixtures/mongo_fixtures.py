"""MongoDB/Beanie fixtures for the store and broadcast tests.

These tests talk to a real MongoDB. Point `MONGO_URL_WATCH_PRIMARY` at a
disposable server to run them; without it they are skipped.
"""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.schemas import DOCUMENT_MODELS

TEST_DB_NAME = "live_watch_test"


@pytest.fixture(scope="session")
def mongo_url() -> str:
    # Read the process env directly: env.example ships a localhost placeholder.
    url = os.environ.get("MONGO_URL_WATCH_PRIMARY")
    if not url:
        pytest.skip("MONGO_URL_WATCH_PRIMARY not set; skipping MongoDB tests")
    return url


@pytest_asyncio.fixture(scope="function")
async def mongo_client(mongo_url: str) -> AsyncGenerator[AsyncIOMotorClient]:
    """Function-scoped so every test gets a client bound to its own event loop."""
    client: AsyncIOMotorClient = AsyncIOMotorClient(mongo_url, serverSelectionTimeoutMS=5000)
    yield client
    client.close()


@pytest_asyncio.fixture(scope="function")
async def beanie_db(mongo_client: AsyncIOMotorClient) -> AsyncGenerator[AsyncIOMotorDatabase]:
    db = mongo_client[TEST_DB_NAME]
    await init_beanie(database=db, document_models=DOCUMENT_MODELS)  # type: ignore[arg-type]
    yield db


@pytest_asyncio.fixture
async def clear_collections(beanie_db: AsyncIOMotorDatabase) -> None:
    """Empty every document collection before the test.

    Usage:
        @pytest.mark.usefixtures("clear_collections")
        class TestSomething: ...
    """
    for model in DOCUMENT_MODELS:
        await model.get_motor_collection().delete_many({})
