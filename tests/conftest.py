"""
Test Suite Configuration
"""
from datetime import date, timedelta
from typing import AsyncGenerator, Dict, List

import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from dashboard.config import QuerySettings, Settings
from dashboard.database.models import Base, Customer, Invoice, Revenue, User
from dashboard.database.store import QueryStore
from dashboard.readmodel import ReadModel

DELBA = "c1000000-0000-4000-8000-000000000001"
LEE = "c1000000-0000-4000-8000-000000000002"
AMY = "c1000000-0000-4000-8000-000000000003"
ZED = "c1000000-0000-4000-8000-000000000004"


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(
        app_env="testing",
        debug=True,
    )


@pytest.fixture
def query_settings() -> QuerySettings:
    return QuerySettings(items_per_page=6, latest_invoices_limit=5, max_query_length=64)


@pytest.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """SQLite database in a per-test file, so concurrent connections share data"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'dashboard.db'}", echo=False)
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield engine
    
    await engine.dispose()


@pytest.fixture
def store(test_engine) -> QueryStore:
    return QueryStore(test_engine)


@pytest.fixture
def read_model(store, query_settings) -> ReadModel:
    return ReadModel(store, query_settings)


async def insert_rows(engine: AsyncEngine, rows: Dict[type, List[dict]]) -> None:
    """Insert rows per model, in the given order"""
    async with engine.begin() as conn:
        for model, records in rows.items():
            if records:
                await conn.execute(insert(model), records)


def sample_customers() -> List[dict]:
    return [
        {"id": DELBA, "name": "Delba de Oliveira", "email": "delba@oliveira.com", "image_url": "/customers/delba.png"},
        {"id": LEE, "name": "Lee Robinson", "email": "lee@robinson.com", "image_url": "/customers/lee.png"},
        {"id": AMY, "name": "Amy Burns", "email": "amy@burns.com", "image_url": "/customers/amy.png"},
        {"id": ZED, "name": "Zed Idle", "email": "zed@idle.com", "image_url": "/customers/zed.png"},
    ]


def sample_invoices() -> List[dict]:
    """
    Fourteen invoices on consecutive days from 2023-01-01.
    
    Invoice i belongs to Delba/Lee/Amy in rotation, has amount (i + 1) * 1000
    and is paid when i is even. Zed has no invoices.
    """
    owners = [DELBA, LEE, AMY]
    return [
        {
            "id": f"inv-{i:02d}",
            "customer_id": owners[i % 3],
            "amount": (i + 1) * 1000,
            "status": "paid" if i % 2 == 0 else "pending",
            "date": date(2023, 1, 1) + timedelta(days=i),
        }
        for i in range(14)
    ]


@pytest.fixture
async def populated(test_engine) -> AsyncEngine:
    """Database loaded with sample customers, invoices, revenue and a user"""
    await insert_rows(test_engine, {
        Customer: sample_customers(),
        Invoice: sample_invoices(),
        Revenue: [
            {"month": "Jan", "revenue": 2000},
            {"month": "Feb", "revenue": 1800},
            {"month": "Mar", "revenue": 2200},
        ],
        User: [
            {
                "id": "410544b2-4001-4271-9855-fec4b6a6442a",
                "name": "User",
                "email": "user@nextmail.com",
                "password": "$2b$12$hashed",
            },
        ],
    })
    return test_engine
