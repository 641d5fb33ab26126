"""
Database Seeding

Creates the schema and loads placeholder dashboard data, optionally padded
with random invoices generated by Faker.

Usage:
    python -m dashboard.database.seed
    python -m dashboard.database.seed --extra-invoices 200
"""

import argparse
import asyncio
import random
import uuid
from datetime import date, timedelta
from typing import Any, Dict, List

import bcrypt
import structlog
from faker import Faker
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine

from dashboard.database.connection import init_database, close_database
from dashboard.database.models import Base, Customer, Invoice, InvoiceStatus, Revenue, User

logger = structlog.get_logger(__name__)

# =============================================================================
# PLACEHOLDER DATA
# =============================================================================

USERS = [
    {
        "id": "410544b2-4001-4271-9855-fec4b6a6442a",
        "name": "User",
        "email": "user@nextmail.com",
        "password": "123456",
    },
]

CUSTOMERS = [
    {
        "id": "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa",
        "name": "Evil Rabbit",
        "email": "evil@rabbit.com",
        "image_url": "/customers/evil-rabbit.png",
    },
    {
        "id": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
        "name": "Delba de Oliveira",
        "email": "delba@oliveira.com",
        "image_url": "/customers/delba-de-oliveira.png",
    },
    {
        "id": "3958dc9e-742f-4377-85e9-fec4b6a6442a",
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "image_url": "/customers/lee-robinson.png",
    },
    {
        "id": "76d65c26-f784-44a2-ac19-586678f7c2f2",
        "name": "Michael Novotny",
        "email": "michael@novotny.com",
        "image_url": "/customers/michael-novotny.png",
    },
    {
        "id": "CC27C14A-0ACF-4F4A-A6C9-D45682C144B9",
        "name": "Amy Burns",
        "email": "amy@burns.com",
        "image_url": "/customers/amy-burns.png",
    },
    {
        "id": "13D07535-C59E-4157-A011-F8D2EF4E0CBB",
        "name": "Balazs Orban",
        "email": "balazs@orban.com",
        "image_url": "/customers/balazs-orban.png",
    },
]

INVOICES = [
    (0, 15795, "pending", "2022-12-06"),
    (1, 20348, "pending", "2022-11-14"),
    (4, 3040, "paid", "2022-10-29"),
    (3, 44800, "paid", "2023-09-10"),
    (5, 34577, "pending", "2023-08-05"),
    (2, 54246, "pending", "2023-07-16"),
    (0, 666, "pending", "2023-06-27"),
    (3, 32545, "paid", "2023-06-09"),
    (4, 1250, "paid", "2023-06-17"),
    (5, 8546, "paid", "2023-06-07"),
    (1, 500, "paid", "2023-08-19"),
    (5, 8945, "paid", "2023-06-03"),
    (2, 1000, "paid", "2022-06-05"),
]

REVENUE = [
    ("Jan", 2000), ("Feb", 1800), ("Mar", 2200), ("Apr", 2500),
    ("May", 2300), ("Jun", 3200), ("Jul", 3500), ("Aug", 3700),
    ("Sep", 2500), ("Oct", 2800), ("Nov", 3000), ("Dec", 4800),
]


def hash_password(password: str) -> str:
    """Return a bcrypt hash for the plaintext password."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def placeholder_records() -> Dict[Any, List[Dict[str, Any]]]:
    """Placeholder rows keyed by model."""
    invoices = [
        {
            "id": str(uuid.uuid4()),
            "customer_id": CUSTOMERS[customer]["id"],
            "amount": amount,
            "status": status,
            "date": date.fromisoformat(day),
        }
        for customer, amount, status, day in INVOICES
    ]
    return {
        User: [{**u, "password": hash_password(u["password"])} for u in USERS],
        Customer: [dict(c) for c in CUSTOMERS],
        Invoice: invoices,
        Revenue: [{"month": month, "revenue": revenue} for month, revenue in REVENUE],
    }


def generate_invoices(n: int, customer_ids: List[str], seed: int = 42) -> List[Dict[str, Any]]:
    """Generate n random invoices spread over the last two years."""
    fake = Faker()
    Faker.seed(seed)
    rng = random.Random(seed)
    start = date.today() - timedelta(days=730)
    
    return [
        {
            "id": str(uuid.uuid4()),
            "customer_id": rng.choice(customer_ids),
            "amount": rng.randint(100, 100000),
            "status": rng.choice([s.value for s in InvoiceStatus]),
            "date": fake.date_between(start_date=start, end_date="today"),
        }
        for _ in range(n)
    ]


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema created")


async def seed_placeholder_data(engine: AsyncEngine, extra_invoices: int = 0) -> None:
    """Insert placeholder rows, plus `extra_invoices` random invoices."""
    records = placeholder_records()
    if extra_invoices:
        records[Invoice].extend(
            generate_invoices(extra_invoices, [c["id"] for c in CUSTOMERS])
        )
    
    async with engine.begin() as conn:
        for model, rows in records.items():
            await conn.execute(insert(model), rows)
            logger.info(f"Inserted {len(rows)} records into {model.__tablename__}")


async def main(extra_invoices: int = 0) -> None:
    logger.info("Starting database seeding...")
    engine = await init_database()
    
    try:
        await create_schema(engine)
        await seed_placeholder_data(engine, extra_invoices)
        logger.info("Database seeding completed successfully!")
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        raise
    finally:
        await close_database()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the billing dashboard database")
    parser.add_argument(
        "--extra-invoices",
        type=int,
        default=0,
        help="Random invoices to add on top of the placeholder data",
    )
    args = parser.parse_args()
    asyncio.run(main(args.extra_invoices))
