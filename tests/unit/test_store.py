"""
Unit Tests - Query Store
"""
import asyncio

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool

from dashboard.database.models import Base, Customer, Invoice
from dashboard.database.store import QueryExecutionError, QueryStore
from dashboard.readmodel import DatastoreError, ReadModel


class FlakyStore(QueryStore):
    """Fails statements mentioning `fail_on`; holds the others back so they can be cancelled"""
    
    def __init__(self, engine, fail_on: str):
        super().__init__(engine)
        self.fail_on = fail_on
        self.cancelled = []
        self.completed = []
    
    async def execute(self, statement, params=None):
        sql = str(statement)
        if self.fail_on in sql:
            await asyncio.sleep(0.01)
            raise QueryExecutionError(f"injected failure: {self.fail_on}")
        try:
            await asyncio.sleep(1)
        except asyncio.CancelledError:
            self.cancelled.append(sql)
            raise
        rows = await super().execute(statement, params)
        self.completed.append(sql)
        return rows


class TestExecute:
    
    async def test_returns_rows(self, store, populated):
        rows = await store.execute(select(Customer.name).order_by(Customer.name))
        
        assert [r.name for r in rows] == ["Amy Burns", "Delba de Oliveira", "Lee Robinson", "Zed Idle"]
    
    async def test_binds_parameters(self, store, populated):
        rows = await store.execute(
            text("SELECT id FROM invoices WHERE customer_id = :customer AND amount > :minimum"),
            {"customer": "x' OR '1'='1", "minimum": 0},
        )
        
        assert rows == []
    
    async def test_wraps_driver_errors(self, store):
        with pytest.raises(QueryExecutionError) as exc_info:
            await store.execute(text("SELECT * FROM no_such_table"))
        
        assert exc_info.value.__cause__ is not None


class TestExecuteAll:
    
    async def test_results_in_argument_order(self, store, populated):
        invoices, customers = await store.execute_all(
            select(func.count()).select_from(Invoice),
            select(func.count()).select_from(Customer),
        )
        
        assert invoices[0][0] == 14
        assert customers[0][0] == 4
    
    async def test_runs_concurrently(self, test_engine, populated):
        store = FlakyStore(test_engine, fail_on="never")
        
        loop = asyncio.get_running_loop()
        started = loop.time()
        await store.execute_all(
            select(func.count()).select_from(Invoice),
            select(func.count()).select_from(Customer),
            select(func.sum(Invoice.amount)),
        )
        
        # three one-second waits overlapping, not serialized
        assert loop.time() - started < 2.5
        assert len(store.completed) == 3
    
    async def test_one_failure_cancels_the_rest(self, test_engine, populated):
        store = FlakyStore(test_engine, fail_on="FROM customers")
        
        with pytest.raises(QueryExecutionError):
            await store.execute_all(
                select(func.count()).select_from(Invoice),
                select(func.count()).select_from(Customer),
                select(func.sum(Invoice.amount)),
            )
        
        assert len(store.cancelled) == 2
        assert store.completed == []


async def test_card_data_discards_partial_results(test_engine, populated, query_settings):
    store = FlakyStore(test_engine, fail_on="FROM customers")
    read_model = ReadModel(store, query_settings)
    
    with pytest.raises(DatastoreError) as exc_info:
        await read_model.fetch_card_data()
    
    assert exc_info.value.operation == "fetch_card_data"
    assert str(exc_info.value) == "Failed to fetch card data."
    assert len(store.cancelled) == 2
    assert store.completed == []


# recursive count that keeps SQLite busy long enough to be cancelled mid-query
SLOW_COUNT = text(
    "WITH RECURSIVE n(x) AS (SELECT 1 UNION ALL SELECT x + 1 FROM n WHERE x < 3000000) "
    "SELECT count(*) FROM n"
)


@pytest.fixture
async def pooled_engine(tmp_path):
    """Engine with a real connection pool, unlike the NullPool used in production"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'pooled.db'}",
        poolclass=AsyncAdaptedQueuePool,
        pool_size=2,
        max_overflow=0,
        pool_timeout=5,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield engine
    
    await engine.dispose()


async def checked_out(engine, settle: float = 5.0) -> int:
    """Connections still checked out once in-flight releases have had time to finish"""
    pool = engine.sync_engine.pool
    loop = asyncio.get_running_loop()
    deadline = loop.time() + settle
    while pool.checkedout() and loop.time() < deadline:
        await asyncio.sleep(0.05)
    return pool.checkedout()


class TestConnectionRelease:
    
    async def test_failed_execute_returns_connection(self, pooled_engine):
        store = QueryStore(pooled_engine)
        
        with pytest.raises(QueryExecutionError):
            await store.execute(text("SELECT * FROM no_such_table"))
        
        assert pooled_engine.sync_engine.pool.checkedout() == 0
    
    async def test_failed_execute_all_returns_connections(self, pooled_engine):
        store = QueryStore(pooled_engine)
        
        with pytest.raises(QueryExecutionError):
            await store.execute_all(SLOW_COUNT, text("SELECT * FROM no_such_table"))
        
        assert await checked_out(pooled_engine) == 0
    
    async def test_pool_usable_after_failures(self, pooled_engine):
        store = QueryStore(pooled_engine)
        
        for _ in range(3):
            with pytest.raises(QueryExecutionError):
                await store.execute_all(SLOW_COUNT, text("SELECT * FROM no_such_table"))
        assert await checked_out(pooled_engine) == 0
        
        # a leaked connection would exhaust the two-slot pool here
        first, second = await store.execute_all(
            select(func.count()).select_from(Invoice),
            select(func.count()).select_from(Customer),
        )
        
        assert first[0][0] == 0
        assert second[0][0] == 0
        assert pooled_engine.sync_engine.pool.checkedout() == 0
