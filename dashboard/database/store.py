"""
Query Store

Executes parameterized read statements against the relational store.
Each call owns one connection for exactly the duration of its query.
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence

import structlog
from sqlalchemy.engine import Row
from sqlalchemy.sql.expression import Executable
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

logger = structlog.get_logger(__name__)


class QueryExecutionError(Exception):
    """A statement could not be executed by the datastore."""


class QueryStore:
    """
    Read-only facade over an async SQLAlchemy engine.
    
    Statements must carry user input as bound parameters, which SQLAlchemy
    Core expressions do for every literal compared against a column.
    
    Example:
        store = QueryStore(engine)
        rows = await store.execute(select(Customer.id, Customer.name))
    """
    
    def __init__(self, engine: AsyncEngine):
        self.engine = engine
    
    async def execute(
        self,
        statement: Executable,
        params: Optional[Dict[str, Any]] = None,
    ) -> List[Row]:
        """
        Execute one statement and materialize its rows.
        
        Raises:
            QueryExecutionError: If the datastore rejects or fails the query
        """
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(statement, params or {})
                return list(result.all())
        except (SQLAlchemyError, OSError) as e:
            logger.error("Query execution failed", error=str(e), error_type=type(e).__name__)
            raise QueryExecutionError(str(e)) from e
    
    async def execute_all(self, *statements: Executable) -> List[List[Row]]:
        """
        Execute independent statements concurrently and wait for all of them.
        
        Results come back in argument order. If any statement fails, the
        remaining ones are cancelled and nothing is returned.
        
        Raises:
            QueryExecutionError: If any statement fails
        """
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self.execute(s)) for s in statements]
        except ExceptionGroup as eg:
            failures = eg.subgroup(QueryExecutionError)
            if failures is None:
                raise
            raise QueryExecutionError(
                f"{len(failures.exceptions)} of {len(statements)} queries failed"
            ) from failures.exceptions[0]
        
        return [task.result() for task in tasks]


def first_row(rows: Sequence[Row]) -> Optional[Row]:
    """First row of a result, or None when empty."""
    return rows[0] if rows else None
