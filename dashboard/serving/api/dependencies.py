"""
FastAPI Dependencies
"""

from dashboard.config import get_settings
from dashboard.database.connection import get_engine
from dashboard.database.store import QueryStore
from dashboard.readmodel import DatastoreError, ReadModel


def get_read_model() -> ReadModel:
    """
    FastAPI dependency providing the read model.
    
    Example:
        @router.get("/cards")
        async def cards(read_model: ReadModel = Depends(get_read_model)):
            ...
    """
    try:
        engine = get_engine()
    except RuntimeError:
        raise DatastoreError("get_read_model", "Database unavailable.") from None
    return ReadModel(QueryStore(engine), get_settings().query)
