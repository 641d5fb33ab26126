"""
Customers API Endpoints

Customer directory and the customer table with invoice totals.
"""

from typing import List

from fastapi import APIRouter, Depends

from dashboard.readmodel import CustomerField, CustomerTableRow, ReadModel
from dashboard.serving.api.dependencies import get_read_model

router = APIRouter()


@router.get("", response_model=List[CustomerField])
async def list_customers(
    read_model: ReadModel = Depends(get_read_model),
) -> List[CustomerField]:
    """All customers, alphabetical. Feeds selection controls."""
    return await read_model.fetch_customers()


@router.get("/table", response_model=List[CustomerTableRow])
async def get_customer_table(
    query: str = "",
    read_model: ReadModel = Depends(get_read_model),
) -> List[CustomerTableRow]:
    """Customers matching name or email, with invoice totals."""
    return await read_model.fetch_filtered_customers(query)
