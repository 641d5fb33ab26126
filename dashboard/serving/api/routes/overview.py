"""
Overview API Endpoints

Revenue chart, summary cards and the latest invoices digest.
"""

from typing import List

from fastapi import APIRouter, Depends

from dashboard.readmodel import CardData, LatestInvoice, ReadModel, RevenuePoint
from dashboard.serving.api.dependencies import get_read_model

router = APIRouter()


@router.get("/revenue", response_model=List[RevenuePoint])
async def get_revenue(
    read_model: ReadModel = Depends(get_read_model),
) -> List[RevenuePoint]:
    """Revenue series for the chart."""
    return await read_model.fetch_revenue()


@router.get("/cards", response_model=CardData, response_model_by_alias=True)
async def get_cards(
    read_model: ReadModel = Depends(get_read_model),
) -> CardData:
    """Invoice and customer counts with paid/pending totals."""
    return await read_model.fetch_card_data()


@router.get("/latest-invoices", response_model=List[LatestInvoice])
async def get_latest_invoices(
    read_model: ReadModel = Depends(get_read_model),
) -> List[LatestInvoice]:
    return await read_model.fetch_latest_invoices()
