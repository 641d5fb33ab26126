"""
Invoices API Endpoints

Invoice search with pagination and single-invoice lookup.
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from dashboard.readmodel import InvoiceForm, InvoiceRow, ReadModel
from dashboard.serving.api.dependencies import get_read_model

router = APIRouter()


class InvoicePages(BaseModel):
    """Page count for a search"""
    query: str
    total_pages: int


@router.get("", response_model=List[InvoiceRow])
async def list_invoices(
    query: str = "",
    page: int = Query(1),
    read_model: ReadModel = Depends(get_read_model),
) -> List[InvoiceRow]:
    """
    Search invoices by customer name, email, amount, date or status.
    
    Page numbers start at 1; pages past the end are empty.
    """
    return await read_model.fetch_filtered_invoices(query, page)


@router.get("/pages", response_model=InvoicePages)
async def get_invoice_pages(
    query: str = "",
    read_model: ReadModel = Depends(get_read_model),
) -> InvoicePages:
    """Number of result pages for a search."""
    pages = await read_model.fetch_invoices_pages(query)
    return InvoicePages(query=query, total_pages=pages)


@router.get("/{invoice_id}", response_model=InvoiceForm)
async def get_invoice(
    invoice_id: str,
    read_model: ReadModel = Depends(get_read_model),
) -> InvoiceForm:
    """Invoice for the edit form."""
    return await read_model.fetch_invoice_by_id(invoice_id)
