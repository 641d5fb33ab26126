"""
Read Model Result Types

Plain data returned by the read operations.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from dashboard.database.models import InvoiceStatus


class RevenuePoint(BaseModel):
    """Revenue for one period, in minor units"""
    model_config = ConfigDict(from_attributes=True)
    
    month: str
    revenue: int


class LatestInvoice(BaseModel):
    """Invoice digest row joined with its customer"""
    model_config = ConfigDict(from_attributes=True)
    
    id: str
    name: str
    email: str
    image_url: str
    amount: str


class CardData(BaseModel):
    """Dashboard summary cards"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    
    number_of_invoices: int
    number_of_customers: int
    total_paid_invoices: str
    total_pending_invoices: str


class InvoiceRow(BaseModel):
    """Invoice search result row"""
    model_config = ConfigDict(from_attributes=True)
    
    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: date
    amount: int
    status: InvoiceStatus


class InvoiceForm(BaseModel):
    """Invoice as loaded into the edit form; amount in major units"""
    model_config = ConfigDict(from_attributes=True)
    
    id: str
    customer_id: str
    amount: float
    status: InvoiceStatus


class CustomerField(BaseModel):
    """Customer option for selection controls"""
    model_config = ConfigDict(from_attributes=True)
    
    id: str
    name: str


class CustomerTableRow(BaseModel):
    """Customer with invoice totals"""
    model_config = ConfigDict(from_attributes=True)
    
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str


class User(BaseModel):
    """Dashboard user; `password` is the stored hash"""
    model_config = ConfigDict(from_attributes=True)
    
    id: str
    name: str
    email: str
    password: str
