"""
Database Models

Relational schema read by the dashboard. Amounts are stored as integer
minor currency units (cents).

Tables:
- revenue: Monthly revenue series
- customers: Customer directory
- invoices: Invoices issued to customers
- users: Dashboard users
"""

from datetime import date
from enum import Enum
from typing import List
import uuid

from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


class InvoiceStatus(str, Enum):
    """Invoice status enumeration"""
    PENDING = "pending"
    PAID = "paid"


def _new_id() -> str:
    return str(uuid.uuid4())


class Revenue(Base):
    """Revenue per period. Append-only source data."""
    
    __tablename__ = "revenue"
    
    month: Mapped[str] = mapped_column(String(16), primary_key=True)
    revenue: Mapped[int] = mapped_column(Integer, nullable=False)


class Customer(Base):
    """Customer directory entry"""
    
    __tablename__ = "customers"
    
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    image_url: Mapped[str] = mapped_column(String(255), nullable=False)
    
    invoices: Mapped[List["Invoice"]] = relationship(back_populates="customer")
    
    __table_args__ = (
        Index("idx_customers_name", "name"),
    )


class Invoice(Base):
    """Invoice issued to a customer"""
    
    __tablename__ = "invoices"
    
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    customer_id: Mapped[str] = mapped_column(String(36), ForeignKey("customers.id"), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    
    customer: Mapped["Customer"] = relationship(back_populates="invoices")
    
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_invoices_amount_non_negative"),
        CheckConstraint("status IN ('pending', 'paid')", name="ck_invoices_status"),
        Index("idx_invoices_date", "date"),
        Index("idx_invoices_customer", "customer_id"),
    )


class User(Base):
    """Dashboard user. Email is the lookup key."""
    
    __tablename__ = "users"
    
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
