"""
Read Model Service

Read operations behind the billing dashboard: revenue series, latest
invoices, summary cards, invoice search with pagination, invoice lookup,
customer directory and user lookup.

Every operation is stateless and read-only. Store failures surface as
DatastoreError with a fixed message; lookups that match nothing raise
NotFoundError.
"""

from typing import List, Optional

import structlog
from sqlalchemy import case, func, select

from dashboard.config import QuerySettings, get_settings
from dashboard.database.models import Customer, Invoice, InvoiceStatus, Revenue, User as UserRecord
from dashboard.database.store import QueryStore, first_row
from dashboard.readmodel.definitions import (
    CardData,
    CustomerField,
    CustomerTableRow,
    InvoiceForm,
    InvoiceRow,
    LatestInvoice,
    RevenuePoint,
    User,
)
from dashboard.readmodel.exceptions import NotFoundError, ValidationError, read_operation
from dashboard.readmodel.filters import customer_search_condition, invoice_search_condition
from dashboard.readmodel.formatting import format_currency, to_major_units
from dashboard.readmodel.pagination import page_offset, total_pages, validate_page

logger = structlog.get_logger(__name__)


def _sum_where_status(status: InvoiceStatus):
    return func.sum(case((Invoice.status == status.value, Invoice.amount), else_=0))


class ReadModel:
    """
    Dashboard read operations over a QueryStore.
    
    Page size and the latest-invoice limit come from QuerySettings so the
    invoice search and its page count always agree.
    """
    
    def __init__(self, store: QueryStore, settings: Optional[QuerySettings] = None):
        self.store = store
        self.settings = settings or get_settings().query
    
    @property
    def page_size(self) -> int:
        return self.settings.items_per_page
    
    def _format(self, minor_units) -> str:
        return format_currency(minor_units, self.settings.currency)
    
    def _check_query(self, query: str, operation: str) -> str:
        if not isinstance(query, str):
            raise ValidationError(operation, "Search query must be text.")
        if len(query) > self.settings.max_query_length:
            raise ValidationError(operation, "Search query is too long.")
        return query
    
    def _check_key(self, value: str, operation: str, label: str) -> str:
        if not isinstance(value, str) or not value:
            raise ValidationError(operation, f"{label} must be non-empty text.")
        return value
    
    # =========================================================================
    # DASHBOARD
    # =========================================================================
    
    @read_operation("Failed to fetch revenue data.")
    async def fetch_revenue(self) -> List[RevenuePoint]:
        """Revenue series in the order the store returns it."""
        rows = await self.store.execute(select(Revenue.month, Revenue.revenue))
        return [RevenuePoint.model_validate(row) for row in rows]
    
    @read_operation("Failed to fetch the latest invoices.")
    async def fetch_latest_invoices(self) -> List[LatestInvoice]:
        """Most recently dated invoices with customer details, newest first."""
        stmt = (
            select(
                Invoice.amount,
                Customer.name,
                Customer.image_url,
                Customer.email,
                Invoice.id,
            )
            .join(Customer, Invoice.customer_id == Customer.id)
            .order_by(Invoice.date.desc(), Invoice.id)
            .limit(self.settings.latest_invoices_limit)
        )
        rows = await self.store.execute(stmt)
        
        return [
            LatestInvoice(
                id=row.id,
                name=row.name,
                email=row.email,
                image_url=row.image_url,
                amount=self._format(row.amount),
            )
            for row in rows
        ]
    
    @read_operation("Failed to fetch card data.")
    async def fetch_card_data(self) -> CardData:
        """
        Summary card snapshot.
        
        Invoice count, customer count and the paid/pending sums are
        independent queries and run concurrently; any failure fails the
        whole snapshot.
        """
        invoice_count, customer_count, totals = await self.store.execute_all(
            select(func.count()).select_from(Invoice),
            select(func.count()).select_from(Customer),
            select(
                _sum_where_status(InvoiceStatus.PAID).label("paid"),
                _sum_where_status(InvoiceStatus.PENDING).label("pending"),
            ),
        )
        
        invoice_row = first_row(invoice_count)
        customer_row = first_row(customer_count)
        totals_row = first_row(totals)
        
        card = CardData(
            number_of_invoices=int(invoice_row[0] or 0) if invoice_row else 0,
            number_of_customers=int(customer_row[0] or 0) if customer_row else 0,
            total_paid_invoices=self._format(totals_row.paid if totals_row else 0),
            total_pending_invoices=self._format(totals_row.pending if totals_row else 0),
        )
        logger.debug(
            "Card data computed",
            invoices=card.number_of_invoices,
            customers=card.number_of_customers,
        )
        return card
    
    # =========================================================================
    # INVOICES
    # =========================================================================
    
    @read_operation("Failed to fetch invoices.")
    async def fetch_filtered_invoices(self, query: str, page: int) -> List[InvoiceRow]:
        """
        One page of invoices matching `query`, newest first.
        
        An empty query matches every invoice. Pages past the end are empty.
        """
        self._check_query(query, "fetch_filtered_invoices")
        validate_page(page, "fetch_filtered_invoices")
        
        stmt = (
            select(
                Invoice.id,
                Invoice.customer_id,
                Invoice.amount,
                Invoice.date,
                Invoice.status,
                Customer.name,
                Customer.email,
                Customer.image_url,
            )
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(invoice_search_condition(query))
            .order_by(Invoice.date.desc(), Invoice.id)
            .limit(self.page_size)
            .offset(page_offset(page, self.page_size))
        )
        rows = await self.store.execute(stmt)
        return [InvoiceRow.model_validate(row) for row in rows]
    
    @read_operation("Failed to fetch total number of invoices.")
    async def fetch_invoices_pages(self, query: str) -> int:
        """Number of pages fetch_filtered_invoices has for `query`."""
        self._check_query(query, "fetch_invoices_pages")
        
        stmt = (
            select(func.count())
            .select_from(Invoice)
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(invoice_search_condition(query))
        )
        row = first_row(await self.store.execute(stmt))
        count = int(row[0] or 0) if row else 0
        return total_pages(count, self.page_size)
    
    @read_operation("Failed to fetch invoice.")
    async def fetch_invoice_by_id(self, invoice_id: str) -> InvoiceForm:
        """
        Invoice for the edit form, amount converted to major units.
        
        Raises:
            NotFoundError: If no invoice has this id
        """
        self._check_key(invoice_id, "fetch_invoice_by_id", "Invoice id")
        
        stmt = select(
            Invoice.id,
            Invoice.customer_id,
            Invoice.amount,
            Invoice.status,
        ).where(Invoice.id == invoice_id)
        row = first_row(await self.store.execute(stmt))
        
        if row is None:
            raise NotFoundError("fetch_invoice_by_id", "Invoice not found.")
        
        return InvoiceForm(
            id=row.id,
            customer_id=row.customer_id,
            amount=to_major_units(row.amount, self.settings.currency),
            status=row.status,
        )
    
    # =========================================================================
    # CUSTOMERS
    # =========================================================================
    
    @read_operation("Failed to fetch all customers.")
    async def fetch_customers(self) -> List[CustomerField]:
        """Every customer's id and name, alphabetical."""
        rows = await self.store.execute(
            select(Customer.id, Customer.name).order_by(Customer.name.asc())
        )
        return [CustomerField.model_validate(row) for row in rows]
    
    @read_operation("Failed to fetch customer table.")
    async def fetch_filtered_customers(self, query: str) -> List[CustomerTableRow]:
        """
        Customers matching `query` with their invoice totals.
        
        Customers without invoices are included with zero totals.
        """
        self._check_query(query, "fetch_filtered_customers")
        
        stmt = (
            select(
                Customer.id,
                Customer.name,
                Customer.email,
                Customer.image_url,
                func.count(Invoice.id).label("total_invoices"),
                _sum_where_status(InvoiceStatus.PENDING).label("total_pending"),
                _sum_where_status(InvoiceStatus.PAID).label("total_paid"),
            )
            .outerjoin(Invoice, Customer.id == Invoice.customer_id)
            .where(customer_search_condition(query))
            .group_by(Customer.id, Customer.name, Customer.email, Customer.image_url)
            .order_by(Customer.name.asc())
        )
        rows = await self.store.execute(stmt)
        
        return [
            CustomerTableRow(
                id=row.id,
                name=row.name,
                email=row.email,
                image_url=row.image_url,
                total_invoices=row.total_invoices or 0,
                total_pending=self._format(row.total_pending),
                total_paid=self._format(row.total_paid),
            )
            for row in rows
        ]
    
    # =========================================================================
    # USERS
    # =========================================================================
    
    @read_operation("Failed to fetch user.")
    async def get_user(self, email: str) -> User:
        """
        User with exactly this email. Matching is case-sensitive.
        
        Raises:
            NotFoundError: If no user has this email
        """
        self._check_key(email, "get_user", "Email")
        
        row = first_row(await self.store.execute(
            select(
                UserRecord.id,
                UserRecord.name,
                UserRecord.email,
                UserRecord.password,
            ).where(UserRecord.email == email)
        ))
        
        if row is None:
            raise NotFoundError("get_user", "User not found.")
        
        return User.model_validate(row)
