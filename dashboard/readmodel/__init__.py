"""
Read Model Module
"""
from .definitions import (
    CardData,
    CustomerField,
    CustomerTableRow,
    InvoiceForm,
    InvoiceRow,
    LatestInvoice,
    RevenuePoint,
    User,
)
from .exceptions import DatastoreError, ErrorKind, NotFoundError, ReadModelError, ValidationError
from .formatting import format_currency, parse_currency
from .service import ReadModel

__all__ = [
    "ReadModel",
    "CardData",
    "CustomerField",
    "CustomerTableRow",
    "InvoiceForm",
    "InvoiceRow",
    "LatestInvoice",
    "RevenuePoint",
    "User",
    "ErrorKind",
    "ReadModelError",
    "DatastoreError",
    "NotFoundError",
    "ValidationError",
    "format_currency",
    "parse_currency",
]
