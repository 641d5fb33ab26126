"""
Search Predicates

Case-insensitive substring filters. The search text is always a bound
parameter; `%`, `_` and the escape character typed by users match literally.
"""

from sqlalchemy import String, cast, or_
from sqlalchemy.sql.expression import ColumnElement

from dashboard.database.models import Customer, Invoice

ESCAPE_CHAR = "\\"


def like_pattern(query: str) -> str:
    """Wrap `query` in wildcards with LIKE metacharacters escaped."""
    escaped = (
        query.replace(ESCAPE_CHAR, ESCAPE_CHAR * 2)
        .replace("%", ESCAPE_CHAR + "%")
        .replace("_", ESCAPE_CHAR + "_")
    )
    return f"%{escaped}%"


def invoice_search_condition(query: str) -> ColumnElement[bool]:
    """
    Predicate for the invoice search and its page count.
    
    Matches customer name, customer email, amount as text, date as text
    or status. Requires invoices joined to customers.
    """
    pattern = like_pattern(query)
    return or_(
        Customer.name.ilike(pattern, escape=ESCAPE_CHAR),
        Customer.email.ilike(pattern, escape=ESCAPE_CHAR),
        cast(Invoice.amount, String).ilike(pattern, escape=ESCAPE_CHAR),
        cast(Invoice.date, String).ilike(pattern, escape=ESCAPE_CHAR),
        Invoice.status.ilike(pattern, escape=ESCAPE_CHAR),
    )


def customer_search_condition(query: str) -> ColumnElement[bool]:
    """Predicate matching customer name or email."""
    pattern = like_pattern(query)
    return or_(
        Customer.name.ilike(pattern, escape=ESCAPE_CHAR),
        Customer.email.ilike(pattern, escape=ESCAPE_CHAR),
    )
