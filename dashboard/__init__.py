"""
Billing Dashboard Read Model

Query, aggregation and formatting layer behind the billing dashboard.
"""

__version__ = "1.0.0"
