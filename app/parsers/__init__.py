"""
app/parsers package marker.
"""

from app.parsers.product_parser import ProductRowParser
from app.parsers.sales_parser import SalesRowParser

__all__ = [
    "ProductRowParser",
    "SalesRowParser",
]
