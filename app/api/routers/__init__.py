"""
app/api/routers package marker.
"""

from app.api.routers.csv_import import router as csv_import_router

__all__ = [
    "csv_import_router",
]
