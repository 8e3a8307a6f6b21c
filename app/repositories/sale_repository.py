"""
app/repositories/sale_repository.py

Persistence layer for imported sales.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.sale import Sale


class SaleRepository:
    """
    Repository for batch persistence of sale rows.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def add_many(self, sales: Sequence[Sale]) -> int:
        """
        Stage ``sales`` in the session and flush; the caller commits.
        """

        if not sales:
            return 0
        self._session.add_all(list(sales))
        self._session.flush()
        return len(sales)

    def list_by_batch(self, import_batch: str) -> list[Sale]:
        stmt = select(Sale).where(Sale.import_batch == import_batch).order_by(Sale.id)
        return list(self._session.execute(stmt).scalars().all())
