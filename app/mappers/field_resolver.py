"""
app/mappers/field_resolver.py

Per-row lookup of canonical fields across human-phrased CSV headers.
"""

from __future__ import annotations

from typing import Callable, Iterable, Mapping, Sequence

from app.domain.commerce_import import RawRow

SALES_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "sku": ("sku", "product sku", "item sku", "product_sku", "item_sku", "code", "product code"),
    "sale_date": ("date", "sale date", "transaction date", "order date", "purchase date", "sold date"),
    "quantity": ("quantity", "units sold", "qty", "amount", "units", "quantity sold", "sold"),
    "unit_price": ("price", "unit price", "selling price", "sale price", "unit_price", "sell_price"),
    "product_name": ("product name", "name", "item name"),
    "category": ("category", "product category"),
    "total_cost": ("total cost", "cost"),
    "marketplace": ("marketplace", "platform"),
    "notes": ("notes", "description", "memo"),
}

PRODUCT_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("product name", "name", "item name", "title", "product", "item"),
    "sku": ("sku", "product sku", "item sku", "product_sku", "item_sku", "code"),
    "category": ("category", "product category", "type", "product_category"),
    "selling_price": ("selling price", "price", "unit price", "sale price"),
    "cost_price": ("cost price", "cost", "unit cost"),
    "current_stock": ("current stock", "stock", "inventory", "quantity"),
    "reorder_point": ("reorder point", "min stock", "reorder level"),
    "lead_time": ("lead time", "delivery time"),
    "supplier_name": ("supplier", "supplier name", "vendor"),
    "supplier_contact": ("supplier contact", "vendor contact"),
    "location": ("location", "warehouse"),
    "notes": ("notes", "description"),
}


def normalize_header(header: str) -> str:
    """
    Normalize a column name for flexible matching.
    """

    return "".join(ch for ch in header.strip().lower() if ch.isalnum())


def _usable(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


class FieldResolver:
    """
    Finds the value of one canonical field in a raw CSV row.

    Candidates are tried in priority order. For each candidate the match
    strategies run in a fixed cascade (exact key, case-insensitive key,
    normalized key, normalized containment), each scanning the row's
    headers in column order. The first strategy that yields a non-empty
    value wins; there is no scoring across strategies.
    """

    def resolve(self, row: RawRow, candidate_names: Sequence[str]) -> str | None:
        headers = [key for key in row.keys() if isinstance(key, str)]
        normalized = {header: normalize_header(header) for header in headers}

        for candidate in candidate_names:
            exact = _usable(row.get(candidate))
            if exact is not None:
                return exact

            lowered_candidate = candidate.strip().lower()
            normalized_candidate = normalize_header(candidate)

            strategies: tuple[Callable[[str], bool], ...] = (
                lambda header: header.strip().lower() == lowered_candidate,
                lambda header: bool(normalized[header]) and normalized[header] == normalized_candidate,
                lambda header: bool(normalized[header])
                and bool(normalized_candidate)
                and (normalized_candidate in normalized[header] or normalized[header] in normalized_candidate),
            )
            for matches in strategies:
                value = self._first_match(row, headers, matches)
                if value is not None:
                    return value

        return None

    def resolve_fields(
        self,
        row: RawRow,
        aliases: Mapping[str, Sequence[str]],
    ) -> dict[str, str | None]:
        """
        Resolve every canonical field of an alias table against one row.
        """

        return {canonical: self.resolve(row, candidates) for canonical, candidates in aliases.items()}

    @staticmethod
    def _first_match(
        row: RawRow,
        headers: Iterable[str],
        matches: Callable[[str], bool],
    ) -> str | None:
        for header in headers:
            if not matches(header):
                continue
            value = _usable(row.get(header))
            if value is not None:
                return value
        return None


_DEFAULT_RESOLVER = FieldResolver()


def resolve_field(row: RawRow, candidate_names: Sequence[str]) -> str | None:
    """
    Resolve one field with the shared stateless resolver.
    """

    return _DEFAULT_RESOLVER.resolve(row, candidate_names)
