# Overview: Pure, DB-free views over an inventory tree (category -> sub-category -> items).

"""
Inventory tree views

Everything the dashboards and reports show is derived here from a tree that
was loaded once per request. Nothing in this module touches the database, so
every function can be exercised on hand-built trees.

Money is integer cents throughout.

Role scoping:
- project_tree() is the only place that decides whether buying prices are
  visible. Callers pass a capability flag, never a role name.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable, Sequence

from ..models import STATUS_AVAILABLE, STATUS_SOLD


# Sub-categories with this many available items or fewer need restocking
LOW_STOCK_THRESHOLD = 10

# Available count at or below which a restock alert is shown as critical
CRITICAL_STOCK_LEVEL = 3

TOP_SELLERS_LIMIT = 5


@dataclass(frozen=True)
class ItemView:
    id: int
    item_number: int
    status: str
    sold_date: date | None = None

    @property
    def is_sold(self) -> bool:
        return self.status == STATUS_SOLD

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "item_number": self.item_number,
            "status": self.status,
            "sold_date": self.sold_date.isoformat() if self.sold_date else None,
        }


@dataclass(frozen=True)
class SubCategoryView:
    id: int
    name: str
    buying_price_cents: int
    selling_price_cents: int
    items: tuple[ItemView, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "buying_price_cents": self.buying_price_cents,
            "selling_price_cents": self.selling_price_cents,
            "available_count": available_count(self),
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class CategoryView:
    id: int
    name: str
    sub_categories: tuple[SubCategoryView, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "sub_categories": [sub.to_dict() for sub in self.sub_categories],
        }


@dataclass(frozen=True)
class SoldItem:
    """A sold item flattened together with its sub-category's name and prices."""
    id: int
    item_number: int
    name: str
    category_name: str
    sold_date: date | None
    buying_price_cents: int
    selling_price_cents: int

    @property
    def profit_cents(self) -> int:
        return self.selling_price_cents - self.buying_price_cents

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "item_number": self.item_number,
            "name": self.name,
            "category_name": self.category_name,
            "sold_date": self.sold_date.isoformat() if self.sold_date else None,
            "selling_price_cents": self.selling_price_cents,
        }


@dataclass(frozen=True)
class FinancialSummary:
    revenue_cents: int
    cost_cents: int
    profit_cents: int
    items_sold: int
    top_sellers: tuple[SoldItem, ...]
    sold_items: tuple[SoldItem, ...] = field(default=(), repr=False)

    def to_dict(self) -> dict:
        return {
            "revenue_cents": self.revenue_cents,
            "cost_cents": self.cost_cents,
            "profit_cents": self.profit_cents,
            "items_sold": self.items_sold,
            "top_sellers": [item.to_dict() for item in self.top_sellers],
        }


@dataclass(frozen=True)
class LowStockEntry:
    sub_category_id: int
    name: str
    category_name: str
    available_count: int

    @property
    def is_critical(self) -> bool:
        return self.available_count <= CRITICAL_STOCK_LEVEL

    def to_dict(self) -> dict:
        return {
            "sub_category_id": self.sub_category_id,
            "name": self.name,
            "category_name": self.category_name,
            "available_count": self.available_count,
            "critical": self.is_critical,
        }


@dataclass(frozen=True)
class DateGroup:
    sold_date: date
    items: tuple[SoldItem, ...]

    @property
    def subtotal_cents(self) -> int:
        return sum(item.selling_price_cents for item in self.items)

    def to_dict(self) -> dict:
        return {
            "date": self.sold_date.isoformat(),
            "subtotal_cents": self.subtotal_cents,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class SalesRecord:
    groups: tuple[DateGroup, ...]

    @property
    def grand_total_cents(self) -> int:
        return sum(group.subtotal_cents for group in self.groups)

    def to_dict(self) -> dict:
        return {
            "groups": [group.to_dict() for group in self.groups],
            "grand_total_cents": self.grand_total_cents,
        }


# -- Projection ---------------------------------------------------------------


def project_tree(categories: Iterable, *, can_view_cost: bool) -> list[CategoryView]:
    """
    Build the caller's view of ORM (or ORM-shaped) category rows.

    Without the cost capability every sub-category reports buying price 0,
    whatever is stored. Categories are ordered by name, items by number.
    """
    views = []
    for cat in sorted(categories, key=lambda c: c.name):
        subs = []
        for sub in cat.sub_categories:
            items = tuple(
                ItemView(
                    id=item.id,
                    item_number=item.item_number,
                    status=item.status,
                    sold_date=item.sold_date if item.status == STATUS_SOLD else None,
                )
                for item in sorted(sub.items, key=lambda i: i.item_number)
            )
            subs.append(
                SubCategoryView(
                    id=sub.id,
                    name=sub.name,
                    buying_price_cents=(sub.buying_price_cents or 0) if can_view_cost else 0,
                    selling_price_cents=sub.selling_price_cents or 0,
                    items=items,
                )
            )
        views.append(CategoryView(id=cat.id, name=cat.name, sub_categories=tuple(subs)))
    return views


# -- Search -------------------------------------------------------------------


def filter_tree(tree: Sequence[CategoryView], query: str | None) -> list[CategoryView]:
    """
    Prune the tree to categories/sub-categories whose names contain query.

    A matching category keeps all of its sub-categories; otherwise only the
    matching sub-categories are kept and categories with no match are dropped.
    A blank query returns the tree as is.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(tree)

    result = []
    for cat in tree:
        if needle in cat.name.lower():
            result.append(cat)
            continue
        matching = tuple(sub for sub in cat.sub_categories if needle in sub.name.lower())
        if matching:
            result.append(replace(cat, sub_categories=matching))
    return result


# -- Partitions ---------------------------------------------------------------


def available_count(sub: SubCategoryView) -> int:
    return sum(1 for item in sub.items if item.status == STATUS_AVAILABLE)


def sold_items(tree: Sequence[CategoryView]) -> list[SoldItem]:
    """Every sold item in tree order (category, sub-category, item number)."""
    return [
        SoldItem(
            id=item.id,
            item_number=item.item_number,
            name=sub.name,
            category_name=cat.name,
            sold_date=item.sold_date,
            buying_price_cents=sub.buying_price_cents,
            selling_price_cents=sub.selling_price_cents,
        )
        for cat in tree
        for sub in cat.sub_categories
        for item in sub.items
        if item.is_sold
    ]


# -- Reports ------------------------------------------------------------------


def financial_summary(tree: Sequence[CategoryView]) -> FinancialSummary:
    sold = sold_items(tree)
    revenue = sum(item.selling_price_cents for item in sold)
    cost = sum(item.buying_price_cents for item in sold)
    # sorted() is stable: equal prices keep tree order
    top = sorted(sold, key=lambda item: item.selling_price_cents, reverse=True)[:TOP_SELLERS_LIMIT]
    return FinancialSummary(
        revenue_cents=revenue,
        cost_cents=cost,
        profit_cents=revenue - cost,
        items_sold=len(sold),
        top_sellers=tuple(top),
        sold_items=tuple(sold),
    )


def low_stock(tree: Sequence[CategoryView], threshold: int = LOW_STOCK_THRESHOLD) -> list[LowStockEntry]:
    """Sub-categories at or below threshold, most urgent first."""
    entries = [
        LowStockEntry(
            sub_category_id=sub.id,
            name=sub.name,
            category_name=cat.name,
            available_count=available_count(sub),
        )
        for cat in tree
        for sub in cat.sub_categories
    ]
    flagged = [entry for entry in entries if entry.available_count <= threshold]
    return sorted(flagged, key=lambda entry: entry.available_count)


def sales_by_date(tree: Sequence[CategoryView]) -> SalesRecord:
    grouped: "OrderedDict[date, list[SoldItem]]" = OrderedDict()
    for item in sold_items(tree):
        if item.sold_date is None:
            continue
        grouped.setdefault(item.sold_date, []).append(item)

    groups = [
        DateGroup(sold_date=day, items=tuple(items))
        for day, items in sorted(grouped.items(), key=lambda kv: kv[0], reverse=True)
    ]
    return SalesRecord(groups=tuple(groups))


# -- Numbering ----------------------------------------------------------------


def next_item_numbers(existing_count: int, quantity: int) -> list[int]:
    """Numbers for a new stock batch appended after existing_count items."""
    return list(range(existing_count + 1, existing_count + quantity + 1))


def renumber_plan(items: Iterable) -> list[tuple[int, int]]:
    """
    (item_id, new_number) pairs that make the numbering dense 1..N.

    Items are taken in current item_number order (id breaks ties); only items
    whose number changes are returned, in ascending order. When the current
    numbers are distinct, applying them one at a time never collides with a
    number still in use.
    """
    ordered = sorted(items, key=lambda i: (i.item_number, i.id))
    return [
        (item.id, position)
        for position, item in enumerate(ordered, start=1)
        if item.item_number != position
    ]
