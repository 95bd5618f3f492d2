# Overview: Service-layer operations for inventory; encapsulates business logic and database work.

# backend/stockbook/services/inventory_service.py

"""
Stockbook Inventory Invariants (authoritative)

Ownership:
- Every MainCategory belongs to one boss profile (owner_id).
- A caller works on profile.inventory_owner_id: its own id for a boss, its
  boss_id for a worker. Rows owned by anyone else are reported as not found.

Numbering:
- Within a sub-category, item_number is dense 1..N.
- A stock batch of q items is numbered count+1 .. count+q.
- Deleting an item renumbers the remaining ones 1..N by current number.
  Delete and renumber commit together or not at all.

Status:
- available -> sold (with a date in [yesterday, today], shop timezone)
- sold -> available (date cleared)
- status='sold' iff sold_date is set.

Every public mutation commits its own transaction; callers re-fetch the tree
afterwards instead of patching it.
"""

from __future__ import annotations

from datetime import date

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import Profile, MainCategory, SubCategory, Item, STATUS_AVAILABLE, STATUS_SOLD
from ..validation import (
    ConflictError,
    NotFoundError,
    parse_sale_date,
    parse_stock_quantity,
    price_to_cents,
    require_name,
)
from stockbook.time_utils import sale_date_window
from .inventory_tree import (
    CategoryView,
    filter_tree,
    next_item_numbers,
    project_tree,
    renumber_plan,
)
from .permission_service import profile_has_permission


# -- Lookups ------------------------------------------------------------------


def _owned_category(profile: Profile, category_id: int) -> MainCategory:
    category = db.session.query(MainCategory).filter_by(
        id=category_id,
        owner_id=profile.inventory_owner_id,
    ).first()
    if category is None:
        raise NotFoundError("category not found")
    return category


def _owned_sub_category(profile: Profile, sub_category_id: int) -> SubCategory:
    sub = (
        db.session.query(SubCategory)
        .join(MainCategory, SubCategory.main_category_id == MainCategory.id)
        .filter(
            SubCategory.id == sub_category_id,
            MainCategory.owner_id == profile.inventory_owner_id,
        )
        .first()
    )
    if sub is None:
        raise NotFoundError("sub-category not found")
    return sub


def _owned_item(profile: Profile, item_id: int) -> Item:
    item = (
        db.session.query(Item)
        .join(SubCategory, Item.sub_category_id == SubCategory.id)
        .join(MainCategory, SubCategory.main_category_id == MainCategory.id)
        .filter(
            Item.id == item_id,
            MainCategory.owner_id == profile.inventory_owner_id,
        )
        .first()
    )
    if item is None:
        raise NotFoundError("item not found")
    return item


def count_items(sub_category_id: int) -> int:
    return int(
        db.session.query(func.count(Item.id))
        .filter(Item.sub_category_id == sub_category_id)
        .scalar()
        or 0
    )


# -- Reads --------------------------------------------------------------------


def load_tree(profile: Profile, query: str | None = None) -> list[CategoryView]:
    """
    Full inventory visible to the profile, projected for its role.

    Categories come back ordered by name; sub-categories and items are
    eager-loaded with the category rows.
    """
    categories = (
        db.session.query(MainCategory)
        .filter(MainCategory.owner_id == profile.inventory_owner_id)
        .order_by(MainCategory.name.asc(), MainCategory.id.asc())
        .all()
    )
    tree = project_tree(categories, can_view_cost=profile_has_permission(profile, "VIEW_COST_PRICES"))
    return filter_tree(tree, query)


# -- Catalog ------------------------------------------------------------------


def create_category(profile: Profile, name) -> MainCategory:
    category = MainCategory(owner_id=profile.inventory_owner_id, name=require_name(name))
    db.session.add(category)
    db.session.commit()
    return category


def rename_category(profile: Profile, category_id: int, name) -> MainCategory:
    category = _owned_category(profile, category_id)
    category.name = require_name(name)
    db.session.commit()
    return category


def create_sub_category(
    profile: Profile,
    category_id: int,
    *,
    name,
    buying_price=None,
    selling_price=None,
) -> SubCategory:
    category = _owned_category(profile, category_id)
    sub = SubCategory(
        main_category_id=category.id,
        name=require_name(name),
        buying_price_cents=price_to_cents(buying_price, "buying_price"),
        selling_price_cents=price_to_cents(selling_price, "selling_price"),
    )
    db.session.add(sub)
    db.session.commit()
    return sub


def update_sub_category(
    profile: Profile,
    sub_category_id: int,
    *,
    name,
    buying_price=None,
    selling_price=None,
) -> SubCategory:
    """Replace name and both prices (a blank price is stored as 0)."""
    sub = _owned_sub_category(profile, sub_category_id)
    new_name = require_name(name)
    buying_cents = price_to_cents(buying_price, "buying_price")
    selling_cents = price_to_cents(selling_price, "selling_price")

    sub.name = new_name
    sub.buying_price_cents = buying_cents
    sub.selling_price_cents = selling_cents
    db.session.commit()
    return sub


# -- Stock --------------------------------------------------------------------


def add_stock(profile: Profile, sub_category_id: int, quantity) -> list[Item]:
    """
    Append `quantity` available items after the existing ones.

    Raises ValidationError (nothing written) unless quantity is a positive
    integer. Two batches racing on the same sub-category collide on the
    (sub_category_id, item_number) unique constraint; the loser gets a
    ConflictError and should simply retry.
    """
    qty = parse_stock_quantity(quantity)
    sub = _owned_sub_category(profile, sub_category_id)

    existing = count_items(sub.id)
    items = [
        Item(sub_category_id=sub.id, item_number=number, status=STATUS_AVAILABLE)
        for number in next_item_numbers(existing, qty)
    ]
    db.session.add_all(items)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("item numbers changed while adding stock; reload and try again")
    return items


def _apply_renumber(sub_category_id: int) -> int:
    """
    Renumber remaining items in the current transaction. Returns change count.

    Each update is flushed on its own so the unique constraint is checked
    against the already-renumbered rows, in ascending order.
    """
    remaining = (
        db.session.query(Item)
        .filter(Item.sub_category_id == sub_category_id)
        .order_by(Item.item_number.asc(), Item.id.asc())
        .all()
    )
    by_id = {item.id: item for item in remaining}
    plan = renumber_plan(remaining)
    for item_id, number in plan:
        by_id[item_id].item_number = number
        db.session.flush()
    return len(plan)


def delete_item(profile: Profile, item_id: int) -> int:
    """
    Delete an item and close the gap it leaves in the numbering.

    Returns the sub-category id. Runs as a single transaction: on any
    failure nothing is deleted and no item is renumbered.
    """
    item = _owned_item(profile, item_id)
    sub_category_id = item.sub_category_id

    try:
        db.session.delete(item)
        # Deletes must hit the database before the renumbering updates
        db.session.flush()
        _apply_renumber(sub_category_id)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    return sub_category_id


def resequence_sub_category(sub_category_id: int) -> int:
    """
    Repair numbering for one sub-category (CLI maintenance).

    Idempotent. Tolerates duplicate numbers by first moving every item out
    of the 1..N range, then assigning the final numbers.
    Returns how many items changed number.
    """
    items = (
        db.session.query(Item)
        .filter(Item.sub_category_id == sub_category_id)
        .order_by(Item.item_number.asc(), Item.id.asc())
        .all()
    )
    plan = renumber_plan(items)
    if not plan:
        return 0

    offset = max(item.item_number for item in items) + len(items)
    by_id = {item.id: item for item in items}
    try:
        for item_id, _ in plan:
            by_id[item_id].item_number += offset
            db.session.flush()
        for item_id, number in plan:
            by_id[item_id].item_number = number
            db.session.flush()
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return len(plan)


# -- Sales --------------------------------------------------------------------


def sell_item(profile: Profile, item_id: int, sold_on=None) -> Item:
    """
    Mark an available item sold on sold_on (defaults to today).

    The date must lie within [yesterday, today] in the shop timezone.
    """
    sold_date: date = parse_sale_date(sold_on, sale_date_window(current_app.config["SHOP_TIMEZONE"]))
    item = _owned_item(profile, item_id)
    if item.status != STATUS_AVAILABLE:
        raise ConflictError("item is already sold")

    item.status = STATUS_SOLD
    item.sold_date = sold_date
    db.session.commit()
    return item


def revert_sale(profile: Profile, item_id: int) -> Item:
    """Return a sold item to available stock and clear its date."""
    item = _owned_item(profile, item_id)
    if item.status != STATUS_SOLD:
        raise ConflictError("item is not sold")

    item.status = STATUS_AVAILABLE
    item.sold_date = None
    db.session.commit()
    return item
