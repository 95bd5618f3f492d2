# backend/stockbook/routes/inventory.py
"""
Inventory tree routes.

SECURITY: All routes require authentication.
- Reading the tree requires VIEW_INVENTORY (buying prices need VIEW_COST_PRICES)
- Catalog edits require MANAGE_CATALOG
- Stock batches require ADD_STOCK, deletes require DELETE_ITEMS
- Selling requires SELL_ITEMS, reverting requires REVERT_SALES

Every mutation answers with the freshly re-read tree so clients never patch
local state by hand.
"""
from flask import Blueprint, request, current_app, g

from ..services import inventory_service
from ..validation import ValidationError, ConflictError, NotFoundError, json_object
from ..decorators import require_auth, require_permission


inventory_bp = Blueprint("inventory", __name__, url_prefix="/api/inventory")


def _tree_response(extra: dict | None = None, status: int = 200):
    tree = inventory_service.load_tree(g.current_profile)
    body = {"categories": [category.to_dict() for category in tree]}
    if extra:
        body.update(extra)
    return body, status


def _error_response(exc: Exception):
    if isinstance(exc, ValidationError):
        return {"error": str(exc)}, 400
    if isinstance(exc, NotFoundError):
        return {"error": str(exc)}, 404
    if isinstance(exc, ConflictError):
        current_app.logger.warning("Rejected inventory write on %s: %s", request.path, exc)
        return {"error": str(exc)}, 409
    current_app.logger.exception("Inventory operation failed")
    return {"error": "Internal server error"}, 500


@inventory_bp.get("")
@require_auth
@require_permission("VIEW_INVENTORY")
def inventory_tree_route():
    """
    Inventory tree, optionally filtered.

    ?q= keeps categories whose name matches (with all their sub-categories)
    and, for other categories, only the matching sub-categories.
    """
    query = request.args.get("q")
    tree = inventory_service.load_tree(g.current_profile, query)
    return {"categories": [category.to_dict() for category in tree]}, 200


@inventory_bp.post("/categories")
@require_auth
@require_permission("MANAGE_CATALOG")
def create_category_route():
    try:
        payload = json_object(request.get_json(silent=True))
        category = inventory_service.create_category(g.current_profile, payload.get("name"))
    except Exception as e:
        return _error_response(e)
    return _tree_response({"category": category.to_dict()}, 201)


@inventory_bp.patch("/categories/<int:category_id>")
@require_auth
@require_permission("MANAGE_CATALOG")
def rename_category_route(category_id: int):
    try:
        payload = json_object(request.get_json(silent=True))
        category = inventory_service.rename_category(g.current_profile, category_id, payload.get("name"))
    except Exception as e:
        return _error_response(e)
    return _tree_response({"category": category.to_dict()})


@inventory_bp.post("/categories/<int:category_id>/sub-categories")
@require_auth
@require_permission("MANAGE_CATALOG")
def create_sub_category_route(category_id: int):
    """Body: {"name", "buying_price", "selling_price"}; blank prices are stored as 0."""
    try:
        payload = json_object(request.get_json(silent=True))
        sub = inventory_service.create_sub_category(
            g.current_profile,
            category_id,
            name=payload.get("name"),
            buying_price=payload.get("buying_price"),
            selling_price=payload.get("selling_price"),
        )
    except Exception as e:
        return _error_response(e)
    return _tree_response({"sub_category_id": sub.id}, 201)


@inventory_bp.patch("/sub-categories/<int:sub_category_id>")
@require_auth
@require_permission("MANAGE_CATALOG")
def update_sub_category_route(sub_category_id: int):
    try:
        payload = json_object(request.get_json(silent=True))
        inventory_service.update_sub_category(
            g.current_profile,
            sub_category_id,
            name=payload.get("name"),
            buying_price=payload.get("buying_price"),
            selling_price=payload.get("selling_price"),
        )
    except Exception as e:
        return _error_response(e)
    return _tree_response()


@inventory_bp.post("/sub-categories/<int:sub_category_id>/stock")
@require_auth
@require_permission("ADD_STOCK")
def add_stock_route(sub_category_id: int):
    """Body: {"quantity": <positive int>}."""
    try:
        payload = json_object(request.get_json(silent=True))
        items = inventory_service.add_stock(g.current_profile, sub_category_id, payload.get("quantity"))
    except Exception as e:
        return _error_response(e)
    current_app.logger.info(
        "Added %s items to sub-category %s (profile %s)",
        len(items), sub_category_id, g.current_profile.id,
    )
    return _tree_response({"added": [item.item_number for item in items]}, 201)


@inventory_bp.delete("/items/<int:item_id>")
@require_auth
@require_permission("DELETE_ITEMS")
def delete_item_route(item_id: int):
    try:
        sub_category_id = inventory_service.delete_item(g.current_profile, item_id)
    except Exception as e:
        return _error_response(e)
    current_app.logger.info("Deleted item %s from sub-category %s", item_id, sub_category_id)
    return _tree_response()


@inventory_bp.post("/items/<int:item_id>/sell")
@require_auth
@require_permission("SELL_ITEMS")
def sell_item_route(item_id: int):
    """Body: {"sold_date": "YYYY-MM-DD"} (optional, defaults to today)."""
    try:
        payload = json_object(request.get_json(silent=True))
        item = inventory_service.sell_item(g.current_profile, item_id, payload.get("sold_date"))
    except Exception as e:
        return _error_response(e)
    return _tree_response({"item": item.to_dict()})


@inventory_bp.post("/items/<int:item_id>/revert")
@require_auth
@require_permission("REVERT_SALES")
def revert_sale_route(item_id: int):
    try:
        item = inventory_service.revert_sale(g.current_profile, item_id)
    except Exception as e:
        return _error_response(e)
    return _tree_response({"item": item.to_dict()})
