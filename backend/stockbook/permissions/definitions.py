# Overview: All permission definitions organized by category.
# Each permission is defined as: (code, name, description, category)

from .categories import PermissionCategory


# -- INVENTORY --

INVENTORY_PERMISSIONS = [
    (
        "VIEW_INVENTORY",
        "View Inventory",
        "View the category / sub-category / item tree",
        PermissionCategory.INVENTORY,
    ),
    (
        "VIEW_COST_PRICES",
        "View Cost Prices",
        "See sub-category buying prices (hidden as 0 otherwise)",
        PermissionCategory.INVENTORY,
    ),
    (
        "MANAGE_CATALOG",
        "Manage Catalog",
        "Create and edit categories and sub-categories, including prices",
        PermissionCategory.INVENTORY,
    ),
    (
        "ADD_STOCK",
        "Add Stock",
        "Add a batch of numbered items to a sub-category",
        PermissionCategory.INVENTORY,
    ),
    (
        "DELETE_ITEMS",
        "Delete Items",
        "Delete items (remaining items are renumbered)",
        PermissionCategory.INVENTORY,
    ),
]


# -- SALES --

SALES_PERMISSIONS = [
    (
        "SELL_ITEMS",
        "Sell Items",
        "Mark an available item as sold",
        PermissionCategory.SALES,
    ),
    (
        "REVERT_SALES",
        "Revert Sales",
        "Return a sold item to available stock",
        PermissionCategory.SALES,
    ),
    (
        "VIEW_SALES",
        "View Sales Record",
        "View and export the sales record grouped by date",
        PermissionCategory.SALES,
    ),
]


# -- REPORTS --

REPORT_PERMISSIONS = [
    (
        "VIEW_FINANCIALS",
        "View Financials",
        "Revenue, cost, profit, top sellers and AI summary",
        PermissionCategory.REPORTS,
    ),
    (
        "VIEW_RESTOCK_ALERTS",
        "View Restock Alerts",
        "List sub-categories that are low on stock",
        PermissionCategory.REPORTS,
    ),
]


# -- USERS --

USER_PERMISSIONS = [
    (
        "INVITE_WORKERS",
        "Invite Workers",
        "Invite an e-mail address to sign up as a worker",
        PermissionCategory.USERS,
    ),
]


PERMISSION_DEFINITIONS = (
    INVENTORY_PERMISSIONS
    + SALES_PERMISSIONS
    + REPORT_PERMISSIONS
    + USER_PERMISSIONS
)
