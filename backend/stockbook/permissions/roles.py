# Overview: Capabilities granted to each role. Roles are fixed; there are no per-user overrides.

from .helpers import get_all_permission_codes


DEFAULT_ROLE_PERMISSIONS = {
    "boss": frozenset(get_all_permission_codes()),
    "worker": frozenset({
        "VIEW_INVENTORY",
        "SELL_ITEMS",
        "VIEW_SALES",
    }),
}
