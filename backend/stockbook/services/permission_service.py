# Overview: Role-based capability checks for profiles.

"""
Permission Checking

Fail closed: a capability is held only if the profile's role lists it in
DEFAULT_ROLE_PERMISSIONS. Denials are written to the application log.
"""

from flask import current_app

from ..models import Profile
from ..permissions import DEFAULT_ROLE_PERMISSIONS, get_permission_definition


class PermissionDeniedError(Exception):
    """Raised when a profile lacks a required permission."""
    pass


def get_profile_permissions(profile: Profile) -> frozenset[str]:
    return DEFAULT_ROLE_PERMISSIONS.get(profile.role, frozenset())


def profile_has_permission(profile: Profile, permission_code: str) -> bool:
    return permission_code in get_profile_permissions(profile)


def require_permission(profile: Profile, permission_code: str, resource: str | None = None) -> None:
    """
    Raise PermissionDeniedError unless the profile holds permission_code.

    Usage:
        require_permission(g.current_profile, "ADD_STOCK", resource=request.path)
    """
    definition = get_permission_definition(permission_code)
    if definition is None:
        raise ValueError(f"Unknown permission code: {permission_code}")

    if not profile_has_permission(profile, permission_code):
        current_app.logger.warning(
            "Permission denied: profile=%s role=%s permission=%s resource=%s",
            profile.id, profile.role, permission_code, resource,
        )
        raise PermissionDeniedError(f"{definition['name']} is not allowed for the {profile.role} role")
