from .auth import Profile, SessionToken, Invite, ROLE_BOSS, ROLE_WORKER
from .inventory import MainCategory, SubCategory, Item, STATUS_AVAILABLE, STATUS_SOLD

__all__ = [
    'Profile', 'SessionToken', 'Invite',
    'ROLE_BOSS', 'ROLE_WORKER',
    'MainCategory', 'SubCategory', 'Item',
    'STATUS_AVAILABLE', 'STATUS_SOLD',
]
