# Core modules

from .config import settings, get_settings, Settings
from .identity import Identity, IdentityMode, IdentityProvider

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "Identity",
    "IdentityMode",
    "IdentityProvider",
]
