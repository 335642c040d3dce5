# Request security

from .identity import (
    IdentityVerifier,
    IdentityDependency,
    StoreAdminDependency,
    VerifiedIdentity,
    require_identity,
    require_store_admin,
)

__all__ = [
    "IdentityVerifier",
    "IdentityDependency",
    "StoreAdminDependency",
    "VerifiedIdentity",
    "require_identity",
    "require_store_admin",
]
