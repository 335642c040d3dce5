"""
Identity Token Verification

Resolves the shopper behind a request from its bearer identity token.
Token issuance belongs to the auth provider; this module only consumes it.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Depends, Header, HTTPException

from ..core.config import settings
from ..database.admins import admin_db
from ..models.admin import StoreAdmin

logger = logging.getLogger(__name__)


@dataclass
class VerifiedIdentity:
    """Identity extracted from a valid token"""
    user_id: str
    claims: dict


class IdentityVerifier:
    """Verifies HS256 identity tokens signed by the auth provider"""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def verify(self, token: str) -> VerifiedIdentity:
        """
        Verify a token and return its identity.

        Raises:
            jwt.InvalidTokenError: if the token is invalid, expired or has no subject
        """
        claims = jwt.decode(
            token,
            self.secret,
            algorithms=[self.algorithm],
            options={"require": ["sub"]},
        )
        return VerifiedIdentity(user_id=str(claims["sub"]), claims=claims)


class IdentityDependency:
    """
    FastAPI dependency that requires an authenticated shopper.

    Use on routes that operate on the caller's server-side cart.
    """

    def __init__(self, verifier: Optional[IdentityVerifier] = None):
        self._verifier = verifier

    @property
    def verifier(self) -> IdentityVerifier:
        if self._verifier is None:
            self._verifier = IdentityVerifier(
                secret=settings.identity_token_secret,
                algorithm=settings.identity_token_algorithm,
            )
        return self._verifier

    async def __call__(
        self,
        authorization: Optional[str] = Header(None),
    ) -> VerifiedIdentity:
        if not authorization or not authorization.lower().startswith("bearer "):
            raise HTTPException(
                status_code=401,
                detail="This endpoint requires a bearer identity token",
            )

        token = authorization.split(" ", 1)[1].strip()
        try:
            return self.verifier.verify(token)
        except jwt.InvalidTokenError as e:
            logger.warning(f"Identity token rejected: {e}")
            raise HTTPException(status_code=401, detail="Invalid identity token")


# Dependency instance
require_identity = IdentityDependency()


class StoreAdminDependency:
    """
    FastAPI dependency that requires the administrator of a store.

    Use on routes that expose or change a store's orders; the route only
    ever sees the caller's own store.
    """

    async def __call__(
        self,
        identity: VerifiedIdentity = Depends(require_identity),
    ) -> StoreAdmin:
        admin = admin_db.get_admin(identity.user_id)
        if not admin:
            logger.warning(f"User {identity.user_id} is not a store administrator")
            raise HTTPException(
                status_code=403,
                detail="This endpoint requires a store administrator",
            )
        return admin


require_store_admin = StoreAdminDependency()
