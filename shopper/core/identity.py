"""Shopper identity and its transitions"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

import jwt

logger = logging.getLogger(__name__)


class IdentityMode(str, Enum):
    """Which persistence tier governs the cart"""
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class Identity:
    """Current shopper: a device or a signed-in user"""
    id: str
    mode: IdentityMode
    token: Optional[str] = None

    @classmethod
    def anonymous(cls, device_id: str) -> "Identity":
        return cls(id=device_id, mode=IdentityMode.ANONYMOUS)

    @classmethod
    def from_token(cls, token: str) -> "Identity":
        """
        Build an authenticated identity from an identity token.

        The signature is verified by the storefront, not here; the client
        only needs the subject claim.
        """
        try:
            claims = jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Malformed identity token: {e}")

        subject = claims.get("sub")
        if not subject:
            raise ValueError("Identity token has no subject")

        return cls(id=str(subject), mode=IdentityMode.AUTHENTICATED, token=token)

    @property
    def is_authenticated(self) -> bool:
        return self.mode == IdentityMode.AUTHENTICATED


IdentityListener = Callable[[Identity], Awaitable[None]]


class IdentityProvider:
    """Holds the current identity and notifies listeners of transitions"""

    def __init__(self, device_id: str):
        self.device_id = device_id
        self.current = Identity.anonymous(device_id)
        self._listeners: list[IdentityListener] = []

    def subscribe(self, listener: IdentityListener) -> None:
        """Register a coroutine called with every new identity"""
        self._listeners.append(listener)

    def unsubscribe(self, listener: IdentityListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def sign_in(self, token: str) -> Identity:
        """Switch to the user named by the token"""
        return await self._transition(Identity.from_token(token))

    async def sign_out(self) -> Identity:
        """Switch back to the anonymous device identity"""
        return await self._transition(Identity.anonymous(self.device_id))

    async def _transition(self, identity: Identity) -> Identity:
        logger.info(f"Identity changed: {self.current.mode.value} -> {identity.mode.value}")
        self.current = identity
        for listener in list(self._listeners):
            await listener(identity)
        return identity
