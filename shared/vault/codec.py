"""
Contact Codec

Reversible encryption of contact PII before it reaches persisted storage.
Keys are derived deterministically from per-deployment secrets; retired
secrets stay readable so stored tokens survive a key rotation.
"""

import base64
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken, MultiFernet
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from pydantic import ValidationError

from .models import ContactBundle

KEY_INFO = b"marketplace-contact-bundle"


class DecryptionError(Exception):
    """Ciphertext is malformed, tampered with, or decrypts to nothing"""
    pass


def derive_key(secret: str) -> bytes:
    """Derive a Fernet key from a secret string"""
    if not secret:
        raise ValueError("Encryption secret must not be empty")

    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=32,
        salt=None,
        info=KEY_INFO,
    )
    return base64.urlsafe_b64encode(hkdf.derive(secret.encode()))


def generate_secret() -> str:
    """Generate a fresh random secret suitable for PII_SECRET"""
    return Fernet.generate_key().decode()


class ContactCodec:
    """
    Encrypts and decrypts contact payloads.

    Usage:
        codec = ContactCodec(secret="...", retired_secrets=["old-secret"])

        token = codec.encrypt_contact(contact)
        contact = codec.decrypt_contact(token)
    """

    def __init__(self, secret: str, retired_secrets: Optional[list[str]] = None):
        """
        Initialize the codec.

        Args:
            secret: Current secret; every new token is written with it
            retired_secrets: Previous secrets still accepted for decryption
        """
        keys = [Fernet(derive_key(secret))]
        keys.extend(Fernet(derive_key(s)) for s in retired_secrets or [] if s)
        self._fernet = MultiFernet(keys)

    def encrypt(self, plain: str) -> str:
        """Encrypt a plaintext string"""
        if not plain:
            raise ValueError("Nothing to encrypt")
        return self._fernet.encrypt(plain.encode()).decode()

    def decrypt(self, token: str) -> str:
        """Decrypt a token produced by encrypt()"""
        try:
            plain = self._fernet.decrypt(token.encode()).decode()
        except (InvalidToken, UnicodeDecodeError, AttributeError) as e:
            raise DecryptionError("Failed to decrypt data") from e

        if not plain:
            raise DecryptionError("Decryption failed - empty payload")

        return plain

    def rotate(self, token: str) -> str:
        """Re-encrypt a token under the current secret"""
        try:
            return self._fernet.rotate(token.encode()).decode()
        except (InvalidToken, AttributeError) as e:
            raise DecryptionError("Failed to rotate token") from e

    def encrypt_contact(self, contact: ContactBundle) -> str:
        """Encrypt a contact bundle as JSON"""
        return self.encrypt(contact.model_dump_json())

    def decrypt_contact(self, token: str) -> ContactBundle:
        """Decrypt a token back into a contact bundle"""
        plain = self.decrypt(token)
        try:
            return ContactBundle.model_validate_json(plain)
        except ValidationError as e:
            raise DecryptionError("Decrypted payload is not a contact bundle") from e
