# Contact PII encryption

from .codec import ContactCodec, DecryptionError, derive_key, generate_secret
from .models import ContactBundle

__all__ = [
    "ContactCodec",
    "DecryptionError",
    "derive_key",
    "generate_secret",
    "ContactBundle",
]
