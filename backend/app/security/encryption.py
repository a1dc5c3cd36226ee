# backend/app/security/encryption.py
"""
Field-level encryption for sensitive strings stored at rest.

Envelope format (all parts hex-encoded):

    salt:iv:authTag:ciphertext

- salt: 64 random bytes, fresh per encryption
- key:  PBKDF2-HMAC-SHA512(master secret, salt, 100_000 iterations) → 32 bytes
- iv:   16 random bytes, fresh per encryption
- AES-256-GCM; authTag is the 16-byte GCM tag

The same plaintext never produces the same envelope twice, so envelopes
cannot be compared for equality. Decryption either returns the exact
plaintext or raises; it never returns unauthenticated data.

The master secret comes from settings.ENCRYPTION_KEY. A missing secret is
a configuration error, not something to retry.
"""
import os
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from backend.app.core.config import settings

SALT_LENGTH = 64
IV_LENGTH = 16
TAG_LENGTH = 16
KEY_LENGTH = 32
PBKDF2_ITERATIONS = 100_000


class EncryptionError(Exception):
    """Base class for field encryption failures."""


class EncryptionConfigError(EncryptionError):
    """The master secret is not configured."""


class EnvelopeFormatError(EncryptionError):
    """The envelope is not salt:iv:authTag:ciphertext hex."""


class DecryptionError(EncryptionError):
    """Authentication tag did not verify (tampered data or wrong key)."""


def derive_key(secret: str, salt: bytes) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=PBKDF2_ITERATIONS,
    )
    return kdf.derive(secret.encode("utf-8"))


class FieldCipher:
    """
    Stateless AES-256-GCM cipher bound to one master secret.

    Safe to share between threads; every call derives its own key.
    """

    def __init__(self, secret: Optional[str]) -> None:
        if not secret:
            raise EncryptionConfigError("ENCRYPTION_KEY environment variable is not set")
        self._secret = secret

    def encrypt(self, plaintext: str) -> str:
        salt = os.urandom(SALT_LENGTH)
        iv = os.urandom(IV_LENGTH)
        key = derive_key(self._secret, salt)

        # AESGCM appends the tag to the ciphertext
        sealed = AESGCM(key).encrypt(iv, plaintext.encode("utf-8"), None)
        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]

        return f"{salt.hex()}:{iv.hex()}:{tag.hex()}:{ciphertext.hex()}"

    def decrypt(self, envelope: str) -> str:
        salt, iv, tag, ciphertext = _parse_envelope(envelope)
        key = derive_key(self._secret, salt)
        try:
            plaintext = AESGCM(key).decrypt(iv, ciphertext + tag, None)
        except InvalidTag:
            raise DecryptionError("Decryption failed: data tampered or wrong key") from None
        return plaintext.decode("utf-8")


def _parse_envelope(envelope: str) -> tuple[bytes, bytes, bytes, bytes]:
    parts = envelope.split(":") if isinstance(envelope, str) else []
    if len(parts) != 4:
        raise EnvelopeFormatError("Invalid encrypted data format")
    try:
        salt, iv, tag, ciphertext = (bytes.fromhex(part) for part in parts)
    except ValueError:
        raise EnvelopeFormatError("Invalid encrypted data format") from None
    if len(salt) != SALT_LENGTH or len(iv) != IV_LENGTH or len(tag) != TAG_LENGTH:
        raise EnvelopeFormatError("Invalid encrypted data format")
    return salt, iv, tag, ciphertext


def get_field_cipher() -> FieldCipher:
    """Cipher bound to the configured ENCRYPTION_KEY."""
    return FieldCipher(settings.ENCRYPTION_KEY)


def ensure_encryption_configured() -> None:
    """Fail fast at startup when ENCRYPTION_KEY is missing."""
    get_field_cipher()


def encrypt(plaintext: str) -> str:
    return get_field_cipher().encrypt(plaintext)


def decrypt(envelope: str) -> str:
    return get_field_cipher().decrypt(envelope)
