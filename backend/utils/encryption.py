"""
Session payload encryption utilities.
Uses Fernet symmetric encryption from the cryptography library, keyed by
the server's session secret.
"""

import base64
import hashlib
import logging
from cryptography.fernet import Fernet, InvalidToken
from typing import Optional

logger = logging.getLogger(__name__)


def _derive_key(secret: str) -> bytes:
    """
    Derive a Fernet key from an arbitrary-length secret.

    Args:
        secret: Session secret (SESSION_PASSWORD)

    Returns:
        32-byte url-safe base64 encoded key

    Raises:
        ValueError: If the secret is empty
    """
    if not secret:
        raise ValueError("Session secret is not set")
    digest = hashlib.sha256(secret.encode()).digest()
    return base64.urlsafe_b64encode(digest)


def encrypt_token(plain_token: str, secret: str) -> str:
    """
    Encrypt a string using Fernet symmetric encryption.

    Args:
        plain_token: The plaintext to encrypt
        secret: Session secret the key is derived from

    Returns:
        Encrypted token as a string (base64 encoded)

    Example:
        encrypted = encrypt_token('{"tokens": ...}', secret)
        # Returns: "gAAAAABh..."
    """
    if not plain_token:
        return plain_token

    f = Fernet(_derive_key(secret))
    encrypted_bytes = f.encrypt(plain_token.encode())
    return encrypted_bytes.decode()


def decrypt_token(encrypted_token: str, secret: str) -> Optional[str]:
    """
    Decrypt a token that was encrypted with encrypt_token().

    Args:
        encrypted_token: The encrypted token (base64 encoded string)
        secret: Session secret the key is derived from

    Returns:
        Decrypted plaintext, or None if decryption fails (tampered cookie,
        rotated secret)
    """
    if not encrypted_token:
        return encrypted_token

    try:
        f = Fernet(_derive_key(secret))
        decrypted_bytes = f.decrypt(encrypted_token.encode())
        return decrypted_bytes.decode()
    except (InvalidToken, ValueError) as e:
        # Log error but don't expose details
        logger.warning(f"Session decryption failed: {type(e).__name__}")
        return None
