"""Client secret hashing and comparison."""

import secrets

from passlib.context import CryptContext

# Secret hashing context
secret_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_secret(secret: str) -> str:
    """Hash a client secret for storage."""
    return secret_context.hash(secret)


def verify_secret(provided: str, stored: str | None, hashed: bool = False) -> bool:
    """
    Check a presented client secret against the stored one.

    Args:
        provided: Secret presented by the client
        stored: Secret (or hash) read from storage
        hashed: Whether ``stored`` is a passlib hash

    Returns:
        True if the secret matches
    """
    if not stored or provided is None:
        return False

    if hashed:
        if not secret_context.identify(stored):
            return False
        return secret_context.verify(provided, stored)

    return secrets.compare_digest(provided.encode("utf-8"), stored.encode("utf-8"))
