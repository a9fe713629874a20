"""
Utility functions for request signing

Generators for the caller-supplied request values: nonces, HTTP dates and
freshly issued api credentials.
"""

import secrets
import time
import uuid
from email.utils import formatdate
from typing import Optional


DEFAULT_API_SECRET_LENGTH = 32


def generate_nonce() -> str:
    """
    Generate a UUID v4 nonce.

    Returns:
        str: UUID v4 string for use as nonce
    """
    return str(uuid.uuid4())


def generate_http_date(timestamp: Optional[float] = None) -> str:
    """
    Format a timestamp as an HTTP date.

    Args:
        timestamp: Unix timestamp (uses current time if None)

    Returns:
        str: IMF-fixdate string, e.g. ``Wed, 02 Nov 2016 03:25:54 GMT``
    """
    if timestamp is None:
        timestamp = time.time()
    return formatdate(timestamp, usegmt=True)


def generate_api_secret(length: int = DEFAULT_API_SECRET_LENGTH) -> bytes:
    """
    Generate random key material for a new client.

    Args:
        length: Number of random bytes

    Returns:
        bytes: Secure random bytes

    Raises:
        ValueError: If length is not positive
    """
    if length <= 0:
        raise ValueError("Secret length must be positive")
    return secrets.token_bytes(length)


def generate_api_key() -> str:
    """Generate a URL-safe public client identifier."""
    return secrets.token_urlsafe(16)
