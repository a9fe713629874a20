"""
Hexadecimal and base64 codecs for signature values
"""

import base64
import binascii

from ..exceptions import EncodingError


def to_hex(data: bytes) -> str:
    """
    Convert bytes to an uppercase hex string.

    Args:
        data: Bytes to convert

    Returns:
        str: Uppercase hex string
    """
    return binascii.hexlify(data).decode("ascii").upper()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hex string to bytes.

    Upper and lower case digits are accepted; the string must have an even
    length and contain no separators or whitespace.

    Args:
        hex_string: Hex string to convert

    Returns:
        bytes: Decoded bytes

    Raises:
        EncodingError: If the hex string is malformed
    """
    if not isinstance(hex_string, str):
        raise EncodingError(
            f"Hex input must be a string, got {type(hex_string).__name__}",
            {"encoding": "hex"}
        )

    if len(hex_string) % 2 != 0:
        raise EncodingError(
            "Hex input must have an even length",
            {"encoding": "hex", "length": len(hex_string)}
        )

    try:
        return binascii.unhexlify(hex_string)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(
            f"Invalid hex string: {e}",
            {"encoding": "hex", "length": len(hex_string)}
        ) from e


def to_base64(data: bytes) -> str:
    """Convert bytes to a padded standard-alphabet base64 string."""
    return base64.b64encode(data).decode("ascii")


def from_base64(b64_string: str) -> bytes:
    """
    Convert a standard base64 string to bytes.

    The URL-safe alphabet, missing padding and stray characters are rejected.

    Args:
        b64_string: Base64 string to convert

    Returns:
        bytes: Decoded bytes

    Raises:
        EncodingError: If the base64 string is malformed
    """
    if not isinstance(b64_string, str):
        raise EncodingError(
            f"Base64 input must be a string, got {type(b64_string).__name__}",
            {"encoding": "base64"}
        )

    try:
        return base64.b64decode(b64_string.encode("ascii"), validate=True)
    except UnicodeEncodeError as e:
        raise EncodingError(
            "Base64 input contains non-ASCII characters",
            {"encoding": "base64", "length": len(b64_string)}
        ) from e
    except (binascii.Error, ValueError) as e:
        raise EncodingError(
            f"Invalid base64 string: {e}",
            {"encoding": "base64", "length": len(b64_string)}
        ) from e
