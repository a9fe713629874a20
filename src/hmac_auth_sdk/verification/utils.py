"""
Utility functions for signature verification
"""

import logging
from typing import Optional, Union

from cryptography.hazmat.primitives import constant_time

from ..exceptions import EncodingError
from ..signing.encoding import from_base64, from_hex
from ..signing.types import SignatureEncoding


logger = logging.getLogger(__name__)


def constant_time_equals(computed: bytes, expected: Optional[bytes]) -> bool:
    """
    Compare two signatures in constant time.

    The running time does not depend on where the inputs first differ.
    Inputs of different length compare unequal.

    Args:
        computed: Signature computed locally
        expected: Signature supplied by the peer

    Returns:
        bool: True if both signatures are identical
    """
    if expected is None:
        return False
    return constant_time.bytes_eq(bytes(computed), bytes(expected))


def decode_expected_signature(
    expected: Union[bytes, bytearray, str, None],
    encoding: SignatureEncoding
) -> Optional[bytes]:
    """
    Decode an expected signature leniently.

    Malformed input is logged and reported as ``None`` rather than raised,
    so that verification of garbled input yields a negative result.

    Args:
        expected: Expected signature in the given representation
        encoding: Representation of the expected signature

    Returns:
        bytes or None: Decoded signature, or None if it cannot be decoded
    """
    if expected is None:
        return None

    if encoding is SignatureEncoding.RAW:
        if isinstance(expected, (bytes, bytearray, memoryview)):
            return bytes(expected)
        logger.warning(f"Expected raw signature must be bytes, got {type(expected).__name__}")
        return None

    try:
        if encoding is SignatureEncoding.HEX:
            return from_hex(expected)
        return from_base64(expected)
    except EncodingError as e:
        logger.warning(f"Could not decode expected {encoding.value} signature: {e.message}")
        return None
