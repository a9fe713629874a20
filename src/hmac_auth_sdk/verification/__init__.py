"""
HMAC Auth Python SDK - Signature Verification Module

Timing-safe comparison of expected signatures (raw, hex or base64) with the
signature computed from the request fields, plus assert-style helpers.
"""

from .types import (
    VerificationStatus,
    VerificationResult,
    AuthCheck,
)

from .verifier import (
    HmacVerifier,
    create_verifier,
    verify_signature,
)

from .utils import (
    constant_time_equals,
    decode_expected_signature,
)

__all__ = [
    # Core verification
    'HmacVerifier',
    'create_verifier',
    'verify_signature',
    # Types
    'VerificationStatus',
    'VerificationResult',
    'AuthCheck',
    # Utilities
    'constant_time_equals',
    'decode_expected_signature',
]
