"""
HMAC request signer

This module provides the signer that turns a :class:`SignatureRequest`
into a signature: it assembles the canonical message, computes the keyed
digest and renders it as raw bytes, hex or base64.
"""

import logging
from typing import List, Union

from .types import BuilderMode, SignatureEncoding, SignatureRequest
from .canonical_message import CanonicalMessageBuilder
from .digest import HmacDigestEngine
from .encoding import to_base64, to_hex


logger = logging.getLogger(__name__)


class HmacSigner:
    """
    HMAC request signer

    The signer holds an immutable request value and can compute any number
    of signatures from it. Failures are raised as typed SDK errors; a
    signature is never returned for an incomplete request.
    """

    def __init__(self, request: SignatureRequest):
        """
        Initialize the signer.

        Args:
            request: Request fields to sign

        Raises:
            ValueError: If request is not a SignatureRequest
        """
        if not isinstance(request, SignatureRequest):
            raise ValueError("Request must be SignatureRequest instance")
        self.request = request

    def build(self, mode: BuilderMode = BuilderMode.FULL) -> bytes:
        """
        Compute the raw signature digest.

        Args:
            mode: Build mode (default FULL)

        Returns:
            bytes: Raw HMAC digest

        Raises:
            UnsupportedAlgorithmError: If the algorithm is not available
            MissingFieldError: If a required field is not set
            EncodingError: If a field cannot be encoded in the charset
            DigestError: If the HMAC computation fails
        """
        mode = BuilderMode.parse(mode)
        logger.debug(f"Computing {self.request.algorithm} signature (mode={mode.value})")

        # Resolve the algorithm ahead of assembly
        engine = HmacDigestEngine(self.request.algorithm)
        message = CanonicalMessageBuilder(self.request, mode).build()
        return engine.compute(self.request.api_secret, message)

    def build_as_hex(self, mode: BuilderMode = BuilderMode.FULL) -> str:
        """
        Compute the signature as an uppercase hex string.

        Args:
            mode: Build mode (default FULL)

        Returns:
            str: Hex-encoded signature
        """
        return to_hex(self.build(mode))

    def build_as_base64(self, mode: BuilderMode = BuilderMode.FULL) -> str:
        """
        Compute the signature as a base64 string.

        Args:
            mode: Build mode (default FULL)

        Returns:
            str: Base64-encoded signature
        """
        return to_base64(self.build(mode))

    def build_as(self, encoding: Union[str, SignatureEncoding],
                 mode: BuilderMode = BuilderMode.FULL) -> Union[bytes, str]:
        """Compute the signature in the given representation."""
        encoding = SignatureEncoding.parse(encoding)
        if encoding is SignatureEncoding.HEX:
            return self.build_as_hex(mode)
        if encoding is SignatureEncoding.BASE64:
            return self.build_as_base64(mode)
        return self.build(mode)

    def canonical_message(self, mode: BuilderMode = BuilderMode.FULL) -> bytes:
        """
        Get the canonical message the signature is computed over.

        Args:
            mode: Build mode (default FULL)

        Returns:
            bytes: Canonical message bytes
        """
        return CanonicalMessageBuilder(self.request, mode).build()

    def covered_fields(self, mode: BuilderMode = BuilderMode.FULL) -> List[str]:
        """Ordered names of the fields covered by the signature."""
        return CanonicalMessageBuilder(self.request, mode).covered_fields()


def create_signer(request: SignatureRequest) -> HmacSigner:
    """
    Create a new HMAC signer.

    Args:
        request: Request fields to sign

    Returns:
        HmacSigner: Configured signer instance
    """
    return HmacSigner(request)


def sign_request(
    request: SignatureRequest,
    mode: BuilderMode = BuilderMode.FULL,
    encoding: Union[str, SignatureEncoding] = SignatureEncoding.RAW
) -> Union[bytes, str]:
    """
    Sign a request.

    Args:
        request: Request fields to sign
        mode: Build mode (default FULL)
        encoding: ``raw`` for bytes, ``hex`` or ``base64`` for text

    Returns:
        bytes or str: Signature in the requested representation
    """
    return create_signer(request).build_as(encoding, mode)
