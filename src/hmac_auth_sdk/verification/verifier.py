"""
Core HMAC signature verification

This module compares an expected signature against the one computed from a
:class:`SignatureRequest`. Build failures (missing fields, unsupported
algorithms, digest errors) always propagate; an expected signature that
cannot be decoded counts as a mismatch.
"""

import logging
from typing import Optional, Union

from ..exceptions import SignatureMismatchError
from ..signing.hmac_signer import HmacSigner
from ..signing.types import BuilderMode, SignatureEncoding, SignatureRequest
from .types import AuthCheck, VerificationResult, VerificationStatus
from .utils import constant_time_equals, decode_expected_signature


logger = logging.getLogger(__name__)

ExpectedSignature = Union[bytes, bytearray, str, None]


class HmacVerifier:
    """
    HMAC signature verifier

    Verifies expected signatures given as raw bytes, hex or base64 against
    the signature computed from the wrapped request.
    """

    def __init__(self, request: SignatureRequest):
        """
        Initialize the verifier.

        Args:
            request: Request fields the expected signature should cover
        """
        self.signer = HmacSigner(request)

    @property
    def request(self) -> SignatureRequest:
        return self.signer.request

    def verify(
        self,
        expected: ExpectedSignature,
        encoding: Union[str, SignatureEncoding] = SignatureEncoding.RAW,
        mode: BuilderMode = BuilderMode.FULL
    ) -> VerificationResult:
        """
        Verify an expected signature.

        Args:
            expected: Expected signature in the given representation
            encoding: ``raw``, ``hex`` or ``base64``
            mode: Build mode (default FULL)

        Returns:
            VerificationResult: Verification outcome

        Raises:
            MissingFieldError: If a required field is not set
            UnsupportedAlgorithmError: If the algorithm is not available
            DigestError: If the HMAC computation fails
            EncodingError: If a request field cannot be encoded in the charset
        """
        encoding = SignatureEncoding.parse(encoding)
        mode = BuilderMode.parse(mode)

        computed = self.signer.build(mode)
        decoded = decode_expected_signature(expected, encoding)

        if decoded is None:
            status = VerificationStatus.MALFORMED
        elif constant_time_equals(computed, decoded):
            status = VerificationStatus.VALID
        else:
            status = VerificationStatus.INVALID

        logger.debug(f"Signature verification ({mode.value}, {encoding.value}): {status.value}")
        return VerificationResult(status=status, mode=mode, encoding=encoding)

    def is_hash_equals(self, expected_signature: Optional[bytes],
                       mode: BuilderMode = BuilderMode.FULL) -> bool:
        """
        Check whether the expected raw signature equals the computed one.

        Args:
            expected_signature: Expected raw signature bytes
            mode: Build mode (default FULL)

        Returns:
            bool: True if the signatures are equal
        """
        return self.verify(expected_signature, SignatureEncoding.RAW, mode).is_valid

    def is_hash_equals_with_hex(self, expected_signature_hex: Optional[str],
                                mode: BuilderMode = BuilderMode.FULL) -> bool:
        """
        Check whether the expected hex signature equals the computed one.

        Malformed hex yields False.

        Args:
            expected_signature_hex: Expected signature as hex (either case)
            mode: Build mode (default FULL)

        Returns:
            bool: True if the signatures are equal
        """
        return self.verify(expected_signature_hex, SignatureEncoding.HEX, mode).is_valid

    def is_hash_equals_with_base64(self, expected_signature_base64: Optional[str],
                                   mode: BuilderMode = BuilderMode.FULL) -> bool:
        """
        Check whether the expected base64 signature equals the computed one.

        Malformed base64 yields False.

        Args:
            expected_signature_base64: Expected signature as standard base64
            mode: Build mode (default FULL)

        Returns:
            bool: True if the signatures are equal
        """
        return self.verify(expected_signature_base64, SignatureEncoding.BASE64, mode).is_valid

    def check_auth_success(
        self,
        expected_signature: ExpectedSignature,
        mode: BuilderMode = BuilderMode.FULL,
        error_message: Optional[str] = None,
        encoding: Union[str, SignatureEncoding] = SignatureEncoding.RAW
    ) -> AuthCheck:
        """
        Check that authentication succeeds, returning the outcome as a value.

        Args:
            expected_signature: Expected signature
            mode: Build mode (default FULL)
            error_message: Message for the carried error (default message if empty)
            encoding: Representation of the expected signature

        Returns:
            AuthCheck: Passed if the signatures match
        """
        return self._check(expected_signature, True, mode, error_message, encoding)

    def check_auth_fail(
        self,
        expected_signature: ExpectedSignature,
        mode: BuilderMode = BuilderMode.FULL,
        error_message: Optional[str] = None,
        encoding: Union[str, SignatureEncoding] = SignatureEncoding.RAW
    ) -> AuthCheck:
        """
        Check that authentication fails, returning the outcome as a value.

        Args:
            expected_signature: Expected signature
            mode: Build mode (default FULL)
            error_message: Message for the carried error (default message if empty)
            encoding: Representation of the expected signature

        Returns:
            AuthCheck: Passed if the signatures do not match
        """
        return self._check(expected_signature, False, mode, error_message, encoding)

    def assert_auth_success(
        self,
        expected_signature: ExpectedSignature,
        mode: BuilderMode = BuilderMode.FULL,
        error_message: Optional[str] = None,
        encoding: Union[str, SignatureEncoding] = SignatureEncoding.RAW
    ) -> None:
        """
        Assert that authentication succeeds.

        Raises:
            SignatureMismatchError: If the signatures do not match
        """
        self.check_auth_success(expected_signature, mode, error_message, encoding).raise_for_failure()

    def assert_auth_fail(
        self,
        expected_signature: ExpectedSignature,
        mode: BuilderMode = BuilderMode.FULL,
        error_message: Optional[str] = None,
        encoding: Union[str, SignatureEncoding] = SignatureEncoding.RAW
    ) -> None:
        """
        Assert that authentication fails.

        Raises:
            SignatureMismatchError: If the signatures match
        """
        self.check_auth_fail(expected_signature, mode, error_message, encoding).raise_for_failure()

    def _check(
        self,
        expected_signature: ExpectedSignature,
        expected_match: bool,
        mode: BuilderMode,
        error_message: Optional[str],
        encoding: Union[str, SignatureEncoding]
    ) -> AuthCheck:
        result = self.verify(expected_signature, encoding, mode)
        if result.is_valid == expected_match:
            return AuthCheck(passed=True, expected_match=expected_match, result=result)

        return AuthCheck(
            passed=False,
            expected_match=expected_match,
            result=result,
            error=SignatureMismatchError(error_message, expected_match=expected_match),
        )


def create_verifier(request: SignatureRequest) -> HmacVerifier:
    """
    Create a new HMAC verifier.

    Args:
        request: Request fields the expected signature should cover

    Returns:
        HmacVerifier: Configured verifier instance
    """
    return HmacVerifier(request)


def verify_signature(
    request: SignatureRequest,
    expected: ExpectedSignature,
    encoding: Union[str, SignatureEncoding] = SignatureEncoding.RAW,
    mode: BuilderMode = BuilderMode.FULL
) -> bool:
    """
    Verify an expected signature against a request.

    Args:
        request: Request fields
        expected: Expected signature
        encoding: ``raw``, ``hex`` or ``base64``
        mode: Build mode (default FULL)

    Returns:
        bool: True if the signature is authentic
    """
    return create_verifier(request).verify(expected, encoding, mode).is_valid
