"""
Type definitions for signature verification functionality
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..exceptions import SignatureMismatchError
from ..signing.types import BuilderMode, SignatureEncoding


class VerificationStatus(str, Enum):
    """Verification result status"""
    VALID = "valid"
    INVALID = "invalid"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class VerificationResult:
    """
    Outcome of comparing an expected signature with the computed one

    Attributes:
        status: VALID when the signatures match, INVALID when they differ,
            MALFORMED when the expected signature could not be decoded
        mode: Build mode the signature was computed with
        encoding: Representation the expected signature was given in
    """
    status: VerificationStatus
    mode: BuilderMode
    encoding: SignatureEncoding

    @property
    def is_valid(self) -> bool:
        return self.status is VerificationStatus.VALID

    def __bool__(self) -> bool:
        return self.is_valid


@dataclass(frozen=True)
class AuthCheck:
    """
    Result value of an authentication expectation check

    Carries the mismatch error instead of raising it, so the caller decides
    whether a failed expectation is fatal.

    Attributes:
        passed: True if the outcome matched the expectation
        expected_match: Whether the signatures were expected to match
        result: Underlying verification result
        error: Mismatch error when the check did not pass
    """
    passed: bool
    expected_match: bool
    result: VerificationResult
    error: Optional[SignatureMismatchError] = None

    def raise_for_failure(self) -> None:
        """
        Raise the carried error if the check did not pass.

        Raises:
            SignatureMismatchError: If the outcome contradicted the expectation
        """
        if self.error is not None:
            raise self.error

    def __bool__(self) -> bool:
        return self.passed
