"""
Exception classes for HMAC Auth Python SDK
"""

from typing import Optional, Dict, Any


class HmacAuthSDKError(Exception):
    """Base exception for all HMAC Auth SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.error_code}, details: {self.details})"
        return f"{self.message} (code: {self.error_code})"


class MissingFieldError(HmacAuthSDKError):
    """Exception raised when a field required by the build mode is not set"""

    def __init__(self, field_name: str, mode: Optional[str] = None):
        details: Dict[str, Any] = {"field": field_name}
        if mode is not None:
            details["mode"] = mode
        super().__init__(f"Required field not set: {field_name}", "MISSING_FIELD", details)
        self.field_name = field_name


class UnsupportedAlgorithmError(HmacAuthSDKError):
    """Exception raised for HMAC algorithms the crypto backend cannot provide"""

    def __init__(self, algorithm: Optional[str], reason: Optional[str] = None):
        details: Dict[str, Any] = {"algorithm": algorithm}
        if reason:
            details["reason"] = reason
        super().__init__(f"Unsupported HMAC algorithm: {algorithm}", "UNSUPPORTED_ALGORITHM", details)
        self.algorithm = algorithm


class DigestError(HmacAuthSDKError):
    """Exception raised for lower-level HMAC computation failures"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "DIGEST_FAILED", details)


class EncodingError(HmacAuthSDKError):
    """Exception raised for malformed hex/base64 input or charset failures"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "ENCODING_ERROR", details)


class SignatureMismatchError(HmacAuthSDKError):
    """Exception raised by the assert API when the authentication outcome is not the expected one"""

    def __init__(self, message: Optional[str] = None, expected_match: bool = True):
        if not message:
            message = (DEFAULT_AUTH_SUCCESS_MESSAGE if expected_match
                       else DEFAULT_AUTH_FAIL_MESSAGE)
        super().__init__(message, "SIGNATURE_MISMATCH", {"expected_match": expected_match})
        self.expected_match = expected_match

    def __str__(self) -> str:
        return self.message


DEFAULT_AUTH_SUCCESS_MESSAGE = "HMAC authentication failed: signature does not match"
DEFAULT_AUTH_FAIL_MESSAGE = "HMAC authentication unexpectedly succeeded: signature matches"
