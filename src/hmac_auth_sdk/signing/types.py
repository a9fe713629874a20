"""
Type definitions for HMAC request signing

This module provides the build modes, defaults and the immutable request
value that the canonical message assembler, digest engine and verifier
operate on.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple, Union


DEFAULT_ALGORITHM = "HmacSHA512"
DEFAULT_CHARSET = "UTF-8"
DEFAULT_DELIMITER = b"\n"


class BuilderMode(str, Enum):
    """Selects which fields participate in the canonical message"""
    FULL = "FULL"
    ONLY_HEADER = "ONLY_HEADER"

    @classmethod
    def parse(cls, value: Union[str, "BuilderMode"]) -> "BuilderMode":
        """
        Parse a mode name.

        Accepts enum members, case-insensitive names and the dashed
        spelling used on the command line (``only-header``).

        Raises:
            ValueError: If the name is not a known mode
        """
        if isinstance(value, BuilderMode):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Builder mode must be a string, got {type(value).__name__}")

        normalized = value.strip().upper().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(
                f"Unknown builder mode: {value!r} (expected one of: "
                f"{', '.join(m.value for m in cls)})"
            ) from None


class SignatureEncoding(str, Enum):
    """Representations a signature can be exchanged in"""
    RAW = "raw"
    HEX = "hex"
    BASE64 = "base64"

    @classmethod
    def parse(cls, value: Union[str, "SignatureEncoding"]) -> "SignatureEncoding":
        if isinstance(value, SignatureEncoding):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown signature encoding: {value!r}") from None


# Fields every mode requires, in canonical order
REQUIRED_STRING_FIELDS: Tuple[str, ...] = (
    "api_key",
    "content_type",
    "date",
    "host",
    "method",
    "nonce",
    "resource",
    "scheme",
)


def normalize_delimiter(delimiter: Union[bytes, bytearray, int, str]) -> bytes:
    """
    Normalize a delimiter to a single byte.

    Args:
        delimiter: One byte as bytes, an int in 0..255 or a one-character string

    Returns:
        bytes: The delimiter as a bytes object of length 1

    Raises:
        ValueError: If the delimiter is not exactly one byte
    """
    if isinstance(delimiter, bool):
        raise ValueError("Delimiter must be a single byte")

    if isinstance(delimiter, int):
        if not 0 <= delimiter <= 255:
            raise ValueError(f"Delimiter byte out of range: {delimiter}")
        return bytes([delimiter])

    if isinstance(delimiter, str):
        if len(delimiter) != 1 or ord(delimiter) > 255:
            raise ValueError(f"Delimiter must be a single byte character, got {delimiter!r}")
        return bytes([ord(delimiter)])

    if isinstance(delimiter, (bytes, bytearray)):
        if len(delimiter) != 1:
            raise ValueError(f"Delimiter must be exactly one byte, got {len(delimiter)}")
        return bytes(delimiter)

    raise ValueError(f"Unsupported delimiter type: {type(delimiter).__name__}")


@dataclass(frozen=True)
class SignatureRequest:
    """
    Immutable set of request fields a signature is computed over

    Attributes:
        algorithm: HMAC algorithm name (default ``HmacSHA512``)
        charset: Charset used to encode string fields (default ``UTF-8``)
        delimiter: Single byte appended after every field (default ``\\n``)
        api_key: Public client identifier issued by the server
        api_secret: Private key material shared with the server
        scheme: Request scheme (``http``/``https``/...)
        host: Request host
        method: Request method (``GET``/``POST``/...)
        resource: Request resource path (``/v1/users``)
        nonce: Opaque caller-supplied nonce
        date: Request date (``Wed, 02 Nov 2016 03:25:54 GMT``)
        content_type: Request content type
        payload: Optional request body bytes
    """
    algorithm: str = DEFAULT_ALGORITHM
    charset: str = DEFAULT_CHARSET
    delimiter: bytes = DEFAULT_DELIMITER
    api_key: Optional[str] = None
    api_secret: Optional[bytes] = field(default=None, repr=False)
    scheme: Optional[str] = None
    host: Optional[str] = None
    method: Optional[str] = None
    resource: Optional[str] = None
    nonce: Optional[str] = None
    date: Optional[str] = None
    content_type: Optional[str] = None
    payload: Optional[bytes] = field(default=None, repr=False)

    def __post_init__(self):
        """Validate field types and normalize byte fields"""
        if not isinstance(self.algorithm, str) or not self.algorithm:
            raise ValueError("Algorithm must be a non-empty string")

        if not isinstance(self.charset, str) or not self.charset:
            raise ValueError("Charset must be a non-empty string")

        object.__setattr__(self, "delimiter", normalize_delimiter(self.delimiter))

        for name in REQUIRED_STRING_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Field '{name}' must be a string, got {type(value).__name__}")

        for name in ("api_secret", "payload"):
            value = getattr(self, name)
            if value is None:
                continue
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise ValueError(f"Field '{name}' must be bytes, got {type(value).__name__}")
            object.__setattr__(self, name, bytes(value))

    def replace(self, **changes: Any) -> "SignatureRequest":
        """Return a copy of this request with the given fields changed."""
        return dataclasses.replace(self, **changes)

    @property
    def has_payload(self) -> bool:
        return self.payload is not None

    def __reduce__(self):
        raise TypeError("SignatureRequest holds key material and cannot be serialized")
