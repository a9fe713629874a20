"""
Canonical message construction for HMAC request signatures

The canonical message is the byte sequence fed to the HMAC. Fields are
visited in a fixed order and each one is followed by the delimiter byte,
including the last:

    FULL:        api_key D content_type D date D host D method D nonce D [payload D] resource D scheme D
    ONLY_HEADER: api_key D content_type D date D host D method D nonce D resource D scheme D
"""

import codecs
import logging
from typing import Iterator, List, Tuple

from ..exceptions import EncodingError, MissingFieldError
from .types import BuilderMode, SignatureRequest, DEFAULT_CHARSET


logger = logging.getLogger(__name__)

# Field visitation order; payload is conditional
CANONICAL_FIELD_ORDER: Tuple[str, ...] = (
    "api_key",
    "content_type",
    "date",
    "host",
    "method",
    "nonce",
    "payload",
    "resource",
    "scheme",
)

PAYLOAD_FIELD = "payload"

# Codecs whose output depends on host byte order, pinned to big-endian.
# Non-empty UTF-16 text carries a big-endian BOM; UTF-32 carries none.
BYTE_ORDER_CODECS = {
    "utf-16": ("utf-16-be", codecs.BOM_UTF16_BE),
    "utf-32": ("utf-32-be", b""),
}


class CanonicalMessageBuilder:
    """
    Canonical message builder for HMAC signatures
    """

    def __init__(self, request: SignatureRequest, mode: BuilderMode = BuilderMode.FULL):
        """
        Initialize canonical message builder.

        Args:
            request: Request fields to assemble
            mode: Build mode deciding whether the payload participates
        """
        self.request = request
        self.mode = BuilderMode.parse(mode)

    def build(self) -> bytes:
        """
        Build the canonical message.

        Returns:
            bytes: Canonical message bytes

        Raises:
            MissingFieldError: If a required field is not set
            EncodingError: If a field cannot be encoded in the configured charset
        """
        codec_name = self._resolve_charset()
        delimiter = self.request.delimiter

        message = bytearray()
        for name, value in self._segments():
            if isinstance(value, str):
                message += self._encode(name, value, codec_name)
            else:
                message += value
            message += delimiter

        return bytes(message)

    def covered_fields(self) -> List[str]:
        """
        Get the ordered names of the fields that participate in the message.

        Returns:
            list: Field names in canonical order
        """
        return [name for name in CANONICAL_FIELD_ORDER if self._participates(name)]

    def _segments(self) -> Iterator[Tuple[str, object]]:
        for name in CANONICAL_FIELD_ORDER:
            if not self._participates(name):
                continue

            value = getattr(self.request, name)
            if value is None:
                raise MissingFieldError(name, self.mode.value)

            yield name, value

    def _participates(self, name: str) -> bool:
        if name != PAYLOAD_FIELD:
            return True
        if self.mode is BuilderMode.ONLY_HEADER:
            return False
        return self.request.payload is not None

    def _resolve_charset(self) -> str:
        try:
            return codecs.lookup(self.request.charset).name
        except LookupError as e:
            raise EncodingError(
                f"Unsupported charset: {self.request.charset}",
                {"charset": self.request.charset}
            ) from e

    def _encode(self, name: str, value: str, codec_name: str) -> bytes:
        codec_name, bom = BYTE_ORDER_CODECS.get(codec_name, (codec_name, b""))
        try:
            encoded = value.encode(codec_name)
        except UnicodeEncodeError as e:
            raise EncodingError(
                f"Field '{name}' cannot be encoded as {self.request.charset}",
                {"field": name, "charset": self.request.charset}
            ) from e
        return bom + encoded if encoded else encoded


def build_canonical_message(request: SignatureRequest, mode: BuilderMode = BuilderMode.FULL) -> bytes:
    """
    Build canonical message for signing.

    Args:
        request: Request fields
        mode: Build mode

    Returns:
        bytes: Canonical message bytes

    Raises:
        MissingFieldError: If a required field is not set
        EncodingError: If the charset is unknown or cannot encode a field
    """
    builder = CanonicalMessageBuilder(request, mode)
    message = builder.build()
    logger.debug(f"Assembled canonical message ({builder.mode.value}): fields={builder.covered_fields()}")
    return message


def covered_fields(request: SignatureRequest, mode: BuilderMode = BuilderMode.FULL) -> List[str]:
    """Ordered names of the fields that participate in the canonical message."""
    return CanonicalMessageBuilder(request, mode).covered_fields()


def render_canonical_message(message: bytes, delimiter: bytes = b"\n",
                             charset: str = DEFAULT_CHARSET) -> str:
    """
    Render a canonical message for display.

    Each delimiter becomes a visible ``<0x..>`` marker followed by a line
    break; undecodable bytes are escaped.

    Args:
        message: Canonical message bytes
        delimiter: Delimiter byte the message was assembled with
        charset: Charset the string fields were encoded with

    Returns:
        str: Printable rendering of the message

    Raises:
        EncodingError: If the charset is unknown
    """
    try:
        codec_name = codecs.lookup(charset).name
    except LookupError as e:
        raise EncodingError(f"Unsupported charset: {charset}", {"charset": charset}) from e
    codec_name = BYTE_ORDER_CODECS.get(codec_name, (codec_name, b""))[0]

    marker = f"<0x{delimiter[0]:02X}>"
    parts = message.split(delimiter)
    # Trailing delimiter leaves an empty final element
    if parts and parts[-1] == b"":
        parts = parts[:-1]
    return "\n".join(
        part.decode(codec_name, errors="backslashreplace").lstrip("\ufeff") + marker
        for part in parts
    )
