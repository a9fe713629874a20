"""
Fluent builder for signature requests

This module provides the chained-setter builder that produces immutable
:class:`SignatureRequest` values.
"""

from typing import Optional, Union

from .types import (
    SignatureRequest,
    DEFAULT_ALGORITHM,
    DEFAULT_CHARSET,
    DEFAULT_DELIMITER,
    normalize_delimiter,
)


class SignatureRequestBuilder:
    """
    Builder for creating signature requests with fluent API
    """

    def __init__(self):
        self._algorithm: str = DEFAULT_ALGORITHM
        self._charset: str = DEFAULT_CHARSET
        self._delimiter: bytes = DEFAULT_DELIMITER
        self._api_key: Optional[str] = None
        self._api_secret: Optional[bytes] = None
        self._scheme: Optional[str] = None
        self._host: Optional[str] = None
        self._method: Optional[str] = None
        self._resource: Optional[str] = None
        self._nonce: Optional[str] = None
        self._date: Optional[str] = None
        self._content_type: Optional[str] = None
        self._payload: Optional[bytes] = None

    @classmethod
    def from_request(cls, request: SignatureRequest) -> 'SignatureRequestBuilder':
        """
        Create a builder seeded with the fields of an existing request.

        Args:
            request: Request to copy fields from

        Returns:
            SignatureRequestBuilder: New builder
        """
        builder = cls()
        builder._algorithm = request.algorithm
        builder._charset = request.charset
        builder._delimiter = request.delimiter
        builder._api_key = request.api_key
        builder._api_secret = request.api_secret
        builder._scheme = request.scheme
        builder._host = request.host
        builder._method = request.method
        builder._resource = request.resource
        builder._nonce = request.nonce
        builder._date = request.date
        builder._content_type = request.content_type
        builder._payload = request.payload
        return builder

    def algorithm(self, algorithm: str) -> 'SignatureRequestBuilder':
        """
        Set HMAC algorithm.

        Args:
            algorithm: HMAC algorithm name (e.g. ``HmacSHA512``)

        Returns:
            SignatureRequestBuilder: Self for method chaining
        """
        self._algorithm = algorithm
        return self

    def charset(self, charset: str) -> 'SignatureRequestBuilder':
        """
        Set charset used to encode string fields.

        Args:
            charset: Charset name (e.g. ``UTF-8``)

        Returns:
            SignatureRequestBuilder: Self for method chaining
        """
        self._charset = charset
        return self

    def delimiter(self, delimiter: Union[bytes, int, str]) -> 'SignatureRequestBuilder':
        """
        Set the delimiter byte appended after every field.

        Args:
            delimiter: One byte, an int in 0..255 or a one-character string

        Returns:
            SignatureRequestBuilder: Self for method chaining

        Raises:
            ValueError: If the delimiter is not exactly one byte
        """
        self._delimiter = normalize_delimiter(delimiter)
        return self

    def api_key(self, api_key: str) -> 'SignatureRequestBuilder':
        """
        Set the public client identifier issued by the server.

        Returns:
            SignatureRequestBuilder: Self for method chaining
        """
        self._api_key = api_key
        return self

    def api_secret(self, api_secret: bytes) -> 'SignatureRequestBuilder':
        """
        Set the private key material paired with the api key.

        Returns:
            SignatureRequestBuilder: Self for method chaining
        """
        self._api_secret = api_secret
        return self

    def credentials(self, api_key: str, api_secret: bytes) -> 'SignatureRequestBuilder':
        """
        Set api key and secret together.

        Returns:
            SignatureRequestBuilder: Self for method chaining
        """
        self._api_key = api_key
        self._api_secret = api_secret
        return self

    def scheme(self, scheme: str) -> 'SignatureRequestBuilder':
        """
        Set request scheme (``http``/``https``/...).

        Returns:
            SignatureRequestBuilder: Self for method chaining
        """
        self._scheme = scheme
        return self

    def host(self, host: str) -> 'SignatureRequestBuilder':
        """
        Set request host (``api.example.com``/``10.10.10.10``/...).

        Returns:
            SignatureRequestBuilder: Self for method chaining
        """
        self._host = host
        return self

    def method(self, method: str) -> 'SignatureRequestBuilder':
        """
        Set request method (``GET``/``POST``/...).

        Returns:
            SignatureRequestBuilder: Self for method chaining
        """
        self._method = method
        return self

    def resource(self, resource: str) -> 'SignatureRequestBuilder':
        """
        Set request resource (``/v1/users``/``/v1/users/123``/...).

        Returns:
            SignatureRequestBuilder: Self for method chaining
        """
        self._resource = resource
        return self

    def nonce(self, nonce: str) -> 'SignatureRequestBuilder':
        """
        Set request nonce.

        Returns:
            SignatureRequestBuilder: Self for method chaining
        """
        self._nonce = nonce
        return self

    def date(self, date: str) -> 'SignatureRequestBuilder':
        """
        Set request date (``Wed, 02 Nov 2016 03:25:54 GMT``).

        Returns:
            SignatureRequestBuilder: Self for method chaining
        """
        self._date = date
        return self

    def content_type(self, content_type: str) -> 'SignatureRequestBuilder':
        """
        Set request content type (``application/json``/``image/jpeg``/...).

        Returns:
            SignatureRequestBuilder: Self for method chaining
        """
        self._content_type = content_type
        return self

    def payload(self, payload: Optional[Union[bytes, str]]) -> 'SignatureRequestBuilder':
        """
        Set request body.

        A ``str`` payload is encoded as UTF-8; ``None`` clears the payload.

        Returns:
            SignatureRequestBuilder: Self for method chaining
        """
        if isinstance(payload, str):
            payload = payload.encode('utf-8')
        self._payload = payload
        return self

    def build(self) -> SignatureRequest:
        """
        Build the signature request.

        Required fields are not checked here; a missing field is reported
        when a signature is computed.

        Returns:
            SignatureRequest: Immutable request value

        Raises:
            ValueError: If a field has the wrong type
        """
        return SignatureRequest(
            algorithm=self._algorithm,
            charset=self._charset,
            delimiter=self._delimiter,
            api_key=self._api_key,
            api_secret=self._api_secret,
            scheme=self._scheme,
            host=self._host,
            method=self._method,
            resource=self._resource,
            nonce=self._nonce,
            date=self._date,
            content_type=self._content_type,
            payload=self._payload,
        )


def create_signature_request() -> SignatureRequestBuilder:
    """
    Create a new signature request builder.

    Returns:
        SignatureRequestBuilder: New request builder
    """
    return SignatureRequestBuilder()
