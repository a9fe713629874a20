"""
HMAC Auth Python SDK - Request Signing Module

Canonical message assembly, HMAC digest computation and signature
encoding for authenticating API requests with a shared api secret.
"""

from .types import (
    BuilderMode,
    SignatureEncoding,
    SignatureRequest,
    DEFAULT_ALGORITHM,
    DEFAULT_CHARSET,
    DEFAULT_DELIMITER,
)

from .request_builder import (
    SignatureRequestBuilder,
    create_signature_request,
)

from .canonical_message import (
    CanonicalMessageBuilder,
    CANONICAL_FIELD_ORDER,
    build_canonical_message,
    covered_fields,
    render_canonical_message,
)

from .digest import (
    HmacDigestEngine,
    HMAC_ALGORITHMS,
    compute_hmac,
    canonical_algorithm_name,
    resolve_hash_algorithm,
    is_algorithm_supported,
    list_supported_algorithms,
)

from .encoding import (
    to_hex,
    from_hex,
    to_base64,
    from_base64,
)

from .hmac_signer import (
    HmacSigner,
    create_signer,
    sign_request,
)

from .utils import (
    generate_nonce,
    generate_http_date,
    generate_api_secret,
    generate_api_key,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'HmacSigner',
    'create_signer',
    'sign_request',
    # Types
    'BuilderMode',
    'SignatureEncoding',
    'SignatureRequest',
    'DEFAULT_ALGORITHM',
    'DEFAULT_CHARSET',
    'DEFAULT_DELIMITER',
    # Builder
    'SignatureRequestBuilder',
    'create_signature_request',
    # Canonical message
    'CanonicalMessageBuilder',
    'CANONICAL_FIELD_ORDER',
    'build_canonical_message',
    'covered_fields',
    'render_canonical_message',
    # Digest
    'HmacDigestEngine',
    'HMAC_ALGORITHMS',
    'compute_hmac',
    'canonical_algorithm_name',
    'resolve_hash_algorithm',
    'is_algorithm_supported',
    'list_supported_algorithms',
    # Encoding
    'to_hex',
    'from_hex',
    'to_base64',
    'from_base64',
    # Utilities
    'generate_nonce',
    'generate_http_date',
    'generate_api_secret',
    'generate_api_key',
]
