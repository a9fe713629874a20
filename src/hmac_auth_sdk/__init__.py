"""
HMAC Auth Python SDK
API request signing and verification with keyed HMAC over a canonical message
"""

import platform
import sys

from .version import __version__
from .exceptions import (
    HmacAuthSDKError,
    MissingFieldError,
    UnsupportedAlgorithmError,
    DigestError,
    EncodingError,
    SignatureMismatchError,
)
from .signing import (
    # Core signing functionality
    HmacSigner,
    create_signer,
    sign_request,
    # Types
    BuilderMode,
    SignatureEncoding,
    SignatureRequest,
    DEFAULT_ALGORITHM,
    DEFAULT_CHARSET,
    DEFAULT_DELIMITER,
    # Builder
    SignatureRequestBuilder,
    create_signature_request,
    # Canonical message
    build_canonical_message,
    covered_fields,
    # Digest
    HmacDigestEngine,
    HMAC_ALGORITHMS,
    compute_hmac,
    is_algorithm_supported,
    list_supported_algorithms,
    # Encoding
    to_hex,
    from_hex,
    to_base64,
    from_base64,
    # Utilities
    generate_nonce,
    generate_http_date,
    generate_api_secret,
    generate_api_key,
)
from .verification import (
    HmacVerifier,
    create_verifier,
    verify_signature,
    VerificationStatus,
    VerificationResult,
    AuthCheck,
)
from .config import (
    HmacConfigManager,
    ConfigError,
    load_default_config,
)


def check_platform_compatibility():
    """
    Check platform compatibility for HMAC operations.

    Returns:
        dict: Compatibility information including the cryptography version,
              default algorithm support, usable algorithms and platform details
    """
    import cryptography

    supported = list_supported_algorithms()
    return {
        'cryptography_version': cryptography.__version__,
        'default_algorithm_supported': DEFAULT_ALGORITHM in supported,
        'supported_algorithms': supported,
        'platform_info': {
            'system': platform.system(),
            'python_version': sys.version,
        },
    }


# Initialize the SDK
def initialize_sdk():
    """
    Initialize the HMAC Auth SDK and check platform compatibility.

    Returns:
        dict: Compatibility information with 'compatible' (bool) and 'warnings' (list)
    """
    warnings = []
    compatible = True

    compat_info = check_platform_compatibility()
    if not compat_info['default_algorithm_supported']:
        warnings.append(f'{DEFAULT_ALGORITHM} not supported by the cryptography backend')
        compatible = False

    for name in HMAC_ALGORITHMS:
        if name not in compat_info['supported_algorithms']:
            warnings.append(f'{name} not available in the cryptography backend')

    return {
        'compatible': compatible,
        'warnings': warnings
    }


# Public API exports
__all__ = [
    '__version__',
    'check_platform_compatibility',
    'initialize_sdk',
    # Exceptions
    'HmacAuthSDKError',
    'MissingFieldError',
    'UnsupportedAlgorithmError',
    'DigestError',
    'EncodingError',
    'SignatureMismatchError',
    # Signing - Core
    'HmacSigner',
    'create_signer',
    'sign_request',
    # Signing - Types
    'BuilderMode',
    'SignatureEncoding',
    'SignatureRequest',
    'DEFAULT_ALGORITHM',
    'DEFAULT_CHARSET',
    'DEFAULT_DELIMITER',
    # Signing - Builder
    'SignatureRequestBuilder',
    'create_signature_request',
    # Signing - Components
    'build_canonical_message',
    'covered_fields',
    'HmacDigestEngine',
    'HMAC_ALGORITHMS',
    'compute_hmac',
    'is_algorithm_supported',
    'list_supported_algorithms',
    'to_hex',
    'from_hex',
    'to_base64',
    'from_base64',
    # Signing - Utilities
    'generate_nonce',
    'generate_http_date',
    'generate_api_secret',
    'generate_api_key',
    # Verification
    'HmacVerifier',
    'create_verifier',
    'verify_signature',
    'VerificationStatus',
    'VerificationResult',
    'AuthCheck',
    # Configuration
    'HmacConfigManager',
    'ConfigError',
    'load_default_config',
]
