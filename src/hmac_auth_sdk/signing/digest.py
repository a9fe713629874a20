"""
HMAC digest engine

This module computes keyed HMAC digests with the cryptography package.
Algorithms are named the JCA way (``HmacSHA512``) so that signatures
interoperate with servers that use those names, and are matched
case-insensitively.
"""

import logging
from typing import Callable, Dict, List, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac

from ..exceptions import DigestError, MissingFieldError, UnsupportedAlgorithmError


logger = logging.getLogger(__name__)

# JCA-style algorithm name -> hash algorithm factory
HMAC_ALGORITHMS: Dict[str, Callable[[], hashes.HashAlgorithm]] = {
    "HmacMD5": hashes.MD5,
    "HmacSHA1": hashes.SHA1,
    "HmacSHA224": hashes.SHA224,
    "HmacSHA256": hashes.SHA256,
    "HmacSHA384": hashes.SHA384,
    "HmacSHA512": hashes.SHA512,
    "HmacSHA512/224": hashes.SHA512_224,
    "HmacSHA512/256": hashes.SHA512_256,
    "HmacSHA3-224": hashes.SHA3_224,
    "HmacSHA3-256": hashes.SHA3_256,
    "HmacSHA3-384": hashes.SHA3_384,
    "HmacSHA3-512": hashes.SHA3_512,
}

_ALGORITHMS_BY_LOWER_NAME = {name.lower(): name for name in HMAC_ALGORITHMS}


def canonical_algorithm_name(algorithm: Optional[str]) -> str:
    """
    Get the canonical spelling of an HMAC algorithm name.

    Args:
        algorithm: Algorithm name in any letter case

    Returns:
        str: Canonical algorithm name (e.g. ``HmacSHA512``)

    Raises:
        UnsupportedAlgorithmError: If the name is unknown
    """
    if not isinstance(algorithm, str):
        raise UnsupportedAlgorithmError(algorithm, "algorithm name must be a string")

    name = _ALGORITHMS_BY_LOWER_NAME.get(algorithm.strip().lower())
    if name is None:
        raise UnsupportedAlgorithmError(algorithm)
    return name


def resolve_hash_algorithm(algorithm: Optional[str]) -> hashes.HashAlgorithm:
    """
    Resolve an HMAC algorithm name to a hash algorithm instance.

    Raises:
        UnsupportedAlgorithmError: If the name is unknown
    """
    return HMAC_ALGORITHMS[canonical_algorithm_name(algorithm)]()


def is_algorithm_supported(algorithm: str) -> bool:
    """
    Check whether an HMAC algorithm is known and usable with the installed backend.

    Args:
        algorithm: Algorithm name

    Returns:
        bool: True if a digest can be computed with the algorithm
    """
    try:
        HmacDigestEngine(algorithm).compute(b"probe", b"")
        return True
    except (UnsupportedAlgorithmError, DigestError):
        return False


def list_supported_algorithms() -> List[str]:
    """
    List the HMAC algorithm names usable with the installed backend.

    Returns:
        list: Canonical algorithm names
    """
    return [name for name in HMAC_ALGORITHMS if is_algorithm_supported(name)]


class HmacDigestEngine:
    """
    Stateless HMAC digest engine

    Every call to :meth:`compute` creates a fresh HMAC context, so one
    engine can be shared between threads.
    """

    def __init__(self, algorithm: str):
        """
        Initialize the engine.

        Args:
            algorithm: HMAC algorithm name

        Raises:
            UnsupportedAlgorithmError: If the algorithm name is unknown
        """
        self.algorithm = canonical_algorithm_name(algorithm)
        self._hash_factory = HMAC_ALGORITHMS[self.algorithm]

    @property
    def digest_size(self) -> int:
        return self._hash_factory().digest_size

    def compute(self, secret: Optional[Union[bytes, bytearray]], message: bytes) -> bytes:
        """
        Compute the HMAC of a message.

        The secret is copied into a scratch buffer that is zeroed once the
        digest is finalized, on success and on failure alike.

        Args:
            secret: Key material
            message: Canonical message bytes

        Returns:
            bytes: Raw digest bytes

        Raises:
            MissingFieldError: If no secret is given
            UnsupportedAlgorithmError: If the backend does not provide the algorithm
            DigestError: If the key is unusable or the backend fails
        """
        if secret is None:
            raise MissingFieldError("api_secret")

        if len(secret) == 0:
            raise DigestError("HMAC key must not be empty", {"algorithm": self.algorithm})

        key_material = bytearray(secret)
        try:
            context = hmac.HMAC(key_material, self._hash_factory())
            context.update(message)
            return context.finalize()
        except UnsupportedAlgorithm as e:
            raise UnsupportedAlgorithmError(self.algorithm, str(e)) from e
        except (TypeError, ValueError) as e:
            raise DigestError(
                f"HMAC computation failed: {e}",
                {"algorithm": self.algorithm}
            ) from e
        except Exception as e:
            raise DigestError(
                f"HMAC backend failure: {type(e).__name__}",
                {"algorithm": self.algorithm}
            ) from e
        finally:
            for i in range(len(key_material)):
                key_material[i] = 0


def compute_hmac(algorithm: str, secret: Optional[bytes], message: bytes) -> bytes:
    """
    Compute an HMAC digest.

    Args:
        algorithm: HMAC algorithm name
        secret: Key material
        message: Message bytes

    Returns:
        bytes: Raw digest bytes
    """
    return HmacDigestEngine(algorithm).compute(secret, message)
