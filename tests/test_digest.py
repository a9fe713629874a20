"""
Tests for the HMAC digest engine
"""

from unittest.mock import patch

import pytest
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hmac

from hmac_auth_sdk.exceptions import DigestError, MissingFieldError, UnsupportedAlgorithmError
from hmac_auth_sdk.signing import (
    DEFAULT_ALGORITHM,
    HMAC_ALGORITHMS,
    HmacDigestEngine,
    build_canonical_message,
    canonical_algorithm_name,
    compute_hmac,
    is_algorithm_supported,
    list_supported_algorithms,
)


GET_SHA512_HEX = (
    "d29f0f67373d04a9b2f3e4fca97eaa94aa4d9a4516c46639c49bf612826cfdb1"
    "43d47fd95e609bf968f569baa98bac0f91048d87f4a57b1f9057a9bd2ab0142d"
)
GET_SHA256_HEX = "fc1e27af293608af28a2a22d6438c3180dd8ae3d8de4a04a3803a982d98d3b7a"


class TestAlgorithmNames:
    """Test algorithm name resolution"""

    def test_default_algorithm(self):
        """Test the default algorithm name"""
        assert DEFAULT_ALGORITHM == "HmacSHA512"
        assert DEFAULT_ALGORITHM in HMAC_ALGORITHMS

    @pytest.mark.parametrize("name", ["HmacSHA512", "hmacsha512", "HMACSHA512", " HmacSha512 "])
    def test_case_insensitive(self, name):
        """Test that names match regardless of case"""
        assert canonical_algorithm_name(name) == "HmacSHA512"

    @pytest.mark.parametrize("name", ["HmacFOO", "SHA512", "", "hmac-sha512"])
    def test_unknown_name(self, name):
        """Test that unknown names are rejected"""
        with pytest.raises(UnsupportedAlgorithmError) as exc_info:
            canonical_algorithm_name(name)
        assert exc_info.value.error_code == "UNSUPPORTED_ALGORITHM"

    def test_non_string_name(self):
        """Test that a missing name is rejected"""
        with pytest.raises(UnsupportedAlgorithmError):
            HmacDigestEngine(None)

    def test_engine_canonicalizes_name(self):
        """Test that the engine stores the canonical spelling"""
        assert HmacDigestEngine("hmacsha256").algorithm == "HmacSHA256"

    @pytest.mark.parametrize("name,size", [
        ("HmacSHA1", 20),
        ("HmacSHA256", 32),
        ("HmacSHA384", 48),
        ("HmacSHA512", 64),
    ])
    def test_digest_size(self, name, size):
        """Test digest sizes"""
        assert HmacDigestEngine(name).digest_size == size


class TestCompute:
    """Test digest computation"""

    def test_sha512_vector(self, get_request, api_secret):
        """Test a known HmacSHA512 digest"""
        message = build_canonical_message(get_request)
        assert compute_hmac("HmacSHA512", api_secret, message).hex() == GET_SHA512_HEX

    def test_sha256_vector(self, get_request, api_secret):
        """Test a known HmacSHA256 digest"""
        message = build_canonical_message(get_request)
        assert compute_hmac("HmacSHA256", api_secret, message).hex() == GET_SHA256_HEX

    def test_rfc4231_case_2(self):
        """Test the RFC 4231 test case 2 vector"""
        digest = compute_hmac("HmacSHA256", b"Jefe", b"what do ya want for nothing?")
        assert digest.hex() == "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"

    def test_deterministic(self, api_secret):
        """Test that equal inputs give equal digests"""
        engine = HmacDigestEngine("HmacSHA512")
        assert engine.compute(api_secret, b"message") == engine.compute(api_secret, b"message")

    def test_key_sensitivity(self, api_secret):
        """Test that a different key changes the digest"""
        engine = HmacDigestEngine("HmacSHA512")
        assert engine.compute(api_secret, b"message") != engine.compute(b"other-secret", b"message")

    def test_bytearray_secret(self, api_secret):
        """Test that a bytearray key gives the same digest"""
        engine = HmacDigestEngine("HmacSHA512")
        assert engine.compute(bytearray(api_secret), b"m") == engine.compute(api_secret, b"m")

    def test_caller_secret_untouched(self, api_secret):
        """Test that the caller's key buffer is not zeroed"""
        secret = bytearray(api_secret)
        HmacDigestEngine("HmacSHA512").compute(secret, b"m")
        assert bytes(secret) == api_secret

    def test_missing_secret(self):
        """Test that a missing secret is reported as a missing field"""
        with pytest.raises(MissingFieldError) as exc_info:
            HmacDigestEngine("HmacSHA512").compute(None, b"m")
        assert exc_info.value.field_name == "api_secret"

    def test_empty_secret(self):
        """Test that an empty key is a digest failure"""
        with pytest.raises(DigestError) as exc_info:
            HmacDigestEngine("HmacSHA512").compute(b"", b"m")
        assert exc_info.value.error_code == "DIGEST_FAILED"

    def test_all_algorithms_produce_expected_size(self, api_secret):
        """Test every supported algorithm against its digest size"""
        for name in list_supported_algorithms():
            engine = HmacDigestEngine(name)
            assert len(engine.compute(api_secret, b"m")) == engine.digest_size


REAL_HMAC = hmac.HMAC
HMAC_TARGET = 'hmac_auth_sdk.signing.digest.hmac.HMAC'


class TestBackendFailures:
    """Test mapping of crypto backend failures"""

    def test_key_material_zeroed_after_use(self, api_secret):
        """Test that the scratch key buffer is wiped after the digest"""
        with patch(HMAC_TARGET, side_effect=lambda key, algorithm: REAL_HMAC(bytes(key), algorithm)) as mock_hmac:
            digest = HmacDigestEngine("HmacSHA512").compute(api_secret, b"m")

        assert len(digest) == 64
        mock_hmac.assert_called_once()
        key_buffer = mock_hmac.call_args[0][0]
        assert key_buffer == bytearray(len(api_secret))

    def test_key_material_zeroed_after_failure(self, api_secret):
        """Test that the scratch key buffer is wiped when the backend fails"""
        with patch(HMAC_TARGET, side_effect=RuntimeError("backend exploded")) as mock_hmac:
            with pytest.raises(DigestError):
                HmacDigestEngine("HmacSHA512").compute(api_secret, b"m")

        assert mock_hmac.call_args[0][0] == bytearray(len(api_secret))

    @patch(HMAC_TARGET, side_effect=UnsupportedAlgorithm("not in this build"))
    def test_backend_unsupported_algorithm(self, mock_hmac, api_secret):
        """Test that a backend without the hash reports an unsupported algorithm"""
        with pytest.raises(UnsupportedAlgorithmError) as exc_info:
            HmacDigestEngine("HmacMD5").compute(api_secret, b"m")
        assert exc_info.value.algorithm == "HmacMD5"
        assert not is_algorithm_supported("HmacMD5")

    @patch(HMAC_TARGET, side_effect=RuntimeError("backend exploded"))
    def test_backend_runtime_failure(self, mock_hmac, api_secret):
        """Test that unexpected backend errors become digest failures"""
        with pytest.raises(DigestError) as exc_info:
            compute_hmac("HmacSHA512", api_secret, b"m")
        assert "RuntimeError" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @patch(HMAC_TARGET, side_effect=ValueError("key too short"))
    def test_backend_value_error(self, mock_hmac, api_secret):
        """Test that backend key rejections become digest failures"""
        with pytest.raises(DigestError, match="key too short"):
            compute_hmac("HmacSHA512", api_secret, b"m")


class TestSupportedAlgorithms:
    """Test algorithm availability probing"""

    def test_default_is_supported(self):
        """Test that the default algorithm is usable"""
        assert is_algorithm_supported(DEFAULT_ALGORITHM)

    def test_unknown_is_not_supported(self):
        """Test that unknown names are reported as unsupported"""
        assert not is_algorithm_supported("HmacWHIRLPOOL")

    def test_list_is_subset_in_order(self):
        """Test that listed algorithms keep the table order"""
        supported = list_supported_algorithms()
        assert "HmacSHA256" in supported
        assert supported == [name for name in HMAC_ALGORITHMS if name in supported]
