"""Pytest configuration and fixtures."""

import pytest

from hmac_auth_sdk.signing import SignatureRequest, create_signature_request


# 32-byte secret shared by the literal digest vectors in the test modules
TEST_SECRET = b"0123456789abcdef0123456789abcdef"


@pytest.fixture
def api_secret() -> bytes:
    """Fixed api secret."""
    return TEST_SECRET


@pytest.fixture
def get_request(api_secret) -> SignatureRequest:
    """GET request without payload."""
    return (create_signature_request()
            .api_key("k1")
            .api_secret(api_secret)
            .scheme("https")
            .host("api.example.com")
            .method("GET")
            .resource("/v1/users")
            .nonce("n0nce123")
            .date("Wed, 02 Nov 2016 03:25:54 GMT")
            .content_type("application/json")
            .build())


@pytest.fixture
def post_request(get_request) -> SignatureRequest:
    """POST request with a JSON payload."""
    return get_request.replace(method="POST", payload=b'{"name":"alice"}')


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep configuration and secrets from the host environment out of tests."""
    monkeypatch.delenv("HMAC_AUTH_CONFIG", raising=False)
    monkeypatch.delenv("HMAC_API_SECRET", raising=False)
    monkeypatch.chdir(tmp_path)
