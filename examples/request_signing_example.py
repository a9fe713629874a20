#!/usr/bin/env python3
"""
HMAC Auth Python SDK - Request Signing Example

This example demonstrates how a client signs API requests with its api
secret and how a server verifies the signature it receives, in both build
modes and in the hex and base64 representations.
"""

import json
import time
import sys
import os

# Add src to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from hmac_auth_sdk import (
    # Credentials
    generate_api_key,
    generate_api_secret,
    # Request signing
    create_signature_request,
    SignatureRequestBuilder,
    HmacSigner,
    BuilderMode,
    # Verification
    HmacVerifier,
    # Errors
    HmacAuthSDKError,
    SignatureMismatchError,
    # Utilities
    generate_nonce,
    generate_http_date,
    list_supported_algorithms,
)
from hmac_auth_sdk.signing import render_canonical_message


def issue_credentials():
    """Issue a new api key and secret the way a server would"""
    api_key = generate_api_key()
    api_secret = generate_api_secret()
    print(f"   Api key: {api_key}")
    print(f"   Api secret: {len(api_secret)} bytes")
    return api_key, api_secret


def basic_signing_example():
    """Demonstrate basic request signing workflow"""
    print("=== Basic Request Signing Example ===")

    # 1. Issue credentials
    print("1. Issuing api credentials...")
    api_key, api_secret = issue_credentials()

    # 2. Describe the request
    print("\n2. Creating signature request...")
    request = (create_signature_request()
               .credentials(api_key, api_secret)
               .scheme("https")
               .host("api.example.com")
               .method("POST")
               .resource("/v1/users")
               .nonce(generate_nonce())
               .date(generate_http_date())
               .content_type("application/json")
               .payload(json.dumps({"name": "alice"}))
               .build())

    print(f"   Algorithm: {request.algorithm}")
    print(f"   Charset: {request.charset}")

    # 3. Sign
    print("\n3. Signing request...")
    signer = HmacSigner(request)
    print("   Canonical message:")
    for line in render_canonical_message(signer.canonical_message()).splitlines():
        print(f"     {line}")

    signature = signer.build_as_base64()
    print(f"   Signature (base64): {signature[:32]}...")

    # 4. Verify on the server side
    print("\n4. Verifying signature...")
    verifier = HmacVerifier(request)
    print(f"   Authenticated: {verifier.is_hash_equals_with_base64(signature)}")

    tampered = request.replace(payload=b'{"name":"mallory"}')
    print(f"   Tampered payload authenticated: "
          f"{HmacVerifier(tampered).is_hash_equals_with_base64(signature)}")


def build_modes_example():
    """Compare FULL and ONLY_HEADER signatures"""
    print("\n\n=== Build Modes Example ===")

    _, api_secret = issue_credentials()
    request = (create_signature_request()
               .credentials("example-client", api_secret)
               .scheme("https")
               .host("api.example.com")
               .method("PUT")
               .resource("/v1/files/42")
               .nonce(generate_nonce())
               .date(generate_http_date())
               .content_type("image/jpeg")
               .payload(os.urandom(1024))
               .build())

    signer = HmacSigner(request)
    for mode in BuilderMode:
        print(f"   {mode.value}: fields={signer.covered_fields(mode)}")
        print(f"   {mode.value}: {signer.build_as_hex(mode)[:32]}...")

    # Large bodies can be left out of the signature
    header_only = signer.build(BuilderMode.ONLY_HEADER)
    other_body = request.replace(payload=b"different body")
    verifier = HmacVerifier(other_body)
    print(f"   Header-only signature valid for other body: "
          f"{verifier.is_hash_equals(header_only, BuilderMode.ONLY_HEADER)}")


def algorithms_example():
    """Sign the same request with every supported algorithm"""
    print("\n\n=== Algorithms Example ===")

    base = (create_signature_request()
            .credentials("example-client", b"example secret")
            .scheme("https")
            .host("api.example.com")
            .method("GET")
            .resource("/v1/users")
            .nonce("fixed-nonce")
            .date("Wed, 02 Nov 2016 03:25:54 GMT")
            .content_type("application/json")
            .build())

    for name in list_supported_algorithms():
        signature = HmacSigner(base.replace(algorithm=name)).build()
        print(f"   {name:16s} {len(signature):3d} bytes")


def performance_benchmark():
    """Benchmark signing performance"""
    print("\n\n=== Performance Benchmark ===")

    _, api_secret = issue_credentials()
    builder = (SignatureRequestBuilder()
               .credentials("bench", api_secret)
               .scheme("https")
               .host("api.example.com")
               .method("POST")
               .resource("/v1/events")
               .date(generate_http_date())
               .content_type("application/json")
               .payload(json.dumps({"event": "x" * 512})))

    iterations = 1000
    start = time.perf_counter()
    for _ in range(iterations):
        HmacSigner(builder.nonce(generate_nonce()).build()).build_as_base64()
    elapsed = time.perf_counter() - start

    print(f"   Signed {iterations} requests in {elapsed * 1000:.1f}ms")
    print(f"   Average: {elapsed / iterations * 1000:.3f}ms per request")


def error_handling_example():
    """Demonstrate error handling"""
    print("\n\n=== Error Handling Example ===")

    request = (create_signature_request()
               .credentials("example-client", b"example secret")
               .scheme("https")
               .host("api.example.com")
               .method("GET")
               .resource("/v1/users")
               .date(generate_http_date())
               .content_type("application/json")
               .build())

    try:
        # Missing nonce
        HmacSigner(request).build()
    except HmacAuthSDKError as e:
        print(f"   Missing field: {type(e).__name__}: {e}")

    try:
        HmacSigner(request.replace(nonce="n", algorithm="HmacFOO")).build()
    except HmacAuthSDKError as e:
        print(f"   Unknown algorithm: {type(e).__name__}: {e}")

    verifier = HmacVerifier(request.replace(nonce="n"))
    print(f"   Malformed base64 authenticated: {verifier.is_hash_equals_with_base64('abc')}")

    try:
        verifier.assert_auth_success(b"\x00" * 64, error_message="Rejected request from example-client")
    except SignatureMismatchError as e:
        print(f"   Assertion: {e}")


def main():
    """Run all examples"""
    print("HMAC Auth Python SDK - Request Signing Examples")
    print("=" * 50)

    try:
        basic_signing_example()
        build_modes_example()
        algorithms_example()
        performance_benchmark()
        error_handling_example()

        print("\n\n=== All Examples Completed Successfully! ===")

    except Exception as e:
        print(f"\n✗ Example failed: {type(e).__name__}: {e}")
        import traceback
        traceback.print_exc()


if __name__ == "__main__":
    main()
