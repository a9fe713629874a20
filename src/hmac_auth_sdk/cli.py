"""
Command-line interface for HMAC Auth Python SDK
Signs and verifies request fields and issues api credentials
"""

import argparse
import logging
import os
import sys
from typing import Optional

from . import __version__
from .config import ConfigError, HmacConfigManager, configure_logging
from .exceptions import HmacAuthSDKError
from .signing import (
    BuilderMode,
    SignatureEncoding,
    SignatureRequest,
    HmacSigner,
    from_base64,
    from_hex,
    to_base64,
    to_hex,
    generate_api_key,
    generate_api_secret,
    generate_http_date,
    generate_nonce,
    list_supported_algorithms,
    render_canonical_message,
)
from .verification import HmacVerifier


SECRET_ENV_VAR = "HMAC_API_SECRET"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_AUTHENTICATED = 2

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='hmac-sign',
        description='Sign and verify API requests with HMAC over a canonical message'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'HMAC Auth Python SDK {__version__}'
    )

    parser.add_argument(
        '--config',
        help='Path to a JSON configuration file (default: $HMAC_AUTH_CONFIG or config/hmac-auth-config.json)'
    )

    parser.add_argument(
        '--environment',
        help='Configuration environment to use'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    setup_sign_parser(subparsers)
    setup_verify_parser(subparsers)
    setup_canonical_parser(subparsers)
    setup_algorithms_parser(subparsers)
    setup_keygen_parser(subparsers)

    return parser


def add_request_arguments(parser: argparse.ArgumentParser, generate_defaults: bool = False) -> None:
    """Add the request field options shared by sign, verify and canonical."""
    parser.add_argument('--api-key', required=True, help='Public client identifier')
    parser.add_argument('--scheme', required=True, help='Request scheme (http/https)')
    parser.add_argument('--host', required=True, help='Request host')
    parser.add_argument('--method', required=True, help='Request method (GET/POST/...)')
    parser.add_argument('--resource', required=True, help='Request resource path')
    parser.add_argument('--content-type', required=True, help='Request content type')

    nonce_help = 'Request nonce' + (' (generated if omitted)' if generate_defaults else '')
    date_help = 'Request date' + (' (current time if omitted)' if generate_defaults else '')
    parser.add_argument('--nonce', required=not generate_defaults, help=nonce_help)
    parser.add_argument('--date', required=not generate_defaults, help=date_help)

    payload_group = parser.add_mutually_exclusive_group()
    payload_group.add_argument('--payload', help='Request body as UTF-8 text')
    payload_group.add_argument('--payload-file', help="File with the request body ('-' for stdin)")

    parser.add_argument(
        '--mode',
        choices=['full', 'only-header'],
        help='Build mode (default from configuration: full)'
    )
    parser.add_argument('--algorithm', help='HMAC algorithm (default from configuration: HmacSHA512)')
    parser.add_argument('--charset', help='Charset for string fields (default from configuration: UTF-8)')


def add_secret_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the api secret options."""
    secret_group = parser.add_mutually_exclusive_group()
    secret_group.add_argument('--secret-hex', help='Api secret in hex format')
    secret_group.add_argument('--secret-base64', help='Api secret in base64 format')


def setup_sign_parser(subparsers):
    """Setup sign subcommand."""
    sign_parser = subparsers.add_parser(
        'sign',
        help=f'Compute a request signature (secret from --secret-* or ${SECRET_ENV_VAR})'
    )
    add_request_arguments(sign_parser, generate_defaults=True)
    add_secret_arguments(sign_parser)
    sign_parser.add_argument(
        '--format',
        choices=['hex', 'base64'],
        help='Signature output format (default from configuration: base64)'
    )


def setup_verify_parser(subparsers):
    """Setup verify subcommand."""
    verify_parser = subparsers.add_parser(
        'verify',
        help='Verify a request signature (exit 0 if authenticated, 2 if not)'
    )
    add_request_arguments(verify_parser)
    add_secret_arguments(verify_parser)
    verify_parser.add_argument('--signature', required=True, help='Signature to verify')
    verify_parser.add_argument(
        '--format',
        choices=['hex', 'base64'],
        help='Signature format (default from configuration: base64)'
    )


def setup_canonical_parser(subparsers):
    """Setup canonical subcommand."""
    canonical_parser = subparsers.add_parser('canonical', help='Show the canonical message for request fields')
    add_request_arguments(canonical_parser)


def setup_algorithms_parser(subparsers):
    """Setup algorithms subcommand."""
    subparsers.add_parser('algorithms', help='List supported HMAC algorithms')


def setup_keygen_parser(subparsers):
    """Setup keygen subcommand."""
    keygen_parser = subparsers.add_parser('keygen', help='Generate a new api key and secret')
    keygen_parser.add_argument(
        '--format',
        choices=['hex', 'base64'],
        default='hex',
        help='Output format for the secret (default: hex)'
    )
    keygen_parser.add_argument(
        '--length',
        type=int,
        default=32,
        help='Secret length in bytes (default: 32)'
    )


def load_config(args) -> HmacConfigManager:
    """Load configuration from --config or the default locations."""
    if args.config:
        return HmacConfigManager.from_file(args.config, args.environment)
    return HmacConfigManager.load_default(args.environment)


def read_secret(args) -> Optional[bytes]:
    """Read the api secret from the command line or the environment."""
    if getattr(args, 'secret_hex', None):
        return from_hex(args.secret_hex)
    if getattr(args, 'secret_base64', None):
        return from_base64(args.secret_base64)

    env_secret = os.environ.get(SECRET_ENV_VAR)
    if env_secret:
        return env_secret.encode('utf-8')
    return None


def read_payload(args) -> Optional[bytes]:
    """Read the request body from --payload or --payload-file."""
    if args.payload is not None:
        return args.payload.encode('utf-8')
    if args.payload_file:
        if args.payload_file == '-':
            return sys.stdin.buffer.read()
        with open(args.payload_file, 'rb') as f:
            return f.read()
    return None


def build_request(args, config: HmacConfigManager, api_secret: Optional[bytes] = None) -> SignatureRequest:
    """Build the signature request from parsed arguments."""
    builder = config.to_request_builder()
    if args.algorithm:
        builder.algorithm(args.algorithm)
    if args.charset:
        builder.charset(args.charset)

    return (builder
            .api_key(args.api_key)
            .api_secret(api_secret)
            .scheme(args.scheme)
            .host(args.host)
            .method(args.method)
            .resource(args.resource)
            .nonce(args.nonce)
            .date(args.date)
            .content_type(args.content_type)
            .payload(read_payload(args))
            .build())


def resolve_mode(args, config: HmacConfigManager) -> BuilderMode:
    if args.mode:
        return BuilderMode.parse(args.mode)
    return config.get_signing_config().builder_mode


def resolve_format(args, config: HmacConfigManager) -> SignatureEncoding:
    return SignatureEncoding.parse(args.format or config.get_signing_config().output_format)


def handle_sign_command(args, config: HmacConfigManager) -> int:
    """Handle sign command."""
    if args.nonce is None:
        args.nonce = generate_nonce()
        print(f"Nonce: {args.nonce}", file=sys.stderr)
    if args.date is None:
        args.date = generate_http_date()
        print(f"Date: {args.date}", file=sys.stderr)

    request = build_request(args, config, read_secret(args))
    signer = HmacSigner(request)
    mode = resolve_mode(args, config)

    if resolve_format(args, config) is SignatureEncoding.HEX:
        print(signer.build_as_hex(mode))
    else:
        print(signer.build_as_base64(mode))
    return EXIT_OK


def handle_verify_command(args, config: HmacConfigManager) -> int:
    """Handle verify command."""
    request = build_request(args, config, read_secret(args))
    verifier = HmacVerifier(request)
    result = verifier.verify(args.signature, resolve_format(args, config), resolve_mode(args, config))

    if result.is_valid:
        print("✓ Signature authenticated")
        return EXIT_OK

    print(f"✗ Signature not authenticated ({result.status.value})")
    return EXIT_NOT_AUTHENTICATED


def handle_canonical_command(args, config: HmacConfigManager) -> int:
    """Handle canonical command."""
    request = build_request(args, config)
    mode = resolve_mode(args, config)
    signer = HmacSigner(request)

    print(f"# Mode: {mode.value}")
    print(f"# Fields: {', '.join(signer.covered_fields(mode))}")
    print(render_canonical_message(signer.canonical_message(mode), request.delimiter, request.charset))
    return EXIT_OK


def handle_algorithms_command(args, config: HmacConfigManager) -> int:
    """Handle algorithms command."""
    default_algorithm = config.get_signing_config().algorithm
    for name in list_supported_algorithms():
        marker = " (default)" if name == default_algorithm else ""
        print(f"{name}{marker}")
    return EXIT_OK


def handle_keygen_command(args, config: HmacConfigManager) -> int:
    """Handle keygen command."""
    if args.length < 16 or args.length > 1024:
        print("Error: Length must be between 16 and 1024", file=sys.stderr)
        return EXIT_ERROR

    secret = generate_api_secret(args.length)
    encoded = to_hex(secret) if args.format == 'hex' else to_base64(secret)
    print(f"Api Key: {generate_api_key()}")
    print(f"Api Secret: {encoded}")
    return EXIT_OK


COMMAND_HANDLERS = {
    'sign': handle_sign_command,
    'verify': handle_verify_command,
    'canonical': handle_canonical_command,
    'algorithms': handle_algorithms_command,
    'keygen': handle_keygen_command,
}


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, 2 for a rejected signature, 1 for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    handler = COMMAND_HANDLERS.get(args.command)
    if handler is None:
        parser.print_help()
        return EXIT_ERROR

    try:
        config = load_config(args)
        configure_logging(config.get_logging_config(), verbose=args.verbose)
        logger.debug(f"Using configuration environment '{config.get_current_environment()}'")
        return handler(args, config)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except (HmacAuthSDKError, ConfigError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
