"""
Command-line interface for the HTTP Signatures SDK
Inspects, signs and verifies ``Signature`` headers
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional, Tuple

from .version import __version__
from .config.settings import SignatureSettings, load_settings_from_env, load_settings_from_file
from .crypto.keys import load_hmac_key, load_key_file
from .crypto.algorithms import KeyType, get_algorithm
from .exceptions import HttpSignatureError
from .signing.signer import create_signer
from .signing.types import Signature
from .signing.utils import format_http_date
from .signing.wire_format import format_signature, parse_signature
from .verification.verifier import verify_signature


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='httpsig',
        description='Inspect, sign and verify HTTP signature headers'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'HTTP Signatures Python SDK {__version__}'
    )

    parser.add_argument(
        '--settings',
        help='JSON settings file (defaults to HTTPSIG_* environment variables)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    setup_inspect_parser(subparsers)
    setup_sign_parser(subparsers)
    setup_verify_parser(subparsers)

    return parser


def setup_inspect_parser(subparsers):
    """Setup inspect subcommand parser"""
    inspect_parser = subparsers.add_parser('inspect', help='Parse a signature header and print its fields')
    inspect_parser.add_argument('header', help='Authorization or Signature header value')
    inspect_parser.add_argument('--algorithm', help='Algorithm associated with the keyId (required for hs2019)')


def _add_request_arguments(parser):
    parser.add_argument('--method', default='GET', help='HTTP method')
    parser.add_argument('--target', default='/', help='Request target (path and query)')
    parser.add_argument(
        '-H', '--header',
        action='append',
        default=[],
        dest='request_headers',
        metavar='"Name: value"',
        help='Request header, may be repeated'
    )
    key_group = parser.add_mutually_exclusive_group(required=True)
    key_group.add_argument('--key-file', help='PEM or DER key file')
    key_group.add_argument('--secret', help='Shared secret for HMAC algorithms')


def setup_sign_parser(subparsers):
    """Setup sign subcommand parser"""
    sign_parser = subparsers.add_parser('sign', help='Sign a request and print the signature header')
    sign_parser.add_argument('--key-id', required=True, help='Key identifier')
    sign_parser.add_argument('--algorithm', required=True, help='Signature algorithm, e.g. rsa-sha256')
    sign_parser.add_argument('--profile', help='Signing profile, e.g. hs2019')
    sign_parser.add_argument('--headers', default='date', help='Space separated covered headers')
    sign_parser.add_argument('--expires-in', type=int, help='Seconds until the signature expires')
    sign_parser.add_argument(
        '--header-name',
        choices=['Authorization', 'Signature'],
        default='Authorization',
        help='Header that carries the signature'
    )
    _add_request_arguments(sign_parser)


def setup_verify_parser(subparsers):
    """Setup verify subcommand parser"""
    verify_parser = subparsers.add_parser('verify', help='Verify a signature header against a request')
    verify_parser.add_argument('--signature', required=True, help='Authorization or Signature header value')
    verify_parser.add_argument('--algorithm', help='Algorithm associated with the keyId (required for hs2019)')
    _add_request_arguments(verify_parser)


def parse_header_arguments(values: List[str]) -> List[Tuple[str, str]]:
    """
    Parse ``-H "Name: value"`` arguments.

    Raises:
        ValueError: If an argument has no colon
    """
    headers = []
    for value in values:
        name, sep, header_value = value.partition(':')
        if not sep or not name.strip():
            raise ValueError(f"Invalid header (expected 'Name: value'): {value}")
        headers.append((name.strip(), header_value.strip()))
    return headers


def describe_signature(signature: Signature) -> Dict[str, Any]:
    """JSON-friendly view of a signature"""
    return {
        'key_id': signature.key_id,
        'algorithm': signature.algorithm.name,
        'signing_profile': signature.signing_profile.name if signature.signing_profile else None,
        'headers': list(signature.headers),
        'signature': signature.signature,
        'created': signature.created,
        'expires': signature.expires,
    }


def load_key(args, algorithm_name: Optional[str], private: bool):
    """Load the key named by ``--key-file``/``--secret``."""
    if args.secret is not None:
        return load_hmac_key(args.secret)
    if algorithm_name is not None and get_algorithm(algorithm_name).key_type is KeyType.HMAC:
        with open(args.key_file, 'rb') as f:
            return load_hmac_key(f.read().strip())
    return load_key_file(args.key_file, private=private)


def handle_inspect_command(args, settings: SignatureSettings) -> int:
    """Handle the inspect command."""
    signature = parse_signature(args.header, args.algorithm, settings)
    print(json.dumps(describe_signature(signature), indent=2))
    return 0


def handle_sign_command(args, settings: SignatureSettings) -> int:
    """Handle the sign command."""
    headers = parse_header_arguments(args.request_headers)
    covered = args.headers.split()
    now = settings.now()

    added = []
    if 'date' in [h.lower() for h in covered] and not any(n.lower() == 'date' for n, _ in headers):
        date_header = ('Date', format_http_date(now))
        headers.append(date_header)
        added.append(date_header)

    extra = {}
    if args.expires_in is not None:
        extra['expires'] = int(now) + args.expires_in

    signer = create_signer(
        load_key(args, args.algorithm, private=True),
        args.key_id,
        args.algorithm,
        headers=covered,
        signing_profile=args.profile,
        settings=settings,
        **extra
    )
    signed = signer.sign(args.method, args.target, headers)

    for name, value in added:
        print(f"{name}: {value}")
    if args.header_name == 'Signature':
        print(f"Signature: {format_signature(signed, scheme=None)}")
    else:
        print(f"Authorization: {format_signature(signed)}")
    return 0


def handle_verify_command(args, settings: SignatureSettings) -> int:
    """Handle the verify command."""
    signature = parse_signature(args.signature, args.algorithm, settings)
    headers = parse_header_arguments(args.request_headers)
    key = load_key(args, signature.algorithm.name, private=False)

    if verify_signature(key, signature, args.method, args.target, headers, settings=settings):
        print(f"✓ Signature verified for keyId={signature.key_id}")
        return 0

    print(f"✗ Signature verification failed for keyId={signature.key_id}", file=sys.stderr)
    return 1


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, 1 for failure, 2 for usage errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 2

    try:
        settings = load_settings_from_file(args.settings) if args.settings else load_settings_from_env()

        if args.command == 'inspect':
            return handle_inspect_command(args, settings)
        elif args.command == 'sign':
            return handle_sign_command(args, settings)
        else:
            return handle_verify_command(args, settings)

    except HttpSignatureError as e:
        print(f"Error [{e.error_code}]: {e.message}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
