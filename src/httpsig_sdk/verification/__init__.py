"""
Signature verification module for the HTTP Signatures SDK
"""

from .verifier import (
    Verifier,
    create_verifier,
    verify_signature,
    verify_request,
)

__all__ = [
    'Verifier',
    'create_verifier',
    'verify_signature',
    'verify_request',
]
