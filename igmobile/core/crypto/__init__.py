"""Crypto helpers: request signing and comment breadcrumbs."""
from .signature import (
    SignatureEngine,
    SignedPayload,
    canonical_json,
    sign,
    build_signed_envelope,
)
from .breadcrumb import comment_breadcrumb

__all__ = [
    'SignatureEngine',
    'SignedPayload',
    'canonical_json',
    'sign',
    'build_signed_envelope',
    'comment_breadcrumb',
]
