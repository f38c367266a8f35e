#!/usr/bin/env python3
"""
SHA-256 Hash Function
Use sha256() for data already in memory, Sha256State for data arriving in
pieces, or RawSha256 when input comes in whole 64-byte blocks.
"""

from .sha256_constants import BLOCK_BYTES, DIGEST_BYTES, MAX_MESSAGE_BYTES
from .sha256_core import HashPhase, RawSha256, compress
from .sha256_state import Sha256State, new, sha256, sha256_hex
from .implementation import (
    Sha256Implementation,
    create_custom_sha256_implementation,
    create_stdlib_sha256_implementation,
    register_all_sha256_variants,
    SHA256_IMPLEMENTATIONS,
)

__all__ = [
    'BLOCK_BYTES',
    'DIGEST_BYTES',
    'MAX_MESSAGE_BYTES',
    'HashPhase',
    'RawSha256',
    'compress',
    'Sha256State',
    'new',
    'sha256',
    'sha256_hex',
    'Sha256Implementation',
    'create_custom_sha256_implementation',
    'create_stdlib_sha256_implementation',
    'register_all_sha256_variants',
    'SHA256_IMPLEMENTATIONS',
]

register_all_sha256_variants()
