#!/usr/bin/env python3
"""
CryptoPrims
Twofish block cipher and SHA-256 hash function, bit-exact against the
Twofish paper and FIPS 180-4. Only the primitives are provided: no modes of
operation, no padding for encryption, no key management.
"""

# import core modules
from cryptoprims.core import (
    CryptoPrimitiveError,
    InvalidKeyLength,
    InvalidStateTransition,
    register_all_implementations,
    list_implementations,
    get_implementation,
)

# import Twofish
from cryptoprims.twofish import (
    TwofishKeySchedule,
    TwofishCore,
    build_key_schedule,
    encrypt_block,
    decrypt_block,
)

# import SHA-256
from cryptoprims.sha256 import (
    HashPhase,
    RawSha256,
    Sha256State,
    sha256,
    sha256_hex,
)

__version__ = "1.1.0"

__all__ = [
    'CryptoPrimitiveError',
    'InvalidKeyLength',
    'InvalidStateTransition',
    'register_all_implementations',
    'list_implementations',
    'get_implementation',
    'TwofishKeySchedule',
    'TwofishCore',
    'build_key_schedule',
    'encrypt_block',
    'decrypt_block',
    'HashPhase',
    'RawSha256',
    'Sha256State',
    'sha256',
    'sha256_hex',
]
