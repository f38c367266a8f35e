#!/usr/bin/env python3
"""
Twofish Block Cipher
128-bit blocks, 128/192/256-bit keys. Only the single-block primitive is
provided; choosing a mode of operation is up to the caller.
"""

from .twofish_constants import BLOCK_BYTES, ROUNDS, VALID_KEY_LENGTHS
from .twofish_key_schedule import TwofishKeySchedule, build_key_schedule
from .twofish_core import TwofishCore, encrypt_block, decrypt_block
from .implementation import (
    TwofishImplementation,
    create_twofish_implementation,
    register_all_twofish_variants,
    TWOFISH_IMPLEMENTATIONS,
)

__all__ = [
    'BLOCK_BYTES',
    'ROUNDS',
    'VALID_KEY_LENGTHS',
    'TwofishKeySchedule',
    'build_key_schedule',
    'TwofishCore',
    'encrypt_block',
    'decrypt_block',
    'TwofishImplementation',
    'create_twofish_implementation',
    'register_all_twofish_variants',
    'TWOFISH_IMPLEMENTATIONS',
]

register_all_twofish_variants()
