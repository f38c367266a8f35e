#!/usr/bin/env python3
"""
CryptoPrims - Twofish Implementation
Registry-facing wrapper around the single-block Twofish transform.
No mode of operation is provided; callers chain blocks themselves.
"""

import logging

from .twofish_constants import BLOCK_BYTES, ROUNDS
from .twofish_key_schedule import TwofishKeySchedule
from .twofish_core import encrypt_block, decrypt_block

# Setup logger
logger = logging.getLogger("CryptoPrims")

# Dictionary to track implementations
TWOFISH_IMPLEMENTATIONS = {}

# Local implementation of register_implementation to avoid circular imports
def register_twofish_variant(name):
    """Register a Twofish implementation variant."""
    def decorator(impl_class):
        TWOFISH_IMPLEMENTATIONS[name] = impl_class
        return impl_class
    return decorator

@register_twofish_variant("twofish")
class TwofishImplementation:
    """Twofish block transform with a fixed key size."""

    kind = "block_cipher"

    def __init__(self, key_size=256, **kwargs):
        """
        Initialize with key size.

        Args:
            key_size: Key size in bits (128, 192, or 256)
            **kwargs: Ignored, accepted for registry factories
        """
        self.key_size = int(key_size)
        if self.key_size not in (128, 192, 256):
            raise ValueError(f"Invalid key size: {self.key_size}. Must be 128, 192, or 256 bits.")
        self.name = f"Twofish-{self.key_size}"
        self.description = f"Twofish with {self.key_size}-bit key (single block)"
        self.is_custom = True
        self.block_size_bytes = BLOCK_BYTES
        self.num_rounds = ROUNDS

    def prepare_key(self, key):
        """
        Build the key schedule for a key of this implementation's size.

        Args:
            key: Raw key bytes

        Returns:
            TwofishKeySchedule: The expanded key
        """
        if len(key) * 8 != self.key_size:
            raise ValueError(f"{self.name} needs a {self.key_size // 8}-byte key, got {len(key)} bytes")
        return TwofishKeySchedule(key)

    def encrypt_block(self, block, schedule):
        return encrypt_block(schedule, block)

    def decrypt_block(self, block, schedule):
        return decrypt_block(schedule, block)


def create_twofish_implementation(key_size=256):
    # create a twofish implementation for one key size
    return TwofishImplementation(key_size=key_size)


def register_all_twofish_variants():
    # register one entry per key size
    for key_size in (128, 192, 256):
        TWOFISH_IMPLEMENTATIONS[f"twofish{key_size}"] = lambda ks=key_size, **kwargs: create_twofish_implementation(ks)
    logger.debug(f"Twofish variants: {', '.join(TWOFISH_IMPLEMENTATIONS.keys())}")
    return TWOFISH_IMPLEMENTATIONS
