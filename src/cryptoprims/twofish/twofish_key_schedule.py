#!/usr/bin/env python3
"""
Twofish Key Schedule
Implements the key schedule algorithm for Twofish: whitening words,
round subkeys and the key-dependent S-boxes.
Based on "Twofish: A 128-Bit Block Cipher", section 4.3.
"""

import logging

from cryptoprims.core.errors import InvalidKeyLength
from cryptoprims.core.utils import (
    MASK32, rotl32, load_u32_le, word_to_bytes_le, bytes_to_word_le, ensure_bytes_like
)
from .twofish_constants import (
    VALID_KEY_LENGTHS, RS_MATRIX, RS_POLY, RHO, Q_STAGES, MDSQ, gf_multiply
)

logger = logging.getLogger("CryptoPrims")


def h_function(x, key_words):
    """
    The Twofish h function: the key-dependent q chain followed by the MDS step.

    Args:
        x: 32-bit input word
        key_words: Sequence of 2, 3 or 4 key words (L0 first)

    Returns:
        int: 32-bit output word
    """
    y = list(word_to_bytes_le(x))
    for i in range(len(key_words) - 1, -1, -1):
        stage = Q_STAGES[i]
        key_bytes = word_to_bytes_le(key_words[i])
        y = [stage[j][y[j]] ^ key_bytes[j] for j in range(4)]
    return MDSQ[0][y[0]] ^ MDSQ[1][y[1]] ^ MDSQ[2][y[2]] ^ MDSQ[3][y[3]]


def rs_encode(chunk):
    """
    Multiply an 8-byte key chunk through the RS matrix.

    Args:
        chunk: 8 key bytes

    Returns:
        int: The derived 32-bit S-box key word
    """
    out = [0, 0, 0, 0]
    for row in range(4):
        coefficients = RS_MATRIX[row]
        acc = 0
        for column in range(8):
            acc ^= gf_multiply(coefficients[column], chunk[column], RS_POLY)
        out[row] = acc
    return bytes_to_word_le(*out)


def _build_sboxes(sbox_key_words):
    # precompute g() per byte position; each position only sees its own byte of every key word
    tables = []
    for j in range(4):
        key_bytes = [(word >> (8 * j)) & 0xFF for word in sbox_key_words]
        stages = [Q_STAGES[i][j] for i in range(len(sbox_key_words))]
        mdsq = MDSQ[j]
        table = []
        for x in range(256):
            y = x
            for i in range(len(key_bytes) - 1, -1, -1):
                y = stages[i][y] ^ key_bytes[i]
            table.append(mdsq[y])
        tables.append(tuple(table))
    return tuple(tables)


def _build_subkeys(even_words, odd_words):
    # K0..K7 whitening, K8..K39 round keys, combined with the pseudo-Hadamard transform
    subkeys = []
    for i in range(20):
        a = h_function(2 * i * RHO, even_words)
        b = rotl32(h_function((2 * i + 1) * RHO, odd_words), 8)
        subkeys.append((a + b) & MASK32)
        subkeys.append(rotl32((a + 2 * b) & MASK32, 9))
    return subkeys


class TwofishKeySchedule:
    """Expanded Twofish key. Immutable once built and safe to share."""

    __slots__ = ("_key_bits", "_whitening", "_round_keys", "_sboxes")

    def __init__(self, key):
        """
        Expand a raw key.

        Args:
            key: Master key (16, 24, or 32 bytes)

        Raises:
            InvalidKeyLength: If the key is not 16, 24, or 32 bytes long
        """
        ensure_bytes_like(key, "Key")
        key = bytes(key)
        if len(key) not in VALID_KEY_LENGTHS:
            raise InvalidKeyLength(len(key))

        words = [load_u32_le(key, offset) for offset in range(0, len(key), 4)]
        chunks = len(key) // 8

        # S-box key words come out of the RS step in reverse chunk order
        sbox_key_words = tuple(rs_encode(key[8 * i:8 * i + 8]) for i in range(chunks - 1, -1, -1))
        subkeys = _build_subkeys(words[0::2], words[1::2])

        object.__setattr__(self, "_key_bits", len(key) * 8)
        object.__setattr__(self, "_whitening", tuple(subkeys[:8]))
        object.__setattr__(self, "_round_keys", tuple(subkeys[8:]))
        object.__setattr__(self, "_sboxes", _build_sboxes(sbox_key_words))

        logger.debug(f"Built Twofish-{self._key_bits} key schedule")

    @classmethod
    def build(cls, key):
        """Build a key schedule; same as calling the class."""
        return cls(key)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self):
        return f"{type(self).__name__}(key_bits={self._key_bits})"

    @property
    def key_bits(self):
        return self._key_bits

    @property
    def whitening_keys(self):
        """K0..K3 whiten the input, K4..K7 the output."""
        return self._whitening

    @property
    def round_keys(self):
        """Two words per round, 32 in total."""
        return self._round_keys

    @property
    def subkeys(self):
        """All 40 expanded key words in reference order."""
        return self._whitening + self._round_keys

    @property
    def s_boxes(self):
        """Four 256-entry key-dependent tables, already composed with the MDS matrix."""
        return self._sboxes


def build_key_schedule(key):
    return TwofishKeySchedule(key)
