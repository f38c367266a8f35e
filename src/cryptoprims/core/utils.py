"""
CryptoPrims - Byte/Word Packing Helpers
Shared by the Twofish and SHA-256 modules; nothing else is shared between them.
"""

import struct

MASK32 = 0xFFFFFFFF

_U32_LE = struct.Struct("<I")
_U32_BE = struct.Struct(">I")
_BLOCK_LE = struct.Struct("<4I")


def rotl32(value, amount):
    # rotate a 32-bit integer left
    return ((value << amount) | (value >> (32 - amount))) & MASK32


def rotr32(value, amount):
    # rotate a 32-bit integer right
    return ((value >> amount) | (value << (32 - amount))) & MASK32


def load_u32_le(data, offset=0):
    return _U32_LE.unpack_from(data, offset)[0]


def store_u32_le(value):
    return _U32_LE.pack(value & MASK32)


def load_u32_be(data, offset=0):
    return _U32_BE.unpack_from(data, offset)[0]


def store_u32_be(value):
    return _U32_BE.pack(value & MASK32)


def load_words_le(block):
    # split a 16-byte block into four little-endian words
    return _BLOCK_LE.unpack(bytes(block))


def store_words_le(w0, w1, w2, w3, out=None):
    # pack four words little-endian, either fresh or into a writable buffer
    if out is None:
        return _BLOCK_LE.pack(w0, w1, w2, w3)
    _BLOCK_LE.pack_into(out, 0, w0, w1, w2, w3)
    return out


def word_to_bytes_le(value):
    # split a 32-bit word into its four bytes, least significant first
    return (value & 0xFF, (value >> 8) & 0xFF, (value >> 16) & 0xFF, (value >> 24) & 0xFF)


def bytes_to_word_le(b0, b1, b2, b3):
    return b0 | (b1 << 8) | (b2 << 16) | (b3 << 24)


def ensure_bytes_like(data, what="Data"):
    # accept bytes, bytearray and C-contiguous memoryviews; reject str and everything else
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be bytes, bytearray or memoryview, not {type(data).__name__}")
    if isinstance(data, memoryview) and not data.c_contiguous:
        raise TypeError(f"{what} memoryview must be C-contiguous; pass bytes(view) for strided views")
    return data
