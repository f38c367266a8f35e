#!/usr/bin/env python3
"""
Twofish Constants
Contains the fixed permutations, the MDS and RS matrices, GF(2^8)
arithmetic and the MDS-composed permutation tables used by the key
schedule and the block transform.
Based on "Twofish: A 128-Bit Block Cipher" (Schneier et al., 1998).
"""

BLOCK_BYTES = 16
ROUNDS = 16
VALID_KEY_LENGTHS = (16, 24, 32)

# primitive polynomial for the MDS matrix: x^8 + x^6 + x^5 + x^3 + 1
MDS_POLY = 0x169

# generator polynomial field for the RS code: x^8 + x^6 + x^3 + x^2 + 1
RS_POLY = 0x14D

# key-word increment used when building subkeys (2i * rho, (2i+1) * rho)
RHO = 0x01010101

# 4-bit permutations t0..t3 that build q0 and q1
Q0_T = (
    (0x8, 0x1, 0x7, 0xD, 0x6, 0xF, 0x3, 0x2, 0x0, 0xB, 0x5, 0x9, 0xE, 0xC, 0xA, 0x4),
    (0xE, 0xC, 0xB, 0x8, 0x1, 0x2, 0x3, 0x5, 0xF, 0x4, 0xA, 0x6, 0x7, 0x0, 0x9, 0xD),
    (0xB, 0xA, 0x5, 0xE, 0x6, 0xD, 0x9, 0x0, 0xC, 0x8, 0xF, 0x3, 0x2, 0x4, 0x7, 0x1),
    (0xD, 0x7, 0xF, 0x4, 0x1, 0x2, 0x6, 0xE, 0x9, 0xB, 0x3, 0x0, 0x8, 0x5, 0xC, 0xA),
)

Q1_T = (
    (0x2, 0x8, 0xB, 0xD, 0xF, 0x7, 0x6, 0xE, 0x3, 0x1, 0x9, 0x4, 0x0, 0xA, 0xC, 0x5),
    (0x1, 0xE, 0x2, 0xB, 0x4, 0xC, 0x3, 0x7, 0x6, 0xD, 0xA, 0x5, 0xF, 0x9, 0x0, 0x8),
    (0x4, 0xC, 0x7, 0x5, 0x1, 0x6, 0x9, 0xA, 0x0, 0xE, 0xD, 0x8, 0x2, 0xB, 0x3, 0xF),
    (0xB, 0x9, 0x5, 0x1, 0xC, 0x3, 0xD, 0xE, 0x6, 0x4, 0x7, 0xF, 0x2, 0x0, 0x8, 0xA),
)

# MDS matrix, row-major
MDS_MATRIX = (
    (0x01, 0xEF, 0x5B, 0x5B),
    (0x5B, 0xEF, 0xEF, 0x01),
    (0xEF, 0x5B, 0x01, 0xEF),
    (0xEF, 0x01, 0xEF, 0x5B),
)

# Reed-Solomon matrix, 4 rows by 8 columns
RS_MATRIX = (
    (0x01, 0xA4, 0x55, 0x87, 0x5A, 0x58, 0xDB, 0x9E),
    (0xA4, 0x56, 0x82, 0xF3, 0x1E, 0xC6, 0x68, 0xE5),
    (0x02, 0xA1, 0xFC, 0xC1, 0x47, 0xAE, 0x3D, 0x19),
    (0xA4, 0x55, 0x87, 0x5A, 0x58, 0xDB, 0x9E, 0x03),
)


def _ror4(value, amount):
    # rotate a nibble right
    return ((value >> amount) | (value << (4 - amount))) & 0xF


def _build_q(t):
    """
    Build an 8-bit permutation from its four 4-bit t-tables.

    Args:
        t: Tuple of the four nibble permutations t0..t3

    Returns:
        tuple: 256-entry permutation
    """
    table = []
    for x in range(256):
        a0, b0 = x >> 4, x & 0xF
        a1 = a0 ^ b0
        b1 = a0 ^ _ror4(b0, 1) ^ ((a0 << 3) & 0xF)
        a2, b2 = t[0][a1], t[1][b1]
        a3 = a2 ^ b2
        b3 = a2 ^ _ror4(b2, 1) ^ ((a2 << 3) & 0xF)
        a4, b4 = t[2][a3], t[3][b3]
        table.append((b4 << 4) | a4)
    return tuple(table)


Q0 = _build_q(Q0_T)
Q1 = _build_q(Q1_T)

# permutation applied to each byte position before XOR-ing in key word i.
# index 0 is the stage next to the MDS step, index 3 only runs for 256-bit keys.
Q_STAGES = (
    (Q0, Q0, Q1, Q1),
    (Q0, Q1, Q0, Q1),
    (Q1, Q1, Q0, Q0),
    (Q1, Q0, Q0, Q1),
)

# permutation applied per byte position after the last key word, just before MDS
Q_OUTER = (Q1, Q0, Q1, Q0)


def gf_multiply(a, b, modulus):
    """
    Multiply two elements of GF(2^8).

    Args:
        a: First factor (0-255)
        b: Second factor (0-255)
        modulus: Reduction polynomial including the x^8 term

    Returns:
        int: Product (0-255)
    """
    result = 0
    while b:
        if b & 1:
            result ^= a
        a <<= 1
        if a & 0x100:
            a ^= modulus
        b >>= 1
    return result


def _build_mdsq():
    # MDS column j times the outer permutation for position j, packed as a little-endian word
    tables = []
    for j in range(4):
        q = Q_OUTER[j]
        column = [MDS_MATRIX[row][j] for row in range(4)]
        table = []
        for x in range(256):
            y = q[x]
            word = 0
            for row in range(4):
                word |= gf_multiply(column[row], y, MDS_POLY) << (8 * row)
            table.append(word)
        tables.append(tuple(table))
    return tuple(tables)


MDSQ = _build_mdsq()
