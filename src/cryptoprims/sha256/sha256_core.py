import enum
import struct
from typing import List

from cryptoprims.core.errors import InvalidStateTransition
from cryptoprims.core.utils import MASK32, rotr32, ensure_bytes_like
from .sha256_constants import K, INITIAL_HASH, BLOCK_BYTES, DIGEST_BYTES, MAX_MESSAGE_BYTES

_BLOCK_WORDS = struct.Struct(">16I")
_DIGEST_WORDS = struct.Struct(">8I")
_LENGTH_FIELD = struct.Struct(">Q")


class HashPhase(enum.Enum):
    FRESH = "fresh"
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"

    def __str__(self):
        return self.name


def compress(h: List[int], block, offset: int = 0) -> None:
    # run one 64-byte block through the compression function, updating h in place
    w = list(_BLOCK_WORDS.unpack_from(block, offset))

    # message schedule: 48 more words from the first 16
    for n in range(16, 64):
        x = w[n - 15]
        y = w[n - 2]
        s0 = rotr32(x, 7) ^ rotr32(x, 18) ^ (x >> 3)
        s1 = rotr32(y, 17) ^ rotr32(y, 19) ^ (y >> 10)
        w.append((w[n - 16] + s0 + w[n - 7] + s1) & MASK32)

    a, b, c, d, e, f, g, hh = h

    for n in range(64):
        big_s1 = rotr32(e, 6) ^ rotr32(e, 11) ^ rotr32(e, 25)
        ch = (e & f) ^ (~e & g)
        t1 = (hh + big_s1 + ch + K[n] + w[n]) & MASK32
        big_s0 = rotr32(a, 2) ^ rotr32(a, 13) ^ rotr32(a, 22)
        maj = (a & b) ^ (a & c) ^ (b & c)
        t2 = (big_s0 + maj) & MASK32
        hh = g
        g = f
        f = e
        e = (d + t1) & MASK32
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK32

    h[0] = (h[0] + a) & MASK32
    h[1] = (h[1] + b) & MASK32
    h[2] = (h[2] + c) & MASK32
    h[3] = (h[3] + d) & MASK32
    h[4] = (h[4] + e) & MASK32
    h[5] = (h[5] + f) & MASK32
    h[6] = (h[6] + g) & MASK32
    h[7] = (h[7] + hh) & MASK32


def padding_blocks(tail: bytes, total_bytes: int) -> bytes:
    """
    Build the final one or two blocks for a message.

    Args:
        tail: The trailing bytes that did not fill a whole block (< 64)
        total_bytes: Length of the whole message in bytes

    Returns:
        bytes: 64 or 128 bytes ready for compression
    """
    # 0x80, zeros up to 56 mod 64, then the bit length big-endian
    zeros = (BLOCK_BYTES - 9 - len(tail)) % BLOCK_BYTES
    return bytes(tail) + b"\x80" + b"\x00" * zeros + _LENGTH_FIELD.pack(total_bytes << 3)


def serialize_digest(h: List[int]) -> bytes:
    return _DIGEST_WORDS.pack(*h)


def check_message_length(total_bytes: int) -> None:
    if total_bytes > MAX_MESSAGE_BYTES:
        raise OverflowError("cannot hash more than 2^61 - 1 bytes in one message")


class RawSha256:
    """
    Unbuffered SHA-256. ``update`` only takes whole 64-byte blocks;
    ``finish`` takes whatever is left over and produces the digest.
    """

    digest_size = DIGEST_BYTES
    block_size = BLOCK_BYTES

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self._h = list(INITIAL_HASH)
        self._byte_count = 0
        self._phase = HashPhase.FRESH

    @property
    def phase(self) -> HashPhase:
        return self._phase

    @property
    def byte_count(self) -> int:
        return self._byte_count

    def update(self, data) -> None:
        # process whole blocks; anything else is a caller error
        if self._phase is HashPhase.FINALIZED:
            raise InvalidStateTransition("update", self._phase)
        ensure_bytes_like(data)
        view = memoryview(data).cast("B")
        if len(view) % BLOCK_BYTES != 0:
            raise ValueError(f"RawSha256.update() needs a multiple of {BLOCK_BYTES} bytes, got {len(view)}")
        check_message_length(self._byte_count + len(view))

        for offset in range(0, len(view), BLOCK_BYTES):
            compress(self._h, view, offset)
        self._byte_count += len(view)
        self._phase = HashPhase.ACCUMULATING

    def finish(self, tail=b"") -> bytes:
        if self._phase is HashPhase.FINALIZED:
            raise InvalidStateTransition("finish", self._phase)
        ensure_bytes_like(tail)
        view = memoryview(tail).cast("B")

        # split off whole blocks first so padding only ever sees < 64 bytes
        whole = len(view) - len(view) % BLOCK_BYTES
        if whole:
            self.update(view[:whole])
            view = view[whole:]

        total = self._byte_count + len(view)
        check_message_length(total)
        final = padding_blocks(view, total)
        for offset in range(0, len(final), BLOCK_BYTES):
            compress(self._h, final, offset)

        self._byte_count = total
        self._phase = HashPhase.FINALIZED
        return serialize_digest(self._h)

    def copy(self) -> "RawSha256":
        # independent clone in any phase
        clone = RawSha256.__new__(RawSha256)
        clone._h = list(self._h)
        clone._byte_count = self._byte_count
        clone._phase = self._phase
        return clone

    def __repr__(self):
        return f"RawSha256(phase={self._phase}, byte_count={self._byte_count})"
