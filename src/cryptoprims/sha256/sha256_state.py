#!/usr/bin/env python3
"""
SHA-256 Hash State
Buffered streaming SHA-256: accepts input in any chunk sizes and produces
the same digest as hashing the concatenation in one call.

Lifecycle:
    FRESH --update--> ACCUMULATING --finalize--> FINALIZED
    any phase --reset--> FRESH

Updating or finalizing a FINALIZED state raises InvalidStateTransition.
"""

from cryptoprims.core.errors import InvalidStateTransition
from cryptoprims.core.utils import ensure_bytes_like
from .sha256_constants import INITIAL_HASH, BLOCK_BYTES, DIGEST_BYTES
from .sha256_core import (
    HashPhase, RawSha256, compress, padding_blocks, serialize_digest, check_message_length
)


class Sha256State:
    """Single-owner SHA-256 state; callers sharing one must lock around it."""

    name = "sha256"
    digest_size = DIGEST_BYTES
    block_size = BLOCK_BYTES

    def __init__(self, data=b""):
        """
        Start a fresh hash.

        Args:
            data: Optional first chunk, fed through update()
        """
        self._buffer = bytearray(BLOCK_BYTES)
        self.reset()
        if data:
            self.update(data)

    def reset(self) -> None:
        # back to the initial hash value with nothing buffered
        self._h = list(INITIAL_HASH)
        self._buffer[:] = bytes(BLOCK_BYTES)
        self._buffered = 0
        self._byte_count = 0
        self._phase = HashPhase.FRESH

    @property
    def phase(self) -> HashPhase:
        return self._phase

    @property
    def byte_count(self) -> int:
        """Total bytes passed to update() since the last reset."""
        return self._byte_count

    @property
    def buffered_bytes(self) -> int:
        return self._buffered

    def _require_open(self, operation):
        if self._phase is HashPhase.FINALIZED:
            raise InvalidStateTransition(operation, self._phase)

    def update(self, data) -> None:
        """
        Feed more message bytes.

        Args:
            data: bytes, bytearray or memoryview of any length

        Raises:
            InvalidStateTransition: If the state was already finalized
        """
        self._require_open("update")
        ensure_bytes_like(data)
        view = memoryview(data).cast("B")
        size = len(view)
        check_message_length(self._byte_count + size)

        self._byte_count += size
        self._phase = HashPhase.ACCUMULATING
        pos = 0

        # top up a partially filled buffer first
        if self._buffered:
            take = min(BLOCK_BYTES - self._buffered, size)
            self._buffer[self._buffered:self._buffered + take] = view[:take]
            self._buffered += take
            pos = take
            if self._buffered < BLOCK_BYTES:
                return
            compress(self._h, self._buffer)
            self._buffered = 0

        # whole blocks straight from the input
        end = pos + (size - pos) // BLOCK_BYTES * BLOCK_BYTES
        for offset in range(pos, end, BLOCK_BYTES):
            compress(self._h, view, offset)

        rest = size - end
        self._buffer[:rest] = view[end:]
        self._buffered = rest

    def finalize(self, data=b"") -> bytes:
        """
        Pad, run the last compression(s) and return the digest.

        Args:
            data: Optional last chunk, fed through update() first

        Returns:
            bytes: The 32-byte digest

        Raises:
            InvalidStateTransition: If the state was already finalized
        """
        self._require_open("finalize")
        if data:
            self.update(data)

        final = padding_blocks(self._buffer[:self._buffered], self._byte_count)
        for offset in range(0, len(final), BLOCK_BYTES):
            compress(self._h, final, offset)

        self._buffered = 0
        self._phase = HashPhase.FINALIZED
        return serialize_digest(self._h)

    def copy(self) -> "Sha256State":
        # independent clone, e.g. to hash several messages sharing a prefix
        clone = Sha256State.__new__(Sha256State)
        clone._buffer = bytearray(self._buffer)
        clone._h = list(self._h)
        clone._buffered = self._buffered
        clone._byte_count = self._byte_count
        clone._phase = self._phase
        return clone

    def __repr__(self):
        return f"Sha256State(phase={self._phase}, byte_count={self._byte_count})"


def new(data=b"") -> Sha256State:
    return Sha256State(data)


def sha256(data) -> bytes:
    """One-shot SHA-256 of a contiguous byte sequence."""
    return RawSha256().finish(data)


def sha256_hex(data) -> str:
    return sha256(data).hex()
