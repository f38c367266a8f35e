#!/usr/bin/env python3
"""
SHA-256 tests: known-answer vectors, chunking invariance, the hash state
machine and agreement with the library backends.
"""

import hashlib
import random
import sys

import pytest

from cryptoprims.core.errors import InvalidStateTransition
from cryptoprims.sha256 import (
    BLOCK_BYTES,
    MAX_MESSAGE_BYTES,
    HashPhase,
    RawSha256,
    Sha256State,
    Sha256Implementation,
    SHA256_IMPLEMENTATIONS,
    new,
    sha256,
    sha256_hex,
)

KNOWN_ANSWERS = [
    (b"", "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
    (b"abc", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
    (b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
     "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1"),
    (b"The quick brown fox jumps over the lazy dog",
     "d7a8fbb307d7809469ca9abcb0082e4f8d5651e46d3cdb762d02d0bf37c9e592"),
]

LOREM = (
    b"Lorem ipsum dolor sit amet, consectetur adipisicing elit, sed do "
    b"eiusmod tempor incididunt ut labore et dolore magna aliqua. Ut enim ad "
    b"minim veniam, quis nostrud exercitation ullamco laboris nisi ut aliquip "
    b"ex ea commodo consequat. Duis aute irure dolor in reprehenderit in "
    b"voluptate velit esse cillum dolore eu fugiat nulla pariatur. Excepteur "
    b"sint occaecat cupidatat non proident, sunt in culpa qui officia "
    b"deserunt mollit anim id est laborum."
)


def _random_bytes(size, seed):
    rng = random.Random(seed)
    return bytes(rng.getrandbits(8) for _ in range(size))


@pytest.mark.parametrize("message, expected", KNOWN_ANSWERS)
def test_known_answer_vectors(message, expected):
    assert sha256(message).hex() == expected
    assert sha256_hex(message) == expected

    state = Sha256State()
    state.update(message)
    assert state.finalize().hex() == expected


def test_million_a():
    state = Sha256State()
    chunk = b"a" * 1000
    for _ in range(1000):
        state.update(chunk)
    assert state.finalize().hex() == "cdc76e5c9914fb9281a1c7e284d73e67f1809a48a497200e046d39ccc7112cd0"


@pytest.mark.parametrize("length", list(range(0, 130)) + [1000, 4096, 4097])
def test_padding_boundaries_match_hashlib(length):
    message = _random_bytes(length, length)
    assert sha256(message) == hashlib.sha256(message).digest()
    assert new(message).finalize() == hashlib.sha256(message).digest()


@pytest.mark.parametrize("chunk_size", [1, 3, 55, 56, 63, 64, 65, 127, 128, 200])
def test_chunking_invariance_fixed_sizes(chunk_size):
    message = LOREM * 3
    state = Sha256State()
    for i in range(0, len(message), chunk_size):
        state.update(message[i:i + chunk_size])
    assert state.finalize() == sha256(message)


def test_chunking_invariance_random_splits():
    message = _random_bytes(777, 1)
    expected = hashlib.sha256(message).digest()
    rng = random.Random(2)
    for _ in range(25):
        state = Sha256State()
        pos = 0
        while pos < len(message):
            step = rng.randint(0, 150)
            state.update(message[pos:pos + step])
            pos += step
        assert state.finalize() == expected


def test_empty_updates_have_no_effect():
    state = Sha256State()
    state.update(b"")
    state.update(b"abc")
    state.update(b"")
    assert state.finalize() == sha256(b"abc")


def test_finalize_with_trailing_data():
    data_1 = b"Here is a piece of text that is not exactly 64 characters."
    data_2 = b"Here is another piece of text that's not contiguous in memory with the other one."
    data_3 = b"Have a little more text!"

    state = Sha256State()
    state.update(data_1)
    state.update(data_2)
    hash1 = state.finalize(data_3)

    state = Sha256State()
    state.update(data_1)
    state.update(data_2)
    state.update(data_3)
    hash2 = state.finalize(b"")

    assert hash1 == hash2 == hashlib.sha256(data_1 + data_2 + data_3).digest()


def test_accepts_bytearray_and_memoryview():
    message = bytearray(LOREM)
    state = Sha256State()
    state.update(memoryview(message)[:100])
    state.update(message[100:])
    assert state.finalize() == hashlib.sha256(LOREM).digest()


def test_rejects_text():
    state = Sha256State()
    with pytest.raises(TypeError):
        state.update("abc")
    with pytest.raises(TypeError):
        sha256("abc")


def test_phase_transitions():
    state = Sha256State()
    assert state.phase is HashPhase.FRESH
    state.update(b"abc")
    assert state.phase is HashPhase.ACCUMULATING
    assert state.byte_count == 3
    assert state.buffered_bytes == 3
    state.finalize()
    assert state.phase is HashPhase.FINALIZED


def test_update_after_finalize_rejected():
    state = Sha256State(b"abc")
    state.finalize()
    with pytest.raises(InvalidStateTransition) as excinfo:
        state.update(b"more")
    assert excinfo.value.operation == "update"
    assert excinfo.value.phase is HashPhase.FINALIZED


def test_finalize_twice_rejected():
    state = Sha256State()
    state.finalize()
    with pytest.raises(InvalidStateTransition):
        state.finalize()


def test_reset_behaves_like_fresh():
    state = Sha256State()
    state.update(LOREM)
    state.finalize()
    state.reset()
    assert state.phase is HashPhase.FRESH
    assert state.byte_count == 0
    assert state.buffered_bytes == 0
    state.update(b"abc")
    assert state.finalize() == Sha256State(b"abc").finalize()

    # reset in the middle of accumulating discards everything
    state.reset()
    state.update(b"junk" * 20)
    state.reset()
    assert state.finalize() == sha256(b"")


def test_copy_is_independent():
    prefix = Sha256State(b"shared prefix ")
    first = prefix.copy()
    second = prefix.copy()
    first.update(b"one")
    second.update(b"two")
    assert first.finalize() == sha256(b"shared prefix one")
    assert second.finalize() == sha256(b"shared prefix two")
    assert prefix.phase is HashPhase.ACCUMULATING
    assert prefix.finalize() == sha256(b"shared prefix ")


def test_length_limit():
    state = Sha256State()
    state._byte_count = MAX_MESSAGE_BYTES
    with pytest.raises(OverflowError):
        state.update(b"a")


def test_repr_hides_data():
    state = Sha256State(b"secret")
    assert "secret" not in repr(state)


def test_raw_hasher_blocks_and_tail():
    raw = RawSha256()
    raw.update(LOREM[:BLOCK_BYTES])
    # more than one block at a time is fine
    raw.update(LOREM[BLOCK_BYTES:BLOCK_BYTES * 3])
    raw.update(b"")
    assert raw.byte_count == BLOCK_BYTES * 3
    assert raw.finish(LOREM[BLOCK_BYTES * 3:]) == hashlib.sha256(LOREM).digest()
    assert raw.phase is HashPhase.FINALIZED


def test_raw_hasher_finish_splits_whole_blocks():
    message = _random_bytes(BLOCK_BYTES * 2 + 10, 9)
    assert RawSha256().finish(message) == hashlib.sha256(message).digest()


def test_raw_hasher_rejects_partial_blocks():
    raw = RawSha256()
    with pytest.raises(ValueError):
        raw.update(b"x" * 63)


def test_raw_hasher_single_use():
    raw = RawSha256()
    raw.finish(b"abc")
    with pytest.raises(InvalidStateTransition):
        raw.update(bytes(BLOCK_BYTES))
    with pytest.raises(InvalidStateTransition):
        raw.finish()
    raw.reset()
    assert raw.finish(b"abc") == sha256(b"abc")


@pytest.mark.parametrize("backend", ["custom", "pycryptodome", "cryptography", "hashlib"])
def test_backends_agree(backend):
    impl = Sha256Implementation(backend=backend)
    assert impl.is_custom == (backend == "custom")
    assert impl.hash(LOREM) == hashlib.sha256(LOREM).digest()
    chunks = [LOREM[i:i + 37] for i in range(0, len(LOREM), 37)]
    assert impl.hash_chunks(chunks) == hashlib.sha256(LOREM).digest()


def test_unknown_backend_rejected():
    with pytest.raises(ValueError):
        Sha256Implementation(backend="md5")


def test_registered_variants():
    for name in ("sha256", "sha256_custom", "sha256_pycryptodome", "sha256_cryptography", "sha256_hashlib"):
        impl = SHA256_IMPLEMENTATIONS[name]()
        assert impl.hash(b"abc") == sha256(b"abc")


def test_copy_of_finalized_state_stays_finalized():
    state = Sha256State(b"abc")
    digest = state.finalize()
    clone = state.copy()
    assert clone.phase is HashPhase.FINALIZED
    with pytest.raises(InvalidStateTransition):
        clone.update(b"more")
    clone.reset()
    assert clone.finalize(b"abc") == digest


def test_raw_hasher_copy_is_independent():
    prefix = RawSha256()
    prefix.update(LOREM[:BLOCK_BYTES])
    first = prefix.copy()
    second = prefix.copy()
    assert first.finish(b"one") == sha256(LOREM[:BLOCK_BYTES] + b"one")
    assert second.finish(b"two") == sha256(LOREM[:BLOCK_BYTES] + b"two")
    assert prefix.phase is HashPhase.ACCUMULATING
    assert prefix.byte_count == BLOCK_BYTES


def test_strided_memoryview_rejected():
    strided = memoryview(LOREM)[::2]
    with pytest.raises(TypeError, match="C-contiguous"):
        Sha256State().update(strided)
    with pytest.raises(TypeError, match="C-contiguous"):
        sha256(strided)
    # a copy of the view is fine
    assert sha256(bytes(strided)) == hashlib.sha256(LOREM[::2]).digest()


def test_custom_backend_needs_no_library_backends(monkeypatch):
    # a None entry in sys.modules makes the import fail
    monkeypatch.setitem(sys.modules, "Crypto.Hash", None)
    monkeypatch.setitem(sys.modules, "cryptography.hazmat.primitives", None)
    assert Sha256Implementation(backend="custom").hash(b"abc") == sha256(b"abc")
    assert Sha256Implementation(backend="hashlib").hash(b"abc") == sha256(b"abc")
    with pytest.raises(ImportError):
        Sha256Implementation(backend="pycryptodome").hash(b"abc")
