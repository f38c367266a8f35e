import hashlib
import logging

from .sha256_constants import BLOCK_BYTES, DIGEST_BYTES
from .sha256_state import Sha256State

# setup logging
logger = logging.getLogger("CryptoPrims")

# dictionary to track implementations
SHA256_IMPLEMENTATIONS = {}

BACKENDS = ("custom", "pycryptodome", "cryptography", "hashlib")

# local implementation of register_implementation to avoid circular imports
def register_sha256_variant(name):
    # register a sha256 implementation variant
    def decorator(impl_class):
        SHA256_IMPLEMENTATIONS[name] = impl_class
        return impl_class
    return decorator

@register_sha256_variant("sha256")
class Sha256Implementation:
    # sha256 with the custom state machine or one of the library backends

    kind = "hash"

    def __init__(self, backend="custom", **kwargs):
        if backend not in BACKENDS:
            raise ValueError(f"Unsupported SHA-256 backend: {backend}. Choose from {', '.join(BACKENDS)}")
        self.backend = backend
        self.is_custom = backend == "custom"
        self.name = "SHA-256"
        self.description = f"SHA-256 ({backend})"
        self.block_size_bytes = BLOCK_BYTES
        self.digest_size_bytes = DIGEST_BYTES
        self.num_rounds = 64

    def _new_hasher(self):
        # every backend exposes update(); only the way of finishing differs.
        # library backends are imported here so the primitives load without them
        if self.backend == "custom":
            return Sha256State()
        if self.backend == "pycryptodome":
            from Crypto.Hash import SHA256 as CryptoSHA256
            return CryptoSHA256.new()
        if self.backend == "cryptography":
            from cryptography.hazmat.primitives import hashes
            return hashes.Hash(hashes.SHA256())
        return hashlib.sha256()

    def _finish(self, hasher):
        if self.backend in ("custom", "cryptography"):
            return hasher.finalize()
        return hasher.digest()

    def hash(self, data):
        # digest a contiguous byte sequence
        hasher = self._new_hasher()
        hasher.update(data)
        return self._finish(hasher)

    def hash_chunks(self, chunks):
        # digest the concatenation of an iterable of chunks
        hasher = self._new_hasher()
        for chunk in chunks:
            hasher.update(chunk)
        return self._finish(hasher)


def create_custom_sha256_implementation():
    # create the custom sha256 implementation
    return Sha256Implementation(backend="custom")


def create_stdlib_sha256_implementation(backend="pycryptodome"):
    # create a library-backed sha256 implementation
    return Sha256Implementation(backend=backend)


def register_all_sha256_variants():
    # one entry per backend
    SHA256_IMPLEMENTATIONS["sha256_custom"] = lambda **kwargs: create_custom_sha256_implementation()
    for backend in BACKENDS[1:]:
        SHA256_IMPLEMENTATIONS[f"sha256_{backend}"] = lambda b=backend, **kwargs: create_stdlib_sha256_implementation(b)
    logger.debug(f"SHA-256 variants: {', '.join(SHA256_IMPLEMENTATIONS.keys())}")
    return SHA256_IMPLEMENTATIONS
