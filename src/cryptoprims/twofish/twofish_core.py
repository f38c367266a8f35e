from cryptoprims.core.utils import MASK32, rotl32, rotr32, load_words_le, store_words_le
from .twofish_constants import BLOCK_BYTES
from .twofish_key_schedule import TwofishKeySchedule


def _g(sboxes, x):
    # key-dependent S-boxes plus MDS, one table lookup per byte
    return (sboxes[0][x & 0xFF] ^ sboxes[1][(x >> 8) & 0xFF]
            ^ sboxes[2][(x >> 16) & 0xFF] ^ sboxes[3][x >> 24])


def _f(sboxes, r0, r1, k0, k1):
    # round function: two g() calls combined with the pseudo-Hadamard transform
    t0 = _g(sboxes, r0)
    t1 = _g(sboxes, rotl32(r1, 8))
    return (t0 + t1 + k0) & MASK32, (t0 + (t1 << 1) + k1) & MASK32


def _check_block(block):
    if len(block) != BLOCK_BYTES:
        raise ValueError(f"Block must be exactly {BLOCK_BYTES} bytes, got {len(block)}")


def encrypt_block(schedule, block, out=None):
    """
    Encrypt a single 16-byte block.

    Args:
        schedule: TwofishKeySchedule
        block: 16 bytes of plaintext
        out: Optional writable 16-byte buffer (may be ``block`` itself)

    Returns:
        bytes: The ciphertext, or ``out`` when given
    """
    _check_block(block)
    s = schedule.s_boxes
    w = schedule.whitening_keys
    k = schedule.round_keys

    # whiten input
    r0, r1, r2, r3 = load_words_le(block)
    r0 ^= w[0]
    r1 ^= w[1]
    r2 ^= w[2]
    r3 ^= w[3]

    # two rounds per pass so the halves never need swapping
    for rnd in range(0, 32, 4):
        f0, f1 = _f(s, r0, r1, k[rnd], k[rnd + 1])
        r2 = rotr32(r2 ^ f0, 1)
        r3 = rotl32(r3, 1) ^ f1
        f0, f1 = _f(s, r2, r3, k[rnd + 2], k[rnd + 3])
        r0 = rotr32(r0 ^ f0, 1)
        r1 = rotl32(r1, 1) ^ f1

    # undo the last swap and whiten output
    return store_words_le(r2 ^ w[4], r3 ^ w[5], r0 ^ w[6], r1 ^ w[7], out)


def decrypt_block(schedule, block, out=None):
    """
    Decrypt a single 16-byte block.

    Args:
        schedule: TwofishKeySchedule
        block: 16 bytes of ciphertext
        out: Optional writable 16-byte buffer (may be ``block`` itself)

    Returns:
        bytes: The plaintext, or ``out`` when given
    """
    _check_block(block)
    s = schedule.s_boxes
    w = schedule.whitening_keys
    k = schedule.round_keys

    # output whitening comes off first
    r2, r3, r0, r1 = load_words_le(block)
    r2 ^= w[4]
    r3 ^= w[5]
    r0 ^= w[6]
    r1 ^= w[7]

    for rnd in range(28, -1, -4):
        f0, f1 = _f(s, r2, r3, k[rnd + 2], k[rnd + 3])
        r0 = rotl32(r0, 1) ^ f0
        r1 = rotr32(r1 ^ f1, 1)
        f0, f1 = _f(s, r0, r1, k[rnd], k[rnd + 1])
        r2 = rotl32(r2, 1) ^ f0
        r3 = rotr32(r3 ^ f1, 1)

    return store_words_le(r0 ^ w[0], r1 ^ w[1], r2 ^ w[2], r3 ^ w[3], out)


class TwofishCore:

    def __init__(self, key):
        # the schedule is built once and reused for every block
        self.schedule = TwofishKeySchedule(key)
        self.key_size = self.schedule.key_bits

    def encrypt_block(self, plaintext_block, out=None):
        return encrypt_block(self.schedule, plaintext_block, out)

    def decrypt_block(self, ciphertext_block, out=None):
        return decrypt_block(self.schedule, ciphertext_block, out)

    def __repr__(self):
        return f"TwofishCore(key_size={self.key_size})"
