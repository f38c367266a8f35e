"""
CryptoPrims - Error Types
The only failures the primitives can report. Both are raised synchronously
to the immediate caller and never logged or swallowed by the library.
"""


class CryptoPrimitiveError(Exception):
    """Base class for all errors raised by the primitives."""


class InvalidKeyLength(CryptoPrimitiveError, ValueError):
    """Raised when a Twofish key schedule is built from a key of the wrong size."""

    VALID_LENGTHS = (16, 24, 32)

    def __init__(self, length):
        self.length = length
        super().__init__(
            f"Invalid key size: {length} bytes ({length * 8} bits). "
            f"Must be 16, 24, or 32 bytes (128, 192, or 256 bits)."
        )


class InvalidStateTransition(CryptoPrimitiveError, RuntimeError):
    """Raised when a finalized hash state is used without a reset."""

    def __init__(self, operation, phase):
        self.operation = operation
        self.phase = phase
        super().__init__(f"Cannot {operation}() a hash state in phase {phase}; call reset() first")
