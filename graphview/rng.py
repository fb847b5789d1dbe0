"""Small deterministic xorshift64 pseudo-random generator."""

from __future__ import annotations

import struct

_MASK64 = 0xFFFFFFFFFFFFFFFF
_MASK32 = 0xFFFFFFFF
_ZERO_REPLACEMENT = 0x9E3779B97F4A7C15
_U32_MAX_AS_F32 = 4294967296.0


def _to_f32(value: float) -> float:
    """Round a float to the nearest single-precision value."""
    return struct.unpack("f", struct.pack("f", value))[0]


class XorShift:
    """Xorshift64 generator; a zero state is replaced by a fixed constant."""

    def __init__(self, seed: int) -> None:
        self.state = seed & _MASK64

    def next_u64(self) -> int:
        """Advance the state and return it as an unsigned 64-bit integer."""
        x = self.state or _ZERO_REPLACEMENT
        x ^= (x << 13) & _MASK64
        x ^= x >> 7
        x ^= (x << 17) & _MASK64
        self.state = x
        return x

    def next_float(self) -> float:
        """Return a single-precision value in the closed range [0, 1]."""
        bits = (self.next_u64() >> 11) & _MASK32
        return _to_f32(float(bits)) / _U32_MAX_AS_F32