"""Seeded 32-bit PRNG (mulberry32).

State is a plain unsigned 32-bit integer; every call advances it by a fixed
odd constant and scrambles it with multiply/xorshift rounds, so the same seed
always yields the same sequence.
"""

_MASK = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


class Prng:
    """Callable float generator in ``[0, 1)``. One instance per generation run."""

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK

    def __call__(self) -> float:
        self._state = (self._state + _INCREMENT) & _MASK
        t = self._state
        x = _imul(t ^ (t >> 15), 1 | t)
        x ^= (x + _imul(x ^ (x >> 7), 61 | x)) & _MASK
        return ((x ^ (x >> 14)) & _MASK) / _TWO_POW_32
