"""
Alea PRNG used for every random draw of a city generation run.

Based on Johannes Baagøe's Alea algorithm. A run owns one generator seeded
from the run seed; per-cell work draws from sub-generators seeded from the
run seed plus the cell coordinates, so results never depend on scheduling.
"""

import math


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class AleaPRNG:
    """
    Alea PRNG seeded from one or more string/number arguments.

    Passing an iterable seeds from every element in turn, which is how
    sub-generators mix the run seed with cell coordinates.
    """

    def __init__(self, seed):
        """Initialize with seed string, number or iterable of them."""
        self.call_count = 0

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            args = list(seed)
        else:
            args = [seed]

        mash_n = 0xEFC8249D

        def mash(data):
            nonlocal mash_n
            data = str(data)
            for char in data:
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000  # 2^32
            return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for arg in args:
            self.s0 -= mash(arg)
            if self.s0 < 0:
                self.s0 += 1
            self.s1 -= mash(arg)
            if self.s1 < 0:
                self.s1 += 1
            self.s2 -= mash(arg)
            if self.s2 < 0:
                self.s2 += 1

    def random(self):
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def randint(self, min_val, max_val):
        """
        Integer in [ceil(min_val), floor(max_val)], both inclusive.

        Fractional bounds are pulled inwards, so a draw between 2.5 and 7.5
        yields 3..7.
        """
        low = math.ceil(min_val)
        high = math.floor(max_val)
        if high < low:
            raise ValueError(f"Empty integer range [{min_val}, {max_val}]")
        return int(self.random() * (high - low + 1)) + low
