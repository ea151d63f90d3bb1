# gridstar/rng.py
# String-seeded PRNG: xmur3 hash of the seed feeds a mulberry32 stream.
# Pure 32-bit integer arithmetic, so sequences match across platforms.
from __future__ import annotations
from dataclasses import dataclass

_M32 = 0xFFFFFFFF

def _imul(a: int, b: int) -> int:
    return (a * b) & _M32

def hash_seed(seed: str) -> int:
    """xmur3: avalanche a string into one 32-bit seed."""
    h = (1779033703 ^ len(seed)) & _M32
    for ch in seed:
        h = _imul(h ^ ord(ch), 3432918353)
        h = ((h << 13) & _M32) | (h >> 19)
    h = _imul(h ^ (h >> 16), 2246822507)
    h = _imul(h ^ (h >> 13), 3266489909)
    return (h ^ (h >> 16)) & _M32

@dataclass
class SeededRandom:
    state: int

    @classmethod
    def from_seed(cls, seed: str) -> "SeededRandom":
        return cls(hash_seed(seed))

    def next_u32(self) -> int:
        self.state = (self.state + 0x6D2B79F5) & _M32
        a = self.state
        t = _imul(a ^ (a >> 15), 1 | a)
        t ^= (t + _imul(t ^ (t >> 7), 61 | t)) & _M32
        return (t ^ (t >> 14)) & _M32

    def random(self) -> float:
        return self.next_u32() / 2**32

    def __iter__(self):
        return self

    def __next__(self) -> float:
        return self.random()
