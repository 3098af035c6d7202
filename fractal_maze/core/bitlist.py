from array import array
from typing import Iterable, Iterator

class BitList:
    """
    Fixed-length sequence of booleans packed 64 per word.
    Bit i lives in word i // 64 at position i % 64.
    """
    WORD_BITS = 64
    FULL_WORD = (1 << 64) - 1

    __slots__ = ('_count', '_words')

    def __init__(self, count: int, default: bool = False):
        if count < 0:
            raise ValueError(f"Count {count} must be at least 0")
        self._count = count
        fill = self.FULL_WORD if default else 0
        self._words = array('Q', [fill] * self._word_count(count))
        self._mask_tail()

    @staticmethod
    def _word_count(count: int) -> int:
        return (count + 63) // 64

    @classmethod
    def from_words(cls, count: int, words: Iterable[int]) -> "BitList":
        bits = cls(count)
        words = array('Q', words)
        if len(words) != len(bits._words):
            raise ValueError(f"Expected {len(bits._words)} words for {count} bits, got {len(words)}")
        bits._words = words
        bits._mask_tail()
        return bits

    def _mask_tail(self):
        # Keep bits past the end clear so word-level comparisons stay exact
        used = self._count % 64
        if used:
            self._words[-1] &= (1 << used) - 1

    def _check(self, idx: int):
        if not isinstance(idx, int):
            raise TypeError(f"BitList indices must be integers, not {type(idx).__name__}")
        if idx < 0 or idx >= self._count:
            raise IndexError(f"Index {idx} not within range [0, {self._count})")

    @property
    def words(self) -> array:
        return array('Q', self._words)

    def __len__(self) -> int:
        return self._count

    def __getitem__(self, idx: int) -> bool:
        self._check(idx)
        return (self._words[idx >> 6] >> (idx & 63)) & 1 == 1

    def __setitem__(self, idx: int, value: bool):
        self._check(idx)
        major = idx >> 6
        if value:
            self._words[major] |= 1 << (idx & 63)
        else:
            self._words[major] &= ~(1 << (idx & 63)) & self.FULL_WORD

    def __iter__(self) -> Iterator[bool]:
        for i in range(self._count):
            yield (self._words[i >> 6] >> (i & 63)) & 1 == 1

    def __contains__(self, value) -> bool:
        return self.find(bool(value)) != -1

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitList):
            return NotImplemented
        return self._count == other._count and self._words == other._words

    def __repr__(self) -> str:
        return f"BitList(count={self._count})"

    def copy(self) -> "BitList":
        bits = BitList(0)
        bits._count = self._count
        bits._words = array('Q', self._words)
        return bits

    def clear(self):
        for i in range(len(self._words)):
            self._words[i] = 0

    def find(self, value: bool) -> int:
        """Index of the first flag equal to value, or -1."""
        skip = 0 if value else self.FULL_WORD
        for major, word in enumerate(self._words):
            if word == skip:
                continue
            start = major * 64
            for i in range(start, min(start + 64, self._count)):
                if ((word >> (i - start)) & 1 == 1) == value:
                    return i
        return -1
