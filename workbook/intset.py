"""A set of small non-negative integers backed by a bit vector."""

from __future__ import annotations

from typing import Iterator

_WORD_BITS = 64


class IntSet:
    """A set of small non-negative integers. A new set is empty."""

    __slots__ = ("_words",)

    def __init__(self) -> None:
        self._words: list[int] = []

    @property
    def words(self) -> tuple[int, ...]:
        """The 64-bit words of the underlying bit vector."""
        return tuple(self._words)

    def has(self, x: int) -> bool:
        """Report whether the set contains x."""
        if x < 0:
            return False
        word, bit = divmod(x, _WORD_BITS)
        return word < len(self._words) and bool(self._words[word] >> bit & 1)

    def add(self, x: int) -> None:
        """Add the non-negative value x to the set."""
        if x < 0:
            raise ValueError(f"IntSet holds non-negative values only: {x}")
        word, bit = divmod(x, _WORD_BITS)
        if word >= len(self._words):
            self._words.extend([0] * (word + 1 - len(self._words)))
        self._words[word] |= 1 << bit

    def union_with(self, other: IntSet) -> None:
        """Set this set to the union of itself and other."""
        shared = min(len(self._words), len(other._words))
        for position in range(shared):
            self._words[position] |= other._words[position]
        self._words.extend(other._words[shared:])

    def __contains__(self, x: object) -> bool:
        return isinstance(x, int) and self.has(x)

    def __iter__(self) -> Iterator[int]:
        for position, word in enumerate(self._words):
            if not word:
                continue
            for bit in range(_WORD_BITS):
                if word >> bit & 1:
                    yield _WORD_BITS * position + bit

    def __str__(self) -> str:
        return "{" + " ".join(map(str, self)) + "}"

    def __repr__(self) -> str:
        return f"IntSet({self})"