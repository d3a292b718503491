"""A byte-counting writer and a multi-valued string mapping."""

from __future__ import annotations

from typing import Union


class ByteCounter:
    """A writable file-like object that only counts the bytes written."""

    def __init__(self) -> None:
        self.count = 0

    def write(self, data: Union[str, bytes, bytearray]) -> int:
        """Count data (text is counted as UTF-8) and return its length."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.count += len(data)
        return len(data)

    def __int__(self) -> int:
        return self.count

    def __str__(self) -> str:
        return str(self.count)

    def __repr__(self) -> str:
        return f"ByteCounter({self.count})"


class Values(dict):
    """Maps a string key to a list of values."""

    def get(self, key: str) -> str:
        """Return the first value for key, or "" if there are none."""
        values = super().get(key)
        return values[0] if values else ""

    def add(self, key: str, value: str) -> None:
        """Append value to the values for key."""
        self.setdefault(key, []).append(value)