"""Growable byte buffer backing string-valued nodes."""

from __future__ import annotations


class StringBuffer:
    """A NUL-terminated byte buffer with a fixed capacity.

    The capacity only ever grows.  Several values may hold the same
    ``StringBuffer`` object; growth through any of them is seen by all.
    """

    __slots__ = ("_data",)

    def __init__(self, capacity: int) -> None:
        self._data = bytearray(capacity)

    @property
    def capacity(self) -> int:
        return len(self._data)

    def grow(self, capacity: int) -> None:
        """Extend the buffer to *capacity* bytes, keeping its contents."""
        if capacity > len(self._data):
            self._data.extend(bytes(capacity - len(self._data)))

    def read(self, length: int) -> bytes:
        return bytes(self._data[:length])

    def write(self, data: bytes, offset: int = 0) -> None:
        """Copy *data* in at *offset* and terminate it.

        The caller must have grown the buffer to hold the data and its
        terminator.
        """
        end = offset + len(data)
        self._data[offset:end] = data
        self._data[end] = 0

    def __repr__(self) -> str:
        text = bytes(self._data).split(b"\x00", 1)[0]
        return f"StringBuffer(capacity={self.capacity}, text={text!r})"
