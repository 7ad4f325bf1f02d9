"""
Fixed-capacity scratch buffer used as the JPEG encode destination.

Unlike io.BytesIO it never grows: a write that does not fit raises
CapacityExceeded before anything is copied, so an oversized encode is
abandoned as soon as it crosses the budget.
"""

import io

from ...exceptions import CapacityExceeded


class ScratchBuffer(io.RawIOBase):
    """Preallocated byte region with a write cursor (cursor <= capacity)."""

    def __init__(self, capacity: int):
        super().__init__()
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self._data = bytearray(capacity)
        self._pos = 0

    @property
    def capacity(self) -> int:
        return len(self._data)

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        view = memoryview(b).cast("B")
        size = view.nbytes
        if self.capacity - self._pos < size:
            raise CapacityExceeded(self.capacity, self._pos + size)
        self._data[self._pos : self._pos + size] = view
        self._pos += size
        return size

    def tell(self) -> int:
        return self._pos

    def reset(self) -> None:
        """Rewind the cursor for the next attempt. The storage is kept."""
        self._pos = 0

    def getvalue(self) -> bytes:
        return bytes(self._data[: self._pos])
