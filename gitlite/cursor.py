from gitlite.errors import CorruptObject

__all__ = ["ByteCursor"]


class ByteCursor:
    """Forward-only scanner over an encoded object body."""

    def __init__(self, data: bytes, *, offset: int = 0):
        self.data = bytes(data)
        self.offset = offset

    def __len__(self):
        return len(self.data) - self.offset

    @property
    def exhausted(self) -> bool:
        return self.offset >= len(self.data)

    def take_until(self, delimiter: bytes) -> bytes:
        """Return the bytes up to ``delimiter`` and step past it."""
        index = self.data.find(delimiter, self.offset)
        if index == -1:
            raise CorruptObject(
                f"missing {delimiter!r} delimiter at offset {self.offset}"
            )
        chunk = self.data[self.offset : index]
        self.offset = index + len(delimiter)
        return chunk

    def take(self, size: int) -> bytes:
        if len(self) < size:
            raise CorruptObject(
                f"expected {size} bytes at offset {self.offset}, got {len(self)}"
            )
        chunk = self.data[self.offset : self.offset + size]
        self.offset += size
        return chunk

    def rest(self) -> bytes:
        chunk = self.data[self.offset :]
        self.offset = len(self.data)
        return chunk
