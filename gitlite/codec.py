import zlib

from gitlite.errors import CorruptFile

__all__ = ["compress", "decompress"]


def compress(data: bytes, *, level: int = zlib.Z_DEFAULT_COMPRESSION) -> bytes:
    return zlib.compress(data, level)


def decompress(data: bytes) -> bytes:
    try:
        return zlib.decompress(data)
    except zlib.error as exc:
        raise CorruptFile(f"Could not read corrupted file: {exc}") from exc
