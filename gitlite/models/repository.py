import contextlib
import logging
import os
import pathlib
import tempfile
import zlib
from os import PathLike

from gitlite.codec import compress, decompress
from gitlite.errors import CorruptObject, ObjectIOError
from gitlite.hashing import create_hash, validate_address
from gitlite.models.objects import GitObject, decode, serialize

__all__ = ["LooseObjectStore"]

logger = logging.getLogger(__name__)


class LooseObjectStore:
    """Individually compressed objects under ``<objects>/<xx>/<38 hex>``."""

    def __init__(
        self,
        objects_folder: PathLike | str,
        *,
        compression_level: int = zlib.Z_DEFAULT_COMPRESSION,
    ):
        self.objects_folder = pathlib.Path(objects_folder)
        self.compression_level = compression_level

    def path_for(self, address: str) -> pathlib.Path:
        address = validate_address(address)
        return self.objects_folder / address[:2] / address[2:]

    def contains(self, address: str) -> bool:
        return self.path_for(address).is_file()

    def read(self, address: str) -> bytes:
        path = self.path_for(address)
        try:
            with path.open("rb") as f:
                compressed_data = f.read()
        except FileNotFoundError as exc:
            raise ObjectIOError(f"Not a valid object name {address}") from exc
        except OSError as exc:
            raise ObjectIOError(f"could not read {path}: {exc.strerror}") from exc
        return decompress(compressed_data)

    def write(self, address: str, plaintext: bytes) -> None:
        path = self.path_for(address)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            compressed_data = compress(plaintext, level=self.compression_level)
            # Concurrent writers of the same address each rename a complete file.
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix="tmp_obj_")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(compressed_data)
                os.replace(tmp_name, path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise ObjectIOError(f"could not write {path}: {exc.strerror}") from exc
        logger.debug("Stored object %s (%d bytes)", address, len(plaintext))

    def store(self, obj: GitObject) -> str:
        plaintext = serialize(obj)
        address = create_hash(plaintext)
        self.write(address, plaintext)
        return address

    def load(self, address: str, *, verify: bool = True) -> GitObject:
        plaintext = self.read(address)
        if verify and create_hash(plaintext) != validate_address(address):
            raise CorruptObject(f"object {address} does not match its contents")
        obj = decode(plaintext)
        logger.debug("Loaded %s %s (%d bytes)", obj.type, address, obj.length)
        return obj
