import fnmatch
import logging
import os
import pathlib
import re
import stat
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum, auto
from os import PathLike
from typing import Callable, ClassVar, Iterable

from gitlite.config import DEFAULT_IGNORE_PATTERNS
from gitlite.cursor import ByteCursor
from gitlite.errors import CorruptObject, InvalidArgs, ObjectIOError, UnreadableName
from gitlite.hashing import RAW_ADDRESS_LENGTH, create_hash, to_binary, to_hex

__all__ = [
    "ObjectType",
    "FileMode",
    "Entry",
    "Blob",
    "Tree",
    "GitObject",
    "encode_entry",
    "serialize",
    "address_of",
    "decode",
    "blob_from_path",
    "tree_from_directory",
]

logger = logging.getLogger(__name__)

NULL_BYTE = b"\x00"
SPACE = b" "
OCTAL_REGEX = re.compile(rb"[0-7]+")


class ObjectType(StrEnum):
    BLOB = auto()
    TREE = auto()

    @classmethod
    def from_mode(cls, mode: int) -> "ObjectType":
        # Directory modes are the only ones whose octal form doesn't start with 1.
        return cls.BLOB if f"{mode:o}".startswith("1") else cls.TREE


class FileMode(IntEnum):
    REGULAR = 0o100644
    EXECUTABLE = 0o100755
    SYMLINK = 0o120000
    DIRECTORY = 0o40000

    @classmethod
    def from_stat(cls, st_mode: int) -> "FileMode | None":
        """Return the tree mode for ``st_mode``, or ``None`` for special files."""
        if stat.S_ISDIR(st_mode):
            return cls.DIRECTORY
        if stat.S_ISLNK(st_mode):
            return cls.SYMLINK
        if not stat.S_ISREG(st_mode):
            return None
        if st_mode & 0o111:
            return cls.EXECUTABLE
        return cls.REGULAR


@dataclass(frozen=True, kw_only=True)
class Entry:
    mode: int
    name: str
    address: str
    type: ObjectType | None = None
    # Octal text as stored, kept only when it differs from the canonical form.
    mode_text: str | None = None

    def __post_init__(self):
        if reason := invalid_name_reason(self.name):
            raise InvalidArgs(f"bad tree entry name {self.name!r}: {reason}")
        if self.type is None:
            object.__setattr__(self, "type", ObjectType.from_mode(self.mode))

    @property
    def raw_hash(self) -> bytes:
        return to_binary(self.address)


@dataclass(frozen=True, kw_only=True)
class Blob:
    type: ClassVar[ObjectType] = ObjectType.BLOB
    content: bytes = b""

    @property
    def length(self) -> int:
        return len(self.content)

    @property
    def body(self) -> bytes:
        return self.content


@dataclass(frozen=True, kw_only=True)
class Tree:
    type: ClassVar[ObjectType] = ObjectType.TREE
    entries: tuple[Entry, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "entries", tuple(self.entries))

    @property
    def length(self) -> int:
        return len(self.body)

    @property
    def body(self) -> bytes:
        return b"".join(encode_entry(entry) for entry in self.entries)


GitObject = Blob | Tree


def invalid_name_reason(name: str) -> str | None:
    if name in ("", ".", ".."):
        return "not a file name"
    if "/" in name:
        return "contains a path separator"
    if "\x00" in name:
        return "contains a NUL byte"
    return None


def encode_entry(entry: Entry) -> bytes:
    """Serialize a tree entry as ``<octal mode> <name>\\0<20 raw bytes>``."""
    mode_text = entry.mode_text or f"{entry.mode:o}"
    return f"{mode_text} {entry.name}".encode() + NULL_BYTE + entry.raw_hash


def serialize(obj: GitObject) -> bytes:
    body = obj.body
    return f"{obj.type} {len(body)}".encode() + NULL_BYTE + body


def address_of(obj: GitObject) -> str:
    return create_hash(serialize(obj))


def decode(data: bytes) -> GitObject:
    """Parse the inflated contents of a loose object.

    The expected layout is ``<type> <length>\\0<body>``. Blob bodies are
    returned verbatim, tree bodies are split into :class:`Entry` records.
    Anything that does not follow that grammar raises
    :class:`~gitlite.errors.CorruptObject`, including a declared length
    that differs from the actual body length.
    """
    cursor = ByteCursor(data)
    obj_type = cursor.take_until(SPACE)
    length = _parse_length(cursor.take_until(NULL_BYTE))
    if len(cursor) != length:
        raise CorruptObject(
            f"object declares {length} bytes but carries {len(cursor)}"
        )

    match obj_type:
        case b"blob":
            return Blob(content=cursor.rest())
        case b"tree":
            entries = []
            while not cursor.exhausted:
                entries.append(_decode_entry(cursor))
            return Tree(entries=entries)
        case _:
            raise CorruptObject(f"unknown object type {obj_type!r}")


def _parse_length(token: bytes) -> int:
    if not token.isdigit():
        raise CorruptObject(f"bad object length {token!r}")
    return int(token)


def _decode_entry(cursor: ByteCursor) -> Entry:
    mode_text = cursor.take_until(SPACE)
    if not OCTAL_REGEX.fullmatch(mode_text):
        raise CorruptObject(f"bad tree entry mode {mode_text!r}")
    mode = int(mode_text, 8)
    mode_text = mode_text.decode()
    raw_name = cursor.take_until(NULL_BYTE)
    try:
        name = raw_name.decode()
    except UnicodeDecodeError as exc:
        raise CorruptObject(f"undecodable tree entry name {raw_name!r}") from exc
    if reason := invalid_name_reason(name):
        raise CorruptObject(f"bad tree entry name {name!r}: {reason}")
    address = to_hex(cursor.take(RAW_ADDRESS_LENGTH))
    return Entry(
        mode=mode,
        name=name,
        address=address,
        mode_text=None if mode_text == f"{mode:o}" else mode_text,
    )


def blob_from_path(path: PathLike | str) -> Blob:
    path = pathlib.Path(path)
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise ObjectIOError(f"could not read {path}: {exc.strerror}") from exc
    return Blob(content=content)


def _blob_from_symlink(path: pathlib.Path) -> Blob:
    try:
        target = os.readlink(path)
    except OSError as exc:
        raise ObjectIOError(f"could not read link {path}: {exc.strerror}") from exc
    return Blob(content=os.fsencode(target))


def _is_ignored(name: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in patterns)


def tree_from_directory(
    working_directory: PathLike | str,
    *,
    ignore: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
    sort_entries: bool = False,
    sink: Callable[[GitObject], object] | None = None,
) -> Tree:
    """Build a tree from the immediate children of ``working_directory``.

    Subdirectories are built recursively. ``sink`` is called with every
    child object once it is built, so callers can persist descendants
    without walking the tree a second time.
    """
    dir_path = pathlib.Path(working_directory)
    ignore = frozenset(ignore)
    logger.debug("Reading directory %s", dir_path)

    try:
        with os.scandir(dir_path) as it:
            dir_entries = list(it)
    except OSError as exc:
        raise ObjectIOError(f"could not read {dir_path}: {exc.strerror}") from exc

    if sort_entries:
        dir_entries.sort(key=lambda dir_entry: dir_entry.name)

    entries = []
    for dir_entry in dir_entries:
        if _is_ignored(dir_entry.name, ignore):
            logger.debug("Skipping ignored entry %s", dir_entry.path)
            continue
        try:
            dir_entry.name.encode()
        except UnicodeEncodeError as exc:
            raise UnreadableName(
                f"file name is not valid text: {dir_entry.path!r}"
            ) from exc

        path = pathlib.Path(dir_entry.path)
        try:
            mode = FileMode.from_stat(dir_entry.stat(follow_symlinks=False).st_mode)
        except OSError as exc:
            raise ObjectIOError(f"could not stat {path}: {exc.strerror}") from exc
        if mode is None:
            logger.debug("Skipping special file %s", path)
            continue

        match mode:
            case FileMode.DIRECTORY:
                child = tree_from_directory(
                    path, ignore=ignore, sort_entries=sort_entries, sink=sink
                )
            case FileMode.SYMLINK:
                child = _blob_from_symlink(path)
            case _:
                child = blob_from_path(path)

        if sink is not None:
            sink(child)
        entry = Entry(
            mode=int(mode),
            name=dir_entry.name,
            address=address_of(child),
            type=child.type,
        )
        logger.debug("Created entry %s", entry)
        entries.append(entry)

    return Tree(entries=entries)
