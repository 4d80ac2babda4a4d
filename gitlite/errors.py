from enum import StrEnum, auto

__all__ = [
    "ErrorKind",
    "GitError",
    "ObjectIOError",
    "CorruptFile",
    "CorruptObject",
    "InvalidAddress",
    "InvalidArgs",
    "UnreadableName",
]


class ErrorKind(StrEnum):
    IO = auto()
    CORRUPT_FILE = auto()
    CORRUPT_OBJECT = auto()
    INVALID_ADDRESS = auto()
    INVALID_ARGS = auto()
    UNREADABLE_NAME = auto()


class GitError(Exception):
    """Base class for every failure raised by the object store.

    Callers branch on ``kind`` rather than on the message text.
    """

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ObjectIOError(GitError, OSError):
    kind = ErrorKind.IO


class CorruptFile(GitError):
    kind = ErrorKind.CORRUPT_FILE

    def __init__(self, message: str = "Could not read corrupted file"):
        super().__init__(message)


class CorruptObject(GitError):
    kind = ErrorKind.CORRUPT_OBJECT


class InvalidAddress(GitError, ValueError):
    kind = ErrorKind.INVALID_ADDRESS


class InvalidArgs(GitError):
    kind = ErrorKind.INVALID_ARGS


class UnreadableName(GitError):
    kind = ErrorKind.UNREADABLE_NAME
