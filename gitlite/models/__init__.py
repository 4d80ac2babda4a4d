from gitlite.models.git import Git
from gitlite.models.objects import (
    Blob,
    Entry,
    FileMode,
    GitObject,
    ObjectType,
    Tree,
    address_of,
    blob_from_path,
    decode,
    encode_entry,
    serialize,
    tree_from_directory,
)
from gitlite.models.repository import LooseObjectStore

__all__ = [
    "Git",
    "Blob",
    "Entry",
    "FileMode",
    "GitObject",
    "ObjectType",
    "Tree",
    "LooseObjectStore",
    "address_of",
    "blob_from_path",
    "decode",
    "encode_entry",
    "serialize",
    "tree_from_directory",
]
