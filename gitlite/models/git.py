import logging
import pathlib
import sys
from os import PathLike

from gitlite.config import Config
from gitlite.errors import InvalidArgs, ObjectIOError
from gitlite.models.objects import (
    Blob,
    Entry,
    GitObject,
    Tree,
    address_of,
    blob_from_path,
    tree_from_directory,
)
from gitlite.models.repository import LooseObjectStore

__all__ = ["Git"]

logger = logging.getLogger(__name__)


def format_entry(entry: Entry) -> str:
    return f"{entry.mode:06o} {entry.type} {entry.address}\t{entry.name}"


class Git:
    def __init__(self, config: Config | None = None):
        self.config = config or Config()
        self.git_folder = self.config.git_dir
        self.objects_folder = self.config.objects_folder
        self.store = LooseObjectStore(
            self.objects_folder, compression_level=self.config.compression_level
        )

    def init_repo(self):
        try:
            for _dir in [self.git_folder, self.objects_folder, self.git_folder / "refs"]:
                _dir.mkdir(exist_ok=True, parents=True)
            head = self.git_folder / "HEAD"
            if not head.exists():
                head.write_text(f"ref: {self.config.head_ref}\n")
        except OSError as exc:
            raise ObjectIOError(
                f"could not initialize {self.git_folder}: {exc.strerror}"
            ) from exc
        sys.stdout.write(
            f"Initialized empty repository in {self.git_folder.resolve()}\n"
        )

    def cat_file(
        self,
        hash_: str,
        *,
        show_type: bool = False,
        show_size: bool = False,
        pretty_print: bool = False,
    ) -> GitObject:
        obj = self.store.load(hash_)
        if show_type:
            sys.stdout.write(f"{obj.type}\n")
        if show_size:
            sys.stdout.write(f"{obj.length}\n")
        if pretty_print:
            match obj:
                case Blob(content=content):
                    sys.stdout.flush()
                    sys.stdout.buffer.write(content)
                    sys.stdout.buffer.flush()
                case Tree(entries=entries):
                    for entry in entries:
                        sys.stdout.write(format_entry(entry) + "\n")
        return obj

    def hash_object(
        self,
        path: PathLike | str,
        *,
        write: bool = False,
        pretty_print: bool = True,
    ) -> str:
        blob = blob_from_path(path)
        if write:
            hash_value = self.store.store(blob)
        else:
            hash_value = address_of(blob)
        if pretty_print:
            sys.stdout.write(hash_value + "\n")
        return hash_value

    def ls_tree(self, hash_value: str, *, name_only: bool = False) -> list[Entry]:
        obj = self.store.load(hash_value)
        if not isinstance(obj, Tree):
            raise InvalidArgs(f"not a tree object: {hash_value}")

        entries = list(obj.entries)
        for entry in entries:
            if name_only:
                sys.stdout.write(entry.name + "\n")
            else:
                sys.stdout.write(format_entry(entry) + "\n")
        return entries

    def write_tree(
        self,
        working_directory: PathLike | None = None,
        *,
        pretty_print: bool = True,
    ) -> str:
        dir_path = pathlib.Path(working_directory or self.config.work_dir)
        tree = tree_from_directory(
            dir_path,
            ignore=self.config.tree_ignore,
            sort_entries=self.config.sort_entries,
            sink=self.store.store,
        )
        tree_hash = self.store.store(tree)
        logger.debug("Wrote tree %s for %s", tree_hash, dir_path)
        if pretty_print:
            sys.stdout.write(tree_hash + "\n")
        return tree_hash
