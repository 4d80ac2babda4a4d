import os
import pathlib
import zlib
from dataclasses import dataclass, field, replace
from typing import Mapping

from gitlite.errors import InvalidArgs

__all__ = ["Config", "DEFAULT_IGNORE_PATTERNS"]

DEFAULT_IGNORE_PATTERNS = frozenset(
    {".git", "target", "__pycache__", ".pytest_cache", ".venv"}
)

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True, kw_only=True)
class Config:
    work_dir: pathlib.Path = field(default_factory=lambda: pathlib.Path("."))
    git_dir_name: str = ".git"
    ignore_patterns: frozenset[str] = DEFAULT_IGNORE_PATTERNS
    compression_level: int = zlib.Z_DEFAULT_COMPRESSION
    sort_entries: bool = False
    head_ref: str = "refs/heads/master"

    @property
    def git_dir(self) -> pathlib.Path:
        return pathlib.Path(self.work_dir) / self.git_dir_name

    @property
    def objects_folder(self) -> pathlib.Path:
        return self.git_dir / "objects"

    @property
    def tree_ignore(self) -> frozenset[str]:
        # The metadata directory is never part of a snapshot of its own work tree.
        git_dir = self.git_dir
        if git_dir.parent.resolve() != pathlib.Path(self.work_dir).resolve():
            return self.ignore_patterns
        return self.ignore_patterns | {git_dir.name}

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ, **overrides):
        """Build a config from ``GIT_DIR`` and the ``GITLITE_*`` variables.

        Keyword ``overrides`` win over the environment.
        """
        config = cls()
        values = {}
        if git_dir := environ.get("GIT_DIR"):
            values["git_dir_name"] = git_dir
        if (level := environ.get("GITLITE_COMPRESSION_LEVEL")) is not None:
            values["compression_level"] = _parse_level(level)
        if (sort_entries := environ.get("GITLITE_SORT_ENTRIES")) is not None:
            values["sort_entries"] = _parse_flag("GITLITE_SORT_ENTRIES", sort_entries)
        values.update(overrides)
        return replace(config, **values)


def _parse_level(value: str) -> int:
    try:
        level = int(value)
    except ValueError as exc:
        raise InvalidArgs(
            f"GITLITE_COMPRESSION_LEVEL must be an integer: {value!r}"
        ) from exc
    if not -1 <= level <= 9:
        raise InvalidArgs(f"GITLITE_COMPRESSION_LEVEL out of range: {level}")
    return level


def _parse_flag(name: str, value: str) -> bool:
    match value.strip().lower():
        case flag if flag in TRUTHY:
            return True
        case flag if flag in FALSY:
            return False
        case _:
            raise InvalidArgs(f"{name} must be a boolean: {value!r}")
