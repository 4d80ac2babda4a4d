import contextlib

import pytest

from gitlite.models import Git, LooseObjectStore


@pytest.fixture
def change_to_tmp_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("GIT_DIR", raising=False)
    with contextlib.chdir(tmp_path):
        yield tmp_path


@pytest.fixture
def git(change_to_tmp_dir, capsys):
    git = Git()
    git.init_repo()
    capsys.readouterr()
    return git


@pytest.fixture
def store(tmp_path):
    return LooseObjectStore(tmp_path / "objects")
