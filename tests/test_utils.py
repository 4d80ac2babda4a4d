import pathlib
from argparse import Namespace

import pytest

from gitlite.main import get_parser


@pytest.mark.parametrize(
    "params, expected",
    [
        (["init"], Namespace(verbose=False, command="init")),
        (
            ["cat-file", "some_hash"],
            Namespace(
                verbose=False,
                command="cat-file",
                hash="some_hash",
                show_type=False,
                show_size=False,
                pretty_print=False,
            ),
        ),
        (
            ["cat-file", "-p", "some_hash"],
            Namespace(
                verbose=False,
                command="cat-file",
                hash="some_hash",
                show_type=False,
                show_size=False,
                pretty_print=True,
            ),
        ),
        (
            ["cat-file", "-t", "-s", "some_hash"],
            Namespace(
                verbose=False,
                command="cat-file",
                hash="some_hash",
                show_type=True,
                show_size=True,
                pretty_print=False,
            ),
        ),
        (
            ["hash-object", "some_file.txt"],
            Namespace(
                verbose=False,
                command="hash-object",
                path=pathlib.Path("some_file.txt"),
                write=False,
            ),
        ),
        (
            ["hash-object", "-w", "some_file.txt"],
            Namespace(
                verbose=False,
                command="hash-object",
                path=pathlib.Path("some_file.txt"),
                write=True,
            ),
        ),
        (
            ["ls-tree", "some_hash"],
            Namespace(
                verbose=False, command="ls-tree", name_only=False, hash_value="some_hash"
            ),
        ),
        (
            [
                "ls-tree",
                "--name-only",
                "some_hash",
            ],
            Namespace(
                verbose=False, command="ls-tree", name_only=True, hash_value="some_hash"
            ),
        ),
        (["write-tree"], Namespace(verbose=False, command="write-tree")),
        (["-v", "write-tree"], Namespace(verbose=True, command="write-tree")),
        ([], Namespace(verbose=False, command=None)),
    ],
)
def test_parser(params, expected):
    parser = get_parser()
    args = parser.parse_args(params)
    assert args == expected
