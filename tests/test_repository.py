import zlib

import pytest

from gitlite.errors import CorruptFile, CorruptObject, InvalidAddress, ObjectIOError
from gitlite.models import Blob, Entry, LooseObjectStore, Tree, serialize

HELLO_HASH = "ce013625030ba8dba906f756967f9e9ca394464a"


class TestPathFor:
    @pytest.mark.parametrize(
        "address",
        [
            HELLO_HASH,
            "0" * 40,
            "f" * 40,
            "4b825dc642cb6eb9a060e54bf8d69288fbee4904",
        ],
    )
    def test_round_trips_address(self, store, address):
        path = store.path_for(address)
        assert path.parent.parent == store.objects_folder
        assert len(path.parent.name) == 2
        assert path.parent.name + path.name == address

    @pytest.mark.parametrize(
        "address",
        ["", "abc", "g" * 40, "0" * 39, "0" * 41, HELLO_HASH[:-1] + " "],
    )
    def test_rejects_invalid_address(self, store, address):
        with pytest.raises(InvalidAddress):
            store.path_for(address)

    def test_uppercase_is_normalised(self, store):
        assert store.path_for(HELLO_HASH.upper()) == store.path_for(HELLO_HASH)


class TestLooseObjectStore:
    def test_store_and_load_blob(self, store):
        address = store.store(Blob(content=b"hello\n"))
        assert address == HELLO_HASH
        assert store.contains(address)
        blob = store.load(address)
        assert blob == Blob(content=b"hello\n")
        assert blob.length == 6

    def test_store_and_load_tree(self, store):
        blob_address = store.store(Blob(content=b"hello\n"))
        tree = Tree(entries=[Entry(mode=0o100644, name="hello.txt", address=blob_address)])
        assert store.load(store.store(tree)) == tree

    def test_file_is_compressed_plaintext(self, store):
        address = store.store(Blob(content=b"hello\n"))
        raw = store.path_for(address).read_bytes()
        assert zlib.decompress(raw) == b"blob 6\x00hello\n"
        assert store.read(address) == b"blob 6\x00hello\n"

    def test_write_is_idempotent(self, store):
        first = store.store(Blob(content=b"same"))
        before = store.path_for(first).read_bytes()
        second = store.store(Blob(content=b"same"))
        assert first == second
        files = [path for path in store.objects_folder.rglob("*") if path.is_file()]
        assert files == [store.path_for(first)]
        assert store.path_for(first).read_bytes() == before

    def test_write_tolerates_existing_directory(self, store):
        store.path_for(HELLO_HASH).parent.mkdir(parents=True)
        store.write(HELLO_HASH, b"blob 6\x00hello\n")
        assert store.contains(HELLO_HASH)

    def test_compression_level(self, tmp_path):
        store = LooseObjectStore(tmp_path / "objects", compression_level=0)
        address = store.store(Blob(content=b"hello\n"))
        assert b"blob 6\x00hello\n" in store.path_for(address).read_bytes()

    def test_read_missing_object(self, store):
        assert not store.contains(HELLO_HASH)
        with pytest.raises(ObjectIOError):
            store.read(HELLO_HASH)

    def test_read_corrupt_file(self, store):
        path = store.path_for(HELLO_HASH)
        path.parent.mkdir(parents=True)
        path.write_bytes(b"definitely not zlib")
        with pytest.raises(CorruptFile):
            store.read(HELLO_HASH)

    def test_load_detects_mismatched_contents(self, store):
        other = serialize(Blob(content=b"other"))
        store.write(HELLO_HASH, other)
        with pytest.raises(CorruptObject):
            store.load(HELLO_HASH)
        assert store.load(HELLO_HASH, verify=False) == Blob(content=b"other")

    def test_load_unknown_type(self, store):
        store.write(HELLO_HASH, b"commit 3\x00abc")
        with pytest.raises(CorruptObject):
            store.load(HELLO_HASH, verify=False)
