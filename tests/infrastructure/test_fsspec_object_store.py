"""Tests for FsspecObjectStore against the fsspec memory filesystem."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from uuid import uuid4

import pytest

from blobnav.application.services.blob_navigator import STREAMED_UPLOAD_THRESHOLD, BlobNavigator
from blobnav.domain.value_objects.search_policy import SearchPolicy
from blobnav.infrastructure.object_stores.fsspec_object_store import FsspecObjectStore
from tests.mocks import FakeContentClassifier


@pytest.fixture
def store() -> Generator[FsspecObjectStore, None, None]:
    """Create a store rooted at a fresh bucket of the memory filesystem."""
    store = FsspecObjectStore(f"memory://bucket-{uuid4().hex}/")
    yield store
    if store.fs.exists(store.root):
        store.fs.rm(store.root, recursive=True)


def _put(store: FsspecObjectStore, key: str, data: bytes = b"") -> None:
    store.create_from_bytes(key, data, content_type="application/octet-stream", metadata={})


class TestFsspecObjectStore:
    """Test the fsspec adapter."""

    def test_create_and_get(self, store: FsspecObjectStore) -> None:
        entry = store.create_from_bytes(
            "a/b.txt",
            b"hello",
            content_type="text/plain",
            metadata={"k": "v"},
        )

        assert entry.key == "a/b.txt"
        assert entry.size == 5
        assert entry.is_file
        assert store.get("a/b.txt") == entry

    def test_get_missing(self, store: FsspecObjectStore) -> None:
        assert store.get("missing.txt") is None

    def test_get_directory_requires_separator(self, store: FsspecObjectStore) -> None:
        _put(store, "a/b.txt")

        directory = store.get("a/")

        assert directory is not None
        assert directory.is_directory
        assert directory.key == "a/"
        assert store.get("a") is None
        assert store.get("a/b.txt/") is None

    def test_list_current_directory(self, store: FsspecObjectStore) -> None:
        _put(store, "top.txt", b"1")
        _put(store, "a/1.txt", b"22")
        _put(store, "a/b/3.txt", b"333")

        root = {entry.key: entry for entry in store.list("")}
        nested = {entry.key: entry for entry in store.list("a/")}

        assert set(root) == {"top.txt", "a/"}
        assert root["a/"].is_directory
        assert root["top.txt"].size == 1
        assert set(nested) == {"a/1.txt", "a/b/"}
        assert nested["a/b/"].size == 0

    def test_list_partial_prefix(self, store: FsspecObjectStore) -> None:
        _put(store, "a/1.txt")
        _put(store, "a/2.txt")

        assert [entry.key for entry in store.list("a/1")] == ["a/1.txt"]

    def test_list_missing_prefix(self, store: FsspecObjectStore) -> None:
        assert list(store.list("nothing/")) == []

    def test_open_writer(self, store: FsspecObjectStore) -> None:
        with store.open_writer("big.bin", content_type="application/octet-stream", metadata={}) as out:
            out.write(b"x" * 10)
            out.write(b"y" * 5)

        entry = store.get("big.bin")
        assert entry is not None
        assert entry.size == 15

    def test_failed_write_leaves_no_object(self, store: FsspecObjectStore) -> None:
        with (
            pytest.raises(ConnectionError),
            store.open_writer("big.bin", content_type="application/octet-stream", metadata={}) as out,
        ):
            out.write(b"partial")
            msg = "connection reset"
            raise ConnectionError(msg)

        assert store.get("big.bin") is None

    def test_failed_write_keeps_other_objects(self, store: FsspecObjectStore) -> None:
        _put(store, "a.txt", b"abc")

        with (
            pytest.raises(ConnectionError),
            store.open_writer("b.txt", content_type="text/plain", metadata={}),
        ):
            msg = "connection reset"
            raise ConnectionError(msg)

        assert store.get("b.txt") is None
        assert store.get("a.txt") is not None

    def test_copy(self, store: FsspecObjectStore) -> None:
        _put(store, "a.txt", b"abc")

        copied = store.copy("a.txt", "b/a.txt")

        assert copied.key == "b/a.txt"
        assert copied.size == 3
        assert store.get("a.txt") is not None

    def test_delete(self, store: FsspecObjectStore) -> None:
        _put(store, "a.txt")

        assert store.delete("a.txt") is True
        assert store.get("a.txt") is None
        assert store.delete("a.txt") is False

    def test_download_to(self, store: FsspecObjectStore, tmp_path: Path) -> None:
        _put(store, "a/b.txt", b"content")

        store.download_to("a/b.txt", tmp_path / "b.txt")

        assert (tmp_path / "b.txt").read_bytes() == b"content"


class TestNavigatorOverFsspec:
    """Test BlobNavigator end to end over the memory filesystem."""

    @pytest.fixture
    def navigator(self, store: FsspecObjectStore) -> BlobNavigator:
        return BlobNavigator("bucket", store, FakeContentClassifier())

    def test_resolve_last_blob(self, navigator: BlobNavigator, store: FsspecObjectStore) -> None:
        _put(store, "a/1.txt")
        _put(store, "a/2.txt")
        _put(store, "a/b/3.txt")

        by_file = navigator.resolve_last_blob("a/", file_priority=True)
        by_directory = navigator.resolve_last_blob("a/", file_priority=False)

        assert by_file is not None
        assert by_file.key == "a/2.txt"
        assert by_directory is not None
        assert by_directory.key == "a/b/3.txt"

    def test_list_by_policy(self, navigator: BlobNavigator, store: FsspecObjectStore) -> None:
        _put(store, "r/f1")
        _put(store, "r/f2")
        _put(store, "r/d1/x")

        assert sorted(navigator.list_blob_names("r/", SearchPolicy.FILES)) == ["r/f1", "r/f2"]
        assert navigator.list_blob_names("r/", SearchPolicy.DIRECTORIES) == ["r/d1/"]

    def test_streamed_upload_and_move(
        self,
        navigator: BlobNavigator,
        store: FsspecObjectStore,
        tmp_path: Path,
    ) -> None:
        source = tmp_path / "big.bin"
        source.write_bytes(b"\1" * STREAMED_UPLOAD_THRESHOLD)

        uploaded = navigator.upload("in/big.bin", source, "application/octet-stream")
        moved = navigator.rename(uploaded, "moved.bin")

        assert moved.key == "in/moved.bin"
        assert moved.size == STREAMED_UPLOAD_THRESHOLD
        assert store.get("in/big.bin") is None
