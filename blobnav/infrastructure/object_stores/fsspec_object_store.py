from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, BinaryIO

import fsspec

from blobnav.application.ports.object_store import ObjectStore
from blobnav.domain.value_objects.blob_entry import SEPARATOR, BlobEntry

# Info keys under which fsspec backends report the content type of an object
# (gcsfs, s3fs, and generic implementations respectively).
_CONTENT_TYPE_KEYS = ("contentType", "ContentType", "content_type")


class FsspecObjectStore(ObjectStore):
    """Object store over any fsspec filesystem rooted at ``base_url``.

    ``gs://bucket`` goes through gcsfs; ``memory://`` and ``file://`` URLs work for
    local runs. Content type and metadata are forwarded on writes and read back
    from the backend's info dict; filesystems that do not keep them drop them.
    """

    def __init__(self, base_url: str, *, storage_options: dict | None = None) -> None:
        self.base_url = base_url.rstrip(SEPARATOR)
        self.storage_options = storage_options or {}
        self.fs, root = fsspec.core.url_to_fs(self.base_url, **self.storage_options)
        self.root = root.rstrip(SEPARATOR)

    def _path(self, key: str) -> str:
        key = key.strip(SEPARATOR)
        return f"{self.root}{SEPARATOR}{key}" if key else self.root

    def _key(self, path: str) -> str:
        path = path.rstrip(SEPARATOR)
        if path.startswith(self.root):
            path = path[len(self.root) :]
        return path.lstrip(SEPARATOR)

    def _entry(self, info: dict[str, Any], key: str | None = None) -> BlobEntry:
        is_directory = info.get("type") == "directory"
        if key is None:
            key = self._key(info["name"])
            if is_directory:
                key += SEPARATOR

        content_type = next(
            (info[k] for k in _CONTENT_TYPE_KEYS if info.get(k)),
            None,
        )
        metadata = info.get("metadata") or {}

        return BlobEntry(
            key=key,
            is_directory=is_directory,
            size=0 if is_directory else int(info.get("size") or 0),
            content_type=content_type,
            metadata={str(k): str(v) for k, v in metadata.items()},
        )

    def list(self, prefix: str) -> list[BlobEntry]:
        # Prefixes need not end at a separator: list the enclosing directory and
        # keep the keys that start with the prefix.
        parent = prefix.rpartition(SEPARATOR)[0]
        try:
            infos = self.fs.ls(self._path(parent), detail=True)
        except FileNotFoundError:
            return []

        entries = [self._entry(info) for info in infos]
        return [entry for entry in entries if entry.key.startswith(prefix)]

    def get(self, key: str) -> BlobEntry | None:
        try:
            info = self.fs.info(self._path(key))
        except FileNotFoundError:
            return None

        # "a/b" and "a/b/" name different blobs
        if (info.get("type") == "directory") != key.endswith(SEPARATOR):
            return None
        return self._entry(info, key)

    def create_from_bytes(
        self,
        key: str,
        data: bytes,
        *,
        content_type: str,
        metadata: dict[str, str],
    ) -> BlobEntry:
        self.fs.pipe_file(
            self._path(key),
            data,
            content_type=content_type,
            metadata=metadata,
        )
        return self._require(key)

    @contextmanager
    def open_writer(
        self,
        key: str,
        *,
        content_type: str,
        metadata: dict[str, str],
    ) -> Generator[BinaryIO, None, None]:
        path = self._path(key)
        try:
            with self.fs.open(
                path,
                "wb",
                content_type=content_type,
                metadata=metadata,
            ) as out:
                yield out
        except Exception:
            # Closing the file commits whatever was written before the failure
            if self.fs.exists(path):
                self.fs.rm_file(path)
            raise

    def copy(self, src_key: str, dst_key: str) -> BlobEntry:
        self.fs.cp_file(self._path(src_key), self._path(dst_key))
        return self._require(dst_key)

    def delete(self, key: str) -> bool:
        try:
            self.fs.rm_file(self._path(key))
        except FileNotFoundError:
            return False
        return True

    def download_to(self, key: str, local_path: Path) -> None:
        self.fs.get_file(self._path(key), str(local_path))

    def _require(self, key: str) -> BlobEntry:
        entry = self.get(key)
        if entry is None:
            raise FileNotFoundError(self._path(key))
        return entry
