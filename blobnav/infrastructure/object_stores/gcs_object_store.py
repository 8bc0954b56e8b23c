from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING, BinaryIO

from google.api_core import exceptions as gcs_exceptions

from blobnav.application.ports.object_store import ObjectStore
from blobnav.domain.value_objects.blob_entry import SEPARATOR, BlobEntry

if TYPE_CHECKING:
    from pathlib import Path

    from google.cloud.storage import Blob, Client


class GcsObjectStore(ObjectStore):
    """Object store backed by one Google Cloud Storage bucket."""

    def __init__(self, bucket_name: str, client: Client) -> None:
        self.client = client
        self.bucket = client.bucket(bucket_name)

    @staticmethod
    def _entry(blob: Blob) -> BlobEntry:
        return BlobEntry(
            key=blob.name,
            is_directory=blob.name.endswith(SEPARATOR),
            size=blob.size or 0,
            content_type=blob.content_type,
            metadata=dict(blob.metadata or {}),
        )

    def list(self, prefix: str) -> list[BlobEntry]:
        iterator = self.client.list_blobs(
            self.bucket,
            prefix=prefix or None,
            delimiter=SEPARATOR,
        )
        entries = [self._entry(blob) for blob in iterator]
        # Common prefixes are only known once the pages have been consumed.
        entries.extend(
            BlobEntry(key=sub_prefix, is_directory=True) for sub_prefix in sorted(iterator.prefixes)
        )
        return entries

    def get(self, key: str) -> BlobEntry | None:
        blob = self.bucket.get_blob(key)
        return None if blob is None else self._entry(blob)

    def create_from_bytes(
        self,
        key: str,
        data: bytes,
        *,
        content_type: str,
        metadata: dict[str, str],
    ) -> BlobEntry:
        blob = self.bucket.blob(key)
        blob.metadata = metadata
        blob.upload_from_string(data, content_type=content_type)
        return self._entry(blob)

    @contextmanager
    def open_writer(
        self,
        key: str,
        *,
        content_type: str,
        metadata: dict[str, str],
    ) -> Generator[BinaryIO, None, None]:
        blob = self.bucket.blob(key)
        blob.metadata = metadata
        with blob.open("wb", content_type=content_type) as out:
            yield out

    def copy(self, src_key: str, dst_key: str) -> BlobEntry:
        copied = self.bucket.copy_blob(self.bucket.blob(src_key), self.bucket, dst_key)
        return self._entry(copied)

    def delete(self, key: str) -> bool:
        try:
            self.bucket.delete_blob(key)
        except gcs_exceptions.NotFound:
            return False
        return True

    def download_to(self, key: str, local_path: Path) -> None:
        self.bucket.blob(key).download_to_filename(str(local_path))
