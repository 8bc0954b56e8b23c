"""Listing, last-blob resolution and transfer orchestration over an object store."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from blobnav.domain.exceptions import (
    CopyFailedError,
    NoSuchBlobError,
    PostCopyDeleteFailedError,
    ValidationError,
)
from blobnav.domain.services.blob_name_codec import DEFAULT_DOWNLOAD_HOST, BlobNameCodec
from blobnav.domain.value_objects.blob_entry import DOWNLOAD_TOKEN_KEY, BlobEntry
from blobnav.domain.value_objects.mime_type import MimeType
from blobnav.domain.value_objects.search_policy import SearchPolicy

if TYPE_CHECKING:
    from blobnav.application.ports.content_classifier import ContentClassifier
    from blobnav.application.ports.object_store import ObjectStore

logger = structlog.get_logger()

STREAMED_UPLOAD_THRESHOLD = 1_000_000
"""Files of at least this many bytes are uploaded through a chunked writer."""

UPLOAD_CHUNK_SIZE = 1024 * 1024

# Priority classes for last-blob ordering. The preferred kind sorts last.
_DEFERRED = 0
_PREFERRED = 1


def _last_blob_ordering(entry: BlobEntry, *, file_priority: bool) -> tuple[int, str]:
    preferred = entry.is_file if file_priority else entry.is_directory
    return (_PREFERRED if preferred else _DEFERRED, entry.key)


class BlobNavigator:
    """Navigate and manage the blobs of one bucket.

    Holds no state besides its collaborators, so one instance can be shared by
    concurrent callers. Every call is a fresh round trip to the object store.
    """

    def __init__(
        self,
        bucket_name: str,
        object_store: ObjectStore,
        content_classifier: ContentClassifier,
        download_host: str = DEFAULT_DOWNLOAD_HOST,
    ) -> None:
        if not bucket_name or not bucket_name.strip():
            msg = "Bucket name must not be blank"
            raise ValidationError(msg)
        self.bucket_name = bucket_name
        self.object_store = object_store
        self.content_classifier = content_classifier
        self.download_host = download_host

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_blob(self, key: str) -> BlobEntry:
        """Return the blob stored under ``key``.

        Raises:
            NoSuchBlobError: If the blob does not exist.

        """
        entry = self.object_store.get(key)
        if entry is None:
            raise NoSuchBlobError(self.bucket_name, key)
        return entry

    def list_blobs(
        self,
        prefix: str,
        policy: SearchPolicy = SearchPolicy.ALL,
    ) -> list[BlobEntry]:
        """List the entries one level under ``prefix`` selected by ``policy``.

        The entry whose key equals the prefix (a directory marker) is never returned.

        Example:
            life-cycles/
            ├─ 20201231/
            │  ├─ market.zip
            ├─ 20210129/
            ├─ sample.zip

            list_blobs("life-cycles/", SearchPolicy.DIRECTORIES)
            # [life-cycles/20201231/, life-cycles/20210129/]

        """
        return [
            entry
            for entry in self.object_store.list(prefix)
            if entry is not None and entry.key != prefix and policy.matches(entry)
        ]

    def list_blob_names(
        self,
        prefix: str,
        policy: SearchPolicy = SearchPolicy.ALL,
    ) -> list[str]:
        return [entry.key for entry in self.list_blobs(prefix, policy)]

    def resolve_last_blob(self, prefix: str, *, file_priority: bool) -> BlobEntry | None:
        """Find the deepest "last" file under ``prefix``.

        At every level, entries are ordered by kind and then by key; the last one
        wins. With ``file_priority`` a file beats its sibling directories, otherwise
        the last directory is entered first. Returns ``None`` when a level is empty
        or the chosen file vanished before it could be re-fetched.

        Example:
            life-cycles/
            ├─ 20201231/
            │  ├─ emart.zip
            ├─ 20210129/
            │  ├─ homeplus.zip
            ├─ sample.zip

            resolve_last_blob("life-cycles/", file_priority=True)   # sample.zip
            resolve_last_blob("life-cycles/", file_priority=False)  # 20210129/homeplus.zip

        """
        visited: set[str] = set()
        current = prefix

        while current not in visited:
            visited.add(current)

            entries = self.list_blobs(current, SearchPolicy.ALL)
            if not entries:
                return None

            last = max(
                entries,
                key=lambda entry: _last_blob_ordering(entry, file_priority=file_priority),
            )
            if last.is_file:
                return self.object_store.get(last.key)

            current = last.key

        logger.warning("last_blob_cycle_detected", prefix=prefix, revisited=current)
        return None

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def download(
        self,
        blob_or_key: BlobEntry | str,
        dest_dir: Path | str,
        new_filename: str | None = None,
    ) -> Path:
        """Download a blob into ``dest_dir`` and return the written file.

        The file is named ``new_filename`` when given, else after the blob's simple
        name. A partially written file is removed if the transfer fails.
        """
        entry = self._as_entry(blob_or_key)

        filename = new_filename
        if not filename or not filename.strip():
            filename = BlobNameCodec.simple_name(entry.key)

        path = Path(dest_dir) / filename
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self.object_store.download_to(entry.key, path)
        except BaseException:
            path.unlink(missing_ok=True)
            raise

        logger.info("blob_downloaded", key=entry.key, path=str(path))
        return path

    def upload(
        self,
        dest_key: str,
        file: Path | str,
        mime_type: str | None = None,
    ) -> BlobEntry:
        """Upload a local file under ``dest_key`` with a fresh download token.

        The MIME type is detected from the file when not given and falls back to
        ``application/octet-stream``. Files below ``STREAMED_UPLOAD_THRESHOLD`` bytes
        are written in one call; larger ones are streamed in chunks.
        """
        path = Path(file)
        if mime_type is None:
            mime_type = self.content_classifier.detect(path)
        content_type = mime_type if mime_type and mime_type.strip() else MimeType.OCTET_STREAM.value

        metadata = {DOWNLOAD_TOKEN_KEY: str(uuid4())}
        size = path.stat().st_size

        if size < STREAMED_UPLOAD_THRESHOLD:
            entry = self.object_store.create_from_bytes(
                dest_key,
                path.read_bytes(),
                content_type=content_type,
                metadata=metadata,
            )
        else:
            with (
                path.open("rb") as source,
                self.object_store.open_writer(
                    dest_key,
                    content_type=content_type,
                    metadata=metadata,
                ) as writer,
            ):
                shutil.copyfileobj(source, writer, UPLOAD_CHUNK_SIZE)
            entry = self.get_blob(dest_key)

        logger.info(
            "blob_uploaded",
            key=dest_key,
            size=size,
            content_type=content_type,
            streamed=size >= STREAMED_UPLOAD_THRESHOLD,
        )
        return entry

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def move(self, blob_or_key: BlobEntry | str, new_key: str) -> BlobEntry:
        """Copy the blob to ``new_key`` inside the bucket, then delete the source.

        Moving a blob onto its own key leaves it untouched and returns it.

        Raises:
            NoSuchBlobError: If a key was given and the blob does not exist.
            CopyFailedError: If the copy failed. Nothing was deleted.
            PostCopyDeleteFailedError: If the copy succeeded but the source remains.

        """
        if not new_key or not new_key.strip():
            msg = "Target key must not be blank"
            raise ValidationError(msg)

        entry = self._as_entry(blob_or_key)
        if new_key == entry.key:
            logger.info("blob_move_skipped", key=entry.key)
            return self.get_blob(entry.key)

        try:
            copied = self.object_store.copy(entry.key, new_key)
        except Exception as e:
            logger.exception("blob_copy_failed", source_key=entry.key, target_key=new_key)
            raise CopyFailedError(entry.key, new_key) from e

        try:
            deleted = self.object_store.delete(entry.key)
        except Exception as e:
            logger.exception(
                "blob_move_delete_failed",
                source_key=entry.key,
                target_key=new_key,
            )
            raise PostCopyDeleteFailedError(entry.key, new_key, copied) from e

        if not deleted:
            logger.error(
                "blob_move_delete_failed",
                source_key=entry.key,
                target_key=new_key,
            )
            raise PostCopyDeleteFailedError(entry.key, new_key, copied)

        logger.info("blob_moved", source_key=entry.key, target_key=new_key)
        return copied

    def rename(self, blob_or_key: BlobEntry | str, new_simple_name: str) -> BlobEntry:
        """Rename the blob in place, keeping its directory prefix.

        Example:
            rename("goods/5bf6/label1", "img_etc1.jpg")  # goods/5bf6/img_etc1.jpg

        """
        if not new_simple_name or not new_simple_name.strip():
            msg = "New simple name must not be blank"
            raise ValidationError(msg)

        key = blob_or_key.key if isinstance(blob_or_key, BlobEntry) else blob_or_key
        return self.move(blob_or_key, BlobNameCodec.with_simple_name(key, new_simple_name))

    def delete(self, key: str) -> bool:
        """Delete the blob. Returns ``False`` if it did not exist."""
        if self.object_store.get(key) is None:
            return False
        deleted = self.object_store.delete(key)
        logger.info("blob_deleted", key=key, deleted=deleted)
        return deleted

    # ------------------------------------------------------------------
    # Converters
    # ------------------------------------------------------------------

    def to_file_extension(self, key: str) -> str:
        """Return the file extension of the blob.

        Taken from the key when it has one; otherwise derived from the content type
        stored on the blob.

        Raises:
            NoSuchBlobError: If the key has no extension and the blob does not exist.

        """
        return BlobNameCodec.resolve_extension(
            key,
            lambda k: self.get_blob(k).content_type,
            self.content_classifier.extension_for,
        )

    def to_url(self, blob_or_key: BlobEntry | str) -> str:
        """Return the public download URL.

        An entry contributes its download token; a bare key yields a URL without one.
        """
        if isinstance(blob_or_key, BlobEntry):
            return BlobNameCodec.build_download_url(
                self.bucket_name,
                blob_or_key.key,
                blob_or_key.download_token,
                host=self.download_host,
            )
        return BlobNameCodec.build_download_url(
            self.bucket_name,
            blob_or_key,
            host=self.download_host,
        )

    def get_blob_from_url(self, url: str) -> BlobEntry:
        """Return the blob a download URL points at.

        Raises:
            MalformedURLError: If no key can be decoded from the URL.
            NoSuchBlobError: If the blob does not exist.

        """
        return self.get_blob(BlobNameCodec.parse_blob_key_from_url(url))

    def _as_entry(self, blob_or_key: BlobEntry | str) -> BlobEntry:
        if isinstance(blob_or_key, BlobEntry):
            return blob_or_key
        return self.get_blob(blob_or_key)
