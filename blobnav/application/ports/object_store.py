from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable
    from contextlib import AbstractContextManager
    from pathlib import Path
    from typing import BinaryIO

    from blobnav.domain.value_objects.blob_entry import BlobEntry


class ObjectStore(Protocol):
    """Backend holding the blobs of one bucket.

    Keys are relative to the bucket root. Directory entries are reported with a
    key ending in ``/``.
    """

    def list(self, prefix: str) -> Iterable[BlobEntry | None]:
        """List the immediate children of ``prefix`` (current-directory mode)."""
        ...

    def get(self, key: str) -> BlobEntry | None: ...
    def create_from_bytes(
        self,
        key: str,
        data: bytes,
        *,
        content_type: str,
        metadata: dict[str, str],
    ) -> BlobEntry: ...
    def open_writer(
        self,
        key: str,
        *,
        content_type: str,
        metadata: dict[str, str],
    ) -> AbstractContextManager[BinaryIO]:
        """Open a chunked writer for large uploads. The blob is committed on close."""
        ...

    def copy(self, src_key: str, dst_key: str) -> BlobEntry: ...
    def delete(self, key: str) -> bool:
        """Delete the blob. ``False`` when the backend had nothing to delete."""
        ...

    def download_to(self, key: str, local_path: Path) -> None: ...
