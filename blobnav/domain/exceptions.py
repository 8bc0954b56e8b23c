"""Domain exceptions for blob lookups, naming and transfers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blobnav.domain.value_objects.blob_entry import BlobEntry


class DomainError(Exception):
    """Base exception for domain layer."""


class ValidationError(DomainError):
    """Raised when input validation fails."""


class NoSuchBlobError(DomainError):
    """Raised when a blob does not exist in the bucket at read time."""

    def __init__(self, bucket: str, key: str) -> None:
        self.bucket = bucket
        self.key = key
        super().__init__(f"Could not find the blob: {bucket}/{key}")


class MalformedURLError(DomainError):
    """Raised when a download URL cannot be mapped back to a blob key."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        self.url = url
        self.reason = reason
        message = f"Malformed blob URL: {url!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UnknownMimeTypeError(DomainError):
    """Raised when no file extension is registered for a MIME type."""

    def __init__(self, mime_type: str) -> None:
        self.mime_type = mime_type
        super().__init__(f"No file extension registered for MIME type {mime_type!r}")


class CopyFailedError(DomainError):
    """Raised when the copy step of a move fails. The source is left untouched."""

    def __init__(self, source_key: str, target_key: str) -> None:
        self.source_key = source_key
        self.target_key = target_key
        super().__init__(f"Failed to copy blob {source_key!r} to {target_key!r}")


class PostCopyDeleteFailedError(DomainError):
    """Raised when a move copied the blob but could not delete the source.

    The blob now exists under both keys; ``copied`` is the entry at the target key.
    """

    def __init__(self, source_key: str, target_key: str, copied: BlobEntry) -> None:
        self.source_key = source_key
        self.target_key = target_key
        self.copied = copied
        super().__init__(
            f"Copied blob {source_key!r} to {target_key!r} but failed to delete the source",
        )
