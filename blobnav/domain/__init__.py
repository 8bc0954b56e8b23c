"""Domain layer exports."""

from blobnav.domain.exceptions import (
    CopyFailedError,
    DomainError,
    MalformedURLError,
    NoSuchBlobError,
    PostCopyDeleteFailedError,
    UnknownMimeTypeError,
    ValidationError,
)
from blobnav.domain.value_objects import (
    DOWNLOAD_TOKEN_KEY,
    BlobEntry,
    MimeType,
    SearchPolicy,
)

__all__ = [
    "DOWNLOAD_TOKEN_KEY",
    "BlobEntry",
    "CopyFailedError",
    "DomainError",
    "MalformedURLError",
    "MimeType",
    "NoSuchBlobError",
    "PostCopyDeleteFailedError",
    "SearchPolicy",
    "UnknownMimeTypeError",
    "ValidationError",
]
