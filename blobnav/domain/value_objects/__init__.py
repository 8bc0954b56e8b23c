from .blob_entry import DOWNLOAD_TOKEN_KEY, SEPARATOR, BlobEntry
from .mime_type import MimeType
from .search_policy import SearchPolicy

__all__ = [
    "DOWNLOAD_TOKEN_KEY",
    "SEPARATOR",
    "BlobEntry",
    "MimeType",
    "SearchPolicy",
]
