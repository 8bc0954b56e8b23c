from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blobnav.domain.value_objects.blob_entry import BlobEntry


class SearchPolicy(str, Enum):
    """Select which kind of listed entries to keep."""

    FILES = "FILES"
    DIRECTORIES = "DIRECTORIES"
    ALL = "ALL"

    def matches(self, entry: BlobEntry) -> bool:
        if self is SearchPolicy.FILES:
            return not entry.is_directory
        if self is SearchPolicy.DIRECTORIES:
            return entry.is_directory
        return True
