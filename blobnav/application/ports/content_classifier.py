from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pathlib import Path


class ContentClassifier(Protocol):
    def detect(self, path: Path) -> str:
        """Return the MIME type of a local file, or an empty string when unknown."""
        ...

    def extension_for(self, mime_type: str) -> str:
        """Return the canonical file extension (without dot) of a MIME type.

        Raises:
            UnknownMimeTypeError: If no extension is registered for the type.

        """
        ...
