from __future__ import annotations

import mimetypes
from typing import TYPE_CHECKING

from blobnav.application.ports.content_classifier import ContentClassifier
from blobnav.domain.exceptions import UnknownMimeTypeError
from blobnav.domain.value_objects.mime_type import MimeType

if TYPE_CHECKING:
    from pathlib import Path

_KNOWN_TYPES = {mime_type.value: mime_type for mime_type in MimeType}


class MimetypesContentClassifier(ContentClassifier):
    """Classify files with the standard ``mimetypes`` registry.

    Types listed in ``MimeType`` resolve to their canonical extension; any other
    type falls back to the first extension the registry knows for it.
    """

    def __init__(self) -> None:
        self._registry = mimetypes.MimeTypes()

    def detect(self, path: Path) -> str:
        mime_type, _ = self._registry.guess_type(str(path), strict=False)
        return mime_type or ""

    def extension_for(self, mime_type: str) -> str:
        # Parameters such as "; charset=utf-8" do not change the extension
        normalized = mime_type.partition(";")[0].strip().lower()

        if normalized in _KNOWN_TYPES:
            return _KNOWN_TYPES[normalized].extension

        extension = self._registry.guess_extension(normalized, strict=False)
        if not extension:
            raise UnknownMimeTypeError(mime_type)
        return extension.lstrip(".")
