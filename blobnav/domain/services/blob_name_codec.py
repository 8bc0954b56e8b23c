"""Domain service for blob key and download URL conversions."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import quote, unquote_plus, urlencode, urlsplit

from blobnav.domain.exceptions import MalformedURLError, UnknownMimeTypeError
from blobnav.domain.value_objects.blob_entry import SEPARATOR

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_DOWNLOAD_HOST = "firebasestorage.googleapis.com"

# A dot with at least one character before it and one after it.
_EXTENSION_PATTERN = re.compile(r".+\..+")


class BlobNameCodec:
    """Pure conversions between blob keys, simple names, extensions and URLs.

    Nothing here talks to a backend. Operations that need a backend answer
    (the content type of a blob) take it as a callable.
    """

    @staticmethod
    def simple_name(key: str) -> str:
        """Return the part of the key after the last separator.

        Example:
            >>> BlobNameCodec.simple_name("goods/20180101/image_label1.jpeg")
            'image_label1.jpeg'

        """
        return key.rpartition(SEPARATOR)[2]

    @staticmethod
    def with_simple_name(key: str, new_simple_name: str) -> str:
        """Replace the last path segment of the key, keeping its directory prefix."""
        directory, separator, _ = key.rpartition(SEPARATOR)
        return f"{directory}{separator}{new_simple_name}"

    @staticmethod
    def extension_from_key(key: str) -> str | None:
        """Return the extension of the key's simple name, case preserved.

        ``None`` when the simple name has no dot with a character on both sides
        (``.bashrc``, ``file.``, ``file``). A name such as ``a..`` qualifies and has
        an empty extension.
        """
        simple_name = BlobNameCodec.simple_name(key)
        if _EXTENSION_PATTERN.fullmatch(simple_name) is None:
            return None
        return simple_name.rpartition(".")[2]

    @staticmethod
    def extension_from_content_type(
        mime_type: str,
        extension_for: Callable[[str], str],
    ) -> str:
        """Map a MIME type to its canonical extension.

        Raises:
            UnknownMimeTypeError: If the registry has no mapping.

        """
        return extension_for(mime_type)

    @staticmethod
    def resolve_extension(
        key: str,
        content_type_lookup: Callable[[str], str | None],
        extension_for: Callable[[str], str],
    ) -> str:
        """Return the extension from the key, falling back to the blob's content type.

        The lookup is only called when the key itself carries no extension. An
        empty or unmapped content type yields an empty string.
        """
        if not key or not key.strip():
            return ""

        extension = BlobNameCodec.extension_from_key(key)
        if extension is not None:
            return extension

        content_type = content_type_lookup(key)
        if not content_type or not content_type.strip():
            return ""

        try:
            return BlobNameCodec.extension_from_content_type(content_type, extension_for)
        except UnknownMimeTypeError:
            return ""

    @staticmethod
    def build_download_url(
        bucket: str,
        key: str,
        token: str | None = None,
        host: str = DEFAULT_DOWNLOAD_HOST,
    ) -> str:
        """Build the public download URL of a blob.

        The whole key is encoded as a single path segment, so ``/`` becomes ``%2F``.

        Example:
            >>> BlobNameCodec.build_download_url("my-app.appspot.com", "goods/a b.jpeg", "t-1")
            'https://firebasestorage.googleapis.com/v0/b/my-app.appspot.com/o/goods%2Fa%20b.jpeg?alt=media&token=t-1'

        """
        path = "/".join(("v0", "b", quote(bucket, safe=""), "o", quote(key, safe="")))
        params = {"alt": "media"}
        if token and token.strip():
            params["token"] = token
        return f"https://{host}/{path}?{urlencode(params)}"

    @staticmethod
    def parse_blob_key_from_url(url: str) -> str:
        """Return the blob key encoded in the last path segment of a download URL.

        Raises:
            MalformedURLError: If the URL has no last path segment or it cannot be decoded.

        """
        try:
            path = urlsplit(url).path
        except ValueError as e:
            raise MalformedURLError(url, str(e)) from e

        encoded_key = path.rpartition("/")[2]
        if not encoded_key:
            raise MalformedURLError(url, "no path segment")

        try:
            return unquote_plus(encoded_key, errors="strict")
        except UnicodeDecodeError as e:
            raise MalformedURLError(url, "invalid percent-encoding") from e
