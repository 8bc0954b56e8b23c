from enum import Enum


class MimeType(str, Enum):
    """Represent MIME types with a canonical file extension."""

    OCTET_STREAM = "application/octet-stream"

    JPEG = "image/jpeg"
    PNG = "image/png"
    GIF = "image/gif"
    WEBP = "image/webp"

    PDF = "application/pdf"
    JSON = "application/json"
    ZIP = "application/zip"
    GZIP = "application/gzip"

    TEXT = "text/plain"
    CSV = "text/csv"
    HTML = "text/html"

    XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    PPTX = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]


_EXTENSIONS: dict[MimeType, str] = {
    MimeType.OCTET_STREAM: "bin",
    MimeType.JPEG: "jpeg",
    MimeType.PNG: "png",
    MimeType.GIF: "gif",
    MimeType.WEBP: "webp",
    MimeType.PDF: "pdf",
    MimeType.JSON: "json",
    MimeType.ZIP: "zip",
    MimeType.GZIP: "gz",
    MimeType.TEXT: "txt",
    MimeType.CSV: "csv",
    MimeType.HTML: "html",
    MimeType.XLSX: "xlsx",
    MimeType.DOCX: "docx",
    MimeType.PPTX: "pptx",
}
