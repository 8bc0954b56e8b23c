from pathlib import Path

from pydantic import BaseModel, Field

from blobnav.domain.value_objects.blob_entry import BlobEntry
from blobnav.domain.value_objects.search_policy import SearchPolicy


class ListBlobsRequest(BaseModel):
    prefix: str = Field(..., description="Directory key to list one level under")
    policy: SearchPolicy = Field(SearchPolicy.ALL, description="Which kind of entries to keep")


class FindLastBlobRequest(BaseModel):
    prefix: str = Field(..., description="Directory key to start the search from")
    file_priority: bool = Field(
        True,
        description="Prefer files over sibling directories at every level",
    )


class UploadBlobRequest(BaseModel):
    dest_key: str = Field(..., description="Key to store the file under")
    source_path: Path = Field(..., description="Local file to upload")
    mime_type: str | None = Field(None, description="MIME type; detected from the file if omitted")


class DownloadBlobRequest(BaseModel):
    key: str = Field(..., description="Key of the blob to download")
    dest_dir: Path = Field(..., description="Local directory to write into")
    new_filename: str | None = Field(None, description="File name; defaults to the blob's simple name")


class MoveBlobRequest(BaseModel):
    key: str = Field(..., description="Current key of the blob")
    new_key: str = Field(..., description="Target key inside the same bucket")


class RenameBlobRequest(BaseModel):
    key: str = Field(..., description="Current key of the blob")
    new_simple_name: str = Field(..., description="New last path segment")


class BlobResponse(BaseModel):
    """Response DTO representing a blob and its public download URL."""

    key: str = Field(..., description="Full key of the blob")
    simple_name: str = Field(..., description="Last path segment of the key")
    is_directory: bool = Field(..., description="Whether the entry is a directory")
    size: int = Field(..., description="Size in bytes")
    content_type: str | None = Field(None, description="MIME type recorded on the blob")
    download_url: str = Field(..., description="Public download URL")

    @classmethod
    def from_entry(cls, entry: BlobEntry, download_url: str) -> "BlobResponse":
        return cls(
            key=entry.key,
            simple_name=entry.simple_name,
            is_directory=entry.is_directory,
            size=entry.size,
            content_type=entry.content_type,
            download_url=download_url,
        )


class ListBlobsResponse(BaseModel):
    prefix: str
    blobs: list[BlobResponse] = Field(default_factory=list)


class DownloadBlobResponse(BaseModel):
    key: str
    path: Path


class DeleteBlobResponse(BaseModel):
    key: str
    deleted: bool


class FileExtensionResponse(BaseModel):
    key: str
    extension: str = Field(..., description="Extension without dot; empty when unknown")
