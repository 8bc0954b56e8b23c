from pydantic import BaseModel, Field, field_validator

SEPARATOR = "/"

DOWNLOAD_TOKEN_KEY = "firebaseStorageDownloadTokens"
"""Metadata key holding the token that makes a blob publicly downloadable."""


class BlobEntry(BaseModel):
    """Value object describing one listed or fetched blob.

    Directory entries are either virtual groupings reported by the backend or
    materialized zero-byte markers; both carry a key ending in ``/``.
    """

    key: str
    """Full key of the blob inside its bucket."""

    is_directory: bool = False
    """Whether the entry is a directory grouping rather than a concrete object."""

    size: int = Field(default=0, ge=0)
    """Size in bytes. Zero for directory entries."""

    content_type: str | None = None
    """MIME type recorded by the backend, if any."""

    metadata: dict[str, str] = Field(default_factory=dict)
    """Custom metadata attached to the object."""

    model_config = {"frozen": True}

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Ensure the key is relative to the bucket root."""
        if v.startswith(SEPARATOR):
            msg = "Blob key must not start with a separator"
            raise ValueError(msg)
        return v

    @property
    def is_file(self) -> bool:
        return not self.is_directory

    @property
    def simple_name(self) -> str:
        """Last path segment of the key."""
        return self.key.rpartition(SEPARATOR)[2]

    @property
    def download_token(self) -> str | None:
        return self.metadata.get(DOWNLOAD_TOKEN_KEY)
