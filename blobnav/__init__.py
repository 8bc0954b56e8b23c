"""Navigation, transfer and addressing of blobs in a cloud storage bucket."""

from blobnav.application.services.blob_navigator import BlobNavigator
from blobnav.domain.services.blob_name_codec import BlobNameCodec

__all__ = ["BlobNameCodec", "BlobNavigator"]
