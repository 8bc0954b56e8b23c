from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from returns.result import Failure, Result, Success

from blobnav.application.dtos.blob_dtos import (
    BlobResponse,
    DeleteBlobResponse,
    DownloadBlobRequest,
    DownloadBlobResponse,
    FileExtensionResponse,
    FindLastBlobRequest,
    ListBlobsRequest,
    ListBlobsResponse,
    MoveBlobRequest,
    RenameBlobRequest,
    UploadBlobRequest,
)
from blobnav.application.dtos.errors import AppError
from blobnav.domain.exceptions import (
    CopyFailedError,
    MalformedURLError,
    NoSuchBlobError,
    PostCopyDeleteFailedError,
    ValidationError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from blobnav.application.services.blob_navigator import BlobNavigator
    from blobnav.domain.value_objects.blob_entry import BlobEntry

logger = structlog.get_logger()


def _to_response(navigator: BlobNavigator, entry: BlobEntry) -> BlobResponse:
    return BlobResponse.from_entry(entry, navigator.to_url(entry))


class ListBlobsUseCase:
    """List the blobs one level under a prefix."""

    def __init__(self, navigator: BlobNavigator) -> None:
        self.navigator = navigator

    async def execute(self, request: ListBlobsRequest) -> Result[ListBlobsResponse, AppError]:
        try:
            entries = self.navigator.list_blobs(request.prefix, request.policy)
            return Success(
                ListBlobsResponse(
                    prefix=request.prefix,
                    blobs=[_to_response(self.navigator, entry) for entry in entries],
                ),
            )
        except Exception as e:
            logger.exception("list_blobs_failed", prefix=request.prefix)
            return Failure(AppError("storage_error", f"Failed to list blobs: {e!s}"))


class FindLastBlobUseCase:
    """Find the deepest last file under a prefix.

    Succeeds with ``None`` when the prefix holds no file.
    """

    def __init__(self, navigator: BlobNavigator) -> None:
        self.navigator = navigator

    async def execute(
        self,
        request: FindLastBlobRequest,
    ) -> Result[BlobResponse | None, AppError]:
        try:
            entry = self.navigator.resolve_last_blob(
                request.prefix,
                file_priority=request.file_priority,
            )
            if entry is None:
                logger.info("last_blob_not_found", prefix=request.prefix)
                return Success(None)
            return Success(_to_response(self.navigator, entry))
        except Exception as e:
            logger.exception("find_last_blob_failed", prefix=request.prefix)
            return Failure(AppError("storage_error", f"Failed to find last blob: {e!s}"))


class UploadBlobUseCase:
    """Upload a local file with a fresh download token."""

    def __init__(self, navigator: BlobNavigator) -> None:
        self.navigator = navigator

    async def execute(self, request: UploadBlobRequest) -> Result[BlobResponse, AppError]:
        if not request.source_path.is_file():
            return Failure(
                AppError("validation", f"Source file does not exist: {request.source_path}"),
            )

        try:
            entry = self.navigator.upload(
                request.dest_key,
                request.source_path,
                request.mime_type,
            )
            return Success(_to_response(self.navigator, entry))
        except Exception as e:
            logger.exception("upload_blob_failed", dest_key=request.dest_key)
            return Failure(AppError("storage_error", f"Failed to upload blob: {e!s}"))


class DownloadBlobUseCase:
    def __init__(self, navigator: BlobNavigator) -> None:
        self.navigator = navigator

    async def execute(
        self,
        request: DownloadBlobRequest,
    ) -> Result[DownloadBlobResponse, AppError]:
        try:
            path = self.navigator.download(request.key, request.dest_dir, request.new_filename)
            return Success(DownloadBlobResponse(key=request.key, path=path))
        except NoSuchBlobError as e:
            return Failure(AppError("not_found", str(e)))
        except Exception as e:
            logger.exception("download_blob_failed", key=request.key)
            return Failure(AppError("storage_error", f"Failed to download blob: {e!s}"))


class MoveBlobUseCase:
    """Move a blob to a new key.

    A move that copied the blob but left the source behind is reported as
    ``inconsistent_state``: the blob then exists under both keys.
    """

    def __init__(self, navigator: BlobNavigator) -> None:
        self.navigator = navigator

    async def execute(self, request: MoveBlobRequest) -> Result[BlobResponse, AppError]:
        return _move(self.navigator, request.key, lambda: self.navigator.move(
            request.key,
            request.new_key,
        ))


class RenameBlobUseCase:
    def __init__(self, navigator: BlobNavigator) -> None:
        self.navigator = navigator

    async def execute(self, request: RenameBlobRequest) -> Result[BlobResponse, AppError]:
        return _move(self.navigator, request.key, lambda: self.navigator.rename(
            request.key,
            request.new_simple_name,
        ))


def _move(
    navigator: BlobNavigator,
    key: str,
    operation: Callable[[], BlobEntry],
) -> Result[BlobResponse, AppError]:
    try:
        return Success(_to_response(navigator, operation()))
    except ValidationError as e:
        return Failure(AppError("validation", f"Validation error: {e!s}"))
    except NoSuchBlobError as e:
        return Failure(AppError("not_found", str(e)))
    except CopyFailedError as e:
        return Failure(AppError("copy_failed", f"{e!s}: {e.__cause__!s}"))
    except PostCopyDeleteFailedError as e:
        logger.error(
            "blob_duplicated_after_move",
            source_key=e.source_key,
            target_key=e.target_key,
        )
        return Failure(AppError("inconsistent_state", str(e)))
    except Exception as e:
        logger.exception("move_blob_failed", key=key)
        return Failure(AppError("storage_error", f"Failed to move blob: {e!s}"))


class DeleteBlobUseCase:
    """Delete a blob. Deleting a missing blob succeeds with ``deleted=False``."""

    def __init__(self, navigator: BlobNavigator) -> None:
        self.navigator = navigator

    async def execute(self, key: str) -> Result[DeleteBlobResponse, AppError]:
        try:
            return Success(DeleteBlobResponse(key=key, deleted=self.navigator.delete(key)))
        except Exception as e:
            logger.exception("delete_blob_failed", key=key)
            return Failure(AppError("storage_error", f"Failed to delete blob: {e!s}"))


class ResolveFileExtensionUseCase:
    def __init__(self, navigator: BlobNavigator) -> None:
        self.navigator = navigator

    async def execute(self, key: str) -> Result[FileExtensionResponse, AppError]:
        try:
            extension = self.navigator.to_file_extension(key)
            return Success(FileExtensionResponse(key=key, extension=extension))
        except NoSuchBlobError as e:
            return Failure(AppError("not_found", str(e)))
        except Exception as e:
            logger.exception("resolve_file_extension_failed", key=key)
            return Failure(AppError("storage_error", f"Failed to resolve extension: {e!s}"))


class GetBlobFromUrlUseCase:
    """Look up the blob a public download URL points at."""

    def __init__(self, navigator: BlobNavigator) -> None:
        self.navigator = navigator

    async def execute(self, url: str) -> Result[BlobResponse, AppError]:
        try:
            entry = self.navigator.get_blob_from_url(url)
            return Success(_to_response(self.navigator, entry))
        except MalformedURLError as e:
            return Failure(AppError("malformed_url", str(e)))
        except NoSuchBlobError as e:
            return Failure(AppError("not_found", str(e)))
        except Exception as e:
            logger.exception("get_blob_from_url_failed", url=url)
            return Failure(AppError("storage_error", f"Failed to get blob: {e!s}"))
