from __future__ import annotations

from google.cloud import storage
from lagom import Container

from blobnav.application.ports.content_classifier import ContentClassifier
from blobnav.application.ports.object_store import ObjectStore
from blobnav.application.services.blob_navigator import BlobNavigator
from blobnav.application.use_cases.blob_use_cases import (
    DeleteBlobUseCase,
    DownloadBlobUseCase,
    FindLastBlobUseCase,
    GetBlobFromUrlUseCase,
    ListBlobsUseCase,
    MoveBlobUseCase,
    RenameBlobUseCase,
    ResolveFileExtensionUseCase,
    UploadBlobUseCase,
)
from blobnav.infrastructure.classifiers.mimetypes_classifier import MimetypesContentClassifier
from blobnav.infrastructure.config import Settings
from blobnav.infrastructure.config import settings as default_settings
from blobnav.infrastructure.object_stores.fsspec_object_store import FsspecObjectStore
from blobnav.infrastructure.object_stores.gcs_object_store import GcsObjectStore


def _gcs_client(settings: Settings) -> storage.Client:
    if settings.gcs_credentials_path is not None:
        return storage.Client.from_service_account_json(
            str(settings.gcs_credentials_path),
            project=settings.gcs_project,
        )
    # Application default credentials
    return storage.Client(project=settings.gcs_project)


def create_container(settings: Settings | None = None) -> Container:
    settings = settings or default_settings
    container = Container()

    container[Settings] = settings

    # Object Store (one client per container, shared by every consumer)
    if settings.object_store_backend == "fsspec":
        object_store: ObjectStore = FsspecObjectStore(
            settings.resolved_object_store_url,
            storage_options=settings.object_store_options,
        )
    else:
        object_store = GcsObjectStore(settings.bucket_name, _gcs_client(settings))
    container[ObjectStore] = object_store

    container[ContentClassifier] = lambda _: MimetypesContentClassifier()

    container[BlobNavigator] = lambda c: BlobNavigator(
        bucket_name=settings.bucket_name,
        object_store=c[ObjectStore],
        content_classifier=c[ContentClassifier],
        download_host=settings.download_host,
    )

    # Use Cases
    container[ListBlobsUseCase] = lambda c: ListBlobsUseCase(navigator=c[BlobNavigator])
    container[FindLastBlobUseCase] = lambda c: FindLastBlobUseCase(navigator=c[BlobNavigator])
    container[UploadBlobUseCase] = lambda c: UploadBlobUseCase(navigator=c[BlobNavigator])
    container[DownloadBlobUseCase] = lambda c: DownloadBlobUseCase(navigator=c[BlobNavigator])
    container[MoveBlobUseCase] = lambda c: MoveBlobUseCase(navigator=c[BlobNavigator])
    container[RenameBlobUseCase] = lambda c: RenameBlobUseCase(navigator=c[BlobNavigator])
    container[DeleteBlobUseCase] = lambda c: DeleteBlobUseCase(navigator=c[BlobNavigator])
    container[ResolveFileExtensionUseCase] = lambda c: ResolveFileExtensionUseCase(
        navigator=c[BlobNavigator],
    )
    container[GetBlobFromUrlUseCase] = lambda c: GetBlobFromUrlUseCase(navigator=c[BlobNavigator])

    return container
