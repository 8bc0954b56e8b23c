from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from blobnav.domain.services.blob_name_codec import DEFAULT_DOWNLOAD_HOST


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="blobnav", validation_alias="APP_NAME")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        validation_alias="APP_ENV",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_dir: Path | None = Field(default=None, validation_alias="LOG_DIR")

    # Blob Storage
    bucket_name: str = Field(default="", validation_alias="BUCKET_NAME")
    object_store_backend: Literal["gcs", "fsspec"] = Field(
        default="gcs",
        validation_alias="OBJECT_STORE_BACKEND",
    )
    object_store_url: str | None = Field(default=None, validation_alias="OBJECT_STORE_URL")
    object_store_options: dict = {}

    # Google Cloud Storage
    gcs_project: str | None = Field(default=None, validation_alias="GCS_PROJECT")
    gcs_credentials_path: Path | None = Field(
        default=None,
        validation_alias="GCS_CREDENTIALS_PATH",
    )
    download_host: str = Field(
        default=DEFAULT_DOWNLOAD_HOST,
        validation_alias="DOWNLOAD_HOST",
    )

    @property
    def resolved_object_store_url(self) -> str:
        """fsspec URL of the bucket root; defaults to ``gs://<bucket_name>``."""
        return self.object_store_url or f"gs://{self.bucket_name}"


settings = Settings()
