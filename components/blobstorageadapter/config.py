from __future__ import annotations
from typing import Optional
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class BlobSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True)

    BLOB_ADAPTER: str = Field(default="s3")  # "s3" | "localfs"
    # Local FS
    BLOB_LOCAL_ROOT: str = Field(default="./var/blobdata")
    # S3 / MinIO (MINIO_* names are accepted for existing deployments)
    AWS_ACCESS_KEY_ID: Optional[str] = Field(default=None, validation_alias=AliasChoices("AWS_ACCESS_KEY_ID", "MINIO_ACCESS_KEY"))
    AWS_SECRET_ACCESS_KEY: Optional[str] = Field(default=None, validation_alias=AliasChoices("AWS_SECRET_ACCESS_KEY", "MINIO_SECRET_KEY"))
    AWS_REGION: Optional[str] = Field(default=None, validation_alias=AliasChoices("AWS_REGION", "MINIO_REGION"))
    S3_BUCKET: Optional[str] = Field(default=None, validation_alias=AliasChoices("S3_BUCKET", "MINIO_BUCKET"))
    S3_ENDPOINT_URL: Optional[str] = Field(default=None, validation_alias=AliasChoices("S3_ENDPOINT_URL", "MINIO_ENDPOINT"))
    S3_FORCE_PATH_STYLE: bool = True
    S3_PUBLIC_READ_POLICY: bool = False
    # Public URL prefix for objects; defaults to the endpoint
    BLOB_PUBLIC_BASE_URL: Optional[str] = None
    BLOB_MAX_UPLOAD_BYTES: int = Field(default=10 * 1024 * 1024, gt=0)  # 10 MiB
