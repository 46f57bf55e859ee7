from __future__ import annotations
from .contracts import BlobRef, BlobMeta, PutBlobRequest, PutBlobResult, UploadResult
from .errors import BlobError, BlobNotFound, BlobConflict, BlobValidation, BlobUpstream, BlobInternal
from .ports import BlobStoragePort
from .adapters.local_fs import LocalFSBlobAdapter
from .adapters.s3 import S3BlobAdapter
from .config import BlobSettings
from .service import BlobService, sanitize_filename

def make_adapter_from_env(cfg: BlobSettings = None):
    cfg = cfg or BlobSettings()
    if cfg.BLOB_ADAPTER.lower() == "localfs":
        return LocalFSBlobAdapter(cfg.BLOB_LOCAL_ROOT, base_url=cfg.BLOB_PUBLIC_BASE_URL), "localfs"
    elif cfg.BLOB_ADAPTER.lower() == "s3":
        if not cfg.S3_BUCKET:
            raise RuntimeError("S3_BUCKET (or MINIO_BUCKET) is required for S3 adapter")
        return S3BlobAdapter(
            region=cfg.AWS_REGION,
            endpoint_url=cfg.S3_ENDPOINT_URL,
            force_path_style=cfg.S3_FORCE_PATH_STYLE,
            access_key_id=cfg.AWS_ACCESS_KEY_ID,
            secret_access_key=cfg.AWS_SECRET_ACCESS_KEY,
        ), "s3"
    else:
        raise RuntimeError(f"Unknown BLOB_ADAPTER: {cfg.BLOB_ADAPTER}")

def make_blob_service(cfg: BlobSettings = None) -> BlobService:
    cfg = cfg or BlobSettings()
    adapter, name = make_adapter_from_env(cfg)
    return BlobService(
        adapter,
        name,
        bucket=cfg.S3_BUCKET or "uploads",
        max_upload_bytes=cfg.BLOB_MAX_UPLOAD_BYTES,
        public_base_url=cfg.BLOB_PUBLIC_BASE_URL,
    )
