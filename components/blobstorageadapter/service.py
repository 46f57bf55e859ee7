
from __future__ import annotations
import logging
import re
import time
from typing import Callable, Optional
from urllib.parse import quote

from .contracts import BlobRef, PutBlobRequest, UploadResult
from .errors import BlobValidation
from .ports import BlobStoragePort

log = logging.getLogger("blobstorage")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")

def sanitize_filename(filename: Optional[str]) -> str:
    """Last path segment of a client filename, reduced to a safe key charset."""
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "upload"

def _epoch_ms() -> int:
    return int(time.time() * 1000)

class BlobService:
    """
    Upload facade over a BlobStoragePort bound to one bucket.
    Object keys are "<epoch ms>_<sanitized filename>".
    """
    def __init__(self, adapter: BlobStoragePort, adapter_name: str, *, bucket: str,
                 max_upload_bytes: int = 10 * 1024 * 1024, public_base_url: Optional[str] = None,
                 clock_ms: Optional[Callable[[], int]] = None):
        self.adapter = adapter
        self.adapter_name = adapter_name
        self.bucket = bucket
        self.max_upload_bytes = max_upload_bytes
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None
        self.clock_ms = clock_ms or _epoch_ms

    def url_for(self, key: str) -> str:
        ref = BlobRef(bucket=self.bucket, key=key)
        if self.public_base_url:
            return f"{self.public_base_url}/{ref.bucket}/{quote(ref.key, safe='/')}"
        return self.adapter.public_url(ref)

    async def upload(self, filename: Optional[str], data: bytes, content_type: Optional[str] = None) -> UploadResult:
        if not data:
            raise BlobValidation("Uploaded file is empty")
        if len(data) > self.max_upload_bytes:
            raise BlobValidation(f"File size exceeds {self.max_upload_bytes} bytes limit")

        key = f"{self.clock_ms()}_{sanitize_filename(filename)}"
        req = PutBlobRequest(ref=BlobRef(bucket=self.bucket, key=key), data=data, content_type=content_type)
        t0 = time.time()
        try:
            res = await self.adapter.put_blob(req)
        except Exception:
            log.exception("blob.put err bucket=%s key=%s adapter=%s dur_ms=%s",
                          self.bucket, key, self.adapter_name, int((time.time() - t0) * 1000))
            raise
        log.info("blob.put ok bucket=%s key=%s size=%s adapter=%s dur_ms=%s",
                 self.bucket, key, res.meta.size, self.adapter_name, int((time.time() - t0) * 1000))
        return UploadResult(file_name=key, url=self.url_for(key), size=res.meta.size)

    async def ensure_public_read(self) -> bool:
        return await self.adapter.apply_public_read_policy(self.bucket)
