
from __future__ import annotations
import asyncio
import logging
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from ..contracts import BlobMeta, BlobRef, PutBlobRequest, PutBlobResult
from ..errors import BlobConflict, BlobValidation
from ..ports import BlobStoragePort

log = logging.getLogger("blobstorage")

def _safe_join(root: Path, *parts: str) -> Path:
    p = root
    for part in parts:
        # basic traversal guard
        part = part.strip("/\\")
        if ".." in part:
            raise BlobValidation("invalid key (traversal detected)")
        p = p / part
    return p.resolve()

class LocalFSBlobAdapter(BlobStoragePort):
    """Stores objects under <root>/<bucket>/<key>; for development and tests."""
    def __init__(self, root_dir: str, base_url: Optional[str] = None):
        self.root = Path(root_dir).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self.base_url = (base_url or self.root.as_uri()).rstrip("/")
        self.adapter = "localfs"

    def _path_for(self, ref: BlobRef) -> Path:
        return _safe_join(self.root, ref.bucket, ref.key)

    async def put_blob(self, req: PutBlobRequest) -> PutBlobResult:
        path = self._path_for(req.ref)
        if path.exists() and not req.overwrite:
            raise BlobConflict("blob exists and overwrite=False")

        def write_sync():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(req.data)

        await asyncio.to_thread(write_sync)
        return PutBlobResult(ref=req.ref, meta=BlobMeta(size=len(req.data), content_type=req.content_type))

    def public_url(self, ref: BlobRef) -> str:
        return f"{self.base_url}/{ref.bucket}/{quote(ref.key, safe='/')}"

    async def apply_public_read_policy(self, bucket: str) -> bool:
        # Local FS has no access policies
        log.info("blob.policy unsupported adapter=%s", self.adapter)
        return False
