from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, constr

# ---------- Common Models ----------

class BlobRef(BaseModel):
    bucket: constr(strip_whitespace=True, min_length=1)
    key: constr(strip_whitespace=True, min_length=1)

class BlobMeta(BaseModel):
    size: Optional[int] = None
    content_type: Optional[str] = None
    etag: Optional[str] = None

class PutBlobRequest(BaseModel):
    ref: BlobRef
    data: bytes
    content_type: Optional[str] = None
    overwrite: bool = True

class PutBlobResult(BaseModel):
    ref: BlobRef
    meta: BlobMeta

class UploadResult(BaseModel):
    message: str = "File uploaded successfully"
    file_name: str
    url: str
    size: Optional[int] = None
