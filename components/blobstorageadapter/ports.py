from __future__ import annotations
from abc import ABC, abstractmethod

from .contracts import BlobRef, PutBlobRequest, PutBlobResult

class BlobStoragePort(ABC):
    @abstractmethod
    async def put_blob(self, req: PutBlobRequest) -> PutBlobResult: ...

    @abstractmethod
    def public_url(self, ref: BlobRef) -> str: ...

    @abstractmethod
    async def apply_public_read_policy(self, bucket: str) -> bool: ...
