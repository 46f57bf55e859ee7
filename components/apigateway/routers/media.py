from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import RedirectResponse

from components.authservice.contracts import AuthContext
from components.authservice.deps import get_authorization_header
from components.blobstorageadapter import BlobService
from components.common.contracts import UWFResponse
from components.common.errors import BadRequestError
from components.common.responses import uwf_ok

router = APIRouter(tags=["media"])


def get_blob_service(request: Request) -> BlobService:
    return request.app.state.blob_service


def upload_user(request: Request, authorization: Optional[str] = Depends(get_authorization_header)) -> Optional[AuthContext]:
    """Authenticates only when UPLOAD_REQUIRE_AUTH is on; /upload is public otherwise."""
    if not request.app.state.settings.upload_require_auth:
        return None
    return request.app.state.authenticator.authenticate(authorization)


@router.post("/upload", response_model=UWFResponse)
async def upload(
    request: Request,
    file: Optional[UploadFile] = File(default=None),
    user: Optional[AuthContext] = Depends(upload_user),
    svc: BlobService = Depends(get_blob_service),
):
    if file is None:
        raise BadRequestError("File not found", code="file_missing")
    # one byte past the limit is enough for BlobService to reject it
    data = await file.read(svc.max_upload_bytes + 1)
    result = await svc.upload(file.filename, data, file.content_type)
    return uwf_ok(request, result)


@router.get("/image/{filename}")
def image(filename: str, svc: BlobService = Depends(get_blob_service)):
    return RedirectResponse(url=svc.url_for(filename), status_code=302)
