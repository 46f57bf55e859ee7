from __future__ import annotations
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from components.common.contracts import UWFResponse
from components.common.responses import uwf_ok
from ..contracts import HealthResult, ReadyResult

router = APIRouter(tags=["health"])

@router.get("/health", response_model=UWFResponse)
def health(request: Request):
    version = request.app.state.settings.app_version
    return uwf_ok(request, HealthResult(status="ok", version=version, time=datetime.now(timezone.utc).isoformat()))

@router.get("/ready", response_model=UWFResponse)
def ready(request: Request):
    wired = all(
        getattr(request.app.state, name, None) is not None
        for name in ("auth_service", "authenticator", "post_service", "blob_service")
    )
    return uwf_ok(request, ReadyResult(ready=wired))
