from __future__ import annotations
from typing import Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from .contracts import ErrorPayload, MetaPayload, UWFResponse
from .errors import ServiceError


def request_meta(request: Request) -> MetaPayload:
    return MetaPayload(
        trace_id=getattr(request.state, "trace_id", None),
        request_id=getattr(request.state, "request_id", None),
    )


def uwf_ok(request: Request, result: Any) -> UWFResponse:
    return UWFResponse(ok=True, result=result, error=None, meta=request_meta(request))


def uwf_error(request: Request, err: ServiceError, *, include_internal_details: bool = False) -> JSONResponse:
    # INTERNAL details (driver messages etc.) only leave the process outside production
    include_details = err.type != "INTERNAL" or include_internal_details
    body = UWFResponse(
        ok=False,
        result=None,
        error=ErrorPayload(**err.to_payload(include_details=include_details)),
        meta=request_meta(request),
    )
    return JSONResponse(status_code=err.status_code, content=body.model_dump(mode="json"))
