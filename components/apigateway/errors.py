from __future__ import annotations
import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from components.blobstorageadapter.errors import (
    BlobConflict, BlobError, BlobNotFound, BlobUpstream, BlobValidation,
)
from components.common.errors import (
    BadRequestError, NotFoundError, ServiceError, StoreError, ValidationError,
)
from components.common.responses import uwf_error

logger = logging.getLogger("apigateway")


class ConflictError(ServiceError):
    type = "CONFLICT"
    code = "conflict"
    message = "Resource already exists"
    status_code = 409


def translate_blob_error(e: BlobError) -> ServiceError:
    if isinstance(e, BlobValidation):
        return BadRequestError(str(e) or "Invalid upload", code="blob_validation")
    if isinstance(e, BlobNotFound):
        return NotFoundError("File not found", code="blob_not_found")
    if isinstance(e, BlobConflict):
        return ConflictError(str(e), code="blob_conflict")
    if isinstance(e, BlobUpstream):
        return StoreError("Failed to upload file", code="blob_upstream", details={"cause": str(e)})
    return StoreError("Failed to upload file", code="blob_internal", details={"cause": str(e)})


def _validation_details(e: RequestValidationError) -> Dict[str, List[Dict[str, Any]]]:
    return {
        "errors": [
            {"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg"), "type": err.get("type")}
            for err in e.errors()
        ]
    }


def _expose_internal(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return settings is not None and not settings.is_production


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def _service_error(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error("request.failed code=%s message=%s details=%s", exc.code, exc.message, exc.details)
        return uwf_error(request, exc, include_internal_details=_expose_internal(request))

    @app.exception_handler(BlobError)
    async def _blob_error(request: Request, exc: BlobError):
        err = translate_blob_error(exc)
        logger.warning("blob.failed code=%s msg=%s", err.code, exc)
        return uwf_error(request, err, include_internal_details=_expose_internal(request))

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError):
        err = ValidationError("Request validation failed", code="invalid_request", details=_validation_details(exc))
        return uwf_error(request, err)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("request.crashed")
        err = ServiceError(details={"cause": str(exc)})
        return uwf_error(request, err, include_internal_details=_expose_internal(request))
