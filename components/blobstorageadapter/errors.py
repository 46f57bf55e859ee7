from __future__ import annotations

# Adapter-level failures; the gateway maps them onto the service taxonomy
# (400 / 404 / 409 / 500 / 500 in declaration order below).

class BlobError(Exception):
    """Base class for object-store failures raised by adapters and BlobService."""

class BlobValidation(BlobError):
    """Empty or oversized upload, or an object key that escapes its bucket."""

class BlobNotFound(BlobError):
    pass

class BlobConflict(BlobError):
    """Key already taken and the put asked not to overwrite."""

class BlobUpstream(BlobError):
    """S3 / MinIO rejected the call or could not be reached."""

class BlobInternal(BlobError):
    pass
